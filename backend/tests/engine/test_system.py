"""Tests for scuc_engine.system and scuc_engine.presets."""

from __future__ import annotations

import pytest

from scuc_engine.network.network_model import Bus, BusType, TransmissionLine
from scuc_engine.presets import DEFAULT_LOAD_PROFILE, default_system
from scuc_engine.system import (
    Generator,
    SystemDefinition,
    validate_system,
    with_generator_cost,
    with_load_factor,
)


class TestSystemDefinition:

    def test_lists_stored_as_tuples(self):
        system = SystemDefinition(
            buses=[Bus(id=1)],
            generators=[],
            lines=[],
            load_profile=[1] * 24,
        )
        assert isinstance(system.buses, tuple)
        assert isinstance(system.load_profile, tuple)
        assert system.load_profile[0] == 1.0

    def test_default_profile_is_flat(self):
        system = SystemDefinition(buses=(Bus(id=1),), generators=(), lines=())
        assert system.load_profile == (1.0,) * 24

    def test_get_generator(self, five_bus_system):
        assert five_bus_system.get_generator("G3").bus_id == 2
        with pytest.raises(KeyError):
            five_bus_system.get_generator("G9")


class TestEdits:

    def test_with_load_factor_returns_copy(self, five_bus_system):
        edited = with_load_factor(five_bus_system, 12, 1.5)
        assert edited.load_profile[12] == 1.5
        assert five_bus_system.load_profile[12] == DEFAULT_LOAD_PROFILE[12]
        assert edited.buses == five_bus_system.buses

    def test_with_load_factor_bad_hour(self, five_bus_system):
        with pytest.raises(IndexError):
            with_load_factor(five_bus_system, 24, 1.0)

    def test_with_generator_cost(self, five_bus_system):
        edited = with_generator_cost(five_bus_system, "G2", 30.0)
        assert edited.get_generator("G2").cost_b == 30.0
        assert five_bus_system.get_generator("G2").cost_b == 45.0
        assert edited.get_generator("G1") == five_bus_system.get_generator("G1")

    def test_with_generator_cost_unknown(self, five_bus_system):
        with pytest.raises(KeyError):
            with_generator_cost(five_bus_system, "nope", 1.0)


class TestValidation:

    def test_default_system_is_valid(self):
        assert validate_system(default_system()) == []

    def test_dangling_references(self, radial_three_bus):
        system = SystemDefinition(
            buses=radial_three_bus.buses,
            generators=(Generator(id="G", bus_id=9, p_min=0, p_max=10, cost_b=1),),
            lines=(TransmissionLine(id="L", from_bus=1, to_bus=8, reactance=0.1, capacity=1),),
        )
        issues = validate_system(system)
        assert any("unknown bus 9" in i for i in issues)
        assert any("unknown bus 8" in i for i in issues)

    def test_bad_parameters(self):
        system = SystemDefinition(
            buses=(Bus(id=1), Bus(id=2)),
            generators=(Generator(id="G", bus_id=1, p_min=50, p_max=10, cost_b=1),),
            lines=(TransmissionLine(id="L", from_bus=1, to_bus=2, reactance=0.0, capacity=-5),),
            load_profile=(1.0,) * 23 + (-0.5,),
        )
        issues = validate_system(system)
        assert any("p_min > p_max" in i for i in issues)
        assert any("reactance" in i for i in issues)
        assert any("capacity" in i for i in issues)
        assert any("Negative load factor" in i for i in issues)

    def test_duplicate_ids(self):
        system = SystemDefinition(
            buses=(Bus(id=1), Bus(id=1)),
            generators=(
                Generator(id="G", bus_id=1, p_min=0, p_max=10, cost_b=1),
                Generator(id="G", bus_id=1, p_min=0, p_max=10, cost_b=2),
            ),
            lines=(),
        )
        issues = validate_system(system)
        assert "Duplicate bus ids" in issues
        assert "Duplicate generator id 'G'" in issues


class TestPresets:

    def test_default_system_shape(self):
        system = default_system()
        assert len(system.buses) == 5
        assert len(system.generators) == 3
        assert len(system.lines) == 7
        assert len(system.load_profile) == 24
        assert system.buses[0].bus_type is BusType.SLACK

    def test_peak_factor(self):
        assert max(DEFAULT_LOAD_PROFILE) == 1.3
        assert DEFAULT_LOAD_PROFILE.index(1.3) == 17
