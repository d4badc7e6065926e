"""Shared test fixtures for the SCUC engine and API tests."""

from __future__ import annotations

import pytest

from scuc_engine.network.network_model import Bus, BusType, TransmissionLine
from scuc_engine.system import HOURS_PER_DAY, Generator, SystemDefinition


# ======================================================================
# Network fixtures
# ======================================================================

def radial_system(
    line_capacity: float = 500.0,
    p_max: float = 1000.0,
    load_mw: float = 100.0,
    load_profile: tuple[float, ...] | None = None,
    reactances: tuple[float, float] = (0.1, 0.1),
) -> SystemDefinition:
    """3 buses in a line: 1 (slack, generator), 2 (load), 3 (no load)."""
    return SystemDefinition(
        buses=(
            Bus(id=1, name="Gen", bus_type=BusType.SLACK, base_load=0.0),
            Bus(id=2, name="Load", bus_type=BusType.PQ, base_load=load_mw),
            Bus(id=3, name="Tail", bus_type=BusType.PQ, base_load=0.0),
        ),
        generators=(
            Generator(id="G1", bus_id=1, p_min=0.0, p_max=p_max, cost_b=10.0),
        ),
        lines=(
            TransmissionLine(id="L1-2", from_bus=1, to_bus=2, reactance=reactances[0],
                             capacity=line_capacity),
            TransmissionLine(id="L2-3", from_bus=2, to_bus=3, reactance=reactances[1],
                             capacity=500.0),
        ),
        load_profile=load_profile or (1.0,) * HOURS_PER_DAY,
    )


@pytest.fixture
def make_radial_system():
    """Factory for variants of the 3-bus radial system."""
    return radial_system


@pytest.fixture
def radial_three_bus() -> SystemDefinition:
    return radial_system()


@pytest.fixture
def isolated_bus_system() -> SystemDefinition:
    """Bus 3 has no line, so the reduced B matrix has a zero row."""
    system = radial_system()
    return SystemDefinition(
        buses=system.buses,
        generators=system.generators,
        lines=system.lines[:1],
        load_profile=system.load_profile,
    )


@pytest.fixture
def five_bus_system() -> SystemDefinition:
    from scuc_engine.presets import default_system

    return default_system()
