"""System definition: generators, topology and the daily load profile.

A ``SystemDefinition`` is the static input of one simulation run. It is
immutable; edits (a new load factor for an hour, a new generator cost)
produce a new definition via ``with_load_factor`` / ``with_generator_cost``
and the caller re-runs the simulation from scratch.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from scuc_engine.network.network_model import Bus, TransmissionLine

HOURS_PER_DAY: int = 24


class GenType(str, Enum):
    THERMAL = "Thermal"
    HYDRO = "Hydro"
    RENEWABLE = "Renewable"
    NUCLEAR = "Nuclear"


@dataclass(frozen=True)
class Generator:
    """Dispatchable generating unit.

    Cost curve: C(P) = cost_a·P² + cost_b·P + cost_c ($/hr). Only the linear
    term and the no-load term are used by the merit-order dispatch;
    ``cost_a`` and ``start_up_cost`` are carried for reporting.
    """
    id: str
    bus_id: int
    p_min: float  # MW
    p_max: float  # MW
    cost_b: float  # $/MWh
    cost_c: float = 0.0  # $/hr no-load
    cost_a: float = 0.0  # $/MW²h
    start_up_cost: float = 0.0  # $
    name: str = ""
    gen_type: GenType = GenType.THERMAL


@dataclass(frozen=True)
class SystemDefinition:
    """Buses, generators, lines and 24 hourly load-scaling factors.

    The bus at position 0 is the slack bus regardless of its ``bus_type``.
    """
    buses: tuple[Bus, ...]
    generators: tuple[Generator, ...]
    lines: tuple[TransmissionLine, ...]
    load_profile: tuple[float, ...] = field(
        default_factory=lambda: (1.0,) * HOURS_PER_DAY
    )

    def __post_init__(self):
        # Accept lists from callers but store tuples.
        object.__setattr__(self, "buses", tuple(self.buses))
        object.__setattr__(self, "generators", tuple(self.generators))
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "load_profile", tuple(float(f) for f in self.load_profile))

    def get_generator(self, gen_id: str) -> Generator:
        for gen in self.generators:
            if gen.id == gen_id:
                return gen
        raise KeyError(f"Generator {gen_id!r} not found")


def with_load_factor(system: SystemDefinition, hour: int, factor: float) -> SystemDefinition:
    """Return a copy of ``system`` with the load factor of ``hour`` replaced."""
    if not 0 <= hour < len(system.load_profile):
        raise IndexError(f"hour must be in [0, {len(system.load_profile)}), got {hour}")
    profile = list(system.load_profile)
    profile[hour] = factor
    return dataclasses.replace(system, load_profile=tuple(profile))


def with_generator_cost(system: SystemDefinition, gen_id: str, cost_b: float) -> SystemDefinition:
    """Return a copy of ``system`` with the linear cost of ``gen_id`` replaced."""
    system.get_generator(gen_id)
    generators = tuple(
        dataclasses.replace(g, cost_b=cost_b) if g.id == gen_id else g
        for g in system.generators
    )
    return dataclasses.replace(system, generators=generators)


def validate_system(system: SystemDefinition) -> list[str]:
    """Check a system definition and return a list of problems found.

    The engine itself never validates; malformed data simply produces
    ``inf``/``nan`` results. This is meant for callers that accept
    definitions from outside (e.g. the HTTP API).
    """
    issues: list[str] = []
    bus_ids = [b.id for b in system.buses]
    known = set(bus_ids)

    if not system.buses:
        issues.append("System has no buses")
    if len(known) != len(bus_ids):
        issues.append("Duplicate bus ids")
    _check_unique(issues, "generator", [g.id for g in system.generators])
    _check_unique(issues, "line", [ln.id for ln in system.lines])

    for gen in system.generators:
        if gen.bus_id not in known:
            issues.append(f"Generator {gen.id} references unknown bus {gen.bus_id}")
        if gen.p_min > gen.p_max:
            issues.append(f"Generator {gen.id} has p_min > p_max ({gen.p_min} > {gen.p_max})")
        if gen.p_max <= 0:
            issues.append(f"Generator {gen.id} has non-positive p_max")

    for line in system.lines:
        for end in (line.from_bus, line.to_bus):
            if end not in known:
                issues.append(f"Line {line.id} references unknown bus {end}")
        if line.reactance <= 0:
            issues.append(f"Line {line.id} has non-positive reactance")
        if line.capacity <= 0:
            issues.append(f"Line {line.id} has non-positive capacity")

    if len(system.load_profile) != HOURS_PER_DAY:
        issues.append(
            f"Load profile must have {HOURS_PER_DAY} factors, got {len(system.load_profile)}"
        )
    for hour, f in enumerate(system.load_profile):
        if f < 0:
            issues.append(f"Negative load factor {f} at hour {hour}")

    return issues


def _check_unique(issues: list[str], kind: str, ids: Sequence[str]) -> None:
    seen: set[str] = set()
    for item in ids:
        if item in seen:
            issues.append(f"Duplicate {kind} id {item!r}")
        seen.add(item)
