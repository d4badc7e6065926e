"""Default example system.

A simplified 5-bus network with three units covering base, mid-merit and
peaking duty, and a typical weekday load shape (night trough, evening peak
at 18:00).
"""

from __future__ import annotations

from scuc_engine.network.network_model import Bus, BusType, TransmissionLine
from scuc_engine.system import GenType, Generator, SystemDefinition

# ======================================================================
# Daily load shape (fraction of base load per hour)
# ======================================================================

DEFAULT_LOAD_PROFILE: tuple[float, ...] = (
    0.60, 0.55, 0.50, 0.50, 0.55, 0.65, 0.80, 0.90, 1.00, 1.10, 1.15, 1.20,
    1.20, 1.15, 1.10, 1.10, 1.20, 1.30, 1.25, 1.10, 1.00, 0.90, 0.80, 0.70,
)

DEFAULT_BUSES: tuple[Bus, ...] = (
    Bus(id=1, name="North Plant", bus_type=BusType.SLACK, base_load=0.0, x=50, y=15),
    Bus(id=2, name="East Load", bus_type=BusType.PQ, base_load=300.0, x=80, y=40),
    Bus(id=3, name="South Plant", bus_type=BusType.PV, base_load=100.0, x=50, y=85),
    Bus(id=4, name="West Load", bus_type=BusType.PQ, base_load=400.0, x=20, y=40),
    Bus(id=5, name="Central Hub", bus_type=BusType.PQ, base_load=0.0, x=50, y=50),
)

DEFAULT_GENERATORS: tuple[Generator, ...] = (
    Generator(
        id="G1", name="Unit 1 (base load)", bus_id=1, p_min=50.0, p_max=600.0,
        cost_a=0.0, cost_b=20.0, cost_c=100.0, start_up_cost=500.0,
        gen_type=GenType.NUCLEAR,
    ),
    Generator(
        id="G2", name="Unit 2 (mid-merit)", bus_id=3, p_min=20.0, p_max=400.0,
        cost_a=0.0, cost_b=45.0, cost_c=50.0, start_up_cost=100.0,
        gen_type=GenType.THERMAL,
    ),
    Generator(
        id="G3", name="Unit 3 (peaker)", bus_id=2, p_min=10.0, p_max=200.0,
        cost_a=0.0, cost_b=80.0, cost_c=0.0, start_up_cost=0.0,
        gen_type=GenType.THERMAL,
    ),
)

DEFAULT_LINES: tuple[TransmissionLine, ...] = (
    TransmissionLine(id="L1-2", from_bus=1, to_bus=2, reactance=0.02, capacity=250.0),
    TransmissionLine(id="L1-4", from_bus=1, to_bus=4, reactance=0.04, capacity=200.0),
    TransmissionLine(id="L1-5", from_bus=1, to_bus=5, reactance=0.02, capacity=400.0),
    TransmissionLine(id="L2-3", from_bus=2, to_bus=3, reactance=0.02, capacity=200.0),
    TransmissionLine(id="L3-4", from_bus=3, to_bus=4, reactance=0.04, capacity=250.0),
    TransmissionLine(id="L4-5", from_bus=4, to_bus=5, reactance=0.02, capacity=300.0),
    TransmissionLine(id="L2-5", from_bus=2, to_bus=5, reactance=0.02, capacity=250.0),
)


def default_system() -> SystemDefinition:
    """The 5-bus example system with the default load profile."""
    return SystemDefinition(
        buses=DEFAULT_BUSES,
        generators=DEFAULT_GENERATORS,
        lines=DEFAULT_LINES,
        load_profile=DEFAULT_LOAD_PROFILE,
    )
