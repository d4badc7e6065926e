"""Priority-list unit commitment (simplified SCUC).

Instead of solving the mixed-integer commitment problem, units are ranked
by their average cost at full output and committed cheapest-first until
the committed capacity covers the hour's load plus a fixed reserve margin:

    committed P_max ≥ (1 + reserve) × load

Network security constraints are not considered at this stage.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from scuc_engine.system import Generator

RESERVE_MARGIN: float = 0.10


def average_cost_at_max(gen: Generator) -> float:
    """Average cost ($/MWh) when running at P_max, no-load cost included."""
    if gen.p_max <= 0:
        # Zero-capacity units never help meet the reserve; rank them last.
        return math.inf
    return (gen.cost_b * gen.p_max + gen.cost_c) / gen.p_max


def commitment_order(generators: Sequence[Generator]) -> list[Generator]:
    """Units sorted by average cost at P_max (stable for equal costs)."""
    return sorted(generators, key=average_cost_at_max)


def commit_units(
    generators: Sequence[Generator],
    total_load: float,
    reserve_margin: float = RESERVE_MARGIN,
) -> dict[str, bool]:
    """Decide on/off status for every unit for one hour.

    Walks the priority list and commits units while the committed capacity
    is still below the target; every unit after that stays off.

    Returns:
        dict of generator id → committed, in priority-list order
    """
    target_cap = total_load * (1.0 + reserve_margin)
    status: dict[str, bool] = {}
    committed_cap = 0.0

    for gen in commitment_order(generators):
        if committed_cap < target_cap:
            status[gen.id] = True
            committed_cap += gen.p_max
        else:
            status[gen.id] = False

    return status
