"""Merit-order economic dispatch (simplified SCED).

Committed units are ranked by their linear cost coefficient (a different
key from the commitment priority list) and loaded cheapest-first:

1. Every committed unit starts at P_min and pays its no-load cost.
2. Remaining load is filled in cost order, each unit up to P_max.

Transmission limits are not enforced here; overloads are reported by the
power flow afterwards. If committed capacity is short, the remainder is
left unserved and shows up as an injection imbalance.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from scuc_engine.system import Generator


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of the merit-order fill for one hour."""
    order: tuple[Generator, ...]  # committed units by cost_b
    output: dict[str, float]      # committed units only, MW
    system_cost: float            # $/hr
    remaining_load: float         # MW, > 0 when supply is short

    @property
    def unserved_load(self) -> float:
        return max(self.remaining_load, 0.0)

    @property
    def total_output(self) -> float:
        return sum(self.output.values())


def dispatch_merit_order(
    generators: Sequence[Generator],
    status: Mapping[str, bool],
    total_load: float,
) -> DispatchResult:
    """Dispatch committed units to meet ``total_load``.

    Args:
        generators: all units, in input order
        status: generator id → committed (from ``commit_units``)
        total_load: system load for the hour, MW
    """
    committed = sorted(
        (g for g in generators if status.get(g.id, False)),
        key=lambda g: g.cost_b,
    )

    output: dict[str, float] = {}
    remaining_load = total_load
    system_cost = 0.0

    # Pmin first; no-load cost is paid by every committed unit
    for g in committed:
        output[g.id] = g.p_min
        remaining_load -= g.p_min
        system_cost += g.cost_c + g.cost_b * g.p_min

    for g in committed:
        if remaining_load <= 0:
            break
        available = g.p_max - g.p_min
        take = min(available, remaining_load)
        output[g.id] += take
        remaining_load -= take
        system_cost += take * g.cost_b

    return DispatchResult(
        order=tuple(committed),
        output=output,
        system_cost=system_cost,
        remaining_load=remaining_load,
    )


def marginal_price(order: Sequence[Generator], output: Mapping[str, float]) -> float:
    """System lambda ($/MWh) from the marginal unit.

    The marginal unit is the first unit in dispatch order running strictly
    between its limits; if every unit sits on a limit, the last unit in
    dispatch order is used. Returns 0 when nothing is committed.
    """
    for g in order:
        if g.p_min < output[g.id] < g.p_max:
            return g.cost_b
    if order:
        return order[-1].cost_b
    return 0.0
