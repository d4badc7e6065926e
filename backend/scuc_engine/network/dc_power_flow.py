"""DC power flow and line loading evaluation.

Assumptions: V ≈ 1.0 pu, sin(θij) ≈ θij, losses and Q neglected.
Solves: B_reduced × θ = P_pu (linear system, slack angle fixed at 0).

If the reduced system cannot be solved (isolated bus, zero-reactance line)
the angles fall back to zero for that snapshot and ``evaluate_line_flows``
reports every line flow as zero.
The fallback is reported in the returned ``AngleSolution`` rather than
raised.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from scuc_engine.network.linear_solver import SingularMatrixError, solve_linear_system
from scuc_engine.network.network_model import NetworkModel, TransmissionLine
from scuc_engine.network.per_unit import BASE_MVA, mw_to_pu, pu_to_mw

logger = logging.getLogger(__name__)

OVERLOAD_THRESHOLD_PCT: float = 100.0


class AngleSolutionStatus(str, Enum):
    SOLVED = "solved"
    ZERO_FALLBACK = "zero_fallback"


@dataclass(frozen=True, eq=False)
class AngleSolution:
    """Bus voltage angles (rad) for every bus, slack included."""
    angles: NDArray[np.float64]
    status: AngleSolutionStatus
    reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.status is AngleSolutionStatus.ZERO_FALLBACK


@dataclass(frozen=True)
class LineFlow:
    """Active power flow through a single line."""
    line_id: str
    from_bus: int
    to_bus: int
    flow_mw: float      # positive = from_bus → to_bus
    loading_pct: float  # % of thermal capacity

    @property
    def overloaded(self) -> bool:
        return self.loading_pct > OVERLOAD_THRESHOLD_PCT


def net_injections(
    model: NetworkModel,
    bus_loads: Sequence[float],
    generation_by_bus: Mapping[int, Sequence[float]],
) -> list[float]:
    """Net MW injection per bus (generation − load), indexed like the model.

    ``generation_by_bus`` maps bus id → outputs of the committed units at
    that bus, in generator input order.
    """
    p_inj = [0.0] * model.n_bus
    for bus_id, outputs in generation_by_bus.items():
        idx = model.index_of(bus_id)
        for p in outputs:
            p_inj[idx] += p
    for idx, load in enumerate(bus_loads):
        p_inj[idx] -= load
    return p_inj


def solve_bus_angles(
    model: NetworkModel,
    p_inject_mw: Sequence[float],
    s_base_mva: float = BASE_MVA,
) -> AngleSolution:
    """Solve the reduced DC power flow for the non-slack bus angles.

    The slack injection is dropped (the slack bus absorbs any imbalance),
    the rest is converted to per-unit and passed to the dense solver.
    """
    non_slack = model.non_slack
    p_reduced_pu = np.array(
        [mw_to_pu(p_inject_mw[i], s_base_mva) for i in non_slack],
        dtype=np.float64,
    )

    status = AngleSolutionStatus.SOLVED
    reason = None
    try:
        angles_reduced = solve_linear_system(model.reduced_susceptance, p_reduced_pu)
    except SingularMatrixError as exc:
        logger.debug("Reduced B matrix not solvable, using zero angles: %s", exc)
        angles_reduced = np.zeros(len(non_slack), dtype=np.float64)
        status = AngleSolutionStatus.ZERO_FALLBACK
        reason = str(exc)

    angles = np.zeros(model.n_bus, dtype=np.float64)
    for k, i in enumerate(non_slack):
        angles[i] = angles_reduced[k]

    return AngleSolution(angles=angles, status=status, reason=reason)


def compute_line_flows(
    model: NetworkModel,
    lines: Sequence[TransmissionLine],
    angles: NDArray[np.float64],
    s_base_mva: float = BASE_MVA,
) -> list[LineFlow]:
    """Line flows from bus angles: P_ij = (θi − θj) / x × S_base.

    Non-positive reactance or capacity is not rejected; the numbers become
    ``inf``/``nan`` and such a line never raises an overload.
    """
    flows = []
    with np.errstate(divide="ignore", invalid="ignore"):
        for line in lines:
            i = model.index_of(line.from_bus)
            j = model.index_of(line.to_bus)
            flow = pu_to_mw((angles[i] - angles[j]) / np.float64(line.reactance), s_base_mva)
            loading = np.abs(flow) / np.float64(line.capacity) * 100.0
            flows.append(LineFlow(
                line_id=line.id,
                from_bus=line.from_bus,
                to_bus=line.to_bus,
                flow_mw=float(flow),
                loading_pct=float(loading),
            ))
    return flows


def evaluate_line_flows(
    model: NetworkModel,
    lines: Sequence[TransmissionLine],
    solution: AngleSolution,
    s_base_mva: float = BASE_MVA,
) -> list[LineFlow]:
    """Line flows for a solved snapshot; every flow is zero after a fallback.

    A zero-reactance line would otherwise report 0/0 on the zero angle
    vector.
    """
    if solution.is_fallback:
        return [
            LineFlow(line_id=line.id, from_bus=line.from_bus, to_bus=line.to_bus,
                     flow_mw=0.0, loading_pct=0.0)
            for line in lines
        ]
    return compute_line_flows(model, lines, solution.angles, s_base_mva)


def _one_decimal(value: float) -> str:
    # Exact binary ties round up (100.25 -> "100.3"), not half-to-even.
    if not math.isfinite(value) or abs(value) >= 1e21:
        return f"{value:.1f}"
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def overload_alert(line_flow: LineFlow) -> str:
    """Human-readable overload message for a line."""
    return (
        f"Line {line_flow.from_bus}-{line_flow.to_bus} overloaded: "
        f"{_one_decimal(line_flow.loading_pct)}%"
    )
