"""24-hour unit commitment / economic dispatch simulation.

``run_simulation`` builds the susceptance model once and then evaluates
each hour independently:

1. Scale bus loads by the hour's load factor.
2. Commit units from the priority list (10% reserve).
3. Dispatch committed units in merit order.
4. Solve the DC power flow (zero-angle fallback if the network is singular).
5. Compute line flows / loading and collect overload alerts.
6. Estimate a uniform system marginal price.

Hours share no state; the only shared object is the read-only network model.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from scuc_engine.dispatch.economic_dispatch import dispatch_merit_order, marginal_price
from scuc_engine.dispatch.unit_commitment import commit_units
from scuc_engine.network.dc_power_flow import (
    AngleSolutionStatus,
    evaluate_line_flows,
    net_injections,
    overload_alert,
    solve_bus_angles,
)
from scuc_engine.network.network_model import NetworkModel, build_network_model
from scuc_engine.system import HOURS_PER_DAY, SystemDefinition

logger = logging.getLogger(__name__)


# ======================================================================
# Result records
# ======================================================================

@dataclass(frozen=True)
class HourlyResult:
    """Commitment, dispatch and network results for one hour."""
    hour: int
    total_load: float                 # MW
    gen_status: dict[str, bool]       # unit commitment
    gen_output: dict[str, float]      # economic dispatch (committed units)
    line_flows: dict[str, float]      # MW, signed from → to
    line_loading: dict[str, float]    # % of capacity
    system_cost: float                # $/hr
    lmp: dict[int, float]             # bus id → $/MWh (uniform)
    alerts: tuple[str, ...] = ()
    bus_angles: dict[int, float] = field(default_factory=dict)  # rad
    angle_solution_status: AngleSolutionStatus = AngleSolutionStatus.SOLVED
    unserved_load: float = 0.0        # MW

    @property
    def congested(self) -> bool:
        return bool(self.alerts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hour": self.hour,
            "total_load": self.total_load,
            "gen_status": dict(self.gen_status),
            "gen_output": dict(self.gen_output),
            "line_flows": dict(self.line_flows),
            "line_loading": dict(self.line_loading),
            "system_cost": self.system_cost,
            "lmp": dict(self.lmp),
            "alerts": list(self.alerts),
            "bus_angles": dict(self.bus_angles),
            "angle_solution_status": self.angle_solution_status.value,
            "unserved_load": self.unserved_load,
        }


@dataclass(frozen=True)
class DailySummary:
    """Aggregate indicators over a full simulated day."""
    total_cost: float
    peak_load: float
    peak_hour: int
    max_line_loading_pct: float
    max_loading_line: str | None
    congested_hours: int
    fallback_hours: int
    unserved_energy_mwh: float
    average_price: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_cost": round(self.total_cost, 2),
            "peak_load": round(self.peak_load, 2),
            "peak_hour": self.peak_hour,
            "max_line_loading_pct": round(self.max_line_loading_pct, 1),
            "max_loading_line": self.max_loading_line,
            "congested_hours": self.congested_hours,
            "fallback_hours": self.fallback_hours,
            "unserved_energy_mwh": round(self.unserved_energy_mwh, 2),
            "average_price": round(self.average_price, 2),
        }


# ======================================================================
# Simulation
# ======================================================================

def simulate_hour(
    system: SystemDefinition,
    model: NetworkModel,
    hour: int,
) -> HourlyResult:
    """Run commitment, dispatch and DC power flow for a single hour."""
    load_factor = system.load_profile[hour]
    bus_loads = [bus.base_load * load_factor for bus in system.buses]
    total_load = sum(bus_loads)

    # --- Unit commitment ---
    gen_status = commit_units(system.generators, total_load)

    # --- Economic dispatch ---
    dispatch = dispatch_merit_order(system.generators, gen_status, total_load)

    # --- DC power flow ---
    generation_by_bus: dict[int, list[float]] = {}
    for gen in system.generators:
        if gen_status[gen.id]:
            generation_by_bus.setdefault(gen.bus_id, []).append(dispatch.output[gen.id])
    p_inj = net_injections(model, bus_loads, generation_by_bus)

    solution = solve_bus_angles(model, p_inj)
    flows = evaluate_line_flows(model, system.lines, solution)
    alerts = tuple(overload_alert(lf) for lf in flows if lf.overloaded)

    log_fields = {
        "hour": hour,
        "angle_solution_status": solution.status.value,
        "alert_count": len(alerts),
        "unserved_load": dispatch.unserved_load,
    }
    if solution.is_fallback:
        logger.warning(
            "Hour %d: DC power flow not solvable (%s); using zero angles",
            hour, solution.reason, extra=log_fields,
        )
    if alerts:
        logger.warning("Hour %d: %d line overload(s)", hour, len(alerts), extra=log_fields)

    # --- Marginal price (uniform, no congestion component) ---
    system_lambda = marginal_price(dispatch.order, dispatch.output)

    result = HourlyResult(
        hour=hour,
        total_load=total_load,
        gen_status=gen_status,
        gen_output=dispatch.output,
        line_flows={lf.line_id: lf.flow_mw for lf in flows},
        line_loading={lf.line_id: lf.loading_pct for lf in flows},
        system_cost=dispatch.system_cost,
        lmp={bus.id: system_lambda for bus in system.buses},
        alerts=alerts,
        bus_angles={
            bus_id: float(solution.angles[i]) for i, bus_id in enumerate(model.bus_ids)
        },
        angle_solution_status=solution.status,
        unserved_load=dispatch.unserved_load,
    )

    logger.debug(
        "Hour %d: load %.1f MW, cost %.1f $/hr, lambda %.2f $/MWh",
        hour, total_load, dispatch.system_cost, system_lambda,
    )
    return result


def run_simulation(system: SystemDefinition) -> list[HourlyResult]:
    """Simulate all 24 hours of ``system``.

    The network model is rebuilt on every call, so edited definitions never
    see stale matrices. The input is not modified.

    Raises:
        ValueError: if the load profile does not hold exactly 24 factors.
    """
    if len(system.load_profile) != HOURS_PER_DAY:
        raise ValueError(
            f"load_profile must have {HOURS_PER_DAY} factors, "
            f"got {len(system.load_profile)}"
        )

    logger.info(
        "Running %d-hour simulation: %d buses, %d generators, %d lines",
        HOURS_PER_DAY, len(system.buses), len(system.generators), len(system.lines),
    )

    model = build_network_model(system.buses, system.lines)
    results = [simulate_hour(system, model, h) for h in range(HOURS_PER_DAY)]

    logger.info(
        "Simulation complete: daily cost %.0f $, %d congested hour(s)",
        sum(r.system_cost for r in results),
        sum(1 for r in results if r.congested),
    )
    return results


def summarize_results(results: Sequence[HourlyResult]) -> DailySummary:
    """Aggregate hourly results into daily indicators."""
    if not results:
        return DailySummary(
            total_cost=0.0, peak_load=0.0, peak_hour=0,
            max_line_loading_pct=0.0, max_loading_line=None,
            congested_hours=0, fallback_hours=0,
            unserved_energy_mwh=0.0, average_price=0.0,
        )

    peak = max(results, key=lambda r: r.total_load)

    max_loading = 0.0
    max_line = None
    for r in results:
        for line_id, loading in r.line_loading.items():
            # nan loadings (degenerate lines) never compare greater
            if loading > max_loading:
                max_loading = loading
                max_line = line_id

    prices = [next(iter(r.lmp.values()), 0.0) for r in results]

    return DailySummary(
        total_cost=sum(r.system_cost for r in results),
        peak_load=peak.total_load,
        peak_hour=peak.hour,
        max_line_loading_pct=max_loading,
        max_loading_line=max_line,
        congested_hours=sum(1 for r in results if r.congested),
        fallback_hours=sum(
            1 for r in results
            if r.angle_solution_status is AngleSolutionStatus.ZERO_FALLBACK
        ),
        # one-hour intervals, so MW == MWh
        unserved_energy_mwh=sum(r.unserved_load for r in results),
        average_price=sum(prices) / len(prices),
    )
