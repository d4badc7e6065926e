"""24-hour commitment / dispatch simulation endpoints.

Synchronous: a day on a small network takes a few milliseconds, so the
engine runs inside the request.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from scuc_api.schemas.simulation import SimulationResponse
from scuc_api.schemas.system import SystemDefinitionSchema
from scuc_engine.presets import default_system
from scuc_engine.simulation.runner import run_simulation, summarize_results
from scuc_engine.system import SystemDefinition, validate_system

logger = logging.getLogger(__name__)

router = APIRouter()


def _simulate(system: SystemDefinition) -> SimulationResponse:
    results = run_simulation(system)
    summary = summarize_results(results)
    return SimulationResponse(
        hours=[r.to_dict() for r in results],
        summary=summary.to_dict(),
    )


@router.post("/simulations", response_model=SimulationResponse)
async def run_system_simulation(body: SystemDefinitionSchema):
    """Run the 24-hour simulation on a posted system definition."""
    system = body.to_engine()

    issues = validate_system(system)
    if issues:
        logger.info("Rejected system definition: %s", "; ".join(issues))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=issues,
        )

    return _simulate(system)


@router.post("/simulations/default", response_model=SimulationResponse)
async def run_default_simulation():
    """Run the 24-hour simulation on the built-in 5-bus example."""
    return _simulate(default_system())
