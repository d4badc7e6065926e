"""Example system endpoints."""

from fastapi import APIRouter

from scuc_api.schemas.system import SystemDefinitionSchema
from scuc_engine.presets import default_system

router = APIRouter()


@router.get("/systems/default", response_model=SystemDefinitionSchema)
async def get_default_system():
    """The 5-bus example system, ready to be edited and posted back."""
    return SystemDefinitionSchema.from_engine(default_system())
