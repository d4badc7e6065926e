from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scuc_api.api.v1 import simulations, systems
from scuc_api.config import settings
from scuc_api.core.logging import RequestLoggingMiddleware, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging(
        json_format=settings.log_json,
        level=settings.log_level,
        engine_level=settings.engine_log_level,
    )
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware, quiet_paths=("/health",))

    application.include_router(systems.router, prefix="/api/v1", tags=["systems"])
    application.include_router(simulations.router, prefix="/api/v1", tags=["simulations"])

    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok", "environment": settings.environment}

    return application


app = create_app()
