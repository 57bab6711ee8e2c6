"""
HTTP transport for the gas container service.

FastAPI routes marshal the four contract operations as JSON. Handlers are
plain (sync) functions, so each inbound request runs on its own worker
thread and contends for the logic unit's lock like any other caller.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel, Field

from . import __version__
from .data_types import AppConfig
from .service import GasContainerContract, build_service
from .constants import SERVER_PATH

logger = logging.getLogger(__name__)


class MassRequest(BaseModel):
    """Payload for increase-mass / decrease-mass."""

    mass: float = Field(gt=0)


class PressureResponse(BaseModel):
    pressure: float


class DestroyedResponse(BaseModel):
    destroyed: bool


def create_app(service: GasContainerContract, path: str = SERVER_PATH) -> FastAPI:
    """
    Create the FastAPI app serving one gas container.

    Args:
        service: Facade the routes forward to
        path: URL prefix for the contract operations

    Returns:
        FastAPI application
    """
    app = FastAPI(
        title="Gas Container Service",
        description="Pressurized gas container with autonomous thermal drift.",
        version=__version__,
    )
    router = APIRouter(prefix=path.rstrip("/"))

    @router.post("/increase-mass", status_code=204)
    def increase_mass(request: MassRequest) -> None:
        service.increase_mass(request.mass)

    @router.post("/decrease-mass", status_code=204)
    def decrease_mass(request: MassRequest) -> None:
        service.decrease_mass(request.mass)

    @router.get("/pressure", response_model=PressureResponse)
    def get_pressure() -> PressureResponse:
        return PressureResponse(pressure=service.get_pressure())

    @router.get("/destroyed", response_model=DestroyedResponse)
    def is_destroyed() -> DestroyedResponse:
        return DestroyedResponse(destroyed=service.is_destroyed())

    @app.get("/healthz")
    def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    app.include_router(router)
    return app


def run_server(config: Optional[AppConfig] = None, **uvicorn_kwargs: Any):
    """
    Serve one container until the process is interrupted.

    The autonomous cycle runs for the lifetime of the server and is
    stopped when uvicorn returns.

    Args:
        config: Application config (defaults if None)
        **uvicorn_kwargs: Extra options passed to uvicorn.run
    """
    import uvicorn

    config = config or AppConfig()
    service, logic = build_service(config.container)
    app = create_app(service, config.server.path)

    logger.info("Server is about to start on %s", config.server.base_url)
    logic.start()
    try:
        uvicorn.run(app, host=config.server.host, port=config.server.port, **uvicorn_kwargs)
    finally:
        logic.stop()
        logger.info("Server stopped")
