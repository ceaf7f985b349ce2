"""HTTP surface of the relay (FastAPI)."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse

from product_pulse.config import Settings
from product_pulse.exceptions import ConfigurationError, UpstreamError
from product_pulse.log import get_logger
from product_pulse.models import PulseReport, Repository
from product_pulse.relay import Relay

logger = get_logger("server")


def get_relay(request: Request) -> Relay:
    return request.app.state.relay


async def list_repositories(request: Request) -> list[Repository]:
    """Private repositories of the token owner."""
    return await get_relay(request).list_repositories()


async def get_repository_pulse(owner: str, repo: str, request: Request) -> PulseReport:
    """Aggregate pulse for ``owner/repo``."""
    return await get_relay(request).get_pulse(owner, repo)


async def _configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": exc.message})


async def _upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.message},
    )


def register_routes(app: FastAPI) -> None:
    router = APIRouter(prefix="/api")
    router.add_api_route(
        "/repositories",
        list_repositories,
        methods=["GET"],
        response_model=list[Repository],
    )
    router.add_api_route(
        "/repository/{owner}/{repo}/pulse",
        get_repository_pulse,
        methods=["GET"],
        response_model=PulseReport,
    )
    app.include_router(router)


def create_app(settings: Settings, relay: Optional[Relay] = None) -> FastAPI:
    """Build the relay application; the relay is closed on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not settings.has_credential:
            logger.warning("GITHUB_TOKEN is not set; /api/repositories will answer 400")
        logger.info("Product Pulse Dashboard running on port %d", settings.port)
        try:
            yield
        finally:
            await app.state.relay.close()

    app = FastAPI(title="Product Pulse Dashboard", lifespan=lifespan)
    app.state.relay = relay or Relay(settings)
    app.add_exception_handler(ConfigurationError, _configuration_error_handler)
    app.add_exception_handler(UpstreamError, _upstream_error_handler)
    register_routes(app)
    return app


def serve(settings: Settings) -> None:
    """Run the relay with uvicorn until interrupted."""
    app = create_app(settings)
    logger.info("Visit http://%s:%d/api/repositories", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
