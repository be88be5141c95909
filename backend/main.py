"""Entry point for the repository stats FastAPI application."""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api.routes import router as api_router
from services.pipeline_errors import PipelineError
from utils.service_config import ServiceConfig, load_service_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release the pipeline thread pool on shutdown."""
    logger.info("Server started.")
    try:
        yield
    finally:
        app.state.executor.shutdown(wait=True)


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """
    Build the application for the given configuration.

    Args:
        config: Service settings; read from the environment when omitted.

    Returns:
        FastAPI: App with CORS, routes and the pipeline error handler.
    """
    if config is None:
        config = load_service_config()

    if not shutil.which("git"):
        logger.warning("git executable not found in PATH; every clone will fail")

    app = FastAPI(title="Repository Stats", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.state.executor = ThreadPoolExecutor(
        max_workers=config.max_workers, thread_name_prefix="stats"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.exception_handler(PipelineError)
    async def pipeline_error_handler(_: Request, exc: PipelineError) -> PlainTextResponse:
        logger.info("Stats request failed (%s): %s", exc.kind, exc)
        return PlainTextResponse(str(exc), status_code=500)

    return app


app = create_app()


def configure_logging(level: str = "INFO") -> None:
    """Process-wide log format for standalone runs."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:  # pragma: no cover - integration path
    import uvicorn

    config = app.state.config
    configure_logging(config.log_level)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":  # pragma: no cover
    run()
