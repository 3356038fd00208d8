"""FastAPI application entry point for Ballotbox."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ballotbox import __version__
from ballotbox.api.middleware.logging_middleware import LoggingMiddleware
from ballotbox.api.routes.election import router as election_router
from ballotbox.api.routes.health import router as health_router
from ballotbox.api.startup import configure_logging, start_election
from ballotbox.config.election_config import ElectionConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = ElectionConfig.from_environment()
    configure_logging(config)
    start_election()
    yield


app = FastAPI(
    title="Ballotbox Election API",
    description="Single-election proposal voting",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.include_router(health_router)
app.include_router(election_router)
