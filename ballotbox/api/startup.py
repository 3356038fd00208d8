"""Startup configuration for Ballotbox API.

Usage in FastAPI:
    configure_logging(ElectionConfig.from_environment())
    start_election()
"""

from ballotbox.api.dependencies.election import get_election_service
from ballotbox.config.election_config import ElectionConfig
from ballotbox.infrastructure.observability import (
    configure_structlog,
    get_logger_for_service,
)


def configure_logging(config: ElectionConfig) -> None:
    """Configure structured logging for the configured environment.

    Test and development environments use console output.
    """
    configure_structlog(environment=config.environment)
    logger = get_logger_for_service("startup", component="api")
    logger.info("logging_configured", environment=config.environment)


def start_election() -> None:
    """Create the hosted election and log its owner."""
    service = get_election_service()
    logger = get_logger_for_service("startup", component="api")
    logger.info(
        "election_started",
        owner_identity=service.owner_identity,
        status=service.status.value,
    )
