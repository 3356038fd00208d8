"""FastAPI dependencies for Ballotbox."""

from ballotbox.api.dependencies.election import (
    get_election_service,
    reset_election_dependencies,
    set_election_service,
)

__all__: list[str] = [
    "get_election_service",
    "reset_election_dependencies",
    "set_election_service",
]
