"""Election API dependencies.

The API fronts one process-wide ElectionStateMachine, created lazily
from ElectionConfig.from_environment() on first use.
"""

from ballotbox.application.services.election_service import ElectionStateMachine
from ballotbox.config.election_config import ElectionConfig

_election_service: ElectionStateMachine | None = None


def get_election_service() -> ElectionStateMachine:
    """Get the hosted election state machine.

    Returns:
        The singleton ElectionStateMachine.
    """
    global _election_service
    if _election_service is None:
        _election_service = ElectionStateMachine.from_config(
            ElectionConfig.from_environment()
        )
    return _election_service


def set_election_service(service: ElectionStateMachine) -> None:
    """Set a custom election state machine for testing.

    Args:
        service: State machine to serve.
    """
    global _election_service
    _election_service = service


def reset_election_dependencies() -> None:
    """Reset the singleton for testing.

    Call this in test fixtures to ensure clean state between tests.
    """
    global _election_service
    _election_service = None
