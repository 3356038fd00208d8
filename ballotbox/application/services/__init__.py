"""Application services for Ballotbox."""

from ballotbox.application.services.election_service import ElectionStateMachine

__all__: list[str] = ["ElectionStateMachine"]
