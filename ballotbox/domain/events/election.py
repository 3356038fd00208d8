"""Election event payloads.

This module defines the notifications emitted by the election:
- VoterRegisteredEvent: a voter record was created or reset
- WorkflowStatusChangeEvent: the election moved to its next phase
- ProposalRegisteredEvent: a proposal was appended
- VotedEvent: a voter cast their vote

Exactly one event is emitted per accepted mutating call. Events carry a
sequence number starting at 1, so consumers can resume from a cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from ballotbox.domain.models.election import WorkflowStatus

VOTER_REGISTERED_EVENT_TYPE: str = "election.voter.registered"
WORKFLOW_STATUS_CHANGE_EVENT_TYPE: str = "election.workflow.status_changed"
PROPOSAL_REGISTERED_EVENT_TYPE: str = "election.proposal.registered"
VOTED_EVENT_TYPE: str = "election.vote.cast"


@dataclass(frozen=True, eq=True)
class ElectionEvent:
    """Common fields of every election event.

    Attributes:
        sequence: Position of this event in the election's outbox (1-based).
    """

    event_type: ClassVar[str] = ""

    sequence: int

    def payload(self) -> dict[str, Any]:
        """Event-specific fields, serialized."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dict for consumers.

        Returns:
            Dict with sequence, event_type and payload keys.
        """
        return {
            "sequence": self.sequence,
            "event_type": self.event_type,
            "payload": self.payload(),
        }


@dataclass(frozen=True, eq=True)
class VoterRegisteredEvent(ElectionEvent):
    """Payload for voter registration.

    Attributes:
        voter: Identity that was registered.
    """

    event_type: ClassVar[str] = VOTER_REGISTERED_EVENT_TYPE

    voter: str

    def payload(self) -> dict[str, Any]:
        return {"voter": self.voter}


@dataclass(frozen=True, eq=True)
class WorkflowStatusChangeEvent(ElectionEvent):
    """Payload for a phase transition.

    Attributes:
        previous: Phase before the transition.
        current: Phase after the transition.
    """

    event_type: ClassVar[str] = WORKFLOW_STATUS_CHANGE_EVENT_TYPE

    previous: WorkflowStatus
    current: WorkflowStatus

    def payload(self) -> dict[str, Any]:
        return {
            "previous": self.previous.value,
            "current": self.current.value,
        }


@dataclass(frozen=True, eq=True)
class ProposalRegisteredEvent(ElectionEvent):
    """Payload for proposal submission."""

    event_type: ClassVar[str] = PROPOSAL_REGISTERED_EVENT_TYPE

    proposal_id: int

    def payload(self) -> dict[str, Any]:
        return {"proposal_id": self.proposal_id}


@dataclass(frozen=True, eq=True)
class VotedEvent(ElectionEvent):
    """Payload for a cast vote.

    Attributes:
        voter: Identity of the voter.
        proposal_id: Proposal that received the vote.
    """

    event_type: ClassVar[str] = VOTED_EVENT_TYPE

    voter: str
    proposal_id: int

    def payload(self) -> dict[str, Any]:
        return {"voter": self.voter, "proposal_id": self.proposal_id}
