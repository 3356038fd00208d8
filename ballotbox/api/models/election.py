"""Election API request/response models.

Pydantic models for the election endpoints. Errors use RFC 7807 style
bodies (ElectionErrorResponse) nested under FastAPI's ``detail`` key.
"""

from typing import Any

from pydantic import BaseModel, Field

from ballotbox.domain.events.election import ElectionEvent
from ballotbox.domain.models.election import Proposal, Voter


class RegisterVoterRequest(BaseModel):
    """Request to register a voter.

    Attributes:
        identity: Principal identity to register.
    """

    identity: str = Field(..., min_length=1, description="Principal identity to register")


class SubmitProposalRequest(BaseModel):
    """Request to submit a proposal."""

    description: str = Field(..., description="Proposal content")


class CastVoteRequest(BaseModel):
    """Request to cast a vote.

    Attributes:
        proposal_id: Identifier of the proposal voted for.
    """

    proposal_id: int = Field(..., description="Identifier of the proposal voted for")


class ElectionStatusResponse(BaseModel):
    """Current state of the election.

    Attributes:
        status: Current workflow phase.
        owner_identity: Administrative principal.
        proposal_count: Number of submitted proposals.
        event_count: Number of events emitted so far.
    """

    status: str
    owner_identity: str
    proposal_count: int
    event_count: int


class VoterResponse(BaseModel):
    """Voter record."""

    identity: str
    is_registered: bool
    has_voted: bool
    voted_proposal_id: int

    @classmethod
    def from_voter(cls, identity: str, voter: Voter) -> "VoterResponse":
        return cls(
            identity=identity,
            is_registered=voter.is_registered,
            has_voted=voter.has_voted,
            voted_proposal_id=voter.voted_proposal_id,
        )


class ProposalResponse(BaseModel):
    """Proposal with its identifier and vote count."""

    proposal_id: int
    description: str
    vote_count: int

    @classmethod
    def from_proposal(cls, proposal_id: int, proposal: Proposal) -> "ProposalResponse":
        return cls(
            proposal_id=proposal_id,
            description=proposal.description,
            vote_count=proposal.vote_count,
        )


class ProposalListResponse(BaseModel):
    """All proposals, ordered by identifier."""

    proposals: list[ProposalResponse]
    total_count: int


class WinnerResponse(BaseModel):
    """Tally result.

    Attributes:
        winning_proposal_id: Identifier of the winning proposal.
        proposal: The winning proposal.
    """

    winning_proposal_id: int
    proposal: ProposalResponse


class EventResponse(BaseModel):
    """A single election event."""

    sequence: int
    event_type: str
    payload: dict[str, Any]

    @classmethod
    def from_event(cls, event: ElectionEvent) -> "EventResponse":
        return cls(**event.to_dict())


class EventListResponse(BaseModel):
    """Events emitted after a cursor.

    Attributes:
        events: Events in emission order.
        last_sequence: Sequence of the last returned event, or the
            requested cursor when nothing new was emitted.
    """

    events: list[EventResponse]
    last_sequence: int


class ElectionErrorResponse(BaseModel):
    """RFC 7807 error body for rejected election operations."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
