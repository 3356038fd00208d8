"""Election domain model.

This module defines the entities owned by a single election:

- WorkflowStatus: the six ordered phases of the election
- Voter: registration and vote record, keyed by principal identity
- Proposal: an entry of the append-only proposal sequence
- Election: the aggregate holding all of the above

State Machine:
    REGISTERING_VOTERS -> PROPOSALS_REGISTRATION_STARTED
    PROPOSALS_REGISTRATION_STARTED -> PROPOSALS_REGISTRATION_ENDED
    PROPOSALS_REGISTRATION_ENDED -> VOTING_SESSION_STARTED
    VOTING_SESSION_STARTED -> VOTING_SESSION_ENDED
    VOTING_SESSION_ENDED -> VOTES_TALLIED

Transitions only move forward one step. VOTES_TALLIED is terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class WorkflowStatus(Enum):
    """Phase of the election workflow."""

    REGISTERING_VOTERS = "RegisteringVoters"
    PROPOSALS_REGISTRATION_STARTED = "ProposalsRegistrationStarted"
    PROPOSALS_REGISTRATION_ENDED = "ProposalsRegistrationEnded"
    VOTING_SESSION_STARTED = "VotingSessionStarted"
    VOTING_SESSION_ENDED = "VotingSessionEnded"
    VOTES_TALLIED = "VotesTallied"

    @property
    def ordinal(self) -> int:
        """Position of this phase in the workflow sequence."""
        return WORKFLOW_SEQUENCE.index(self)

    def is_terminal(self) -> bool:
        """Check if no further phase follows this one."""
        return self is WorkflowStatus.VOTES_TALLIED

    def next_status(self) -> WorkflowStatus | None:
        """Get the immediate successor phase.

        Returns:
            The next phase, or None for the terminal phase.
        """
        if self.is_terminal():
            return None
        return WORKFLOW_SEQUENCE[self.ordinal + 1]

    def can_transition_to(self, target: WorkflowStatus) -> bool:
        """Check if ``target`` is the immediate successor of this phase."""
        return self.next_status() is target


WORKFLOW_SEQUENCE: tuple[WorkflowStatus, ...] = (
    WorkflowStatus.REGISTERING_VOTERS,
    WorkflowStatus.PROPOSALS_REGISTRATION_STARTED,
    WorkflowStatus.PROPOSALS_REGISTRATION_ENDED,
    WorkflowStatus.VOTING_SESSION_STARTED,
    WorkflowStatus.VOTING_SESSION_ENDED,
    WorkflowStatus.VOTES_TALLIED,
)


@dataclass(frozen=True, eq=True)
class Voter:
    """Registration and vote record for one principal.

    Attributes:
        is_registered: Whether the principal may submit proposals and vote.
        has_voted: Whether a vote has been cast.
        voted_proposal_id: Proposal voted for; 0 until a vote is cast.
    """

    is_registered: bool = False
    has_voted: bool = False
    voted_proposal_id: int = 0

    def with_vote(self, proposal_id: int) -> Voter:
        """Return a copy of this voter recording a vote for ``proposal_id``."""
        return Voter(
            is_registered=self.is_registered,
            has_voted=True,
            voted_proposal_id=proposal_id,
        )


@dataclass(frozen=True, eq=True)
class Proposal:
    """An entry of the proposal sequence.

    The identifier of a proposal is its index in the sequence.

    Attributes:
        description: Free-text proposal content.
        vote_count: Number of votes received (never negative).
        exists: Marks a slot holding a submitted proposal.
    """

    description: str
    vote_count: int = 0
    exists: bool = True

    def __post_init__(self) -> None:
        """Validate proposal fields."""
        if self.vote_count < 0:
            raise ValueError(f"vote_count must be non-negative, got {self.vote_count}")

    def with_vote(self) -> Proposal:
        """Return a copy of this proposal with one more vote."""
        return Proposal(
            description=self.description,
            vote_count=self.vote_count + 1,
            exists=self.exists,
        )


@dataclass
class Election:
    """The election aggregate.

    Mutated in place by ElectionStateMachine; every other caller should
    treat it as read-only. Entities stored inside are frozen so snapshots
    handed out can never alias mutable state.

    Attributes:
        owner_identity: The administrative principal.
        status: Current workflow phase.
        voters: Voter records keyed by principal identity.
        proposals: Append-only proposal sequence.
        winning_proposal_id: Set by tally; meaningful only once
            status is VOTES_TALLIED.
    """

    owner_identity: str
    status: WorkflowStatus = WorkflowStatus.REGISTERING_VOTERS
    voters: dict[str, Voter] = field(default_factory=dict)
    proposals: list[Proposal] = field(default_factory=list)
    winning_proposal_id: int = 0

    @classmethod
    def create(cls, owner_identity: str) -> Election:
        """Create a new election with the owner registered as first voter.

        Args:
            owner_identity: Identity of the administrative principal.

        Returns:
            Election in REGISTERING_VOTERS phase.
        """
        election = cls(owner_identity=owner_identity)
        election.voters[owner_identity] = Voter(is_registered=True)
        return election

    def is_owner(self, identity: str) -> bool:
        """Check if ``identity`` is the administrative principal."""
        return identity == self.owner_identity

    def is_registered(self, identity: str) -> bool:
        """Check if ``identity`` is a registered voter."""
        voter = self.voters.get(identity)
        return voter is not None and voter.is_registered

    def has_proposal(self, proposal_id: int) -> bool:
        """Check if ``proposal_id`` refers to a submitted proposal."""
        return 0 <= proposal_id < len(self.proposals) and self.proposals[proposal_id].exists

    def leading_proposal_id(self) -> int | None:
        """Find the proposal with the most votes.

        Proposals are scanned by ascending identifier and the leader only
        changes on a strictly greater count, so among proposals sharing
        the maximum the lowest identifier wins.

        Returns:
            Identifier of the leading proposal, or None if there are none.
        """
        if not self.proposals:
            return None
        leader = 0
        for proposal_id, proposal in enumerate(self.proposals):
            if proposal.vote_count > self.proposals[leader].vote_count:
                leader = proposal_id
        return leader
