"""Election state machine service.

ElectionStateMachine owns one Election aggregate and exposes every
operation of the voting workflow:

    register_voter -> start_proposals_registration -> submit_proposal
    -> end_proposals_registration -> start_voting_session -> cast_vote
    -> end_voting_session -> tally -> get_winner

Each operation checks the caller's role, then the current phase, then
any operation-specific precondition, and only then mutates state and
appends exactly one event to the outbox. A rejected call raises before
anything is mutated.

All operations run under a single lock, so check-then-mutate is atomic
even when the machine is shared by concurrent request handlers.
"""

from __future__ import annotations

import threading

import structlog

from ballotbox.application.services.base import LoggingMixin
from ballotbox.config.election_config import ElectionConfig
from ballotbox.domain.errors.election import (
    ROLE_OWNER,
    ROLE_REGISTERED_VOTER,
    AlreadyVotedError,
    InvalidPhaseError,
    NoProposalsError,
    UnauthorizedError,
    UnknownProposalError,
)
from ballotbox.domain.events.election import (
    ElectionEvent,
    ProposalRegisteredEvent,
    VotedEvent,
    VoterRegisteredEvent,
    WorkflowStatusChangeEvent,
)
from ballotbox.domain.exceptions import ElectionError
from ballotbox.domain.models.election import (
    Election,
    Proposal,
    Voter,
    WorkflowStatus,
)


class ElectionStateMachine(LoggingMixin):
    """Single-election voting workflow.

    Args:
        owner_identity: Administrative principal. Registered as the
            first voter on construction; no event is emitted for it.
    """

    def __init__(self, owner_identity: str) -> None:
        self._election = Election.create(owner_identity)
        self._outbox: list[ElectionEvent] = []
        self._lock = threading.Lock()
        self._init_logger()
        self._log.info(
            "election_initialized",
            owner_identity=owner_identity,
            status=self._election.status.value,
        )

    @classmethod
    def from_config(cls, config: ElectionConfig) -> ElectionStateMachine:
        """Create a state machine owned by the configured principal."""
        return cls(owner_identity=config.owner_identity)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def owner_identity(self) -> str:
        return self._election.owner_identity

    @property
    def status(self) -> WorkflowStatus:
        with self._lock:
            return self._election.status

    @property
    def proposals(self) -> tuple[Proposal, ...]:
        """Snapshot of the proposal sequence, indexed by identifier."""
        with self._lock:
            return tuple(self._election.proposals)

    @property
    def events(self) -> tuple[ElectionEvent, ...]:
        """Every event emitted so far, in emission order."""
        with self._lock:
            return tuple(self._outbox)

    def events_since(self, sequence: int = 0) -> list[ElectionEvent]:
        """Get events emitted after ``sequence``.

        Args:
            sequence: Last sequence number the consumer has seen
                (0 to read from the start).

        Returns:
            Events with a sequence number greater than ``sequence``.
        """
        if sequence < 0:
            raise ValueError(f"sequence must be non-negative, got {sequence}")
        with self._lock:
            return self._outbox[sequence:]

    def get_voter(self, identity: str) -> Voter | None:
        """Get the voter record for ``identity``, or None if never registered."""
        with self._lock:
            return self._election.voters.get(identity)

    def get_proposal(self, proposal_id: int) -> Proposal:
        """Get a proposal by identifier.

        Raises:
            UnknownProposalError: If no such proposal exists.
        """
        with self._lock:
            if not self._election.has_proposal(proposal_id):
                raise UnknownProposalError(proposal_id)
            return self._election.proposals[proposal_id]

    def get_winner(self) -> int:
        """Get the winning proposal identifier. Callable by anyone.

        Raises:
            InvalidPhaseError: If votes have not been tallied yet.
        """
        with self._lock:
            self._require_phase(WorkflowStatus.VOTES_TALLIED)
            return self._election.winning_proposal_id

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def register_voter(self, caller: str, target: str) -> Voter:
        """Register ``target`` as a voter.

        Registering an identity again resets it to a fresh record. This
        cannot discard a vote: registration is only open before voting.

        Returns:
            The new voter record.

        Raises:
            UnauthorizedError: If caller is not the owner.
            InvalidPhaseError: If voter registration has ended.
        """
        log = self._log_operation("register_voter", caller=caller, voter=target)
        with self._lock:
            try:
                self._require_owner(caller)
                self._require_phase(WorkflowStatus.REGISTERING_VOTERS)
            except ElectionError as e:
                self._log_rejection(log, e)
                raise

            voter = Voter(is_registered=True)
            self._election.voters[target] = voter
            event = self._emit(VoterRegisteredEvent, voter=target)

        log.info("voter_registered", sequence=event.sequence)
        return voter

    def advance_phase(
        self,
        caller: str,
        expected_current: WorkflowStatus,
        next_status: WorkflowStatus,
    ) -> None:
        """Move the election from ``expected_current`` to ``next_status``.

        Only single forward steps are accepted, and the final step to
        VOTES_TALLIED belongs to tally().

        Raises:
            ValueError: If the pair is not a single forward step, or
                targets VOTES_TALLIED.
            UnauthorizedError: If caller is not the owner.
            InvalidPhaseError: If the election is not in ``expected_current``.
        """
        if not expected_current.can_transition_to(next_status):
            raise ValueError(
                f"{expected_current.value} -> {next_status.value} is not a single forward step"
            )
        if next_status is WorkflowStatus.VOTES_TALLIED:
            raise ValueError("Votes are tallied by tally(), not advance_phase()")

        log = self._log_operation(
            "advance_phase",
            caller=caller,
            expected_current=expected_current.value,
            next_status=next_status.value,
        )
        with self._lock:
            try:
                self._require_owner(caller)
                self._require_phase(expected_current)
            except ElectionError as e:
                self._log_rejection(log, e)
                raise

            event = self._transition(next_status)

        log.info("workflow_status_changed", sequence=event.sequence)

    def start_proposals_registration(self, caller: str) -> None:
        """Open the proposal submission window."""
        self.advance_phase(
            caller,
            WorkflowStatus.REGISTERING_VOTERS,
            WorkflowStatus.PROPOSALS_REGISTRATION_STARTED,
        )

    def end_proposals_registration(self, caller: str) -> None:
        """Close the proposal submission window."""
        self.advance_phase(
            caller,
            WorkflowStatus.PROPOSALS_REGISTRATION_STARTED,
            WorkflowStatus.PROPOSALS_REGISTRATION_ENDED,
        )

    def start_voting_session(self, caller: str) -> None:
        """Open the voting window."""
        self.advance_phase(
            caller,
            WorkflowStatus.PROPOSALS_REGISTRATION_ENDED,
            WorkflowStatus.VOTING_SESSION_STARTED,
        )

    def end_voting_session(self, caller: str) -> None:
        """Close the voting window."""
        self.advance_phase(
            caller,
            WorkflowStatus.VOTING_SESSION_STARTED,
            WorkflowStatus.VOTING_SESSION_ENDED,
        )

    def tally(self, caller: str) -> int:
        """Count the votes and record the winner.

        Among proposals sharing the highest count, the one with the
        lowest identifier wins.

        Returns:
            The winning proposal identifier.

        Raises:
            UnauthorizedError: If caller is not the owner.
            InvalidPhaseError: If the voting session has not ended.
            NoProposalsError: If no proposal was ever submitted.
        """
        log = self._log_operation("tally", caller=caller)
        with self._lock:
            try:
                self._require_owner(caller)
                self._require_phase(WorkflowStatus.VOTING_SESSION_ENDED)
                winner = self._election.leading_proposal_id()
                if winner is None:
                    raise NoProposalsError()
            except ElectionError as e:
                self._log_rejection(log, e)
                raise

            self._election.winning_proposal_id = winner
            event = self._transition(WorkflowStatus.VOTES_TALLIED)
            vote_count = self._election.proposals[winner].vote_count

        log.info(
            "votes_tallied",
            winning_proposal_id=winner,
            vote_count=vote_count,
            sequence=event.sequence,
        )
        return winner

    # ------------------------------------------------------------------
    # Voter operations
    # ------------------------------------------------------------------

    def submit_proposal(self, caller: str, description: str) -> int:
        """Append a proposal.

        Returns:
            Identifier of the new proposal.

        Raises:
            UnauthorizedError: If caller is not a registered voter.
            InvalidPhaseError: If proposal registration is not open.
        """
        log = self._log_operation("submit_proposal", caller=caller)
        with self._lock:
            try:
                self._require_registered(caller)
                self._require_phase(WorkflowStatus.PROPOSALS_REGISTRATION_STARTED)
            except ElectionError as e:
                self._log_rejection(log, e)
                raise

            self._election.proposals.append(Proposal(description=description))
            proposal_id = len(self._election.proposals) - 1
            event = self._emit(ProposalRegisteredEvent, proposal_id=proposal_id)

        log.info("proposal_registered", proposal_id=proposal_id, sequence=event.sequence)
        return proposal_id

    def cast_vote(self, caller: str, proposal_id: int) -> Voter:
        """Cast the caller's single vote for ``proposal_id``.

        The voter record and the proposal count are updated together,
        after every check has passed.

        Returns:
            The updated voter record.

        Raises:
            UnauthorizedError: If caller is not a registered voter.
            InvalidPhaseError: If the voting session is not open.
            AlreadyVotedError: If caller has already voted.
            UnknownProposalError: If the proposal does not exist.
        """
        log = self._log_operation("cast_vote", caller=caller, proposal_id=proposal_id)
        with self._lock:
            try:
                self._require_registered(caller)
                self._require_phase(WorkflowStatus.VOTING_SESSION_STARTED)
                voter = self._election.voters[caller]
                if voter.has_voted:
                    raise AlreadyVotedError(caller, voter.voted_proposal_id)
                if not self._election.has_proposal(proposal_id):
                    raise UnknownProposalError(proposal_id)
            except ElectionError as e:
                self._log_rejection(log, e)
                raise

            proposals = self._election.proposals
            voted = voter.with_vote(proposal_id)
            self._election.voters[caller] = voted
            proposals[proposal_id] = proposals[proposal_id].with_vote()
            event = self._emit(VotedEvent, voter=caller, proposal_id=proposal_id)

        log.info("vote_cast", sequence=event.sequence)
        return voted

    # ------------------------------------------------------------------
    # Internals (callers hold self._lock)
    # ------------------------------------------------------------------

    def _require_owner(self, caller: str) -> None:
        if not self._election.is_owner(caller):
            raise UnauthorizedError(caller, ROLE_OWNER)

    def _require_registered(self, caller: str) -> None:
        if not self._election.is_registered(caller):
            raise UnauthorizedError(caller, ROLE_REGISTERED_VOTER)

    def _require_phase(self, required: WorkflowStatus) -> None:
        if self._election.status is not required:
            raise InvalidPhaseError(self._election.status, required)

    def _transition(self, next_status: WorkflowStatus) -> ElectionEvent:
        previous = self._election.status
        self._election.status = next_status
        return self._emit(WorkflowStatusChangeEvent, previous=previous, current=next_status)

    def _emit(self, event_cls: type[ElectionEvent], **fields: object) -> ElectionEvent:
        event = event_cls(sequence=len(self._outbox) + 1, **fields)  # type: ignore[arg-type]
        self._outbox.append(event)
        return event

    @staticmethod
    def _log_rejection(log: structlog.BoundLogger, error: ElectionError) -> None:
        log.warning(
            "operation_rejected",
            error_type=type(error).__name__,
            reason=str(error),
        )
