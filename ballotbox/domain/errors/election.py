"""Election errors.

Every rejected election operation raises one of these errors before
any state is mutated.

Error taxonomy:
- UnauthorizedError: caller lacks the required role
- InvalidPhaseError: current phase does not permit the operation
- AlreadyVotedError: caller has already cast a vote
- UnknownProposalError: proposal identifier does not exist
- NoProposalsError: tally requested over an empty proposal sequence
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ballotbox.domain.exceptions import ElectionError

if TYPE_CHECKING:
    from ballotbox.domain.models.election import WorkflowStatus

ROLE_OWNER = "owner"
ROLE_REGISTERED_VOTER = "registered_voter"


class UnauthorizedError(ElectionError):
    """Raised when the caller lacks the role an operation requires.

    Attributes:
        caller: Identity of the rejected caller.
        required_role: Either ROLE_OWNER or ROLE_REGISTERED_VOTER.
    """

    def __init__(self, caller: str, required_role: str) -> None:
        """Initialize unauthorized error.

        Args:
            caller: Identity of the rejected caller.
            required_role: Role the operation requires.
        """
        self.caller = caller
        self.required_role = required_role
        super().__init__(f"Caller {caller!r} is not authorized: requires {required_role}")


class InvalidPhaseError(ElectionError):
    """Raised when the workflow phase does not permit the operation.

    Attributes:
        current: Phase the election is in.
        required: Phase the operation requires.
    """

    def __init__(self, current: WorkflowStatus, required: WorkflowStatus) -> None:
        """Initialize invalid phase error.

        Args:
            current: Current workflow phase.
            required: Phase required by the rejected operation.
        """
        self.current = current
        self.required = required
        super().__init__(
            f"Operation requires phase {required.value}, election is in {current.value}"
        )


class AlreadyVotedError(ElectionError):
    """Raised when a voter attempts a second vote.

    Attributes:
        voter: Identity of the voter.
        voted_proposal_id: Proposal the earlier vote went to.
    """

    def __init__(self, voter: str, voted_proposal_id: int) -> None:
        """Initialize already voted error.

        Args:
            voter: Identity of the voter.
            voted_proposal_id: Proposal the earlier vote went to.
        """
        self.voter = voter
        self.voted_proposal_id = voted_proposal_id
        super().__init__(
            f"Voter {voter!r} has already voted for proposal {voted_proposal_id}"
        )


class UnknownProposalError(ElectionError):
    """Raised when a proposal identifier does not exist.

    Attributes:
        proposal_id: The identifier that was not found.
    """

    def __init__(self, proposal_id: int) -> None:
        """Initialize unknown proposal error.

        Args:
            proposal_id: The identifier that was not found.
        """
        self.proposal_id = proposal_id
        super().__init__(f"Proposal {proposal_id} does not exist")


class NoProposalsError(ElectionError):
    """Raised when votes are tallied but no proposal was ever submitted."""

    def __init__(self) -> None:
        """Initialize no proposals error."""
        super().__init__("Cannot tally votes: no proposal was submitted")
