"""Domain errors for Ballotbox.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ElectionError.
"""

from ballotbox.domain.errors.election import (
    ROLE_OWNER,
    ROLE_REGISTERED_VOTER,
    AlreadyVotedError,
    InvalidPhaseError,
    NoProposalsError,
    UnauthorizedError,
    UnknownProposalError,
)
from ballotbox.domain.exceptions import ElectionError

__all__: list[str] = [
    "ROLE_OWNER",
    "ROLE_REGISTERED_VOTER",
    "AlreadyVotedError",
    "ElectionError",
    "InvalidPhaseError",
    "NoProposalsError",
    "UnauthorizedError",
    "UnknownProposalError",
]
