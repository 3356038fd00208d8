"""Domain models for Ballotbox.

Contains the election aggregate and the entities it owns. These
models contain no infrastructure dependencies.
"""

from ballotbox.domain.models.election import (
    WORKFLOW_SEQUENCE,
    Election,
    Proposal,
    Voter,
    WorkflowStatus,
)

__all__: list[str] = [
    "WORKFLOW_SEQUENCE",
    "Election",
    "Proposal",
    "Voter",
    "WorkflowStatus",
]
