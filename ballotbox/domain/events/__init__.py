"""
Domain events for Ballotbox.

Notifications that represent accepted state changes of an election.
All events are immutable and ordered by sequence number.
"""

from ballotbox.domain.events.election import (
    PROPOSAL_REGISTERED_EVENT_TYPE,
    VOTED_EVENT_TYPE,
    VOTER_REGISTERED_EVENT_TYPE,
    WORKFLOW_STATUS_CHANGE_EVENT_TYPE,
    ElectionEvent,
    ProposalRegisteredEvent,
    VotedEvent,
    VoterRegisteredEvent,
    WorkflowStatusChangeEvent,
)

__all__: list[str] = [
    "PROPOSAL_REGISTERED_EVENT_TYPE",
    "VOTED_EVENT_TYPE",
    "VOTER_REGISTERED_EVENT_TYPE",
    "WORKFLOW_STATUS_CHANGE_EVENT_TYPE",
    "ElectionEvent",
    "ProposalRegisteredEvent",
    "VotedEvent",
    "VoterRegisteredEvent",
    "WorkflowStatusChangeEvent",
]
