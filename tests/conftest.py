"""
Pytest configuration and shared fixtures for Ballotbox tests.

Testing Standards:
- Async tests run in pytest-asyncio auto mode (see pyproject.toml)
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from ballotbox.application.services.election_service import ElectionStateMachine
from tests.helpers.identities import OWNER, VOTER_1, VOTER_2


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from ballotbox import __version__

    return __version__


@pytest.fixture
def election() -> ElectionStateMachine:
    """Fresh election owned by OWNER, still registering voters."""
    return ElectionStateMachine(OWNER)


@pytest.fixture
def registered_election(election: ElectionStateMachine) -> ElectionStateMachine:
    """Election with VOTER_1 and VOTER_2 registered."""
    election.register_voter(OWNER, VOTER_1)
    election.register_voter(OWNER, VOTER_2)
    return election


@pytest.fixture
def proposal_election(registered_election: ElectionStateMachine) -> ElectionStateMachine:
    """Election accepting proposals, with "A" (0) and "B" (1) submitted."""
    registered_election.start_proposals_registration(OWNER)
    registered_election.submit_proposal(VOTER_1, "A")
    registered_election.submit_proposal(VOTER_2, "B")
    return registered_election


@pytest.fixture
def voting_election(proposal_election: ElectionStateMachine) -> ElectionStateMachine:
    """Election with the voting session open over proposals "A" and "B"."""
    proposal_election.end_proposals_registration(OWNER)
    proposal_election.start_voting_session(OWNER)
    return proposal_election
