"""Election API routes.

FastAPI router exposing the election workflow over HTTP. The caller
principal is read from the X-Caller-Identity header; authenticating
that header is the responsibility of the hosting deployment.

Error mapping (RFC 7807 bodies under ``detail``):
- UnauthorizedError -> 403
- InvalidPhaseError -> 409
- AlreadyVotedError -> 409
- NoProposalsError -> 409
- UnknownProposalError -> 404
"""

from collections.abc import Callable

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request

from ballotbox.api.dependencies.election import get_election_service
from ballotbox.api.models.election import (
    CastVoteRequest,
    ElectionErrorResponse,
    ElectionStatusResponse,
    EventListResponse,
    EventResponse,
    ProposalListResponse,
    ProposalResponse,
    RegisterVoterRequest,
    SubmitProposalRequest,
    VoterResponse,
    WinnerResponse,
)
from ballotbox.application.services.election_service import ElectionStateMachine
from ballotbox.domain.errors import (
    AlreadyVotedError,
    ElectionError,
    InvalidPhaseError,
    NoProposalsError,
    UnauthorizedError,
    UnknownProposalError,
)

router = APIRouter(prefix="/v1/election", tags=["election"])

CALLER_HEADER = "X-Caller-Identity"

# Ordered: first matching class wins
_ERROR_MAP: tuple[tuple[type[ElectionError], int, str, str], ...] = (
    (UnauthorizedError, 403, "urn:ballotbox:election:unauthorized", "Unauthorized"),
    (InvalidPhaseError, 409, "urn:ballotbox:election:invalid-phase", "Invalid Phase"),
    (AlreadyVotedError, 409, "urn:ballotbox:election:already-voted", "Already Voted"),
    (NoProposalsError, 409, "urn:ballotbox:election:no-proposals", "No Proposals"),
    (UnknownProposalError, 404, "urn:ballotbox:election:unknown-proposal", "Unknown Proposal"),
)

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    403: {"model": ElectionErrorResponse, "description": "Caller lacks the required role"},
    404: {"model": ElectionErrorResponse, "description": "Proposal does not exist"},
    409: {
        "model": ElectionErrorResponse,
        "description": "Wrong phase, already voted, or nothing to tally",
    },
}


def _to_http_exception(error: ElectionError, request: Request) -> HTTPException:
    """Translate a domain error into an RFC 7807 HTTPException."""
    for error_cls, status_code, problem_type, title in _ERROR_MAP:
        if isinstance(error, error_cls):
            break
    else:
        status_code, problem_type, title = 400, "urn:ballotbox:election:rejected", "Rejected"

    detail: dict[str, object] = {
        "type": problem_type,
        "title": title,
        "status": status_code,
        "detail": str(error),
        "instance": str(request.url),
    }
    if isinstance(error, InvalidPhaseError):
        detail["current_status"] = error.current.value
        detail["required_status"] = error.required.value
    elif isinstance(error, UnauthorizedError):
        detail["required_role"] = error.required_role
    elif isinstance(error, AlreadyVotedError):
        detail["voted_proposal_id"] = error.voted_proposal_id
    elif isinstance(error, UnknownProposalError):
        detail["proposal_id"] = error.proposal_id
    return HTTPException(status_code=status_code, detail=detail)


def _status_response(service: ElectionStateMachine) -> ElectionStatusResponse:
    return ElectionStatusResponse(
        status=service.status.value,
        owner_identity=service.owner_identity,
        proposal_count=len(service.proposals),
        event_count=len(service.events),
    )


@router.get("/status", response_model=ElectionStatusResponse)
async def get_status(
    service: ElectionStateMachine = Depends(get_election_service),
) -> ElectionStatusResponse:
    """Get the current phase and counters of the election."""
    return _status_response(service)


@router.post(
    "/voters",
    response_model=VoterResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Register a voter",
)
async def register_voter(
    request_data: RegisterVoterRequest,
    request: Request,
    caller: str = Header(..., alias=CALLER_HEADER),
    service: ElectionStateMachine = Depends(get_election_service),
) -> VoterResponse:
    """Register a voter. Owner only, during voter registration."""
    try:
        voter = service.register_voter(caller, request_data.identity)
    except ElectionError as e:
        raise _to_http_exception(e, request) from None
    return VoterResponse.from_voter(request_data.identity, voter)


@router.get(
    "/voters/{identity}",
    response_model=VoterResponse,
    responses={404: {"model": ElectionErrorResponse, "description": "Voter not found"}},
)
async def get_voter(
    identity: str,
    request: Request,
    service: ElectionStateMachine = Depends(get_election_service),
) -> VoterResponse:
    """Get a voter record."""
    voter = service.get_voter(identity)
    if voter is None:
        raise HTTPException(
            status_code=404,
            detail={
                "type": "urn:ballotbox:election:voter-not-found",
                "title": "Voter Not Found",
                "status": 404,
                "detail": f"Voter {identity!r} is not registered",
                "instance": str(request.url),
            },
        )
    return VoterResponse.from_voter(identity, voter)


PHASE_ACTIONS: dict[str, Callable[[ElectionStateMachine, str], None]] = {
    "start-proposals-registration": ElectionStateMachine.start_proposals_registration,
    "end-proposals-registration": ElectionStateMachine.end_proposals_registration,
    "start-voting-session": ElectionStateMachine.start_voting_session,
    "end-voting-session": ElectionStateMachine.end_voting_session,
}


@router.post(
    "/phases/{action}",
    response_model=ElectionStatusResponse,
    responses=_ERROR_RESPONSES,
    summary="Advance the workflow phase",
)
async def advance_phase(
    action: str,
    request: Request,
    caller: str = Header(..., alias=CALLER_HEADER),
    service: ElectionStateMachine = Depends(get_election_service),
) -> ElectionStatusResponse:
    """Run one of the named phase transitions. Owner only."""
    transition = PHASE_ACTIONS.get(action)
    if transition is None:
        raise HTTPException(
            status_code=404,
            detail={
                "type": "urn:ballotbox:election:unknown-phase-action",
                "title": "Unknown Phase Action",
                "status": 404,
                "detail": f"Unknown phase action {action!r}; expected one of {sorted(PHASE_ACTIONS)}",
                "instance": str(request.url),
            },
        )
    try:
        transition(service, caller)
    except ElectionError as e:
        raise _to_http_exception(e, request) from None
    return _status_response(service)


@router.post(
    "/proposals",
    response_model=ProposalResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Submit a proposal",
)
async def submit_proposal(
    request_data: SubmitProposalRequest,
    request: Request,
    caller: str = Header(..., alias=CALLER_HEADER),
    service: ElectionStateMachine = Depends(get_election_service),
) -> ProposalResponse:
    """Submit a proposal. Registered voters only, during proposal registration."""
    try:
        proposal_id = service.submit_proposal(caller, request_data.description)
        proposal = service.get_proposal(proposal_id)
    except ElectionError as e:
        raise _to_http_exception(e, request) from None
    return ProposalResponse.from_proposal(proposal_id, proposal)


@router.get("/proposals", response_model=ProposalListResponse)
async def list_proposals(
    service: ElectionStateMachine = Depends(get_election_service),
) -> ProposalListResponse:
    """List all proposals with their current vote counts."""
    proposals = [
        ProposalResponse.from_proposal(proposal_id, proposal)
        for proposal_id, proposal in enumerate(service.proposals)
    ]
    return ProposalListResponse(proposals=proposals, total_count=len(proposals))


@router.get(
    "/proposals/{proposal_id}",
    response_model=ProposalResponse,
    responses=_ERROR_RESPONSES,
)
async def get_proposal(
    proposal_id: int,
    request: Request,
    service: ElectionStateMachine = Depends(get_election_service),
) -> ProposalResponse:
    """Get a single proposal."""
    try:
        proposal = service.get_proposal(proposal_id)
    except ElectionError as e:
        raise _to_http_exception(e, request) from None
    return ProposalResponse.from_proposal(proposal_id, proposal)


@router.post(
    "/votes",
    response_model=VoterResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Cast a vote",
)
async def cast_vote(
    request_data: CastVoteRequest,
    request: Request,
    caller: str = Header(..., alias=CALLER_HEADER),
    service: ElectionStateMachine = Depends(get_election_service),
) -> VoterResponse:
    """Cast the caller's vote. Registered voters only, once, during voting."""
    try:
        voter = service.cast_vote(caller, request_data.proposal_id)
    except ElectionError as e:
        raise _to_http_exception(e, request) from None
    return VoterResponse.from_voter(caller, voter)


@router.post(
    "/tally",
    response_model=WinnerResponse,
    responses=_ERROR_RESPONSES,
    summary="Tally the votes",
)
async def tally(
    request: Request,
    caller: str = Header(..., alias=CALLER_HEADER),
    service: ElectionStateMachine = Depends(get_election_service),
) -> WinnerResponse:
    """Tally the votes and record the winner. Owner only."""
    try:
        winner = service.tally(caller)
        proposal = service.get_proposal(winner)
    except ElectionError as e:
        raise _to_http_exception(e, request) from None
    return WinnerResponse(
        winning_proposal_id=winner,
        proposal=ProposalResponse.from_proposal(winner, proposal),
    )


@router.get("/winner", response_model=WinnerResponse, responses=_ERROR_RESPONSES)
async def get_winner(
    request: Request,
    service: ElectionStateMachine = Depends(get_election_service),
) -> WinnerResponse:
    """Get the winning proposal. Available once votes are tallied."""
    try:
        winner = service.get_winner()
        proposal = service.get_proposal(winner)
    except ElectionError as e:
        raise _to_http_exception(e, request) from None
    return WinnerResponse(
        winning_proposal_id=winner,
        proposal=ProposalResponse.from_proposal(winner, proposal),
    )


@router.get("/events", response_model=EventListResponse)
async def list_events(
    since: int = Query(0, ge=0, description="Return events after this sequence"),
    service: ElectionStateMachine = Depends(get_election_service),
) -> EventListResponse:
    """Read the event outbox from a cursor."""
    events = service.events_since(since)
    return EventListResponse(
        events=[EventResponse.from_event(event) for event in events],
        last_sequence=events[-1].sequence if events else since,
    )
