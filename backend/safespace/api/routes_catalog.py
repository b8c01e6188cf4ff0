from fastapi import APIRouter, Depends, HTTPException, Query, status

from safespace.api.deps import get_app_state
from safespace.schemas.catalog import (
    CounsellorOut,
    CounsellorRequestListResponse,
    CounsellorRequestOut,
    GameListResponse,
    GameOut,
    ProblemInterfaceOut,
    TrackOut,
)
from safespace.services.catalog import (
    COUNSELLORS,
    MINDFULNESS_GAMES,
    PROBLEM_INTERFACES,
    filter_tracks,
    find_game,
    format_time_ago,
)
from safespace.services.state import AppState
from safespace.services.triage import ProblemId

router = APIRouter(tags=["catalog"])


def _games_out(state: AppState) -> GameListResponse:
    items = [GameOut(**game, completed=game["id"] in state.completed_games) for game in MINDFULNESS_GAMES]
    return GameListResponse(
        points=state.game_points,
        completed_count=len(state.completed_games),
        total=len(items),
        items=items,
    )


def _request_out(row: dict[str, object]) -> CounsellorRequestOut:
    return CounsellorRequestOut(**row, time_ago=format_time_ago(row["timestamp"]))


@router.get("/problems/{problem_id}", response_model=ProblemInterfaceOut)
async def get_problem_interface(problem_id: str, state: AppState = Depends(get_app_state)) -> ProblemInterfaceOut:
    try:
        pid = ProblemId(problem_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Problem interface not found") from exc

    info = PROBLEM_INTERFACES[pid]
    return ProblemInterfaceOut(
        id=pid,
        title=info["title"],
        description=info["description"],
        is_current=state.current_problem_id == pid,
    )


@router.get("/dashboard/counsellors", response_model=list[CounsellorOut])
async def list_counsellors() -> list[CounsellorOut]:
    return [CounsellorOut(**c) for c in COUNSELLORS]


@router.get("/games", response_model=GameListResponse)
async def list_games(state: AppState = Depends(get_app_state)) -> GameListResponse:
    return _games_out(state)


@router.post("/games/{game_id}/complete", response_model=GameListResponse)
async def complete_game(game_id: str, state: AppState = Depends(get_app_state)) -> GameListResponse:
    if find_game(game_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    state.record_game_completion(game_id)
    return _games_out(state)


@router.get("/relaxation/tracks", response_model=list[TrackOut])
async def list_tracks(category: str | None = Query(default=None, max_length=50)) -> list[TrackOut]:
    return [TrackOut(**t) for t in filter_tracks(category)]


@router.get("/counsellor/requests", response_model=CounsellorRequestListResponse)
async def list_counsellor_requests(state: AppState = Depends(get_app_state)) -> CounsellorRequestListResponse:
    rows = state.counsellor_requests
    return CounsellorRequestListResponse(
        urgent_count=sum(1 for r in rows if r["type"] == "urgent"),
        pending_count=sum(1 for r in rows if r["status"] == "pending"),
        items=[_request_out(r) for r in rows],
    )


@router.post("/counsellor/requests/{request_id}/accept", response_model=CounsellorRequestOut)
async def accept_counsellor_request(request_id: str, state: AppState = Depends(get_app_state)) -> CounsellorRequestOut:
    row = state.accept_counsellor_request(request_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Request not found")
    return _request_out(row)
