"""Operator control endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from volleyball_scoreboard.api.models import (
    LoadMatchRequest,
    ScoreRequest,
    ServeRequest,
    SetCorrectionRequest,
    match_response,
)
from volleyball_scoreboard.domain import scoring
from volleyball_scoreboard.domain.match import new_match

if TYPE_CHECKING:
    from volleyball_scoreboard.containers import AppContainer

router = APIRouter(prefix="/operator", tags=["operator"])


def _get_operator_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.operator_token


async def require_operator(
    x_operator_token: str | None = Header(default=None),
    operator_token: str = Depends(_get_operator_token),
) -> None:
    """Ensure requests include a valid operator token."""
    if not x_operator_token or x_operator_token != operator_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/health", dependencies=[Depends(require_operator)])
async def operator_health(request: Request) -> dict[str, object]:
    """Operator health check with overlay and session state."""
    container = _container(request)
    return {
        "status": "ok",
        "match_loaded": container.coordinator.current is not None,
        "active_sessions": container.session_service.active_count(),
        "overlay_enabled": container.broadcast_service.enabled,
    }


@router.get("/match", dependencies=[Depends(require_operator)])
async def get_match(request: Request) -> dict[str, object]:
    return match_response(_container(request).coordinator.require())


@router.put("/match", dependencies=[Depends(require_operator)])
async def load_match(
    payload: LoadMatchRequest, request: Request
) -> dict[str, object]:
    """Replace the current match with one supplied by the operator."""
    match = _container(request).coordinator.replace(payload.to_domain())
    return match_response(match)


@router.post("/match/new", dependencies=[Depends(require_operator)])
async def create_match(request: Request) -> dict[str, object]:
    """Start a blank match."""
    coordinator = _container(request).coordinator
    match = coordinator.replace(new_match(coordinator.clock()))
    return match_response(match)


@router.post("/match/score", dependencies=[Depends(require_operator)])
async def change_score(payload: ScoreRequest, request: Request) -> dict[str, object]:
    match = _container(request).coordinator.apply(
        lambda current, _now: scoring.change_score(
            current, payload.team, payload.delta
        )
    )
    return match_response(match)


@router.post("/match/serve", dependencies=[Depends(require_operator)])
async def change_serve(payload: ServeRequest, request: Request) -> dict[str, object]:
    match = _container(request).coordinator.apply(
        lambda current, _now: scoring.change_serving_team(current, payload.team)
    )
    return match_response(match)


@router.post("/match/start", dependencies=[Depends(require_operator)])
async def start_set(request: Request) -> dict[str, object]:
    return match_response(_container(request).coordinator.apply(scoring.start_set))


@router.post("/match/finish", dependencies=[Depends(require_operator)])
async def finish_set(request: Request) -> dict[str, object]:
    return match_response(_container(request).coordinator.apply(scoring.finish_set))


@router.post("/match/reopen", dependencies=[Depends(require_operator)])
async def reopen_set(request: Request) -> dict[str, object]:
    """Put the last completed set back into play."""
    match = _container(request).coordinator.apply(
        lambda current, _now: scoring.reopen_last_set(current)
    )
    return match_response(match)


@router.post("/match/sets/{set_number}", dependencies=[Depends(require_operator)])
async def correct_set(
    set_number: int, payload: SetCorrectionRequest, request: Request
) -> dict[str, object]:
    """Correct the score, and optionally the times, of a set."""
    match = _container(request).coordinator.apply(
        lambda current, _now: scoring.correct_set(
            current,
            set_number,
            payload.score_a,
            payload.score_b,
            start_time=payload.start_time,
            end_time=payload.end_time,
        )
    )
    return match_response(match)


@router.post("/sessions", dependencies=[Depends(require_operator)])
async def create_session(request: Request) -> dict[str, object]:
    """Issue a remote-control session and return its links."""
    session = _container(request).session_service.create_session()
    base_url = str(request.base_url).rstrip("/")
    return {
        "success": True,
        "session_id": session.id,
        "expires_at": session.expires_at.isoformat(),
        "panel_url": f"{base_url}/panel/{session.id}",
        "api_url": f"{base_url}/api/match/{session.id}",
    }


@router.delete("/sessions/{session_id}", dependencies=[Depends(require_operator)])
async def revoke_session(session_id: str, request: Request) -> dict[str, object]:
    if not _container(request).session_service.revoke(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"success": True}


@router.post("/overlay/resync", dependencies=[Depends(require_operator)])
async def resync_overlay(request: Request) -> dict[str, object]:
    """Resend every overlay field for the current match."""
    container = _container(request)
    report = await container.broadcast_service.resync(container.coordinator.require())
    return {
        "success": report.ok,
        "sent": len(report.sent),
        "failed": len(report.failed),
    }
