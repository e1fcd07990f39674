"""Remote-control endpoints used by phones on the venue network."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from volleyball_scoreboard.api.models import (
    ScoreRequest,
    ServeRequest,
    UndoRequest,
    match_response,
)

if TYPE_CHECKING:
    from volleyball_scoreboard.containers import AppContainer
    from volleyball_scoreboard.services.sessions import SessionService

router = APIRouter(prefix="/api/match/{session_id}", tags=["remote"])
panel_router = APIRouter(tags=["remote"])


def _sessions(request: Request) -> SessionService:
    container: AppContainer = request.app.state.container
    return container.session_service


@router.get("")
async def get_match(session_id: str, request: Request) -> dict[str, object]:
    """Return the current match and its derived status."""
    return match_response(_sessions(request).get_match(session_id))


@router.post("/score")
async def change_score(
    session_id: str, payload: ScoreRequest, request: Request
) -> dict[str, object]:
    """Add or remove points for a team."""
    match = _sessions(request).change_score(session_id, payload.team, payload.delta)
    return match_response(match)


@router.post("/serve")
async def change_serve(
    session_id: str, payload: ServeRequest, request: Request
) -> dict[str, object]:
    match = _sessions(request).change_serving_team(session_id, payload.team)
    return match_response(match)


@router.post("/set/start")
async def start_set(session_id: str, request: Request) -> dict[str, object]:
    return match_response(_sessions(request).start_set(session_id))


@router.post("/set")
async def finish_set(session_id: str, request: Request) -> dict[str, object]:
    """Finish the current set if the score allows it."""
    return match_response(_sessions(request).finish_set(session_id))


@router.post("/undo")
async def undo(
    session_id: str, payload: UndoRequest, request: Request
) -> dict[str, object]:
    """Restore the snapshot the client took before its last action."""
    match = _sessions(request).undo(session_id, payload.match.to_domain())
    return match_response(match)


@panel_router.get("/panel/{session_id}", response_class=HTMLResponse)
async def remote_panel(session_id: str, request: Request) -> HTMLResponse:
    """Minimal remote control page that polls the remote API."""
    _sessions(request).validate(session_id)
    return HTMLResponse(_PANEL_HTML.replace("__SESSION_ID__", session_id))


_PANEL_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Scoreboard Remote</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 1rem; }
      .teams { display: flex; gap: 1rem; }
      .team { flex: 1; text-align: center; padding: 1rem; border-radius: 8px; }
      .score { font-size: 3rem; font-weight: bold; }
      .flag { font-weight: bold; color: #c0392b; min-height: 1.5rem; }
      button { padding: 0.6rem 1rem; margin: 0.25rem; font-size: 1rem; }
      #error { color: #c0392b; }
    </style>
  </head>
  <body>
    <h1 id="set">Set</h1>
    <div class="teams">
      <div class="team" id="team-A">
        <div id="name-A"></div>
        <div class="score" id="score-A">0</div>
        <div id="serve-A"></div>
        <button onclick="score('A', 1)">+1</button>
        <button onclick="score('A', -1)">-1</button>
        <button onclick="serve('A')">Serve</button>
      </div>
      <div class="team" id="team-B">
        <div id="name-B"></div>
        <div class="score" id="score-B">0</div>
        <div id="serve-B"></div>
        <button onclick="score('B', 1)">+1</button>
        <button onclick="score('B', -1)">-1</button>
        <button onclick="serve('B')">Serve</button>
      </div>
    </div>
    <div class="flag" id="flag"></div>
    <div>
      <button id="start" onclick="post('/set/start')">Start set</button>
      <button id="finish" onclick="post('/set')">Finish set</button>
      <button id="undo" onclick="undo()">Undo</button>
    </div>
    <div id="error"></div>
    <script>
      const base = '/api/match/__SESSION_ID__';
      const history = [];
      let current = null;

      function render(data) {
        current = data.match;
        const set = data.match.currentSet;
        const status = data.status;
        document.getElementById('set').textContent =
          'Set ' + set.setNumber + ' (' + set.status + ')  ' +
          status.setsWonA + ' : ' + status.setsWonB;
        for (const side of ['A', 'B']) {
          const team = side === 'A' ? data.match.teamA : data.match.teamB;
          document.getElementById('name-' + side).textContent = team.name;
          document.getElementById('team-' + side).style.borderTop =
            '6px solid ' + team.color;
          document.getElementById('score-' + side).textContent =
            side === 'A' ? set.scoreA : set.scoreB;
          document.getElementById('serve-' + side).textContent =
            set.servingTeam === side ? 'serving' : '';
        }
        let flag = '';
        if (status.winner) {
          flag = 'Match won by ' + status.winner;
        } else if (status.matchball.isMatchball) {
          flag = 'Matchball ' + status.matchball.team;
        } else if (status.setball.isSetball) {
          flag = 'Setball ' + status.setball.team;
        }
        document.getElementById('flag').textContent = flag;
        document.getElementById('finish').disabled = !status.canFinishSet;
        document.getElementById('start').disabled =
          set.status !== 'pending' || status.winner !== null;
        document.getElementById('undo').disabled = history.length === 0;
      }

      async function request(path, body) {
        const res = await fetch(base + path, {
          method: body === undefined ? 'GET' : 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const data = await res.json();
        const error = document.getElementById('error');
        if (!data.success) {
          error.textContent = data.error;
          return null;
        }
        error.textContent = '';
        render(data);
        return data;
      }

      async function post(path, body) {
        const snapshot = current;
        const data = await request(path, body || {});
        if (data && snapshot) {
          history.push(snapshot);
          document.getElementById('undo').disabled = false;
        }
      }

      function score(team, delta) { post('/score', { team: team, delta: delta }); }
      function serve(team) { post('/serve', { team: team }); }

      async function undo() {
        const snapshot = history.pop();
        if (snapshot) {
          await request('/undo', { match: snapshot });
        }
      }

      request('');
      setInterval(() => request(''), 2000);
    </script>
  </body>
</html>
"""
