"""
League snapshot (de)serialization with forward-compatible loading.

Older saves may lack fields added later (training counts, chemistry, rivalries,
staff, trade refusals, season-start stats) or use retired role names.  Loading
backfills those with neutral defaults; anything structurally wrong raises
SnapshotError and nothing is applied.
"""
import json
import logging
from typing import Any

from models import LeagueState
from models.constants import ROLES, ROLE_MIGRATIONS, STRATEGIES, VIEWS

logger = logging.getLogger(__name__)

# camelCase view names written by the browser build of the game
_VIEW_ALIASES = {
    "seasonSummary": "season_summary",
    "gameOver": "game_over",
}


class SnapshotError(ValueError):
    """The snapshot cannot be turned into a league."""


def _migrate_player(raw: dict[str, Any]) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise SnapshotError(f"Player entry must be an object, got {type(raw).__name__}")
    p = dict(raw)
    role = p.get("role")
    if not isinstance(role, str):
        raise SnapshotError(f"Role must be a string for pilot {p.get('gamertag')!r}")
    role = ROLE_MIGRATIONS.get(role, role)
    if role not in ROLES:
        raise SnapshotError(f"Unknown role {p.get('role')!r} for pilot {p.get('gamertag')!r}")
    p["role"] = role
    if not p.get("originalStats"):
        p["originalStats"] = {"aim": p.get("aim", 0), "iq": p.get("iq", 0)}
    return p


def _migrate_players(raw: Any) -> list[dict[str, Any]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise SnapshotError("Player lists must be arrays")
    return [_migrate_player(p) for p in raw]


def _migrate_team(raw: dict[str, Any]) -> dict[str, Any]:
    if not isinstance(raw, dict) or "id" not in raw:
        raise SnapshotError("Every team needs an id")
    t = dict(raw)
    t["roster"] = _migrate_players(t.get("roster"))
    raw_counts = t.get("trainingCounts") or {}
    if not isinstance(raw_counts, dict):
        raise SnapshotError(f"trainingCounts must be an object for team {t['id']!r}")
    counts = {"aim": 0, "iq": 0, "teamBuilding": 0}
    counts.update(raw_counts)
    t["trainingCounts"] = counts
    if t.get("chemistry") is None:
        t["chemistry"] = 50
    t["rivalries"] = t.get("rivalries") or []
    t["staff"] = t.get("staff") or {}
    t["tradeRefusals"] = t.get("tradeRefusals") or 0
    t["wins"] = t.get("wins") or 0
    t["losses"] = t.get("losses") or 0
    if t.get("strategy") not in STRATEGIES:
        t["strategy"] = "Rush"
    return t


def _migrate(data: dict[str, Any]) -> dict[str, Any]:
    teams = data.get("teams")
    if not isinstance(teams, list) or not teams:
        raise SnapshotError("Snapshot has no teams")
    out = dict(data)
    out["teams"] = [_migrate_team(t) for t in teams]
    out["freeAgents"] = _migrate_players(data.get("freeAgents"))
    out["expiringContracts"] = _migrate_players(data.get("expiringContracts"))
    if data.get("draft"):
        if not isinstance(data["draft"], dict):
            raise SnapshotError("draft must be an object")
        draft = dict(data["draft"])
        draft["pool"] = _migrate_players(draft.get("pool"))
        out["draft"] = draft
    out["season"] = data.get("season") or {
        "week": 1, "year": 2026, "season": 1, "isDrafting": True, "mode": "standard",
    }
    view = data.get("view")
    if view is not None and not isinstance(view, str):
        raise SnapshotError("view must be a string")
    view = _VIEW_ALIASES.get(view, view)
    out["view"] = view if view in VIEWS else "dashboard"

    player_team_id = data.get("playerTeamId")
    if not player_team_id or player_team_id not in {t["id"] for t in out["teams"]}:
        raise SnapshotError(f"playerTeamId {player_team_id!r} does not match any team")
    return out


def league_from_snapshot(snapshot: str | bytes | dict[str, Any]) -> LeagueState:
    """Parse a snapshot (JSON text or an already-decoded dict) into a LeagueState."""
    if isinstance(snapshot, (str, bytes)):
        try:
            snapshot = json.loads(snapshot)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(snapshot, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    try:
        state = LeagueState.from_dict(_migrate(snapshot))
    except SnapshotError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SnapshotError(f"Malformed snapshot: {e}") from e
    logger.debug("Loaded snapshot: season %d week %d", state.season.season, state.season.week)
    return state


def snapshot_from_league(state: LeagueState) -> dict[str, Any]:
    return state.to_dict()


def dumps(state: LeagueState) -> str:
    return json.dumps(snapshot_from_league(state), separators=(",", ":"))
