"""
Trench Wars League Manager — Flask app.
JSON API over the league transitions.  Each request loads the saved league,
applies one transition and saves the result.
"""
import logging
import random
import threading
from typing import Any, Callable

from flask import Flask, jsonify, request

import config
from db import SnapshotError, league_from_snapshot, load_game, save_game, snapshot_from_league
from generation import create_league
from models import ActionResult, LeagueState, MatchResult
from models.constants import SEASON_MODES
from models.ratings import player_overall, team_overall
from narrative import get_match_summary, get_scouting_report
from simulation import (
    advance_week,
    end_draft_early,
    hire_staff,
    promote_staff,
    propose_trade,
    release_player,
    release_staff,
    resign_player,
    run_cpu_picks,
    run_draft_pick,
    set_auto_draft,
    set_strategy,
    sign_free_agent,
    standings,
    start_next_season,
    swap_players,
    tick_draft_clock,
    train,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

# Serialize mutating requests so spam-clicking cannot advance the league twice from the same save
_sim_lock = threading.Lock()


class NoSave(Exception):
    pass


def _rng() -> random.Random:
    """Tests may pin a seeded generator in app.config["RNG"]."""
    return app.config.get("RNG") or random.Random()


def _body() -> dict[str, Any]:
    return request.get_json(silent=True) or {}


def _load() -> LeagueState:
    state = load_game()
    if state is None:
        raise NoSave()
    return state


def _respond(result: ActionResult, **extra: Any):
    payload = result.to_dict()
    payload["state"] = result.state.to_dict()
    payload.update(extra)
    return jsonify(payload)


def _continue_draft(result: ActionResult) -> ActionResult:
    """After a user action during the draft, let CPU squads pick up to the user's next turn."""
    if not result.ok or not result.state.season.is_drafting:
        return result
    follow = run_cpu_picks(result.state)
    result.state = follow.state
    result.data.setdefault("picks", [])
    result.data["picks"] = result.data["picks"] + follow.data.get("picks", [])
    result.data["complete"] = follow.data.get("complete", False)
    return result


def _run(transition: Callable[[LeagueState], ActionResult], draft_follow_up: bool = False) -> ActionResult:
    with _sim_lock:
        state = _load()
        result = transition(state)
        if draft_follow_up:
            result = _continue_draft(result)
        if result.state is not state:
            save_game(result.state)
        return result


@app.errorhandler(NoSave)
def _no_save(_exc):
    return jsonify({"error": "No saved league. Start a new career first."}), 404


@app.errorhandler(SnapshotError)
def _bad_snapshot(exc):
    logger.warning("Rejected snapshot: %s", exc)
    return jsonify({"error": "The save file is corrupted and could not be loaded.", "detail": str(exc)}), 400


@app.errorhandler(ValueError)
def _bad_request(exc):
    return jsonify({"error": str(exc)}), 400


@app.route("/api/state")
def api_state():
    state = _load()
    return jsonify({"state": state.to_dict()})


@app.route("/api/new", methods=["POST"])
def api_new_league():
    data = _body()
    name = str(data.get("name") or "").strip()
    if not name:
        return jsonify({"error": "Missing squad name"}), 400
    mode = data.get("mode", "standard")
    if mode not in SEASON_MODES:
        return jsonify({"error": f"mode must be one of {', '.join(SEASON_MODES)}"}), 400
    with _sim_lock:
        previous = load_game()
        championships = previous.career_championships if previous is not None else 0
        state = create_league(
            name,
            _rng(),
            title=str(data.get("title") or "Owner"),
            mode=mode,
            colors=data.get("colors"),
            logo_config=data.get("logoConfig"),
            career_championships=championships,
        )
        result = run_cpu_picks(state)
        save_game(result.state)
    return _respond(result)


@app.route("/api/import", methods=["POST"])
def api_import():
    """Replace the save with an uploaded snapshot. A malformed snapshot leaves the stored save untouched."""
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({"error": "Expected a JSON snapshot"}), 400
    state = league_from_snapshot(data)
    with _sim_lock:
        save_game(state)
    return jsonify({"ok": True, "state": state.to_dict()})


@app.route("/api/export")
def api_export():
    return jsonify(snapshot_from_league(_load()))


@app.route("/api/standings")
def api_standings():
    state = _load()
    rows = [
        {
            "id": t.id,
            "name": t.name,
            "wins": t.wins,
            "losses": t.losses,
            "killDeathDiff": t.kill_death_diff,
            "overall": team_overall(t),
        }
        for t in standings(state.teams)
    ]
    return jsonify({"standings": rows})


# --- Draft ---

@app.route("/api/draft/pick", methods=["POST"])
def api_draft_pick():
    player_id = _body().get("playerId")
    return _respond(_run(lambda s: run_draft_pick(s, player_id), draft_follow_up=True))


@app.route("/api/draft/auto", methods=["POST"])
def api_draft_auto():
    enabled = bool(_body().get("enabled", True))
    return _respond(_run(lambda s: set_auto_draft(s, enabled)))


@app.route("/api/draft/tick", methods=["POST"])
def api_draft_tick():
    elapsed = int(_body().get("elapsed", 1))
    return _respond(_run(lambda s: tick_draft_clock(s, elapsed)))


@app.route("/api/draft/end", methods=["POST"])
def api_draft_end():
    return _respond(_run(end_draft_early))


# --- Season ---

@app.route("/api/season/advance", methods=["POST"])
def api_advance():
    """Advance one step. The recap is requested only after the new state is saved."""
    result = _run(lambda s: advance_week(s, _rng()))
    recap = None
    user_match = result.data.get("userMatch") if result.ok else None
    if user_match:
        match = MatchResult.from_dict(user_match["result"])
        home = result.state.team_by_id(match.home_id)
        away = result.state.team_by_id(match.away_id)
        recap = get_match_summary(match, home, away)
    return _respond(result, recap=recap)


@app.route("/api/season/next", methods=["POST"])
def api_next_season():
    return _respond(_run(lambda s: start_next_season(s, _rng()), draft_follow_up=True))


# --- Front office ---

@app.route("/api/train", methods=["POST"])
def api_train():
    stat = _body().get("stat")
    if stat is None:
        return jsonify({"error": "Missing stat"}), 400
    return _respond(_run(lambda s: train(s, stat, _rng())))


@app.route("/api/staff/hire", methods=["POST"])
def api_staff_hire():
    data = _body()
    role, name = data.get("role"), data.get("name")
    if not role or not name:
        return jsonify({"error": "Missing role or name"}), 400
    tier = int(data.get("tier", 0))
    return _respond(_run(lambda s: hire_staff(s, role, tier, name)))


@app.route("/api/staff/promote", methods=["POST"])
def api_staff_promote():
    role = _body().get("role")
    if not role:
        return jsonify({"error": "Missing role"}), 400
    return _respond(_run(lambda s: promote_staff(s, role)))


@app.route("/api/staff/release", methods=["POST"])
def api_staff_release():
    role = _body().get("role")
    if not role:
        return jsonify({"error": "Missing role"}), 400
    return _respond(_run(lambda s: release_staff(s, role)))


@app.route("/api/roster/sign", methods=["POST"])
def api_sign():
    player_id = _body().get("playerId")
    if not player_id:
        return jsonify({"error": "Missing playerId"}), 400
    return _respond(_run(lambda s: sign_free_agent(s, player_id)))


@app.route("/api/roster/release", methods=["POST"])
def api_release():
    player_id = _body().get("playerId")
    if not player_id:
        return jsonify({"error": "Missing playerId"}), 400
    return _respond(_run(lambda s: release_player(s, player_id)))


@app.route("/api/roster/resign", methods=["POST"])
def api_resign():
    player_id = _body().get("playerId")
    if not player_id:
        return jsonify({"error": "Missing playerId"}), 400
    return _respond(_run(lambda s: resign_player(s, player_id)))


@app.route("/api/roster/swap", methods=["POST"])
def api_swap():
    data = _body()
    if "from" not in data or "to" not in data:
        return jsonify({"error": "Missing from/to slots"}), 400
    idx1, idx2 = int(data["from"]), int(data["to"])
    return _respond(_run(lambda s: swap_players(s, idx1, idx2)))


@app.route("/api/strategy", methods=["POST"])
def api_strategy():
    strategy = _body().get("strategy")
    if not strategy:
        return jsonify({"error": "Missing strategy"}), 400
    return _respond(_run(lambda s: set_strategy(s, strategy)))


@app.route("/api/trade", methods=["POST"])
def api_trade():
    data = _body()
    target = data.get("targetTeamId")
    if not target:
        return jsonify({"error": "Missing targetTeamId"}), 400
    offered = list(data.get("offered") or [])
    requested = list(data.get("requested") or [])
    return _respond(_run(lambda s: propose_trade(s, target, offered, requested)))


@app.route("/api/scouting/<player_id>")
def api_scouting(player_id: str):
    state = _load()
    pools = [t.roster for t in state.teams] + [state.free_agents, state.expiring_contracts]
    if state.draft is not None:
        pools.append(state.draft.pool)
    player = next((p for pool in pools for p in pool if p.id == player_id), None)
    if player is None:
        return jsonify({"error": "Player not found"}), 404
    return jsonify({
        "playerId": player.id,
        "overall": player_overall(player),
        "development": player.development(),
        "report": get_scouting_report(player),
    })


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(debug=True, port=5000)
