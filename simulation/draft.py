"""
Snake draft state machine.

The draft board lives on LeagueState.draft.  CPU squads always take the best
available pilot; the user picks by hand, via auto-draft, or when the pick clock
runs out.  When the pool or the order is exhausted the leftover pool becomes the
free-agent market and the season can start.
"""
from __future__ import annotations

import copy
import logging

from generation.generate import build_draft_order
from models import ActionResult, DraftPick, LeagueState, Player
from models.constants import DRAFT_PICK_CLOCK
from models.ratings import player_overall
from models.season import refuse

logger = logging.getLogger(__name__)

__all__ = [
    "build_draft_order",
    "run_draft_pick",
    "run_cpu_picks",
    "set_auto_draft",
    "tick_draft_clock",
    "end_draft_early",
]


def _not_drafting(state: LeagueState) -> ActionResult | None:
    if not state.season.is_drafting or state.draft is None:
        return refuse(state, "No Draft", "There is no draft in progress.")
    return None


def _skip_full_rosters(state: LeagueState) -> None:
    """Teams already at the roster cap pass on their pick."""
    draft = state.draft
    cap = state.roster_cap
    while draft.current_pick < len(draft.order):
        team = state.team_by_id(draft.order[draft.current_pick])
        if len(team.roster) < cap:
            return
        logger.debug("%s is at the roster cap, passing pick %d", team.name, draft.current_pick + 1)
        draft.current_pick += 1


def _round_for_pick(state: LeagueState, pick_idx: int) -> int:
    return pick_idx // len(state.teams) + 1


def _take(state: LeagueState, team_id: str, player: Player) -> DraftPick:
    draft = state.draft
    team = state.team_by_id(team_id)
    draft.pool = [p for p in draft.pool if p.id != player.id]
    team.roster.append(player)
    entry = DraftPick(
        round=_round_for_pick(state, draft.current_pick),
        team=team.name,
        team_id=team.id,
        player=player.gamertag,
        overall=player_overall(player),
    )
    draft.log.insert(0, entry)
    draft.current_pick += 1
    draft.time_left = DRAFT_PICK_CLOCK
    return entry


def _finish_if_done(state: LeagueState) -> bool:
    draft = state.draft
    _skip_full_rosters(state)
    if not draft.is_complete:
        return False
    state.free_agents = state.free_agents + list(draft.pool)
    draft.pool = []
    # unsigned expiring pilots were either drafted or are free agents now
    state.expiring_contracts = []
    draft.current_pick = len(draft.order)
    state.season.is_drafting = False
    state.view = "dashboard"
    logger.info(
        "Draft complete: %d picks made, %d pilots enter free agency",
        len(draft.log), len(state.free_agents),
    )
    return True


def _cpu_loop(state: LeagueState) -> list[DraftPick]:
    """Best-available picks until the user is on the clock (unless auto-drafting) or the draft ends."""
    draft = state.draft
    made: list[DraftPick] = []
    while not _finish_if_done(state):
        team_id = draft.on_the_clock
        if team_id == state.player_team_id and not draft.auto_draft:
            break
        made.append(_take(state, team_id, draft.pool[0]))
    return made


def _result(state: LeagueState, made: list[DraftPick], title: str, message: str) -> ActionResult:
    data = {
        "picks": [p.to_dict() for p in made],
        "complete": not state.season.is_drafting,
    }
    return ActionResult(state=state, title=title, message=message, data=data)


def run_draft_pick(state: LeagueState, player_id: str | None = None) -> ActionResult:
    """The team on the clock takes ``player_id`` (or the top of the pool)."""
    refusal = _not_drafting(state)
    if refusal:
        return refusal
    new_state = copy.deepcopy(state)
    if _finish_if_done(new_state):
        return _result(new_state, [], "Draft Complete", "The draft has concluded.")
    draft = new_state.draft
    team_id = draft.on_the_clock
    if player_id is None:
        player = draft.pool[0]
    else:
        if team_id != new_state.player_team_id:
            return refuse(state, "Not Your Pick", "Wait until your squad is on the clock.")
        player = next((p for p in draft.pool if p.id == player_id), None)
        if player is None:
            return refuse(state, "Unavailable", "That pilot is not in the draft pool.")
    entry = _take(new_state, team_id, player)
    _finish_if_done(new_state)
    return _result(new_state, [entry], "Pick In", f"{entry.team} select {entry.player} ({entry.overall} OVR).")


def run_cpu_picks(state: LeagueState) -> ActionResult:
    refusal = _not_drafting(state)
    if refusal:
        return refusal
    new_state = copy.deepcopy(state)
    made = _cpu_loop(new_state)
    if not new_state.season.is_drafting:
        return _result(new_state, made, "Draft Complete", "The draft has concluded.")
    return _result(new_state, made, "On The Clock", "Your squad is on the clock.")


def set_auto_draft(state: LeagueState, enabled: bool) -> ActionResult:
    """Toggle auto-draft. Enabling it runs the rest of the draft best-available."""
    refusal = _not_drafting(state)
    if refusal:
        return refusal
    new_state = copy.deepcopy(state)
    new_state.draft.auto_draft = enabled
    made = _cpu_loop(new_state) if enabled else []
    message = "Auto-draft enabled." if enabled else "Auto-draft disabled."
    return _result(new_state, made, "Auto Draft", message)


def tick_draft_clock(state: LeagueState, elapsed: int) -> ActionResult:
    """Run the pick clock down. At zero, the side on the clock takes the top of the pool."""
    refusal = _not_drafting(state)
    if refusal:
        return refusal
    if elapsed < 0:
        raise ValueError(f"elapsed must be >= 0, got {elapsed}")
    new_state = copy.deepcopy(state)
    if _finish_if_done(new_state):
        return _result(new_state, [], "Draft Complete", "The draft has concluded.")
    draft = new_state.draft
    draft.time_left -= elapsed
    if draft.time_left > 0:
        return _result(new_state, [], "Clock Running", f"{draft.time_left} remaining on the clock.")
    made = [_take(new_state, draft.on_the_clock, draft.pool[0])]
    made.extend(_cpu_loop(new_state))
    return _result(new_state, made, "Time Expired", "The best available pilot was selected automatically.")


def end_draft_early(state: LeagueState) -> ActionResult:
    """Simulate the remaining rounds. CPU squads keep picking; the user forfeits every remaining pick."""
    refusal = _not_drafting(state)
    if refusal:
        return refusal
    new_state = copy.deepcopy(state)
    draft = new_state.draft
    draft.auto_draft = True
    made: list[DraftPick] = []
    forfeited = 0
    while not _finish_if_done(new_state):
        team_id = draft.on_the_clock
        if team_id == new_state.player_team_id:
            draft.current_pick += 1
            forfeited += 1
            continue
        made.append(_take(new_state, team_id, draft.pool[0]))
    result = _result(new_state, made, "Draft Complete", f"Remaining rounds simulated; {forfeited} picks forfeited.")
    result.data["forfeited"] = forfeited
    return result
