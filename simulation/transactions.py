"""
Roster transactions for the user squad: free-agent signings, releases, re-signings,
trades, lineup order and strategy.

Every function returns an ActionResult.  Refusals carry a title and message and
hand back the untouched input state.
"""
from __future__ import annotations

import copy
import logging
import math

from models import ActionResult, LeagueState
from models.constants import RESIGN_MARKUP, RESIGN_YEARS, STRATEGIES
from models.season import refuse
from simulation.economy import available_funds, bundle_value, signing_obligation, trade_accepted
from simulation.rivalry import STOLEN_TALENT_HEAT, ignite_rivalry

logger = logging.getLogger(__name__)

DYNASTY_SIGNING_CHEMISTRY = -10
DYNASTY_RELEASE_CHEMISTRY = -5
TRADE_CHEMISTRY = -10


def _shift_chemistry(team, delta: int) -> None:
    team.chemistry = max(0, min(100, team.chemistry + delta))


def sign_free_agent(state: LeagueState, player_id: str) -> ActionResult:
    """Sign a free agent for the prorated rest-of-season salary (less any Recruiter discount)."""
    team = state.player_team
    player = next((p for p in state.free_agents if p.id == player_id), None)
    if player is None:
        return refuse(state, "Unavailable", "That pilot is not a free agent.")
    cap = state.roster_cap
    if len(team.roster) >= cap:
        return refuse(state, "Roster Full", f"Roster limit is {cap}. Release a player to sign new talent.")
    obligation = signing_obligation(player, team, state.season.week)
    if available_funds(team, state.season.week) < obligation:
        return refuse(
            state,
            "Insufficient Funds",
            f"You need ${obligation}k in available funds to take on this contract obligation.",
        )

    new_state = copy.deepcopy(state)
    team = new_state.player_team
    player = next(p for p in new_state.free_agents if p.id == player_id)
    new_state.free_agents = [p for p in new_state.free_agents if p.id != player_id]
    if player.contract_years < 1:
        player.contract_years = 1
    team.roster.append(player)
    if new_state.season.mode == "dynasty":
        _shift_chemistry(team, DYNASTY_SIGNING_CHEMISTRY)

    former_id = player.previous_team_id
    if former_id and former_id != team.id:
        former = next((t for t in new_state.teams if t.id == former_id), None)
        if former is not None:
            team.rivalries = ignite_rivalry(
                team, former.id, former.name, "Stolen Talent", STOLEN_TALENT_HEAT, new_state.season.week,
            )
    new_state.post("@TransferBot", f"BREAKING: {team.name} has signed free agent {player.gamertag}.")
    return ActionResult(
        state=new_state,
        title="Sign Pilot",
        message=f"{player.gamertag} has joined the squad.",
        data={"playerId": player.id, "obligation": obligation},
    )


def release_player(state: LeagueState, player_id: str) -> ActionResult:
    team = state.player_team
    if team.find_player(player_id) is None:
        return refuse(state, "Unknown Pilot", "That pilot is not on your roster.")

    new_state = copy.deepcopy(state)
    team = new_state.player_team
    player = team.find_player(player_id)
    team.roster = [p for p in team.roster if p.id != player_id]
    player.previous_team_id = team.id
    new_state.free_agents.insert(0, player)
    if new_state.season.mode == "dynasty":
        _shift_chemistry(team, DYNASTY_RELEASE_CHEMISTRY)
    new_state.post("@TransferBot", f"{team.name} has released {player.gamertag} to free agency.")
    return ActionResult(
        state=new_state,
        title="Release Pilot",
        message=f"{player.gamertag} has been released.",
        data={"playerId": player.id},
    )


def resign_player(state: LeagueState, player_id: str) -> ActionResult:
    """Bring back a pilot whose contract expired at rollover: 1.3x salary on a 2-year deal.

    During the draft the pilot sits in the pool and can only be re-signed until another squad picks them.
    """
    team = state.player_team
    player = next((p for p in state.expiring_contracts if p.id == player_id), None)
    if player is None:
        return refuse(state, "Unavailable", "That pilot has no expiring contract.")
    in_draft = state.season.is_drafting and state.draft is not None
    if in_draft and all(p.id != player_id for p in state.draft.pool):
        return refuse(state, "Unavailable", "That pilot has already been drafted.")
    cap = state.roster_cap
    if len(team.roster) >= cap:
        return refuse(state, "Roster Full", f"Roster limit is {cap}. Release a player to re-sign this pilot.")
    new_salary = math.floor(player.salary * RESIGN_MARKUP)
    if available_funds(team, state.season.week) < new_salary:
        return refuse(
            state,
            "Insufficient Funds",
            f"You need ${new_salary}k to re-sign this player at the renegotiated rate.",
        )

    new_state = copy.deepcopy(state)
    team = new_state.player_team
    player = next(p for p in new_state.expiring_contracts if p.id == player_id)
    new_state.expiring_contracts = [p for p in new_state.expiring_contracts if p.id != player_id]
    if in_draft:
        new_state.draft.pool = [p for p in new_state.draft.pool if p.id != player_id]
    player.salary = new_salary
    player.contract_years = RESIGN_YEARS
    team.roster.append(player)
    return ActionResult(
        state=new_state,
        title="Re-sign Contract",
        message=f"{player.gamertag} re-signed for ${new_salary}k / season ({RESIGN_YEARS} years).",
        data={"playerId": player.id, "salary": new_salary},
    )


def swap_players(state: LeagueState, idx1: int, idx2: int) -> ActionResult:
    """Swap two roster slots. The first five slots are the starting lineup."""
    team = state.player_team
    size = len(team.roster)
    if not (0 <= idx1 < size and 0 <= idx2 < size):
        return refuse(state, "Invalid Slot", "Both slots must be on the roster.")
    new_state = copy.deepcopy(state)
    roster = new_state.player_team.roster
    roster[idx1], roster[idx2] = roster[idx2], roster[idx1]
    return ActionResult(state=new_state, title="Lineup Updated", message="Roster order changed.")


def set_strategy(state: LeagueState, strategy: str) -> ActionResult:
    if strategy not in STRATEGIES:
        return refuse(state, "Unknown Strategy", f"Strategy must be one of {', '.join(STRATEGIES)}.")
    new_state = copy.deepcopy(state)
    new_state.player_team.strategy = strategy
    return ActionResult(
        state=new_state,
        title="Strategy Set",
        message=f"{strategy}: {STRATEGIES[strategy]['desc']}",
    )


def propose_trade(
    state: LeagueState,
    target_team_id: str,
    offered_ids: list[str],
    requested_ids: list[str],
) -> ActionResult:
    """
    Offer user pilots for pilots on another squad.
    The other GM accepts only when the offered value is at least 110% of the requested value;
    a rejection is remembered as a trade refusal on their side.
    """
    user = state.player_team
    if target_team_id == user.id:
        return refuse(state, "Invalid Trade", "Pick another squad to trade with.")
    target = next((t for t in state.teams if t.id == target_team_id), None)
    if target is None:
        return refuse(state, "Invalid Trade", "That squad does not exist.")
    if not offered_ids or not requested_ids:
        return refuse(state, "Invalid Trade", "Both sides of the trade need at least one pilot.")
    if len(set(offered_ids)) != len(offered_ids) or len(set(requested_ids)) != len(requested_ids):
        return refuse(state, "Invalid Trade", "A pilot can only be listed once.")
    offered = [user.find_player(pid) for pid in offered_ids]
    requested = [target.find_player(pid) for pid in requested_ids]
    if any(p is None for p in offered) or any(p is None for p in requested):
        return refuse(state, "Invalid Trade", "Every pilot in the deal must be on the listed roster.")
    cap = state.roster_cap
    if len(user.roster) - len(offered) + len(requested) > cap or len(target.roster) - len(requested) + len(offered) > cap:
        return refuse(state, "Invalid Trade", f"The trade would push a roster past the limit of {cap}.")

    offered_value = bundle_value(offered)
    requested_value = bundle_value(requested)
    data = {"offeredValue": offered_value, "requestedValue": requested_value}
    new_state = copy.deepcopy(state)
    user = new_state.player_team
    target = new_state.team_by_id(target_team_id)

    if not trade_accepted(offered_value, requested_value):
        target.trade_refusals += 1
        logger.debug("%s rejected trade: offered %d vs requested %d", target.name, offered_value, requested_value)
        return ActionResult(
            state=new_state,
            ok=False,
            title="Trade Rejected",
            message="The opposing GM believes they are giving up too much value. Enhance your offer.",
            data=data,
        )

    outgoing = [p for p in user.roster if p.id in offered_ids]
    incoming = [p for p in target.roster if p.id in requested_ids]
    user.roster = [p for p in user.roster if p.id not in offered_ids] + incoming
    target.roster = [p for p in target.roster if p.id not in requested_ids] + outgoing
    _shift_chemistry(user, TRADE_CHEMISTRY)
    new_state.post(
        "@LeagueOps",
        f"BLOCKBUSTER TRADE: {user.name} and {target.name} have agreed to a player exchange "
        f"involving {len(outgoing) + len(incoming)} pilots.",
    )
    return ActionResult(
        state=new_state,
        title="Trade Completed",
        message="The players have been exchanged. Team chemistry has taken a hit due to roster churn.",
        data=data,
    )
