"""
Season rollover for the Trench Wars league.

Runs once the playoffs are complete: resets or carries over every squad depending
on the season mode, then opens the next draft (new schedule, new pool, new snake order).

Standard mode wipes the slate; dynasty mode ages contracts, carries part of the
budget and half of the chemistry above or below neutral.  Pilots whose contracts
run out go back into the draft pool on a fresh deal; the user may re-sign theirs
while they are still undrafted.
"""
from __future__ import annotations

import copy
import logging
import random

from models import ActionResult, DraftState, LeagueState, Team
from models.constants import (
    DEFAULT_CHEMISTRY,
    DYNASTY_BUDGET_CARRYOVER_CAP,
    STARTING_BUDGET,
)
from models.player import Player
from models.season import refuse
from models.team import empty_training_counts
from models.ratings import player_overall
from generation.generate import build_draft_order, contract_years_for_salary, generate_draft_pool
from simulation.schedule import generate_season_schedule

logger = logging.getLogger(__name__)


def _zero_season_stats(team: Team) -> None:
    team.wins = 0
    team.losses = 0
    team.kills = 0
    team.deaths = 0
    team.training_counts = empty_training_counts()
    team.trade_refusals = 0


def _reset_standard(team: Team) -> None:
    """Fresh start: empty roster, starting budget, no staff, neutral chemistry, no rivalries."""
    team.roster = []
    team.budget = STARTING_BUDGET
    team.staff = {}
    team.chemistry = DEFAULT_CHEMISTRY
    team.rivalries = []
    _zero_season_stats(team)


def _carry_over_dynasty(team: Team) -> list[Player]:
    """Age contracts by a year and return the pilots whose deals ran out."""
    kept: list[Player] = []
    expired: list[Player] = []
    for p in team.roster:
        p.contract_years -= 1
        p.original_stats = {"aim": p.aim, "iq": p.iq}
        (kept if p.contract_years > 0 else expired).append(p)
    team.roster = kept
    team.chemistry = (team.chemistry + DEFAULT_CHEMISTRY) // 2
    team.budget = STARTING_BUDGET + min(team.budget, DYNASTY_BUDGET_CARRYOVER_CAP)
    _zero_season_stats(team)
    return expired


def start_next_season(state: LeagueState, rng: random.Random) -> ActionResult:
    """Roll the league into the next season and open its draft."""
    if state.view == "game_over":
        return refuse(state, "Game Over", "This career has ended.")
    if state.season.playoff_stage != "complete":
        return refuse(state, "Season In Progress", "The current season has not finished yet.")

    new_state = copy.deepcopy(state)
    season = new_state.season
    expiring: list[Player] = []
    returning: list[Player] = []
    for team in new_state.teams:
        if season.mode == "standard":
            _reset_standard(team)
            continue
        for p in _carry_over_dynasty(team):
            p.previous_team_id = team.id
            p.contract_years = contract_years_for_salary(p.salary, rng)
            returning.append(p)
            if team.id == new_state.player_team_id:
                expiring.append(copy.deepcopy(p))

    season.season += 1
    season.year += 1
    season.week = 1
    season.is_drafting = True
    season.playoff_stage = None
    season.playoff_matches = None

    team_ids = [t.id for t in new_state.teams]
    new_state.schedule = generate_season_schedule(team_ids)
    pool = generate_draft_pool(rng) + returning
    pool.sort(key=player_overall, reverse=True)
    new_state.draft = DraftState(pool=pool, order=build_draft_order(team_ids, rng))
    new_state.free_agents = []
    new_state.expiring_contracts = expiring
    new_state.view = "draft"

    logger.info(
        "Rolled over to season %d (%d, %s mode); %d expired contracts back in the draft pool",
        season.season, season.year, season.mode, len(returning),
    )
    new_state.post("TWDT_Insider", f"Season {season.season} is here. The draft board is open. #TrenchWars")
    return ActionResult(
        state=new_state,
        title=f"Season {season.season}",
        message="A new season begins with the draft.",
        data={"expiringContracts": [p.to_dict() for p in expiring]},
    )
