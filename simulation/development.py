"""
Weekly training for the user squad.
Each session costs more than the last (3, 6, 12), succeeds less often (100/66/33 %),
and moves three random trainees' aim or iq up on success or down on failure.
Team building is a once-a-week session that always raises chemistry.
"""
from __future__ import annotations

import copy
import random
from typing import Any

from models import ActionResult, LeagueState
from models.constants import (
    TEAM_BUILDING_PER_WEEK,
    TOTAL_SEASON_WEEKS,
    TRAINEES_PER_SESSION,
    TRAINING_BASE_COST,
    TRAINING_SESSIONS_PER_WEEK,
    TRAINING_SUCCESS_RATES,
)
from models.player import clamp_stat
from models.season import refuse
from simulation.economy import available_funds

TRAINING_STATS = ("aim", "iq", "chem")

# stat -> training_counts key
_COUNT_KEYS = {"aim": "aim", "iq": "iq", "chem": "team_building"}


def session_cost(sessions_used: int) -> int:
    return TRAINING_BASE_COST * 2 ** sessions_used


def success_rate(stat: str, sessions_used: int) -> int:
    if stat == "chem":
        return 100
    if sessions_used < len(TRAINING_SUCCESS_RATES):
        return TRAINING_SUCCESS_RATES[sessions_used]
    return 0


def train(state: LeagueState, stat: str, rng: random.Random) -> ActionResult:
    """Run one training session for the user squad. stat is "aim", "iq" or "chem" (team building)."""
    if stat not in TRAINING_STATS:
        raise ValueError(f"stat must be one of {TRAINING_STATS}, got {stat!r}")
    team = state.player_team
    if team is None:
        raise KeyError(f"Unknown team id {state.player_team_id!r}")

    season = state.season
    if season.is_drafting:
        return refuse(state, "Draft In Progress", "Training opens once the draft is over.")
    if season.week > TOTAL_SEASON_WEEKS or season.playoff_stage:
        return refuse(
            state,
            "Personnel Vacation",
            "The training facility is closed for the post-season.",
        )
    used = sum(team.training_counts.values())
    if used >= TRAINING_SESSIONS_PER_WEEK:
        return refuse(
            state,
            "At Capacity",
            f"The squad has reached the limit of {TRAINING_SESSIONS_PER_WEEK} training sessions for this match week.",
        )
    if stat == "chem" and team.training_counts.get("team_building", 0) >= TEAM_BUILDING_PER_WEEK:
        return refuse(state, "Session Limit", "Team Building exercises are limited to once per week.")
    cost = session_cost(used)
    if available_funds(team, season.week) < cost:
        return refuse(state, "Insufficient Funds", f"You need ${cost}k in available budget to fund this training session.")

    new_state = copy.deepcopy(state)
    team = new_state.player_team
    rate = success_rate(stat, used)
    success = stat == "chem" or rng.random() * 100 < rate
    changes: list[dict[str, Any]] = []

    if stat == "chem":
        chem_delta = rng.randint(10, 15)
        changes.append({"pilot": "Team Chemistry", "delta": chem_delta})
    else:
        chem_delta = 2 if success else -5
        trainees = rng.sample(team.roster, min(TRAINEES_PER_SESSION, len(team.roster)))
        for p in trainees:
            delta = rng.randint(1, 3) if success else -rng.randint(1, 2)
            setattr(p, stat, clamp_stat(getattr(p, stat) + delta))
            changes.append({"pilot": p.gamertag, "delta": delta})

    team.chemistry = max(0, min(100, team.chemistry + chem_delta))
    team.budget -= cost
    key = _COUNT_KEYS[stat]
    team.training_counts[key] = team.training_counts.get(key, 0) + 1

    title = "Team Building" if stat == "chem" else f"{stat.upper()} Training"
    message = "Session successful." if success else "Session failed; the squad is frustrated."
    return ActionResult(
        state=new_state,
        title=title,
        message=message,
        data={"success": success, "stat": stat, "cost": cost, "rate": rate, "changes": changes, "chemistryDelta": chem_delta},
    )
