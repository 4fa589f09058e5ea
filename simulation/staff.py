"""
Front-office staff: hire, promote, release.
Bonuses come from the STAFF_BONUSES table (multipliers for Head Coach, Strategist and
Community Manager; discount fractions for Recruiter and Accountant).
"""
from __future__ import annotations

import copy

from models import ActionResult, LeagueState, StaffMember
from models.constants import (
    STAFF_BONUSES,
    STAFF_HIRE_COSTS,
    STAFF_PROMOTION_COSTS,
    STAFF_RELEASE_REFUNDS,
    STAFF_ROLES,
    STAFF_TIERS,
)
from models.season import refuse
from simulation.economy import available_funds


def _check_role(role: str) -> None:
    if role not in STAFF_ROLES:
        raise ValueError(f"role must be one of {STAFF_ROLES}, got {role!r}")


def staff_bonus(role: str, tier: str) -> float:
    return STAFF_BONUSES[role][STAFF_TIERS.index(tier)]


def hire_staff(state: LeagueState, role: str, tier_idx: int, name: str) -> ActionResult:
    """Hire at Bronze, Silver or Gold (tier_idx 0-2). Prismatic is reachable only by promotion."""
    _check_role(role)
    if not 0 <= tier_idx < len(STAFF_HIRE_COSTS):
        raise ValueError(f"tier_idx must be 0-{len(STAFF_HIRE_COSTS) - 1}, got {tier_idx}")
    team = state.player_team
    cost = STAFF_HIRE_COSTS[tier_idx]
    if available_funds(team, state.season.week) < cost:
        return refuse(state, "Funds Required", f"Hiring {name} costs ${cost}k upfront.")

    new_state = copy.deepcopy(state)
    team = new_state.player_team
    tier = STAFF_TIERS[tier_idx]
    hired = StaffMember(name=name, tier=tier, bonus_val=staff_bonus(role, tier))
    team.staff[role] = hired
    team.budget -= cost
    return ActionResult(
        state=new_state,
        title="Staff Hired",
        message=f"{name} joins as {tier} {role}.",
        data={"role": role, "staff": hired.to_dict(), "cost": cost},
    )


def promote_staff(state: LeagueState, role: str) -> ActionResult:
    _check_role(role)
    team = state.player_team
    current = team.staff_member(role)
    if current is None:
        return refuse(state, "No Staff", f"No {role} is on staff.")
    tier_idx = STAFF_TIERS.index(current.tier)
    if tier_idx + 1 >= len(STAFF_TIERS):
        return refuse(state, "Max Tier", f"{current.name} is already {current.tier}.")
    next_tier = STAFF_TIERS[tier_idx + 1]
    cost = STAFF_PROMOTION_COSTS[next_tier]
    if available_funds(team, state.season.week) < cost:
        return refuse(state, "Insufficient Funds", f"Promotion to {next_tier} requires ${cost}k.")

    new_state = copy.deepcopy(state)
    team = new_state.player_team
    promoted = StaffMember(name=current.name, tier=next_tier, bonus_val=staff_bonus(role, next_tier))
    team.staff[role] = promoted
    team.budget -= cost
    return ActionResult(
        state=new_state,
        title="Promote Staff",
        message=f"{current.name} promoted to {next_tier}.",
        data={"role": role, "staff": promoted.to_dict(), "cost": cost},
    )


def release_staff(state: LeagueState, role: str) -> ActionResult:
    _check_role(role)
    current = state.player_team.staff_member(role)
    if current is None:
        return refuse(state, "No Staff", f"No {role} is on staff.")
    refund = STAFF_RELEASE_REFUNDS[current.tier]

    new_state = copy.deepcopy(state)
    team = new_state.player_team
    del team.staff[role]
    team.budget += refund
    return ActionResult(
        state=new_state,
        title="Release Staff",
        message=f"{current.name} released. You recoup ${refund}k.",
        data={"role": role, "refund": refund},
    )
