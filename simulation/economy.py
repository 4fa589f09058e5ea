"""
Budget, cap and trade-value arithmetic. All functions are pure and floor their results.
"""
import math
from typing import Iterable

from models import Player, Team
from models.constants import (
    TOTAL_SEASON_WEEKS,
    WIN_PRIZE,
    LOSS_PRIZE,
    PLAYOFF_WIN_PRIZE,
    PLAYOFF_LOSS_PRIZE,
    SPONSOR_VIEWERS_PER_UNIT,
    TRADE_PREMIUM,
)
from models.ratings import player_overall


def prorated_salary(salary: int, week: int) -> int:
    """Salary still owed from `week` to the end of the regular season."""
    remaining = max(0, TOTAL_SEASON_WEEKS - week + 1)
    return (salary * remaining) // TOTAL_SEASON_WEEKS


def cap_used(team: Team, week: int) -> int:
    total = sum(prorated_salary(p.salary, week) for p in team.roster)
    accountant = team.staff_member("Accountant")
    if accountant is not None:
        total = math.floor(total * (1 - accountant.bonus_val))
    return total


def available_funds(team: Team, week: int) -> int:
    return team.budget - cap_used(team, week)


def signing_obligation(player: Player, team: Team, week: int) -> int:
    """Prorated cost of adding a pilot now, after any Recruiter discount."""
    cost = prorated_salary(player.salary, week)
    recruiter = team.staff_member("Recruiter")
    if recruiter is not None:
        cost = math.floor(cost * (1 - recruiter.bonus_val))
    return cost


def trade_value(player: Player) -> int:
    """Overall weighted highest, then youth, untapped potential and contract length."""
    ovr = player_overall(player)
    age_factor = max(0, 26 - player.age)
    pot_factor = max(0, player.potential - ovr)
    return ovr * 4 + age_factor * 2 + pot_factor + player.contract_years * 5


def bundle_value(players: Iterable[Player]) -> int:
    return sum(trade_value(p) for p in players)


def trade_accepted(offered_value: float, requested_value: float) -> bool:
    """The other side wants a 10% premium over what it gives up."""
    return offered_value >= requested_value * TRADE_PREMIUM


def weekly_payroll(team: Team) -> int:
    return sum(p.salary for p in team.roster) // TOTAL_SEASON_WEEKS


def sponsor_money(viewership: int) -> int:
    return viewership // SPONSOR_VIEWERS_PER_UNIT


def match_earnings(team: Team, won: bool, viewership: int, is_playoff: bool = False) -> int:
    """Prize plus sponsor money from viewers.

    The Community Manager scales regular-season prizes only; playoff purses are fixed.
    """
    if is_playoff:
        prize = PLAYOFF_WIN_PRIZE if won else PLAYOFF_LOSS_PRIZE
    else:
        prize = WIN_PRIZE if won else LOSS_PRIZE
        manager = team.staff_member("Community Manager")
        if manager is not None:
            prize = math.floor(prize * manager.bonus_val)
    return prize + sponsor_money(viewership)
