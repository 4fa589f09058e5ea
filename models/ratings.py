"""
Role-specific overall and team strength calculations.
Single source of truth: every stage floors its result so ratings stay integers end to end.
"""
import math
from typing import List

from .constants import BASELINE_MORALE, MAP_BONUS, STARTERS_COUNT
from .game_result import GameMap
from .player import Player
from .team import Team

LINEUP_POLICIES = ("manual", "auto_best")

# role -> (aim weight, iq weight)
ROLE_WEIGHTS = {
    "Sniper": (0.7, 0.3),
    "Support": (0.3, 0.7),
}
DEFAULT_WEIGHTS = (0.5, 0.5)


def player_overall(player: Player) -> int:
    """Weighted aim/iq by role, floored. Returns 0-99."""
    aim_w, iq_w = ROLE_WEIGHTS.get(player.role, DEFAULT_WEIGHTS)
    return math.floor(player.aim * aim_w + player.iq * iq_w)


def select_starters(team: Team, policy: str | None = None) -> List[Player]:
    """Starting five. "manual" keeps roster order (user default); "auto_best" takes the top 5 by overall."""
    if policy is None:
        policy = "manual" if team.is_player else "auto_best"
    if policy not in LINEUP_POLICIES:
        raise ValueError(f"Unknown lineup policy {policy!r}")
    if policy == "manual":
        return list(team.roster[:STARTERS_COUNT])
    return sorted(team.roster, key=player_overall, reverse=True)[:STARTERS_COUNT]


def team_overall(team: Team, policy: str | None = None) -> int:
    starters = select_starters(team, policy)
    if not starters:
        return 0
    return sum(player_overall(p) for p in starters) // len(starters)


def _morale_modifier(morale: int) -> float:
    return 1 + (morale - BASELINE_MORALE) / 500


def _chemistry_modifier(chemistry: int) -> float:
    # 0 chem = 0.9x, 50 = 1.0x, 100 = 1.1x
    return 0.9 + chemistry / 500


def team_effective_strength(team: Team, game_map: GameMap, policy: str | None = None) -> int:
    """Match-day strength: map bonus and morale per starter, then chemistry and Head Coach on the average."""
    starters = select_starters(team, policy)
    if not starters:
        return 0
    total = 0
    for p in starters:
        ovr = player_overall(p)
        if game_map.bonus_role and p.role == game_map.bonus_role:
            ovr = math.floor(ovr * MAP_BONUS)
        ovr = math.floor(ovr * _morale_modifier(p.morale))
        total += ovr
    avg = total // len(starters)
    avg = math.floor(avg * _chemistry_modifier(team.chemistry))
    coach = team.staff_member("Head Coach")
    if coach is not None:
        avg = math.floor(avg * coach.bonus_val)
    return avg
