"""
Match simulation engine for the Trench Wars league.

Resolves a single match between two squads into a MatchResult.  Key design goals:

1. **Rating-driven**: effective strength (map bonus, morale, chemistry, Head Coach)
   sets the expected score; strategy counters tilt it further.
2. **Pure**: the only side effect is drawing from the rng passed in.  Teams and
   rosters are read, never written.
3. **Spectacle**: viewership rewards star pilots, winning squads, rivalries,
   playoffs and close finishes.
"""
from __future__ import annotations

import logging
import math
import random

from models import GameMap, MatchResult, Team
from models.constants import DEFAULT_COUNTER_BONUS, STRATEGIES
from models.ratings import player_overall, team_effective_strength

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Scoring and viewership constants
# ---------------------------------------------------------------------------
SCORE_MIN = 10
SCORE_MAX = 100
SCORE_SCALE = 0.8
HOME_EDGE = 2
SCORE_NOISE = (-10, 9)

BASE_VIEWERS = 5000
STAR_OVERALL = 85
VIEWERS_PER_STAR = 1500
VIEWERS_PER_WIN = 200
VIEWERS_PER_RIVALRY_POINT = 100
HYPE_VIEWERS_MAX = 2999
CLOSE_FINISH_MARGIN = 5
CLOSE_FINISH_VIEWERS = 5000


# ===================================================================
# Helper utilities
# ===================================================================

def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _counter_multiplier(team: Team) -> float:
    strategist = team.staff_member("Strategist")
    return strategist.bonus_val if strategist is not None else DEFAULT_COUNTER_BONUS


def _apply_counters(
    home: Team,
    away: Team,
    home_str: int,
    away_str: int,
) -> tuple[int, int, str]:
    """Rush beats Control, Control beats Trap, Trap beats Rush. Only the countering side is boosted."""
    home_strat, away_strat = home.strategy, away.strategy
    if STRATEGIES[home_strat]["counters"] == away_strat:
        mult = _counter_multiplier(home)
        home_str = math.floor(home_str * mult)
        return home_str, away_str, f"{home_strat} countered {away_strat} (+{round((mult - 1) * 100)}%)"
    if STRATEGIES[away_strat]["counters"] == home_strat:
        mult = _counter_multiplier(away)
        away_str = math.floor(away_str * mult)
        return home_str, away_str, f"{away_strat} countered {home_strat} (+{round((mult - 1) * 100)}%)"
    return home_str, away_str, ""


def _roll_score(strength: int, edge: int, rng: random.Random) -> int:
    noise = rng.randint(*SCORE_NOISE)
    return _clamp(math.floor(strength * SCORE_SCALE) + edge + noise, SCORE_MIN, SCORE_MAX)


def _star_count(team: Team) -> int:
    return sum(1 for p in team.roster if player_overall(p) > STAR_OVERALL)


def _viewership(
    home: Team,
    away: Team,
    home_score: int,
    away_score: int,
    is_playoff: bool,
    rng: random.Random,
) -> int:
    viewers = BASE_VIEWERS
    viewers += (_star_count(home) + _star_count(away)) * VIEWERS_PER_STAR
    viewers += (home.wins + away.wins) * VIEWERS_PER_WIN
    rivalry = home.rivalry_with(away.id)
    if rivalry is not None:
        viewers += rivalry.intensity * VIEWERS_PER_RIVALRY_POINT
    if is_playoff:
        viewers *= 2
    viewers += rng.randint(0, HYPE_VIEWERS_MAX)
    if abs(home_score - away_score) <= CLOSE_FINISH_MARGIN:
        viewers += CLOSE_FINISH_VIEWERS
    return math.floor(viewers)


# ===================================================================
# Public API
# ===================================================================

def simulate_match(
    home: Team,
    away: Team,
    game_map: GameMap,
    rng: random.Random,
    is_playoff: bool = False,
) -> MatchResult:
    """Simulate a single match between two squads.

    Parameters
    ----------
    home : Team
        Home squad; gets a small scoring edge and wins ties.
    away : Team
        Away squad.
    game_map : GameMap
        Arena for the week; its bonus role boosts matching starters.
    rng : random.Random
        Source of all randomness (score noise and viewer hype).
    is_playoff : bool
        Doubles the pre-hype audience.

    Returns
    -------
    MatchResult
        Final scores, the winner (strictly higher score), counter message and viewership.
    """
    home_str = team_effective_strength(home, game_map)
    away_str = team_effective_strength(away, game_map)
    home_str, away_str, counter_msg = _apply_counters(home, away, home_str, away_str)

    home_score = _roll_score(home_str, HOME_EDGE, rng)
    away_score = _roll_score(away_str, 0, rng)
    if home_score == away_score:
        away_score -= 1

    viewership = _viewership(home, away, home_score, away_score, is_playoff, rng)
    winner_id = home.id if home_score > away_score else away.id

    result = MatchResult(
        home_id=home.id,
        away_id=away.id,
        home_score=home_score,
        away_score=away_score,
        winner_id=winner_id,
        counter_msg=counter_msg,
        map=game_map,
        home_strat=home.strategy,
        away_strat=away.strategy,
        viewership=viewership,
    )
    logger.debug(
        "%s %d - %d %s on %s (%d viewers)",
        home.name, home_score, away_score, away.name, game_map.name, viewership,
    )
    return result
