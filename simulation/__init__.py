"""
Simulation engine for the Trench Wars league.
Resolves matches, generates the round-robin schedule, advances the season and playoffs,
runs the snake draft, rolls seasons over, and handles front-office operations.
"""
from .engine import simulate_match
from .schedule import generate_season_schedule
from .season import advance_week, seed_playoffs, standings
from .offseason import start_next_season
from .draft import (
    build_draft_order,
    run_draft_pick,
    run_cpu_picks,
    set_auto_draft,
    tick_draft_clock,
    end_draft_early,
)
from .development import train
from .staff import hire_staff, promote_staff, release_staff
from .transactions import (
    sign_free_agent,
    release_player,
    resign_player,
    swap_players,
    set_strategy,
    propose_trade,
)

__all__ = [
    "simulate_match",
    "generate_season_schedule",
    "advance_week",
    "seed_playoffs",
    "standings",
    "start_next_season",
    "build_draft_order",
    "run_draft_pick",
    "run_cpu_picks",
    "set_auto_draft",
    "tick_draft_clock",
    "end_draft_early",
    "train",
    "hire_staff",
    "promote_staff",
    "release_staff",
    "sign_free_agent",
    "release_player",
    "resign_player",
    "swap_players",
    "set_strategy",
    "propose_trade",
]
