"""
Data models for the Trench Wars league: players, teams, matches, seasons and the league aggregate.
"""
from .player import Player
from .team import Team, StaffMember, Rivalry
from .game_result import GameMap, MatchResult, ScheduleMatch, SeasonSchedule
from .season import SeasonState, PlayoffMatches, DraftPick, DraftState, LeagueState, ActionResult

__all__ = [
    "Player",
    "Team",
    "StaffMember",
    "Rivalry",
    "GameMap",
    "MatchResult",
    "ScheduleMatch",
    "SeasonSchedule",
    "SeasonState",
    "PlayoffMatches",
    "DraftPick",
    "DraftState",
    "LeagueState",
    "ActionResult",
]
