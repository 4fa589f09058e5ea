"""
Season, draft and league aggregate DTOs.

LeagueState is the single aggregate owned by the orchestrator. Every transition in
``simulation`` takes a LeagueState and returns an ActionResult carrying the new one.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

from .constants import DRAFT_PICK_CLOCK, ROSTER_CAPS, SEASON_MODES, SOCIAL_FEED_LIMIT, STARTING_YEAR, VIEWS
from .game_result import ScheduleMatch, SeasonSchedule, schedule_from_dict, schedule_to_dict
from .player import Player
from .team import Team

PLAYOFF_STAGES = ("semis", "finals", "complete")


@dataclass
class PlayoffMatches:
    semis: List[ScheduleMatch] = field(default_factory=list)
    finals: List[ScheduleMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "semis": [m.to_dict() for m in self.semis],
            "finals": [m.to_dict() for m in self.finals],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayoffMatches":
        return cls(
            semis=[ScheduleMatch.from_dict(m) for m in data.get("semis") or []],
            finals=[ScheduleMatch.from_dict(m) for m in data.get("finals") or []],
        )


@dataclass
class SeasonState:
    """Calendar position. playoff_stage is None during the draft and regular season."""

    week: int = 1
    year: int = STARTING_YEAR
    season: int = 1
    is_drafting: bool = True
    mode: str = "standard"
    playoff_stage: str | None = None
    playoff_matches: PlayoffMatches | None = None

    def __post_init__(self) -> None:
        if self.mode not in SEASON_MODES:
            raise ValueError(f"mode must be one of {SEASON_MODES}, got {self.mode!r}")
        if self.playoff_stage is not None and self.playoff_stage not in PLAYOFF_STAGES:
            raise ValueError(f"playoff_stage must be one of {PLAYOFF_STAGES}, got {self.playoff_stage!r}")

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "week": self.week,
            "year": self.year,
            "season": self.season,
            "isDrafting": self.is_drafting,
            "mode": self.mode,
        }
        if self.playoff_stage is not None:
            d["playoffStage"] = self.playoff_stage
        if self.playoff_matches is not None:
            d["playoffMatches"] = self.playoff_matches.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeasonState":
        matches = data.get("playoffMatches")
        return cls(
            week=int(data.get("week", 1)),
            year=int(data.get("year", STARTING_YEAR)),
            season=int(data.get("season", 1)),
            is_drafting=bool(data.get("isDrafting", True)),
            mode=data.get("mode", "standard"),
            playoff_stage=data.get("playoffStage"),
            playoff_matches=PlayoffMatches.from_dict(matches) if matches else None,
        )


@dataclass
class DraftPick:
    """Transaction log entry for one draft pick."""

    round: int = 1
    team: str = ""
    team_id: str = ""
    player: str = ""
    overall: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round,
            "team": self.team,
            "teamId": self.team_id,
            "player": self.player,
            "overall": self.overall,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftPick":
        return cls(
            round=int(data.get("round", 1)),
            team=data.get("team", ""),
            team_id=str(data.get("teamId", "")),
            player=data.get("player", ""),
            overall=int(data.get("overall", 0)),
        )


@dataclass
class DraftState:
    """Snake draft in progress. pool is kept sorted by overall, best first."""

    pool: List[Player] = field(default_factory=list)
    order: List[str] = field(default_factory=list)
    current_pick: int = 0
    log: List[DraftPick] = field(default_factory=list)
    auto_draft: bool = False
    time_left: int = DRAFT_PICK_CLOCK

    @property
    def on_the_clock(self) -> str | None:
        if self.current_pick < len(self.order):
            return self.order[self.current_pick]
        return None

    @property
    def is_complete(self) -> bool:
        return self.current_pick >= len(self.order) or not self.pool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pool": [p.to_dict() for p in self.pool],
            "order": list(self.order),
            "currentPick": self.current_pick,
            "log": [entry.to_dict() for entry in self.log],
            "autoDraft": self.auto_draft,
            "timeLeft": self.time_left,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftState":
        return cls(
            pool=[Player.from_dict(p) for p in data.get("pool") or []],
            order=[str(t) for t in data.get("order") or []],
            current_pick=int(data.get("currentPick", 0)),
            log=[DraftPick.from_dict(e) for e in data.get("log") or []],
            auto_draft=bool(data.get("autoDraft", False)),
            time_left=int(data.get("timeLeft", DRAFT_PICK_CLOCK)),
        )


@dataclass
class LeagueState:
    """Everything the league needs to continue a career. Serialized as one snapshot."""

    teams: List[Team] = field(default_factory=list)
    player_team_id: str = ""
    season: SeasonState = field(default_factory=SeasonState)
    schedule: SeasonSchedule = field(default_factory=dict)
    free_agents: List[Player] = field(default_factory=list)
    draft: DraftState | None = None
    expiring_contracts: List[Player] = field(default_factory=list)
    social_feed: List[Dict[str, Any]] = field(default_factory=list)
    career_championships: int = 0
    view: str = "draft"

    def __post_init__(self) -> None:
        if self.view not in VIEWS:
            raise ValueError(f"view must be one of {VIEWS}, got {self.view!r}")

    @property
    def player_team(self) -> Team | None:
        for t in self.teams:
            if t.id == self.player_team_id:
                return t
        return None

    def team_by_id(self, team_id: str) -> Team:
        for t in self.teams:
            if t.id == team_id:
                return t
        raise KeyError(f"Unknown team id {team_id!r}")

    @property
    def roster_cap(self) -> int:
        return ROSTER_CAPS[self.season.mode]

    def post(self, author: str, content: str, verified: bool = True) -> None:
        """Newest first; the feed keeps the latest SOCIAL_FEED_LIMIT posts."""
        self.social_feed.insert(0, {"author": author, "content": content, "isVerified": verified})
        del self.social_feed[SOCIAL_FEED_LIMIT:]

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "teams": [t.to_dict() for t in self.teams],
            "playerTeamId": self.player_team_id,
            "season": self.season.to_dict(),
            "schedule": schedule_to_dict(self.schedule),
            "freeAgents": [p.to_dict() for p in self.free_agents],
            "expiringContracts": [p.to_dict() for p in self.expiring_contracts],
            "socialFeed": list(self.social_feed),
            "careerChampionships": self.career_championships,
            "view": self.view,
        }
        if self.draft is not None:
            d["draft"] = self.draft.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeagueState":
        draft = data.get("draft")
        return cls(
            teams=[Team.from_dict(t) for t in data.get("teams") or []],
            player_team_id=str(data.get("playerTeamId", "")),
            season=SeasonState.from_dict(data.get("season") or {}),
            schedule=schedule_from_dict(data.get("schedule") or {}),
            free_agents=[Player.from_dict(p) for p in data.get("freeAgents") or []],
            draft=DraftState.from_dict(draft) if draft else None,
            expiring_contracts=[Player.from_dict(p) for p in data.get("expiringContracts") or []],
            social_feed=list(data.get("socialFeed") or []),
            career_championships=int(data.get("careerChampionships") or 0),
            view=data.get("view") or "dashboard",
        )


@dataclass
class ActionResult:
    """Outcome of a league transition.

    On refusal ``ok`` is False, ``state`` is the untouched input and ``message`` explains why.
    """

    state: LeagueState
    ok: bool = True
    title: str = ""
    message: str = ""
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "title": self.title, "message": self.message, "data": self.data}


def refuse(state: LeagueState, title: str, message: str) -> ActionResult:
    return ActionResult(state=state, ok=False, title=title, message=message)
