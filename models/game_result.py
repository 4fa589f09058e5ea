"""
Match result DTOs for the Trench Wars league.

GameMap is the arena a week is played on (one role may get a bonus).
MatchResult is the immutable outcome of one match.
ScheduleMatch is a fixture, optionally carrying its result.
"""
from dataclasses import dataclass
from typing import Dict, Any, List


@dataclass(frozen=True)
class GameMap:
    """An arena. bonus_role players get +15% effective overall."""

    name: str = "Training Grounds"
    type: str = "Standard"
    bonus_role: str | None = None
    desc: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "bonusRole": self.bonus_role, "desc": self.desc}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameMap":
        return cls(
            name=data.get("name", "Training Grounds"),
            type=data.get("type", "Standard"),
            bonus_role=data.get("bonusRole", data.get("bonus_role")),
            desc=data.get("desc", ""),
        )


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one match. winner_id always belongs to the side with the strictly higher score."""

    home_id: str = ""
    away_id: str = ""
    home_score: int = 0
    away_score: int = 0
    winner_id: str = ""
    counter_msg: str = ""
    map: GameMap = GameMap()
    home_strat: str = "Rush"
    away_strat: str = "Rush"
    viewership: int = 0

    @property
    def margin(self) -> int:
        return abs(self.home_score - self.away_score)

    def loser_id(self) -> str:
        return self.away_id if self.winner_id == self.home_id else self.home_id

    def score_for(self, team_id: str) -> int:
        return self.home_score if team_id == self.home_id else self.away_score

    def score_against(self, team_id: str) -> int:
        return self.away_score if team_id == self.home_id else self.home_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "homeId": self.home_id,
            "awayId": self.away_id,
            "homeScore": self.home_score,
            "awayScore": self.away_score,
            "winnerId": self.winner_id,
            "counterMsg": self.counter_msg,
            "map": self.map.to_dict(),
            "homeStrat": self.home_strat,
            "awayStrat": self.away_strat,
            "viewership": self.viewership,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        return cls(
            home_id=str(data["homeId"]),
            away_id=str(data["awayId"]),
            home_score=int(data.get("homeScore", 0)),
            away_score=int(data.get("awayScore", 0)),
            winner_id=str(data.get("winnerId", "")),
            counter_msg=data.get("counterMsg", ""),
            map=GameMap.from_dict(data.get("map") or {}),
            home_strat=data.get("homeStrat", "Rush"),
            away_strat=data.get("awayStrat", "Rush"),
            viewership=int(data.get("viewership", 0)),
        )


@dataclass
class ScheduleMatch:
    """A fixture between two teams; result is attached once played."""

    home_id: str = ""
    away_id: str = ""
    result: MatchResult | None = None

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_id, self.away_id)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"homeId": self.home_id, "awayId": self.away_id}
        if self.result is not None:
            d["result"] = self.result.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleMatch":
        result = data.get("result")
        return cls(
            home_id=str(data["homeId"]),
            away_id=str(data["awayId"]),
            result=MatchResult.from_dict(result) if result else None,
        )


# week number -> fixtures
SeasonSchedule = Dict[int, List[ScheduleMatch]]


def schedule_to_dict(schedule: SeasonSchedule) -> Dict[str, Any]:
    return {str(week): [m.to_dict() for m in matches] for week, matches in schedule.items()}


def schedule_from_dict(data: Dict[str, Any]) -> SeasonSchedule:
    return {int(week): [ScheduleMatch.from_dict(m) for m in matches] for week, matches in data.items()}
