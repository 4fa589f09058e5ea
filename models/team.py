"""
Team DTOs for the Trench Wars league: Team, StaffMember, Rivalry.
Exactly one team is user-controlled (is_player); CPU teams follow the same simulation rules.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

from .constants import DEFAULT_CHEMISTRY, STARTING_BUDGET, STAFF_ROLES
from .player import Player


def empty_training_counts() -> Dict[str, int]:
    return {"aim": 0, "iq": 0, "team_building": 0}


@dataclass
class StaffMember:
    """A hired staff member. bonus_val is a multiplier or a discount fraction depending on role."""

    name: str = ""
    tier: str = "Bronze"
    bonus_val: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "tier": self.tier, "bonusVal": self.bonus_val}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaffMember":
        return cls(
            name=data.get("name", ""),
            tier=data.get("tier", "Bronze"),
            bonus_val=float(data.get("bonusVal", 1.0)),
        )


@dataclass
class Rivalry:
    """One side's view of a rivalry. Never deleted, only decays."""

    opponent_id: str = ""
    opponent_name: str = ""
    reason: str = ""
    intensity: int = 0  # 0-100
    last_encounter_week: int | None = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "opponentId": self.opponent_id,
            "opponentName": self.opponent_name,
            "reason": self.reason,
            "intensity": self.intensity,
        }
        if self.last_encounter_week is not None:
            d["lastEncounterWeek"] = self.last_encounter_week
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rivalry":
        return cls(
            opponent_id=str(data.get("opponentId", "")),
            opponent_name=data.get("opponentName", ""),
            reason=data.get("reason", ""),
            intensity=max(0, min(100, int(data.get("intensity", 0)))),
            last_encounter_week=data.get("lastEncounterWeek"),
        )


@dataclass
class Team:
    """A squad in the league. roster order matters: the first 5 are the user's starters."""

    id: str = ""
    name: str = ""
    title: str = ""
    is_player: bool = False
    colors: Dict[str, str] = field(default_factory=lambda: {"primary": "#10b981", "secondary": "#3f3f46"})
    logo_config: Dict[str, str] = field(default_factory=lambda: {"shape": "rounded", "gradient": "linear"})
    roster: List[Player] = field(default_factory=list)
    budget: int = STARTING_BUDGET
    wins: int = 0
    losses: int = 0
    kills: int = 0
    deaths: int = 0
    championships: int = 0
    strategy: str = "Rush"
    training_counts: Dict[str, int] = field(default_factory=empty_training_counts)
    staff: Dict[str, StaffMember | None] = field(default_factory=dict)
    rivalries: List[Rivalry] = field(default_factory=list)
    chemistry: int = DEFAULT_CHEMISTRY
    trade_refusals: int = 0

    @property
    def kill_death_diff(self) -> int:
        return self.kills - self.deaths

    def staff_member(self, role: str) -> StaffMember | None:
        return self.staff.get(role)

    def find_player(self, player_id: str) -> Player | None:
        for p in self.roster:
            if p.id == player_id:
                return p
        return None

    def rivalry_with(self, opponent_id: str) -> Rivalry | None:
        for r in self.rivalries:
            if r.opponent_id == opponent_id:
                return r
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "isPlayer": self.is_player,
            "colors": dict(self.colors),
            "logoConfig": dict(self.logo_config),
            "roster": [p.to_dict() for p in self.roster],
            "budget": self.budget,
            "wins": self.wins,
            "losses": self.losses,
            "kills": self.kills,
            "deaths": self.deaths,
            "championships": self.championships,
            "strategy": self.strategy,
            "trainingCounts": {
                "aim": self.training_counts.get("aim", 0),
                "iq": self.training_counts.get("iq", 0),
                "teamBuilding": self.training_counts.get("team_building", 0),
            },
            "staff": {role: (s.to_dict() if s else None) for role, s in self.staff.items()},
            "rivalries": [r.to_dict() for r in self.rivalries],
            "chemistry": self.chemistry,
            "tradeRefusals": self.trade_refusals,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        staff_raw = data.get("staff") or {}
        staff: Dict[str, StaffMember | None] = {}
        for role, s in staff_raw.items():
            if role in STAFF_ROLES:
                staff[role] = StaffMember.from_dict(s) if s else None
        raw_counts = data.get("trainingCounts") or {}
        counts = empty_training_counts()
        counts["aim"] = int(raw_counts.get("aim") or 0)
        counts["iq"] = int(raw_counts.get("iq") or 0)
        counts["team_building"] = int(raw_counts.get("teamBuilding") or 0)
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            title=data.get("title", ""),
            is_player=bool(data.get("isPlayer", False)),
            colors=dict(data.get("colors") or {"primary": "#10b981", "secondary": "#3f3f46"}),
            logo_config=dict(data.get("logoConfig") or {"shape": "rounded", "gradient": "linear"}),
            roster=[Player.from_dict(p) for p in data.get("roster") or []],
            budget=int(data.get("budget", STARTING_BUDGET)),
            wins=int(data.get("wins") or 0),
            losses=int(data.get("losses") or 0),
            kills=int(data.get("kills") or 0),
            deaths=int(data.get("deaths") or 0),
            championships=int(data.get("championships") or 0),
            strategy=data.get("strategy") or "Rush",
            training_counts=counts,
            staff=staff,
            rivalries=[Rivalry.from_dict(r) for r in data.get("rivalries") or []],
            chemistry=int(data["chemistry"]) if data.get("chemistry") is not None else DEFAULT_CHEMISTRY,
            trade_refusals=int(data.get("tradeRefusals") or 0),
        )
