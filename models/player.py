"""
Player DTO for the Trench Wars league.
aim / iq / potential are 0-99; overall is derived from aim and iq by role (see models.ratings).
Dict keys follow the save snapshot format (camelCase).
"""
from dataclasses import dataclass
from typing import Dict, Any, Optional

STAT_MIN = 0
STAT_MAX = 99
MORALE_MIN = 0
MORALE_MAX = 100


def clamp_stat(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, int(value)))


def clamp_morale(value: int) -> int:
    return max(MORALE_MIN, min(MORALE_MAX, int(value)))


@dataclass
class Player:
    """A pilot: in a draft pool, on a roster, or in free agency."""

    id: str = ""
    gamertag: str = ""
    role: str = "Rusher"
    age: int = 18
    aim: int = 0
    iq: int = 0
    potential: int = 0
    salary: int = 1
    contract_years: int = 1
    morale: int = 75
    previous_team_id: str | None = None  # back-reference only
    original_stats: Dict[str, int] | None = None  # aim/iq at season start

    def __post_init__(self) -> None:
        self.aim = clamp_stat(self.aim)
        self.iq = clamp_stat(self.iq)
        self.potential = clamp_stat(self.potential)
        self.morale = clamp_morale(self.morale)
        if self.contract_years < 0:
            raise ValueError(f"contract_years must be >= 0, got {self.contract_years}")

    def development(self) -> Dict[str, int]:
        """Stat change since the season-start snapshot."""
        base = self.original_stats or {"aim": self.aim, "iq": self.iq}
        return {"aim": self.aim - base.get("aim", self.aim), "iq": self.iq - base.get("iq", self.iq)}

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "gamertag": self.gamertag,
            "role": self.role,
            "age": self.age,
            "aim": self.aim,
            "iq": self.iq,
            "potential": self.potential,
            "salary": self.salary,
            "contractYears": self.contract_years,
            "morale": self.morale,
        }
        if self.previous_team_id is not None:
            d["previousTeamId"] = self.previous_team_id
        if self.original_stats is not None:
            d["originalStats"] = dict(self.original_stats)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        original: Optional[Dict[str, Any]] = data.get("originalStats")
        return cls(
            id=str(data.get("id", "")),
            gamertag=data.get("gamertag") or "Unknown",
            role=data.get("role", "Rusher"),
            age=int(data.get("age", 18)),
            aim=int(data.get("aim", 0)),
            iq=int(data.get("iq", 0)),
            potential=int(data.get("potential", 0)),
            salary=int(data.get("salary", 1)),
            contract_years=int(data.get("contractYears", 1)),
            morale=int(data.get("morale", 75)),
            previous_team_id=data.get("previousTeamId"),
            original_stats=(
                {"aim": int(original["aim"]), "iq": int(original["iq"])} if original else None
            ),
        )
