"""
Rivalry bookkeeping. Functions return new rivalry lists; the team passed in is never mutated.
"""
from dataclasses import replace
from typing import List

from models import Rivalry, Team

CLOSE_MATCH_MARGIN = 5
BLOWOUT_MARGIN = 35
CLOSE_MATCH_HEAT = 15
BLOWOUT_HEAT = 10
DULL_MATCH_DECAY = -2
STOLEN_TALENT_HEAT = 10


def _sorted(rivalries: List[Rivalry]) -> List[Rivalry]:
    return sorted(rivalries, key=lambda r: r.intensity, reverse=True)


def ignite_rivalry(
    team: Team,
    opponent_id: str,
    opponent_name: str,
    reason: str,
    delta: int,
    week: int,
) -> List[Rivalry]:
    """
    Apply `delta` intensity toward one opponent.
    Existing entries are clamped to 0-100, keep their reason unless the rivalry heated up,
    and always record the week. A new entry is only created when delta is positive.
    """
    rivalries = [replace(r) for r in team.rivalries]
    for i, existing in enumerate(rivalries):
        if existing.opponent_id == opponent_id:
            rivalries[i] = replace(
                existing,
                intensity=max(0, min(100, existing.intensity + delta)),
                reason=reason if delta > 0 else existing.reason,
                last_encounter_week=week,
            )
            return _sorted(rivalries)
    if delta > 0:
        rivalries.append(Rivalry(
            opponent_id=opponent_id,
            opponent_name=opponent_name,
            reason=reason,
            intensity=min(100, delta),
            last_encounter_week=week,
        ))
    return _sorted(rivalries)


def update_rivalry(team: Team, opponent_id: str, opponent_name: str, score_diff: int, week: int) -> List[Rivalry]:
    """Close matches (|diff| <= 5) and blowouts (|diff| > 35) heat a rivalry; anything else cools it."""
    margin = abs(score_diff)
    if margin <= CLOSE_MATCH_MARGIN:
        return ignite_rivalry(team, opponent_id, opponent_name, "Close Match", CLOSE_MATCH_HEAT, week)
    if margin > BLOWOUT_MARGIN:
        return ignite_rivalry(team, opponent_id, opponent_name, "Blowout", BLOWOUT_HEAT, week)
    return ignite_rivalry(team, opponent_id, opponent_name, "", DULL_MATCH_DECAY, week)
