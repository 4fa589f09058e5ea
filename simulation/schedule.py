"""
Round-robin schedule generation for the Trench Wars league.

Eight squads play a 14-week regular season.  The circle method guarantees every
squad plays exactly once per week; after N-1 weeks the cycle repeats with home
and away flipped, so a 14-week season is a full double round-robin for 8 teams.
"""
from __future__ import annotations

from models import ScheduleMatch, SeasonSchedule
from models.constants import TOTAL_SEASON_WEEKS


def _rotate(slot: int, step: int, total: int) -> int:
    """Slot 0 stays fixed; the other slots turn around the circle by ``step``."""
    if slot == 0:
        return 0
    return (slot - 1 + step) % (total - 1) + 1


def generate_season_schedule(
    team_ids: list[str],
    weeks: int = TOTAL_SEASON_WEEKS,
) -> SeasonSchedule:
    """Generate the regular-season fixtures.

    Parameters
    ----------
    team_ids : list[str]
        An even number (at least 2) of team ids.  Order matters: index 0 is the
        fixed point of the circle.
    weeks : int
        Number of weeks to schedule (1-indexed).

    Returns
    -------
    SeasonSchedule
        ``{week: [ScheduleMatch, ...]}`` with N/2 matches per week.
    """
    n = len(team_ids)
    if n < 2 or n % 2 != 0:
        raise ValueError(f"Round-robin needs an even number of teams (at least 2), got {n}")

    schedule: SeasonSchedule = {}
    for week in range(1, weeks + 1):
        cycle = (week - 1) % (n - 1)
        flipped = ((week - 1) // (n - 1)) % 2 == 1
        matches: list[ScheduleMatch] = []
        for i in range(n // 2):
            t1 = team_ids[_rotate(i, cycle, n)]
            t2 = team_ids[_rotate(n - 1 - i, cycle, n)]
            if flipped:
                matches.append(ScheduleMatch(home_id=t2, away_id=t1))
            else:
                matches.append(ScheduleMatch(home_id=t1, away_id=t2))
        schedule[week] = matches
    return schedule
