"""
End-to-end test for season simulation.

Creates a full league, runs the draft, simulates the 14-week regular season,
plays the playoffs through to a champion, and rolls over into the next season
in both standard and dynasty mode.

Usage:
    python test_season.py
    pytest test_season.py
"""
import random
import sys

from generation import create_league
from models import Team
from models.constants import PLAYER_TEAM_ID, TOTAL_SEASON_WEEKS
from models.ratings import player_overall
from simulation import (
    advance_week,
    resign_player,
    seed_playoffs,
    set_auto_draft,
    standings,
    start_next_season,
)


def _drafted_league(seed=42, mode="standard"):
    rng = random.Random(seed)
    state = create_league("Test Squad", rng, mode=mode)
    result = set_auto_draft(state, True)
    assert result.ok
    assert not result.state.season.is_drafting
    return result.state, rng


def _play_regular_season(state, rng):
    for _ in range(TOTAL_SEASON_WEEKS):
        result = advance_week(state, rng)
        assert result.ok, result.message
        state = result.state
    return state


def test_advance_refused_during_draft():
    rng = random.Random(1)
    state = create_league("Test Squad", rng)
    result = advance_week(state, rng)
    assert not result.ok
    assert result.title == "Draft In Progress"
    assert result.state is state


def test_regular_week_updates_records_and_schedule():
    state, rng = _drafted_league()
    result = advance_week(state, rng)
    new = result.state
    assert new is not state
    assert state.season.week == 1
    assert new.season.week == 2

    assert all(m.result is not None for m in new.schedule[1])
    assert all(m.result is None for m in state.schedule[1])
    assert sum(t.wins for t in new.teams) == 4
    assert sum(t.losses for t in new.teams) == 4
    assert sum(t.kills for t in new.teams) == sum(t.deaths for t in new.teams)

    user_match = result.data["userMatch"]
    assert user_match is not None
    assert user_match["opponentId"] != PLAYER_TEAM_ID
    assert len(result.data["results"]) == 4
    assert all(t.training_counts == {"aim": 0, "iq": 0, "team_building": 0} for t in new.teams)


def test_full_season_through_finals():
    state, rng = _drafted_league()
    state = _play_regular_season(state, rng)
    assert state.season.week == TOTAL_SEASON_WEEKS + 1
    for team in state.teams:
        assert team.wins + team.losses == TOTAL_SEASON_WEEKS

    table = standings(state.teams)
    result = advance_week(state, rng)
    assert result.title == "Playoffs"
    state = result.state
    assert state.season.playoff_stage == "semis"
    semis = state.season.playoff_matches.semis
    assert (semis[0].home_id, semis[0].away_id) == (table[0].id, table[3].id)
    assert (semis[1].home_id, semis[1].away_id) == (table[1].id, table[2].id)

    budgets = {t.id: t.budget for t in state.teams}
    result = advance_week(state, rng)
    state = result.state
    assert state.season.playoff_stage == "finals"
    semis = state.season.playoff_matches.semis
    finals = state.season.playoff_matches.finals
    assert [m.result.winner_id for m in semis] == [finals[0].home_id, finals[0].away_id]
    for m in semis:
        # prize money is fixed in the playoffs and no payroll is charged
        assert state.team_by_id(m.result.winner_id).budget >= budgets[m.result.winner_id] + 100
        assert state.team_by_id(m.result.loser_id()).budget >= budgets[m.result.loser_id()] + 50

    result = advance_week(state, rng)
    state = result.state
    assert state.season.playoff_stage == "complete"
    champion_id = result.data["championId"]
    assert champion_id == state.season.playoff_matches.finals[0].result.winner_id
    assert sum(t.championships for t in state.teams) == 1
    assert state.team_by_id(champion_id).championships == 1
    assert state.career_championships == (1 if champion_id == PLAYER_TEAM_ID else 0)

    result = advance_week(state, rng)
    assert result.ok
    assert result.state.view == "season_summary"


def test_bankrupt_user_ends_the_career():
    state, rng = _drafted_league()
    state.player_team.budget = -500
    result = advance_week(state, rng)
    assert result.title == "Game Over"
    assert result.state.view == "game_over"
    assert PLAYER_TEAM_ID in result.data["emergencyFunding"]

    over = result.state
    refused = advance_week(over, rng)
    assert not refused.ok
    assert refused.state is over
    assert not start_next_season(over, rng).ok


def test_emergency_funding_for_cpu_squads():
    state, rng = _drafted_league()
    state.team_by_id("cpu-0").budget = 0
    result = advance_week(state, rng)
    assert "cpu-0" in result.data["emergencyFunding"]
    assert result.state.team_by_id("cpu-0").budget >= 100 - 30
    assert result.state.social_feed[0]["author"] == "@LeagueOps"


def test_standings_order_and_playoff_seeds():
    def squad(team_id, wins, kills, deaths):
        return Team(id=team_id, name=team_id, wins=wins, losses=14 - wins, kills=kills, deaths=deaths)

    teams = [
        squad("a", 10, 105, 100),
        squad("b", 10, 120, 100),
        squad("c", 11, 70, 100),
        squad("d", 8, 150, 100),
        squad("e", 8, 110, 100),
        squad("f", 3, 200, 100),
    ]
    # Wins come first; kill/death differential only splits equal records
    assert [t.id for t in standings(teams)] == ["c", "b", "a", "d", "e", "f"]
    semis = seed_playoffs(teams)
    assert [(m.home_id, m.away_id) for m in semis] == [("c", "d"), ("b", "a")]


def test_next_season_refused_mid_season():
    state, rng = _drafted_league()
    result = start_next_season(state, rng)
    assert not result.ok
    assert result.title == "Season In Progress"
    assert result.state is state


def test_standard_rollover_resets_every_squad():
    state, rng = _drafted_league()
    state.season.playoff_stage = "complete"
    state.player_team.chemistry = 90
    result = start_next_season(state, rng)
    assert result.ok
    new = result.state
    assert new.season.season == 2
    assert new.season.year == state.season.year + 1
    assert new.season.week == 1
    assert new.season.is_drafting
    assert new.season.playoff_stage is None
    assert new.view == "draft"
    assert len(new.draft.pool) == 120
    assert len(new.draft.order) == 64
    assert sorted(new.schedule) == list(range(1, 15))
    for team in new.teams:
        assert team.roster == []
        assert team.budget == 250
        assert team.staff == {}
        assert team.chemistry == 50
        assert team.wins == team.losses == 0
    assert new.free_agents == []
    assert new.expiring_contracts == []


def test_dynasty_rollover_carries_contracts_and_budget():
    state, rng = _drafted_league(seed=7, mode="dynasty")
    state.season.playoff_stage = "complete"
    user = state.player_team
    user.budget = 400
    user.chemistry = 90
    user.roster[0].contract_years = 1
    user.roster[1].contract_years = 3
    user.roster[1].aim = 70
    leaving_id, staying_id = user.roster[0].id, user.roster[1].id
    cpu = state.team_by_id("cpu-0")
    cpu.roster[0].contract_years = 1
    cpu_leaving_id = cpu.roster[0].id
    expired_ids = [p.id for t in state.teams for p in t.roster if p.contract_years <= 1]

    result = start_next_season(state, rng)
    new = result.state
    new_user = new.player_team
    assert leaving_id in [p.id for p in new.expiring_contracts]
    assert new_user.find_player(leaving_id) is None
    staying = new_user.find_player(staying_id)
    assert staying.contract_years == 2
    assert staying.original_stats == {"aim": 70, "iq": staying.iq}
    assert new_user.chemistry == 70
    assert new_user.budget == 350

    # Expired pilots re-enter the draft on a fresh deal instead of vanishing
    pool = {p.id: p for p in new.draft.pool}
    assert len(new.draft.pool) == 120 + len(expired_ids)
    assert set(expired_ids) <= set(pool)
    assert pool[cpu_leaving_id].previous_team_id == "cpu-0"
    assert pool[leaving_id].previous_team_id == PLAYER_TEAM_ID
    assert all(pool[pid].contract_years >= 1 for pid in expired_ids)
    overalls = [player_overall(p) for p in new.draft.pool]
    assert overalls == sorted(overalls, reverse=True)
    assert new.free_agents == []
    for team in new.teams:
        assert all(p.contract_years >= 1 for p in team.roster)

    # Carried-over rosters are topped up but never past the dynasty cap of 12
    drafted = set_auto_draft(new, True).state
    assert not drafted.season.is_drafting
    assert all(len(t.roster) <= 12 for t in drafted.teams)
    # Whoever was not re-signed is either drafted or a free agent by now
    assert drafted.expiring_contracts == []


def _dynasty_rollover_with_expiry():
    state, rng = _drafted_league(seed=7, mode="dynasty")
    state.season.playoff_stage = "complete"
    leaving_id = state.player_team.roster[0].id
    state.player_team.roster[0].contract_years = 1
    new = start_next_season(state, rng).state
    new.player_team.budget = 5000
    return new, leaving_id


def test_resign_during_draft_takes_pilot_out_of_pool():
    state, leaving_id = _dynasty_rollover_with_expiry()
    assert state.season.is_drafting
    result = resign_player(state, leaving_id)
    assert result.ok, result.message
    new = result.state
    assert leaving_id not in [p.id for p in new.draft.pool]
    assert leaving_id not in [p.id for p in new.expiring_contracts]
    assert new.player_team.find_player(leaving_id).contract_years == 2
    assert len(new.draft.pool) == len(state.draft.pool) - 1


def test_resign_refused_once_drafted_elsewhere():
    state, leaving_id = _dynasty_rollover_with_expiry()
    state.draft.pool = [p for p in state.draft.pool if p.id != leaving_id]
    result = resign_player(state, leaving_id)
    assert not result.ok
    assert result.title == "Unavailable"
    assert result.state is state


def main() -> None:
    tests = [obj for name, obj in sorted(globals().items()) if name.startswith("test_") and callable(obj)]
    errors = 0
    for test in tests:
        try:
            test()
        except AssertionError as exc:
            errors += 1
            print(f"  FAIL {test.__name__}: {exc}")
        else:
            print(f"  OK   {test.__name__}")

    # Final table for one seeded season
    state, rng = _drafted_league()
    state = _play_regular_season(state, rng)
    print("\n" + "=" * 60)
    print(f"  {'Squad':<20} {'W':>3} {'L':>3} {'K/D':>6} {'Budget':>7}")
    for team in standings(state.teams):
        print(f"  {team.name:<20} {team.wins:>3} {team.losses:>3} {team.kill_death_diff:>6} {team.budget:>7}")
    print("=" * 60)

    if errors:
        print(f"\n*** {errors} check(s) FAILED ***")
        sys.exit(1)
    else:
        print("\nAll checks passed!")


if __name__ == "__main__":
    main()
