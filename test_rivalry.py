"""
Tests for rivalry heat: close matches, blowouts, cooling off and stolen talent.
"""
from models import Rivalry, Team
from simulation.rivalry import ignite_rivalry, update_rivalry


def _team(*rivalries):
    return Team(id="home", name="Home", rivalries=list(rivalries))


def test_close_match_starts_a_rivalry():
    result = update_rivalry(_team(), "away", "Away", 3, week=4)
    assert len(result) == 1
    assert result[0].opponent_id == "away"
    assert result[0].intensity == 15
    assert result[0].reason == "Close Match"
    assert result[0].last_encounter_week == 4


def test_blowout_heats_from_either_side():
    assert update_rivalry(_team(), "away", "Away", 40, week=1)[0].intensity == 10
    lost_big = update_rivalry(_team(), "away", "Away", -40, week=1)
    assert lost_big[0].reason == "Blowout"
    assert lost_big[0].intensity == 10


def test_dull_match_never_creates_a_rivalry():
    assert update_rivalry(_team(), "away", "Away", 20, week=2) == []


def test_dull_match_cools_existing_rivalry():
    team = _team(Rivalry(opponent_id="away", opponent_name="Away", reason="Close Match", intensity=50))
    result = update_rivalry(team, "away", "Away", 20, week=6)
    assert result[0].intensity == 48
    assert result[0].reason == "Close Match"
    assert result[0].last_encounter_week == 6


def test_intensity_stays_in_range():
    hot = _team(Rivalry(opponent_id="away", opponent_name="Away", reason="Blowout", intensity=95))
    assert update_rivalry(hot, "away", "Away", 0, week=1)[0].intensity == 100

    cold = _team(Rivalry(opponent_id="away", opponent_name="Away", reason="Blowout", intensity=1))
    cooled = update_rivalry(cold, "away", "Away", 20, week=1)
    assert len(cooled) == 1
    assert cooled[0].intensity == 0


def test_team_is_not_mutated_and_result_is_sorted():
    team = _team(
        Rivalry(opponent_id="a", opponent_name="A", reason="Blowout", intensity=30),
        Rivalry(opponent_id="b", opponent_name="B", reason="Blowout", intensity=20),
    )
    result = update_rivalry(team, "b", "B", 2, week=3)
    assert [r.opponent_id for r in result] == ["b", "a"]
    assert [r.intensity for r in team.rivalries] == [30, 20]
    assert team.rivalries[1].last_encounter_week is None


def test_stolen_talent():
    result = ignite_rivalry(_team(), "cpu-2", "Terrorist", "Stolen Talent", 10, week=9)
    assert result[0].reason == "Stolen Talent"
    assert result[0].intensity == 10
    assert ignite_rivalry(_team(), "cpu-2", "Terrorist", "", -2, week=9) == []
