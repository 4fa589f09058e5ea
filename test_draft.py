"""
Tests for pilot generation, the draft pool and the snake draft state machine.
"""
import random
from collections import Counter

import pytest

from generation import build_draft_order, create_league, generate_draft_pool, generate_player
from models.constants import PLAYER_TEAM_ID, REAL_PLAYER_NAMES
from models.ratings import player_overall
from simulation import end_draft_early, run_cpu_picks, run_draft_pick, set_auto_draft, tick_draft_clock

TEAM_IDS = [PLAYER_TEAM_ID] + [f"cpu-{i}" for i in range(7)]


@pytest.fixture
def league():
    return create_league("Test Squad", random.Random(5))


@pytest.fixture
def on_the_clock(league):
    """League after the CPU squads have picked up to the user's first turn."""
    state = run_cpu_picks(league).state
    assert state.draft.on_the_clock == PLAYER_TEAM_ID
    return state


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def test_legend_ranges():
    rng = random.Random(9)
    for _ in range(50):
        p = generate_player(rng, "Legend")
        assert 90 <= p.aim <= 99
        assert 85 <= p.iq <= 99
        assert 95 <= p.potential <= 99
        assert 16 <= p.age <= 23


def test_normal_ranges_and_contracts():
    rng = random.Random(10)
    for _ in range(200):
        p = generate_player(rng)
        assert 49 <= p.aim <= 85
        assert 49 <= p.iq <= 85
        assert p.potential >= 49
        assert 75 <= p.morale <= 95
        assert p.original_stats == {"aim": p.aim, "iq": p.iq}
        if p.salary >= 40:
            assert p.contract_years == 3
        elif p.salary < 15:
            assert p.contract_years == 1
        else:
            assert p.contract_years in (1, 2)
        assert len(p.id) == 9


def test_override_name_and_unknown_tier():
    rng = random.Random(11)
    assert generate_player(rng, override_name="Turban").gamertag == "Turban"
    with pytest.raises(ValueError):
        generate_player(rng, "Mythic")


def test_draft_pool_shape():
    pool = generate_draft_pool(random.Random(12))
    assert len(pool) == 120
    overalls = [player_overall(p) for p in pool]
    assert overalls == sorted(overalls, reverse=True)
    named = [p.gamertag for p in pool if p.gamertag in REAL_PLAYER_NAMES]
    assert len(named) >= 100
    assert len({p.id for p in pool}) == 120
    legends = [p for p in pool if p.aim >= 90 and p.iq >= 85 and p.potential >= 95]
    assert len(legends) >= 8


def test_snake_order():
    order = build_draft_order(TEAM_IDS, random.Random(13))
    assert len(order) == 64
    assert order[8:16] == list(reversed(order[:8]))
    assert order[16:24] == order[:8]
    assert set(Counter(order).values()) == {8}


# ---------------------------------------------------------------------------
# Draft state machine
# ---------------------------------------------------------------------------

def test_cpu_picks_stop_at_user(league, on_the_clock):
    made = on_the_clock.draft.current_pick
    assert len(on_the_clock.draft.log) == made
    assert len(on_the_clock.draft.pool) == 120 - made
    assert league.draft.current_pick == 0


def test_user_pick(on_the_clock):
    target = on_the_clock.draft.pool[3]
    result = run_draft_pick(on_the_clock, target.id)
    assert result.ok
    state = result.state
    assert state.player_team.find_player(target.id) is not None
    assert all(p.id != target.id for p in state.draft.pool)
    assert state.draft.log[0].team_id == PLAYER_TEAM_ID
    assert state.draft.log[0].player == target.gamertag
    assert state.draft.current_pick == on_the_clock.draft.current_pick + 1
    assert state.draft.time_left == 300


def test_pick_refusals(on_the_clock):
    result = run_draft_pick(on_the_clock, "missing")
    assert not result.ok
    assert result.title == "Unavailable"
    assert result.state is on_the_clock

    state = on_the_clock
    state.draft.current_pick = next(
        i for i, t in enumerate(state.draft.order) if t != PLAYER_TEAM_ID and i > state.draft.current_pick
    )
    result = run_draft_pick(state, state.draft.pool[0].id)
    assert not result.ok
    assert result.title == "Not Your Pick"


def test_auto_draft_finishes_the_draft(league):
    result = set_auto_draft(league, True)
    state = result.state
    assert result.data["complete"]
    assert not state.season.is_drafting
    assert state.view == "dashboard"
    assert all(len(t.roster) == 8 for t in state.teams)
    drafted = [p.id for t in state.teams for p in t.roster]
    assert len(drafted) == len(set(drafted)) == 64
    assert len(state.free_agents) == 56
    assert state.draft.pool == []
    assert len(state.draft.log) == 64


def test_draft_actions_refused_after_draft(league):
    state = set_auto_draft(league, True).state
    for result in (run_draft_pick(state), run_cpu_picks(state), tick_draft_clock(state, 5), end_draft_early(state)):
        assert not result.ok
        assert result.title == "No Draft"


def test_clock_runs_down_then_picks(on_the_clock):
    result = tick_draft_clock(on_the_clock, 100)
    assert result.data["picks"] == []
    assert result.state.draft.time_left == 200

    top = on_the_clock.draft.pool[0]
    result = tick_draft_clock(result.state, 200)
    state = result.state
    assert state.player_team.find_player(top.id) is not None
    assert result.data["picks"][0]["teamId"] == PLAYER_TEAM_ID
    assert state.draft.time_left == 300
    assert state.draft.on_the_clock in (PLAYER_TEAM_ID, None)

    with pytest.raises(ValueError):
        tick_draft_clock(on_the_clock, -1)


def test_end_draft_early_forfeits_user_picks(on_the_clock):
    user_before = len(on_the_clock.player_team.roster)
    result = end_draft_early(on_the_clock)
    state = result.state
    assert not state.season.is_drafting
    assert len(state.player_team.roster) == user_before
    assert result.data["forfeited"] == 8 - user_before
    for team in state.teams:
        if not team.is_player:
            assert len(team.roster) == 8
    drafted = sum(len(t.roster) for t in state.teams)
    assert len(state.free_agents) == 120 - drafted


def test_full_rosters_pass_their_picks():
    rng = random.Random(21)
    state = create_league("Test Squad", rng, mode="dynasty")
    state.player_team.roster = [generate_player(rng) for _ in range(12)]
    state = set_auto_draft(state, True).state
    assert len(state.player_team.roster) == 12
    assert all(len(t.roster) == 8 for t in state.teams if not t.is_player)
