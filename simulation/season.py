"""
Season orchestrator: advances the league one step at a time.

Phases: drafting -> regular season (weeks 1..14) -> playoffs (semis -> finals -> complete)
-> season summary -> next season (see simulation.offseason) or game over.
Each call to advance_week moves exactly one step and returns an ActionResult with a new state.
"""
from __future__ import annotations

import copy
import logging
import random
from typing import Any

from models import ActionResult, GameMap, LeagueState, MatchResult, PlayoffMatches, ScheduleMatch, Team
from models.constants import (
    EMERGENCY_FUNDING_AMOUNT,
    EMERGENCY_FUNDING_THRESHOLD,
    MAPS,
    STRATEGIES,
    TOTAL_SEASON_WEEKS,
)
from models.player import clamp_morale
from models.season import refuse
from models.team import empty_training_counts
from simulation.economy import match_earnings, weekly_payroll
from simulation.engine import simulate_match
from simulation.rivalry import update_rivalry

logger = logging.getLogger(__name__)

PLAYOFF_SPOTS = 4
DYNASTY_WIN_CHEMISTRY = 2
DYNASTY_LOSS_CHEMISTRY = -1
DYNASTY_WIN_MORALE = 3
DYNASTY_LOSS_MORALE = -2


def standings(teams: list[Team]) -> list[Team]:
    """Wins desc, then kill/death differential desc. Ties keep league order."""
    return sorted(teams, key=lambda t: (-t.wins, -t.kill_death_diff))


def seed_playoffs(teams: list[Team]) -> list[ScheduleMatch]:
    """Top 4 qualify; semis are 1 v 4 and 2 v 3 with the higher seed at home."""
    qualified = standings(teams)[:PLAYOFF_SPOTS]
    if len(qualified) < PLAYOFF_SPOTS:
        raise ValueError(f"Playoffs need {PLAYOFF_SPOTS} teams, got {len(qualified)}")
    return [
        ScheduleMatch(home_id=qualified[0].id, away_id=qualified[3].id),
        ScheduleMatch(home_id=qualified[1].id, away_id=qualified[2].id),
    ]


def _random_map(rng: random.Random) -> GameMap:
    return GameMap.from_dict(rng.choice(MAPS))


def _shift_chemistry(team: Team, delta: int) -> None:
    team.chemistry = max(0, min(100, team.chemistry + delta))


def _shift_morale(team: Team, delta: int) -> None:
    for p in team.roster:
        p.morale = clamp_morale(p.morale + delta)


def _update_rivalries(home: Team, away: Team, result: MatchResult, week: int) -> None:
    home_rivalries = update_rivalry(home, away.id, away.name, result.home_score - result.away_score, week)
    away_rivalries = update_rivalry(away, home.id, home.name, result.away_score - result.home_score, week)
    home.rivalries = home_rivalries
    away.rivalries = away_rivalries


def _user_summary(state: LeagueState, result: MatchResult, earnings: dict[str, int]) -> dict[str, Any]:
    opponent_id = result.away_id if result.home_id == state.player_team_id else result.home_id
    return {
        "result": result.to_dict(),
        "opponentId": opponent_id,
        "earnings": earnings[state.player_team_id],
        "viewership": result.viewership,
    }


def _play_regular_week(state: LeagueState, rng: random.Random) -> ActionResult:
    season = state.season
    week = season.week
    game_map = _random_map(rng)
    for team in state.teams:
        if not team.is_player:
            team.strategy = rng.choice(list(STRATEGIES))

    played: list[ScheduleMatch] = []
    earnings: dict[str, int] = {}
    user_match: dict[str, Any] | None = None
    for fixture in state.schedule.get(week, []):
        home = state.team_by_id(fixture.home_id)
        away = state.team_by_id(fixture.away_id)
        result = simulate_match(home, away, game_map, rng)
        winner, loser = (home, away) if result.winner_id == home.id else (away, home)

        winner.wins += 1
        loser.losses += 1
        for team in (home, away):
            team.kills += result.score_for(team.id)
            team.deaths += result.score_against(team.id)
        if season.mode == "dynasty":
            _shift_chemistry(winner, DYNASTY_WIN_CHEMISTRY)
            _shift_morale(winner, DYNASTY_WIN_MORALE)
            _shift_chemistry(loser, DYNASTY_LOSS_CHEMISTRY)
            _shift_morale(loser, DYNASTY_LOSS_MORALE)

        _update_rivalries(home, away, result, week)

        for team in (home, away):
            earned = match_earnings(team, team is winner, result.viewership)
            earnings[team.id] = earned
            team.budget += earned - weekly_payroll(team)

        played.append(ScheduleMatch(home_id=fixture.home_id, away_id=fixture.away_id, result=result))
        if fixture.involves(state.player_team_id):
            user_match = _user_summary(state, result, earnings)

    state.schedule[week] = played

    funded: list[str] = []
    for team in state.teams:
        if team.budget < EMERGENCY_FUNDING_THRESHOLD:
            team.budget += EMERGENCY_FUNDING_AMOUNT
            funded.append(team.id)
            logger.warning("Emergency funding for %s (budget now %d)", team.name, team.budget)
            state.post(
                "@LeagueOps",
                f"Emergency funding injection approved for {team.name} to maintain competitive integrity.",
            )

    for team in state.teams:
        team.training_counts = empty_training_counts()
    season.week += 1

    data: dict[str, Any] = {
        "map": game_map.to_dict(),
        "results": [m.result.to_dict() for m in played if m.result],
        "userMatch": user_match,
        "emergencyFunding": funded,
        "playoffsNext": week == TOTAL_SEASON_WEEKS,
    }

    user = state.player_team
    if user is not None and user.budget < 0:
        state.view = "game_over"
        logger.warning("Game over: %s is insolvent (budget %d)", user.name, user.budget)
        return ActionResult(state=state, title="Game Over", message="Your organization has gone bankrupt.", data=data)

    title = f"Week {week} Complete"
    if user is not None and user.id in funded:
        message = "The league has authorized an emergency sponsorship injection of $100k to prevent insolvency."
    else:
        message = f"Matches played on {game_map.name}."
    return ActionResult(state=state, title=title, message=message, data=data)


def _start_playoffs(state: LeagueState) -> ActionResult:
    semis = seed_playoffs(state.teams)
    state.season.playoff_stage = "semis"
    state.season.playoff_matches = PlayoffMatches(semis=semis, finals=[])
    names = [f"{state.team_by_id(m.home_id).name} vs {state.team_by_id(m.away_id).name}" for m in semis]
    logger.info("Playoffs seeded: %s", "; ".join(names))
    state.post("League_Alerts", f"Playoffs are set: {', '.join(names)}.")
    return ActionResult(
        state=state,
        title="Playoffs",
        message="The top four squads advance to the semifinals.",
        data={"semis": [m.to_dict() for m in semis]},
    )


def _play_playoff_round(state: LeagueState, rng: random.Random) -> ActionResult:
    season = state.season
    matches = season.playoff_matches or PlayoffMatches()
    stage = season.playoff_stage
    fixtures = matches.semis if stage == "semis" else matches.finals
    game_map = _random_map(rng)

    played: list[ScheduleMatch] = []
    earnings: dict[str, int] = {}
    user_match: dict[str, Any] | None = None
    for fixture in fixtures:
        home = state.team_by_id(fixture.home_id)
        away = state.team_by_id(fixture.away_id)
        result = simulate_match(home, away, game_map, rng, is_playoff=True)
        _update_rivalries(home, away, result, season.week)
        for team in (home, away):
            earned = match_earnings(team, result.winner_id == team.id, result.viewership, is_playoff=True)
            earnings[team.id] = earned
            team.budget += earned
        played.append(ScheduleMatch(home_id=fixture.home_id, away_id=fixture.away_id, result=result))
        if fixture.involves(state.player_team_id):
            user_match = _user_summary(state, result, earnings)

    data: dict[str, Any] = {
        "map": game_map.to_dict(),
        "results": [m.result.to_dict() for m in played if m.result],
        "userMatch": user_match,
    }
    if stage == "semis":
        matches.semis = played
        matches.finals = [ScheduleMatch(home_id=played[0].result.winner_id, away_id=played[1].result.winner_id)]
        season.playoff_stage = "finals"
        title, message = "Semifinals Complete", "Two squads advance to the grand final."
    else:
        matches.finals = played
        champion = state.team_by_id(played[0].result.winner_id)
        champion.championships += 1
        if champion.id == state.player_team_id:
            state.career_championships += 1
        season.playoff_stage = "complete"
        data["championId"] = champion.id
        logger.info("Season %d champion: %s", season.season, champion.name)
        state.post(
            "League_Alerts",
            f"CHAMPIONS: {champion.name} have secured the Season {season.season} Championship title!",
        )
        title, message = "Finals Complete", f"{champion.name} are the champions."
    season.playoff_matches = matches
    return ActionResult(state=state, title=title, message=message, data=data)


def advance_week(state: LeagueState, rng: random.Random) -> ActionResult:
    """
    Move the league forward one step: a regular-season week, playoff seeding,
    a playoff round, or the hand-off to the season summary.
    """
    if state.view == "game_over":
        return refuse(state, "Game Over", "This career has ended.")
    if state.season.is_drafting:
        return refuse(state, "Draft In Progress", "Finish the draft before the season can start.")

    new_state = copy.deepcopy(state)
    stage = new_state.season.playoff_stage
    if stage == "complete":
        new_state.view = "season_summary"
        return ActionResult(state=new_state, title="Season Complete", message="The season is over.")
    if stage in ("semis", "finals"):
        return _play_playoff_round(new_state, rng)
    if new_state.season.week <= TOTAL_SEASON_WEEKS:
        return _play_regular_week(new_state, rng)
    return _start_playoffs(new_state)
