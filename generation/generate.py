"""
Generate pilots, draft pools and a fresh league.
All randomness comes from the rng argument so a seeded random.Random reproduces a league.

Procedural logic:
- Legend pilots roll near-max aim/iq and 95+ potential; Normal pilots roll 49-85 aim/iq.
- Salary tiers follow overall; expensive pilots demand longer contracts.
- The draft pool mixes named pilots from the league's history with random filler, sorted best first.
"""
import logging
import random
import string

from models import Player, Team, SeasonState, DraftState, LeagueState
from models.constants import (
    ROLES,
    TAG_PREFIXES,
    TAG_SUFFIXES,
    LEGEND_TAGS,
    REAL_PLAYER_NAMES,
    SQUAD_NAMES_PRESETS,
    CPU_TEAM_COUNT,
    PLAYER_TEAM_ID,
    STARTING_BUDGET,
    STARTING_YEAR,
    DEFAULT_CHEMISTRY,
    DRAFT_POOL_SIZE,
    DRAFT_NAMED_SLOTS,
    DRAFT_FILLER_LEGENDS,
    DRAFT_LEGEND_CHANCE,
    DRAFT_ROUNDS,
    SEASON_MODES,
)
from models.ratings import player_overall

logger = logging.getLogger(__name__)

PLAYER_TIERS = ("Normal", "Legend")
_ID_ALPHABET = string.digits + string.ascii_lowercase


def _player_id(rng: random.Random) -> str:
    """9-character base36 id."""
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(9))


def _random_gamertag(rng: random.Random, tier: str) -> str:
    if tier == "Legend":
        return rng.choice(LEGEND_TAGS)
    pre = rng.choice(TAG_PREFIXES)
    suf = rng.choice(TAG_SUFFIXES)
    number = str(rng.randint(0, 98)) if rng.random() > 0.5 else ""
    return f"{pre}{suf}{number}"


def _salary_for_overall(ovr: int, rng: random.Random) -> int:
    if ovr > 90:
        return rng.randint(40, 49)
    if ovr > 80:
        return rng.randint(20, 29)
    if ovr > 70:
        return rng.randint(8, 17)
    return rng.randint(1, 3)


def contract_years_for_salary(salary: int, rng: random.Random) -> int:
    """Stars demand 3 years, mid-tier usually 2, cheap pilots 1."""
    if salary >= 40:
        return 3
    if salary >= 15:
        return 2 if rng.random() > 0.4 else 1
    return 1


def generate_player(rng: random.Random, tier: str = "Normal", override_name: str | None = None) -> Player:
    if tier not in PLAYER_TIERS:
        raise ValueError(f"tier must be one of {PLAYER_TIERS}, got {tier!r}")
    pid = _player_id(rng)
    role = rng.choice(ROLES)
    age = rng.randint(16, 23)
    gamertag = override_name or _random_gamertag(rng, tier)

    if tier == "Legend":
        aim = rng.randint(90, 99)
        iq = rng.randint(85, 99)
        potential = rng.randint(95, 99)
    else:
        aim = rng.randint(49, 85)
        iq = rng.randint(49, 85)
        potential = max(49, (aim + iq) // 2 + rng.randint(0, 14))
    aim, iq, potential = min(99, aim), min(99, iq), min(99, potential)

    player = Player(
        id=pid,
        gamertag=gamertag or "Unknown",
        role=role,
        age=age,
        aim=aim,
        iq=iq,
        potential=potential,
    )
    player.salary = _salary_for_overall(player_overall(player), rng)
    player.contract_years = contract_years_for_salary(player.salary, rng)
    player.morale = rng.randint(75, 95)
    player.original_stats = {"aim": aim, "iq": iq}
    return player


def generate_draft_pool(rng: random.Random, size: int = DRAFT_POOL_SIZE) -> list[Player]:
    """
    Named pilots first (sampled from the league's name list, each a Legend with 15% chance),
    then random filler where the first 8 are Legends. Sorted by overall, best first.
    """
    named_count = min(DRAFT_NAMED_SLOTS, size, len(REAL_PLAYER_NAMES))
    names = rng.sample(REAL_PLAYER_NAMES, named_count)
    pool = [
        generate_player(rng, "Legend" if rng.random() < DRAFT_LEGEND_CHANCE else "Normal", name)
        for name in names
    ]
    for i in range(size - named_count):
        pool.append(generate_player(rng, "Legend" if i < DRAFT_FILLER_LEGENDS else "Normal"))
    pool.sort(key=player_overall, reverse=True)
    return pool


def build_draft_order(team_ids: list[str], rng: random.Random, rounds: int = DRAFT_ROUNDS) -> list[str]:
    """Snake order: shuffle once, then reverse every other round."""
    shuffled = list(team_ids)
    rng.shuffle(shuffled)
    order: list[str] = []
    for r in range(rounds):
        order.extend(shuffled if r % 2 == 0 else reversed(shuffled))
    return order


def _random_color(rng: random.Random) -> str:
    return f"#{rng.randint(0, 0xFFFFFF):06x}"


def _cpu_teams(rng: random.Random) -> list[Team]:
    return [
        Team(
            id=f"cpu-{i}",
            name=name,
            title="Rival Captain",
            is_player=False,
            colors={"primary": _random_color(rng), "secondary": "#333"},
            budget=STARTING_BUDGET,
            chemistry=rng.randint(60, 79),
        )
        for i, name in enumerate(SQUAD_NAMES_PRESETS[:CPU_TEAM_COUNT])
    ]


def create_league(
    name: str,
    rng: random.Random,
    title: str = "Owner",
    mode: str = "standard",
    colors: dict[str, str] | None = None,
    logo_config: dict[str, str] | None = None,
    career_championships: int = 0,
) -> LeagueState:
    """
    Fresh league: the user squad plus 7 CPU squads, an empty draft board ready for pick 1,
    the season's schedule and a new draft pool.
    """
    from simulation.schedule import generate_season_schedule

    if mode not in SEASON_MODES:
        raise ValueError(f"mode must be one of {SEASON_MODES}, got {mode!r}")
    user = Team(
        id=PLAYER_TEAM_ID,
        name=name,
        title=title,
        is_player=True,
        budget=STARTING_BUDGET,
        championships=career_championships,
        chemistry=DEFAULT_CHEMISTRY,
    )
    if colors:
        user.colors = dict(colors)
    if logo_config:
        user.logo_config = dict(logo_config)
    teams = [user] + _cpu_teams(rng)
    team_ids = [t.id for t in teams]

    state = LeagueState(
        teams=teams,
        player_team_id=user.id,
        season=SeasonState(week=1, year=STARTING_YEAR, season=1, is_drafting=True, mode=mode),
        schedule=generate_season_schedule(team_ids),
        draft=DraftState(pool=generate_draft_pool(rng), order=build_draft_order(team_ids, rng)),
        career_championships=career_championships,
        view="draft",
    )
    state.post("TWDT_Insider", f"A new season of TWDT begins! {name} joins the league as the newest contender. #TrenchWars")
    logger.info("Created %s league for %s (%d teams)", mode, name, len(teams))
    return state
