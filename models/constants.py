"""
League structure, naming and tuning constants for the Trench Wars league.
Single source of truth for roles, maps, strategies, staff tiers and season lengths.
"""
from typing import Dict, List

# Season length (regular season weeks)
TOTAL_SEASON_WEEKS = 14

# Roster caps by season mode
ROSTER_CAPS: Dict[str, int] = {
    "standard": 10,
    "dynasty": 12,
}
STARTERS_COUNT = 5

SEASON_MODES = ("standard", "dynasty")
STARTING_BUDGET = 250
STARTING_YEAR = 2026
DEFAULT_CHEMISTRY = 50
BASELINE_MORALE = 75

# Draft
DRAFT_POOL_SIZE = 120
DRAFT_NAMED_SLOTS = 100  # named real players drawn per pool; the rest is random filler
DRAFT_FILLER_LEGENDS = 8
DRAFT_LEGEND_CHANCE = 0.15
DRAFT_ROUNDS = 8
DRAFT_PICK_CLOCK = 300

# Economy
WIN_PRIZE = 25
LOSS_PRIZE = 12
PLAYOFF_WIN_PRIZE = 100
PLAYOFF_LOSS_PRIZE = 50
SPONSOR_VIEWERS_PER_UNIT = 5000
EMERGENCY_FUNDING_THRESHOLD = 50
EMERGENCY_FUNDING_AMOUNT = 100
TRADE_PREMIUM = 1.1
RESIGN_MARKUP = 1.3
RESIGN_YEARS = 2
DYNASTY_BUDGET_CARRYOVER_CAP = 100

# Training
TRAINING_SESSIONS_PER_WEEK = 3
TEAM_BUILDING_PER_WEEK = 1
TRAINING_BASE_COST = 3
TRAINING_SUCCESS_RATES = [100, 66, 33]
TRAINEES_PER_SESSION = 3

ROLES: List[str] = ["Rusher", "Sniper", "Support", "Flanker", "Anchor"]
# Retired role names -> current role (old saves)
ROLE_MIGRATIONS: Dict[str, str] = {"Medic": "Support"}

STRATEGIES: Dict[str, Dict[str, str]] = {
    "Rush": {"counters": "Control", "weak_to": "Trap", "desc": "Aggressive push. Beats Control."},
    "Control": {"counters": "Trap", "weak_to": "Rush", "desc": "Slow map control. Beats Trap."},
    "Trap": {"counters": "Rush", "weak_to": "Control", "desc": "Defensive setups. Beats Rush."},
}
DEFAULT_COUNTER_BONUS = 1.10

MAPS: List[Dict[str, str | None]] = [
    {"name": "Training Grounds", "type": "Standard", "bonus_role": None, "desc": "No specific advantages."},
    {"name": "Neon Slums", "type": "CQC", "bonus_role": "Rusher", "desc": "+15% to Rushers"},
    {"name": "Iron Heights", "type": "Long Range", "bonus_role": "Sniper", "desc": "+15% to Snipers"},
    {"name": "Bio-Lab 4", "type": "Technical", "bonus_role": "Support", "desc": "+15% to Support"},
    {"name": "Void Station", "type": "Flank Heavy", "bonus_role": "Flanker", "desc": "+15% to Flankers"},
    {"name": "Bunker Zero", "type": "Defensive", "bonus_role": "Anchor", "desc": "+15% to Anchors"},
]
MAP_BONUS = 1.15

# Staff: roles, tiers, hire costs, bonus values (multipliers for coach/strategist/CM, fractions otherwise)
STAFF_ROLES: List[str] = ["Head Coach", "Recruiter", "Strategist", "Accountant", "Community Manager"]
STAFF_TIERS: List[str] = ["Bronze", "Silver", "Gold", "Prismatic"]
STAFF_HIRE_COSTS: List[int] = [10, 25, 50]  # Prismatic is promotion-only
STAFF_PROMOTION_COSTS: Dict[str, int] = {"Silver": 25, "Gold": 50, "Prismatic": 100}
STAFF_RELEASE_REFUNDS: Dict[str, int] = {"Bronze": 5, "Silver": 12, "Gold": 25, "Prismatic": 50}
STAFF_BONUSES: Dict[str, List[float]] = {
    "Head Coach": [1.02, 1.05, 1.10, 1.15],
    "Recruiter": [0.05, 0.10, 0.20, 0.35],
    "Strategist": [1.15, 1.20, 1.25, 1.35],
    "Accountant": [0.05, 0.10, 0.15, 0.25],
    "Community Manager": [1.1, 1.25, 1.5, 2.0],
}
STAFF_CANDIDATE_NAMES = [
    "Jax 'Neon' Vance", "Sera 'Zero' Chen", "Kael 'Shadow' Thorne", "Elena 'Bolt' Rossi",
    "Marcus 'Tank' Sterling", "Yuki 'Ghost' Tanaka", "Riven 'Blade' Cross", "Odin 'Void' Miller",
]

# Naming
TAG_PREFIXES = [
    "Shadow", "Void", "Ghost", "Neon", "Cyber", "Dark", "Light", "Iron", "Steel", "Venom",
    "Frost", "Blaze", "Storm", "Viper", "Rogue", "Elite", "Pro", "X", "Zero", "Alpha",
]
TAG_SUFFIXES = [
    "Wolf", "Ops", "Slayer", "King", "God", "Bot", "Aim", "Shot", "Strike", "Force",
    "Squad", "Clan", "Reaper", "Phantom", "Spectre", "Knight", "Ninja", "Samurai",
]
LEGEND_TAGS = [
    "Shroud", "Faker", "S1mple", "Ninja", "Tenz", "Scump", "Crimsix", "Karma", "Hiko",
    "Device", "Niko", "Zywoo", "Coldzera",
]
SQUAD_NAMES_PRESETS = [
    "Power", "Pwned.nL", "Terrorist", "Monster", "Force", "Pure Luck", "DiCE", "Prime", "sk8",
    "Spastic", "Pallies", "Pirates", "Disoblige", "Veloce", "Dragonguard", "PUMA", "Anti-Scrub",
    "Rejected Basers", "TeKs", "Paladen", "-FINAL-", "Grapevine",
]
CPU_TEAM_COUNT = 7
PLAYER_TEAM_ID = "player-squad"

REAL_PLAYER_NAMES = [
    "bike", "Turban", "Commodo", "Creature", "Mikkiz", "animeboy12", "Riverside", "Tripin", "Bad Badger",
    "TJ hazuki", "Hercules", "Captor", "Henry Saari", "retroaction", "Sunny DBZaiti", "Product", "Dutch Baser",
    "Sk", "Da Paz", "Sulla", "Cyclone", "berzerk", "Rampage", "Bombed", "Rough", "Cintra", "Cig Smoke",
    "bick", "Best", "Geio", "Clark Kentaro", "rucci", "Hasbulla", "Beast", "Pawner", "Cow Lives Matter",
    "Harder", "gbone", "DBZ", "Draft", "deathclown420", "dak", "Azuline", "siaxis", "nbsIDE Domu",
    "download", "MythriL", "hellkite", "Bacon", "Mercede$", "Refer", "Raazi", "SpookedOne", "CZ530",
    "Jz", "Spectacular", "Rylo", "Rekashi", "Ixador", "Dameon Angell", "dmr", "Rainbow Seeker", "beam",
    "Aprix", "Rodney", "absurd", "Tiny", "MousE", "Winterfell", "Morph", "Lee", "Shayde", "sarger",
    "FieryFire", "Flew", "Groan", "kesser", "100", "Paradise", "Scuzzy Sureshot", "Shaw", "Peru", "Cape",
    "Skatarius", "menelvagor", "Stayon", "Markmru", "clefairy27", "HellzNo!", "Kangal", "okyo", "JAMAL",
    "Temujin", "PH", "Rabbit!", "Kado", "Pressure", "Brunson", "Public Assassin", "booker007", "Shaun",
    "ibex", "ABo", "InFaMouS", "apt", "Telemanus", "Violence", "Jessup", "RaCka", "JURASSIC", "Ekko",
    "Iron Survivor", "Hulk", "Spirit", "Rasaq", "Vehicle", "Jack", "Zeebu", "X-Demo", "Cyris", "i.d.",
    "Source", "The Boogieman", "Revolution", "Money", "Glyde", "Omega Red", "lockdown", "Flying Bass",
    "Zidane", "Heafin", "Sword", "Cripple", "yeh", "WillBy", "Spawnisen", "Dad", "Warthog", "RENZI",
    "Ogron", "jabra", "Zizzo", "dare", "Ra", "rabbit", "Liz", "JuNkA", "Honcho", "delos", "Invincible",
    "Gho$tFace-", "Dreamwin", "banzi", "Havok", "Zizu", "maketso", "autopilot", "Christian10", "mvp",
    "Frozen Throne", "Joeses", "ZapaTa", "Captain Lonestar", "Reaver", "Paky Dude", "Ardour", "Oderus Urungus",
    "Charas", "Kuukunen", "Coupe", "Celly", "NiGhToWL", "y0gi",
]

# Views the league can be in (persisted with the snapshot)
VIEWS = ("draft", "dashboard", "season_summary", "game_over")

# Social feed length kept in state
SOCIAL_FEED_LIMIT = 50
