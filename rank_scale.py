DIVISIONS = [
    "IRON",
    "BRONZE",
    "SILVER",
    "GOLD",
    "PLATINUM",
    "EMERALD",
    "DIAMOND",
    "MASTER",
    "GRANDMASTER",
    "CHALLENGER",
]
APEX_DIVISIONS = ("MASTER", "GRANDMASTER", "CHALLENGER")

# lowest -> highest
SUB_RANKS = ["4", "3", "2", "1"]
ROMAN_SUB_RANKS = {"IV": "4", "III": "3", "II": "2", "I": "1"}

DIVISION_SPAN = 400
SUB_RANK_SPAN = 100

# Apex LP is unbounded, so each apex division sits on its own base far above
# anything reachable from the division below it.
APEX_BASE = DIVISIONS.index("MASTER") * DIVISION_SPAN
APEX_SPAN = 100_000

UNKNOWN_ORDINAL = -1


def normalize_division(division):
    if not isinstance(division, str):
        return None
    division = division.strip().upper()
    return division if division in DIVISIONS else None

def normalize_sub_rank(sub_rank):
    """
    Accepts "1".."4", 1..4 or the roman "I".."IV" used by league-v4.
    Returns the digit string, or None if the token is not a sub-rank.
    """
    if sub_rank is None or isinstance(sub_rank, bool):
        return None
    token = str(sub_rank).strip().upper()
    if token in ROMAN_SUB_RANKS:
        return ROMAN_SUB_RANKS[token]
    return token if token in SUB_RANKS else None

def is_apex(division):
    return normalize_division(division) in APEX_DIVISIONS

def ordinal_of(division, sub_rank, league_points):
    division = normalize_division(division)
    if division is None:
        return UNKNOWN_ORDINAL

    try:
        lp = int(league_points or 0)
    except (TypeError, ValueError):
        return UNKNOWN_ORDINAL

    if division in APEX_DIVISIONS:
        return APEX_BASE + APEX_DIVISIONS.index(division) * APEX_SPAN + lp

    sub = normalize_sub_rank(sub_rank)
    if sub is None:
        return UNKNOWN_ORDINAL

    return (
        DIVISIONS.index(division) * DIVISION_SPAN
        + SUB_RANKS.index(sub) * SUB_RANK_SPAN
        + lp
    )
