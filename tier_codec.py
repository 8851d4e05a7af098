import re
from typing import NamedTuple, Optional

from rank_scale import (
    APEX_DIVISIONS,
    is_apex,
    normalize_division,
    normalize_sub_rank,
)

UNRANKED = {"ko": "언랭크", "en": "UNRANKED"}

DIVISION_NAMES = {
    "ko": {
        "IRON": "아이언",
        "BRONZE": "브론즈",
        "SILVER": "실버",
        "GOLD": "골드",
        "PLATINUM": "플래티넘",
        "EMERALD": "에메랄드",
        "DIAMOND": "다이아몬드",
        "MASTER": "마스터",
        "GRANDMASTER": "그랜드마스터",
        "CHALLENGER": "챌린저",
    },
    "en": {
        "IRON": "Iron",
        "BRONZE": "Bronze",
        "SILVER": "Silver",
        "GOLD": "Gold",
        "PLATINUM": "Platinum",
        "EMERALD": "Emerald",
        "DIAMOND": "Diamond",
        "MASTER": "Master",
        "GRANDMASTER": "Grandmaster",
        "CHALLENGER": "Challenger",
    },
}

# "골드 1 - 45LP", "마스터 - 500LP", legacy "GOLD IV (45LP)"
TIER_RE = re.compile(
    r"^\s*(?P<division>[^\s(\-]+)"
    r"(?:\s+(?P<sub>[1-4]|IV|III|II|I))?"
    r"\s*(?:-\s*(?P<lp>\d+)\s*LP|\(\s*(?P<legacy_lp>\d+)\s*LP\s*\))\s*$",
    re.IGNORECASE,
)


class RankPoint(NamedTuple):
    division: str
    sub_rank: Optional[str]
    league_points: int


def _reverse_lookup(token):
    token = token.strip()
    for names in DIVISION_NAMES.values():
        for division, localized in names.items():
            if localized.lower() == token.lower():
                return division
    return normalize_division(token)

def make_rank_point(division, sub_rank, league_points):
    division = normalize_division(division)
    if division is None:
        return None
    try:
        lp = max(int(league_points or 0), 0)
    except (TypeError, ValueError):
        return None

    if division in APEX_DIVISIONS:
        return RankPoint(division, None, lp)

    sub = normalize_sub_rank(sub_rank)
    if sub is None:
        return None
    return RankPoint(division, sub, lp)

def rank_point_from_entry(entry):
    """league-v4 entry ({"tier", "rank", "leaguePoints", ...}) -> RankPoint."""
    if not entry:
        return None
    return make_rank_point(entry.get("tier"), entry.get("rank"), entry.get("leaguePoints"))

def unranked_label(locale="ko"):
    return UNRANKED.get(locale, UNRANKED["ko"])

def format_tier(rank_point, locale="ko"):
    if rank_point is None:
        return unranked_label(locale)

    names = DIVISION_NAMES.get(locale, DIVISION_NAMES["ko"])
    name = names.get(rank_point.division, rank_point.division)

    if is_apex(rank_point.division):
        return f"{name} - {rank_point.league_points}LP"
    sub = normalize_sub_rank(rank_point.sub_rank) or "4"
    return f"{name} {sub} - {rank_point.league_points}LP"

def parse_tier(text):
    if not isinstance(text, str):
        return None
    if text.strip() in UNRANKED.values():
        return None

    m = TIER_RE.match(text)
    if not m:
        return None

    division = _reverse_lookup(m.group("division"))
    if division is None:
        return None

    lp = m.group("lp") if m.group("lp") is not None else m.group("legacy_lp")

    if division in APEX_DIVISIONS:
        return RankPoint(division, None, int(lp))

    # no digit stored -> lowest sub-rank
    sub = normalize_sub_rank(m.group("sub")) or "4"
    return RankPoint(division, sub, int(lp))
