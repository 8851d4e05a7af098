from typing import NamedTuple, Optional

from rank_scale import UNKNOWN_ORDINAL, is_apex, ordinal_of
from tier_codec import RankPoint, parse_tier

PROMOTION = "promotion"
DEMOTION = "demotion"
LATERAL = "lateral"


class MatchTransition(NamedTuple):
    previous: Optional[RankPoint]
    current: RankPoint
    delta: int
    kind: str


def _ordinal(rank_point):
    return ordinal_of(rank_point.division, rank_point.sub_rank, rank_point.league_points)

def _no_baseline(previous, current):
    return MatchTransition(previous, current, current.league_points, LATERAL)

def compute_transition(previous, current):
    """
    Compare two RankPoints.

    A missing or uncomparable previous rank has no baseline: the delta is the
    new LP value and the move counts as lateral. A division or sub-rank change
    is classified by ordinal order and the delta spans the crossed boundaries.
    Apex divisions have no sub-ranks, so a move inside one is classified by
    the sign of the LP change.
    """
    if previous is None:
        return _no_baseline(None, current)

    prev_ord = _ordinal(previous)
    curr_ord = _ordinal(current)
    if prev_ord == UNKNOWN_ORDINAL or curr_ord == UNKNOWN_ORDINAL:
        return _no_baseline(previous, current)

    delta = curr_ord - prev_ord

    if previous.division != current.division or previous.sub_rank != current.sub_rank:
        kind = PROMOTION if curr_ord > prev_ord else DEMOTION
        return MatchTransition(previous, current, delta, kind)

    delta = current.league_points - previous.league_points
    if current.sub_rank is None and delta != 0:
        kind = PROMOTION if delta > 0 else DEMOTION
    else:
        kind = LATERAL
    return MatchTransition(previous, current, delta, kind)

def compute_delta(previous_display, current):
    return compute_transition(parse_tier(previous_display), current)

def format_delta(transition):
    if transition is None:
        return ""
    delta = transition.delta
    # Master and above share one LP ladder
    if (
        transition.previous is not None
        and is_apex(transition.previous.division)
        and is_apex(transition.current.division)
    ):
        delta = transition.current.league_points - transition.previous.league_points
    if delta > 0:
        return f"+{delta}LP"
    return f"{delta}LP"
