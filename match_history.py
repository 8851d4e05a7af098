HISTORY_SIZE = 10

IN_PROGRESS = "ing"
WIN = "win"
LOSE = "lose"

# champion slots that have no match behind them yet
EMPTY_CHAMPION = ""


def ensure_capacity(seq, fill=IN_PROGRESS):
    """
    Pads seq with `fill` up to HISTORY_SIZE. Longer legacy lists are kept as-is.
    Always returns a new list.
    """
    out = list(seq) if seq else []
    if len(out) < HISTORY_SIZE:
        out.extend([fill] * (HISTORY_SIZE - len(out)))
    return out

def align(recent, champions):
    recent = ensure_capacity(recent)
    champions = ensure_capacity(champions, fill=EMPTY_CHAMPION)

    size = max(len(recent), len(champions))
    recent.extend([IN_PROGRESS] * (size - len(recent)))
    champions.extend([EMPTY_CHAMPION] * (size - len(champions)))
    return recent, champions

def first_open_slot(recent):
    for i, outcome in enumerate(recent):
        if outcome == IN_PROGRESS:
            return i
    return None

def record_result(recent, champions, outcome, champion):
    recent, champions = align(recent, champions)
    champion = champion or EMPTY_CHAMPION

    slot = first_open_slot(recent)
    if slot is not None:
        recent[slot] = outcome
        champions[slot] = champion
        return recent, champions

    # full: drop the oldest, append the newest
    return recent[1:] + [outcome], champions[1:] + [champion]

def record_live_champion(recent, champions, champion):
    recent, champions = align(recent, champions)

    slot = first_open_slot(recent)
    if slot is not None and champion:
        champions[slot] = champion
    return recent, champions

def outcome_for(participant):
    return WIN if participant.get("win") else LOSE
