import time
from typing import NamedTuple, Optional

import riot_api
import roster
from lp_delta import compute_transition, format_delta
from match_history import align, outcome_for, record_live_champion, record_result
from overlay_config import load_settings
from tier_codec import format_tier, rank_point_from_entry


class PlayerLookup(NamedTuple):
    puuid: Optional[str]
    last_match_id: Optional[str] = None
    participant: Optional[dict] = None
    solo_entry: Optional[dict] = None
    live_champion: Optional[str] = None


# ---------- Riot lookups ----------

def load_champion_names():
    return riot_api.safe_lookup(riot_api.dd_champion_map) or {}

def collect_lookups(player, settings, champion_names=None):
    """
    Fetches everything one sync cycle needs for a player. Any lookup that
    fails is left as None. Returns None only when the puuid cannot be resolved.
    """
    key = settings.api_key
    champion_names = champion_names or {}

    puuid = player.get("puuid") or riot_api.safe_lookup(
        riot_api.get_puuid, player["riot_id"], settings.routing, key
    )
    if not puuid:
        return None

    last_match_id = riot_api.safe_lookup(riot_api.get_last_match_id, puuid, settings.routing, key)

    participant = None
    stored_match_id = player.get("last_match_id")
    if last_match_id and stored_match_id and last_match_id != stored_match_id:
        match_json = riot_api.safe_lookup(riot_api.get_match, last_match_id, settings.routing, key)
        participant = riot_api.find_participant(match_json, puuid)

    entries = riot_api.safe_lookup(riot_api.get_league_entries, puuid, settings.platform, key)
    solo_entry = riot_api.find_queue_entry(entries, settings.queue_type)

    live_champion = None
    active_game = riot_api.safe_lookup(riot_api.get_active_game, puuid, settings.platform, key)
    champ_id = riot_api.live_champion_id(active_game, puuid)
    if champ_id is not None:
        live_champion = champion_names.get(str(champ_id), str(champ_id))

    return PlayerLookup(
        puuid=puuid,
        last_match_id=last_match_id,
        participant=participant,
        solo_entry=solo_entry,
        live_champion=live_champion,
    )


# ---------- one player ----------

def kda_label(participant):
    k = int(participant.get("kills", 0))
    d = int(participant.get("deaths", 0))
    a = int(participant.get("assists", 0))
    return f"{k}/{d}/{a}"

def apply_sync(player, lookups, locale="ko"):
    """
    Builds the replacement roster record for one player from a snapshot of
    the stored record and this cycle's lookups. Pure: nothing is written.

    trigger_cutscene is True exactly when a finished match was recorded in
    this cycle.
    """
    record = dict(player)
    recent, champions = align(player.get("recent"), player.get("champions"))
    triggered = False

    if lookups.puuid:
        record["puuid"] = lookups.puuid

    # finished match
    new_match_id = lookups.last_match_id
    stored_match_id = player.get("last_match_id")
    if new_match_id and new_match_id != stored_match_id:
        if stored_match_id is None:
            # first sight of this player: remember where we are, no cutscene
            record["last_match_id"] = new_match_id
        elif lookups.participant:
            part = lookups.participant
            outcome = outcome_for(part)
            recent, champions = record_result(recent, champions, outcome, part.get("championName"))

            if part.get("win"):
                record["wins"] = int(player.get("wins") or 0) + 1
            else:
                record["losses"] = int(player.get("losses") or 0) + 1

            record["last_kda"] = kda_label(part)
            record["last_match_id"] = new_match_id
            triggered = True

    # ranked standing
    current = rank_point_from_entry(lookups.solo_entry)
    if current is not None:
        previous = roster.stored_rank(player)
        if previous != current:
            record["lp_change"] = format_delta(compute_transition(previous, current))
        record.update(roster.rank_columns(current))
        if not player.get("manual_tier"):
            record["tier"] = format_tier(current, locale)

    # game in progress
    if lookups.live_champion:
        recent, champions = record_live_champion(recent, champions, lookups.live_champion)

    record["recent"] = recent
    record["champions"] = champions
    record["trigger_cutscene"] = triggered
    return record


# ---------- roster ----------

def sync_roster(conn, settings, champion_names=None):
    roster.seed_players({"players": settings.players}, conn, locale=settings.locale)
    if champion_names is None:
        champion_names = load_champion_names()

    stats = {"synced": 0, "skipped": 0, "failed": 0, "triggered": 0}

    players = roster.load_players(conn)
    for i, player in enumerate(players):
        riot_id = player.get("riot_id") or "?"

        if "#" not in riot_id:
            print(f"[sync] skip {riot_id}: riot_id must look like Name#TAG")
            stats["skipped"] += 1
            continue

        if i and settings.request_delay_s:
            time.sleep(settings.request_delay_s)

        try:
            lookups = collect_lookups(player, settings, champion_names)
            if lookups is None:
                print(f"[sync] {riot_id}: account not found, skipping")
                roster.clear_trigger(conn, player["id"])
                stats["failed"] += 1
                continue

            updated = apply_sync(player, lookups, settings.locale)
            roster.save_player(conn, updated)

        except Exception as e:
            print(f"[sync] ERROR for {riot_id}: {e}")
            roster.clear_trigger(conn, player["id"])
            stats["failed"] += 1
            continue

        stats["synced"] += 1
        if updated["trigger_cutscene"]:
            stats["triggered"] += 1
            print(f"[sync] {riot_id}: new match {updated['last_match_id']} "
                  f"({updated.get('last_kda')}) -> cutscene")

        print(f"[sync] {riot_id}: {updated.get('tier')} ({updated.get('lp_change') or '-'})")

    return stats

def main():
    settings = load_settings()
    conn = roster.connect(settings.db_path)

    stats = sync_roster(conn, settings)
    conn.close()

    print("✅ Sync complete:", stats)

if __name__ == "__main__":
    main()
