import sys

import requests

import riot_api
from overlay_config import load_settings
from tier_codec import format_tier, rank_point_from_entry

NO_MATCH = "NO_MATCH"


class TierLookupError(Exception):
    def __init__(self, message, status=500):
        super().__init__(message)
        self.message = message
        self.status = status


def lookup_tier(name, tag, settings):
    """
    One-off tier lookup for name#tag.
    Returns {"success": True, "tier": ..., "lastMatchId": ...}.
    """
    name = (name or "").strip()
    tag = (tag or "").strip()
    if not name or not tag:
        raise TierLookupError("닉네임#태그를 확인해주세요.", status=400)

    key = settings.api_key
    try:
        account = riot_api.get_account(name, tag, settings.routing, key)
    except requests.exceptions.HTTPError as e:
        status = riot_api.status_of(e)
        if status == 403:
            raise TierLookupError("API KEY EXPIRED") from e
        if status == 404:
            raise TierLookupError("ID NOT FOUND") from e
        raise

    puuid = (account or {}).get("puuid")
    if not puuid:
        raise TierLookupError("NO PUUID")

    last_match_id = riot_api.get_last_match_id(puuid, settings.routing, key) or NO_MATCH

    entries = riot_api.get_league_entries(puuid, settings.platform, key)
    solo = riot_api.find_queue_entry(entries, settings.queue_type)

    return {
        "success": True,
        "tier": format_tier(rank_point_from_entry(solo), settings.locale),
        "lastMatchId": last_match_id,
    }

def main():
    if len(sys.argv) < 2:
        raise SystemExit("usage: python get_tier.py 'Name#TAG'")

    name, tag = riot_api.parse_riot_id(sys.argv[1])
    settings = load_settings()

    result = lookup_tier(name, tag, settings)
    print(f"✅ {name}#{tag}: {result['tier']} (last match: {result['lastMatchId']})")

if __name__ == "__main__":
    main()
