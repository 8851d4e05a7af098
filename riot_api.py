import time
from urllib.parse import quote

import requests

DDRAGON = "https://ddragon.leagueoflegends.com"


# ---------- transport ----------

def riot_get(url, api_key, params=None, timeout=15, max_retries=4):
    headers = {"X-Riot-Token": api_key}
    last = None

    for attempt in range(max_retries):
        try:
            r = requests.get(url, headers=headers, params=params, timeout=timeout)
        except requests.exceptions.RequestException as e:
            # Network flake / timeout / connection reset etc.
            last = e
            time.sleep(min(2 ** (attempt + 1), 30))
            continue

        last = r

        # Rate limit
        if r.status_code == 429:
            retry_after = int(r.headers.get("Retry-After", "2"))
            time.sleep(retry_after)
            continue

        # Transient Riot/server/proxy errors -> retry with backoff
        if r.status_code in (500, 502, 503, 504):
            time.sleep(min(2 ** (attempt + 1), 30))
            continue

        # Anything else (403 expired key, 404 unknown id, ...) is final
        r.raise_for_status()
        return r.json()

    # If we get here, all retries failed
    if last is None:
        raise requests.exceptions.RetryError(f"no attempts made for {url}")
    if isinstance(last, Exception):
        raise last
    last.raise_for_status()
    raise requests.exceptions.RetryError(f"gave up on {url} after {max_retries} attempts")

def regional_url(routing, path):
    return f"https://{routing.lower()}.api.riotgames.com{path}"

def platform_url(platform, path):
    return f"https://{platform.lower()}.api.riotgames.com{path}"

def status_of(exc):
    response = getattr(exc, "response", None)
    return response.status_code if response is not None else None

def safe_lookup(fn, *args, **kwargs):
    """
    Runs one Riot lookup; a failed call (not found, rate limited, bad key,
    network) comes back as None instead of raising.
    """
    try:
        return fn(*args, **kwargs)
    except requests.exceptions.RequestException as e:
        print(f"[riot] {fn.__name__} failed: {e}")
        return None


# ---------- account-v1 ----------

def parse_riot_id(riot_id: str):
    if not isinstance(riot_id, str) or "#" not in riot_id:
        raise ValueError(f"riot_id must look like Name#TAG, got: {riot_id}")
    name, tag = riot_id.split("#", 1)
    return name.strip(), tag.strip()

def get_account(name, tag, routing, api_key):
    url = regional_url(
        routing,
        f"/riot/account/v1/accounts/by-riot-id/{quote(name, safe='')}/{quote(tag, safe='')}",
    )
    return riot_get(url, api_key)

def get_puuid(riot_id, routing, api_key):
    name, tag = parse_riot_id(riot_id)
    return get_account(name, tag, routing, api_key).get("puuid")


# ---------- match-v5 ----------

def get_match_ids(puuid, routing, api_key, count=1):
    url = regional_url(routing, f"/lol/match/v5/matches/by-puuid/{puuid}/ids")
    return riot_get(url, api_key, params={"start": 0, "count": int(count)}) or []

def get_last_match_id(puuid, routing, api_key):
    match_ids = get_match_ids(puuid, routing, api_key, count=1)
    return match_ids[0] if match_ids else None

def get_match(match_id, routing, api_key):
    return riot_get(regional_url(routing, f"/lol/match/v5/matches/{match_id}"), api_key)

def find_participant(match_json, puuid):
    for p in (match_json or {}).get("info", {}).get("participants", []):
        if p.get("puuid") == puuid:
            return p
    return None


# ---------- league-v4 ----------

def get_league_entries(puuid, platform, api_key):
    return riot_get(platform_url(platform, f"/lol/league/v4/entries/by-puuid/{puuid}"), api_key) or []

def find_queue_entry(entries, queue_type="RANKED_SOLO_5x5"):
    for e in entries or []:
        if e.get("queueType") == queue_type:
            return e
    return None


# ---------- spectator-v5 ----------

def get_active_game(puuid, platform, api_key):
    """Live game for puuid, or None when the player is not in a game."""
    url = platform_url(platform, f"/lol/spectator/v5/active-games/by-summoner/{puuid}")
    try:
        return riot_get(url, api_key)
    except requests.exceptions.HTTPError as e:
        if status_of(e) == 404:
            return None
        raise

def live_champion_id(active_game, puuid):
    for p in (active_game or {}).get("participants", []):
        if p.get("puuid") == puuid:
            return p.get("championId")
    return None


# ---------- data dragon ----------

def dd_versions(timeout=15):
    r = requests.get(f"{DDRAGON}/api/versions.json", timeout=timeout)
    r.raise_for_status()
    return r.json()

def dd_champion_map(version=None, lang="en_US", timeout=15):
    # numeric champion key ("103") -> champion id ("Ahri"), same as match-v5 championName
    if version is None:
        version = dd_versions(timeout=timeout)[0]
    r = requests.get(f"{DDRAGON}/cdn/{version}/data/{lang}/champion.json", timeout=timeout)
    r.raise_for_status()
    return {obj["key"]: champ_id for champ_id, obj in r.json()["data"].items()}
