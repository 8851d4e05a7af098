import pytest
import requests

import riot_api


class FakeResponse:
    def __init__(self, status_code=200, payload=None, headers=None):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)


@pytest.fixture
def no_sleep(monkeypatch):
    sleeps = []
    monkeypatch.setattr(riot_api.time, "sleep", sleeps.append)
    return sleeps

def queue_responses(monkeypatch, responses):
    calls = []

    def fake_get(url, headers=None, params=None, timeout=None):
        calls.append((url, headers, params))
        item = responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(riot_api.requests, "get", fake_get)
    return calls


def test_riot_get_sends_token_and_returns_json(monkeypatch, no_sleep):
    calls = queue_responses(monkeypatch, [FakeResponse(payload={"puuid": "abc"})])
    assert riot_api.riot_get("https://x", "KEY") == {"puuid": "abc"}
    assert calls[0][1] == {"X-Riot-Token": "KEY"}
    assert no_sleep == []

def test_riot_get_waits_out_rate_limit(monkeypatch, no_sleep):
    queue_responses(monkeypatch, [
        FakeResponse(429, headers={"Retry-After": "3"}),
        FakeResponse(payload=[1]),
    ])
    assert riot_api.riot_get("https://x", "KEY") == [1]
    assert no_sleep == [3]

def test_riot_get_retries_server_errors_and_network_flakes(monkeypatch, no_sleep):
    queue_responses(monkeypatch, [
        FakeResponse(503),
        requests.exceptions.ConnectionError("reset"),
        FakeResponse(payload="ok"),
    ])
    assert riot_api.riot_get("https://x", "KEY") == "ok"
    assert no_sleep == [2, 4]

def test_riot_get_does_not_retry_client_errors(monkeypatch, no_sleep):
    calls = queue_responses(monkeypatch, [FakeResponse(404)])
    with pytest.raises(requests.exceptions.HTTPError):
        riot_api.riot_get("https://x", "KEY")
    assert len(calls) == 1

def test_riot_get_gives_up_after_max_retries(monkeypatch, no_sleep):
    queue_responses(monkeypatch, [FakeResponse(500)] * 2)
    with pytest.raises(requests.exceptions.HTTPError):
        riot_api.riot_get("https://x", "KEY", max_retries=2)

def test_parse_riot_id():
    assert riot_api.parse_riot_id("Hide on bush#KR1") == ("Hide on bush", "KR1")
    with pytest.raises(ValueError):
        riot_api.parse_riot_id("nohashtag")

def test_account_url_is_quoted(monkeypatch, no_sleep):
    calls = queue_responses(monkeypatch, [FakeResponse(payload={"puuid": "p"})])
    riot_api.get_account("Hide on bush", "KR1", "ASIA", "KEY")
    assert calls[0][0] == (
        "https://asia.api.riotgames.com/riot/account/v1/accounts/by-riot-id/Hide%20on%20bush/KR1"
    )

def test_last_match_id(monkeypatch, no_sleep):
    calls = queue_responses(monkeypatch, [FakeResponse(payload=["KR_1"]), FakeResponse(payload=[])])
    assert riot_api.get_last_match_id("p", "ASIA", "KEY") == "KR_1"
    assert riot_api.get_last_match_id("p", "ASIA", "KEY") is None
    assert calls[0][2] == {"start": 0, "count": 1}

def test_active_game_not_found_is_none(monkeypatch, no_sleep):
    queue_responses(monkeypatch, [FakeResponse(404)])
    assert riot_api.get_active_game("p", "KR", "KEY") is None

def test_active_game_other_errors_raise(monkeypatch, no_sleep):
    queue_responses(monkeypatch, [FakeResponse(403)])
    with pytest.raises(requests.exceptions.HTTPError):
        riot_api.get_active_game("p", "KR", "KEY")

def test_safe_lookup_swallows_request_errors(monkeypatch, no_sleep):
    queue_responses(monkeypatch, [FakeResponse(403)])
    assert riot_api.safe_lookup(riot_api.get_league_entries, "p", "KR", "KEY") is None

def test_find_helpers():
    match = {"info": {"participants": [{"puuid": "a"}, {"puuid": "me", "win": True}]}}
    assert riot_api.find_participant(match, "me") == {"puuid": "me", "win": True}
    assert riot_api.find_participant(None, "me") is None

    entries = [{"queueType": "RANKED_FLEX_SR"}, {"queueType": "RANKED_SOLO_5x5", "tier": "GOLD"}]
    assert riot_api.find_queue_entry(entries)["tier"] == "GOLD"
    assert riot_api.find_queue_entry(None) is None

    game = {"participants": [{"puuid": "me", "championId": 103}]}
    assert riot_api.live_champion_id(game, "me") == 103
    assert riot_api.live_champion_id(None, "me") is None

def test_champion_map(monkeypatch):
    payload = {"data": {"Ahri": {"key": "103", "name": "Ahri"}, "MonkeyKing": {"key": "62", "name": "Wukong"}}}
    queue_responses(monkeypatch, [FakeResponse(payload=payload)])
    assert riot_api.dd_champion_map(version="14.1.1") == {"103": "Ahri", "62": "MonkeyKing"}

def test_riot_get_gives_up_after_repeated_network_errors(monkeypatch, no_sleep):
    queue_responses(monkeypatch, [requests.exceptions.Timeout("slow")] * 2)
    with pytest.raises(requests.exceptions.Timeout):
        riot_api.riot_get("https://x", "KEY", max_retries=2)

def test_riot_get_with_no_attempts(monkeypatch, no_sleep):
    calls = queue_responses(monkeypatch, [])
    with pytest.raises(requests.exceptions.RetryError):
        riot_api.riot_get("https://x", "KEY", max_retries=0)
    assert calls == []
