import pytest

import overlay_config

CFG = {
    "riot": {
        "platform": "KR",
        "regions": {"KR": {"routing": "ASIA"}, "NA1": {"routing": "AMERICAS"}},
    },
    "app": {"locale": "en", "request_delay_s": 1.5},
    "players": [{"riot_id": "Faker#KR1"}],
}


def test_load_settings_from_cfg():
    s = overlay_config.load_settings(CFG, api_key="KEY", db_path="x.db")
    assert s.api_key == "KEY"
    assert (s.platform, s.routing) == ("KR", "ASIA")
    assert s.queue_type == "RANKED_SOLO_5x5"
    assert s.locale == "en"
    assert s.request_delay_s == 1.5
    assert s.db_path == "x.db"
    assert s.players == [{"riot_id": "Faker#KR1"}]

def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("RIOT_API_KEY", raising=False)
    with pytest.raises(RuntimeError, match="RIOT_API_KEY"):
        overlay_config.load_settings(CFG)

def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv("RIOT_API_KEY", "ENVKEY")
    assert overlay_config.load_settings(CFG).api_key == "ENVKEY"

def test_unknown_platform():
    cfg = dict(CFG, riot={"platform": "OC1", "regions": CFG["riot"]["regions"]})
    with pytest.raises(KeyError):
        overlay_config.load_settings(cfg, api_key="KEY")

def test_bad_locale():
    cfg = dict(CFG, app={"locale": "fr"})
    with pytest.raises(ValueError):
        overlay_config.load_settings(cfg, api_key="KEY")

def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("riot:\n  platform: NA1\n", encoding="utf-8")
    assert overlay_config.load_config(str(path)) == {"riot": {"platform": "NA1"}}
