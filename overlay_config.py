from dotenv import load_dotenv
load_dotenv()

import os
from typing import NamedTuple

import yaml

DB_PATH = os.getenv("DB_PATH", "overlay.db")
CONFIG_PATH = os.getenv("CONFIG_PATH", "config.yaml")

DEFAULT_QUEUE = "RANKED_SOLO_5x5"


class Settings(NamedTuple):
    api_key: str
    platform: str
    routing: str
    queue_type: str
    locale: str
    request_delay_s: float
    db_path: str
    players: list


def load_config(path=CONFIG_PATH):
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def routing_for_platform(cfg, platform):
    regions = cfg["riot"]["regions"]
    if platform not in regions:
        raise KeyError(f"Platform '{platform}' not defined in config under riot.regions")
    return regions[platform]["routing"]

def load_settings(cfg=None, api_key=None, db_path=None):
    if cfg is None:
        cfg = load_config()

    api_key = api_key or os.getenv("RIOT_API_KEY")
    if not api_key:
        raise RuntimeError("RIOT_API_KEY not set in .env")

    riot = cfg.get("riot", {})
    app = cfg.get("app", {})

    platform = riot.get("platform", "KR")
    locale = app.get("locale", "ko")
    if locale not in ("ko", "en"):
        raise ValueError(f"app.locale must be 'ko' or 'en', got: {locale}")

    return Settings(
        api_key=api_key,
        platform=platform,
        routing=routing_for_platform(cfg, platform),
        queue_type=riot.get("queue_type", DEFAULT_QUEUE),
        locale=locale,
        request_delay_s=float(app.get("request_delay_s", 0)),
        db_path=db_path or DB_PATH,
        players=cfg.get("players", []) or [],
    )
