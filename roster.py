import json
import sqlite3
from pathlib import Path

from match_history import EMPTY_CHAMPION, IN_PROGRESS, align
from tier_codec import RankPoint, make_rank_point, parse_tier, unranked_label

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

JSON_COLUMNS = ("recent", "champions")
# placeholder written for a missing slot in each list column
JSON_FILL = {"recent": IN_PROGRESS, "champions": EMPTY_CHAMPION}
BOOL_COLUMNS = ("manual_tier", "trigger_cutscene")

WRITABLE_COLUMNS = (
    "puuid",
    "tier",
    "rank_division",
    "rank_sub_rank",
    "rank_lp",
    "lp_change",
    "wins",
    "losses",
    "recent",
    "champions",
    "last_match_id",
    "last_kda",
    "trigger_cutscene",
)


# ---------- connection + schema ----------

def connect(db_path):
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    ensure_schema(conn)
    return conn

def ensure_schema(conn):
    # If the players table exists, schema is already applied
    row = conn.execute("""
        SELECT name FROM sqlite_master
        WHERE type='table' AND name='players'
    """).fetchone()
    if row:
        return

    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        conn.executescript(f.read())


# ---------- row <-> record ----------

def _decode_list(raw):
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return value if isinstance(value, list) else []

def row_to_record(row):
    record = dict(row)
    for col in JSON_COLUMNS:
        record[col] = _decode_list(record.get(col))
    for col in BOOL_COLUMNS:
        record[col] = bool(record.get(col))
    record["recent"], record["champions"] = align(record["recent"], record["champions"])
    return record

def stored_rank(record):
    """
    The player's last known RankPoint. Rows written before the structured
    columns existed only carry the rendered tier label, which gets parsed.
    """
    if record.get("rank_division"):
        return make_rank_point(
            record["rank_division"], record.get("rank_sub_rank"), record.get("rank_lp")
        )
    return parse_tier(record.get("tier"))

def rank_columns(rank_point: RankPoint):
    if rank_point is None:
        return {"rank_division": None, "rank_sub_rank": None, "rank_lp": None}
    return {
        "rank_division": rank_point.division,
        "rank_sub_rank": rank_point.sub_rank,
        "rank_lp": rank_point.league_points,
    }


# ---------- reads ----------

def load_players(conn):
    rows = conn.execute("SELECT * FROM players ORDER BY id").fetchall()
    return [row_to_record(r) for r in rows]

def get_player(conn, player_id):
    row = conn.execute("SELECT * FROM players WHERE id=?", (player_id,)).fetchone()
    return row_to_record(row) if row else None


# ---------- writes ----------

def add_player(conn, riot_id, manual_tier=False, tier=None, locale="ko"):
    recent, champions = align([], [])
    with conn:
        conn.execute(
            """
            INSERT INTO players (riot_id, tier, manual_tier, recent, champions)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(riot_id) DO UPDATE SET
              manual_tier = excluded.manual_tier
            """,
            (
                riot_id,
                tier or unranked_label(locale),
                1 if manual_tier else 0,
                json.dumps(recent, ensure_ascii=False),
                json.dumps(champions, ensure_ascii=False),
            ),
        )
    return conn.execute("SELECT id FROM players WHERE riot_id=?", (riot_id,)).fetchone()[0]

def seed_players(cfg, conn, locale="ko"):
    """
    Ensures every player listed in config.yaml has a roster row.
    Returns the riot_ids that were newly inserted.
    """
    existing = {r["riot_id"] for r in conn.execute("SELECT riot_id FROM players").fetchall()}
    added = []
    for p in cfg.get("players", []) or []:
        riot_id = p.get("riot_id")
        if not riot_id or riot_id in existing:
            continue
        add_player(conn, riot_id, manual_tier=p.get("manual_tier", False),
                   tier=p.get("tier"), locale=locale)
        existing.add(riot_id)
        added.append(riot_id)
    return added

def save_player(conn, record):
    """Per-id update of one player's row, in its own transaction."""
    values = []
    for col in WRITABLE_COLUMNS:
        value = record.get(col)
        if col in JSON_COLUMNS:
            value = json.dumps(
                [JSON_FILL[col] if v is None else v for v in (value or [])],
                ensure_ascii=False,
            )
        elif col in BOOL_COLUMNS:
            value = 1 if value else 0
        values.append(value)

    assignments = ", ".join(f"{col} = ?" for col in WRITABLE_COLUMNS)
    with conn:
        conn.execute(
            f"UPDATE players SET {assignments}, updated_at = unixepoch() WHERE id = ?",
            (*values, record["id"]),
        )

def clear_trigger(conn, player_id):
    """Drops a stale cutscene flag for a player whose sync cycle did not finish."""
    with conn:
        conn.execute(
            "UPDATE players SET trigger_cutscene = 0, updated_at = unixepoch() WHERE id = ?",
            (player_id,),
        )
