import os

from flask import Flask, jsonify, request

import roster
from get_tier import TierLookupError, lookup_tier
from overlay_config import load_settings
from sync import sync_roster


def create_app(settings=None):
    app = Flask(__name__)

    def current_settings():
        # resolved on first use so the app can boot before .env is filled in
        if app.config.get("OVERLAY_SETTINGS") is None:
            app.config["OVERLAY_SETTINGS"] = load_settings()
        return app.config["OVERLAY_SETTINGS"]

    app.config["OVERLAY_SETTINGS"] = settings

    @app.route("/healthz")
    def healthz():
        return "I am alive!", 200

    @app.route("/api/get-tier")
    def get_tier():
        name = request.args.get("name", "")
        tag = request.args.get("tag", "")

        try:
            body = lookup_tier(name, tag, current_settings())
            status = 200
        except TierLookupError as e:
            print(f"[get-tier] {name}#{tag}: {e.message}")
            body, status = {"success": False, "error": e.message}, e.status
        except Exception as e:
            print(f"[get-tier] ERROR for {name}#{tag}: {e}")
            body, status = {"success": False, "error": str(e).upper()}, 500

        resp = jsonify(body)
        resp.status_code = status
        resp.headers["Cache-Control"] = "no-store"
        return resp

    @app.route("/api/players")
    def players():
        # what the overlay polls: tiers, history slots and cutscene flags
        conn = roster.connect(current_settings().db_path)
        try:
            rows = roster.load_players(conn)
        finally:
            conn.close()

        resp = jsonify({"success": True, "players": rows})
        resp.headers["Cache-Control"] = "no-store"
        return resp

    @app.route("/api/sync", methods=["GET", "POST"])
    def sync():
        try:
            settings = current_settings()
            conn = roster.connect(settings.db_path)
            try:
                stats = sync_roster(conn, settings)
            finally:
                conn.close()
        except Exception as e:
            print(f"[sync] ERROR: {e}")
            return jsonify({"error": str(e)}), 500

        return jsonify({"success": True, **stats}), 200

    return app

def run():
    create_app().run(host="0.0.0.0", port=int(os.getenv("PORT", "10000")))

if __name__ == "__main__":
    run()
