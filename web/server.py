"""
Flask server exposing the cached tide reading as JSON.

Read-only: it never triggers a refresh, it only reports what the updater
last stored.

Usage:
    python web/server.py              # Run on port 5000
    python web/server.py --port 8080  # Custom port
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Config
from core.cache_store import CacheStore, JsonFileCacheStore
from core.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


def create_app(store: CacheStore, clock: Optional[Clock] = None) -> Flask:
    """
    Build the Flask app.

    Args:
        store: Cache to read the tide reading from
        clock: Time source for the staleness flag
    """
    clock = clock or SystemClock()
    app = Flask(__name__)

    # ============== API ENDPOINTS ==============

    @app.route("/api/tides")
    def api_tides():
        """Get the cached temperature and tide payloads."""
        entry = store.get()
        if entry is None or not entry.is_valid():
            return jsonify({"error": "No tide data available"}), 404

        data = entry.to_dict()
        data["stale"] = entry.is_stale(clock.now())
        return jsonify(data)

    @app.route("/api/status")
    def api_status():
        """Get cache freshness without the payloads."""
        entry = store.get()
        if entry is None:
            return jsonify({
                "available": False,
                "stale": True,
                "retrieved_at": None,
                "expires_at": None,
            })

        valid = entry.is_valid()
        return jsonify({
            "available": valid,
            "stale": entry.is_stale(clock.now()),
            "retrieved_at": entry.retrieved_at.isoformat() if valid else None,
            "expires_at": entry.expires_at.isoformat(),
        })

    return app


# ============== MAIN ==============

def main():
    parser = argparse.ArgumentParser(description="Tide data read API")
    parser.add_argument("--port", type=int, default=5000, help="Port to run on")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--env", type=str, default=None, help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    config = Config(env_path=args.env)
    app = create_app(JsonFileCacheStore(config.cache_path))

    logger.info(f"Starting tide API on http://{args.host}:{args.port}")
    logger.info(f"Cache file: {config.cache_path}")

    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
