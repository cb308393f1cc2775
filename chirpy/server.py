"""Command that configures and runs the Chirpy service."""

from __future__ import annotations

import argparse
import os
import sqlite3
import sys

from dotenv import load_dotenv

from chirpy.database import Queries, connect
from chirpy.handlers import ApiConfig, create_app

HOST = "0.0.0.0"
PORT = 8080


def get_config(env_file=".env") -> ApiConfig:
    """Load settings from the environment and an optional env file."""
    load_dotenv(env_file)
    db_url = os.getenv("DB_URL", "")
    platform = os.getenv("PLATFORM", "")
    queries = Queries(connect(db_url))
    queries.create_schema()
    return ApiConfig(queries, platform=platform)


def main(argv=None) -> int:
    """Serve the API and the current directory on port 8080."""
    parser = argparse.ArgumentParser(
        prog="chirpy",
        description="Run the Chirpy HTTP service on port 8080.",
    )
    parser.parse_args(argv)
    try:
        config = get_config()
    except (ValueError, sqlite3.Error) as exc:
        print(f"failed - {exc}", file=sys.stderr)
        return 1
    app = create_app(config, ".")
    app.run(host=HOST, port=PORT)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())