#!/usr/bin/env python3
"""
Gamerly Today: list the games RAWG reports as released on a given day.

Only external dependency: httpx

Usage:
    python gamerly_today.py                      # today, key from RAWG_KEY
    python gamerly_today.py --date 2024-06-15
    python gamerly_today.py --json --key <rawg key>
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import date

import httpx

RAWG_API_URL = "https://api.rawg.io/api"


# ---------------------------------------------------------------------------
# RAWG API client
# ---------------------------------------------------------------------------

class RawgClient:
    def __init__(self, key: str, base_url: str = RAWG_API_URL, transport: httpx.BaseTransport | None = None):
        self.key = key
        self.client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"Accept": "application/json", "User-Agent": "GamerlyApp/1.0"},
            timeout=30.0,
            transport=transport,
        )

    def released_on(self, day: date) -> list[dict]:
        resp = self.client.get(
            "/games",
            params={
                "dates": f"{day.isoformat()},{day.isoformat()}",
                "ordering": "-released",
                "key": self.key,
            },
        )
        resp.raise_for_status()
        return resp.json().get("results") or []

    def close(self) -> None:
        self.client.close()


def resolve_key(explicit: str | None) -> str | None:
    return explicit or os.environ.get("RAWG_KEY") or os.environ.get("RAWG_API_KEY")


def format_games(games: list[dict]) -> list[str]:
    if not games:
        return ["No games found."]
    return [f"{g.get('name', 'Unknown title')} ({g.get('released') or 'TBA'})" for g in games]


# ---------------------------------------------------------------------------
# CLI mode
# ---------------------------------------------------------------------------

def run_cli(args: argparse.Namespace, transport: httpx.BaseTransport | None = None) -> int:
    """Execute the lookup and print results; returns the process exit code."""
    key = resolve_key(args.key)
    if not key:
        print("ERROR: no RAWG key. Pass --key or set RAWG_KEY.", file=sys.stderr)
        return 2

    try:
        day = date.fromisoformat(args.date) if args.date else date.today()
    except ValueError:
        print(f"ERROR: invalid date {args.date!r}, expected YYYY-MM-DD.", file=sys.stderr)
        return 2

    client = RawgClient(key, transport=transport)
    try:
        games = client.released_on(day)
    except httpx.HTTPError as e:
        print(f"ERROR: RAWG request failed: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()

    if args.json:
        print(json.dumps(games, indent=2))
        return 0

    print(f"Games released {day.isoformat()}:")
    for line in format_games(games):
        print(f"  {line}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gamerly Today -- list games released on a given day (RAWG)."
    )
    parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="RAWG API key (defaults to RAWG_KEY, then RAWG_API_KEY).",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Day to list, YYYY-MM-DD (default: today).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw RAWG results as JSON.",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()
    sys.exit(run_cli(args))


if __name__ == "__main__":
    main()
