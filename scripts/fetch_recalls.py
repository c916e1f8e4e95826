#!/usr/bin/env python3
"""
Run one toy recall search against the live CPSC API and print the JSON result.

Useful to check the upstream API without starting the server. Run from project root:

    python scripts/fetch_recalls.py
    python scripts/fetch_recalls.py --q doll --start 2024-01-01 --limit 5
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Project root on path so "app" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from app.core.errors import RecallSearchError
from app.services.recall_service import search_toy_recalls


def main() -> None:
    parser = argparse.ArgumentParser(description="Search toy-related CPSC recalls.")
    parser.add_argument("--q", default=None, help="Keyword (default: toy; hazard query uses choking).")
    parser.add_argument("--start", default=None, help="RecallDateStart, passed through as-is.")
    parser.add_argument("--end", default=None, help="RecallDateEnd, passed through as-is.")
    parser.add_argument("--limit", default=None, help="Max results (default 20, max 100).")
    args = parser.parse_args()

    try:
        result = asyncio.run(search_toy_recalls(q=args.q, start=args.start, end=args.end, limit=args.limit))
    except RecallSearchError as e:
        print(f"{e.error}: {e.detail}", file=sys.stderr)
        sys.exit(1)

    print(result.model_dump_json(indent=2, by_alias=True))


if __name__ == "__main__":
    main()
