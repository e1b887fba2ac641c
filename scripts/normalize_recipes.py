"""
Normalize Raw Recipe Dumps
==========================

Goal: turn a dump of raw recipe records (old exports, stored AI responses)
into canonical recipes, one per line.

Input:
  - JSON list, JSON object with "recipes"/"data", or JSONL

Output:
  - JSONL of canonical recipes (defaults to <input>.canonical.jsonl)

Notes:
  - Offline tool, not used by the API at runtime.
  - Records that are not objects are skipped with a warning.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from recipe_ingest.data.loaders import load_raw_records, normalize_records  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Normalize raw recipe records")
    parser.add_argument("input", type=Path, help="JSON or JSONL file of raw records")
    parser.add_argument("--out", type=Path, default=None, help="Output JSONL path")
    parser.add_argument(
        "--only-complete",
        action="store_true",
        help="Drop recipes without ingredients or instructions",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    if not args.input.exists():
        print(f"Input not found: {args.input}")
        return 1

    out = args.out or args.input.with_suffix(".canonical.jsonl")
    records = load_raw_records(args.input)

    written = 0
    incomplete = 0
    with open(out, "w", encoding="utf-8") as f:
        for recipe in tqdm(normalize_records(records), total=len(records), desc="Recipes", unit="recipe"):
            if not recipe.is_complete():
                incomplete += 1
                if args.only_complete:
                    continue
            f.write(json.dumps(recipe.model_dump(), ensure_ascii=False) + "\n")
            written += 1

    print(f"Wrote {written} canonical recipes to {out} ({incomplete} incomplete)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
