"""
Data loaders for raw recipe exports.

Reads JSON or JSONL dumps of raw recipe records (AI responses, old exports)
and runs them through the normalizer.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from ..schemas.canonical import Recipe
from .normalizer import normalize

logger = logging.getLogger(__name__)


def _load_jsonl(path: Path) -> list:
    records = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as exc:
                logger.warning("Skipping malformed line %d in %s: %s", line_no, path, exc)
    return records


def load_raw_records(path: Path) -> list:
    """
    Load raw recipe records.

    Accepts a JSONL file (one record per line), a JSON list, or a JSON object
    wrapping the list under "recipes" or "data".
    """
    path = Path(path)
    if path.suffix == ".jsonl":
        records = _load_jsonl(path)
    else:
        with open(path, "r", encoding="utf-8") as f:
            raw_data = json.load(f)

        if isinstance(raw_data, dict):
            records = raw_data.get("recipes") or raw_data.get("data") or []
        else:
            records = raw_data

    if not isinstance(records, list):
        logger.warning("Unexpected payload in %s (%s), no records loaded", path, type(records).__name__)
        return []

    logger.info("Found %d raw records in %s", len(records), path)
    return records


def normalize_records(records: Iterable[Any]) -> Iterator[Recipe]:
    """Normalize each mapping record; anything else is skipped."""
    skipped = 0
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            skipped += 1
            logger.warning("Skipping record #%d: expected an object, got %s", idx, type(record).__name__)
            continue
        yield normalize(record)

    if skipped:
        logger.info("Skipped %d non-object records", skipped)
