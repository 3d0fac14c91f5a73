"""
Reference Dataset — The canonical factor id → metadata table.

The table ships as JSON inside the package and is loaded once per process.
``build_reference_table`` regenerates it from the vendor's CSV export.
"""

from __future__ import annotations

import csv
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from prism.config import settings
from prism.models.factor_models import Level, ReferenceFactor

logger = logging.getLogger("prism.reference")

DEFAULT_REFERENCE_PATH = Path(__file__).resolve().parent.parent / "data" / "risk_factors.json"

_LEVEL_ALIASES: dict[str, Level] = {
    "critical": Level.CRITICAL,
    "high": Level.HIGH,
    "elevated": Level.ELEVATED,
    "standard": Level.STANDARD,
    "medium": Level.STANDARD,
    "low": Level.STANDARD,
}


def normalize_level(raw: Any) -> Level:
    """Map a free-form level string onto Level; unknown or non-string values are Standard."""
    if not isinstance(raw, str) or not raw:
        return Level.STANDARD
    return _LEVEL_ALIASES.get(raw.strip().lower(), Level.STANDARD)


def load_reference_table(path: str | Path | None = None) -> dict[str, ReferenceFactor]:
    """
    Load the reference table from JSON.

    Malformed entries are skipped with a warning. A missing or unreadable file
    yields an empty table so classification still falls through to the
    curated and heuristic tiers.
    """
    table_path = Path(path) if path else DEFAULT_REFERENCE_PATH
    try:
        with open(table_path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load reference table {table_path}: {e}")
        return {}

    if not isinstance(raw, dict):
        logger.error(f"Reference table {table_path} is not a JSON object")
        return {}

    table: dict[str, ReferenceFactor] = {}
    for factor_id, entry in raw.items():
        if not isinstance(entry, dict):
            logger.warning(f"Skipping reference entry {factor_id!r}: not an object")
            continue
        try:
            table[factor_id] = ReferenceFactor(
                **{**entry, "level": normalize_level(entry.get("level"))}
            )
        except ValidationError as e:
            logger.warning(f"Skipping reference entry {factor_id!r}: {e}")

    logger.info(f"Loaded {len(table)} reference risk factors from {table_path}")
    return table


@lru_cache
def get_reference_table() -> dict[str, ReferenceFactor]:
    """Process-wide reference table."""
    return load_reference_table(settings.reference_data_path)


def build_reference_table(csv_path: str | Path) -> dict[str, ReferenceFactor]:
    """
    Build the reference table from the vendor CSV export.

    Expected columns: Risk, Description, Category, Level, Type, Key.
    Rows without a Key or Risk are ignored.
    """
    table: dict[str, ReferenceFactor] = {}
    with open(csv_path, newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            key = (row.get("Key") or "").strip()
            name = (row.get("Risk") or "").strip()
            if not key or not name:
                continue
            table[key] = ReferenceFactor(
                name=name,
                description=(row.get("Description") or "").strip(),
                category=(row.get("Category") or "").strip() or "unknown",
                level=normalize_level(row.get("Level")),
                type=(row.get("Type") or "").strip() or "unknown",
            )
    logger.info(f"Built {len(table)} reference risk factors from {csv_path}")
    return table


def write_reference_table(table: dict[str, ReferenceFactor], path: str | Path) -> Path:
    """Write a reference table as the JSON lookup the loader reads."""
    out = Path(path)
    payload = {factor_id: factor.model_dump(mode="json") for factor_id, factor in table.items()}
    out.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return out


def search_reference(table: dict[str, ReferenceFactor], query: str) -> dict[str, ReferenceFactor]:
    """Case-insensitive substring search over name, description and category."""
    needle = query.lower()
    return {
        factor_id: factor
        for factor_id, factor in table.items()
        if needle in factor.name.lower()
        or needle in factor.description.lower()
        or needle in factor.category.lower()
    }


def factors_by_category(table: dict[str, ReferenceFactor], category: str) -> dict[str, ReferenceFactor]:
    return {
        factor_id: factor
        for factor_id, factor in table.items()
        if factor.category.lower() == category.lower()
    }
