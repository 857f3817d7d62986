"""
JSON loader for the loot catalog dump.

Parses a {floor: [loot, ...]} document into validated LootEntry pools.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Union

from ..types import Catalog, LootEntry

logger = logging.getLogger(__name__)


# Field names used by the dump -> LootEntry attribute
LOOT_FIELDS = {
    'displayName': 'display_name',
    'id': 'id',
    'chance': 'base_chance',
    'maxScore': 'max_score',
}


class CatalogError(ValueError):
    """Raised when the loot catalog is malformed."""


def load_catalog(path: Union[str, Path]) -> Catalog:
    """
    Load the loot catalog from a JSON dump.

    Expected format:
    {
        "floor_name": [
            {"displayName": "Item", "id": "ITEM_ID", "chance": 0.05, "maxScore": 2800000},
            ...
        ],
        ...
    }

    Args:
        path: Path to the dump JSON

    Returns:
        Dict mapping floor name -> list of LootEntry, in document order

    Raises:
        FileNotFoundError: If the dump does not exist
        CatalogError: If the document is not valid JSON or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Loot catalog not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in {path}: {e}") from e

    catalog = parse_catalog(data)
    logger.info(
        "Loaded %d floors, %d loot entries from %s",
        len(catalog), sum(len(v) for v in catalog.values()), path
    )
    return catalog


def parse_catalog(data: Any) -> Catalog:
    """Validate a decoded dump and build the catalog."""
    if not isinstance(data, dict):
        raise CatalogError(
            f"Catalog must be an object of floor -> loot list, got {type(data).__name__}"
        )

    catalog: Catalog = {}
    for floor, loot in data.items():
        if not isinstance(loot, list):
            raise CatalogError(
                f"Floor '{floor}' must be a list of loot entries, got {type(loot).__name__}"
            )
        catalog[floor] = _parse_floor(floor, loot)

    return catalog


def _parse_floor(floor: str, loot: List[Any]) -> List[LootEntry]:
    """Build entries for one floor, rejecting duplicate ids."""
    entries = []
    seen_ids = set()

    for idx, raw in enumerate(loot):
        entry = _parse_entry(floor, idx, raw)
        if entry.id in seen_ids:
            raise CatalogError(f"Floor '{floor}': duplicate loot id '{entry.id}'")
        seen_ids.add(entry.id)
        entries.append(entry)

    return entries


def _parse_entry(floor: str, idx: int, raw: Any) -> LootEntry:
    """Build a single LootEntry, validating field presence, types and ranges."""
    where = f"Floor '{floor}' entry {idx}"

    if not isinstance(raw, dict):
        raise CatalogError(f"{where}: expected an object, got {type(raw).__name__}")

    missing = [key for key in LOOT_FIELDS if key not in raw]
    if missing:
        raise CatalogError(f"{where}: missing fields " + ", ".join(missing))

    display_name = raw['displayName']
    loot_id = raw['id']
    if not isinstance(display_name, str) or not isinstance(loot_id, str):
        raise CatalogError(f"{where}: displayName and id must be strings")

    chance = _as_float(raw['chance'], f"{where} ({loot_id}) chance")
    max_score = _as_float(raw['maxScore'], f"{where} ({loot_id}) maxScore")

    if not 0.0 <= chance <= 1.0:
        raise CatalogError(f"{where} ({loot_id}): chance must be within [0, 1], got {chance}")
    if max_score <= 0.0:
        raise CatalogError(f"{where} ({loot_id}): maxScore must be positive, got {max_score}")

    if chance == 0.0:
        logger.warning(
            "%s (%s): chance is 0, base reroll amount per drop will be undefined (NaN)",
            where, loot_id
        )

    return LootEntry(
        display_name=display_name,
        id=loot_id,
        base_chance=chance,
        max_score=max_score
    )


def _as_float(value: Any, label: str) -> float:
    """Coerce a JSON number to float, rejecting bools, strings and non-finite values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CatalogError(f"{label} must be a number, got {value!r}")
    try:
        value = float(value)
    except OverflowError as e:
        raise CatalogError(f"{label} is out of range for a float") from e
    if not math.isfinite(value):
        raise CatalogError(f"{label} must be finite, got {value}")
    return value


def catalog_summary(catalog: Catalog) -> Dict[str, int]:
    """Number of loot entries per floor."""
    return {floor: len(entries) for floor, entries in catalog.items()}
