"""JSON encoding and decoding of the stored fleet payload."""

import json
import logging
from typing import Any, Iterable, List, Optional, Tuple

from .errors import CorruptDataError
from .vehicle import VARIANTS, Vehicle

logger = logging.getLogger(__name__)


def vehicle_from_dict(stored: Any) -> Optional[Vehicle]:
    """Rebuild a vehicle of the variant named by its variantTag, or None."""
    if not isinstance(stored, dict):
        logger.warning("Skipping vehicle entry that is not an object: %r", stored)
        return None
    tag = stored.get("variantTag")
    cls = VARIANTS.get(tag) if isinstance(tag, str) else None
    if cls is None:
        logger.warning("Skipping vehicle %r with unknown variantTag %r", stored.get("id"), tag)
        return None
    return cls.from_dict(stored)


def encode_fleet(vehicles: Iterable[Vehicle]) -> str:
    """Serialize vehicles into the stored JSON array."""
    return json.dumps([v.to_dict() for v in vehicles], ensure_ascii=False)


def decode_fleet(payload: str) -> Tuple[List[Vehicle], int]:
    """
    Parse a stored JSON array into vehicles.

    Returns (vehicles, skipped). Entries that cannot be rebuilt, and later
    duplicates of an id already seen, are skipped. Raises CorruptDataError
    if the payload is not a JSON array.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError, RecursionError) as e:
        raise CorruptDataError(f"Stored fleet is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptDataError(
            f"Stored fleet must be a JSON array, got {type(data).__name__}"
        )

    vehicles: List[Vehicle] = []
    seen = set()
    skipped = 0
    for entry in data:
        vehicle = vehicle_from_dict(entry)
        if vehicle is None:
            skipped += 1
            continue
        if vehicle.id in seen:
            logger.warning("Skipping duplicate vehicle id %r in stored fleet", vehicle.id)
            skipped += 1
            continue
        seen.add(vehicle.id)
        vehicles.append(vehicle)
    return vehicles, skipped
