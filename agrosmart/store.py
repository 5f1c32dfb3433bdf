"""Crop record storage.

Crops live in a single slot (``"crops"``) of a small JSON key-value file, as
an insertion-ordered list of records using the field names of
``Crop.to_dict``.

``append`` is a read-modify-write of the whole list with no locking.  Two
processes (or two browser tabs served by separate sessions) appending at the
same time race: the last write replaces the whole collection.
"""

import json
import logging
import os
from typing import Dict, List, Protocol

from .models import Crop

logger = logging.getLogger(__name__)

CROPS_SLOT = "crops"


class CropRepository(Protocol):
    def load_all(self) -> List[Crop]:
        ...

    def append(self, crop: Crop) -> None:
        ...

    def find_by_id(self, crop_id: str) -> Crop | None:
        ...


def _parse_crops(raw) -> List[Crop]:
    if not isinstance(raw, list):
        raise TypeError(f"expected a list of crops, got {type(raw).__name__}")
    return [Crop.from_dict(item) for item in raw]


class InMemoryCropRepository:
    """Keeps crops in a list; used by tests and as a scratch store."""

    def __init__(self, crops: List[Crop] | None = None):
        self._crops: List[Crop] = list(crops or [])

    def load_all(self) -> List[Crop]:
        return list(self._crops)

    def append(self, crop: Crop) -> None:
        self._crops.append(crop)

    def find_by_id(self, crop_id: str) -> Crop | None:
        return next((c for c in self._crops if c.id == crop_id), None)


class JsonFileCropRepository:
    """Crop list persisted in the ``"crops"`` slot of a JSON file."""

    def __init__(self, path: str, slot: str = CROPS_SLOT):
        self.path = path
        self.slot = slot

    def _read_slots(self) -> Dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError("store file must hold a JSON object")
        return data

    def load_all(self) -> List[Crop]:
        """Return stored crops, or an empty list if the slot is absent or malformed."""
        try:
            slots = self._read_slots()
            if self.slot not in slots:
                return []
            return _parse_crops(slots[self.slot])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Treating crop store %s as empty: %s", self.path, e)
            return []

    def append(self, crop: Crop) -> None:
        try:
            slots = self._read_slots()
        except (OSError, json.JSONDecodeError, TypeError) as e:
            logger.warning("Overwriting unreadable crop store %s: %s", self.path, e)
            slots = {}

        crops = self.load_all()
        crops.append(crop)
        slots[self.slot] = [c.to_dict() for c in crops]

        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(slots, f, indent=2)
        logger.info("Saved crop %s (%s); %d crops stored", crop.id, crop.name, len(crops))

    def find_by_id(self, crop_id: str) -> Crop | None:
        for crop in self.load_all():
            if crop.id == crop_id:
                return crop
        return None
