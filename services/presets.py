"""
Preset store - one named slot holding the last saved trip.

Load outcomes are returned as values, not raised:
- PresetLoaded: slot present and readable (missing fields defaulted)
- PresetNotFound: nothing saved yet
- MalformedStoredPreset: slot holds text that is not a JSON object
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Union

from services.storage import StorageManager
from transport.models import TripParameters

logger = logging.getLogger(__name__)

PRESET_KEY = "transport-cost-preset"


class KeyValueStore(Protocol):
    """What the preset store needs from a storage backend."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


@dataclass(frozen=True)
class PresetLoaded:
    trip: TripParameters


@dataclass(frozen=True)
class PresetNotFound:
    pass


@dataclass(frozen=True)
class MalformedStoredPreset:
    reason: str


LoadResult = Union[PresetLoaded, PresetNotFound, MalformedStoredPreset]


def serialize(trip: TripParameters) -> str:
    """Encode a trip as the stored JSON text."""
    return json.dumps(trip.to_dict(), ensure_ascii=False)


def deserialize(text: str) -> LoadResult:
    """Decode stored JSON text into a load outcome."""
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as e:
        return MalformedStoredPreset(reason=f"Stored preset is not valid JSON: {e}")
    except RecursionError:
        return MalformedStoredPreset(reason="Stored preset is nested too deeply to read")

    if not isinstance(raw, dict):
        return MalformedStoredPreset(
            reason=f"Stored preset is a JSON {type(raw).__name__}, expected an object"
        )

    return PresetLoaded(trip=TripParameters.from_dict(raw))


class PresetStore:
    """Save / load / reset of the single trip preset."""

    def __init__(self, storage: KeyValueStore, key: str = PRESET_KEY):
        """
        Args:
            storage: Key-value backend (LocalStorage, StorageManager, ...)
            key: Slot name owned by this store
        """
        self.storage = storage
        self.key = key

    def save(self, name: str, trip: TripParameters) -> TripParameters:
        """
        Overwrite the slot with trip, named `name`.

        Returns:
            The trip as saved (preset_name set)

        Raises:
            StoreWriteFailure: If the backend rejects the write
        """
        named = replace(trip, preset_name=name or "")
        self.storage.set(self.key, serialize(named))
        logger.info(f"Saved preset '{named.preset_name}' to slot '{self.key}'")
        return named

    def load(self) -> LoadResult:
        """Read the slot; never raises for absent or unparseable content."""
        text = self.storage.get(self.key)
        if text is None:
            logger.info(f"No preset stored in slot '{self.key}'")
            return PresetNotFound()

        result = deserialize(text)
        if isinstance(result, MalformedStoredPreset):
            logger.warning(f"Preset slot '{self.key}' is malformed: {result.reason}")
        else:
            logger.info(f"Loaded preset '{result.trip.preset_name}' from slot '{self.key}'")
        return result

    @staticmethod
    def reset() -> TripParameters:
        """Fresh default trip. Does not touch storage."""
        return TripParameters.default()


# ============================================================================
# Module-level store instance (singleton pattern)
# ============================================================================
_store: Optional[PresetStore] = None


def get_preset_store() -> PresetStore:
    """Get or create the app-wide preset store (Gist → Local storage)."""
    global _store
    if _store is None:
        _store = PresetStore(StorageManager())
    return _store
