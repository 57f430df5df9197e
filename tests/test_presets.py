import json
from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional

import pytest

from services.presets import (
    PRESET_KEY,
    MalformedStoredPreset,
    PresetLoaded,
    PresetNotFound,
    PresetStore,
    deserialize,
    serialize,
)
from services.storage import LocalStorage, StorageError, StoreWriteFailure
from transport.calculators import derive
from transport.models import FeeItem, RouteLeg, TripParameters


class MemoryStore:
    def __init__(self) -> None:
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FullStore(MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise StoreWriteFailure("quota exceeded")


def _trip() -> TripParameters:
    return TripParameters(
        deadhead_km=50.0,
        legs=(RouteLeg(id="l1", name="Bratislava - Wien", distance_km=80.4),),
        consumption_l_per_100km=31.0,
        fuel_price_per_liter=1.499,
        adblue_percent_of_fuel=4.0,
        adblue_price_per_liter=0.7,
        hourly_rate=13.5,
        drive_hours=2.0,
        per_diem_amount=30.0,
        fees=(FeeItem(id="f1", name="Mýto", amount=21.3),),
        other_cost=10.0,
        margin_percent=12.0,
        apply_vat=True,
        vat_percent=20.0,
    )


def test_load_without_save_is_not_found() -> None:
    store = PresetStore(MemoryStore())

    assert isinstance(store.load(), PresetNotFound)


def test_save_then_load_round_trip() -> None:
    backend = MemoryStore()
    store = PresetStore(backend)
    trip = _trip()

    saved = store.save("Truck 1", trip)
    result = store.load()

    assert saved.preset_name == "Truck 1"
    assert isinstance(result, PresetLoaded)
    assert result.trip == saved
    assert derive(result.trip) == derive(trip)
    assert PRESET_KEY in backend.data


def test_save_overwrites_single_slot() -> None:
    backend = MemoryStore()
    store = PresetStore(backend)

    store.save("first", _trip())
    store.save("second", TripParameters(deadhead_km=1.0))
    result = store.load()

    assert len(backend.data) == 1
    assert isinstance(result, PresetLoaded)
    assert result.trip.preset_name == "second"
    assert result.trip.deadhead_km == 1.0


def test_save_surfaces_write_failure() -> None:
    store = PresetStore(FullStore())

    with pytest.raises(StoreWriteFailure):
        store.save("x", _trip())


@pytest.mark.parametrize("text", ["{not json", "", "[1, 2]", "42", "null", '"text"'])
def test_unparseable_or_non_object_record_is_malformed(text: str) -> None:
    backend = MemoryStore()
    backend.data[PRESET_KEY] = text

    result = PresetStore(backend).load()

    assert isinstance(result, MalformedStoredPreset)
    assert result.reason


def test_record_without_newer_fields_loads_with_defaults() -> None:
    backend = MemoryStore()
    backend.data[PRESET_KEY] = json.dumps({
        "presetName": "old",
        "legs": [{"id": "x", "name": "Úsek 1", "km": 120}],
        "consumption": 30,
        "fuelPrice": 1.5,
        "perDiem": 25,
        "applyVat": False,
    })

    result = PresetStore(backend).load()

    assert isinstance(result, PresetLoaded)
    trip = result.trip
    assert trip.preset_name == "old"
    assert trip.work_hours is None
    assert trip.days is None
    assert trip.extra_expenses is None
    d = derive(trip)
    assert d.labor_cost == 0.0
    assert d.per_diem_cost == pytest.approx(25.0)
    assert d.fuel_cost == pytest.approx(54.0)


def test_reset_returns_default_without_touching_store() -> None:
    backend = MemoryStore()
    store = PresetStore(backend)
    store.save("keep", _trip())
    before = dict(backend.data)

    fresh = store.reset()

    assert backend.data == before
    assert len(fresh.legs) == 1
    assert fresh.legs[0].name == ""
    assert fresh.apply_vat is False
    assert derive(fresh).base_cost == 0.0


def test_serialize_keeps_non_ascii_names() -> None:
    text = serialize(_trip())

    assert "Mýto" in text
    assert isinstance(deserialize(text), PresetLoaded)


def test_round_trip_through_local_file(tmp_path: Path) -> None:
    store = PresetStore(LocalStorage(tmp_path / "presets.json"))
    trip = _trip()

    store.save("file", trip)
    reopened = PresetStore(LocalStorage(tmp_path / "presets.json")).load()

    assert isinstance(reopened, PresetLoaded)
    assert reopened.trip == replace(trip, preset_name="file")


def test_oversized_integer_field_loads_as_unset() -> None:
    backend = MemoryStore()
    backend.data[PRESET_KEY] = '{"deadhead_km": ' + "9" * 400 + ', "other_cost": 5}'

    result = PresetStore(backend).load()

    assert isinstance(result, PresetLoaded)
    assert result.trip.deadhead_km is None
    assert result.trip.other_cost == 5.0
    assert derive(result.trip).base_cost == pytest.approx(5.0)


def test_deeply_nested_record_is_malformed() -> None:
    backend = MemoryStore()
    backend.data[PRESET_KEY] = '{"legs": ' + "[" * 100000 + "]" * 100000 + "}"

    result = PresetStore(backend).load()

    assert isinstance(result, MalformedStoredPreset)
    assert "nested" in result.reason


def test_corrupt_store_file_is_reported_not_treated_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "presets.json"
    path.write_text('{"transport-cost-preset": "{\\"deadhead_km\\": 5}", "broken', encoding="utf-8")
    store = PresetStore(LocalStorage(path))

    with pytest.raises(StorageError):
        store.load()
