"""
Trip input model.

TripParameters is an immutable snapshot of every form field. The UI builds
a new one on each edit; the calculator only ever reads it.

Numeric fields hold a finite non-negative float or None (unset). The
calculator treats None as zero. Raw dicts (stored presets, older preset
shapes) are normalized here in from_dict, so the calculator never has to
check whether a field exists.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional, Tuple

from services.utils import clamp_non_negative, generate_unique_id, parse_number


# ============================================================================
# Field tables
# ============================================================================

NUMERIC_FIELDS: Tuple[str, ...] = (
    "deadhead_km",
    "consumption_l_per_100km",
    "fuel_price_per_liter",
    "adblue_percent_of_fuel",
    "adblue_price_per_liter",
    "hourly_rate",
    "drive_hours",
    "work_hours",
    "per_diem_amount",
    "days",
    "other_cost",
    "extra_expenses",
    "margin_percent",
    "vat_percent",
)

# Keys written by older (browser-era, camelCase) presets
LEGACY_KEYS: Dict[str, Tuple[str, ...]] = {
    "deadhead_km": ("deadheadKm", "prejazdNakladkaKm"),
    "consumption_l_per_100km": ("consumptionLPer100Km", "consumption"),
    "fuel_price_per_liter": ("fuelPricePerLiter", "fuelPrice"),
    "adblue_percent_of_fuel": ("adBluePercentOfFuel", "adbluePct"),
    "adblue_price_per_liter": ("adBluePricePerLiter", "adbluePrice"),
    "hourly_rate": ("hourlyRate",),
    "drive_hours": ("driveHours",),
    "work_hours": ("workHours",),
    "per_diem_amount": ("perDiemAmount", "perDiem"),
    "days": (),
    "other_cost": ("otherCost",),
    "extra_expenses": ("extraExpenses",),
    "margin_percent": ("marginPercent", "marginPct"),
    "vat_percent": ("vatPercent", "vatPct"),
    "apply_vat": ("applyVat",),
    "preset_name": ("presetName",),
}

DEFAULT_FEE_NAME = "Toll"


def _pick(raw: Dict[str, Any], key: str) -> Any:
    """Return raw[key], falling back to its legacy aliases."""
    if key in raw:
        return raw[key]
    for alias in LEGACY_KEYS.get(key, ()):
        if alias in raw:
            return raw[alias]
    return None


def _number(raw: Any) -> Optional[float]:
    return clamp_non_negative(parse_number(raw))


def _flag(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    return bool(raw)


def _label(raw: Any) -> str:
    return "" if raw is None else str(raw)


# ============================================================================
# Line items
# ============================================================================

@dataclass(frozen=True)
class RouteLeg:
    """Named segment of the loaded route."""

    id: str
    name: str = ""
    distance_km: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "distance_km": self.distance_km}


@dataclass(frozen=True)
class FeeItem:
    """Flat fee line item (toll, parking, ferry...)."""

    id: str
    name: str = ""
    amount: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "amount": self.amount}


def _parse_legs(raw: Any) -> Tuple[RouteLeg, ...]:
    legs: List[RouteLeg] = []
    seen: set[str] = set()
    for row in raw if isinstance(raw, list) else []:
        if not isinstance(row, dict):
            continue
        leg_id = _label(row.get("id")).strip()
        if not leg_id or leg_id in seen:
            leg_id = generate_unique_id(seen)
        seen.add(leg_id)
        distance = row.get("distance_km", row.get("distanceKm", row.get("km")))
        legs.append(RouteLeg(id=leg_id, name=_label(row.get("name")), distance_km=_number(distance)))
    return tuple(legs)


def _parse_fees(raw: Any) -> Tuple[FeeItem, ...]:
    fees: List[FeeItem] = []
    seen: set[str] = set()
    for row in raw if isinstance(raw, list) else []:
        if not isinstance(row, dict):
            continue
        fee_id = _label(row.get("id")).strip()
        if not fee_id or fee_id in seen:
            fee_id = generate_unique_id(seen)
        seen.add(fee_id)
        fees.append(FeeItem(id=fee_id, name=_label(row.get("name")), amount=_number(row.get("amount"))))
    return tuple(fees)


# ============================================================================
# Trip parameters
# ============================================================================

@dataclass(frozen=True)
class TripParameters:
    """All inputs for one transport job."""

    # Distance
    deadhead_km: Optional[float] = None
    legs: Tuple[RouteLeg, ...] = ()

    # Fuel
    consumption_l_per_100km: Optional[float] = None
    fuel_price_per_liter: Optional[float] = None
    adblue_percent_of_fuel: Optional[float] = None
    adblue_price_per_liter: Optional[float] = None

    # Labor
    hourly_rate: Optional[float] = None
    drive_hours: Optional[float] = None
    work_hours: Optional[float] = None
    per_diem_amount: Optional[float] = None
    days: Optional[float] = None

    # Fees / other
    fees: Tuple[FeeItem, ...] = ()
    other_cost: Optional[float] = None
    extra_expenses: Optional[float] = None

    # Pricing
    margin_percent: Optional[float] = None
    apply_vat: bool = False
    vat_percent: Optional[float] = None

    # Metadata (persistence only)
    preset_name: str = ""

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def default(cls) -> "TripParameters":
        """Fresh form: one empty-named leg, everything else unset."""
        return cls(legs=(RouteLeg(id=generate_unique_id()),))

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TripParameters":
        """
        Build from a raw (possibly partial or older-shaped) dict.

        Every field is defaulted independently: missing or invalid numbers
        become None, negatives clamp to 0, rows that are not dicts are
        skipped and rows without an id get a fresh one.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"Trip record must be a dict, got {type(raw).__name__}")

        values: Dict[str, Any] = {name: _number(_pick(raw, name)) for name in NUMERIC_FIELDS}
        values["legs"] = _parse_legs(raw.get("legs"))
        values["fees"] = _parse_fees(raw.get("fees"))
        values["apply_vat"] = _flag(_pick(raw, "apply_vat"))
        values["preset_name"] = _label(_pick(raw, "preset_name"))
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; inverse of from_dict for valid trips."""
        out: Dict[str, Any] = {"preset_name": self.preset_name}
        for f in fields(self):
            if f.name in ("legs", "fees", "preset_name"):
                continue
            out[f.name] = getattr(self, f.name)
        out["legs"] = [leg.to_dict() for leg in self.legs]
        out["fees"] = [fee.to_dict() for fee in self.fees]
        return out

    # ------------------------------------------------------------------
    # Editing (each returns a new TripParameters)
    # ------------------------------------------------------------------

    def leg_ids(self) -> List[str]:
        return [leg.id for leg in self.legs]

    def fee_ids(self) -> List[str]:
        return [fee.id for fee in self.fees]

    def with_leg_added(self) -> "TripParameters":
        leg = RouteLeg(
            id=generate_unique_id(self.leg_ids()),
            name=f"Leg {len(self.legs) + 1}",
            distance_km=0.0,
        )
        return replace(self, legs=self.legs + (leg,))

    def with_leg_removed(self, leg_id: str) -> "TripParameters":
        return replace(self, legs=tuple(leg for leg in self.legs if leg.id != leg_id))

    def with_fee_added(self) -> "TripParameters":
        fee = FeeItem(id=generate_unique_id(self.fee_ids()), name=DEFAULT_FEE_NAME, amount=0.0)
        return replace(self, fees=self.fees + (fee,))

    def with_fee_removed(self, fee_id: str) -> "TripParameters":
        return replace(self, fees=tuple(fee for fee in self.fees if fee.id != fee_id))

    def with_values(self, **changes: Any) -> "TripParameters":
        """Replace fields, clamping numeric ones to the non-negative domain."""
        for name in NUMERIC_FIELDS:
            if name in changes:
                changes[name] = _number(changes[name])
        return replace(self, **changes)

