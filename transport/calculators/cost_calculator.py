"""Transport cost calculator - Pure calculation logic without UI."""

from __future__ import annotations
import math
from dataclasses import asdict, dataclass
from typing import Dict, Tuple

from services.utils import coerce
from transport.models import TripParameters

# Categories at or below this amount are left out of the breakdown
BREAKDOWN_EPSILON = 1e-4

CATEGORY_FUEL = "Fuel"
CATEGORY_ADBLUE = "AdBlue"
CATEGORY_FEES = "Tolls & fees"
CATEGORY_DRIVER = "Driver"
CATEGORY_PER_DIEM = "Per diem"
CATEGORY_OTHER = "Other"

CATEGORY_ORDER: Tuple[str, ...] = (
    CATEGORY_FUEL,
    CATEGORY_ADBLUE,
    CATEGORY_FEES,
    CATEGORY_DRIVER,
    CATEGORY_PER_DIEM,
    CATEGORY_OTHER,
)


@dataclass(frozen=True)
class BreakdownItem:
    """One slice of the cost pie."""

    label: str
    amount: float


@dataclass(frozen=True)
class DerivedOutput:
    """Every metric derived from one TripParameters snapshot."""

    total_distance_km: float
    fuel_liters: float
    fuel_cost: float
    adblue_liters: float
    adblue_cost: float
    fees_total: float
    labor_cost: float
    per_diem_cost: float
    other_cost: float
    extra_expenses: float
    base_cost: float
    margin_amount: float
    price_net: float
    vat_amount: float
    price_gross: float
    cost_per_km: float
    price_per_km: float
    breakdown: Tuple[BreakdownItem, ...] = ()

    def as_dict(self) -> Dict[str, float]:
        """Scalar metrics only (breakdown excluded)."""
        data = asdict(self)
        data.pop("breakdown")
        return data


def _per_km(amount: float, distance_km: float) -> float:
    if distance_km <= 0:
        return 0.0
    value = amount / distance_km
    return value if math.isfinite(value) else 0.0


def per_diem_total(per_diem_amount: float, days: float) -> float:
    """
    Per-diem is a daily rate times the day count.

    An unset or zero day count bills one day, so a preset that only
    carries a flat per-diem amount still costs that amount.
    """
    return per_diem_amount * max(days, 1.0)


def build_breakdown(categories: Dict[str, float]) -> Tuple[BreakdownItem, ...]:
    """Positive categories in CATEGORY_ORDER."""
    return tuple(
        BreakdownItem(label=label, amount=categories[label])
        for label in CATEGORY_ORDER
        if categories.get(label, 0.0) > BREAKDOWN_EPSILON
    )


def derive(trip: TripParameters) -> DerivedOutput:
    """
    Compute all cost and price metrics for a trip.

    Total over non-negative-or-unset inputs: unset fields count as zero,
    per-km metrics are zero when there is no distance. Negative values
    are not rejected here; the result stays numerically consistent.

    Args:
        trip: Snapshot of the form

    Returns:
        DerivedOutput with totals, per-category costs, per-km metrics,
        net/gross price and the pie breakdown
    """
    # Distance
    total_distance_km = coerce(trip.deadhead_km) + sum(coerce(leg.distance_km) for leg in trip.legs)

    # Fuel and AdBlue
    fuel_liters = total_distance_km * coerce(trip.consumption_l_per_100km) / 100.0
    fuel_cost = fuel_liters * coerce(trip.fuel_price_per_liter)
    adblue_liters = fuel_liters * coerce(trip.adblue_percent_of_fuel) / 100.0
    adblue_cost = adblue_liters * coerce(trip.adblue_price_per_liter)

    # Fees, labor, per diem
    fees_total = sum(coerce(fee.amount) for fee in trip.fees)
    labor_cost = coerce(trip.hourly_rate) * (coerce(trip.drive_hours) + coerce(trip.work_hours))
    per_diem_cost = per_diem_total(coerce(trip.per_diem_amount), coerce(trip.days))

    other_cost = coerce(trip.other_cost)
    extra_expenses = coerce(trip.extra_expenses)

    base_cost = (
        fuel_cost +
        adblue_cost +
        fees_total +
        labor_cost +
        per_diem_cost +
        other_cost +
        extra_expenses
    )

    # Pricing
    margin_amount = base_cost * coerce(trip.margin_percent) / 100.0
    price_net = base_cost + margin_amount
    if trip.apply_vat:
        price_gross = price_net * (1.0 + coerce(trip.vat_percent) / 100.0)
    else:
        price_gross = price_net
    vat_amount = price_gross - price_net

    breakdown = build_breakdown({
        CATEGORY_FUEL: fuel_cost,
        CATEGORY_ADBLUE: adblue_cost,
        CATEGORY_FEES: fees_total,
        CATEGORY_DRIVER: labor_cost,
        CATEGORY_PER_DIEM: per_diem_cost,
        CATEGORY_OTHER: other_cost + extra_expenses,
    })

    return DerivedOutput(
        total_distance_km=total_distance_km,
        fuel_liters=fuel_liters,
        fuel_cost=fuel_cost,
        adblue_liters=adblue_liters,
        adblue_cost=adblue_cost,
        fees_total=fees_total,
        labor_cost=labor_cost,
        per_diem_cost=per_diem_cost,
        other_cost=other_cost,
        extra_expenses=extra_expenses,
        base_cost=base_cost,
        margin_amount=margin_amount,
        price_net=price_net,
        vat_amount=vat_amount,
        price_gross=price_gross,
        cost_per_km=_per_km(base_cost, total_distance_km),
        price_per_km=_per_km(price_net, total_distance_km),
        breakdown=breakdown,
    )
