"""Export rows shared by the CSV, Excel and print exporters."""

from __future__ import annotations
from datetime import date
from typing import List, Optional, Tuple

from services.utils import coerce
from transport.calculators import DerivedOutput
from transport.models import TripParameters

FILENAME_PREFIX = "cost-estimate"


def build_export_rows(trip: TripParameters, derived: DerivedOutput) -> List[Tuple[str, float]]:
    """
    Flatten the trip and its derived metrics into (label, value) rows.

    Row order is fixed; VAT % is exported as 0 when VAT is switched off.
    """
    vat_percent = coerce(trip.vat_percent) if trip.apply_vat else 0.0
    return [
        ("Deadhead (km)", coerce(trip.deadhead_km)),
        ("Total distance (km)", derived.total_distance_km),
        ("Fuel (l)", derived.fuel_liters),
        ("Fuel (€)", derived.fuel_cost),
        ("AdBlue (l)", derived.adblue_liters),
        ("AdBlue (€)", derived.adblue_cost),
        ("Tolls & fees (€)", derived.fees_total),
        ("Driver (€)", derived.labor_cost),
        ("Per diem (€)", derived.per_diem_cost),
        ("Other (€)", derived.other_cost),
        ("Extra expenses (€)", derived.extra_expenses),
        ("Base cost (€)", derived.base_cost),
        ("Margin (%)", coerce(trip.margin_percent)),
        ("Margin (€)", derived.margin_amount),
        ("Price net (€)", derived.price_net),
        ("VAT (%)", vat_percent),
        ("VAT (€)", derived.vat_amount),
        ("Price gross (€)", derived.price_gross),
        ("Cost per km (€/km)", derived.cost_per_km),
        ("Price per km (€/km)", derived.price_per_km),
    ]


def today_stamp(today: Optional[date] = None) -> str:
    """ISO date used in export file names."""
    return (today or date.today()).isoformat()


def export_filename(date_stamp: str, ext: str) -> str:
    """cost-estimate_<ISO date>.<ext>"""
    return f"{FILENAME_PREFIX}_{date_stamp}.{ext.lstrip('.')}"
