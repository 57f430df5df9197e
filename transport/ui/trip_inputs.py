"""
Trip Input Form
===============

Renders every TripParameters field and returns the edited snapshot.

Widget keys carry a form revision (`rev`). Loading or resetting a preset
bumps the revision so all widgets are recreated from the new trip instead
of keeping their previous session values.
"""

from __future__ import annotations
from dataclasses import replace
from typing import List, Optional, Tuple

import streamlit as st

from transport.models import FeeItem, RouteLeg, TripParameters


def _num(
    label: str,
    value: Optional[float],
    key: str,
    step: float = 0.1,
    fmt: str = "%.2f",
    **kwargs,
) -> Optional[float]:
    """Number input where an empty box means unset."""
    raw = st.number_input(
        label,
        min_value=0.0,
        value=value,
        step=step,
        format=fmt,
        key=key,
        placeholder="—",
        **kwargs,
    )
    return None if raw is None else float(raw)


# ============================================================================
# MAIN FORM
# ============================================================================

def render_trip_form(trip: TripParameters, rev: int) -> Tuple[TripParameters, bool]:
    """
    Render the input form.

    Args:
        trip: Current snapshot
        rev: Form revision used in widget keys

    Returns:
        (edited_trip, rows_changed) where rows_changed is True when a leg
        or fee row was added or removed and the page should rerun
    """
    left, right = st.columns(2)

    with left:
        with st.container(border=True):
            st.markdown("#### 🛣️ Route & fees")
            deadhead_km = _num("Deadhead to loading (km)", trip.deadhead_km, f"deadhead_{rev}")
            legs, legs_changed = _render_legs(trip, rev)
            fees, fees_changed = _render_fees(trip, rev)

    with right:
        with st.container(border=True):
            st.markdown("#### ⛽ Vehicle & prices")
            trip_values = _render_vehicle_and_prices(trip, rev)

    edited = trip.with_values(
        deadhead_km=deadhead_km,
        legs=legs,
        fees=fees,
        **trip_values,
    )
    return edited, legs_changed or fees_changed


# ============================================================================
# ROUTE LEGS & FEES
# ============================================================================

def _render_legs(trip: TripParameters, rev: int) -> Tuple[Tuple[RouteLeg, ...], bool]:
    st.markdown("Route legs (km)")
    legs: List[RouteLeg] = []
    changed = False

    for leg in trip.legs:
        c1, c2, c3 = st.columns([2, 2, 1])
        with c1:
            name = st.text_input(
                "Leg name", value=leg.name, key=f"leg_name_{leg.id}_{rev}",
                label_visibility="collapsed", placeholder="Name",
            )
        with c2:
            km = _num(
                "km", leg.distance_km, f"leg_km_{leg.id}_{rev}",
                label_visibility="collapsed",
            )
        with c3:
            removed = st.button("🗑️", key=f"leg_rm_{leg.id}_{rev}", help="Remove leg")
        if removed:
            changed = True
            continue
        legs.append(RouteLeg(id=leg.id, name=name, distance_km=km))

    result = replace(trip, legs=tuple(legs))
    if st.button("➕ Add leg", key=f"leg_add_{rev}"):
        result = result.with_leg_added()
        changed = True
    return result.legs, changed


def _render_fees(trip: TripParameters, rev: int) -> Tuple[Tuple[FeeItem, ...], bool]:
    st.markdown("Tolls / fees / parking")
    fees: List[FeeItem] = []
    changed = False

    for fee in trip.fees:
        c1, c2, c3 = st.columns([2, 2, 1])
        with c1:
            name = st.text_input(
                "Fee name", value=fee.name, key=f"fee_name_{fee.id}_{rev}",
                label_visibility="collapsed", placeholder="Name",
            )
        with c2:
            amount = _num(
                "€", fee.amount, f"fee_amount_{fee.id}_{rev}", step=0.01,
                label_visibility="collapsed",
            )
        with c3:
            removed = st.button("🗑️", key=f"fee_rm_{fee.id}_{rev}", help="Remove fee")
        if removed:
            changed = True
            continue
        fees.append(FeeItem(id=fee.id, name=name, amount=amount))

    result = replace(trip, fees=tuple(fees))
    if st.button("➕ Add fee", key=f"fee_add_{rev}"):
        result = result.with_fee_added()
        changed = True
    return result.fees, changed


# ============================================================================
# VEHICLE, LABOR, PRICING
# ============================================================================

def _render_vehicle_and_prices(trip: TripParameters, rev: int) -> dict:
    c1, c2 = st.columns(2)
    with c1:
        consumption = _num("Consumption (l/100 km)", trip.consumption_l_per_100km, f"consumption_{rev}")
        adblue_pct = _num("AdBlue (% of fuel)", trip.adblue_percent_of_fuel, f"adblue_pct_{rev}")
        hourly_rate = _num("Driver rate (€/h)", trip.hourly_rate, f"hourly_rate_{rev}")
        work_hours = _num("Work hours (h)", trip.work_hours, f"work_hours_{rev}")
        days = _num("Days", trip.days, f"days_{rev}", step=1.0, fmt="%.0f")
    with c2:
        fuel_price = _num("Fuel price (€/l)", trip.fuel_price_per_liter, f"fuel_price_{rev}", step=0.001, fmt="%.3f")
        adblue_price = _num("AdBlue price (€/l)", trip.adblue_price_per_liter, f"adblue_price_{rev}", step=0.01)
        drive_hours = _num("Driving (h)", trip.drive_hours, f"drive_hours_{rev}")
        per_diem = _num("Per diem (€/day)", trip.per_diem_amount, f"per_diem_{rev}")
        st.caption("Per diem is charged per day; an empty day count bills one day.")

    c3, c4 = st.columns(2)
    with c3:
        other_cost = _num("Other costs (€)", trip.other_cost, f"other_cost_{rev}")
        margin = _num("Margin (%)", trip.margin_percent, f"margin_{rev}")
    with c4:
        extra_expenses = _num("Extra expenses (€)", trip.extra_expenses, f"extra_expenses_{rev}")
        vat_pct = _num("VAT (%)", trip.vat_percent, f"vat_pct_{rev}", step=1.0)
        apply_vat = st.toggle("Include VAT", value=trip.apply_vat, key=f"apply_vat_{rev}")

    return {
        "consumption_l_per_100km": consumption,
        "fuel_price_per_liter": fuel_price,
        "adblue_percent_of_fuel": adblue_pct,
        "adblue_price_per_liter": adblue_price,
        "hourly_rate": hourly_rate,
        "drive_hours": drive_hours,
        "work_hours": work_hours,
        "per_diem_amount": per_diem,
        "days": days,
        "other_cost": other_cost,
        "extra_expenses": extra_expenses,
        "margin_percent": margin,
        "vat_percent": vat_pct,
        "apply_vat": bool(apply_vat),
    }
