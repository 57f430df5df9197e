"""Summary metrics and cost breakdown chart."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import streamlit as st

from services.utils import coerce, format_fixed2
from transport.calculators import CATEGORY_ORDER, DerivedOutput
from transport.models import TripParameters

COLORS = ["#4f46e5", "#10b981", "#f59e0b", "#ef4444", "#06b6d4", "#8b5cf6"]
CATEGORY_COLORS = dict(zip(CATEGORY_ORDER, COLORS))


def render_summary(trip: TripParameters, derived: DerivedOutput) -> None:
    """Render summary metrics next to the breakdown pie."""
    st.subheader("💶 Summary")
    left, right = st.columns(2)

    with left:
        c1, c2 = st.columns(2)
        with c1:
            st.metric("Total distance", f"{format_fixed2(derived.total_distance_km)} km")
            st.metric("AdBlue", f"{format_fixed2(derived.adblue_liters)} l / {format_fixed2(derived.adblue_cost)} €")
            st.metric("Driver", f"{format_fixed2(derived.labor_cost)} €")
            st.metric("Other + extra", f"{format_fixed2(derived.other_cost + derived.extra_expenses)} €")
        with c2:
            st.metric("Fuel", f"{format_fixed2(derived.fuel_liters)} l / {format_fixed2(derived.fuel_cost)} €")
            st.metric("Tolls, fees", f"{format_fixed2(derived.fees_total)} €")
            st.metric("Per diem", f"{format_fixed2(derived.per_diem_cost)} €")
            st.metric("Cost/km", f"{format_fixed2(derived.cost_per_km)} €/km")

        st.markdown("---")
        c3, c4 = st.columns(2)
        with c3:
            st.metric("Base cost", f"{format_fixed2(derived.base_cost)} €")
            st.metric("Price (net)", f"{format_fixed2(derived.price_net)} €")
            st.metric("Price/km (net)", f"{format_fixed2(derived.price_per_km)} €/km")
        with c4:
            st.metric(
                "Margin",
                f"{format_fixed2(derived.margin_amount)} €",
                help=f"{format_fixed2(coerce(trip.margin_percent))} % of base cost",
            )
            gross_label = (
                f"Price (gross, VAT {format_fixed2(coerce(trip.vat_percent))} %)"
                if trip.apply_vat else "Price (gross)"
            )
            st.metric(gross_label, f"{format_fixed2(derived.price_gross)} €")

    with right:
        render_breakdown_chart(derived)


def render_breakdown_chart(derived: DerivedOutput) -> None:
    """Pie chart of positive cost categories."""
    if not derived.breakdown:
        st.caption("Enter costs to see the breakdown.")
        return

    df = pd.DataFrame(
        [{"Category": item.label, "Amount": item.amount} for item in derived.breakdown]
    )
    fig = px.pie(
        df,
        names="Category",
        values="Amount",
        color="Category",
        color_discrete_map=CATEGORY_COLORS,
        category_orders={"Category": list(CATEGORY_ORDER)},
    )
    fig.update_traces(textinfo="label+percent", hovertemplate="%{label}: %{value:.2f} €<extra></extra>")
    fig.update_layout(margin=dict(t=10, b=10, l=10, r=10), height=320)
    st.plotly_chart(fig, use_container_width=True)
