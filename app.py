"""
Streamlit entrypoint for the Transport Cost Calculator.
- Preset toolbar (save / load / reset) on top
- Trip form -> cost derivation -> summary + breakdown pie
- CSV / Excel / Print export
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Add project root to Python path FIRST
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from services.presets import get_preset_store
from services.utils import get_secret
from transport.calculators import derive
from transport.exporters import (
    build_export_rows,
    export_to_csv,
    export_to_excel,
    export_to_print,
    today_stamp,
)
from transport.models import TripParameters
from transport.ui import render_preset_bar, render_summary, render_trip_form, show_flash

# -----------------------------------------------------------------------------
# Page setup
# -----------------------------------------------------------------------------
st.set_page_config(page_title="Transport Cost Calculator", layout="wide")

logging.basicConfig(
    level=(get_secret("LOG_LEVEL") or "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# -----------------------------------------------------------------------------
# Session state: one TripParameters, replaced wholesale on every edit
# -----------------------------------------------------------------------------
if "trip" not in st.session_state:
    st.session_state.trip = TripParameters.default()
if "form_rev" not in st.session_state:
    st.session_state.form_rev = 0

st.title("🚚 Transport Cost Calculator")
show_flash()

# Toolbar is filled after the form so Save sees this run's edits
toolbar = st.container()

trip, rows_changed = render_trip_form(st.session_state.trip, st.session_state.form_rev)

store = get_preset_store()
with toolbar:
    trip, replaced = render_preset_bar(store, trip, st.session_state.form_rev)

st.sidebar.markdown("### Presets")
st.sidebar.caption(f"File: {store.storage.get_path()}")
st.sidebar.caption(f"Last saved: {store.storage.get_mtime()}")

st.session_state.trip = trip

if replaced:
    st.session_state.form_rev += 1
    st.rerun()
if rows_changed:
    st.rerun()

# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------
derived = derive(trip)

st.markdown("---")
render_summary(trip, derived)

st.markdown("---")
st.subheader("Export")

date_stamp = today_stamp()
export_rows = build_export_rows(trip, derived)

col_a, col_b, col_c = st.columns(3)
with col_a:
    export_to_csv(trip, derived, date_stamp)
with col_b:
    export_to_excel(export_rows, date_stamp)
with col_c:
    export_to_print(export_rows, trip.preset_name, date_stamp)

st.caption("Tip: save a preset for each vehicle.")
