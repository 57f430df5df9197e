"""CSV export functionality."""

from __future__ import annotations
import logging
import os

import pandas as pd
import streamlit as st

from services.utils import format_fixed2
from transport.calculators import DerivedOutput
from transport.models import TripParameters
from .rows import build_export_rows, export_filename

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Metric", "Value"]


def to_csv(trip: TripParameters, derived: DerivedOutput, date_stamp: str) -> bytes:
    """
    Serialize the estimate as a two-column Metric,Value table.

    Args:
        trip: Inputs (deadhead, margin and VAT rows come from here)
        derived: Metrics computed from trip
        date_stamp: ISO date of the export. Only the file name carries it
            (see export_filename); the table itself is date-free.

    Returns:
        UTF-8 bytes, comma separated, os.linesep between rows
    """
    rows = [(label, format_fixed2(value)) for label, value in build_export_rows(trip, derived)]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    text = df.to_csv(index=False, sep=",", lineterminator=os.linesep)
    logger.debug(f"Built CSV export ({len(rows)} rows)")
    return text.encode("utf-8")


def export_to_csv(trip: TripParameters, derived: DerivedOutput, date_stamp: str) -> None:
    """Render CSV download button."""
    st.download_button(
        "Download CSV",
        data=to_csv(trip, derived, date_stamp),
        file_name=export_filename(date_stamp, "csv"),
        mime="text/csv",
        use_container_width=True,
    )
