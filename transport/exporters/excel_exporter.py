"""Excel export functionality."""

from __future__ import annotations
from io import BytesIO
from typing import Any, List, Tuple

import pandas as pd
import streamlit as st

from .rows import export_filename

SHEET_NAME = "Estimate"


def to_excel(export_rows: List[Tuple[str, Any]]) -> bytes:
    """Build an .xlsx workbook with one Metric/Value sheet."""
    buf = BytesIO()
    rows = [
        {"Metric": k, "Value": round(float(v), 2)}
        for k, v in export_rows
    ]

    with pd.ExcelWriter(buf, engine="xlsxwriter") as xw:
        df = pd.DataFrame(rows, columns=["Metric", "Value"])
        df.to_excel(xw, index=False, sheet_name=SHEET_NAME)
        ws = xw.sheets[SHEET_NAME]
        ws.set_column(0, 0, 28)
        ws.set_column(1, 1, 16)

    return buf.getvalue()


def export_to_excel(export_rows: List[Tuple[str, Any]], date_stamp: str) -> None:
    """Render Excel download button."""
    st.download_button(
        "Download Excel",
        data=to_excel(export_rows),
        file_name=export_filename(date_stamp, "xlsx"),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
