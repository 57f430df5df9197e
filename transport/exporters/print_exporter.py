"""Printable estimate sheet."""

from __future__ import annotations
from html import escape
from typing import Any, List, Tuple

import streamlit as st

from services.utils import format_fixed2

# Rows printed in bold as subtotals
TOTAL_LABELS = frozenset({"Base cost (€)", "Price net (€)", "Price gross (€)"})

SHEET_CSS = """
body { font: 12px/1.4 Helvetica, Arial, sans-serif; margin: 0 24px; }
header { border-bottom: 2px solid #222; margin-bottom: 12px; }
header p { color: #555; margin: 2px 0 8px; }
td { padding: 3px 0; border-bottom: 1px dotted #bbb; }
td.value { text-align: right; font-variant-numeric: tabular-nums; }
tr.total td { font-weight: bold; border-bottom: 1px solid #222; }
@page { size: A4; margin: 15mm; }
"""


def export_to_print(
    export_rows: List[Tuple[str, Any]],
    title: str,
    date_stamp: str,
) -> None:
    """Render print button; the sheet opens the browser print dialog."""
    if st.button("Print", use_container_width=True):
        st.components.v1.html(generate_print_html(export_rows, title, date_stamp), height=0)
        st.toast("Opening print dialog…", icon="🖨️")


def _row_html(label: str, value: Any) -> str:
    css_class = ' class="total"' if label in TOTAL_LABELS else ""
    return f'<tr{css_class}><td>{escape(label)}</td><td class="value">{format_fixed2(value)}</td></tr>'


def generate_print_html(
    rows: List[Tuple[str, Any]],
    title: str,
    date_stamp: str,
) -> str:
    """One-page estimate: heading, date and the export rows."""
    heading = escape(title) if title else "Transport cost estimate"
    body = "\n".join(_row_html(label, value) for label, value in rows)
    return (
        "<!doctype html><html><head><meta charset='utf-8'>"
        f"<title>{heading}</title><style>{SHEET_CSS}</style></head><body>"
        f"<header><h2>{heading}</h2><p>Estimate of {escape(date_stamp)}</p></header>"
        f"<table width='100%'>{body}</table>"
        "<script>window.print();</script>"
        "</body></html>"
    )
