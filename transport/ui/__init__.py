"""UI components for the transport cost calculator."""

from .preset_bar import render_preset_bar, show_flash
from .summary import render_breakdown_chart, render_summary
from .trip_inputs import render_trip_form

__all__ = [
    "render_preset_bar",
    "show_flash",
    "render_breakdown_chart",
    "render_summary",
    "render_trip_form",
]
