"""Export modules for results."""

from .csv_exporter import export_to_csv, to_csv
from .excel_exporter import export_to_excel, to_excel
from .print_exporter import export_to_print, generate_print_html
from .rows import build_export_rows, export_filename, today_stamp

__all__ = [
    "export_to_csv",
    "to_csv",
    "export_to_excel",
    "to_excel",
    "export_to_print",
    "generate_print_html",
    "build_export_rows",
    "export_filename",
    "today_stamp",
]
