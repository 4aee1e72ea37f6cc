from fleetwatch.sheets.csv_parser import parse_csv, parse_line
from fleetwatch.sheets.provider import GoogleSheetsProvider, SheetsProvider
from fleetwatch.sheets.tabs import StaticTabDirectory, TabDirectory, format_date_label

__all__ = [
    "GoogleSheetsProvider",
    "SheetsProvider",
    "StaticTabDirectory",
    "TabDirectory",
    "format_date_label",
    "parse_csv",
    "parse_line",
]
