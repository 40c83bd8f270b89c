"""
Parsers for the raw OurAirports data files.
"""

from .csv_table import parse_csv, parse_csv_line

__all__ = [
    'parse_csv',
    'parse_csv_line',
]
