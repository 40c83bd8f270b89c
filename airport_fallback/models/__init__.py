"""
Data models for the airport_fallback library.

Raw records mirror the OurAirports CSV rows, compact records are what the
embedded table stores, and Airport/Runway are the expanded views returned
by lookups.
"""

from .raw import RawAirport, RawRunway
from .compact import CompactAirport, CompactRunway
from .runway import Runway, RunwayEnd
from .airport import Airport
from .meta import TableMeta

__all__ = [
    # Source rows
    'RawAirport',
    'RawRunway',
    # Stored table
    'CompactAirport',
    'CompactRunway',
    'TableMeta',
    # Expanded views
    'Airport',
    'Runway',
    'RunwayEnd',
]
