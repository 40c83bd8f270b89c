"""
Offline airport and runway lookup table built from OurAirports data.

This package generates a compact, size-bounded JSON table of the large
and medium airports of North America and Europe, and answers lookups
against it when no live airport-data API is available.

The main public API includes:
- AirportFallbackService: Lookups in a generated table
- FallbackTableBuilder: Generation of the table
- OurAirportsSource: Cached download of the OurAirports CSV files
- Airport, Runway, RunwayEnd: Expanded airport views
"""

__version__ = '0.1.0'

from .models import Airport, Runway, RunwayEnd, TableMeta
from .service import AirportFallbackService
from .builder import FallbackTableBuilder, GenerationResult
from .sources import OurAirportsSource
from .errors import GenerationError, FetchError, SizeLimitExceededError

__all__ = [
    'Airport',
    'Runway',
    'RunwayEnd',
    'TableMeta',
    'AirportFallbackService',
    'FallbackTableBuilder',
    'GenerationResult',
    'OurAirportsSource',
    'GenerationError',
    'FetchError',
    'SizeLimitExceededError',
]
