"""
Runtime lookups in the embedded airport fallback table.

The table is loaded once and never modified afterwards; every lookup
builds fresh Airport objects from the compact records, so the service
can be shared freely between callers.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from . import config
from .models.airport import Airport
from .models.compact import CompactAirport, CompactRunway
from .models.meta import TableMeta
from .models.runway import Runway, RunwayEnd
from .utils.abbreviations import expand_surface, expand_type

logger = logging.getLogger(__name__)


def normalize_code(code: Any) -> str:
    """Uppercase and strip an ICAO code or query, '' for non-strings."""
    if not isinstance(code, str):
        return ''
    return code.strip().upper()


def expand_runway(runway: CompactRunway) -> Runway:
    """Expand a compact runway, splitting 'LOW/HIGH' into its two ends."""
    low_ident, _, high_ident = runway.ident.partition('/')
    return Runway(
        id=runway.ident,
        length_ft=runway.length_ft,
        width_ft=runway.width_ft,
        surface=expand_surface(runway.surface),
        low_end=RunwayEnd(ident=low_ident, heading_true=runway.headings[0]),
        high_end=RunwayEnd(ident=high_ident, heading_true=runway.headings[1]),
    )


def expand_airport(icao: str, airport: CompactAirport) -> Airport:
    return Airport(
        icao=icao,
        name=airport.name,
        lat=airport.latitude,
        lon=airport.longitude,
        elevation=airport.elevation_ft,
        type=expand_type(airport.type),
        municipality=airport.municipality,
        region=airport.region,
        runways=[expand_runway(runway) for runway in airport.runways],
    )


class AirportFallbackService:
    """
    Read-only access to a generated airport fallback table.

    Example:
        service = AirportFallbackService.from_file('airports-fallback.json')
        if service.is_available():
            airport = service.get_airport_by_icao('cyul')
            matches = service.search_airports('CY', limit=5)
    """

    def __init__(self, table: Optional[Mapping[str, Any]] = None):
        """
        Initialize the service from an already loaded table.

        Args:
            table: Parsed table with 'meta' and 'airports', or None for an
                   empty (unavailable) service
        """
        self._meta: Optional[TableMeta] = None
        self._airports: Dict[str, Dict[str, Any]] = {}

        if not isinstance(table, Mapping):
            if table is not None:
                logger.warning(f"Ignoring airport table of type {type(table).__name__}")
            return

        airports = table.get('airports')
        if isinstance(airports, Mapping):
            for icao, record in airports.items():
                if not isinstance(icao, str) or not isinstance(record, Mapping):
                    logger.warning(f"Skipping malformed airport record {icao!r}")
                    continue
                self._airports[icao] = record
        meta = table.get('meta')
        if isinstance(meta, Mapping):
            self._meta = TableMeta.from_dict(meta)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'AirportFallbackService':
        """
        Load a table from a JSON file.

        A missing or unreadable file gives an unavailable service rather
        than an error, so callers can check is_available().
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                table = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Airport fallback table not found: {path}")
            return cls()
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load airport fallback table {path}: {e}")
            return cls()

        service = cls(table)
        logger.debug(f"Loaded {len(service)} airports from {path}")
        return service

    @classmethod
    def default(cls) -> 'AirportFallbackService':
        """Load the table from its configured location."""
        return cls.from_file(config.OUTPUT_FILE)

    def is_available(self) -> bool:
        """True if a table is loaded and contains at least one airport."""
        return len(self._airports) > 0

    def get_meta(self) -> Optional[TableMeta]:
        return self._meta

    def get_count(self) -> int:
        """Number of airports as recorded in the table metadata."""
        if self._meta is None:
            return 0
        return self._meta.count

    def get_coverage_description(self) -> str:
        """
        Human-readable coverage of the table, for display.

        Returns:
            e.g. 'Large and medium airports: Canada, USA, Mexico; All EU/EEA ...'
        """
        if self._meta is None or not self._meta.coverage:
            return ''
        coverage = dict(self._meta.coverage)
        types = coverage.pop('types', None)
        regions = '; '.join(str(value) for value in coverage.values())
        if types and regions:
            return f"{types}: {regions}"
        return types or regions

    def has_airport(self, code: Any) -> bool:
        normalized = normalize_code(code)
        if not normalized:
            return False
        return normalized in self._airports

    def get_airport_by_icao(self, code: Any) -> Optional[Airport]:
        """
        Get the expanded airport for an ICAO code.

        Args:
            code: ICAO code, any case, surrounding whitespace ignored

        Returns:
            Airport, or None when the code is not in the table
        """
        normalized = normalize_code(code)
        compact = self._airports.get(normalized) if normalized else None
        if compact is None:
            return None
        return expand_airport(normalized, CompactAirport.from_dict(compact))

    def search_airports(self, query: Any, limit: int = config.DEFAULT_SEARCH_LIMIT) -> List[Airport]:
        """
        Find airports whose code starts with a prefix.

        Results follow the order of the table; there is no ranking.

        Args:
            query: Code prefix, any case, surrounding whitespace ignored
            limit: Maximum number of results

        Returns:
            Up to limit expanded airports, empty for an empty query
        """
        normalized = normalize_code(query)
        if not normalized or limit <= 0:
            return []

        results = []
        for icao, compact in self._airports.items():
            if icao.startswith(normalized):
                results.append(expand_airport(icao, CompactAirport.from_dict(compact)))
                if len(results) >= limit:
                    break
        return results

    def codes(self) -> List[str]:
        """All airport codes in table order."""
        return list(self._airports)

    def __len__(self) -> int:
        return len(self._airports)

    def __contains__(self, code: Any) -> bool:
        return self.has_airport(code)

    def __iter__(self) -> Iterator[Airport]:
        for icao, compact in self._airports.items():
            yield expand_airport(icao, CompactAirport.from_dict(compact))
