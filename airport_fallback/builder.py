"""
Generation of the embedded airport fallback table.

The builder takes the raw OurAirports rows, keeps the covered large and
medium airports, shapes each one into a compact record with its open
runways, and writes the minified JSON table once it is known to fit in
the size budget. Any failure raises a GenerationError and leaves the
previous output untouched.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from . import config
from .errors import SizeLimitExceededError
from .models.compact import CompactAirport, CompactRunway
from .models.meta import TableMeta
from .models.raw import RawAirport, RawRunway
from .sources.ourairports import OurAirportsSource
from .utils.abbreviations import (
    abbreviate_surface,
    abbreviate_type,
    parse_coordinate,
    parse_heading,
    parse_int,
    truncate,
)
from .utils.coverage import is_covered_country, is_included_type, is_valid_icao_code

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a successful generation run."""

    output_file: Path
    count: int
    size_bytes: int
    table: Dict[str, Any]

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024


def index_runways(runways: Iterable[RawRunway]) -> Dict[str, List[RawRunway]]:
    """Group runways by the ident of the airport they belong to."""
    by_airport: Dict[str, List[RawRunway]] = {}
    for runway in runways:
        ident = runway.airport_ident.upper()
        if not ident:
            continue
        by_airport.setdefault(ident, []).append(runway)
    return by_airport


def is_retained_airport(airport: RawAirport) -> bool:
    """Covered country, large or medium type, and an ICAO-shaped ident."""
    return (
        is_covered_country(airport.iso_country)
        and is_included_type(airport.type)
        and is_valid_icao_code(airport.ident)
    )


def filter_airports(airports: Iterable[RawAirport]) -> List[RawAirport]:
    return [airport for airport in airports if is_retained_airport(airport)]


def build_runway(runway: RawRunway) -> Optional[CompactRunway]:
    """
    Shape one runway, or return None if it does not belong in the table.

    Closed runways and runways without a positive length are dropped.
    """
    if runway.is_closed:
        return None
    length_ft = parse_int(runway.length_ft)
    if length_ft <= 0:
        return None
    return CompactRunway(
        ident=f"{runway.le_ident}/{runway.he_ident}",
        length_ft=length_ft,
        width_ft=parse_int(runway.width_ft),
        surface=abbreviate_surface(runway.surface),
        headings=(parse_heading(runway.le_heading_degT), parse_heading(runway.he_heading_degT)),
    )


def build_runways(runways: Iterable[RawRunway]) -> List[CompactRunway]:
    compact = []
    for runway in runways:
        shaped = build_runway(runway)
        if shaped is not None:
            compact.append(shaped)
    return compact


def build_airport(airport: RawAirport, runways: Iterable[RawRunway] = ()) -> CompactAirport:
    """Shape a retained airport and its runways into a compact record."""
    return CompactAirport(
        name=truncate(airport.name, config.MAX_NAME_LENGTH),
        latitude=parse_coordinate(airport.latitude_deg),
        longitude=parse_coordinate(airport.longitude_deg),
        elevation_ft=parse_int(airport.elevation_ft),
        type=abbreviate_type(airport.type),
        municipality=truncate(airport.municipality, config.MAX_MUNICIPALITY_LENGTH),
        region=airport.iso_region,
        runways=tuple(build_runways(runways)),
    )


def build_table(airports: Iterable[RawAirport], runways: Iterable[RawRunway],
                generated: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the full table structure: metadata plus airports keyed by code.

    When the source holds the same ident twice, the first occurrence is
    kept and later ones are ignored.

    Args:
        airports: All raw airports, in source order
        runways: All raw runways
        generated: Generation time, defaults to now (UTC)

    Returns:
        Dictionary with 'meta' and 'airports' ready for serialization
    """
    runways_by_airport = index_runways(runways)
    retained = filter_airports(airports)
    logger.info(f"Filtered airports: {len(retained)}")

    compact: Dict[str, Dict[str, Any]] = {}
    for airport in retained:
        icao = airport.ident.upper()
        if icao in compact:
            logger.debug(f"Duplicate ident {icao} in source, keeping first occurrence")
            continue
        compact[icao] = build_airport(airport, runways_by_airport.get(icao, [])).to_dict()

    generated = generated or datetime.now(timezone.utc)
    meta = TableMeta(
        generated=generated.isoformat().replace('+00:00', 'Z'),
        source=config.OURAIRPORTS_SOURCE_NAME,
        source_url=config.OURAIRPORTS_SOURCE_URL,
        count=len(compact),
        coverage=dict(config.COVERAGE_DESCRIPTION),
    )
    return {'meta': meta.to_dict(), 'airports': compact}


def serialize_table(table: Dict[str, Any]) -> str:
    """Minified JSON form of the table."""
    return json.dumps(table, separators=(',', ':'), ensure_ascii=False)


def check_size(payload: bytes, max_size_kb: int) -> None:
    """
    Raises:
        SizeLimitExceededError: If payload is larger than max_size_kb KB
    """
    limit_bytes = max_size_kb * 1024
    if len(payload) > limit_bytes:
        raise SizeLimitExceededError(len(payload), limit_bytes)


def write_table(table: Dict[str, Any], output_file: Path,
                max_size_kb: int = config.MAX_FILE_SIZE_KB) -> int:
    """
    Serialize and write the table, only if it fits in the size budget.

    The file is written next to its destination and renamed into place,
    so a reader never sees a partial table.

    Returns:
        Number of bytes written

    Raises:
        SizeLimitExceededError: If the serialized table is too large
    """
    payload = serialize_table(table).encode('utf-8')
    check_size(payload, max_size_kb)

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_file.name}.", dir=str(output_file.parent))
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(payload)
        os.replace(tmp_name, output_file)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return len(payload)


class FallbackTableBuilder:
    """
    Runs a complete generation: fetch, filter, shape, size-check, write.

    Example:
        builder = FallbackTableBuilder(OurAirportsSource('.cache'))
        result = builder.generate()
        print(result.count, result.size_kb)
    """

    def __init__(self, source: OurAirportsSource,
                 output_file: Path = config.OUTPUT_FILE,
                 max_size_kb: int = config.MAX_FILE_SIZE_KB,
                 max_age_hours: float = config.CACHE_MAX_AGE_HOURS):
        """
        Initialize the builder.

        Args:
            source: Source providing the raw airports and runways
            output_file: Where the table is written
            max_size_kb: Size budget of the serialized table
            max_age_hours: Cache window for the downloaded files
        """
        self.source = source
        self.output_file = Path(output_file)
        self.max_size_kb = max_size_kb
        self.max_age_hours = max_age_hours

    def generate(self, generated: Optional[datetime] = None) -> GenerationResult:
        """
        Build and write the table.

        Both datasets are loaded before any filtering happens.

        Raises:
            GenerationError: If a download fails or the table is too large
        """
        logger.info("Generating airport fallback table")

        airports = self.source.get_airports(self.max_age_hours)
        runways = self.source.get_runways(self.max_age_hours)
        logger.info(f"Total airports: {len(airports)}")
        logger.info(f"Total runways: {len(runways)}")

        table = build_table(airports, runways, generated=generated)
        size_bytes = write_table(table, self.output_file, self.max_size_kb)

        count = table['meta']['count']
        logger.info(f"Airports: {count}")
        logger.info(f"File size: {size_bytes / 1024:.1f} KB")
        logger.info(f"Output: {self.output_file}")
        return GenerationResult(
            output_file=self.output_file,
            count=count,
            size_bytes=size_bytes,
            table=table,
        )
