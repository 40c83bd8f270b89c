"""
Coverage filters deciding which OurAirports rows enter the fallback table.
"""

import re
from typing import Optional

from .. import config

ICAO_PATTERN = re.compile(r'^[A-Z0-9]{3,4}$', re.IGNORECASE)

_COVERED = frozenset(config.COVERED_COUNTRIES)
_INCLUDED_TYPES = frozenset(config.INCLUDED_TYPES)


def is_covered_country(country: Optional[str]) -> bool:
    """True if the ISO country code is in North America or Europe coverage."""
    if not country:
        return False
    return country in _COVERED


def is_included_type(airport_type: Optional[str]) -> bool:
    return airport_type in _INCLUDED_TYPES


def is_valid_icao_code(ident: Optional[str]) -> bool:
    """
    Check if an ident can be used as a table key.

    ICAO codes are four characters, some regions use three; any
    alphanumeric code of 3 or 4 characters is accepted.
    """
    if not ident:
        return False
    return ICAO_PATTERN.match(ident) is not None


def region_of(country: str) -> Optional[str]:
    """Name of the coverage group of a country code, None when not covered."""
    if country in config.NORTH_AMERICA_COUNTRIES:
        return 'North America'
    if country in config.EUROPE_COUNTRIES:
        return 'Europe'
    return None
