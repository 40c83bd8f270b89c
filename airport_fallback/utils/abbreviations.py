"""
Field abbreviation and expansion for the compact table.

Surface and airport type strings are shortened at generation time and
expanded again on lookup. Both mappings are closed tables; codes without
an expansion are returned unchanged.
"""

import math
import re
from typing import Optional

from .. import config

# Checked in order against the uppercased surface string
SURFACE_PATTERNS = [
    ('ASPH', 'ASP'),
    ('CONC', 'CON'),
    ('GRAV', 'GRV'),
    ('TURF', 'TRF'),
    ('GRASS', 'TRF'),
    ('DIRT', 'DRT'),
    ('EARTH', 'DRT'),
    ('WATER', 'WTR'),
    ('SAND', 'SND'),
]

UNKNOWN_SURFACE = 'UNK'

SURFACE_NAMES = {
    'ASP': 'ASPHALT',
    'CON': 'CONCRETE',
    'GRV': 'GRAVEL',
    'TRF': 'TURF',
    'DRT': 'DIRT',
    'WTR': 'WATER',
    'SND': 'SAND',
    'UNK': 'UNKNOWN',
}

TYPE_NAMES = {
    'large': 'large_airport',
    'medium': 'medium_airport',
    'small': 'small_airport',
    'seaplane': 'seaplane_base',
}

_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def abbreviate_surface(surface: Optional[str]) -> str:
    """
    Reduce a free-form surface description to a 3-letter code.

    Args:
        surface: Surface string from runways.csv (e.g. 'ASPH-G', 'Grass')

    Returns:
        One of the SURFACE_NAMES codes, the first three letters of an
        unrecognised surface, or 'UNK' when empty
    """
    if not surface:
        return UNKNOWN_SURFACE
    upper = surface.upper()
    for pattern, code in SURFACE_PATTERNS:
        if pattern in upper:
            return code
    if len(upper) > 3:
        return upper[:3]
    return upper or UNKNOWN_SURFACE


def expand_surface(code: str) -> str:
    return SURFACE_NAMES.get(code, code)


def abbreviate_type(airport_type: Optional[str]) -> str:
    """'large_airport' -> 'large', 'seaplane_base' -> 'seaplane'."""
    if not airport_type:
        return ''
    return airport_type.replace('_airport', '', 1).replace('seaplane_base', 'seaplane', 1)


def expand_type(code: str) -> str:
    return TYPE_NAMES.get(code, code)


def truncate(text: Optional[str], max_length: int) -> str:
    """Shorten text to max_length characters, the last one being an ellipsis."""
    if not text:
        return ''
    if len(text) <= max_length:
        return text
    return text[:max_length - 1] + config.ELLIPSIS


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round with halves going up, as opposed to round()'s half-to-even."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def parse_int(value: Optional[str], default: int = 0) -> int:
    """
    Parse the leading integer of a string ('8000.5' -> 8000).

    Returns default for empty or non-numeric values.
    """
    if not value:
        return default
    match = _INT_PREFIX.match(value)
    if not match:
        return default
    return int(match.group(1))


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse the leading decimal number of a string, None if there is none."""
    if not value:
        return None
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return None
    number = float(match.group(1))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_heading(value: Optional[str]) -> int:
    """True heading rounded to whole degrees in [0, 360), 0 when absent or unparsable."""
    heading = parse_float(value)
    if heading is None:
        return 0
    return int(round_half_up(heading)) % 360


def parse_coordinate(value: Optional[str]) -> float:
    """Coordinate rounded to the table precision, 0.0 when absent or unparsable."""
    number = parse_float(value)
    if number is None:
        return 0.0
    return round_half_up(number, config.COORDINATE_DECIMALS)
