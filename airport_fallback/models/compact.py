"""
Compact records of the embedded fallback table.

The persisted JSON uses one- or two-letter keys to keep the table small:

    airport: n (name), la/lo (lat/lon), el (elevation ft), t (type code),
             m (municipality), r (region), rw (runways, absent when none)
    runway:  i ("LOW/HIGH"), l/w (length/width ft), s (surface code),
             hd ([low heading, high heading])
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple


def _number(value: Any, default: Any = 0) -> Any:
    """Stored numeric value, or default when missing or of the wrong type."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ''


@dataclass(frozen=True)
class CompactRunway:
    """Runway as stored in the fallback table."""

    ident: str
    length_ft: int
    width_ft: int
    surface: str
    headings: Tuple[int, int] = (0, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'i': self.ident,
            'l': self.length_ft,
            'w': self.width_ft,
            's': self.surface,
            'hd': [self.headings[0], self.headings[1]],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CompactRunway':
        """Read a stored runway; missing or mistyped values fall back to empty/0."""
        headings = data.get('hd')
        if not isinstance(headings, (list, tuple)):
            headings = []
        headings = [_number(heading) for heading in headings[:2]]
        headings += [0] * (2 - len(headings))
        return cls(
            ident=_text(data.get('i')),
            length_ft=_number(data.get('l')),
            width_ft=_number(data.get('w')),
            surface=_text(data.get('s')),
            headings=(headings[0], headings[1]),
        )


@dataclass(frozen=True)
class CompactAirport:
    """Airport as stored in the fallback table, keyed by its ICAO code."""

    name: str
    latitude: float
    longitude: float
    elevation_ft: int
    type: str
    municipality: str
    region: str
    runways: Tuple[CompactRunway, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'n': self.name,
            'la': self.latitude,
            'lo': self.longitude,
            'el': self.elevation_ft,
            't': self.type,
            'm': self.municipality,
            'r': self.region,
        }
        # Key omitted rather than an empty list
        if self.runways:
            data['rw'] = [runway.to_dict() for runway in self.runways]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CompactAirport':
        """
        Read a stored airport.

        Missing or mistyped values fall back to empty strings and 0, and
        runway entries that are not objects are skipped.
        """
        runways = data.get('rw')
        if not isinstance(runways, (list, tuple)):
            runways = []
        return cls(
            name=_text(data.get('n')),
            latitude=_number(data.get('la'), 0.0),
            longitude=_number(data.get('lo'), 0.0),
            elevation_ft=_number(data.get('el')),
            type=_text(data.get('t')),
            municipality=_text(data.get('m')),
            region=_text(data.get('r')),
            runways=tuple(CompactRunway.from_dict(rw) for rw in runways if isinstance(rw, Mapping)),
        )
