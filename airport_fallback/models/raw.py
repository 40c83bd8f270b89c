from dataclasses import dataclass, fields
from typing import Dict


def _from_row(cls, row: Dict[str, str]):
    """Build a raw record from a parsed CSV row, missing columns become ''."""
    return cls(**{f.name: row.get(f.name) or '' for f in fields(cls)})


@dataclass
class RawAirport:
    """An airport row of the OurAirports airports.csv file, values as read."""

    ident: str = ''
    type: str = ''
    name: str = ''
    latitude_deg: str = ''
    longitude_deg: str = ''
    elevation_ft: str = ''
    iso_country: str = ''
    iso_region: str = ''
    municipality: str = ''

    @classmethod
    def from_row(cls, row: Dict[str, str]) -> 'RawAirport':
        return _from_row(cls, row)

    def __repr__(self):
        return f"RawAirport(ident='{self.ident}', type='{self.type}', iso_country='{self.iso_country}')"


@dataclass
class RawRunway:
    """A runway row of the OurAirports runways.csv file, values as read."""

    airport_ident: str = ''
    length_ft: str = ''
    width_ft: str = ''
    surface: str = ''
    closed: str = ''
    le_ident: str = ''
    le_heading_degT: str = ''
    he_ident: str = ''
    he_heading_degT: str = ''

    @classmethod
    def from_row(cls, row: Dict[str, str]) -> 'RawRunway':
        return _from_row(cls, row)

    @property
    def is_closed(self) -> bool:
        return self.closed in ('1', 'true')

    def __repr__(self):
        return f"RawRunway(airport_ident='{self.airport_ident}', le_ident='{self.le_ident}', he_ident='{self.he_ident}')"
