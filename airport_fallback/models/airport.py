from dataclasses import dataclass, field
from typing import List, Optional

from airport_fallback.models.runway import Runway

HARD_SURFACES = ('ASPHALT', 'CONCRETE')


@dataclass(frozen=True)
class Airport:
    """
    Airport expanded from the fallback table.

    This is the shape handed to flight planning code: full type and
    surface names, and runways with distinct low and high ends.
    """

    icao: str
    name: str
    lat: float
    lon: float
    elevation: int
    type: str
    municipality: str
    region: str
    runways: List[Runway] = field(default_factory=list)

    @property
    def country(self) -> str:
        """ISO country code, taken from the region code (e.g. 'CA' for 'CA-QC')."""
        return self.region.split('-', 1)[0] if self.region else ''

    @property
    def longest_runway(self) -> Optional[Runway]:
        if not self.runways:
            return None
        return max(self.runways, key=lambda runway: runway.length_ft)

    @property
    def has_hard_runway(self) -> bool:
        return any(runway.surface in HARD_SURFACES for runway in self.runways)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'icao': self.icao,
            'name': self.name,
            'lat': self.lat,
            'lon': self.lon,
            'elevation': self.elevation,
            'type': self.type,
            'municipality': self.municipality,
            'region': self.region,
            'runways': [runway.to_dict() for runway in self.runways],
        }

    def __repr__(self):
        return f"Airport(icao='{self.icao}', name='{self.name}')"

    def __str__(self):
        """Return a human-readable string representation of the airport."""
        info = f"{self.icao} - {self.name}"
        if self.municipality:
            info += f" ({self.municipality}, {self.region})"
        info += f"\nPosition: {self.lat:.4f}, {self.lon:.4f} Elevation: {self.elevation}ft"
        info += f"\nType: {self.type}"
        for runway in self.runways:
            info += f"\n{runway}"
        return info
