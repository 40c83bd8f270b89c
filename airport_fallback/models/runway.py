from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RunwayEnd:
    """One end of a runway: its designator and true heading in degrees."""

    ident: str
    heading_true: int

    def to_dict(self) -> dict:
        return {'ident': self.ident, 'headingTrue': self.heading_true}


@dataclass(frozen=True)
class Runway:
    """Data class for a runway expanded from the fallback table."""

    id: str
    length_ft: int
    width_ft: int
    surface: str
    low_end: RunwayEnd
    high_end: RunwayEnd
    # Not carried by the compact table
    lighted: bool = False
    closed: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'lengthFt': self.length_ft,
            'widthFt': self.width_ft,
            'surface': self.surface,
            'lighted': self.lighted,
            'closed': self.closed,
            'lowEnd': self.low_end.to_dict(),
            'highEnd': self.high_end.to_dict(),
        }

    def get_end(self, ident: str) -> Optional[RunwayEnd]:
        """Return the end matching a designator such as '06L', or None."""
        ident = ident.strip().upper()
        if self.low_end.ident.upper() == ident:
            return self.low_end
        if self.high_end.ident.upper() == ident:
            return self.high_end
        return None

    def __str__(self):
        """Return a human-readable string representation of the runway."""
        runway_info = f"Runway {self.id}"
        if self.length_ft:
            runway_info += f"\nLength: {self.length_ft}ft"
        if self.width_ft:
            runway_info += f" Width: {self.width_ft}ft"
        if self.surface:
            runway_info += f"\nSurface: {self.surface}"
        return runway_info
