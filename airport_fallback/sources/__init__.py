"""
Data sources for the airport_fallback library.
"""

from .cached import CachedSource
from .ourairports import OurAirportsSource

__all__ = [
    'CachedSource',
    'OurAirportsSource',
]
