"""
Configuration for the airport fallback table.

Paths and limits can be overridden from the environment; the coverage
allow-lists are fixed.
"""

import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent

# OurAirports source
OURAIRPORTS_BASE_URL = "https://davidmegginson.github.io/ourairports-data"
OURAIRPORTS_SOURCE_NAME = "OurAirports"
OURAIRPORTS_SOURCE_URL = "https://ourairports.com/data/"
AIRPORTS_FILENAME = "airports.csv"
RUNWAYS_FILENAME = "runways.csv"

# HTTP
REQUEST_TIMEOUT = int(os.getenv("AIRPORT_FALLBACK_REQUEST_TIMEOUT", "60"))
USER_AGENT = "airport-fallback/0.1 (offline airport table generator)"

# Download cache
CACHE_DIR = Path(os.getenv("AIRPORT_FALLBACK_CACHE_DIR", ".cache"))
CACHE_MAX_AGE_HOURS = float(os.getenv("AIRPORT_FALLBACK_CACHE_MAX_AGE_HOURS", "24"))

# Generated table
OUTPUT_FILE = Path(os.getenv(
    "AIRPORT_FALLBACK_OUTPUT",
    str(PACKAGE_DIR / "data" / "airports-fallback.json")
))
MAX_FILE_SIZE_KB = int(os.getenv("AIRPORT_FALLBACK_MAX_SIZE_KB", "500"))

# Field limits of the compact records
MAX_NAME_LENGTH = 50
MAX_MUNICIPALITY_LENGTH = 30
COORDINATE_DECIMALS = 4
ELLIPSIS = "…"

# Coverage: North America + Europe
NORTH_AMERICA_COUNTRIES = ['CA', 'US', 'MX']
EUROPE_COUNTRIES = [
    'GB', 'FR', 'DE', 'ES', 'IT', 'NL', 'BE', 'CH', 'AT', 'PT',
    'IE', 'DK', 'NO', 'SE', 'FI', 'PL', 'CZ', 'GR', 'HU', 'RO',
    'BG', 'HR', 'SK', 'SI', 'LT', 'LV', 'EE', 'IS', 'LU', 'MT',
    'CY', 'RS', 'BA', 'ME', 'MK', 'AL', 'XK'
]
COVERED_COUNTRIES = NORTH_AMERICA_COUNTRIES + EUROPE_COUNTRIES

# Large and medium only
INCLUDED_TYPES = ['large_airport', 'medium_airport']

COVERAGE_DESCRIPTION = {
    'types': 'Large and medium airports',
    'northAmerica': 'Canada, USA, Mexico',
    'europe': 'All EU/EEA countries + UK, Switzerland, Balkans',
}

# Search
DEFAULT_SEARCH_LIMIT = 10
