import pytest
from datetime import datetime, timezone
from pathlib import Path

from airport_fallback.builder import build_table
from airport_fallback.parsers.csv_table import parse_csv
from airport_fallback.models.raw import RawAirport, RawRunway
from airport_fallback.service import AirportFallbackService
from airport_fallback.sources.ourairports import OurAirportsSource

FIXED_GENERATED = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class LocalOurAirportsSource(OurAirportsSource):
    """OurAirportsSource reading the test CSV files instead of downloading."""

    def __init__(self, cache_dir: str, csv_dir: Path):
        super().__init__(cache_dir)
        self.csv_dir = csv_dir
        self.fetch_count = 0

    def fetch_airports(self) -> str:
        self.fetch_count += 1
        return (self.csv_dir / 'airports_test.csv').read_text(encoding='utf-8')

    def fetch_runways(self) -> str:
        self.fetch_count += 1
        return (self.csv_dir / 'runways_test.csv').read_text(encoding='utf-8')


@pytest.fixture
def test_assets_dir() -> Path:
    """Return the path to the test assets directory."""
    return Path(__file__).parent / 'assets'

@pytest.fixture
def test_csv_dir(test_assets_dir) -> Path:
    return test_assets_dir / 'csv'

@pytest.fixture
def test_cache_dir(tmp_path) -> Path:
    """Return a temporary directory for cache testing."""
    return tmp_path / 'cache'

@pytest.fixture
def local_source(test_cache_dir, test_csv_dir) -> LocalOurAirportsSource:
    return LocalOurAirportsSource(str(test_cache_dir), test_csv_dir)

@pytest.fixture
def raw_airports(test_csv_dir) -> list:
    text = (test_csv_dir / 'airports_test.csv').read_text(encoding='utf-8')
    return [RawAirport.from_row(row) for row in parse_csv(text)]

@pytest.fixture
def raw_runways(test_csv_dir) -> list:
    text = (test_csv_dir / 'runways_test.csv').read_text(encoding='utf-8')
    return [RawRunway.from_row(row) for row in parse_csv(text)]

@pytest.fixture
def fixture_table(raw_airports, raw_runways) -> dict:
    """Table generated from the test CSV files."""
    return build_table(raw_airports, raw_runways, generated=FIXED_GENERATED)

@pytest.fixture
def fixture_service(fixture_table) -> AirportFallbackService:
    return AirportFallbackService(fixture_table)
