import logging
from typing import List, Optional

import requests

from .cached import CachedSource
from .. import config
from ..errors import FetchError
from ..models.raw import RawAirport, RawRunway
from ..parsers.csv_table import parse_csv

logger = logging.getLogger(__name__)

class OurAirportsSource(CachedSource):
    """
    Source for the OurAirports airports.csv and runways.csv files.

    Files are downloaded over HTTPS and kept in the cache directory under
    their own names; a copy younger than the cache window is reused.

    Example:
        source = OurAirportsSource('.cache')
        airports = source.get_airports()
        runways = source.get_runways()
    """

    cache_name = 'ourairports'

    def __init__(self, cache_dir: str, base_url: str = config.OURAIRPORTS_BASE_URL,
                 session: Optional[requests.Session] = None, timeout: int = config.REQUEST_TIMEOUT):
        """
        Initialize the OurAirports source.

        Args:
            cache_dir: Base directory for caching
            base_url: Base URL the CSV files are published under
            session: Optional requests.Session for dependency injection (testing)
            timeout: HTTP request timeout in seconds
        """
        super().__init__(cache_dir)
        self.base_url = base_url.rstrip('/')
        self._session = session or requests.Session()
        self._timeout = timeout
        self._session.headers.setdefault("User-Agent", config.USER_AGENT)

    def _download(self, filename: str) -> str:
        """
        Download one file and return its text.

        Raises:
            FetchError: On a transport error or a non-200 response
        """
        url = f"{self.base_url}/{filename}"
        logger.info(f"Downloading {url}...")
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise FetchError(url, details=e) from e

        if response.status_code != 200:
            raise FetchError(url, status_code=response.status_code)

        response.encoding = 'utf-8'
        text = response.text
        logger.info(f"Downloaded {filename} ({len(text.encode('utf-8')) / 1024:.1f} KB)")
        return text

    def fetch_airports(self) -> str:
        """Download airports.csv."""
        return self._download(config.AIRPORTS_FILENAME)

    def fetch_runways(self) -> str:
        """Download runways.csv."""
        return self._download(config.RUNWAYS_FILENAME)

    def get_airports_csv(self, max_age_hours: float = config.CACHE_MAX_AGE_HOURS) -> str:
        return self.get_data('airports', 'csv', max_age_hours=max_age_hours)

    def get_runways_csv(self, max_age_hours: float = config.CACHE_MAX_AGE_HOURS) -> str:
        return self.get_data('runways', 'csv', max_age_hours=max_age_hours)

    def get_airports(self, max_age_hours: float = config.CACHE_MAX_AGE_HOURS) -> List[RawAirport]:
        """
        Get the parsed airports, from cache or freshly downloaded.

        Args:
            max_age_hours: Maximum age of the cached file in hours

        Returns:
            List of raw airport records in file order
        """
        return [RawAirport.from_row(row) for row in parse_csv(self.get_airports_csv(max_age_hours))]

    def get_runways(self, max_age_hours: float = config.CACHE_MAX_AGE_HOURS) -> List[RawRunway]:
        """
        Get the parsed runways, from cache or freshly downloaded.

        Args:
            max_age_hours: Maximum age of the cached file in hours

        Returns:
            List of raw runway records in file order
        """
        return [RawRunway.from_row(row) for row in parse_csv(self.get_runways_csv(max_age_hours))]
