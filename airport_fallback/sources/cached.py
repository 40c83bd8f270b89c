from abc import ABC
from datetime import datetime, timedelta
from typing import Any, Optional, Tuple
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

class CachedSource(ABC):
    """
    Base class for sources that keep a local copy of downloaded files.

    This class provides a file cache for data sources. It handles:
    - Saving downloaded content to disk as UTF-8 text (CSV)
    - Checking cache validity based on file age
    - Fetching and caching new data when the copy is missing or stale

    Key Format:
    The cache key is the base name of the cached file; with its extension
    it gives the file name in the cache directory. For example the key
    'airports' with extension 'csv' is cached as `airports.csv`.

    The key must correspond to a fetch method in the implementing class.
    For example, the key 'airports' requires a method named
    'fetch_airports' that takes no argument and returns the content.
    """

    # Sub-directory of cache_dir; defaults to the lowercased class name
    cache_name: Optional[str] = None

    def __init__(self, cache_dir: str):
        """
        Initialize the cached source.

        Args:
            cache_dir: Base directory for caching
        """
        self.cache_dir = Path(cache_dir)
        self.source_name = self.cache_name or self.__class__.__name__.lower()
        self.cache_path = self.cache_dir / self.source_name
        self.cache_path.mkdir(parents=True, exist_ok=True)
        self._force_refresh = False
        self._never_refresh = False

    def set_force_refresh(self, force_refresh: bool = True) -> None:
        """
        Set whether to force refresh of cached data.

        Args:
            force_refresh: Whether to force refresh of cached data
        """
        self._force_refresh = force_refresh

    def set_never_refresh(self, never_refresh: bool = True) -> None:
        """
        Set whether to never refresh cached data.
        If set to True, will use cached data if it exists, regardless of age.

        Args:
            never_refresh: Whether to never refresh cached data
        """
        self._never_refresh = never_refresh

    def _get_cache_file(self, key: str, ext: str) -> Path:
        """Get the cache file path for a given key and extension."""
        return self.cache_path / f"{key}.{ext}"

    def _is_cache_valid(self, cache_file: Path, max_age_hours: Optional[float] = None) -> Tuple[bool, Optional[str]]:
        """
        Check if the cache file is valid (exists and not too old).

        Args:
            cache_file: Path to the cache file
            max_age_hours: Maximum age of cache in hours (None for no limit)

        Returns:
            Tuple[bool, Optional[str]]: (is_valid, reason if invalid)
        """
        if self._force_refresh:
            return False, "force refresh"
        if not cache_file.exists():
            return False, "missing"
        if self._never_refresh:
            return True, None
        if max_age_hours is None:
            return True, None
        file_age = datetime.now() - datetime.fromtimestamp(cache_file.stat().st_mtime)
        if file_age < timedelta(hours=max_age_hours):
            return True, None
        return False, "expired"

    def _save_to_cache(self, data: Any, key: str, ext: str) -> None:
        """Save data to cache with the specified extension."""
        cache_file = self._get_cache_file(key, ext)
        if ext == 'csv':
            with open(cache_file, 'w', encoding='utf-8', newline='') as f:
                f.write(data)
        else:
            raise ValueError(f"Unsupported file extension: {ext}")

    def _load_from_cache(self, key: str, ext: str) -> Any:
        """Load data from cache with the specified extension."""
        cache_file = self._get_cache_file(key, ext)
        if ext == 'csv':
            with open(cache_file, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        else:
            raise ValueError(f"Unsupported file extension: {ext}")

    def _validate_fetch_method(self, key: str) -> None:
        """
        Validate that the fetch method exists for the given key.

        Args:
            key: The key to validate

        Raises:
            NotImplementedError: If the fetch method doesn't exist
        """
        method_name = f"fetch_{key}"
        if not hasattr(self, method_name):
            raise NotImplementedError(
                f"No fetch method found for key '{key}'. "
                f"Class {self.__class__.__name__} must implement a method named '{method_name}'."
            )

    def get_data(self, key: str, ext: str, max_age_hours: Optional[float] = None) -> Any:
        """
        Get data from cache or fetch it if not available.

        Args:
            key: Base name of the cached file (e.g., 'airports', 'runways')
            ext: File extension (only csv is supported)
            max_age_hours: Maximum age of cache in hours (None for no limit)

        Returns:
            The requested data

        Raises:
            NotImplementedError: If the fetch method doesn't exist
            ValueError: If the file extension is not supported
        """
        cache_file = self._get_cache_file(key, ext)

        is_valid, reason = self._is_cache_valid(cache_file, max_age_hours)
        if is_valid:
            age_min = (datetime.now() - datetime.fromtimestamp(cache_file.stat().st_mtime)).total_seconds() / 60
            logger.info(f"Using cached {cache_file.name} ({age_min:.0f} min old)")
            return self._load_from_cache(key, ext)

        self._validate_fetch_method(key)
        fetch_method = getattr(self, f"fetch_{key}")
        data = fetch_method()

        self._save_to_cache(data, key, ext)
        logger.info(f"{cache_file.name} [{reason}] fetched using {fetch_method.__name__}")

        return data
