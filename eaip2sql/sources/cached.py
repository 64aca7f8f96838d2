from abc import ABC
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class CachedSource(ABC):
    """
    Base class for sources that cache raw documents on disk.

    This class provides a caching mechanism for downloaded pages. It handles:
    - Caching raw bytes to disk under a human-readable key
    - Checking cache validity based on age
    - Automatically downloading and caching new data when needed

    Key Format:
    The cache key should follow the format: `{cycle}_{resource}[_{identifier}]`
    where:
    - `cycle`: The AIRAC effective date the document belongs to
    - `resource`: The kind of document (e.g., 'navaids', 'airport')
    - `identifier`: Optional parameter for the document (e.g., ICAO code)

    Examples:
    - `2026-10-01_navaids.html`: ENR 4.1 page for the cycle starting 2026-10-01
    - `2026-10-01_airport_EGLL.html`: AD 2 page for EGLL

    The resource must correspond to a download method in the implementing class.
    For example, resource 'airport' requires a method named 'download_airport'
    taking the identifier 'EGLL'.

    With no cache directory, documents are always downloaded.
    """

    def __init__(self, cache_dir: Optional[str] = None, source_name: Optional[str] = None):
        """
        Initialize the cached source.

        Args:
            cache_dir: Base directory for caching, or None to disable caching
            source_name: Name of the cache sub-directory (defaults to the class name)
        """
        self.source_name = source_name or self.__class__.__name__.lower()
        self.cache_path: Optional[Path] = None
        if cache_dir is not None:
            self.cache_path = Path(cache_dir) / self.source_name
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

    def _get_cache_file(self, key: str) -> Path:
        """Get the cache file path for a given key."""
        return self.cache_path / key

    def _is_cache_valid(self, cache_file: Path, max_age_days: Optional[int] = None) -> Tuple[bool, Optional[str]]:
        """
        Check if the cache file is valid (exists and not too old).

        Args:
            cache_file: Path to the cache file
            max_age_days: Maximum age of cache in days (None for no limit)

        Returns:
            Tuple[bool, Optional[str]]: (is_valid, reason if invalid)
        """
        if self._force_refresh:
            return False, "force refresh"
        if not cache_file.exists():
            return False, "missing"
        if self._never_refresh:
            return True, None
        if max_age_days is None:
            return True, None
        file_age = datetime.now() - datetime.fromtimestamp(cache_file.stat().st_mtime)
        if file_age.days <= max_age_days:
            return True, None
        return False, "expired"

    def _validate_download_method(self, resource: str) -> None:
        """
        Validate that the download method exists for the given resource.

        Raises:
            NotImplementedError: If the download method doesn't exist
        """
        method_name = f"download_{resource}"
        if not hasattr(self, method_name):
            raise NotImplementedError(
                f"No download method found for resource '{resource}'. "
                f"Class {self.__class__.__name__} must implement a method named '{method_name}'."
            )

    def get_data(self, cycle: str, resource: str, identifier: Optional[str] = None,
                 max_age_days: Optional[int] = 28) -> bytes:
        """
        Get a document from cache or download it if not available.

        Args:
            cycle: AIRAC effective date the document belongs to (YYYY-MM-DD)
            resource: Kind of document (e.g., 'navaids', 'airport')
            identifier: Parameter passed to the download method, if any
            max_age_days: Maximum age of cache in days (None for no limit)

        Returns:
            The raw document bytes

        Raises:
            NotImplementedError: If the download method doesn't exist
        """
        self._validate_download_method(resource)
        download_method = getattr(self, f"download_{resource}")

        if self.cache_path is None:
            return download_method(identifier) if identifier is not None else download_method()

        if identifier:
            cache_key = f"{cycle}_{resource}_{identifier}.html"
        else:
            cache_key = f"{cycle}_{resource}.html"
        cache_file = self._get_cache_file(cache_key)

        is_valid, reason = self._is_cache_valid(cache_file, max_age_days)
        if is_valid:
            logger.info(f"{cache_file.name} retrieved from cache {self.source_name}")
            return cache_file.read_bytes()

        data = download_method(identifier) if identifier is not None else download_method()

        cache_file.write_bytes(data)
        logger.info(f"{cache_file.name} [{reason}] fetched using {download_method.__name__}")

        return data
