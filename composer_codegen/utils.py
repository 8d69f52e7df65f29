"""Utility functions for acquiring business network archives.

This module reads archive bytes from local files and URLs with proper error
handling, and hands them to the archive decoder.
"""

from pathlib import Path
from urllib.parse import urlparse

import requests

from .logging_config import get_logger
from .model.archive import decode_archive
from .model.declarations import BusinessNetworkDefinition

logger = get_logger(__name__)

ARCHIVE_SUFFIXES = {".bna", ".zip", ".json"}


class ArchiveLoaderError(Exception):
    """Custom exception for archive acquisition errors."""

    pass


def read_archive_file(file_path: str | Path) -> bytes:
    """Read raw archive bytes from a local file.

    Args:
        file_path: Path to the archive.

    Returns:
        The file contents.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ArchiveLoaderError: If file cannot be read.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to read archive from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in ARCHIVE_SUFFIXES:
        logger.warning(f"File does not have an archive extension: {file_path}")

    try:
        data = file_path.read_bytes()
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise ArchiveLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info(f"Read {len(data)} bytes from {file_path}")
    return data


def read_archive_url(url: str, timeout: int = 30) -> bytes:
    """Download raw archive bytes from a URL.

    Args:
        url: URL to fetch the archive from.
        timeout: Request timeout in seconds.

    Returns:
        The response body.

    Raises:
        ArchiveLoaderError: If URL is invalid or the request fails.
    """
    logger.debug(f"Attempting to download archive from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise ArchiveLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout:
        logger.error(f"Request timeout for URL: {url}")
        raise ArchiveLoaderError(f"Request timeout for URL: {url}")
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise ArchiveLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise ArchiveLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise ArchiveLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info(f"Downloaded {len(response.content)} bytes from {url}")
    return response.content


def is_url(source: str) -> bool:
    """Return True if the source string looks like an http(s) URL."""
    return urlparse(str(source)).scheme in ("http", "https")


def load_archive(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> BusinessNetworkDefinition:
    """Load and decode a business network archive from a file or URL.

    Args:
        file_path: Path to a local archive (mutually exclusive with url).
        url: URL to fetch the archive from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        The decoded network definition.

    Raises:
        ArchiveLoaderError: If neither or both parameters are provided, or reading fails.
        ArchiveDecodeError: If the archive contents are not a valid model.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise ArchiveLoaderError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise ArchiveLoaderError("Cannot specify both file_path and url")

    if file_path:
        data = read_archive_file(file_path)
    else:
        data = read_archive_url(url, timeout)

    return decode_archive(data)
