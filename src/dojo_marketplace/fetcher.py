"""Archive download."""

from __future__ import annotations

import logging
import ssl
import urllib.error
import urllib.request
from urllib.parse import urlparse

from dojo_marketplace.errors import DownloadError

logger = logging.getLogger(__name__)

# Default timeout in seconds for a full archive download
DEFAULT_DOWNLOAD_TIMEOUT = 60.0

ALLOWED_SCHEMES = ("http", "https")


class ArchiveFetcher:
    """Downloads archives with a plain unauthenticated GET.

    The whole body is read into memory; the integrity gate hashes the
    complete content before anything is extracted.
    """

    def __init__(self, timeout: float = DEFAULT_DOWNLOAD_TIMEOUT) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Socket timeout in seconds.
        """
        self.timeout = timeout

    def fetch(self, url: str) -> bytes:
        """Download a file and return the raw bytes.

        Args:
            url: Archive URL returned by the catalog.

        Returns:
            Full response body.

        Raises:
            DownloadError: If the URL is unusable, the server responds with a
                non-success status, or the transfer fails.
        """
        scheme = urlparse(url).scheme.lower()
        if scheme not in ALLOWED_SCHEMES:
            raise DownloadError(None, f"unsupported URL scheme '{scheme}'")

        logger.debug("Downloading file: %s", url)
        request = urllib.request.Request(url, method="GET")
        try:
            with urllib.request.urlopen(
                request, timeout=self.timeout, context=ssl.create_default_context()
            ) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    raise DownloadError(status, getattr(response, "reason", ""))
                data = response.read()
        except urllib.error.HTTPError as e:
            raise DownloadError(e.code, str(e.reason)) from e
        except (urllib.error.URLError, OSError) as e:
            reason = getattr(e, "reason", e)
            raise DownloadError(None, str(reason)) from e

        logger.debug("Downloaded %d bytes from %s", len(data), url)
        return data
