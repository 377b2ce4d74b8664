"""Remote catalog client.

Thin authenticated calls against the marketplace API. Nothing is cached;
each install fetches fresh metadata.
"""

from __future__ import annotations

import json
import logging
import ssl
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from dojo_marketplace.errors import SlugResolutionError, VersionFetchError
from dojo_marketplace.types import ResolvedItem, VersionRecord

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.dojocoding.io"

# Default timeout in seconds for catalog calls
DEFAULT_TIMEOUT = 30.0


class CatalogRequestError(Exception):
    """Low-level failure talking to the catalog."""

    def __init__(self, status: int | None, reason: str) -> None:
        self.status = status
        self.reason = reason
        super().__init__(f"HTTP {status}: {reason}" if status is not None else reason)


class CatalogClient:
    """Resolves slugs and version records against the remote catalog."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the catalog client.

        Args:
            base_url: API root, without a trailing slash.
            api_key: Bearer credential forwarded verbatim. Not validated.
            timeout: Socket timeout in seconds for each call.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def with_api_key(self, api_key: str) -> CatalogClient:
        """Return a client with the same settings and a different credential."""
        return CatalogClient(base_url=self.base_url, api_key=api_key, timeout=self.timeout)

    def resolve_slug(self, slug: str) -> ResolvedItem:
        """Resolve a slug to an item.

        Args:
            slug: Item slug.

        Returns:
            The resolved item.

        Raises:
            SlugResolutionError: On any non-success response, including 404.
        """
        path = f"/v1/marketplace/items/by-slug/{quote(slug, safe='')}"
        try:
            data = self._request("GET", path)
            return ResolvedItem.model_validate(data)
        except CatalogRequestError as e:
            raise SlugResolutionError(slug, e.status, e.reason) from e
        except ValidationError as e:
            raise SlugResolutionError(slug, None, "malformed item record") from e

    def get_version_record(self, item_id: str, version: str) -> VersionRecord:
        """Fetch metadata for one version of an item.

        Args:
            item_id: Item identifier.
            version: Version string.

        Returns:
            The version record.

        Raises:
            VersionFetchError: On any non-success response.
        """
        path = (
            f"/v1/marketplace/items/{quote(item_id, safe='')}"
            f"/versions/{quote(version, safe='')}"
        )
        try:
            data = self._request("GET", path)
            return VersionRecord.model_validate(data)
        except CatalogRequestError as e:
            raise VersionFetchError(version, e.status, e.reason) from e
        except ValidationError as e:
            raise VersionFetchError(version, None, "malformed version record") from e

    def increment_usage_count(self, item_id: str) -> None:
        """Record one install of an item.

        Failures are logged and never raised.

        Args:
            item_id: Item identifier.
        """
        path = f"/v1/marketplace/items/{quote(item_id, safe='')}/usage"
        try:
            self._request("POST", path)
            logger.debug("Usage count incremented for %s", item_id)
        except CatalogRequestError as e:
            logger.warning("Failed to increment usage count for %s: %s", item_id, e)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request(self, method: str, path: str) -> Any:
        """Send a request and decode the JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the API root.

        Returns:
            Decoded JSON, or None for an empty body.

        Raises:
            CatalogRequestError: On non-success status, transport failure or
                an undecodable body.
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        request = urllib.request.Request(
            url,
            method=method,
            headers=self._headers(),
            data=b"" if method == "POST" else None,
        )
        try:
            with urllib.request.urlopen(
                request, timeout=self.timeout, context=ssl.create_default_context()
            ) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            raise CatalogRequestError(e.code, str(e.reason)) from e
        except (urllib.error.URLError, OSError) as e:
            raise CatalogRequestError(None, str(getattr(e, "reason", e))) from e

        if not body:
            return None
        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CatalogRequestError(None, f"invalid JSON response: {e}") from e
