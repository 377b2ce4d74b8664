"""Exceptions raised by the install pipeline.

Each error names the stage that failed. Integrity failures are not
exceptions; they come back as a failed ``InstallResult``.
"""

from __future__ import annotations


class MarketplaceError(Exception):
    """Base class for install pipeline errors."""

    pass


class SlugResolutionError(MarketplaceError):
    """The catalog could not resolve a slug to an item."""

    def __init__(self, slug: str, status: int | None, reason: str = "") -> None:
        self.slug = slug
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else reason or "request failed"
        super().__init__(f"Failed to resolve slug '{slug}': {detail}")


class VersionFetchError(MarketplaceError):
    """The catalog could not return a version record."""

    def __init__(self, version: str, status: int | None, reason: str = "") -> None:
        self.version = version
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else reason or "request failed"
        super().__init__(f"Failed to fetch version '{version}': {detail}")


class DownloadError(MarketplaceError):
    """The archive could not be downloaded."""

    def __init__(self, status: int | None, reason: str = "") -> None:
        self.status = status
        self.reason = reason
        if status is not None:
            message = f"Download failed: HTTP {status} {reason}".rstrip()
        else:
            message = f"Download failed: {reason or 'request failed'}"
        super().__init__(message)


class InvalidSlugError(MarketplaceError, ValueError):
    """A slug would place the install directory outside its category."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Invalid slug: path traversal detected in '{slug}'")


class ExtractionError(MarketplaceError):
    """The archive is malformed, unsafe, or could not be written."""

    pass


class UninstallError(MarketplaceError):
    """An installed item directory could not be removed."""

    pass
