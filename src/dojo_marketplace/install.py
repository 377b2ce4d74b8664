"""Install pipeline: resolve, download, verify, extract."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from dojo_marketplace.archive import ArchiveInstaller
from dojo_marketplace.errors import InvalidSlugError, UninstallError
from dojo_marketplace.fetcher import ArchiveFetcher
from dojo_marketplace.filesystem import RealFileSystem
from dojo_marketplace.hashing import compute_sha256, digests_match
from dojo_marketplace.paths import InstallLayout
from dojo_marketplace.protocols import (
    ArchiveExtractor,
    ArchiveSource,
    CatalogService,
    FileSystem,
)
from dojo_marketplace.types import INTEGRITY_ERROR, InstalledItem, InstallResult, ItemCategory

logger = logging.getLogger(__name__)


class UsageNotifier:
    """Dispatches usage-count increments without blocking the caller.

    Each notification runs on a background worker. Errors are logged from
    a done-callback and never reach the code that submitted them. The
    worker is not a daemon thread, so callers should `shutdown()` before
    exiting.
    """

    def __init__(self, executor: ThreadPoolExecutor | None = None) -> None:
        """Initialize the notifier.

        Args:
            executor: Executor to run notifications on. A single-worker
                executor is created when omitted.
        """
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="usage-notify"
        )

    def notify(self, catalog: CatalogService, item_id: str) -> Future[None] | None:
        """Submit a usage increment and return immediately.

        Args:
            catalog: Catalog to notify.
            item_id: Item that was installed.

        Returns:
            The pending future, or None if the notification could not be
            scheduled.
        """
        try:
            future = self._executor.submit(catalog.increment_usage_count, item_id)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning("Could not schedule usage notification for %s: %s", item_id, e)
            return None
        future.add_done_callback(lambda f: self._log_failure(f, item_id))
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting notifications.

        Args:
            wait: Block until pending notifications finish.
        """
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_failure(future: Future[None], item_id: str) -> None:
        if future.cancelled():
            logger.warning("Usage notification for %s was cancelled", item_id)
            return
        error = future.exception()
        if error is not None:
            logger.warning("Usage notification for %s failed: %s", item_id, error)


class Installer:
    """Installs marketplace items.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(
        self,
        catalog: CatalogService,
        fetcher: ArchiveSource,
        extractor: ArchiveExtractor,
        layout: InstallLayout,
        notifier: UsageNotifier,
        filesystem: FileSystem,
    ) -> None:
        """Initialize installer with required dependencies.

        Args:
            catalog: Remote catalog (required).
            fetcher: Archive downloader (required).
            extractor: Archive extractor (required).
            layout: Install directory layout (required).
            notifier: Fire-and-forget usage notifier (required).
            filesystem: Filesystem abstraction (required).

        Note:
            Use factory method `create()` for production code.
            Direct construction is for testing with explicit dependencies.
        """
        self.catalog = catalog
        self.fetcher = fetcher
        self.extractor = extractor
        self.layout = layout
        self.notifier = notifier
        self.fs = filesystem

    @classmethod
    def create(
        cls,
        catalog: CatalogService,
        fetcher: ArchiveSource | None = None,
        extractor: ArchiveExtractor | None = None,
        layout: InstallLayout | None = None,
        notifier: UsageNotifier | None = None,
        filesystem: FileSystem | None = None,
    ) -> Installer:
        """Factory method for production instantiation.

        Args:
            catalog: Remote catalog.
            fetcher: Optional downloader (created if not provided).
            extractor: Optional extractor (created if not provided).
            layout: Optional layout (defaults to ~/.claude).
            notifier: Optional usage notifier (created if not provided).
            filesystem: Optional filesystem abstraction (created if not provided).

        Returns:
            Configured Installer instance.

        Note:
            The default notifier runs on a non-daemon worker thread that the
            interpreter joins at exit. Call `notifier.shutdown()` when done,
            or a hung usage request can delay exit by up to the catalog
            timeout.
        """
        filesystem = filesystem or RealFileSystem()
        return cls(
            catalog=catalog,
            fetcher=fetcher or ArchiveFetcher(),
            extractor=extractor or ArchiveInstaller(filesystem=filesystem),
            layout=layout or InstallLayout(),
            notifier=notifier or UsageNotifier(),
            filesystem=filesystem,
        )

    def install(self, slug: str, version: str | None = None) -> InstallResult:
        """Install an item by slug.

        Steps run strictly in order: resolve item, resolve version, download,
        verify, compute target directory, extract, notify. A hash mismatch
        returns a failed result; every other failure raises.

        Args:
            slug: Item slug.
            version: Version to install. Defaults to the catalog's latest
                version at resolution time.

        Returns:
            InstallResult carrying the computed hash.

        Raises:
            SlugResolutionError: If the slug cannot be resolved.
            VersionFetchError: If the version record cannot be fetched.
            DownloadError: If the archive cannot be downloaded.
            InvalidSlugError: If the slug escapes the category directory.
            ExtractionError: If the archive cannot be extracted.
        """
        item = self.catalog.resolve_slug(slug)
        target_version = version or item.latest_version
        logger.debug("Resolved %s to item %s, version %s", slug, item.id, target_version)

        record = self.catalog.get_version_record(item.id, target_version)
        data = self.fetcher.fetch(record.file_url)

        file_hash = compute_sha256(data)
        if not digests_match(file_hash, record.file_hash):
            logger.warning(
                "Hash mismatch for %s@%s: expected %s, got %s",
                slug,
                record.version,
                record.file_hash,
                file_hash,
            )
            return InstallResult.failed(item, record, file_hash, INTEGRITY_ERROR)

        install_dir = self.layout.get_install_dir(item.category, item.slug)
        self.extractor.install(data, install_dir)

        self.notifier.notify(self.catalog, item.id)

        logger.info("Installed %s %s to %s", item.name, record.version, install_dir)
        return InstallResult.succeeded(item, record, file_hash, install_dir)

    def install_item(
        self, slug: str, version: str | None = None, credential: str | None = None
    ) -> InstallResult:
        """Install an item using a per-call credential.

        Args:
            slug: Item slug.
            version: Optional version, see `install()`.
            credential: Bearer token forwarded to the catalog for this call.

        Returns:
            InstallResult from `install()`.
        """
        if credential is None:
            return self.install(slug, version)

        scoped = Installer(
            catalog=self.catalog.with_api_key(credential),
            fetcher=self.fetcher,
            extractor=self.extractor,
            layout=self.layout,
            notifier=self.notifier,
            filesystem=self.fs,
        )
        return scoped.install(slug, version)

    def get_install_dir(self, category: str, slug: str) -> Path:
        """Get the directory an item would be installed to."""
        return self.layout.get_install_dir(category, slug)

    def uninstall(self, category: ItemCategory | str, slug: str) -> bool:
        """Remove an installed item directory.

        The path goes through the same traversal check as installs before
        anything is removed.

        Args:
            category: Item category.
            slug: Item slug.

        Returns:
            True if something was removed, False if nothing was installed.

        Raises:
            InvalidSlugError: If the slug escapes the category directory.
            UninstallError: If the directory could not be removed.
        """
        path = self.layout.get_install_dir(category, slug)
        if not self.fs.exists(path):
            logger.info("Nothing installed at %s", path)
            return False

        try:
            if self.fs.is_dir(path):
                self.fs.rmtree(path)
            else:
                self.fs.unlink(path)
        except OSError as e:
            raise UninstallError(f"Failed to remove {path}: {e}") from e

        logger.info("Uninstalled %s from %s", slug, path)
        return True

    def list_installed(self) -> list[InstalledItem]:
        """Scan the category directories for installed items.

        Hidden entries, plain files and entries resolving outside their
        category directory are skipped.

        Returns:
            Installed items ordered by category, then slug.
        """
        items = []
        for category in ItemCategory:
            category_dir = self.layout.category_dir(category)
            if not self.fs.is_dir(category_dir):
                continue
            for entry in self.fs.iterdir(category_dir):
                if entry.name.startswith(".") or not self.fs.is_dir(entry):
                    continue
                try:
                    path = self.layout.get_install_dir(category, entry.name)
                except InvalidSlugError:
                    logger.debug("Skipping %s: resolves outside %s", entry, category_dir)
                    continue
                items.append(InstalledItem(category=category, slug=entry.name, installed_path=path))
        return items
