"""Tests for context module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

from dojo_marketplace.archive import ArchiveInstaller
from dojo_marketplace.catalog import CatalogClient
from dojo_marketplace.config import MarketplaceConfig
from dojo_marketplace.context import AppContext, create_context
from dojo_marketplace.fetcher import ArchiveFetcher
from dojo_marketplace.filesystem import RealFileSystem


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_default_filesystem(self) -> None:
        """Test context creates default filesystem if not provided."""
        ctx = AppContext(
            catalog=MagicMock(),
            fetcher=MagicMock(),
            extractor=MagicMock(),
            layout=MagicMock(),
            installer=MagicMock(),
        )
        assert isinstance(ctx.filesystem, RealFileSystem)


class TestCreateContext:
    """Tests for create_context factory function."""

    def test_wires_production_services(self, tmp_path: Path) -> None:
        """Test services are created from the configuration."""
        config = MarketplaceConfig(
            api_base_url="https://api.example.com",
            api_key="cfg-key",
            install_root=tmp_path,
            http_timeout=3,
            download_timeout=9,
        )

        ctx = create_context(config)

        assert isinstance(ctx.catalog, CatalogClient)
        assert ctx.catalog.base_url == "https://api.example.com"
        assert ctx.catalog.api_key == "cfg-key"
        assert ctx.catalog.timeout == 3
        assert isinstance(ctx.fetcher, ArchiveFetcher)
        assert ctx.fetcher.timeout == 9
        assert isinstance(ctx.extractor, ArchiveInstaller)
        assert ctx.layout.base_dir == tmp_path
        assert ctx.installer.catalog is ctx.catalog
        assert ctx.installer.layout is ctx.layout
        assert ctx.installer.fs is ctx.filesystem
        ctx.installer.notifier.shutdown()

    def test_api_key_override(self, tmp_path: Path) -> None:
        """Test an explicit key wins over the configured one."""
        config = MarketplaceConfig(api_key="cfg-key", install_root=tmp_path)

        ctx = create_context(config, api_key="cli-key")

        assert ctx.catalog.api_key == "cli-key"
        ctx.installer.notifier.shutdown()

    def test_loads_environment_when_no_config(self, monkeypatch, temp_home: Path) -> None:
        """Test configuration falls back to the environment."""
        monkeypatch.setenv("DOJO_API_BASE_URL", "https://env.example.com")
        monkeypatch.delenv("DOJO_INSTALL_ROOT", raising=False)

        ctx = create_context()

        assert ctx.catalog.base_url == "https://env.example.com"
        assert ctx.layout.base_dir == temp_home / ".claude"
        ctx.installer.notifier.shutdown()
