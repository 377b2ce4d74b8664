"""Shared test fixtures."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from dojo_marketplace.types import ResolvedItem, VersionRecord


def make_zip(files: dict[str, bytes | str]) -> bytes:
    """Build an in-memory ZIP archive.

    Names ending in "/" become directory entries.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in files.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content)
    return buffer.getvalue()


def make_response(body: bytes, status: int = 200, reason: str = "OK") -> MagicMock:
    """Create a mock urlopen() return value usable as a context manager."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.read.return_value = body
    context = MagicMock()
    context.__enter__.return_value = response
    context.__exit__.return_value = False
    return context


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


@pytest.fixture
def claude_root(tmp_path: Path) -> Path:
    """Create a temporary ~/.claude root."""
    root = tmp_path / ".claude"
    root.mkdir(parents=True)
    return root


# ============================================================================
# Sample Content Fixtures
# ============================================================================


@pytest.fixture
def skill_archive() -> bytes:
    """A small skill archive."""
    return make_zip(
        {
            "SKILL.md": "---\nname: test-skill\ndescription: Test skill\n---\n\n# Test Skill\n",
            "scripts/": b"",
            "scripts/run.sh": "#!/bin/sh\necho ok\n",
        }
    )


@pytest.fixture
def item_payload() -> dict[str, Any]:
    """Catalog JSON for a resolved item."""
    return {
        "id": "item-1",
        "slug": "test-skill",
        "name": "Test Skill",
        "category": "skill",
        "latestVersion": "1.0.0",
    }


@pytest.fixture
def version_payload() -> dict[str, Any]:
    """Catalog JSON for a version record."""
    return {
        "id": "ver-1",
        "itemId": "item-1",
        "version": "1.0.0",
        "fileUrl": "https://cdn.example.com/test-skill-1.0.0.zip",
        "fileHash": "abc123hash",
        "fileSizeBytes": 1024,
        "configSnippet": {"skills": {"test-skill": {"enabled": True}}},
        "instructions": "Run /test-skill to start.",
        "postInstallNotes": "Restart Claude to load the skill.",
        "createdAt": "2026-01-15T10:00:00Z",
    }


@pytest.fixture
def resolved_item(item_payload: dict[str, Any]) -> ResolvedItem:
    """A resolved item."""
    return ResolvedItem.model_validate(item_payload)


@pytest.fixture
def version_record(version_payload: dict[str, Any]) -> VersionRecord:
    """A version record declaring hash abc123hash."""
    return VersionRecord.model_validate(version_payload)


# ============================================================================
# Mock Service Fixtures
# ============================================================================


@pytest.fixture
def mock_catalog(resolved_item: ResolvedItem, version_record: VersionRecord) -> MagicMock:
    """Create a mock CatalogService returning the sample item and version."""
    catalog = MagicMock()
    catalog.resolve_slug.return_value = resolved_item
    catalog.get_version_record.return_value = version_record
    return catalog


@pytest.fixture
def mock_fetcher(skill_archive: bytes) -> MagicMock:
    """Create a mock ArchiveSource returning the sample archive."""
    fetcher = MagicMock()
    fetcher.fetch.return_value = skill_archive
    return fetcher


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_dir.return_value = False
    fs.read_bytes.return_value = b""
    return fs


@pytest.fixture
def mock_app_context() -> MagicMock:
    """Create a complete mock AppContext for CLI testing."""
    from dojo_marketplace.context import AppContext

    ctx = MagicMock(spec=AppContext)
    ctx.catalog = MagicMock()
    ctx.fetcher = MagicMock()
    ctx.extractor = MagicMock()
    ctx.layout = MagicMock()
    ctx.installer = MagicMock()
    ctx.filesystem = MagicMock()
    return ctx
