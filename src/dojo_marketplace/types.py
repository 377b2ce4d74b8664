"""Shared data types for the marketplace client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["InstallResult", "InstalledItem", "ItemCategory", "ResolvedItem", "VersionRecord"]

INTEGRITY_ERROR = "Integrity check failed — file hash mismatch"


class ItemCategory(str, Enum):
    """Kinds of marketplace items. Determines the install subdirectory."""

    SKILL = "skill"
    PLUGIN = "plugin"
    TOOL = "tool"


class ResolvedItem(BaseModel):
    """An item as returned by a slug lookup against the catalog."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    slug: str
    name: str
    category: ItemCategory
    latest_version: str = Field(alias="latestVersion")


class VersionRecord(BaseModel):
    """Metadata for one published version of an item."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    item_id: str = Field(alias="itemId")
    version: str
    file_url: str = Field(alias="fileUrl")
    file_hash: str = Field(alias="fileHash")
    file_size_bytes: int | None = Field(default=None, alias="fileSizeBytes")
    config_snippet: dict[str, Any] | None = Field(default=None, alias="configSnippet")
    instructions: str = ""
    post_install_notes: str = Field(default="", alias="postInstallNotes")
    created_at: datetime | None = Field(default=None, alias="createdAt")


@dataclass
class InstallResult:
    """Result of an install operation.

    Either the full success shape or the full failure shape. Use the
    ``succeeded`` and ``failed`` constructors rather than building one
    field by field.

    Attributes:
        success: True if the archive was verified and extracted.
        item_name: Display name of the item.
        version_installed: Version that was resolved for this call.
        config_snippet: Opaque configuration for the caller to merge.
        instructions: Usage instructions from the publisher.
        post_install_notes: Notes shown after installation.
        file_hash: The computed SHA-256 of the downloaded archive, lowercase
            hex. On success it equals the declared hash up to hex case.
        installed_path: Directory the archive was extracted to (None on failure).
        error: Error message (None on success).
    """

    success: bool
    item_name: str
    version_installed: str
    file_hash: str
    config_snippet: dict[str, Any] | None = None
    instructions: str = ""
    post_install_notes: str = ""
    installed_path: Path | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.success and self.error is not None:
            raise ValueError("success=True but error is set")
        if not self.success and self.error is None:
            raise ValueError("success=False requires error message")
        if not self.file_hash:
            raise ValueError("file_hash cannot be empty")

    @classmethod
    def succeeded(
        cls,
        item: ResolvedItem,
        record: VersionRecord,
        file_hash: str,
        installed_path: Path,
    ) -> InstallResult:
        """Build the success shape from the resolved metadata."""
        return cls(
            success=True,
            item_name=item.name,
            version_installed=record.version,
            file_hash=file_hash,
            config_snippet=record.config_snippet,
            instructions=record.instructions,
            post_install_notes=record.post_install_notes,
            installed_path=installed_path,
        )

    @classmethod
    def failed(
        cls,
        item: ResolvedItem,
        record: VersionRecord,
        file_hash: str,
        error: str,
    ) -> InstallResult:
        """Build the failure shape. ``file_hash`` is the computed digest."""
        return cls(
            success=False,
            item_name=item.name,
            version_installed=record.version,
            file_hash=file_hash,
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the caller-facing camelCase shape."""
        data: dict[str, Any] = {
            "success": self.success,
            "itemName": self.item_name,
            "versionInstalled": self.version_installed,
            "fileHash": self.file_hash,
        }
        if self.success:
            data["configSnippet"] = self.config_snippet
            data["instructions"] = self.instructions
            data["postInstallNotes"] = self.post_install_notes
            data["installedPath"] = str(self.installed_path) if self.installed_path else None
        else:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class InstalledItem:
    """An item directory found under the install root.

    Attributes:
        category: Category the directory belongs to.
        slug: Directory name, the slug the item was installed under.
        installed_path: Resolved item directory.
    """

    category: ItemCategory
    slug: str
    installed_path: Path

    def to_dict(self) -> dict[str, Any]:
        """Render the caller-facing camelCase shape."""
        return {
            "category": self.category.value,
            "slug": self.slug,
            "installedPath": str(self.installed_path),
        }
