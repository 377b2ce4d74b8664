"""Install directory layout under ~/.claude."""

from __future__ import annotations

import os
from pathlib import Path

from dojo_marketplace.errors import InvalidSlugError
from dojo_marketplace.types import ItemCategory

CATEGORY_DIR_MAP: dict[ItemCategory, str] = {
    ItemCategory.SKILL: "skills",
    ItemCategory.PLUGIN: "plugins",
    ItemCategory.TOOL: "tools",
}


class InstallLayout:
    """Maps (category, slug) pairs to install directories.

    skill  -> ~/.claude/skills/{slug}/
    plugin -> ~/.claude/plugins/{slug}/
    tool   -> ~/.claude/tools/{slug}/
    """

    def __init__(self, root: Path | None = None) -> None:
        """Initialize the layout.

        Args:
            root: Override for the ~/.claude root directory.
        """
        self._base_dir = root

    @property
    def base_dir(self) -> Path:
        """Get the root directory for installed items.

        Returns:
            Path to ~/.claude/ unless overridden.
        """
        if self._base_dir is None:
            self._base_dir = Path.home() / ".claude"
        return self._base_dir

    def category_dir(self, category: ItemCategory | str) -> Path:
        """Get the canonical directory holding all items of a category.

        Args:
            category: Item category.

        Returns:
            Resolved path, e.g. ~/.claude/skills.

        Raises:
            ValueError: If the category is unknown.
        """
        try:
            dir_name = CATEGORY_DIR_MAP[ItemCategory(category)]
        except ValueError:
            raise ValueError(f"Unknown item category: {category}") from None
        return (self.base_dir / dir_name).resolve()

    def get_install_dir(self, category: ItemCategory | str, slug: str) -> Path:
        """Get the installation directory for an item.

        Nothing is created on disk. The result is always a strict
        descendant of the category directory.

        Args:
            category: Item category.
            slug: Item slug as supplied by the catalog (untrusted).

        Returns:
            Resolved install directory.

        Raises:
            InvalidSlugError: If the slug escapes the category directory.
            ValueError: If the category is unknown.
        """
        base = self.category_dir(category)
        if not slug:
            raise InvalidSlugError(slug)

        candidate = (base / slug).resolve()
        if not str(candidate).startswith(str(base) + os.sep):
            raise InvalidSlugError(slug)
        return candidate


def resolve_install_dir(
    category: ItemCategory | str, slug: str, root: Path | None = None
) -> Path:
    """Resolve the install directory for a category and slug.

    Args:
        category: Item category.
        slug: Item slug.
        root: Optional override for ~/.claude.

    Returns:
        Resolved install directory.
    """
    return InstallLayout(root).get_install_dir(category, slug)
