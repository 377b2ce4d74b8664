"""Marketplace client that installs skills, plugins and tools for Claude."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from dojo_marketplace.protocols import (
    ArchiveExtractor,
    ArchiveSource,
    CatalogService,
    FileSystem,
)

__all__ = [
    "__version__",
    "ArchiveExtractor",
    "ArchiveSource",
    "CatalogService",
    "FileSystem",
]
