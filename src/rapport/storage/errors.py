"""Storage exceptions."""

from __future__ import annotations


class StorageError(Exception):
    """Base class for failures reading or writing workspace files."""


class InvalidWorkspaceError(StorageError):
    """Raised when a path is not a usable workspace."""


class ProfileNotFoundError(StorageError):
    """Raised when a report directory has no ``_profile.md``."""


class FrontmatterError(StorageError):
    """Raised when a header block is not valid YAML or not a mapping."""


class DuplicateEntryError(StorageError):
    """Raised when an entry already exists for the requested timestamp."""


class ValidationError(StorageError):
    """Raised when a value supplied to an update is out of range."""
