"""Exceptions raised by pydirsync."""

from typing import Optional


class DirSyncError(Exception):
    """Base exception for all pydirsync errors."""


class DirSyncNotFoundError(DirSyncError, FileNotFoundError):
    """Raised when the sync source is neither a file nor a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Source path not found: {path}")


class DirSyncIOError(DirSyncError):
    """Raised when a filesystem operation on a specific path fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class DirSyncComparisonError(DirSyncIOError):
    """Raised when two files cannot be compared (hash/read failure)."""


class DirSyncProtectedPathError(DirSyncError):
    """Raised when a delete targets a protected system location."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path '{path}' appears to be a system directory.")


class DirSyncConfigError(DirSyncError):
    """Raised when a sync configuration is invalid."""
