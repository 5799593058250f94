"""Filesystem primitives used by the sync engine."""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from .safety import SafetyGuard

logger = logging.getLogger(__name__)


class SyncOperations:
    """Create, copy and delete operations with a safety check on deletes.

    Each method performs exactly one filesystem change and lets OSError
    propagate, so the caller can report and isolate the failure.
    """

    def __init__(self, guard: Optional[SafetyGuard] = None):
        """Initialize sync operations.

        Args:
            guard: Safety guard consulted before every delete
        """
        self.guard = guard or SafetyGuard()

    def create_directory(self, path: Path) -> None:
        """Create a directory, including missing parents.

        Args:
            path: Directory to create
        """
        path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created directory {path}")

    def copy_file(self, source: Path, destination: Path) -> None:
        """Copy file contents, overwriting the destination.

        Only file data is copied; timestamps and permission bits are left
        to the destination filesystem's defaults.

        Args:
            source: File to copy
            destination: Target file path
        """
        shutil.copyfile(source, destination)
        logger.debug(f"Copied {source} -> {destination}")

    def delete_file(self, path: Path) -> None:
        """Delete a single file (or symlink).

        Args:
            path: File to delete

        Raises:
            DirSyncProtectedPathError: If the path is protected
        """
        self.guard.check(path)
        os.unlink(path)
        logger.debug(f"Deleted file {path}")

    def remove_directory(self, path: Path) -> None:
        """Remove an empty directory.

        Args:
            path: Directory to remove

        Raises:
            DirSyncProtectedPathError: If the path is protected
        """
        self.guard.check(path)
        os.rmdir(path)
        logger.debug(f"Removed directory {path}")
