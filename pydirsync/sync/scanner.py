"""Directory listing utilities for sync operations."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ..utils import name_key

logger = logging.getLogger(__name__)


@dataclass
class DirectoryEntry:
    """A single child of a scanned directory."""

    path: Path
    """Full path of the entry"""

    name: str
    """Entry name within its parent directory"""

    is_dir: bool
    """Whether the entry is treated as a directory"""

    is_symlink: bool = False
    """Whether the entry itself is a symbolic link"""

    @property
    def key(self) -> str:
        """Name used to pair this entry with its counterpart."""
        return name_key(self.name)


@dataclass
class DirectoryListing:
    """Immediate children of one directory, split into dirs and files."""

    path: Path
    """Directory that was listed"""

    directories: list[DirectoryEntry] = field(default_factory=list)
    """Subdirectories, sorted by name"""

    files: list[DirectoryEntry] = field(default_factory=list)
    """Files (and anything else that is not a directory), sorted by name"""

    def directory_keys(self) -> set[str]:
        return {entry.key for entry in self.directories}

    def file_keys(self) -> set[str]:
        return {entry.key for entry in self.files}


class DirectoryScanner:
    """Lists directories one level at a time.

    The sync engine walks source and destination in lock-step, so it never
    needs a full recursive scan up front; each level is listed when the
    engine reaches it.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> listing = scanner.scan(Path("/data/photos"))
        >>> [d.name for d in listing.directories]
        ['2023', '2024']
    """

    def __init__(self, follow_symlinks: bool = True):
        """Initialize directory scanner.

        Args:
            follow_symlinks: Whether a symlink to a directory is listed as a
                directory. Destination-side scans pass False so deletes
                never descend through links.
        """
        self.follow_symlinks = follow_symlinks

    def scan(self, directory: Path) -> DirectoryListing:
        """List the immediate children of a directory.

        Args:
            directory: Directory to list

        Returns:
            DirectoryListing with entries sorted by name

        Raises:
            OSError: If the directory cannot be listed
        """
        listing = DirectoryListing(path=directory)

        with os.scandir(directory) as it:
            for item in it:
                try:
                    is_dir = item.is_dir(follow_symlinks=self.follow_symlinks)
                    is_symlink = item.is_symlink()
                except OSError:
                    # Entry vanished or is unreadable; treat it as a file so
                    # the later file operation reports the failure
                    is_dir = False
                    is_symlink = False

                entry = DirectoryEntry(
                    path=directory / item.name,
                    name=item.name,
                    is_dir=is_dir,
                    is_symlink=is_symlink,
                )
                if is_dir:
                    listing.directories.append(entry)
                else:
                    listing.files.append(entry)

        listing.directories.sort(key=lambda e: e.name)
        listing.files.sort(key=lambda e: e.name)
        logger.debug(
            f"Scanned {directory}: {len(listing.directories)} dir(s), "
            f"{len(listing.files)} file(s)"
        )
        return listing
