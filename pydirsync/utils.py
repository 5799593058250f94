"""Utility functions for pydirsync."""

import os
from datetime import datetime
from typing import Optional, Union

# =============================================================================
# Constants for file operations
# =============================================================================

# Algorithm used for content digests (any name accepted by hashlib.new)
DEFAULT_HASH_ALGORITHM: str = "sha256"

# Read size when streaming a file through the hash function (64 KB)
DEFAULT_HASH_CHUNK_SIZE: int = 64 * 1024

# strftime format for message timestamps, e.g. "03:07:45 PM"
CLOCK_FORMAT: str = "%I:%M:%S %p"


# =============================================================================
# Timestamp formatting utilities
# =============================================================================


def format_clock_time(moment: Optional[datetime] = None) -> str:
    """Format a timestamp as a 12-hour wall clock string.

    Args:
        moment: Timestamp to format (defaults to now, local time)

    Returns:
        String such as "03:07:45 PM"
    """
    if moment is None:
        moment = datetime.now()
    return moment.strftime(CLOCK_FORMAT)


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


# =============================================================================
# Path utilities
# =============================================================================


def normalize_path(path: Union[str, "os.PathLike[str]"]) -> str:
    """Return an absolute, normalized string form of a path.

    Collapses duplicate separators and ``..`` segments so pattern checks
    see the location the operating system will actually touch.

    Args:
        path: Path to normalize

    Returns:
        Absolute normalized path string

    Examples:
        >>> normalize_path("/data//backup/../docs")
        '/data/docs'
    """
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def name_key(name: str) -> str:
    """Key used to pair directory entries by name.

    Case-folded only where the host filesystem is case-insensitive
    (as reported by os.path.normcase).
    """
    return os.path.normcase(name)
