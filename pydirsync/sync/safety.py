"""Guard against destructive operations on operating system directories."""

import logging
import os
import re
from collections.abc import Iterable
from typing import Optional, Union

from ..exceptions import DirSyncProtectedPathError
from ..utils import normalize_path

logger = logging.getLogger(__name__)

# A drive root's Windows folder, e.g. C:\Windows or D:/Windows/System32
WINDOWS_SYSTEM_PATH_PATTERN = r"^[A-Z]:[\\/]Windows([\\/]|$)"

# Top-level POSIX system directories (and the filesystem root itself)
POSIX_SYSTEM_PATH_PATTERN = (
    r"^/(bin|boot|dev|etc|lib|lib32|lib64|proc|sbin|sys|usr|System)?([/]|$)"
)

SYSTEM_PATH_PATTERNS: tuple[str, ...] = (
    WINDOWS_SYSTEM_PATH_PATTERN,
    POSIX_SYSTEM_PATH_PATTERN,
)


class SafetyGuard:
    """Refuses deletes that target protected system locations.

    Paths are matched as given, normalized to absolute form, and fully
    resolved, so ``..`` segments, doubled separators and symlinks cannot
    sneak a system folder past the patterns.

    Examples:
        >>> guard = SafetyGuard()
        >>> guard.is_protected("C:\\\\Windows\\\\System32\\\\drivers")
        True
        >>> guard.is_protected("/home/user/backup/old.txt")
        False
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        """Initialize safety guard.

        Args:
            patterns: Regular expressions identifying protected paths
                (defaults to SYSTEM_PATH_PATTERNS)
        """
        raw = SYSTEM_PATH_PATTERNS if patterns is None else tuple(patterns)
        self.patterns = [re.compile(p, re.IGNORECASE) for p in raw]

    def is_protected(self, path: Union[str, "os.PathLike[str]"]) -> bool:
        """Check whether a path (or its symlink target) is protected.

        Args:
            path: Path that is about to be deleted

        Returns:
            True if the path must not be deleted
        """
        raw = os.fspath(path)
        # realpath catches symlinks that lead into a protected location
        candidates = {raw, normalize_path(raw), os.path.realpath(raw)}
        for candidate in candidates:
            for pattern in self.patterns:
                if pattern.search(candidate):
                    logger.debug(f"Protected path detected: {candidate}")
                    return True
        return False

    def check(self, path: Union[str, "os.PathLike[str]"]) -> None:
        """Raise if the path is protected.

        Raises:
            DirSyncProtectedPathError: If is_protected(path) is True
        """
        if self.is_protected(path):
            raise DirSyncProtectedPathError(os.fspath(path))
