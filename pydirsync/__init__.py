"""PyDirSync - one-way directory tree synchronization."""

from .exceptions import (
    DirSyncComparisonError,
    DirSyncConfigError,
    DirSyncError,
    DirSyncIOError,
    DirSyncNotFoundError,
    DirSyncProtectedPathError,
)
from .sync import (
    ContentComparator,
    Message,
    MessageLevel,
    SafetyGuard,
    SyncEngine,
    SyncPair,
    SyncPolicy,
)

__all__ = [
    "SyncEngine",
    "SyncPair",
    "SyncPolicy",
    "Message",
    "MessageLevel",
    "ContentComparator",
    "SafetyGuard",
    "DirSyncError",
    "DirSyncComparisonError",
    "DirSyncConfigError",
    "DirSyncIOError",
    "DirSyncNotFoundError",
    "DirSyncProtectedPathError",
]
