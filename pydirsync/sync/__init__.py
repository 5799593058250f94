"""Sync engine for pydirsync - one-way directory tree synchronization."""

from .comparator import ContentComparator
from .config import SyncConfigError, load_sync_pairs_from_json, parse_sync_pairs
from .engine import SyncEngine, SyncSession, sync
from .ignore import ExclusionPattern, compile_patterns, find_match, matches
from .messages import Message, MessageLevel, MessageSink, summarize_messages
from .modes import SyncPolicy
from .operations import SyncOperations
from .pair import SyncPair
from .safety import SYSTEM_PATH_PATTERNS, SafetyGuard
from .scanner import DirectoryEntry, DirectoryListing, DirectoryScanner

__all__ = [
    "SyncEngine",
    "SyncSession",
    "sync",
    "SyncPolicy",
    "SyncPair",
    "SyncOperations",
    "SyncConfigError",
    "load_sync_pairs_from_json",
    "parse_sync_pairs",
    "ContentComparator",
    "SafetyGuard",
    "SYSTEM_PATH_PATTERNS",
    "ExclusionPattern",
    "compile_patterns",
    "find_match",
    "matches",
    "Message",
    "MessageLevel",
    "MessageSink",
    "summarize_messages",
    "DirectoryEntry",
    "DirectoryListing",
    "DirectoryScanner",
]
