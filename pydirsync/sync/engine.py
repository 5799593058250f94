"""Core sync engine: one-way directory tree synchronization."""

import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..exceptions import DirSyncComparisonError, DirSyncError, DirSyncNotFoundError
from .comparator import ContentComparator
from .ignore import ExclusionPattern, compile_patterns, find_match
from .messages import Message, MessageCallback, MessageLevel, MessageSink
from .modes import SyncPolicy
from .operations import SyncOperations
from .pair import SyncPair
from .safety import SafetyGuard
from .scanner import DirectoryListing, DirectoryScanner

logger = logging.getLogger(__name__)

PolicyLike = Union[SyncPolicy, str]
LevelLike = Union[MessageLevel, int, str]


def _coerce_policy(policy: PolicyLike) -> SyncPolicy:
    if isinstance(policy, SyncPolicy):
        return policy
    return SyncPolicy.from_string(policy)


def _coerce_level(level: LevelLike) -> MessageLevel:
    if isinstance(level, str):
        return MessageLevel.from_string(level)
    return MessageLevel(level)


@dataclass
class SyncSession:
    """Settings and message sink bound together for one sync call."""

    policy: SyncPolicy
    """Overwrite policy for existing destination files"""

    sink: MessageSink
    """Receives every message of this run"""

    patterns: list[ExclusionPattern] = field(default_factory=list)
    """Compiled exclusion patterns"""

    cancel_event: Optional[threading.Event] = None
    """Set by another thread to stop the run at the next entry"""

    cancelled: bool = False
    """Whether cancellation has already been reported"""

    def is_cancelled(self) -> bool:
        """Check the cancel event, reporting the first observation once."""
        if self.cancel_event is None or not self.cancel_event.is_set():
            return False
        if not self.cancelled:
            self.cancelled = True
            self.sink.warning("Sync cancelled; remaining entries were not processed.")
        return True

    def exclusion_for(self, *paths: Path) -> Optional[ExclusionPattern]:
        """Return the first pattern matching any of the given paths."""
        for path in paths:
            pattern = find_match(path, self.patterns)
            if pattern is not None:
                return pattern
        return None


class SyncEngine:
    """Makes a destination tree mirror a source tree.

    The engine walks both trees in lock-step. Per directory level it
    ensures the destination directory exists, recurses into source
    subdirectories, removes destination subdirectories missing from the
    source, syncs files, and removes destination files missing from the
    source. Every failing filesystem call becomes one Error message and
    processing continues with the next sibling; only a missing source
    raises.

    Examples:
        >>> engine = SyncEngine(policy=SyncPolicy.DIFFERENTIAL)
        >>> messages = engine.sync("/data/docs", "/backup/docs", ["*.tmp"])
        >>> for message in messages:
        ...     print(message)
    """

    def __init__(
        self,
        policy: PolicyLike = SyncPolicy.DIFFERENTIAL,
        verbosity: LevelLike = MessageLevel.FILE_IO,
        comparator: Optional[ContentComparator] = None,
        guard: Optional[SafetyGuard] = None,
        operations: Optional[SyncOperations] = None,
    ):
        """Initialize sync engine.

        Args:
            policy: Default sync policy (full vs. differential)
            verbosity: Default minimum level of emitted messages
            comparator: Content comparator used by the differential policy
            guard: Safety guard consulted before deletes
            operations: Filesystem operations (defaults to SyncOperations
                sharing the engine's guard)
        """
        self.policy = _coerce_policy(policy)
        self.verbosity = _coerce_level(verbosity)
        self.comparator = comparator or ContentComparator()
        self.guard = guard or SafetyGuard()
        self.operations = operations or SyncOperations(self.guard)
        self.source_scanner = DirectoryScanner(follow_symlinks=True)
        self.destination_scanner = DirectoryScanner(follow_symlinks=False)

    def sync(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        exclude_patterns: Optional[list[str]] = None,
        callback: Optional[MessageCallback] = None,
        policy: Optional[PolicyLike] = None,
        verbosity: Optional[LevelLike] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[Message]:
        """Sync destination with source.

        Args:
            source: Source directory (or single file)
            destination: Destination directory (or file path in file mode)
            exclude_patterns: Wildcard patterns of paths to skip
            callback: Called synchronously with each emitted message
            policy: Override the engine's sync policy for this call
            verbosity: Override the engine's verbosity for this call
            cancel_event: Optional event checked before each entry

        Returns:
            All emitted messages in emission order

        Raises:
            DirSyncNotFoundError: If source is neither a file nor a directory
        """
        source_path = Path(source)
        destination_path = Path(destination)

        if verbosity is None:
            verbosity = self.verbosity
        session = SyncSession(
            policy=self.policy if policy is None else _coerce_policy(policy),
            sink=MessageSink(verbosity=_coerce_level(verbosity), callback=callback),
            patterns=compile_patterns(exclude_patterns),
            cancel_event=cancel_event,
        )

        start_time = time.time()
        logger.debug(
            f"Starting {session.policy.value} sync: {source_path} -> {destination_path}"
        )

        if source_path.is_dir():
            try:
                self._sync_directory(
                    session, source_path, destination_path, top_level=True
                )
            except Exception as e:
                self._report_error(session, e, f"syncing directory '{source_path}'")
        elif source_path.is_file():
            try:
                self._sync_file(session, source_path, destination_path, top_level=True)
            except Exception as e:
                self._report_error(session, e, f"syncing file '{source_path}'")
        else:
            raise DirSyncNotFoundError(str(source_path))

        elapsed = time.time() - start_time
        logger.debug(
            f"Sync of {source_path} took {elapsed:.2f}s "
            f"({len(session.sink.messages)} message(s))"
        )
        return session.sink.messages

    def sync_pair(
        self,
        pair: SyncPair,
        callback: Optional[MessageCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[Message]:
        """Sync a configured sync pair using its own policy and verbosity.

        Args:
            pair: Sync pair to synchronize
            callback: Called synchronously with each emitted message
            cancel_event: Optional event checked before each entry

        Returns:
            All emitted messages in emission order
        """
        return self.sync(
            pair.source,
            pair.destination,
            exclude_patterns=pair.exclude,
            callback=callback,
            policy=pair.policy,
            verbosity=pair.verbosity,
            cancel_event=cancel_event,
        )

    def _report_error(
        self, session: SyncSession, error: Exception, action: str
    ) -> None:
        """Record a failure as a single Error message."""
        logger.debug(f"{type(error).__name__} while {action}", exc_info=error)
        session.sink.error(f"{type(error).__name__} caught while {action}: {error}")

    def _sync_directory(
        self,
        session: SyncSession,
        source: Path,
        destination: Path,
        top_level: bool = False,
    ) -> None:
        """Sync one directory level and recurse into subdirectories.

        Below the top level a destination symlink is never descended into;
        it is unlinked and replaced by a real directory.
        """
        if session.is_cancelled():
            return

        pattern = session.exclusion_for(source)
        if pattern is not None:
            session.sink.debug(
                f"'{source}' matched pattern '{pattern}' -- skipping directory."
            )
            return

        if not top_level and not self._unlink_symlink(session, destination):
            return

        try:
            if not destination.is_dir():
                self.operations.create_directory(destination)
                session.sink.file_io(f"Created directory '{destination}'.")
        except (OSError, DirSyncError) as e:
            self._report_error(session, e, f"creating directory '{destination}'")
            return

        try:
            source_listing = self.source_scanner.scan(source)
        except OSError as e:
            self._report_error(session, e, f"listing directory '{source}'")
            return

        for entry in source_listing.directories:
            try:
                self._sync_directory(session, entry.path, destination / entry.name)
            except Exception as e:
                self._report_error(session, e, f"syncing directory '{entry.path}'")

        self._remove_orphan_directories(session, source, destination, source_listing)

        for entry in source_listing.files:
            try:
                self._sync_file(session, entry.path, destination / entry.name)
            except Exception as e:
                self._report_error(session, e, f"syncing file '{entry.path}'")

        self._remove_orphan_files(session, source, destination, source_listing)

        if session.is_cancelled():
            return
        session.sink.file_io(f"Synced directory '{source}' => '{destination}'.")

    def _remove_orphan_directories(
        self,
        session: SyncSession,
        source: Path,
        destination: Path,
        source_listing: DirectoryListing,
    ) -> None:
        """Delete destination subdirectories with no source counterpart."""
        if session.is_cancelled():
            return

        try:
            destination_listing = self.destination_scanner.scan(destination)
        except OSError as e:
            self._report_error(session, e, f"listing directory '{destination}'")
            return

        source_dirs = source_listing.directory_keys()
        for entry in destination_listing.directories:
            if entry.key in source_dirs:
                continue

            pattern = session.exclusion_for(entry.path, source / entry.name)
            if pattern is not None:
                session.sink.information(
                    f"'{entry.path}' matched pattern '{pattern}' "
                    "-- not deleting directory."
                )
                continue

            try:
                self._delete_directory(session, entry.path)
            except Exception as e:
                self._report_error(session, e, f"deleting directory '{entry.path}'")

    def _remove_orphan_files(
        self,
        session: SyncSession,
        source: Path,
        destination: Path,
        source_listing: DirectoryListing,
    ) -> None:
        """Delete destination files with no source counterpart."""
        if session.is_cancelled():
            return

        try:
            destination_listing = self.destination_scanner.scan(destination)
        except OSError as e:
            self._report_error(session, e, f"listing directory '{destination}'")
            return

        source_files = source_listing.file_keys()
        for entry in destination_listing.files:
            if entry.key in source_files:
                continue

            pattern = session.exclusion_for(entry.path, source / entry.name)
            if pattern is not None:
                session.sink.information(
                    f"'{entry.path}' matched pattern '{pattern}' -- not deleting file."
                )
                continue

            self._delete_file(session, entry.path)

    def _sync_file(
        self,
        session: SyncSession,
        source: Path,
        destination: Path,
        top_level: bool = False,
    ) -> None:
        """Copy one file unless it is excluded or (differential) unchanged."""
        if session.is_cancelled():
            return

        pattern = session.exclusion_for(source)
        if pattern is not None:
            session.sink.information(
                f"'{source}' matched pattern '{pattern}' -- skipping file."
            )
            return

        if not top_level and not self._unlink_symlink(session, destination):
            return

        try:
            if session.policy.compares_content and destination.exists():
                try:
                    equal = self.comparator.content_equals(source, destination)
                except DirSyncComparisonError as e:
                    # Indeterminate: never overwrite on an ambiguous state
                    self._report_error(
                        session, e, f"comparing files '{source}' and '{destination}'"
                    )
                    return

                if equal:
                    session.sink.information(
                        f"'{source}' is binary equal to '{destination}' "
                        "-- skipping file."
                    )
                    return

            self.operations.copy_file(source, destination)
            session.sink.file_io(f"Synced file '{source}' => '{destination}'.")
        except (OSError, DirSyncError) as e:
            self._report_error(session, e, f"syncing file '{source}'")

    def _unlink_symlink(self, session: SyncSession, path: Path) -> bool:
        """Remove a destination symlink standing where a real entry belongs.

        Returns:
            True if path is not (or no longer) a symlink
        """
        if not path.is_symlink():
            return True
        return self._delete_file(session, path)

    def _delete_file(self, session: SyncSession, path: Path) -> bool:
        """Delete one destination file.

        Returns:
            True if the file was deleted
        """
        try:
            self.operations.delete_file(path)
        except (OSError, DirSyncError) as e:
            self._report_error(session, e, f"deleting file '{path}'")
            return False

        session.sink.file_io(f"Deleted file '{path}'.")
        return True

    def _delete_directory(self, session: SyncSession, path: Path) -> bool:
        """Recursively delete a destination directory, bottom-up.

        Excluded and protected entries are kept; a directory still holding
        kept entries is left in place.

        Returns:
            True if the directory itself was removed

        Raises:
            DirSyncProtectedPathError: If the directory is protected
        """
        if session.is_cancelled():
            return False

        self.guard.check(path)

        try:
            listing = self.destination_scanner.scan(path)
        except OSError as e:
            self._report_error(session, e, f"listing directory '{path}'")
            return False

        removed_all = True

        for entry in listing.directories:
            pattern = session.exclusion_for(entry.path)
            if pattern is not None:
                session.sink.information(
                    f"'{entry.path}' matched pattern '{pattern}' "
                    "-- not deleting directory."
                )
                removed_all = False
                continue
            try:
                if not self._delete_directory(session, entry.path):
                    removed_all = False
            except (OSError, DirSyncError) as e:
                self._report_error(session, e, f"deleting directory '{entry.path}'")
                removed_all = False

        for entry in listing.files:
            pattern = session.exclusion_for(entry.path)
            if pattern is not None:
                session.sink.information(
                    f"'{entry.path}' matched pattern '{pattern}' -- not deleting file."
                )
                removed_all = False
                continue
            if not self._delete_file(session, entry.path):
                removed_all = False

        if not removed_all:
            session.sink.information(
                f"Keeping directory '{path}' because it still contains entries."
            )
            return False

        try:
            self.operations.remove_directory(path)
        except (OSError, DirSyncError) as e:
            self._report_error(session, e, f"deleting directory '{path}'")
            return False

        session.sink.file_io(f"Deleted directory '{path}'.")
        return True


def sync(
    source_path: Union[str, Path],
    dest_path: Union[str, Path],
    exclude_patterns: Optional[list[str]] = None,
    policy: PolicyLike = SyncPolicy.DIFFERENTIAL,
    verbosity: LevelLike = MessageLevel.FILE_IO,
    callback: Optional[MessageCallback] = None,
    cancel_event: Optional[threading.Event] = None,
) -> list[Message]:
    """Sync dest_path with source_path using a default-configured engine.

    Args:
        source_path: Source directory (or single file)
        dest_path: Destination directory (or file path in file mode)
        exclude_patterns: Wildcard patterns of paths to skip
        policy: Sync policy (full vs. differential)
        verbosity: Minimum level of emitted messages
        callback: Called synchronously with each emitted message
        cancel_event: Optional event checked before each entry

    Returns:
        All emitted messages in emission order

    Raises:
        DirSyncNotFoundError: If source_path is neither a file nor a directory
    """
    engine = SyncEngine(policy=policy, verbosity=verbosity)
    return engine.sync(
        source_path,
        dest_path,
        exclude_patterns=exclude_patterns,
        callback=callback,
        cancel_event=cancel_event,
    )
