"""Content comparison logic for differential sync."""

import hashlib
import logging
import os
from typing import Union

from ..exceptions import DirSyncComparisonError, DirSyncIOError
from ..utils import DEFAULT_HASH_ALGORITHM, DEFAULT_HASH_CHUNK_SIZE

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class ContentComparator:
    """Compares files by streaming their bytes through a cryptographic hash."""

    def __init__(
        self,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
        chunk_size: int = DEFAULT_HASH_CHUNK_SIZE,
    ):
        """Initialize content comparator.

        Args:
            algorithm: hashlib algorithm name (default: sha256)
            chunk_size: Number of bytes read per iteration

        Raises:
            ValueError: If the algorithm is unknown or chunk_size is not positive
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1 byte")
        # Fail early on unknown algorithm names
        hashlib.new(algorithm)
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    def hash_file(self, path: PathLike) -> str:
        """Compute the hex digest of a file's contents.

        Args:
            path: File to hash

        Returns:
            Lower-case hex digest (fixed length for the algorithm)

        Raises:
            DirSyncIOError: If the file cannot be opened or read
        """
        hasher = hashlib.new(self.algorithm)
        try:
            with open(path, "rb") as f:
                while chunk := f.read(self.chunk_size):
                    hasher.update(chunk)
        except OSError as e:
            raise DirSyncIOError(
                f"{type(e).__name__} while hashing '{os.fspath(path)}': {e}",
                path=os.fspath(path),
            ) from e

        digest = hasher.hexdigest()
        logger.debug(f"{self.algorithm} of {os.fspath(path)}: {digest}")
        return digest

    def content_equals(self, path_a: PathLike, path_b: PathLike) -> bool:
        """Check whether two files have byte-identical contents.

        Args:
            path_a: First file
            path_b: Second file

        Returns:
            True if both digests match exactly

        Raises:
            DirSyncComparisonError: If either file cannot be read; the
                result is indeterminate and callers must not assume
                equality or difference
        """
        try:
            return self.hash_file(path_a) == self.hash_file(path_b)
        except DirSyncIOError as e:
            raise DirSyncComparisonError(str(e), path=e.path) from e
