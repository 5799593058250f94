"""Sync pair configuration: a source/destination pair plus its settings."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .messages import MessageLevel
from .modes import SyncPolicy


def _split_literal(literal: str) -> list[str]:
    """Split a literal pair on colons, keeping Windows drive letters.

    A single letter followed by a part starting with a path separator is
    treated as a drive (``C:\\data``), so single-letter relative directory
    names must be written as ``./x``.
    """
    parts: list[str] = []
    for piece in literal.split(":"):
        previous = parts[-1] if parts else ""
        if len(previous) == 1 and previous.isalpha() and piece[:1] in ("\\", "/"):
            parts[-1] = f"{previous}:{piece}"
        else:
            parts.append(piece)
    return parts


@dataclass
class SyncPair:
    """A source directory mirrored into a destination directory.

    Examples:
        >>> pair = SyncPair.parse_literal("/home/user/docs:full:/mnt/backup/docs")
        >>> pair.policy
        <SyncPolicy.FULL: 'full'>
    """

    source: Path
    """Source directory (or file)"""

    destination: Path
    """Destination directory (or file path)"""

    policy: SyncPolicy = SyncPolicy.DIFFERENTIAL
    """When existing destination files are overwritten"""

    alias: Optional[str] = None
    """Optional name used to select this pair"""

    exclude: list[str] = field(default_factory=list)
    """Wildcard patterns of paths to skip"""

    verbosity: MessageLevel = MessageLevel.FILE_IO
    """Minimum level of emitted messages"""

    def __post_init__(self) -> None:
        """Normalize field types."""
        if isinstance(self.source, str):
            self.source = Path(self.source)
        if isinstance(self.destination, str):
            self.destination = Path(self.destination)
        if isinstance(self.policy, str) and not isinstance(self.policy, SyncPolicy):
            self.policy = SyncPolicy.from_string(self.policy)
        if isinstance(self.verbosity, str):
            self.verbosity = MessageLevel.from_string(self.verbosity)
        elif not isinstance(self.verbosity, MessageLevel):
            self.verbosity = MessageLevel(self.verbosity)
        self.exclude = list(self.exclude)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncPair":
        """Create a sync pair from a dictionary.

        Args:
            data: Dictionary with keys ``source``, ``destination`` (required)
                and optionally ``policy``, ``alias``, ``exclude``, ``verbosity``

        Returns:
            SyncPair instance

        Raises:
            ValueError: If required fields are missing or values are invalid
        """
        missing = [key for key in ("source", "destination") if not data.get(key)]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        exclude = data.get("exclude", [])
        if isinstance(exclude, str) or not isinstance(exclude, list):
            raise ValueError("'exclude' must be a list of patterns")

        return cls(
            source=Path(data["source"]),
            destination=Path(data["destination"]),
            policy=SyncPolicy.from_string(data.get("policy") or "differential"),
            alias=data.get("alias"),
            exclude=[str(pattern) for pattern in exclude],
            verbosity=MessageLevel.from_string(data.get("verbosity") or "FileIO"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert sync pair to dictionary for JSON serialization."""
        return {
            "source": str(self.source),
            "destination": str(self.destination),
            "policy": self.policy.value,
            "alias": self.alias,
            "exclude": list(self.exclude),
            "verbosity": self.verbosity.label,
        }

    @classmethod
    def parse_literal(cls, literal: str) -> "SyncPair":
        """Parse a literal sync pair.

        Formats:
            ``/source:/destination`` (differential policy)
            ``/source:policy:/destination``

        Args:
            literal: Literal sync pair string

        Returns:
            SyncPair instance

        Raises:
            ValueError: If the literal is malformed
        """
        parts = _split_literal(literal)

        if len(parts) == 2:
            source, destination = parts
            policy = SyncPolicy.DIFFERENTIAL
        elif len(parts) == 3:
            source, policy_name, destination = parts
            policy = SyncPolicy.from_string(policy_name)
        else:
            raise ValueError(
                f"Invalid sync pair literal: {literal}. "
                "Expected '/source:/destination' or '/source:policy:/destination'"
            )

        if not source or not destination:
            raise ValueError("Source and destination paths cannot be empty")

        return cls(source=Path(source), destination=Path(destination), policy=policy)

    def __str__(self) -> str:
        name = f"{self.alias}: " if self.alias else ""
        return f"{name}{self.source} => {self.destination} ({self.policy.value})"
