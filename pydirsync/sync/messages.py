"""Leveled messages produced by the sync engine.

Every action the engine takes (or refuses to take) is reported as a
:class:`Message`. A :class:`MessageSink` filters messages by verbosity and
delivers them either in batch (collected list) or streaming (callback
invoked synchronously for each message) form, always in emission order.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Callable, Optional

from ..utils import format_clock_time

logger = logging.getLogger(__name__)


class MessageLevel(IntEnum):
    """Message severity, ordered from least to most severe.

    Also used as a verbosity threshold: a message is emitted only when its
    level is greater than or equal to the configured verbosity.
    """

    DEBUG = 0
    INFORMATION = 1
    FILE_IO = 2
    WARNING = 3
    ERROR = 4

    @property
    def label(self) -> str:
        """Display name used in formatted messages."""
        return _LEVEL_LABELS[self]

    @classmethod
    def from_string(cls, value: str) -> "MessageLevel":
        """Parse a level from its display name or enum name.

        Args:
            value: Level name, e.g. "FileIO", "file_io", "information" or "info"

        Returns:
            MessageLevel enum value

        Raises:
            ValueError: If the value is not a known level
        """
        normalized = value.strip().lower().replace("_", "").replace("-", "")
        for level in cls:
            if normalized == level.label.lower():
                return level
        if normalized == "info":
            return cls.INFORMATION
        valid = ", ".join(level.label for level in cls)
        raise ValueError(f"Invalid message level: {value}. Valid levels: {valid}")


_LEVEL_LABELS = {
    MessageLevel.DEBUG: "Debug",
    MessageLevel.INFORMATION: "Information",
    MessageLevel.FILE_IO: "FileIO",
    MessageLevel.WARNING: "Warning",
    MessageLevel.ERROR: "Error",
}


@dataclass(frozen=True)
class Message:
    """A single immutable message emitted during a sync."""

    level: MessageLevel
    """Severity of the message"""

    text: str
    """Human-readable message text"""

    timestamp: datetime = field(default_factory=datetime.now)
    """Local wall clock time at emission"""

    def format(self) -> str:
        """Format as ``[hh:mm:ss AM] Level: text``."""
        return f"[{format_clock_time(self.timestamp)}] {self.level.label}: {self.text}"

    def __str__(self) -> str:
        return self.format()

    def to_dict(self) -> dict:
        """Convert message to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.label,
            "text": self.text,
        }


MessageCallback = Callable[[Message], None]


class MessageSink:
    """Collects and forwards messages above a verbosity threshold.

    Examples:
        >>> sink = MessageSink(verbosity=MessageLevel.FILE_IO)
        >>> sink.emit(MessageLevel.DEBUG, "hidden")
        >>> sink.emit(MessageLevel.ERROR, "shown")
        >>> [m.text for m in sink.messages]
        ['shown']
    """

    def __init__(
        self,
        verbosity: MessageLevel = MessageLevel.FILE_IO,
        callback: Optional[MessageCallback] = None,
    ):
        """Initialize message sink.

        Args:
            verbosity: Minimum level a message needs to be emitted
            callback: Optional function called synchronously with each
                emitted message (streaming delivery). Exceptions it raises
                are logged and counted in ``callback_failures``; the message
                is still recorded and the sync continues.
        """
        self.verbosity = MessageLevel(verbosity)
        self.callback = callback
        self.messages: list[Message] = []
        self.callback_failures = 0

    def accepts(self, level: MessageLevel) -> bool:
        """Check whether a message of the given level would be emitted."""
        return level >= self.verbosity

    def emit(self, level: MessageLevel, text: str) -> Optional[Message]:
        """Create and deliver a message if it passes the verbosity filter.

        Args:
            level: Message severity
            text: Message text

        Returns:
            The emitted Message, or None if it was filtered out
        """
        if not self.accepts(level):
            return None

        message = Message(level=level, text=text)
        self.messages.append(message)
        logger.debug(message.format())

        if self.callback is not None:
            try:
                self.callback(message)
            except Exception:
                # Callback failures never become sync errors
                self.callback_failures += 1
                logger.exception(f"Message callback failed for: {message.format()}")
        return message

    def debug(self, text: str) -> Optional[Message]:
        return self.emit(MessageLevel.DEBUG, text)

    def information(self, text: str) -> Optional[Message]:
        return self.emit(MessageLevel.INFORMATION, text)

    def file_io(self, text: str) -> Optional[Message]:
        return self.emit(MessageLevel.FILE_IO, text)

    def warning(self, text: str) -> Optional[Message]:
        return self.emit(MessageLevel.WARNING, text)

    def error(self, text: str) -> Optional[Message]:
        return self.emit(MessageLevel.ERROR, text)

    def count(self, level: MessageLevel) -> int:
        """Number of emitted messages with exactly the given level."""
        return sum(1 for message in self.messages if message.level == level)

    @property
    def has_errors(self) -> bool:
        """Whether any Error-level message was emitted."""
        return self.count(MessageLevel.ERROR) > 0


def summarize_messages(messages: list[Message]) -> dict:
    """Count messages per level label.

    Args:
        messages: Messages returned by a sync

    Returns:
        Dictionary mapping level label to count (all levels present)
    """
    summary = {level.label: 0 for level in MessageLevel}
    for message in messages:
        summary[message.level.label] += 1
    return summary
