"""CLI display for sync messages.

This module renders the engine's message stream live: each message is
printed as it is emitted (streaming delivery), styled by level, while a
transient spinner shows the directory most recently synced.
"""

from types import TracebackType
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn
from rich.text import Text

from .output import OutputFormatter
from .sync.messages import Message, MessageLevel

LEVEL_STYLES = {
    MessageLevel.DEBUG: "dim",
    MessageLevel.INFORMATION: "cyan",
    MessageLevel.FILE_IO: "green",
    MessageLevel.WARNING: "yellow",
    MessageLevel.ERROR: "bold red",
}


class SyncMessageDisplay:
    """Rich-based live renderer for sync messages.

    Use as a context manager and pass :meth:`handle` as the engine callback::

        with SyncMessageDisplay(out) as display:
            engine.sync(source, destination, callback=display.handle)
    """

    def __init__(self, out: OutputFormatter):
        """Initialize the display.

        Args:
            out: Output formatter whose console receives the messages
        """
        self.out = out
        self.counts = {level: 0 for level in MessageLevel}
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def __enter__(self) -> "SyncMessageDisplay":
        if not self.out.quiet:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("{task.description}", markup=False),
                console=self.out.console,
                transient=True,
            )
            self._progress.start()
            self._task = self._progress.add_task("Syncing...", total=None)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task = None

    def handle(self, message: Message) -> None:
        """Render one message (engine callback).

        Args:
            message: Message emitted by the sync engine
        """
        self.counts[message.level] += 1

        if message.level >= MessageLevel.ERROR:
            self.out.error(message.format())
            return
        if self.out.quiet:
            return

        line = Text(message.format(), style=LEVEL_STYLES[message.level])
        self.out.console.print(line, soft_wrap=True)

        if (
            self._progress is not None
            and self._task is not None
            and message.text.startswith("Synced directory")
        ):
            self._progress.update(self._task, description=message.text)

    @property
    def error_count(self) -> int:
        return self.counts[MessageLevel.ERROR]

    def summary(self) -> dict[str, int]:
        """Message counts keyed by level label."""
        return {level.label: count for level, count in self.counts.items()}
