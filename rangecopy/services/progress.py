from typing import Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)


@runtime_checkable
class ProgressSink(Protocol):
    """Observer for a running copy. Called synchronously from the copy loop."""

    def start(self, total: int) -> None: ...

    def advance(self, nbytes: int) -> None: ...

    def finish(self, total: int) -> None: ...


class NullProgressSink:
    """Used when the caller does not want progress."""

    def start(self, total: int) -> None:
        pass

    def advance(self, nbytes: int) -> None:
        pass

    def finish(self, total: int) -> None:
        pass


class RichProgressSink:
    """Renders a byte progress bar on stderr with rich."""

    def __init__(self, description: str = "Copying", console: Optional[Console] = None):
        self.description = description
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console or Console(stderr=True),
            transient=False,
        )
        self._task_id: Optional[TaskID] = None

    def start(self, total: int) -> None:
        self._progress.start()
        self._task_id = self._progress.add_task(self.description, total=total)

    def advance(self, nbytes: int) -> None:
        if self._task_id is not None:
            self._progress.advance(self._task_id, nbytes)

    def finish(self, total: int) -> None:
        if self._task_id is not None:
            self._progress.update(self._task_id, completed=total)
        self._progress.stop()
