"""
Progress and report output.

The pipeline talks to a ReportSink; RichReportSink renders it on a terminal.
"""

from typing import Protocol, Sequence

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text


class ReportSink(Protocol):
    """Line output, a progress bar and tables."""

    def line(self, text: str = "", style: str | None = None) -> None: ...

    def progress_start(self, total: int) -> None: ...

    def progress_advance(self, step: int = 1) -> None: ...

    def progress_finish(self) -> None: ...

    def table(self, rows: Sequence[Sequence[str]], headers: Sequence[str]) -> None: ...


class RichReportSink:
    """ReportSink backed by a rich Console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def line(self, text: str = "", style: str | None = None) -> None:
        self.console.print(text, style=style, markup=False, highlight=False)

    def progress_start(self, total: int) -> None:
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
        )
        self._task_id = self._progress.add_task("Scanning", total=total)
        self._progress.start()

    def progress_advance(self, step: int = 1) -> None:
        if self._progress is not None:
            self._progress.advance(self._task_id, step)

    def progress_finish(self) -> None:
        if self._progress is None:
            return
        # The upfront total is only an estimate; end on what was scanned
        completed = self._progress.tasks[0].completed
        self._progress.update(self._task_id, total=completed)
        self._progress.stop()
        self._progress = None
        self._task_id = None

    def table(self, rows: Sequence[Sequence[str]], headers: Sequence[str]) -> None:
        table = Table(*headers)
        for row in rows:
            table.add_row(*(Text(cell) for cell in row))
        self.console.print(table)
