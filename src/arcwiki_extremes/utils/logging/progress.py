# ABOUTME: Progress display for the note-count enrichment phase using Rich
# ABOUTME: Wraps a Rich Progress bar behind a callback the worker pool can call

from typing import Any

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn


class PoolProgressTracker:
    """Advances a Rich progress task each time the worker pool finishes a song."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id

    def __call__(self, completed: int, total: int) -> None:
        self.progress.update(self.task_id, completed=completed, total=total)

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()


def create_pool_progress(
    console: Console, description: str = "🎵 Fetching chart pages..."
) -> tuple[Progress, Any, PoolProgressTracker]:
    """Create a progress bar sized lazily by the first pool callback.

    Args:
        console: Rich console instance
        description: Progress description

    Returns:
        Tuple of (progress, task_id, tracker)
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )

    task_id = progress.add_task(description, total=None)
    tracker = PoolProgressTracker(progress, task_id)

    return progress, task_id, tracker
