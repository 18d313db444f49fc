"""Progress command implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from framekit.core.flow.progress import FlowProgressStore
from framekit.core.models.config import Settings
from framekit.core.models.flow import FlowProgress, completion_percent
from framekit.core.storage.backends import FileBackend

if TYPE_CHECKING:
    from pathlib import Path

console = Console()


def open_store(directory: Path | None = None) -> FlowProgressStore:
    """Progress store backed by the file backend in directory."""
    settings = Settings()
    return FlowProgressStore(
        backend=FileBackend(directory or settings.storage.directory),
        key_prefix=settings.storage.key_prefix,
    )


def show_progress(
    store: FlowProgressStore,
    flow_id: str,
    total_steps: int | None = None,
) -> None:
    """Print one flow's progress as a table."""
    progress = store.get_flow_progress(flow_id)

    if progress.is_empty:
        console.print(f"[yellow]No progress recorded for[/yellow] {flow_id}")
    else:
        console.print(_progress_table(progress))

    if total_steps is not None:
        done = sum(1 for i in progress.completed_steps if 0 <= i < total_steps)
        console.print(f"Completion: [bold]{completion_percent(done, total_steps)}%[/bold]")


def _progress_table(progress: FlowProgress) -> Table:
    table = Table(title=f"Progress: {progress.flow_id}")
    table.add_column("Step", style="cyan")
    table.add_column("Complete", style="green")
    table.add_column("Completed tasks", style="yellow")

    step_indices = sorted(set(progress.completed_steps) | set(progress.completed_tasks))
    for index in step_indices:
        tasks = sorted(progress.completed_tasks.get(index, set()))
        table.add_row(
            str(index),
            "yes" if index in progress.completed_steps else "no",
            ", ".join(str(t) for t in tasks) or "-",
        )

    return table
