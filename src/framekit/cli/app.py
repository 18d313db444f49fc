"""Main CLI application."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from framekit import __version__

# Create main app
app = typer.Typer(
    name="framekit",
    help="Inspect and edit persisted flow progress",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
progress_app = typer.Typer(help="Flow progress records", no_args_is_help=True)
app.add_typer(progress_app, name="progress")

console = Console()


class LogLevel(str, Enum):
    """Levels accepted by --log-level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DirOption = Annotated[
    Path | None,
    typer.Option("--dir", "-d", help="Progress directory (defaults to FRAMEKIT_STORAGE__DIRECTORY)"),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]framekit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option(
            "--log-level",
            case_sensitive=False,
            help="Log level (defaults to FRAMEKIT_LOGGING__LEVEL)",
        ),
    ] = None,
) -> None:
    """framekit - frame and flow registries with persisted progress."""
    from framekit.core.logging_config import configure_logging
    from framekit.core.models.config import Settings

    logging_config = Settings().logging
    if log_level is not None:
        logging_config = logging_config.model_copy(update={"level": log_level.value})
    configure_logging(logging_config)


@progress_app.command("show")
def show(
    flow_id: Annotated[str, typer.Argument(help="Flow id")],
    steps: Annotated[
        int | None,
        typer.Option("--steps", "-s", help="Total step count, enables the completion percent"),
    ] = None,
    directory: DirOption = None,
) -> None:
    """Show stored progress for a flow."""
    from framekit.cli.commands.progress import open_store, show_progress

    show_progress(open_store(directory), flow_id, total_steps=steps)


@progress_app.command("toggle-step")
def toggle_step(
    flow_id: Annotated[str, typer.Argument(help="Flow id")],
    step: Annotated[int, typer.Argument(help="Step index")],
    directory: DirOption = None,
) -> None:
    """Toggle completion of a step."""
    from framekit.cli.commands.progress import open_store, show_progress

    store = open_store(directory)
    store.toggle_step_complete(flow_id, step)
    show_progress(store, flow_id)


@progress_app.command("toggle-task")
def toggle_task(
    flow_id: Annotated[str, typer.Argument(help="Flow id")],
    step: Annotated[int, typer.Argument(help="Step index")],
    task: Annotated[int, typer.Argument(help="Task index within the step")],
    directory: DirOption = None,
) -> None:
    """Toggle completion of a task within a step."""
    from framekit.cli.commands.progress import open_store, show_progress

    store = open_store(directory)
    store.toggle_task_complete(flow_id, step, task)
    show_progress(store, flow_id)


@progress_app.command("reset")
def reset(
    flow_id: Annotated[str, typer.Argument(help="Flow id")],
    directory: DirOption = None,
) -> None:
    """Clear all progress for a flow."""
    from framekit.cli.commands.progress import open_store

    open_store(directory).reset_flow_progress(flow_id)
    console.print(f"[green]Progress reset for[/green] {flow_id}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
