"""Typer CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from pixel_term.app import EditorApp
from pixel_term.command.stream import ProgrammedInput
from pixel_term.config import ConfigError, load_config
from pixel_term.edit.canvas import CanvasError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(log_file: Optional[Path], verbose: bool) -> None:
    """Log to a file; the terminal belongs to the editor while it runs."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="pixel-term",
        help="Edit 8-bit RGB PNG images in the terminal.",
        add_completion=False,
        rich_markup_mode="rich",
    )
    console = Console()

    @app.command()
    def edit(
        path: Annotated[Path, typer.Argument(help="PNG file to edit (8-bit RGB)")],
        config: Annotated[Optional[Path], typer.Option("--config", "-c", help="JSON configuration file")] = None,
        keys: Annotated[Optional[str], typer.Option("--keys", "-k", help="Run a key script instead of the interactive editor, e.g. 'llj w:w<Enter>'")] = None,
        log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write log messages to this file")] = None,
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug-level logging")] = False,
    ) -> None:
        """Open PATH in the editor.

        Normal mode: h/j/k/l move, w/e/r/s/d/f paint with a palette slot, q quits.
        Type [bold]:[/] for the command line: [bold]:w[/], [bold]:w <path>[/],
        [bold]:q[/], [bold]:set <slot> <r> <g> <b>[/].
        """
        _configure_logging(log_file, verbose)

        try:
            editor_config = load_config(config)
        except ConfigError as e:
            console.print(f"[red]Configuration error:[/] {escape(str(e))}")
            raise typer.Exit(1)

        source = None
        if keys is not None:
            try:
                source = ProgrammedInput.from_script(keys)
            except ValueError as e:
                raise typer.BadParameter(str(e), param_hint="--keys")

        try:
            editor = EditorApp.open(path, editor_config)
        except CanvasError as e:
            console.print(f"[red]Cannot open {escape(str(path))}:[/] {escape(str(e))}")
            raise typer.Exit(1)

        try:
            if source is None:
                from pixel_term.cli.studio.editor import run_editor
                run_editor(editor)
            else:
                editor.run(source)
        except CanvasError as e:
            console.print(f"[red]Error while saving:[/] {escape(str(e))}")
            raise typer.Exit(1)

        if source is not None:
            x, y = editor.canvas.cursor
            state = "[yellow]unsaved changes[/]" if editor.canvas.modified else "[green]no unsaved changes[/]"
            console.print(f"Cursor at ({x}, {y}), {state}")
            if editor.message:
                console.print(escape(editor.message))

    return app
