"""Filestore Command Line Interface.

Entry point for the filestore CLI tool.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError

from filestore import __version__
from filestore.contracts.errors import FileStoreError
from filestore.core.file_store import FileStore
from filestore.core.streams import copy_to_handle

__all__ = ["app"]

app = typer.Typer(
    name="filestore",
    help="Filestore: store and retrieve files by arbitrary ID.",
    no_args_is_help=True,
)


@dataclass(frozen=True)
class _StoreOptions:
    """Global options captured by the callback for subcommands."""

    settings: Path | None
    root: Path | None
    chunk_size: int | None
    extension: str | None
    verbose: bool
    json_logs: bool


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"filestore version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


def _format_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    panel = Panel(
        content,
        title=f"[red bold]{title}[/]",
        border_style="red",
        padding=(0, 1),
    )
    console.print(panel)


def _store(ctx: typer.Context) -> FileStore:
    """Build the store selected by the global options, or exit with an error."""
    from filestore.cli_helpers import resolve_store
    from filestore.core.logging import configure_logging

    options: _StoreOptions = ctx.obj
    try:
        store, config = resolve_store(
            settings_path=options.settings,
            root=options.root,
            chunk_size=options.chunk_size,
            extension=options.extension,
        )
    except FileNotFoundError as e:
        _format_error(
            title="File Not Found",
            message=str(e),
            hint="Check the --settings path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        # Must be before ValueError - ValidationError inherits from it
        details = [f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}" for error in e.errors()]
        _format_error(
            title="Configuration Validation Failed",
            message="Invalid store settings",
            details=details,
            hint="Check field names, types, and required values.",
        )
        raise typer.Exit(1) from None
    except ValueError as e:
        _format_error(title="Configuration Error", message=str(e))
        raise typer.Exit(1) from None

    # Settings-file logging applies unless the command line already chose
    if config is not None and not (options.verbose or options.json_logs):
        configure_logging(json_output=config.logging.json_output, level=config.logging.level)

    return store


def _fail(error: FileStoreError) -> typer.Exit:
    """Render a store failure and return the Exit to raise."""
    _format_error(title=type(error).__name__, message=str(error))
    return typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    root: str | None = typer.Option(
        None,
        "--root",
        "-r",
        help="Store root directory (overrides the settings file).",
    ),
    chunk_size: int | None = typer.Option(
        None,
        "--chunk-size",
        min=1,
        help="ID characters per directory level.",
    ),
    extension: str | None = typer.Option(
        None,
        "--extension",
        help="Suffix appended to every stored file.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # We handle existence check ourselves for better error message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Filestore: store and retrieve files by arbitrary ID."""
    from filestore.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(json_output=json_logs, level=log_level)

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )

    ctx.obj = _StoreOptions(
        settings=Path(settings).expanduser() if settings else None,
        root=Path(root).expanduser() if root else None,
        chunk_size=chunk_size,
        extension=extension,
        verbose=verbose,
        json_logs=json_logs,
    )


@app.command()
def put(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., metavar="ID", help="ID for the new item."),
    source: str | None = typer.Argument(None, help="File to store ('-' or omitted for stdin)."),
) -> None:
    """Store content under a new ID."""
    from filestore.cli_helpers import open_source

    store = _store(ctx)
    try:
        with open_source(source) as content:
            store.create(item_id, content)
    except FileStoreError as e:
        raise _fail(e) from None
    except OSError as e:
        _format_error(title="Source Unreadable", message=f"Cannot read {source}: {e}")
        raise typer.Exit(1) from None


@app.command()
def get(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., metavar="ID", help="ID to read."),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write content to this file instead of stdout.",
    ),
) -> None:
    """Write an item's content to stdout (exit 1 if absent)."""
    store = _store(ctx)
    try:
        stream = store.read(item_id)
    except FileStoreError as e:
        raise _fail(e) from None

    if stream is None:
        typer.secho(f"No item with ID {item_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    with stream:
        if output is None:
            out = typer.get_binary_stream("stdout")
            copy_to_handle(out, stream)
            out.flush()
        else:
            try:
                with open(Path(output).expanduser(), "wb") as handle:
                    copy_to_handle(handle, stream)
            except OSError as e:
                _format_error(title="Output Unwritable", message=f"Cannot write {output}: {e}")
                raise typer.Exit(1) from None


@app.command()
def update(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., metavar="ID", help="ID to overwrite."),
    source: str | None = typer.Argument(None, help="File with new content ('-' or omitted for stdin)."),
) -> None:
    """Replace the content of an existing item."""
    from filestore.cli_helpers import open_source

    store = _store(ctx)
    try:
        with open_source(source) as content:
            store.update(item_id, content)
    except FileStoreError as e:
        raise _fail(e) from None
    except OSError as e:
        _format_error(title="Source Unreadable", message=f"Cannot read {source}: {e}")
        raise typer.Exit(1) from None


@app.command()
def delete(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., metavar="ID", help="ID to delete."),
) -> None:
    """Delete an item (parent directories are kept)."""
    store = _store(ctx)
    try:
        deleted = store.delete(item_id)
    except FileStoreError as e:
        raise _fail(e) from None

    if not deleted:
        typer.secho(f"Filesystem refused to delete {item_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.echo(f"Deleted {item_id}")


@app.command()
def exists(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., metavar="ID", help="ID to check."),
) -> None:
    """Print whether an item exists (exit 1 if it does not)."""
    store = _store(ctx)
    try:
        found = store.exists(item_id)
    except FileStoreError as e:
        raise _fail(e) from None

    typer.echo("true" if found else "false")
    if not found:
        raise typer.Exit(1)


@app.command()
def path(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., metavar="ID", help="ID to map."),
) -> None:
    """Print the path an ID maps to, whether or not it exists."""
    store = _store(ctx)
    typer.echo(str(store.id_to_absolute_path(item_id)))


@app.command("check-id")
def check_id(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., metavar="ID", help="ID to validate."),
) -> None:
    """Check an ID against the configured id pattern (exit 1 if invalid)."""
    store = _store(ctx)
    if store.is_valid_id(item_id):
        typer.echo(f"valid: {item_id}")
        return
    typer.secho(f"invalid: {item_id} does not match {store.id_pattern}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.command()
def validate(ctx: typer.Context) -> None:
    """Validate the settings file without touching the store."""
    options: _StoreOptions = ctx.obj
    if options.settings is None:
        _format_error(
            title="No Settings File",
            message="validate needs a settings file",
            hint="Pass --settings PATH before the command: filestore -s settings.yaml validate",
        )
        raise typer.Exit(1)

    store = _store(ctx)
    typer.echo(f"Configuration valid: {options.settings.name}")
    typer.echo(f"  root_directory: {store.root_directory}")
    typer.echo(f"  chunk_size: {store.chunk_size}")
    typer.echo(f"  extension: {store.extension}")
    typer.echo(f"  id_pattern: {store.id_pattern}")


if __name__ == "__main__":
    app()
