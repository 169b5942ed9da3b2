"""Main Typer application — imports and registers all CLI commands.

Entry point: ``crxpack`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from crxpack.cli.commands.inspect_cmd import inspect_cmd
from crxpack.cli.commands.pack import pack_cmd
from crxpack.config import LOG_LEVELS, config

app = typer.Typer(
    name="crxpack",
    help="crxpack: package a directory into a signed CRX container.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def _check_log_level(value: str | None) -> str | None:
    if value is None:
        return None
    level = value.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}")
    return level


@app.callback()
def _configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        callback=_check_log_level,
        help="Logging level (defaults to CRXPACK_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=log_level or config.log_level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="pack", help="Package a directory into a signed .crx file.")(pack_cmd)
app.command(name="inspect", help="Show the header of a .crx file.")(inspect_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
