"""``crxpack pack SOURCE_DIR`` — package a directory into a signed container.

Without ``--key`` a new key is generated and, unless ``--no-key-out`` is
given, saved next to the source directory as ``<SOURCE_DIR>.pem``.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from crxpack.config import PackConfig
from crxpack.core.packager import Packager

console = Console()


def pack_cmd(
    source_dir: Path = typer.Argument(
        ...,
        help="Directory holding the manifest and resources to package.",
    ),
    output: Path = typer.Option(
        None,
        "--out",
        "-o",
        help="Container path (default: <SOURCE_DIR>.crx).",
    ),
    key: Path = typer.Option(
        None,
        "--key",
        "-k",
        help="Existing private key to sign with.",
    ),
    key_out: Path = typer.Option(
        None,
        "--key-out",
        help="Where to save a generated key (default: <SOURCE_DIR>.pem).",
    ),
    save_key: bool = typer.Option(
        True,
        "--save-key/--no-key-out",
        help="Save a generated private key to disk.",
    ),
) -> None:
    """Package SOURCE_DIR into a signed CRX container."""
    source_dir = source_dir.expanduser()
    base = source_dir.resolve()
    output_path = output or base.with_name(f"{base.name}.crx")

    key_output_path: Path | None = None
    if key is None and save_key:
        key_output_path = key_out or base.with_name(f"{base.name}.pem")

    packager = Packager(PackConfig())
    result = packager.run(source_dir, output_path, key, key_output_path)

    if not result.success:
        console.print(f"[bold red]Packaging failed:[/bold red] {result.error_message}")
        raise typer.Exit(code=1)

    lines = [
        "[bold green]Container written![/bold green]",
        "",
        f"[bold]Output:[/bold]       {result.output_path}",
        f"[bold]Archive:[/bold]      sha256:{result.archive_sha256}",
        f"[bold]Key:[/bold]          {result.key_fingerprint}",
    ]
    if result.generated_key:
        if key_output_path is not None:
            lines.append(f"[bold]Key saved to:[/bold] {key_output_path}")
        else:
            lines.append("[yellow]Generated key was not saved.[/yellow]")
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]crxpack[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
