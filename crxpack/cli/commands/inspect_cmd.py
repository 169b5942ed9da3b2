"""``crxpack inspect CRX_PATH`` — print a container's header and sections.

Reads the layout only; signatures are not checked.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from crxpack.core.container_writer import read_container
from crxpack.core.errors import ContainerFormatError
from crxpack.core.hasher import key_fingerprint, sha256_hex

console = Console()


def inspect_cmd(
    crx_path: Path = typer.Argument(..., help="Container file to inspect."),
) -> None:
    """Show the header fields and section sizes of CRX_PATH."""
    try:
        sections = read_container(crx_path)
    except (OSError, ContainerFormatError) as exc:
        console.print(f"[bold red]Cannot read container:[/bold red] {exc}")
        raise typer.Exit(code=1)

    header = sections.header
    table = Table(title=str(crx_path))
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("magic", header.magic.decode("ascii", errors="replace"))
    table.add_row("version", str(header.version))
    table.add_row("key_size", str(header.key_size))
    table.add_row("signature_size", str(header.signature_size))
    table.add_row("archive_size", str(len(sections.archive)))
    table.add_row("total_size", str(sections.total_size))
    table.add_row("key_fingerprint", key_fingerprint(sections.public_key))
    table.add_row("archive_sha256", sha256_hex(sections.archive))
    console.print(table)
