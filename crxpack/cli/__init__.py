"""crxpack CLI — Typer-based command-line interface.

A thin wrapper over the Packager: ``crxpack pack`` produces a signed
container and ``crxpack inspect`` prints the header of an existing one.

All output uses Rich for formatted terminal display.
"""
