"""Helpers shared by the CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from assetmin.errors import MinifyError
from assetmin.minifier import Output


def emit(text: str, output: str | None) -> None:
    """Write *text* to *output*, or to stdout when no file is given."""
    if output is None:
        click.echo(text)
        return
    Path(output).write_text(text, encoding="utf-8")
    click.echo(f"Wrote {len(text.encode('utf-8'))} bytes to {output}")


def fail(exc: MinifyError) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def show_report(result: Output) -> None:
    click.echo(result.report.message, err=True)
