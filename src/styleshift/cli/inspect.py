"""CLI command: styleshift inspect -- display rule sheet contents."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from styleshift.errors import SheetParseError
from styleshift.sheet import parse_sheet


@click.command()
@click.argument("sheetfile", type=click.Path(exists=True))
def inspect(sheetfile: str) -> None:
    """Parse a rule sheet and display what it declares.

    Shows declared properties (with their type), transitions and rules.
    """
    sheet_path = Path(sheetfile)

    try:
        source = sheet_path.read_text(encoding="utf-8")
        sheet = parse_sheet(source)
    except SheetParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Properties: {len(sheet.properties)}")
    for key, type_name in sheet.properties.items():
        click.echo(f"  {key}: {type_name}")
    click.echo()

    click.echo(f"Transitions: {len(sheet.transitions)}")
    for target, spec in sheet.transitions.items():
        parts = [f"  {target}: {spec.strategy}"]
        if spec.duration is not None:
            parts.append(f"{spec.duration}ms")
        click.echo(" ".join(parts))
    click.echo()

    click.echo(f"Rules: {len(sheet.rules)}")
    for name, rule in sheet.rules.items():
        click.echo(f"  {name}")
        for key in rule.keys():
            click.echo(f"    {key} = {rule.raw(key)}")
