"""CLI command: styleshift simulate -- replay a rule switch on a virtual clock."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from styleshift.binding import ItemBinding
from styleshift.config import EngineConfig
from styleshift.errors import SheetParseError, StyleshiftError
from styleshift.scheduler import ManualScheduler
from styleshift.sheet import parse_sheet
from styleshift.strategy import create_default_registry


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    return str(value)


def _snapshot(values: dict[str, Any], keys: tuple[str, ...]) -> str:
    shown = keys or tuple(values)
    return "  ".join(f"{key}={_format_value(values.get(key))}" for key in shown)


@click.command()
@click.argument("sheetfile", type=click.Path(exists=True))
@click.option("--from", "from_rule", required=True, help="Rule the item starts with.")
@click.option("--to", "to_rule", required=True, help="Rule the item switches to.")
@click.option("--tick", default=16, show_default=True, type=click.IntRange(min=1), help="Clock step in ms.")
@click.option("--max-ticks", default=1000, show_default=True, type=click.IntRange(min=0), help="Give up after this many ticks.")
@click.option("--key", "keys", multiple=True, help="Only show these properties (repeatable).")
def simulate(
    sheetfile: str,
    from_rule: str,
    to_rule: str,
    tick: int,
    max_ticks: int,
    keys: tuple[str, ...],
) -> None:
    """Switch an item from one rule to another and print its values over time.

    The item carries every property the sheet declares. Values are printed
    whenever they change, until no transition is running any more.
    """
    # Step 1: Parse
    try:
        sheet = parse_sheet(Path(sheetfile).read_text(encoding="utf-8"))
    except SheetParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    for name in (from_rule, to_rule):
        if name not in sheet.rules:
            click.echo(f"Unknown rule: {name}", err=True)
            sys.exit(1)
    for key in keys:
        if key not in sheet.properties:
            click.echo(f"Unknown property: {key}", err=True)
            sys.exit(1)

    # Step 2: Build item, scheduler and strategies
    config = sheet.config(EngineConfig(frame_interval_ms=tick))
    scheduler = ManualScheduler(frame_interval_ms=config.frame_interval_ms)
    item = sheet.item()
    binding = ItemBinding(item, scheduler, create_default_registry(config))

    # Step 3: Switch rules and let the clock run
    try:
        binding.set_rule(sheet.rule(from_rule))
        click.echo(f"t=0  {_snapshot(item.values(), keys)}")
        binding.set_rule(sheet.rule(to_rule))
        last = _snapshot(item.values(), keys)
        click.echo(f"t=0  {last}")

        ticks = 0
        while scheduler.pending and ticks < max_ticks:
            scheduler.advance(tick)
            ticks += 1
            current = _snapshot(item.values(), keys)
            if current != last:
                click.echo(f"t={scheduler.now}  {current}")
                last = current
    except (StyleshiftError, ValueError) as exc:
        click.echo(f"Simulation failed: {exc}", err=True)
        sys.exit(1)

    click.echo()
    if scheduler.pending:
        click.echo(f"Stopped after {ticks} ticks, {scheduler.pending} transitions still running")
    else:
        click.echo(f"Settled after {scheduler.now} ms")
    click.echo(f"Chain length: {len(binding.chain) if binding.chain is not None else 0}")
    binding.destroy()
