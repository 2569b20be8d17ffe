"""CLI command: widgetcss inspect -- show rules in cascade order."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from widgetcss.cascade.resolver import parse_rule_selectors
from widgetcss.selector import Specificity
from widgetcss.style import StyleSheetError, load_stylesheet


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
def inspect(stylesheet: str) -> None:
    """Parse a stylesheet and list its selectors by ascending specificity.

    Later lines win over earlier ones when both match a node. Variables are
    listed first; rules dropped for invalid selectors are listed last.
    """
    path = Path(stylesheet)

    try:
        sheet = load_stylesheet(path)
    except StyleSheetError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    selectors, dropped = parse_rule_selectors(sheet)

    click.echo(f"Stylesheet: {path.name}")
    click.echo(f"Rules:     {len(sheet.rules)}")
    click.echo(f"Selectors: {len(selectors)}")
    click.echo()

    if sheet.variables:
        click.echo("Variables:")
        for name, value in sheet.variables.items():
            click.echo(f"  {name}: {value}")
        click.echo()

    click.echo("Cascade order:")
    ranked = sorted(
        ((Specificity.of(selector, idx), selector, idx) for selector, idx in selectors),
        key=lambda entry: entry[0],
    )
    for spec, selector, idx in ranked:
        rule = sheet.rules[idx]
        important = sum(1 for d in rule.declarations if d.important)
        parts = [f"  ({spec.ids},{spec.classes},{spec.types})", str(selector), f"rule={idx}"]
        parts.append(f"declarations={len(rule.declarations)}")
        if important:
            parts.append(f"important={important}")
        click.echo("  ".join(parts))

    if dropped:
        click.echo()
        click.echo("Dropped:")
        for d in dropped:
            click.echo(f"  rule={d.rule_index}  '{d.selector}': {d.error}")
