"""CLI command: widgetcss validate -- check every rule of a stylesheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from widgetcss.cascade.resolver import parse_rule_selectors
from widgetcss.style import SUPPORTED_PROPERTIES, StyleSheetError, load_stylesheet


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
def validate(stylesheet: str) -> None:
    """Load a stylesheet and report rules the cascade would not apply.

    A rule whose selector does not parse is an error: the cascade drops it.
    A declaration naming an unknown property is a warning. Exits with code
    1 if there are errors.
    """
    path = Path(stylesheet)

    try:
        sheet = load_stylesheet(path)
    except StyleSheetError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    _, dropped = parse_rule_selectors(sheet)
    errors = [
        f"error: rule {d.rule_index} '{d.selector}': {d.error}" for d in dropped
    ]

    warnings = []
    for idx, rule in enumerate(sheet.rules):
        for decl in rule.declarations:
            if decl.property.lower() not in SUPPORTED_PROPERTIES:
                warnings.append(
                    f"warning: rule {idx} '{rule.selector}': unknown property '{decl.property}'"
                )

    if not errors and not warnings:
        click.echo(f"OK: {path.name} is valid ({len(sheet.rules)} rules)")
        sys.exit(0)

    for line in errors + warnings:
        click.echo(line)

    click.echo()
    click.echo(f"Summary: {len(errors)} error(s), {len(warnings)} warning(s)")

    if errors:
        sys.exit(1)
    sys.exit(0)
