"""Lark-based loader turning stylesheet text into a StyleSheet.

Syntax example::

    :root { --accent: #3366ff; }
    Button { padding: 1; color: var(--accent); }
    .sidebar > Button:focus { border: rounded yellow !important; }
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from widgetcss.style.errors import StyleSheetError
from widgetcss.style.sheet import Declaration, Rule, StyleSheet

__all__ = ["parse_stylesheet", "load_stylesheet"]

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

ROOT_SELECTOR = ":root"

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


class StyleSheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into ``(selector, [(property, value)])`` pairs."""

    def declaration(self, items: list[Token]) -> tuple[str, str]:
        return (str(items[0]), str(items[1]).strip())

    def body(self, items: list[tuple[str, str]]) -> list[tuple[str, str]]:
        return list(items)

    def rule(self, items: list[object]) -> tuple[str, list[tuple[str, str]]]:
        return (str(items[0]).strip(), items[1])  # type: ignore[return-value]

    def start(self, items: list[tuple[str, list[tuple[str, str]]]]) -> list:
        return list(items)


def _blank_comment(match: re.Match[str]) -> str:
    # Keep newlines so lark's line numbers still point at the source.
    return "\n" * match.group(0).count("\n")


def parse_stylesheet(source: str) -> StyleSheet:
    """Parse stylesheet text into a StyleSheet.

    ``:root`` blocks contribute ``--variables``; every other block becomes a
    Rule in source order. Rules without declarations are skipped. Selector
    text is not validated here.

    Raises:
        StyleSheetError: on malformed block structure, or a ``:root``
            property that does not start with ``--``.
    """
    text = _COMMENT_RE.sub(_blank_comment, source)
    try:
        tree = _parser().parse(text)
    except UnexpectedInput as e:
        raise StyleSheetError(str(e), line=e.line, column=e.column) from e

    blocks = StyleSheetTransformer().transform(tree)

    sheet = StyleSheet()
    for selector, declarations in blocks:
        if selector == ROOT_SELECTOR:
            for name, value in declarations:
                if not name.startswith("--"):
                    raise StyleSheetError(
                        f"CSS variables must start with '--' (got {name!r})"
                    )
                sheet.variables[name] = value
            continue
        if not declarations:
            continue
        sheet.rules.append(
            Rule(
                selector=selector,
                declarations=[Declaration.of(name, value) for name, value in declarations],
            )
        )

    logger.debug(
        "Loaded stylesheet: %d rules, %d variables", len(sheet.rules), len(sheet.variables)
    )
    return sheet


def load_stylesheet(path: str | Path) -> StyleSheet:
    """Read and parse a stylesheet file."""
    return parse_stylesheet(Path(path).read_text(encoding="utf-8"))
