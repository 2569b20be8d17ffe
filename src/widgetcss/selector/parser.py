"""Hand-written parser for widget selectors.

Grammar, per part (in any order, while characters match)::

    *              universal
    Name           element / widget type (must lead the part)
    #name          id
    .name          class
    :pseudo        pseudo-class, also :nth-child(n), :nth-last-child(n), :not(:pseudo)
    [name]         attribute exists
    [name op val]  attribute compare, op in = ~= |= ^= $= *=, optional trailing ` i`

Parts are joined by ``>``, ``+``, ``~`` or bare whitespace (descendant).
"""

from __future__ import annotations

from typing import Callable

from widgetcss.selector.errors import SelectorSyntaxError
from widgetcss.selector.model import (
    AttributeOp,
    AttributeSelector,
    Combinator,
    PseudoClass,
    PseudoKind,
    Selector,
    SelectorPart,
)

__all__ = ["parse_selector", "parse_selectors"]

_PSEUDO_NAMES: dict[str, PseudoKind] = {kind.value: kind for kind in PseudoKind}

_COMBINATORS: dict[str, Combinator] = {
    ">": Combinator.CHILD,
    "+": Combinator.ADJACENT_SIBLING,
    "~": Combinator.GENERAL_SIBLING,
}

# Operators spelled as a prefix character followed by '='.
_PREFIXED_OPS: dict[str, AttributeOp] = {
    "~": AttributeOp.CONTAINS_WORD,
    "|": AttributeOp.STARTS_WITH_WORD,
    "^": AttributeOp.STARTS_WITH,
    "$": AttributeOp.ENDS_WITH,
    "*": AttributeOp.CONTAINS,
}

_DIGITS = "0123456789"


class _SelectorParser:
    """Single-use cursor over one selector's text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # ---- cursor primitives ----

    def _peek(self) -> str | None:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def _advance(self) -> str | None:
        ch = self._peek()
        if ch is not None:
            self.pos += 1
        return ch

    def _consume_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.pos
        while self.pos < len(self.text) and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def _skip_whitespace(self) -> bool:
        return bool(self._consume_while(str.isspace))

    def _identifier(self) -> str:
        return self._consume_while(lambda ch: ch.isalnum() or ch in "-_")

    def _error(self, message: str, position: int | None = None) -> SelectorSyntaxError:
        return SelectorSyntaxError(message, self.pos if position is None else position)

    def _expect(self, ch: str, message: str) -> None:
        if self._peek() != ch:
            raise self._error(message)
        self.pos += 1

    # ---- selector ----

    def parse(self) -> Selector:
        self._skip_whitespace()
        if self._peek() is None:
            raise self._error("Empty selector")

        parts: list[tuple[SelectorPart, Combinator | None]] = []
        pending: Combinator | None = None
        while True:
            part_start = self.pos
            part = self._part()
            if part.is_empty():
                if pending is not None:
                    raise self._error("Expected selector after combinator", part_start)
                raise self._error(f"Unexpected character {self._peek()!r}", part_start)
            if parts and pending is not None:
                prev, _ = parts[-1]
                parts[-1] = (prev, pending)
            parts.append((part, None))
            pending = None

            had_space = self._skip_whitespace()
            ch = self._peek()
            if ch is None:
                break
            if ch in _COMBINATORS:
                self._advance()
                pending = _COMBINATORS[ch]
                self._skip_whitespace()
                if self._peek() is None:
                    raise self._error("Expected selector after combinator")
            elif had_space:
                pending = Combinator.DESCENDANT
            else:
                raise self._error(f"Unexpected character {ch!r}")

        return Selector(parts=parts)

    def _part(self) -> SelectorPart:
        part = SelectorPart()
        while True:
            ch = self._peek()
            if ch == "*":
                self._advance()
                part.universal = True
            elif ch == "#":
                self._advance()
                name = self._identifier()
                if not name:
                    raise self._error("Expected ID after #")
                part.id = name
            elif ch == ".":
                self._advance()
                name = self._identifier()
                if not name:
                    raise self._error("Expected class name after .")
                part.classes.append(name)
            elif ch == ":":
                self._advance()
                part.pseudo_classes.append(self._pseudo_class())
            elif ch == "[":
                self._advance()
                part.attributes.append(self._attribute())
            elif (
                ch is not None
                and (ch.isalpha() or ch == "_")
                and part.element is None
                and not part.universal
            ):
                part.element = self._identifier()
            else:
                return part

    # ---- pseudo-classes ----

    def _pseudo_class(self) -> PseudoClass:
        start = self.pos
        name = self._identifier()
        if not name:
            raise self._error("Expected pseudo-class name after :")
        kind = _PSEUDO_NAMES.get(name.lower())
        if kind is None:
            raise self._error(f"Unknown pseudo-class: {name}", start)

        if kind in (PseudoKind.NTH_CHILD, PseudoKind.NTH_LAST_CHILD):
            return PseudoClass(kind, n=self._nth_argument())

        if kind is PseudoKind.NOT:
            self._expect("(", "Expected ( after :not")
            self._skip_whitespace()
            if self._peek() != ":":
                raise self._error("Expected pseudo-class in :not()")
            self._advance()
            inner = self._pseudo_class()
            self._skip_whitespace()
            self._expect(")", "Expected ) to close :not()")
            return PseudoClass.negate(inner)

        return PseudoClass(kind)

    def _nth_argument(self) -> int:
        self._expect("(", "Expected ( for nth argument")
        self._skip_whitespace()
        start = self.pos
        digits = self._consume_while(lambda ch: ch in _DIGITS)
        if not digits:
            raise self._error("Invalid nth argument")
        self._skip_whitespace()
        self._expect(")", "Expected ) after nth argument")
        n = int(digits)
        if n < 1:
            raise self._error("nth argument must be at least 1", start)
        return n

    # ---- attributes ----

    def _attribute(self) -> AttributeSelector:
        self._skip_whitespace()
        name = self._identifier()
        if not name:
            raise self._error("Expected attribute name")
        self._skip_whitespace()

        if self._peek() == "]":
            self._advance()
            return AttributeSelector(name=name)

        op = self._attribute_op()
        self._skip_whitespace()
        value = self._attribute_value()
        self._skip_whitespace()

        case_insensitive = False
        if self._peek() in ("i", "I"):
            self._advance()
            self._skip_whitespace()
            case_insensitive = True

        self._expect("]", "Expected ] to close attribute selector")
        return AttributeSelector(
            name=name, op=op, value=value, case_insensitive=case_insensitive
        )

    def _attribute_op(self) -> AttributeOp:
        ch = self._peek()
        if ch is None:
            raise self._error("Unterminated attribute selector")
        if ch == "=":
            self._advance()
            return AttributeOp.EQUALS
        if ch in _PREFIXED_OPS:
            self._advance()
            if self._peek() != "=":
                raise self._error(f"Expected = after {ch}")
            self._advance()
            return _PREFIXED_OPS[ch]
        raise self._error("Expected attribute operator")

    def _attribute_value(self) -> str:
        quote = self._peek()
        if quote in ("'", '"'):
            start = self.pos
            self._advance()
            value = self._consume_while(lambda ch: ch != quote)
            if self._peek() is None:
                raise self._error("Unterminated string in attribute selector", start)
            self._advance()
            return value

        return self._consume_while(lambda ch: ch != "]" and not ch.isspace())


def parse_selector(text: str) -> Selector:
    """Parse one selector (no top-level commas).

    Raises:
        SelectorSyntaxError: with the offending position in *text*.
    """
    return _SelectorParser(text).parse()


def _split_top_level(text: str) -> list[tuple[int, str]]:
    """Split on commas outside brackets, parentheses and quotes.

    Returns ``(offset, segment)`` pairs so error positions can be reported
    relative to the whole input.
    """
    segments: list[tuple[int, str]] = []
    depth = 0
    quote: str | None = None
    start = 0
    for i, ch in enumerate(text):
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch in "[(":
            depth += 1
        elif ch in "])":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            segments.append((start, text[start:i]))
            start = i + 1
    segments.append((start, text[start:]))
    return segments


def parse_selectors(text: str) -> list[Selector]:
    """Parse a comma-separated selector group, skipping empty segments."""
    selectors: list[Selector] = []
    for offset, segment in _split_top_level(text):
        if not segment.strip():
            continue
        try:
            selectors.append(parse_selector(segment))
        except SelectorSyntaxError as exc:
            raise SelectorSyntaxError(exc.message, exc.position + offset) from exc
    return selectors
