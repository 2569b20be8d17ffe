"""Cascade priority of a matched rule."""

from __future__ import annotations

from dataclasses import dataclass, replace

from widgetcss.selector.model import Selector


@dataclass(frozen=True, order=True)
class Specificity:
    """Total order used to rank matched rules.

    Field order is the comparison order, highest priority first:
    ``!important``, inline, id count, class/attribute/pseudo count, type
    count, then source order (a later rule wins a tie).
    """

    important: bool = False
    inline: bool = False
    ids: int = 0
    classes: int = 0
    types: int = 0
    order: int = 0

    @classmethod
    def of(cls, selector: Selector, order: int) -> Specificity:
        ids, classes, types = selector.specificity()
        return cls(ids=ids, classes=classes, types=types, order=order)

    @classmethod
    def for_inline(cls) -> Specificity:
        return cls(inline=True)

    def as_important(self) -> Specificity:
        return replace(self, important=True)

    def __str__(self) -> str:
        flags = ""
        if self.important:
            flags += "!important "
        if self.inline:
            flags += "inline "
        return f"{flags}({self.ids},{self.classes},{self.types})@{self.order}"
