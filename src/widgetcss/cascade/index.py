"""SelectorIndex: prune the selectors worth matching against a node."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from widgetcss.selector.model import Selector

if TYPE_CHECKING:
    from widgetcss.dom.node import DomNode

__all__ = ["SelectorIndex"]


class SelectorIndex:
    """Buckets selector positions by the key of their target part.

    Each selector is filed once, under the most selective key its target
    part has: id, then element name, then first class. Selectors with none
    of these (``*``, pseudo-class or attribute only) are universal and are a
    candidate for every node.
    """

    def __init__(self) -> None:
        self.by_id: dict[str, list[int]] = {}
        self.by_element: dict[str, list[int]] = {}
        self.by_class: dict[str, list[int]] = {}
        self.universal: list[int] = []

    @classmethod
    def build(cls, selectors: Sequence[tuple[Selector, int]]) -> SelectorIndex:
        """Index *selectors* by their position in the sequence."""
        index = cls()
        for idx, (selector, _) in enumerate(selectors):
            index.add(idx, selector)
        return index

    def add(self, idx: int, selector: Selector) -> None:
        target = selector.target()
        if target is None:
            return
        if target.id is not None:
            self.by_id.setdefault(target.id, []).append(idx)
        elif target.element is not None:
            self.by_element.setdefault(target.element, []).append(idx)
        elif target.classes:
            self.by_class.setdefault(target.classes[0], []).append(idx)
        else:
            self.universal.append(idx)

    def get_candidates(self, node: DomNode) -> list[int]:
        """Selector positions that may match *node*, without duplicates."""
        seen: set[int] = set()
        candidates: list[int] = []

        def take(ids: list[int]) -> None:
            for idx in ids:
                if idx not in seen:
                    seen.add(idx)
                    candidates.append(idx)

        take(self.universal)
        if node.element_id:
            take(self.by_id.get(node.element_id, []))
        take(self.by_element.get(node.widget_type, []))
        for name in node.classes:
            take(self.by_class.get(name, []))
        return candidates

    def __len__(self) -> int:
        return (
            len(self.universal)
            + sum(len(v) for v in self.by_id.values())
            + sum(len(v) for v in self.by_element.values())
            + sum(len(v) for v in self.by_class.values())
        )
