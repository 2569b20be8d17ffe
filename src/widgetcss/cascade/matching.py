"""Selector matching against DomNodes.

Used by both the style resolver (which reaches other nodes through a lookup
callable) and the tree's query interface (which walks the tree it owns).
Both sides supply a Navigator; the part, attribute and pseudo-class rules
are identical.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterator, Protocol

from widgetcss.selector.model import (
    AttributeOp,
    AttributeSelector,
    Combinator,
    PseudoClass,
    PseudoKind,
    Selector,
    SelectorPart,
)

if TYPE_CHECKING:
    from widgetcss.dom.ids import DomId
    from widgetcss.dom.node import DomNode

__all__ = [
    "LookupNavigator",
    "Navigator",
    "ancestors",
    "matches",
    "matches_attribute",
    "matches_part",
    "matches_pseudo",
    "preceding_siblings",
]

NodeLookup = Callable[["DomId"], "DomNode | None"]


class Navigator(Protocol):
    """Structural access needed to resolve combinators."""

    def parent_of(self, node: DomNode) -> DomNode | None: ...

    def previous_sibling(self, node: DomNode) -> DomNode | None: ...


class LookupNavigator:
    """Navigator over a caller-supplied ``DomId -> DomNode`` lookup."""

    def __init__(self, lookup: NodeLookup) -> None:
        self._lookup = lookup

    def parent_of(self, node: DomNode) -> DomNode | None:
        if node.parent is None:
            return None
        return self._lookup(node.parent)

    def previous_sibling(self, node: DomNode) -> DomNode | None:
        parent = self.parent_of(node)
        if parent is None:
            return None
        idx = node.state.child_index
        if idx == 0:
            return None
        return self._lookup(parent.children[idx - 1])


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def ancestors(node: DomNode, nav: Navigator) -> Iterator[DomNode]:
    """Parent first, then each further ancestor up to the root."""
    current = nav.parent_of(node)
    while current is not None:
        yield current
        current = nav.parent_of(current)


def preceding_siblings(node: DomNode, nav: Navigator) -> Iterator[DomNode]:
    """Immediately preceding sibling first, then earlier ones."""
    current = nav.previous_sibling(node)
    while current is not None:
        yield current
        current = nav.previous_sibling(current)


def _candidates(combinator: Combinator, node: DomNode, nav: Navigator) -> Iterator[DomNode]:
    """Nodes the part left of *combinator* may match, nearest first."""
    if combinator is Combinator.DESCENDANT:
        yield from ancestors(node, nav)
    elif combinator is Combinator.GENERAL_SIBLING:
        yield from preceding_siblings(node, nav)
    elif combinator is Combinator.CHILD:
        parent = nav.parent_of(node)
        if parent is not None:
            yield parent
    else:
        previous = nav.previous_sibling(node)
        if previous is not None:
            yield previous


def _match_from(selector: Selector, index: int, node: DomNode, nav: Navigator) -> bool:
    part, _ = selector.parts[index]
    if not matches_part(part, node):
        return False
    if index == 0:
        return True
    _, combinator = selector.parts[index - 1]
    if combinator is None:
        return False
    for candidate in _candidates(combinator, node, nav):
        if _match_from(selector, index - 1, candidate, nav):
            return True
    return False


def matches(selector: Selector, node: DomNode, nav: Navigator) -> bool:
    """Match *selector* against *node*, right to left, with backtracking."""
    if selector.is_empty():
        return False
    return _match_from(selector, len(selector.parts) - 1, node, nav)


# ---------------------------------------------------------------------------
# Compound parts
# ---------------------------------------------------------------------------


def matches_part(part: SelectorPart, node: DomNode) -> bool:
    """Every condition in *part* must hold; a bare ``*`` always does."""
    if part.is_universal_only():
        return True
    if part.element is not None and node.widget_type != part.element:
        return False
    if part.id is not None and node.element_id != part.id:
        return False
    for name in part.classes:
        if not node.has_class(name):
            return False
    for pseudo in part.pseudo_classes:
        if not matches_pseudo(pseudo, node):
            return False
    for attr in part.attributes:
        if not matches_attribute(attr, node):
            return False
    return True


def matches_pseudo(pseudo: PseudoClass, node: DomNode) -> bool:
    state = node.state
    kind = pseudo.kind
    if kind is PseudoKind.ENABLED:
        return not state.disabled
    if kind is PseudoKind.NTH_CHILD:
        return state.child_index + 1 == pseudo.n
    if kind is PseudoKind.NTH_LAST_CHILD:
        return state.sibling_count - state.child_index == pseudo.n
    if kind is PseudoKind.NOT:
        return pseudo.inner is not None and not matches_pseudo(pseudo.inner, node)
    return bool(getattr(state, _PSEUDO_FLAGS[kind]))


_PSEUDO_FLAGS: dict[PseudoKind, str] = {
    PseudoKind.FOCUS: "focused",
    PseudoKind.HOVER: "hovered",
    PseudoKind.ACTIVE: "active",
    PseudoKind.DISABLED: "disabled",
    PseudoKind.CHECKED: "checked",
    PseudoKind.SELECTED: "selected",
    PseudoKind.EMPTY: "empty",
    PseudoKind.FIRST_CHILD: "first_child",
    PseudoKind.LAST_CHILD: "last_child",
    PseudoKind.ONLY_CHILD: "only_child",
}


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------

_TRUTHY = ("true", "1", "")


def _compare(op: AttributeOp, subject: str, value: str, case_insensitive: bool) -> bool:
    """Plain string operators shared by the class, id and type attributes."""
    if case_insensitive:
        subject = subject.lower()
        value = value.lower()
    if op is AttributeOp.EQUALS or op is AttributeOp.CONTAINS_WORD:
        return subject == value
    if op is AttributeOp.STARTS_WITH:
        return subject.startswith(value)
    if op is AttributeOp.ENDS_WITH:
        return subject.endswith(value)
    if op is AttributeOp.CONTAINS:
        return value in subject
    if op is AttributeOp.STARTS_WITH_WORD:
        return subject == value or subject.startswith(value + "-")
    return False


def _match_class(attr: AttributeSelector, node: DomNode) -> bool:
    if attr.op is AttributeOp.EXISTS:
        return bool(node.classes)
    if attr.value is None:
        return False
    if attr.op is AttributeOp.EQUALS:
        joined = " ".join(sorted(node.classes))
        return _compare(AttributeOp.EQUALS, joined, attr.value, attr.case_insensitive)
    return any(
        _compare(attr.op, name, attr.value, attr.case_insensitive) for name in node.classes
    )


_ID_OPS = (
    AttributeOp.EQUALS,
    AttributeOp.STARTS_WITH,
    AttributeOp.ENDS_WITH,
    AttributeOp.CONTAINS,
)


def _match_id(attr: AttributeSelector, node: DomNode) -> bool:
    if attr.op is AttributeOp.EXISTS:
        return node.element_id is not None
    if attr.op not in _ID_OPS or attr.value is None:
        return False
    return _compare(attr.op, node.element_id or "", attr.value, attr.case_insensitive)


def _match_type(attr: AttributeSelector, node: DomNode) -> bool:
    if attr.op is AttributeOp.EXISTS:
        return bool(node.widget_type)
    if attr.op not in (AttributeOp.EQUALS, AttributeOp.CONTAINS) or attr.value is None:
        return False
    return _compare(attr.op, node.widget_type, attr.value, attr.case_insensitive)


def _boolean_flag(flag: str) -> Callable[[AttributeSelector, DomNode], bool]:
    def match(attr: AttributeSelector, node: DomNode) -> bool:
        current = bool(getattr(node.state, flag))
        if attr.op is AttributeOp.EXISTS:
            return current
        if attr.op is AttributeOp.EQUALS:
            value = attr.value or ""
            if attr.case_insensitive:
                value = value.lower()
            return current == (value in _TRUTHY)
        return False

    return match


def _exists_only(flag: str) -> Callable[[AttributeSelector, DomNode], bool]:
    def match(attr: AttributeSelector, node: DomNode) -> bool:
        return attr.op is AttributeOp.EXISTS and bool(getattr(node.state, flag))

    return match


_ATTRIBUTE_MATCHERS: dict[str, Callable[[AttributeSelector, DomNode], bool]] = {
    "class": _match_class,
    "id": _match_id,
    "type": _match_type,
    "disabled": _boolean_flag("disabled"),
    "checked": _boolean_flag("checked"),
    "selected": _boolean_flag("selected"),
    "focused": _exists_only("focused"),
    "focus": _exists_only("focused"),
    "hovered": _exists_only("hovered"),
    "hover": _exists_only("hovered"),
}


def matches_attribute(attr: AttributeSelector, node: DomNode) -> bool:
    """Match a widget attribute selector. Unknown attribute names never match."""
    matcher = _ATTRIBUTE_MATCHERS.get(attr.name)
    if matcher is None:
        return False
    return matcher(attr, node)
