"""Selector AST: parts, attribute selectors, pseudo-classes and combinators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Combinator(Enum):
    """Relationship between two adjacent selector parts."""

    DESCENDANT = " "
    CHILD = ">"
    ADJACENT_SIBLING = "+"
    GENERAL_SIBLING = "~"

    def __str__(self) -> str:
        if self is Combinator.DESCENDANT:
            return " "
        return f" {self.value} "


class AttributeOp(Enum):
    """Attribute selector operator."""

    EXISTS = ""
    EQUALS = "="
    CONTAINS_WORD = "~="
    STARTS_WITH_WORD = "|="
    STARTS_WITH = "^="
    ENDS_WITH = "$="
    CONTAINS = "*="


class PseudoKind(Enum):
    """The fixed set of supported pseudo-classes."""

    FOCUS = "focus"
    HOVER = "hover"
    ACTIVE = "active"
    DISABLED = "disabled"
    ENABLED = "enabled"
    CHECKED = "checked"
    SELECTED = "selected"
    EMPTY = "empty"
    FIRST_CHILD = "first-child"
    LAST_CHILD = "last-child"
    ONLY_CHILD = "only-child"
    NTH_CHILD = "nth-child"
    NTH_LAST_CHILD = "nth-last-child"
    NOT = "not"


@dataclass(frozen=True)
class PseudoClass:
    """A pseudo-class condition.

    ``n`` is set (1-indexed) for ``nth-child``/``nth-last-child``; ``inner``
    is set for ``not``.
    """

    kind: PseudoKind
    n: int | None = None
    inner: PseudoClass | None = None

    @classmethod
    def nth_child(cls, n: int) -> PseudoClass:
        return cls(PseudoKind.NTH_CHILD, n=n)

    @classmethod
    def nth_last_child(cls, n: int) -> PseudoClass:
        return cls(PseudoKind.NTH_LAST_CHILD, n=n)

    @classmethod
    def negate(cls, inner: PseudoClass) -> PseudoClass:
        return cls(PseudoKind.NOT, inner=inner)

    def __str__(self) -> str:
        if self.kind in (PseudoKind.NTH_CHILD, PseudoKind.NTH_LAST_CHILD):
            return f":{self.kind.value}({self.n})"
        if self.kind is PseudoKind.NOT:
            return f":not({self.inner})"
        return f":{self.kind.value}"


@dataclass(frozen=True)
class AttributeSelector:
    """``[name]``, ``[name<op>value]`` or ``[name<op>value i]``."""

    name: str
    op: AttributeOp = AttributeOp.EXISTS
    value: str | None = None
    case_insensitive: bool = False

    def __str__(self) -> str:
        if self.op is AttributeOp.EXISTS:
            return f"[{self.name}]"
        flag = " i" if self.case_insensitive else ""
        return f'[{self.name}{self.op.value}"{self.value}"{flag}]'


@dataclass
class SelectorPart:
    """A compound selector: everything between two combinators."""

    element: str | None = None
    id: str | None = None
    classes: list[str] = field(default_factory=list)
    attributes: list[AttributeSelector] = field(default_factory=list)
    pseudo_classes: list[PseudoClass] = field(default_factory=list)
    universal: bool = False

    # ---- constructors ----

    @classmethod
    def of_element(cls, name: str) -> SelectorPart:
        return cls(element=name)

    @classmethod
    def of_id(cls, element_id: str) -> SelectorPart:
        return cls(id=element_id)

    @classmethod
    def of_class(cls, name: str) -> SelectorPart:
        return cls(classes=[name])

    @classmethod
    def any(cls) -> SelectorPart:
        return cls(universal=True)

    # ---- queries ----

    def is_empty(self) -> bool:
        return (
            self.element is None
            and self.id is None
            and not self.classes
            and not self.attributes
            and not self.pseudo_classes
            and not self.universal
        )

    def is_universal_only(self) -> bool:
        """True for a bare ``*`` with no other conditions."""
        return (
            self.universal
            and self.element is None
            and self.id is None
            and not self.classes
            and not self.attributes
            and not self.pseudo_classes
        )

    def specificity(self) -> tuple[int, int, int]:
        """Return ``(ids, classes/attributes/pseudo-classes, types)``."""
        ids = 1 if self.id is not None else 0
        classes = len(self.classes) + len(self.attributes) + len(self.pseudo_classes)
        types = 1 if self.element is not None else 0
        return (ids, classes, types)

    def __str__(self) -> str:
        out = []
        if self.universal:
            out.append("*")
        if self.element is not None:
            out.append(self.element)
        if self.id is not None:
            out.append(f"#{self.id}")
        out.extend(f".{c}" for c in self.classes)
        out.extend(str(a) for a in self.attributes)
        out.extend(str(p) for p in self.pseudo_classes)
        return "".join(out)


@dataclass
class Selector:
    """A chain of parts joined by combinators.

    Each entry is ``(part, combinator_to_next)``; the last entry's combinator
    is always ``None``. Matching starts from the last (target) part.
    """

    parts: list[tuple[SelectorPart, Combinator | None]] = field(default_factory=list)

    @classmethod
    def single(cls, part: SelectorPart) -> Selector:
        return cls(parts=[(part, None)])

    def then(self, combinator: Combinator, part: SelectorPart) -> Selector:
        """Return a new selector with *part* appended after *combinator*."""
        parts = list(self.parts)
        if parts:
            last, _ = parts[-1]
            parts[-1] = (last, combinator)
        parts.append((part, None))
        return Selector(parts=parts)

    def descendant(self, part: SelectorPart) -> Selector:
        return self.then(Combinator.DESCENDANT, part)

    def child(self, part: SelectorPart) -> Selector:
        return self.then(Combinator.CHILD, part)

    def target(self) -> SelectorPart | None:
        """The rightmost part, i.e. the one that must match the node itself."""
        if not self.parts:
            return None
        return self.parts[-1][0]

    def specificity(self) -> tuple[int, int, int]:
        ids = classes = types = 0
        for part, _ in self.parts:
            a, b, c = part.specificity()
            ids += a
            classes += b
            types += c
        return (ids, classes, types)

    def is_empty(self) -> bool:
        return not self.parts

    def __str__(self) -> str:
        out = []
        for part, combinator in self.parts:
            out.append(str(part))
            if combinator is not None:
                out.append(str(combinator))
        return "".join(out)
