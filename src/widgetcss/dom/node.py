"""DOM node model: widget metadata, interaction state, and the node itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from widgetcss.dom.ids import DomId
from widgetcss.style.model import Style


@dataclass
class WidgetMeta:
    """Static identity of a widget: type name, optional element id, classes."""

    widget_type: str = ""
    id: str | None = None
    classes: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        # Accept any iterable of names; a bare string is one class, not letters.
        if isinstance(self.classes, str):
            self.classes = {self.classes}
        else:
            self.classes = set(self.classes)

    def with_id(self, element_id: str) -> WidgetMeta:
        self.id = element_id
        return self

    def with_class(self, name: str) -> WidgetMeta:
        self.classes.add(name)
        return self

    def with_classes(self, names: Iterable[str]) -> WidgetMeta:
        self.classes.update(names)
        return self

    def has_class(self, name: str) -> bool:
        return name in self.classes


@dataclass
class NodeState:
    """Interaction flags plus the node's position among its siblings."""

    focused: bool = False
    hovered: bool = False
    disabled: bool = False
    selected: bool = False
    checked: bool = False
    active: bool = False
    empty: bool = False
    dirty: bool = False
    # derived from the parent's child list; see update_position
    child_index: int = 0
    sibling_count: int = 0
    first_child: bool = False
    last_child: bool = False
    only_child: bool = False

    def update_position(self, index: int, total: int) -> None:
        self.child_index = index
        self.sibling_count = total
        self.first_child = index == 0
        self.last_child = index == max(total - 1, 0)
        self.only_child = total == 1


@dataclass
class DomNode:
    """A node in a DomTree.

    ``parent`` and ``children`` are ids, never node objects: the tree owns
    every node's lifetime.
    """

    id: DomId
    meta: WidgetMeta
    state: NodeState = field(default_factory=NodeState)
    parent: DomId | None = None
    children: list[DomId] = field(default_factory=list)
    computed_style: Style | None = None
    inline_style: Style | None = None

    @property
    def widget_type(self) -> str:
        return self.meta.widget_type

    @property
    def element_id(self) -> str | None:
        return self.meta.id

    @property
    def classes(self) -> set[str]:
        return self.meta.classes

    def has_class(self, name: str) -> bool:
        return self.meta.has_class(name)

    def __str__(self) -> str:
        out = self.widget_type
        if self.element_id:
            out += f"#{self.element_id}"
        out += "".join(f".{c}" for c in sorted(self.classes))
        return f"{out} ({self.id})"
