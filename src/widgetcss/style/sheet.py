"""Stylesheet model: Declaration, Rule, and StyleSheet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

_IMPORTANT = "!important"


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair inside a rule."""

    property: str
    value: str
    important: bool = False

    @classmethod
    def of(cls, property: str, value: str) -> Declaration:
        """Build a declaration, lifting a trailing ``!important`` into the flag."""
        value = value.strip()
        important = False
        if value.lower().endswith(_IMPORTANT):
            value = value[: -len(_IMPORTANT)].rstrip()
            important = True
        return cls(property=property.strip(), value=value, important=important)


@dataclass(frozen=True)
class Rule:
    """A selector string paired with its declarations, in source order."""

    selector: str
    declarations: list[Declaration] = field(default_factory=list)

    @classmethod
    def of(cls, selector: str, properties: Mapping[str, str]) -> Rule:
        return cls(
            selector=selector,
            declarations=[Declaration.of(k, v) for k, v in properties.items()],
        )


@dataclass
class StyleSheet:
    """Rules in source order plus ``--variables`` for ``var()`` substitution."""

    rules: list[Rule] = field(default_factory=list)
    variables: dict[str, str] = field(default_factory=dict)

    def add_rule(self, selector: str, properties: Mapping[str, str]) -> Rule:
        rule = Rule.of(selector, properties)
        self.rules.append(rule)
        return rule

    def extend(self, other: StyleSheet) -> None:
        """Append *other*'s rules after ours; its variables win on conflict."""
        self.rules.extend(other.rules)
        self.variables.update(other.variables)

    def __len__(self) -> int:
        return len(self.rules)
