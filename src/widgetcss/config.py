from __future__ import annotations

from dataclasses import dataclass

from widgetcss.style.model import INHERITED_PROPERTIES, STYLE_FIELDS


@dataclass(frozen=True)
class EngineConfig:
    inheritance: bool = True  # compute_styles() passes parent styles down
    inherited_properties: frozenset[str] = INHERITED_PROPERTIES
    log_dropped_selectors: bool = True

    def __post_init__(self) -> None:
        unknown = set(self.inherited_properties) - STYLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown inherited properties: {', '.join(sorted(unknown))}")
