from widgetcss.engine.build import View
from widgetcss.engine.engine import StyleEngine

__all__ = ["StyleEngine", "View"]
