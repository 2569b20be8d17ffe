"""Selector error types."""


class SelectorSyntaxError(ValueError):
    """Raised when selector text cannot be parsed."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Selector parse error at {position}: {message}")
