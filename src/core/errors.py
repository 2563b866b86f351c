"""
Error types raised by the layout engine and its input boundary.
"""


class ParseError(ValueError):
    """A date string could not be parsed as YYYY-MM-DD."""

    def __init__(self, value, reason: str = "expected YYYY-MM-DD"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid date {value!r}: {reason}")


class InvariantViolation(ValueError):
    """An event breaks a data-integrity rule and is skipped from layout."""

    def __init__(self, event_id: str | None, message: str):
        self.event_id = event_id
        super().__init__(message)


class LayoutConfigError(ValueError):
    """Layout configuration is unusable. This is the only fatal layout error."""
