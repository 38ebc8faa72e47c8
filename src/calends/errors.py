"""Exceptions raised by calends."""


class CalendsError(Exception):
    """Base class for all calends errors."""
    pass


class GrammarError(CalendsError, ValueError):
    """Raised when selection-rule, duration or interval text is malformed.

    Attributes:
        reason: Short description of what went wrong.
        position: 0-based offset into the text where parsing stopped.
        text: The text being parsed, when known.
    """

    def __init__(self, reason: str, position: int, text: str | None = None) -> None:
        self.reason = reason
        self.position = position
        self.text = text
        message = f"{reason} at position {position}"
        if text is not None:
            message += f" in {text!r}"
        super().__init__(message)


class SelectionError(CalendsError):
    """Raised when a parsed selection cannot be evaluated."""
    pass


class PositionWithoutCandidates(SelectionError):
    """Raised when a position selector has nothing to pick from."""
    pass


class IntervalConstructionError(CalendsError, ValueError):
    """Raised when a closed interval would end before it starts."""
    pass


class RecurrenceStateError(CalendsError):
    """Raised when a recurrence is reconfigured after iteration began."""
    pass
