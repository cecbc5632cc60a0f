"""Exceptions raised by the timetable layout core."""

from typing import Any, Optional


class LayoutError(ValueError):
    """Base class for all layout input errors.
    
    Every layout error carries the offending field and value so the caller
    can fix the input and resubmit.
    """
    
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class InvalidEvent(LayoutError):
    """Raised when an event has a malformed time, empty duration or bad day."""
    
    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        field: Optional[str] = None,
        value: Any = None
    ) -> None:
        if index is not None:
            message = f"Event #{index}: {message}"
        super().__init__(message, field, value)
        self.index = index


class InvalidConfig(LayoutError):
    """Raised when grid configs break their invariants."""


class OutOfGridRange(LayoutError):
    """Raised when a valid event does not fit between start_hour and end_hour."""
    
    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        field: Optional[str] = None,
        value: Any = None
    ) -> None:
        if index is not None:
            message = f"Event #{index}: {message}"
        super().__init__(message, field, value)
        self.index = index
