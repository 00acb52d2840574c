"""Generic error value shared by all modules.

Functions that can fail return a ``SproutError`` instead of raising, so the
caller decides what to do with it. Use ``is_error`` to check a result.
"""
from typing import Any, Dict, List, Optional, Union

ErrorCode = Union[str, int]


class SproutError:
    """Container for one or more error codes with their messages and data."""

    def __init__(
        self,
        code: Optional[ErrorCode] = None,
        message: str = "",
        data: Any = None,
    ) -> None:
        self.errors: Dict[ErrorCode, List[str]] = {}
        self.error_data: Dict[ErrorCode, Any] = {}
        if code is not None:
            self.add(code, message, data)

    def add(self, code: ErrorCode, message: str, data: Any = None) -> None:
        self.errors.setdefault(code, []).append(message)
        if data is not None:
            self.error_data[code] = data

    @property
    def code(self) -> Optional[ErrorCode]:
        """First error code, or None if empty."""
        return next(iter(self.errors), None)

    @property
    def message(self) -> str:
        """First message of the first error code."""
        code = self.code
        if code is None:
            return ""
        return self.errors[code][0]

    @property
    def data(self) -> Any:
        code = self.code
        if code is None:
            return None
        return self.error_data.get(code)

    @property
    def codes(self) -> List[ErrorCode]:
        return list(self.errors)

    def get_messages(self, code: Optional[ErrorCode] = None) -> List[str]:
        """Messages for *code*, or all messages if no code is given."""
        if code is None:
            return [msg for messages in self.errors.values() for msg in messages]
        return list(self.errors.get(code, []))

    def has_errors(self) -> bool:
        return bool(self.errors)

    def __repr__(self) -> str:
        return f"<SproutError(code={self.code!r}, message={self.message!r})>"


def is_error(value: Any) -> bool:
    """Return True if *value* is a SproutError."""
    return isinstance(value, SproutError)
