"""Custom exceptions for Theme Interpreter."""

from enum import Enum
from typing import Optional, Sequence, Tuple


class ErrorKind(str, Enum):
    """Kinds of per-attribute resolution failures."""

    MALFORMED_LITERAL = "MalformedLiteral"
    UNKNOWN_ATTRIBUTE = "UnknownAttribute"
    TYPE_MISMATCH = "TypeMismatch"
    CIRCULAR_REFERENCE = "CircularReference"
    UNRESOLVED_FONT = "UnresolvedFont"


class ThemeInterpreterError(Exception):
    """Base exception for Theme Interpreter errors."""

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        scope: Optional[str] = None,
        attribute: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.scope = scope
        self.attribute = attribute

    def __str__(self) -> str:
        location = self.location
        text = f"{location}: {self.message}" if location else self.message
        if self.details:
            return f"{text}: {self.details}"
        return text

    @property
    def location(self) -> Optional[str]:
        if self.attribute is None:
            return None
        if self.scope:
            return f"{self.scope}.{self.attribute}"
        return self.attribute

    def at(self, scope: str, attribute: str) -> "ThemeInterpreterError":
        """Attach a (scope, attribute) location unless one is already set."""
        if self.attribute is None:
            self.scope = scope
            self.attribute = attribute
        return self


class ThemeLoadError(ThemeInterpreterError):
    """Exception raised when a theme document cannot be loaded."""

    pass


class MalformedLiteral(ThemeInterpreterError):
    """Exception raised for an unparseable literal or expression."""

    kind = ErrorKind.MALFORMED_LITERAL


class UnknownAttribute(ThemeInterpreterError):
    """Exception raised when the inheritance chain has no such attribute."""

    kind = ErrorKind.UNKNOWN_ATTRIBUTE


class TypeMismatch(ThemeInterpreterError):
    """Exception raised for an operand type error during evaluation."""

    kind = ErrorKind.TYPE_MISMATCH


class CircularReference(ThemeInterpreterError):
    """Exception raised when attributes reference each other in a loop."""

    kind = ErrorKind.CIRCULAR_REFERENCE

    def __init__(
        self,
        message: str,
        cycle: Sequence[Tuple[str, str]] = (),
        details: Optional[str] = None,
        scope: Optional[str] = None,
        attribute: Optional[str] = None,
    ):
        super().__init__(message, details=details, scope=scope, attribute=attribute)
        self.cycle = tuple(cycle)

    @property
    def cycle_path(self) -> str:
        return " -> ".join(f"{scope}.{attribute}" if scope else attribute for scope, attribute in self.cycle)


class UnresolvedFont(ThemeInterpreterError):
    """Exception raised when neither the catalog nor a fallback provides a font."""

    kind = ErrorKind.UNRESOLVED_FONT
