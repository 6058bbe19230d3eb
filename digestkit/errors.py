"""
Error Taxonomy

Every failure in digestkit is raised synchronously at the API boundary,
before any digest is produced. Each error also derives from the builtin
exception a caller would naturally catch (ValueError, TypeError, ...).

Components:
- DigestKitError: root of the hierarchy
- SizeError: a buffer has the wrong length
- OutOfRangeError: a number lies outside its permitted range
- EnforceTypeError: an argument has the wrong type
- NotSupportedError: the operation is deliberately not provided
- ContextFinalizedError: update() on a finalized hash context
- UnknownAlgorithmError: registry lookup of an unknown algorithm
"""

from typing import Any, Optional


class DigestKitError(Exception):
    """Base class for all digestkit errors."""
    pass


class SizeError(DigestKitError, ValueError):
    """
    Raised when a buffer does not have the required length.

    Attributes:
        noun: Name of the offending buffer
        expected: Description of the acceptable size(s)
        actual: The size that was supplied
    """

    def __init__(self, noun: str, expected: Any, actual: int):
        self.noun = noun
        self.expected = expected
        self.actual = actual
        super().__init__(f"{noun} should be {expected} bytes, got: {actual}")


class OutOfRangeError(DigestKitError, ValueError):
    """
    Raised when a numeric argument falls outside its permitted range.

    Attributes:
        noun: Name of the offending argument
        value: The value that was supplied
        low: Inclusive lower bound (None when unbounded)
        high: Inclusive upper bound (None when unbounded)
    """

    def __init__(self, noun: str, value: Any,
                 low: Optional[int] = None, high: Optional[int] = None,
                 detail: Optional[str] = None):
        self.noun = noun
        self.value = value
        self.low = low
        self.high = high
        if detail is None:
            if low is not None and high is not None:
                detail = f"{low}<=x<={high}"
            elif low is not None:
                detail = f"x>={low}"
            elif high is not None:
                detail = f"x<={high}"
            else:
                detail = "in range"
        super().__init__(f"{noun} should be {detail}, got: {value}")


class EnforceTypeError(DigestKitError, TypeError):
    """Raised when an argument is not of the required type."""

    def __init__(self, noun: str, expected: str, value: Any):
        self.noun = noun
        self.expected = expected
        self.value = value
        super().__init__(
            f"{noun} should be {expected}, got: {type(value).__name__}"
        )


class NotSupportedError(DigestKitError, NotImplementedError):
    """Raised for operations a type deliberately does not provide."""
    pass


class ContextFinalizedError(DigestKitError, RuntimeError):
    """Raised when data is written to a hash context after finalize()."""
    pass


class UnknownAlgorithmError(DigestKitError, KeyError):
    """Raised when the registry has no algorithm with the requested name."""

    def __init__(self, name: str, available):
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"Unknown hash algorithm: {name!r}. "
            f"Available: {', '.join(self.available)}"
        )

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]
