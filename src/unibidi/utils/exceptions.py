"""Custom exceptions for the unibidi package."""

from typing import Optional, Sized


class UnibidiException(Exception):
    """Base exception for all unibidi exceptions."""

    def __init__(self, message: str, code: Optional[str] = None):
        """Initialize exception.

        Args:
            message: Error message
            code: Optional error code
        """
        super().__init__(message)
        self.code = code


class LengthMismatchException(UnibidiException):
    """Raised when arrays describing the same text differ in length."""

    def __init__(self, message: str = "Input arrays must have the same length"):
        """Initialize LengthMismatchException."""
        super().__init__(message, "LENGTH_MISMATCH")


class AllocationFailureException(UnibidiException):
    """Raised when per-character arrays cannot be allocated."""

    def __init__(self, message: str = "Memory allocation failed"):
        """Initialize AllocationFailureException."""
        super().__init__(message, "ALLOCATION_FAILURE")


def check_lengths(**arrays: Optional[Sized]) -> None:
    """
    Ensure all supplied arrays share one length.

    Arguments passed as None are skipped.

    Raises:
        LengthMismatchException: naming each array and its length
    """
    lengths = {name: len(array) for name, array in arrays.items() if array is not None}
    if len(set(lengths.values())) > 1:
        details = ", ".join(f"{name}={length}" for name, length in lengths.items())
        raise LengthMismatchException(f"Input arrays must have the same length ({details})")
