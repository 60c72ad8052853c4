"""Custom exception types used across the project."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ErrorDetails:
    """Structured metadata associated with an exception."""

    code: str
    message: str


class DialogueError(Exception):
    """Base class for errors raised by the dialogue state layer."""

    error_code = "ERR_DIALOGUE"

    def __init__(self, message: str, *, details: ErrorDetails | None = None) -> None:
        super().__init__(message)
        self.details = details or ErrorDetails(code=self.error_code, message=message)

    @property
    def code(self) -> str:
        return self.details.code


class InvalidOperationError(DialogueError, TypeError):
    """Raised when two values cannot be combined by the requested operation."""

    error_code = "ERR_INVALID_OPERATION"

    def __init__(self, operation: str, left: object, right: object) -> None:
        message = f"cannot {operation} {left} and {right}"
        super().__init__(message, details=ErrorDetails(code=self.error_code, message=message))
        self.operation = operation


__all__ = ["DialogueError", "ErrorDetails", "InvalidOperationError"]
