"""
Service layer base exceptions.

Exceptions keep the failing operation, a structured context for logging and the
original error, whose text is appended to the message so callers always see the
full cause chain.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error is not None:
            return f"{self.message}: {self.original_error}"
        return self.message


class DatabaseError(ServiceException):
    """Exception raised by storage adapters when the database fails."""
