"""
Structured error types for the book catalog.

Every failure the catalog can report has a stable machine-readable
:class:`ErrorCode`.  Exceptions raised by collaborators (identity
resolver, shape validator, record store, translator) are subclasses of
:class:`BookCatalogError` and carry that code, so the operations layer can
turn them into an ``OperationResult`` without guessing.

Architecture:
    ::

        BookCatalogError (code, category, details, cause)
        ├── AuthError
        │   ├── MissingCredentialError   MISSING_CREDENTIAL
        │   └── InvalidCredentialError   INVALID_CREDENTIAL
        ├── InvalidBookIdError           INVALID_BOOK_ID
        ├── ShapeValidationError         VALIDATION_FAILED (diagnostics)
        ├── StoreError                   STORE_ERROR
        └── TranslationError             UPSTREAM_TRANSLATION_ERROR

Usage:
    from book_catalog.core.errors import StoreError

    try:
        client.get_item(...)
    except ClientError as e:
        raise StoreError("get_item failed", cause=e) from e
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse classification used for log routing."""

    AUTH = "AUTH"
    VALIDATION = "VALIDATION"
    STORAGE = "STORAGE"
    SOURCE = "SOURCE"
    INTERNAL = "INTERNAL"


class ErrorCode(str, Enum):
    """Stable failure kinds reported by every operation."""

    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    MISSING_IDENTIFIER = "MISSING_IDENTIFIER"
    INVALID_BOOK_ID = "INVALID_BOOK_ID"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UPSTREAM_TRANSLATION_ERROR = "UPSTREAM_TRANSLATION_ERROR"
    STORE_ERROR = "STORE_ERROR"
    INTERNAL = "INTERNAL"


class BookCatalogError(Exception):
    """Base class for all catalog errors.

    Subclasses set ``default_code`` and ``default_category``.

    Args:
        message: Human-readable description.
        details: Extra key/value context (diagnostics, keys, limits).
        cause: Underlying exception, chained as ``__cause__``.
    """

    default_code: ErrorCode = ErrorCode.INTERNAL
    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = self.default_code
        self.category = self.default_category
        self.details = details or {}
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "category": self.category.value,
        }
        if self.details:
            result["details"] = self.details
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code.value})"


# =============================================================================
# AUTH
# =============================================================================


class AuthError(BookCatalogError):
    """Caller identity could not be established."""

    default_code = ErrorCode.INVALID_CREDENTIAL
    default_category = ErrorCategory.AUTH


class MissingCredentialError(AuthError):
    """Neither the Authorization header nor the token cookie was supplied."""

    default_code = ErrorCode.MISSING_CREDENTIAL


class InvalidCredentialError(AuthError):
    """The credential could not be decoded or carries no subject."""

    default_code = ErrorCode.INVALID_CREDENTIAL


# =============================================================================
# REQUEST SHAPE
# =============================================================================


class InvalidBookIdError(BookCatalogError):
    """A book identifier did not parse as a positive integer."""

    default_code = ErrorCode.INVALID_BOOK_ID
    default_category = ErrorCategory.VALIDATION


class ShapeValidationError(BookCatalogError):
    """A candidate object failed validation against a named shape."""

    default_code = ErrorCode.VALIDATION_FAILED
    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        shape: str,
        diagnostics: list[dict[str, Any]],
    ):
        super().__init__(message, details={"shape": shape})
        self.shape = shape
        self.diagnostics = diagnostics


# =============================================================================
# COLLABORATORS
# =============================================================================


class StoreError(BookCatalogError):
    """The record store failed unexpectedly."""

    default_code = ErrorCode.STORE_ERROR
    default_category = ErrorCategory.STORAGE


class TranslationError(BookCatalogError):
    """The external translation capability failed."""

    default_code = ErrorCode.UPSTREAM_TRANSLATION_ERROR
    default_category = ErrorCategory.SOURCE


__all__ = [
    "AuthError",
    "BookCatalogError",
    "ErrorCategory",
    "ErrorCode",
    "InvalidBookIdError",
    "InvalidCredentialError",
    "MissingCredentialError",
    "ShapeValidationError",
    "StoreError",
    "TranslationError",
]
