"""Custom exceptions for the Sequencer application.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from SequencerError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
"""

from enum import Enum
from typing import Any


class SequencerError(Exception):
    """Base exception for all Sequencer errors.

    All custom exceptions in the application should inherit from this class.
    Provides a context dictionary for structured error information.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise SequencerError("Something went wrong", context={"document_id": "123"})
        ... except SequencerError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize SequencerError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Database Errors
# ============================================


class DatabaseError(SequencerError):
    """Base exception for document/submission store errors."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize DatabaseError.

        Args:
            message: Error message
            context: Additional context
            operation: Store operation that failed (e.g., "insert", "update")
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class RecordNotFoundError(DatabaseError):
    """Raised when a stored record is not found.

    Attributes:
        model: The record type that was queried
        record_id: The ID that was not found
    """

    def __init__(
        self,
        model: str,
        record_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            model: Name of the record type
            record_id: ID that was not found
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with id={record_id} not found", context=ctx)
        self.model = model
        self.record_id = record_id


# ============================================
# Service Errors
# ============================================


class ExternalAPIError(SequencerError):
    """Raised when an external API call fails.

    Attributes:
        service: Name of the external service
        status_code: HTTP status code (if applicable)
        endpoint: API endpoint that was called
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        response_body: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ExternalAPIError.

        Args:
            service: Name of the external service
            message: Error message
            status_code: HTTP status code (optional)
            endpoint: API endpoint (optional)
            response_body: Response body for debugging (optional)
            context: Additional context
        """
        ctx = context or {}
        ctx["service"] = service
        if status_code is not None:
            ctx["status_code"] = status_code
        if endpoint:
            ctx["endpoint"] = endpoint
        if response_body:
            ctx["response_body"] = response_body[:500]  # Truncate long responses

        self.service = service
        self.status_code = status_code
        self.endpoint = endpoint

        super().__init__(f"{service} API error: {message}", context=ctx)


# ============================================
# Sequence Errors
# ============================================


class SequenceValidationError(SequencerError):
    """Raised when a sequence edit or save violates a document rule.

    Covers a missing title, zero valid items, the item cap, the hashtag
    cap and out-of-range positions. Raised before any state is changed.

    Attributes:
        field: Document field that failed validation (optional)
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SequenceValidationError.

        Args:
            message: User-facing error message
            field: Field that failed validation
            context: Additional context
        """
        ctx = context or {}
        if field:
            ctx["field"] = field
        self.field = field
        super().__init__(message, context=ctx)


class ImportErrorKind(str, Enum):
    """Classification of import adapter failures."""

    INVALID_INPUT = "invalid_input"  # Unparsable URL or id
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"  # Network, 5xx, missing API key
    QUOTA_EXCEEDED = "quota_exceeded"  # HTTP 403: quota or private resource
    NOT_FOUND = "not_found"  # HTTP 404
    EMPTY = "empty"  # Source resolved but contains nothing


class UpstreamImportError(SequencerError):
    """Raised when an import adapter cannot produce candidates.

    The existing item list is never touched when this is raised.

    Attributes:
        kind: Failure classification
        source: Adapter name (drive_folder, youtube_playlist, youtube_kids)
        status_code: Upstream HTTP status code (if applicable)
    """

    def __init__(
        self,
        kind: ImportErrorKind,
        message: str,
        source: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize UpstreamImportError.

        Args:
            kind: Failure classification
            message: User-facing error message
            source: Adapter name
            status_code: Upstream HTTP status code
            context: Additional context
        """
        ctx = context or {}
        ctx["kind"] = kind.value
        if source:
            ctx["source"] = source
        if status_code is not None:
            ctx["status_code"] = status_code

        self.kind = kind
        self.source = source
        self.status_code = status_code

        super().__init__(message, context=ctx)


# ============================================
# Publishing Errors
# ============================================


class ReconciliationError(SequencerError):
    """Raised when channel deactivation only partially succeeds.

    The caller learns how many submissions were deactivated and how many
    remain active. Retrying is safe because deactivation is idempotent.

    Attributes:
        document_id: Document whose submissions were being deactivated
        deactivated: Number of submissions deactivated
        failed: Number of submissions that are still active
        failed_ids: IDs of the submissions that could not be updated
    """

    def __init__(
        self,
        document_id: str,
        deactivated: int,
        failed: int,
        failed_ids: list[str] | None = None,
        operation: str = "delete",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ReconciliationError.

        Args:
            document_id: Document ID
            deactivated: Submissions deactivated before the failure report
            failed: Submissions left active
            failed_ids: IDs of submissions left active
            operation: Operation that was halted
            context: Additional context
        """
        ctx = context or {}
        ctx.update(
            {
                "document_id": document_id,
                "deactivated": deactivated,
                "failed": failed,
                "operation": operation,
            }
        )
        if failed_ids:
            ctx["failed_ids"] = failed_ids

        self.document_id = document_id
        self.deactivated = deactivated
        self.failed = failed
        self.failed_ids = failed_ids or []
        self.operation = operation

        super().__init__(
            f"{operation} halted: {deactivated} submission(s) deactivated, "
            f"{failed} still active",
            context=ctx,
        )


class PersistenceWarning(SequencerError):
    """Raised by draft storage backends when a read or write fails.

    The autosave path catches and logs it; it is never shown to the user.
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize PersistenceWarning.

        Args:
            message: Error message
            key: Storage key involved
            context: Additional context
        """
        ctx = context or {}
        if key:
            ctx["key"] = key
        self.key = key
        super().__init__(message, context=ctx)
