"""Custom exceptions for QuizApp application."""

from typing import Any


class QuizAppException(Exception):
    """Base exception for all QuizApp errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(QuizAppException):
    """Resource not found."""

    def __init__(
        self,
        resource: str,
        resource_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"{resource} with id '{resource_id}' not found",
            error_code="NOT_FOUND",
            details={
                "resource": resource,
                "resource_id": str(resource_id),
                **(details or {}),
            },
        )


class DomainValidationError(QuizAppException):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, **(details or {})} if field else details,
        )


class ConcurrentFinalizeConflict(QuizAppException):
    """Another request already stored the result for this user and quiz.

    Raised by the result store on a uniqueness violation and consumed by
    the finalize path, which re-reads the winning row instead.
    """

    def __init__(self, quiz_id: int, user_id: str) -> None:
        super().__init__(
            message=f"Result for quiz {quiz_id} and user '{user_id}' already exists",
            error_code="FINALIZE_CONFLICT",
            details={"quiz_id": quiz_id, "user_id": user_id},
        )


class AccessCodeGenerationError(QuizAppException):
    """No free access code was found within the configured attempts."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            message=f"Could not generate a unique access code after {attempts} attempts",
            error_code="ACCESS_CODE_EXHAUSTED",
            details={"attempts": attempts},
        )
