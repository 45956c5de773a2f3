"""
Examination Custom Exceptions

This module provides the exception hierarchy raised by the examination
services (entity store, grading engine, submission state machine and review
workflow). Every rejected operation raises one of these before any state
change is committed, so callers can translate them into a response without
inspecting the database.

Hierarchy:
- ExaminationError
  - ValidationError: malformed input, out-of-range score, duplicate unique field
  - AuthorizationError: caller is not the exam owner / submission owner
  - NotFoundError: referenced id or code does not exist
  - ConflictError: operation not allowed in the current state
    - SubmissionExpiredError: the submission's deadline has passed

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Optional, Dict, Any


class ExaminationError(Exception):
    """
    Base exception class for all examination errors.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status code the transport layer should use
        error_code (str): Stable machine-readable error identifier
        details (Dict[str, Any]): Additional error details

    Example:
        >>> try:
        ...     submission_service.complete_submission(submission_id, caller_id)
        ... except ExaminationError as e:
        ...     logger.warning(f"Completion rejected: {e.message}")
    """

    status_code: int = 500
    error_code: str = "ExaminationError"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "exception_type": self.__class__.__name__,
        }


class ValidationError(ExaminationError):
    """
    Raised for malformed or missing fields, a review score outside
    [0, marks] or a duplicate unique field at creation.

    The caller corrects the input and retries.
    """

    status_code = 400
    error_code = "ValidationFailed"


class AuthorizationError(ExaminationError):
    """
    Raised when the caller is neither the owner of the submission nor the
    creator of the exam required by the operation.
    """

    status_code = 403
    error_code = "PermissionDenied"

    def __init__(self, message: str = "You are not allowed to perform this action", **kwargs) -> None:
        super().__init__(message, **kwargs)


class NotFoundError(ExaminationError):
    """
    Raised when a referenced entity does not exist.

    Attributes:
        resource_type (Optional[str]): Entity type that was looked up
        resource_id (Optional[Any]): Key that was looked up
    """

    status_code = 404
    error_code = "NotFound"

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(message, details=details)


class ConflictError(ExaminationError):
    """
    Raised when the entity is in a state that forbids the operation,
    e.g. completing an already-completed submission.

    Retrying will not change the outcome.
    """

    status_code = 409
    error_code = "Conflict"


class SubmissionExpiredError(ConflictError):
    """
    Raised when an answer arrives after the submission's deadline
    (start time + exam duration + grace period).
    """

    error_code = "SubmissionExpired"

    def __init__(self, submission_id: int, deadline=None) -> None:
        details = {"submission_id": submission_id}
        if deadline is not None:
            details["deadline"] = deadline.isoformat()
        super().__init__(
            "The time limit for this submission has expired", details=details
        )
