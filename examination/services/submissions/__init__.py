from .submission_service import SubmissionService, submission_service

__all__ = ["SubmissionService", "submission_service"]
