"""
Domain errors raised by the policy, the services and the routers.

Every error carries the HTTP status it maps to; ``eduvillage.main`` turns
them into the ``{"success": false, "message": ...}`` envelope.
"""

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None, errors: list | None = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized to access this route"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class DuplicateEmailError(ConflictError):
    default_message = "User already exists with this email"


class AlreadyEnrolledError(ConflictError):
    default_message = "Already enrolled in this course"


class NotEnrolledError(ConflictError):
    default_message = "Not enrolled in this course"


class CourseNotPublishedError(ConflictError):
    default_message = "Cannot enroll in unpublished course"


class AlreadyCompletedError(ConflictError):
    default_message = "Course already marked as completed"


class RequestTimeoutError(AppError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    default_message = "Request timed out"
