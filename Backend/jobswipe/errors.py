# backend/jobswipe/errors.py

"""
Domain errors raised by services and dependencies.

Each error carries the HTTP status it is rendered with; the handlers in
``jobswipe.main`` turn them into ``{"detail": message}`` responses.
"""

from fastapi import status


class JobSwipeError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(JobSwipeError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthenticated(JobSwipeError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(JobSwipeError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(JobSwipeError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class QuotaExceeded(JobSwipeError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Daily swipe limit reached. Upgrade to Premium!"


class Unexpected(JobSwipeError):
    pass
