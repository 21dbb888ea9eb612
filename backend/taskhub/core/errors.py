"""
Error taxonomy for the task API.

Handlers raise these and the app renders them as
``{"message": ..., "error": ...}`` JSON bodies. ``AuthError`` is rendered
without a body.
"""
from typing import Optional

from fastapi import status

MISSING_FIELDS_MESSAGE = "Please provide all the required fields"
NOT_FOUND_MESSAGE = "Task not found"
UNEXPECTED_MESSAGE = "Something went wrong"


class TaskAPIError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_body(self) -> dict:
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationError(TaskAPIError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = MISSING_FIELDS_MESSAGE, error: Optional[str] = None):
        super().__init__(message, error)


class NotFoundError(TaskAPIError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = NOT_FOUND_MESSAGE):
        super().__init__(message)


class AuthError(TaskAPIError):
    def __init__(self, status_code: int = status.HTTP_401_UNAUTHORIZED):
        super().__init__("Unauthorized" if status_code == status.HTTP_401_UNAUTHORIZED else "Forbidden")
        self.status_code = status_code


class UnexpectedError(TaskAPIError):
    def __init__(self, error: str):
        super().__init__(UNEXPECTED_MESSAGE, error)
