"""Domain errors raised by the service layer.

Each one is an ``HTTPException`` so routers can let them propagate and
FastAPI renders the status code and detail unchanged.
"""
from fastapi import HTTPException, status


class HelpdeskError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class ValidationError(HelpdeskError):
    """Missing or malformed input."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class PermissionDeniedError(HelpdeskError):
    """Actor lacks the role or ownership the operation requires."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidStateError(HelpdeskError):
    """Operation not valid for the request's current lifecycle state."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(HelpdeskError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(HelpdeskError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)
        self.headers = {"WWW-Authenticate": "Bearer"}
