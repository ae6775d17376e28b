"""HTTP errors raised by the authentication service.

Each error carries a fixed status code and a message that is safe to show to
the caller. Handlers in ``backend.main`` render them as
``{"success": false, "message": ...}``.
"""

from fastapi import HTTPException, status


class ServiceError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Validation failed'

    def __init__(self, message: str | None = None, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = 'User already exists'


class AuthenticationError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Unauthorized'

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={'WWW-Authenticate': 'Bearer'})


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'User not found'


class InternalError(ServiceError):
    pass
