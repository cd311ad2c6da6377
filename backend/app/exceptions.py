"""
Application Errors
Domain exceptions raised by services and repositories, rendered as JSON
by the handler registered in app.main.
"""

from http import HTTPStatus
from typing import Any, Mapping, Optional


class CatalogError(Exception):
    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST
    detail: str = "Request failed"

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        errors: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.detail = detail or self.detail
        self.errors = dict(errors) if errors else None
        self.headers = dict(headers) if headers else None
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        payload: dict = {"detail": self.detail}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class ValidationError(CatalogError):
    """Malformed input; `errors` maps field names to messages."""
    status_code = HTTPStatus.BAD_REQUEST
    detail = "Validation failed"


class AuthenticationError(CatalogError):
    status_code = HTTPStatus.UNAUTHORIZED
    detail = "Not authenticated"

    def __init__(self, detail: Optional[str] = None, **kwargs) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(detail, **kwargs)


class InvalidCredentialsError(AuthenticationError):
    detail = "Invalid email or password"


class EmailNotConfirmedError(AuthenticationError):
    detail = "Email has not been confirmed. Please check your inbox."


class TokenError(AuthenticationError):
    detail = "Invalid or expired token"


class AuthorizationError(CatalogError):
    status_code = HTTPStatus.FORBIDDEN
    detail = "Administrator access required"


class NotFoundError(CatalogError):
    status_code = HTTPStatus.NOT_FOUND
    detail = "Not found"


class ConcurrencyConflictError(CatalogError):
    status_code = HTTPStatus.CONFLICT
    detail = "The record was modified by another request"


class TransportError(CatalogError):
    status_code = HTTPStatus.BAD_GATEWAY
    detail = "Could not deliver the message. Please try again later."


class InvalidUserError(CatalogError):
    status_code = HTTPStatus.NOT_FOUND
    detail = "User not found"


class InvalidTokenError(CatalogError):
    status_code = HTTPStatus.BAD_REQUEST
    detail = "Email confirmation failed"
