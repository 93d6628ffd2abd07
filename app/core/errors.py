"""Typed service errors. Route handlers map them to HTTP responses via status_code."""


class ServiceError(Exception):
    """Base class for errors surfaced to the request boundary."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class DuplicateUserError(ServiceError):
    """A user with this e-mail already exists."""

    status_code = 400


class DuplicateRoleError(ServiceError):
    """A role with this value already exists."""

    status_code = 400


class InvalidCredentialsError(ServiceError):
    """Unknown e-mail or wrong password; the two cases are deliberately indistinguishable."""

    status_code = 401


class InvalidTokenError(ServiceError):
    """Token is malformed, expired, wrongly signed or carries an unexpected payload."""

    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class InternalConfigurationError(ServiceError):
    """Server is misconfigured (e.g. the default seed role is missing). Not recoverable per request."""

    status_code = 500


class FileStorageError(ServiceError):
    status_code = 500
