"""Errors raised by the club services, each carrying an HTTP-style status."""


class ServiceError(Exception):
    """Base class for errors reported by a service."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """The requested record does not exist."""

    status_code = 404


class InvalidRequestError(ServiceError):
    """The request is malformed or would lead to an invalid state."""

    status_code = 400


class ForbiddenError(ServiceError):
    """The requested change is not allowed."""

    status_code = 403


class InternalServerError(ServiceError):
    """The storage layer failed."""

    status_code = 500