from http import HTTPStatus
from typing import Iterable, Mapping, Optional


class RequestError(Exception):
    """Base class for errors that should be reported to the client as an
    HTTP error response. The `Errors` middleware stage turns any of these
    into a response with the error's `status`, `headers`, and `message`."""

    status: int = HTTPStatus.BAD_REQUEST
    """HTTP status code of the error response. Subclasses override this."""

    def __init__(self, message: Optional[str] = None, headers: Optional[Mapping[str, str]] = None):
        self.message: str = message or HTTPStatus(self.status).phrase
        """Text used as the error response body."""

        self.headers: dict[str, str] = dict(headers or {})
        """Headers to send with the error response; may be empty."""

        super().__init__(self.message)

    def __str__(self):
        return self.message


class BadRequest(RequestError):
    status = HTTPStatus.BAD_REQUEST


class NotFound(RequestError):
    status = HTTPStatus.NOT_FOUND


class MethodNotAllowed(RequestError):
    """Raised when the resource's kind has no handler for the request method.
    The message is the offending method name, and when the allowed methods
    are known they are sent in an `Allow` header."""

    status = HTTPStatus.METHOD_NOT_ALLOWED

    def __init__(self, method: str, allowed: Iterable[str] = ()):
        self.method = method
        """The request method that has no handler, as sent by the client."""

        self.allowed = tuple(allowed)
        headers = {'Allow': ', '.join(self.allowed)} if self.allowed else {}
        super().__init__(message=method, headers=headers)


class NotAcceptable(RequestError):
    status = HTTPStatus.NOT_ACCEPTABLE


class Conflict(RequestError):
    status = HTTPStatus.CONFLICT


class Gone(RequestError):
    status = HTTPStatus.GONE


class PreconditionFailed(RequestError):
    status = HTTPStatus.PRECONDITION_FAILED


class UnsupportedMediaType(RequestError):
    status = HTTPStatus.UNSUPPORTED_MEDIA_TYPE
