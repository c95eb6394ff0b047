"""Domain errors and their HTTP-facing counterparts."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from http import HTTPStatus


class InternalError(Exception):
    """An error raised inside the domain and use-case layers."""

    def __init__(self, message: str, err: str) -> None:
        super().__init__(message)
        self.message = message
        self.err = err

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"InternalError(message={self.message!r}, err={self.err!r})"


def not_found_error(message: str) -> InternalError:
    return InternalError(message, "not_found")


def internal_server_error(message: str) -> InternalError:
    return InternalError(message, "internal_server_error")


def bad_request_error(message: str) -> InternalError:
    return InternalError(message, "bad_request")


@dataclass(frozen=True)
class Cause:
    """A single field-level reason for a rejected request."""

    field: str
    message: str


class RestError(Exception):
    """An error shaped for an HTTP response body."""

    def __init__(
        self,
        message: str,
        err: str,
        code: int,
        causes: list[Cause] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.err = err
        self.code = code
        self.causes = causes

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"RestError(message={self.message!r}, err={self.err!r}, "
            f"code={self.code!r}, causes={self.causes!r})"
        )

    def to_dict(self) -> dict:
        """Return the JSON body of this error."""
        causes = None if self.causes is None else [asdict(c) for c in self.causes]
        return {
            "message": self.message,
            "err": self.err,
            "code": self.code,
            "causes": causes,
        }


def rest_bad_request(message: str, *args: Cause) -> RestError:
    return RestError(
        message, "bad_request", int(HTTPStatus.BAD_REQUEST), list(args) or None
    )


def rest_internal_server(message: str) -> RestError:
    return RestError(message, "internal_server", int(HTTPStatus.INTERNAL_SERVER_ERROR))


def rest_not_found(message: str) -> RestError:
    return RestError(message, "not_found", int(HTTPStatus.NOT_FOUND))


def convert_error(internal_error: InternalError) -> RestError:
    """Map a domain error onto the matching HTTP error."""
    if internal_error.err == "bad_request":
        return rest_bad_request(str(internal_error))
    if internal_error.err == "not_found":
        return rest_not_found(str(internal_error))
    return rest_internal_server(str(internal_error))