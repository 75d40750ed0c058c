"""
Boundary assertions.

These helpers guard the entry points of the API helpers (before a request is
built) and their response handling (after the transport answered). The query
builders never call them: malformed queries are forwarded to the data
service untouched.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .comm.request import ClientResponse


class ResponseError(Exception):
    """Raised when the data or auth service answers with a non-2xx status."""

    def __init__(self, response: "ClientResponse"):
        self.response = response
        super().__init__(_error_message(response))


class AuthError(Exception):
    """Raised when an operation requires a signed-in user or an auth scope."""

    pass


def assert_not_null(value: Any, message: str):
    if value is None:
        raise ValueError(message)


def assert_object(value: Any, message: str):
    """Accepts mappings and lists, i.e. anything that encodes as a JSON object or array."""
    if not isinstance(value, (Mapping, list)):
        raise TypeError(message)


def assert_function(value: Any, message: str):
    if not callable(value):
        raise TypeError(message)


def assert_response_succeeded(response: "ClientResponse") -> "ClientResponse":
    """Returns `response` unchanged if it succeeded, raises `ResponseError` otherwise."""
    if not response.succeeded():
        raise ResponseError(response)
    return response


def assert_user_signed_in(user: Optional[Any]):
    if user is None:
        raise AuthError("You must be signed-in to perform this operation")


def assert_auth_scope(helper: Any):
    if helper.resolve_auth_scope() is None:
        raise AuthError(
            "You must be signed-in or provide an auth scope to perform this operation"
        )


def _error_message(response: "ClientResponse") -> str:
    body = response.body
    if isinstance(body, Mapping):
        for key in ("error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Request failed with status {response.status_code}"
