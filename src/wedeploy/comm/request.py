from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..enum import HttpMethod


@dataclass
class ClientRequest:
    """
    Transport-agnostic description of one outgoing HTTP request.

    Attributes:
        url (str): The absolute (or scheme-less) request URL.
        method (HttpMethod): The HTTP verb.
        body (Optional[Any]): The payload. Mappings and lists are sent as JSON.
        headers (Dict[str, str]): Request headers.
        params (List[Tuple[str, str]]): Query string parameters, in order.
            A name may appear more than once.
        form (Optional[Dict[str, str]]): URL-encoded form fields. When set,
            they are sent instead of `body`.
        follow_redirects (bool): Whether 3xx responses are followed.
    """

    url: str
    method: HttpMethod = HttpMethod.GET
    body: Optional[Any] = None
    headers: Dict[str, str] = field(default_factory=dict)
    params: List[Tuple[str, str]] = field(default_factory=list)
    form: Optional[Dict[str, str]] = None
    follow_redirects: bool = True


@dataclass
class ClientResponse:
    """
    The response to a [`ClientRequest`][wedeploy.comm.ClientRequest].

    Attributes:
        request (ClientRequest): The originating request.
        status_code (int): The HTTP status code.
        body (Optional[Any]): The decoded payload: JSON bodies are decoded,
            other bodies are returned as text, empty bodies as `None`.
        headers (Dict[str, str]): Response headers, lower-cased names.
    """

    request: ClientRequest
    status_code: int
    body: Optional[Any] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def succeeded(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code <= 299

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())
