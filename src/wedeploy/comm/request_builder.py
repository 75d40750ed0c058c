import base64
import json
from concurrent.futures import Future
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..enum import HttpMethod
from ..models.auth import Auth
from ..query.protocols import to_body
from ..util import join_paths
from .request import ClientRequest, ClientResponse
from .transport import Transport


class RequestBuilder:
    """
    Fluent description of a request to one service URL.

    Obtained from [`WeDeployClient.url()`][wedeploy.comm.WeDeployClient.url];
    every mutator returns the builder, and the verb methods (`get`, `post`,
    `put`, `patch`, `delete`) hand the request to the transport and return
    the resulting future.

    Example:
        ```python
        future = (
            client.url("https://data.example.com")
            .path("movies")
            .param("limit", "10")
            .auth("my-token")
            .get()
        )
        response = future.result()
        ```
    """

    def __init__(self, transport: Transport, url: str, follow_redirects: bool = True):
        self._transport = transport
        self._url = url
        self._headers: Dict[str, str] = {}
        self._params: List[Tuple[str, str]] = []
        self._form: Optional[Dict[str, str]] = None
        self._auth: Optional[Auth] = None
        self._follow_redirects = follow_redirects

    def path(self, *paths: str) -> "RequestBuilder":
        """Appends path segments to the URL."""
        self._url = join_paths(self._url, *paths)
        return self

    def param(self, name: str, value: Any) -> "RequestBuilder":
        """Appends a query string parameter; names may repeat."""
        self._params.append((name, value if isinstance(value, str) else json.dumps(value)))
        return self

    def form(self, name: str, value: str) -> "RequestBuilder":
        """Adds a URL-encoded form field. Form fields replace the request body."""
        if self._form is None:
            self._form = {}
        self._form[name] = value
        return self

    def header(self, name: str, value: str) -> "RequestBuilder":
        self._headers[name] = value
        return self

    def headers(self, headers: Optional[Mapping[str, str]]) -> "RequestBuilder":
        if headers:
            self._headers.update(headers)
        return self

    def follow_redirects(self, follow: bool) -> "RequestBuilder":
        self._follow_redirects = follow
        return self

    def auth(
        self, auth_or_token_or_email: Any, password: Optional[str] = None
    ) -> "RequestBuilder":
        """
        Attaches credentials: an [`Auth`][wedeploy.models.Auth], a token, or an
        email and password. The credentials are not inspected beyond choosing
        between a bearer token and basic authentication.
        """
        self._auth = Auth.create(auth_or_token_or_email, password)
        return self

    def get_url(self) -> str:
        return self._url

    # --- Verbs ---

    def get(self, query: Optional[Any] = None) -> "Future[ClientResponse]":
        """
        Sends a GET request. Each top-level key of the query body becomes a
        query string parameter with a JSON-encoded value.
        """
        if query is not None:
            for name, value in to_body(query).items():
                self.param(name, value)
        return self._send(HttpMethod.GET)

    def post(self, body: Optional[Any] = None) -> "Future[ClientResponse]":
        return self._send(HttpMethod.POST, body)

    def put(self, body: Optional[Any] = None) -> "Future[ClientResponse]":
        return self._send(HttpMethod.PUT, body)

    def patch(self, body: Optional[Any] = None) -> "Future[ClientResponse]":
        return self._send(HttpMethod.PATCH, body)

    def delete(self) -> "Future[ClientResponse]":
        return self._send(HttpMethod.DELETE)

    def build(self, method: HttpMethod, body: Optional[Any] = None) -> ClientRequest:
        """Snapshots the builder into a [`ClientRequest`][wedeploy.comm.ClientRequest]."""
        headers = dict(self._headers)
        if self._auth is not None:
            headers.update(_authorization_headers(self._auth))
        return ClientRequest(
            url=self._url,
            method=method,
            body=to_body(body),
            headers=headers,
            params=list(self._params),
            form=dict(self._form) if self._form is not None else None,
            follow_redirects=self._follow_redirects,
        )

    def _send(self, method: HttpMethod, body: Optional[Any] = None) -> "Future[ClientResponse]":
        return self._transport.send(self.build(method, body))


def _authorization_headers(auth: Auth) -> Dict[str, str]:
    headers = dict(auth.get_headers())
    if auth.has_token():
        headers["Authorization"] = f"Bearer {auth.get_token()}"
    elif auth.has_email() and auth.has_password():
        credentials = f"{auth.get_email()}:{auth.get_password()}".encode("utf-8")
        headers["Authorization"] = f"Basic {base64.b64encode(credentials).decode('ascii')}"
    return headers
