"""
HTTP transport.

The SDK never talks to the network directly: every request is described by a
[`ClientRequest`][wedeploy.comm.ClientRequest] and handed to a
[`Transport`][wedeploy.comm.Transport], which returns a
`concurrent.futures.Future` of the [`ClientResponse`][wedeploy.comm.ClientResponse].
"""

import json
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

import httpx

from ..logging_config import get_logger
from ..util import has_scheme
from .request import ClientRequest, ClientResponse

# Set the hierarchical logger
logger = get_logger(__name__)


class TransportError(Exception):
    """Raised (through the returned future) when a request cannot be completed."""

    pass


class Transport(ABC):
    """
    Sends [`ClientRequest`][wedeploy.comm.ClientRequest] objects.

    Implementations must return a future that resolves exactly once with a
    `ClientResponse` (whatever its status code) or fails exactly once with a
    `TransportError`. Cancellation, where supported, is up to the
    implementation.
    """

    @abstractmethod
    def send(self, request: ClientRequest) -> "Future[ClientResponse]":
        ...

    def close(self):
        """Releases the transport resources. The default does nothing."""
        pass

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class HttpTransport(Transport):
    """
    [`Transport`][wedeploy.comm.Transport] backed by an `httpx.Client`.

    Requests run on a private thread pool, so `send()` returns immediately.
    Scheme-less URLs default to `https://`.

    Example:
        ```python
        transport = HttpTransport(timeout=10)
        future = transport.send(ClientRequest("api.example.com/movies"))
        response = future.result()
        transport.close()
        ```
    """

    def __init__(
        self,
        timeout: float = 5.0,
        max_workers: Optional[int] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            timeout: Request timeout in seconds, used when `client` is not given.
            max_workers: Size of the dispatch thread pool. Defaults to the
                `ThreadPoolExecutor` default.
            client: An optional pre-configured `httpx.Client`; the transport
                takes ownership of it and closes it on `close()`.
        """
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="wedeploy-transport"
        )

    def send(self, request: ClientRequest) -> "Future[ClientResponse]":
        logger.debug(f"Dispatching '{request.method} {request.url}'")
        return self._executor.submit(self._request, request)

    def _request(self, request: ClientRequest) -> ClientResponse:
        url = request.url if has_scheme(request.url) else f"https://{request.url.lstrip('/')}"

        kwargs: Dict[str, Any] = {}
        if request.params:
            kwargs["params"] = list(request.params)
        if request.headers:
            kwargs["headers"] = dict(request.headers)
        if request.form is not None:
            kwargs["data"] = dict(request.form)
        elif request.body is not None:
            if isinstance(request.body, (str, bytes)):
                kwargs["content"] = request.body
            else:
                kwargs["json"] = request.body

        try:
            resp = self._client.request(
                str(request.method),
                url,
                follow_redirects=request.follow_redirects,
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request '{request.method} {url}' failed: '{e}'")
            raise TransportError(
                f"Request '{request.method} {url}' failed.\nInner err: '{e}'"
            ) from e

        logger.debug(f"'{request.method} {url}' answered {resp.status_code}")
        return ClientResponse(
            request=request,
            status_code=resp.status_code,
            body=_decode_body(resp),
            headers={name.lower(): value for name, value in resp.headers.items()},
        )

    def close(self):
        self._executor.shutdown(wait=True)
        self._client.close()


def _decode_body(resp: httpx.Response) -> Optional[Any]:
    if not resp.content:
        return None
    content_type = resp.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return resp.json()
        except json.JSONDecodeError:
            logger.warning("Response declared as JSON could not be decoded; returning text")
    return resp.text
