"""
WeDeploy Client Entry Point.

This module provides the `WeDeployClient`, the primary interface for users to
interact with WeDeploy services. It owns the HTTP transport and serves as a
factory for request builders and service helpers (data, auth).
"""

from typing import Any, Dict, Optional, Type

from ..handlers import AuthApiHelper, DataApiHelper
from ..logging_config import get_logger
from ..storage import StorageProtocol
from ..util import join_paths
from .config import ClientConfig
from .request_builder import RequestBuilder
from .transport import HttpTransport, Transport

# Set the hierarchical logger
logger = get_logger(__name__)


class WeDeployClient:
    """
    The main entry point for the WeDeploy SDK.

    Example:
        ```python
        from wedeploy import ClientConfig, WeDeployClient

        with WeDeployClient(ClientConfig(data_url="https://data.example.com")) as client:
            body = client.data().where("year", ">", 1990).get("movies").result()
        ```
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        storage: Optional[StorageProtocol] = None,
    ):
        """
        Args:
            config: The client settings. Defaults to `ClientConfig()`.
            transport: The transport used to send requests. When omitted, an
                [`HttpTransport`][wedeploy.comm.HttpTransport] is created from
                `config` and closed with the client.
            storage: Where auth helpers persist the signed-in user. Defaults to
                a fresh [`MemoryStorage`][wedeploy.storage.MemoryStorage] per helper.
        """
        self._config = config or ClientConfig()
        self._owns_transport = transport is None
        self._transport = transport or HttpTransport(
            timeout=self._config.timeout,
            max_workers=self._config.max_workers,
        )
        self._storage = storage
        self._auth_helpers_cache: Dict[str, AuthApiHelper] = {}
        self._closed = False

    @classmethod
    def from_env(cls, transport: Optional[Transport] = None) -> "WeDeployClient":
        """Creates a client configured from `WEDEPLOY_*` environment variables."""
        return cls(ClientConfig.from_env(), transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    # --- Context Manager Protocol ---

    def __enter__(self) -> "WeDeployClient":
        """Context manager entry point."""
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        """
        Context manager exit point. Ensures resources are closed.

        Exceptions raised within the `with` block are propagated.
        """
        try:
            self.close()
        except Exception as e:
            logger.error(
                f"Error releasing resources allocated from WeDeployClient.\nInner err: '{e}'"
            )

    # --- Factory Methods ---

    def url(self, *urls: str) -> RequestBuilder:
        """
        Returns a [`RequestBuilder`][wedeploy.comm.RequestBuilder] targeting the
        concatenation of `urls`.
        """
        return RequestBuilder(
            self._transport,
            join_paths(*urls),
            follow_redirects=self._config.follow_redirects,
        )

    def data(self, data_url: Optional[str] = None) -> DataApiHelper:
        """
        Returns a new [`DataApiHelper`][wedeploy.handlers.DataApiHelper].

        Each call returns a fresh helper with an empty query: data helpers are
        single-use request builders and are never cached.

        Raises:
            ValueError: If neither `data_url` nor `config.data_url` is set.
        """
        return DataApiHelper(self, data_url or self._config.data_url)

    def auth(self, auth_url: Optional[str] = None) -> AuthApiHelper:
        """
        Retrieves the [`AuthApiHelper`][wedeploy.handlers.AuthApiHelper] for the
        given auth service.

        Helpers are cached per URL, so the signed-in user is shared by every
        caller of the same service.

        Raises:
            ValueError: If neither `auth_url` nor `config.auth_url` is set.
        """
        url = auth_url or self._config.auth_url
        helper = self._auth_helpers_cache.get(url) if url is not None else None
        if helper is None:
            helper = AuthApiHelper(self, url, storage=self._storage)
            self._auth_helpers_cache[url] = helper
        return helper

    def clear_auth_helpers_cache(self):
        """Clears the cache of auth helpers."""
        self._auth_helpers_cache = {}

    def close(self):
        """
        Releases the transport, if owned by the client, and the helpers cache.
        Calling `close()` twice is a no-op.
        """
        if self._closed:
            return
        self.clear_auth_helpers_cache()
        if self._owns_transport:
            logger.debug("Closing the HTTP transport")
            self._transport.close()
        self._closed = True
