"""
Configuration Module.

This module defines the settings used by the
[`WeDeployClient`][wedeploy.comm.WeDeployClient] to reach the data and auth
services.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DATA_URL_ENV_VAR = "WEDEPLOY_DATA_URL"
AUTH_URL_ENV_VAR = "WEDEPLOY_AUTH_URL"
TIMEOUT_ENV_VAR = "WEDEPLOY_TIMEOUT_SECONDS"
MAX_WORKERS_ENV_VAR = "WEDEPLOY_MAX_WORKERS"


@dataclass(frozen=True)
class ClientConfig:
    """
    Settings of a [`WeDeployClient`][wedeploy.comm.WeDeployClient].

    Every field has a default, so `ClientConfig()` is a valid configuration
    for a client that always passes explicit service URLs.
    """

    data_url: Optional[str] = None
    """Default URL of the data service, used by `WeDeployClient.data()`."""

    auth_url: Optional[str] = None
    """Default URL of the auth service, used by `WeDeployClient.auth()`."""

    timeout: float = 5.0
    """HTTP timeout in seconds."""

    max_workers: Optional[int] = None
    """
    Size of the transport dispatch pool. `None` keeps the
    `ThreadPoolExecutor` default.
    """

    follow_redirects: bool = True
    """Whether 3xx responses are followed."""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Builds a configuration from `WEDEPLOY_*` environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = environ if environ is not None else os.environ
        max_workers = env.get(MAX_WORKERS_ENV_VAR)
        try:
            return cls(
                data_url=env.get(DATA_URL_ENV_VAR) or None,
                auth_url=env.get(AUTH_URL_ENV_VAR) or None,
                timeout=float(env.get(TIMEOUT_ENV_VAR, cls.timeout)),
                max_workers=int(max_workers) if max_workers else None,
            )
        except ValueError as e:
            raise ValueError(f"Invalid WeDeploy configuration.\nInner err: '{e}'")
