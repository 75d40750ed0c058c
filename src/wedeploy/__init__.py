"""
WeDeploy SDK - Python client for WeDeploy data and auth services.

This module provides the main entry points for interacting with WeDeploy:

- **WeDeployClient**: The primary client, a factory for request builders and helpers.
- **Query builders**: `Query`, `Filter`, `Aggregation`, `Range`, `BucketOrder`
  and the `geo` shapes, serialized to the data service JSON DSL.
- **Helpers**: `DataApiHelper` and `AuthApiHelper`, dispatching requests to the services.

Example:
    >>> from wedeploy import WeDeployClient, Filter
    >>> with WeDeployClient() as client:
    ...     future = (
    ...         client.data("https://data.example.com")
    ...         .where(Filter.gt("year", 1990).or_(Filter.equal("genre", "sci-fi")))
    ...         .get("movies")
    ...     )
"""

# --- Client ---
from .comm import (
    WeDeployClient as WeDeployClient,
    ClientConfig as ClientConfig,
    ClientRequest as ClientRequest,
    ClientResponse as ClientResponse,
    RequestBuilder as RequestBuilder,
    Transport as Transport,
    HttpTransport as HttpTransport,
    TransportError as TransportError,
)

# --- Helpers ---
from .handlers import (
    ApiHelper as ApiHelper,
    DataApiHelper as DataApiHelper,
    AuthApiHelper as AuthApiHelper,
)

# --- Models ---
from .models import Auth as Auth

# --- Query builders ---
from .query import (
    Embodied as Embodied,
    Range as Range,
    BucketOrder as BucketOrder,
    Aggregation as Aggregation,
    DistanceAggregation as DistanceAggregation,
    RangeAggregation as RangeAggregation,
    TermsAggregation as TermsAggregation,
    Filter as Filter,
    Query as Query,
    geo as geo,
)

# --- Errors ---
from .assertions import ResponseError as ResponseError, AuthError as AuthError

# --- Storage ---
from .storage import MemoryStorage as MemoryStorage

# --- Enums ---
from .enum import (
    HttpMethod as HttpMethod,
    QueryType as QueryType,
    SortDirection as SortDirection,
)

from .logging_config import (
    get_logger as get_logger,
    setup_sdk_logging as setup_sdk_logging,
)

__all__ = [
    # Client
    "WeDeployClient",
    "ClientConfig",
    "ClientRequest",
    "ClientResponse",
    "RequestBuilder",
    "Transport",
    "HttpTransport",
    "TransportError",
    # Logging
    "get_logger",
    "setup_sdk_logging",
    # Helpers
    "ApiHelper",
    "DataApiHelper",
    "AuthApiHelper",
    # Models
    "Auth",
    # Query
    "Embodied",
    "Range",
    "BucketOrder",
    "Aggregation",
    "DistanceAggregation",
    "RangeAggregation",
    "TermsAggregation",
    "Filter",
    "Query",
    "geo",
    # Errors
    "ResponseError",
    "AuthError",
    # Storage
    "MemoryStorage",
    # Enums
    "HttpMethod",
    "QueryType",
    "SortDirection",
]


# --- Set up the top-level logger for the SDK ---

from logging import NullHandler

logging_config = get_logger()
logging_config.addHandler(NullHandler())
