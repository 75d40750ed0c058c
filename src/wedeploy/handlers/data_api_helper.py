"""
Data service helper.

The [`DataApiHelper`][wedeploy.handlers.DataApiHelper] is a thin fluent proxy:
every builder method mutates one [`Query`][wedeploy.query.Query], and the
dispatch methods (`get`, `create`, `update`, `delete`) issue exactly one
transport call each.
"""

from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Optional

from ..assertions import assert_not_null, assert_object, assert_response_succeeded
from ..comm.futures import then
from ..enum import QueryType
from ..logging_config import get_logger
from ..query import UNSET, Query
from .api_helper import ApiHelper

if TYPE_CHECKING:
    from ..comm.request_builder import RequestBuilder
    from ..comm.wedeploy_client import WeDeployClient

# Set the hierarchical logger
logger = get_logger(__name__)


def _response_body(response):
    return response.body


class DataApiHelper(ApiHelper):
    """
    Builds and sends requests to the data service.

    Example:
        ```python
        from wedeploy import WeDeployClient

        with WeDeployClient() as client:
            movies = (
                client.data("https://data.example.com")
                .where("year", ">", 1990)
                .search("space")
                .order_by("rating", "desc")
                .limit(10)
                .get("movies")
                .result()
            )
        ```
    """

    def __init__(self, client: "WeDeployClient", data_url: str):
        super().__init__(client)
        assert_not_null(data_url, "Data url must be specified")
        self._data_url = data_url
        self._query: Optional[Query] = None

    def get_or_create_query(self) -> Query:
        """Returns the query of this request, creating it on first use."""
        if self._query is None:
            self._query = Query()
        return self._query

    # --- Query proxies ---

    def where(
        self,
        field_or_filter: Any,
        operator_or_value: Any = UNSET,
        value: Any = UNSET,
    ) -> "DataApiHelper":
        """Adds a filter; see [`Query.filter()`][wedeploy.query.Query.filter]."""
        self.get_or_create_query().filter(field_or_filter, operator_or_value, value)
        return self

    def search(
        self,
        filter_or_text_or_field: Any,
        text_or_operator: Any = UNSET,
        value: Any = UNSET,
    ) -> "DataApiHelper":
        """Sets the search filter; see [`Query.search()`][wedeploy.query.Query.search]."""
        self.get_or_create_query().search(filter_or_text_or_field, text_or_operator, value)
        return self

    def highlight(self, field: str) -> "DataApiHelper":
        self.get_or_create_query().highlight(field)
        return self

    def aggregate(
        self, name: str, aggregation_or_field: Any, operator: Optional[str] = None
    ) -> "DataApiHelper":
        self.get_or_create_query().aggregate(name, aggregation_or_field, operator)
        return self

    def limit(self, limit: int) -> "DataApiHelper":
        self.get_or_create_query().limit(limit)
        return self

    def offset(self, offset: int) -> "DataApiHelper":
        self.get_or_create_query().offset(offset)
        return self

    def order_by(self, field: str, direction: Optional[str] = None) -> "DataApiHelper":
        """Adds a sort clause; `direction` defaults to `"asc"`."""
        self.get_or_create_query().sort(field, direction)
        return self

    def count(self) -> "DataApiHelper":
        """Turns the request into a count query."""
        self.get_or_create_query().type(QueryType.COUNT)
        return self

    # --- Dispatch ---

    def get(self, collection: str) -> Future:
        """
        Fetches the documents of `collection` matching the current query.

        Returns:
            A future resolving with the response body.

        Raises:
            ValueError: If `collection` is None.
        """
        assert_not_null(collection, "Collection key must be specified")
        logger.debug(f"Fetching collection '{collection}'")
        future = self._build_url(collection).get(self._query)
        return then(then(future, assert_response_succeeded), _response_body)

    def create(self, collection: str, data: Any) -> Future:
        """
        Inserts `data` (one document, or a list of documents) in `collection`.

        Returns:
            A future resolving with the response body.
        """
        assert_not_null(collection, "Collection key must be specified")
        assert_object(data, "Data can't be empty")
        future = self._build_url(collection).post(data)
        return then(then(future, assert_response_succeeded), _response_body)

    def update(self, collection: str, data: Any) -> Future:
        """
        Replaces the content of `collection` (or of a document path) with `data`.

        Returns:
            A future resolving with the response body.
        """
        assert_not_null(collection, "Collection key must be specified")
        assert_object(data, "Data must be specified")
        future = self._build_url(collection).put(data)
        return then(then(future, assert_response_succeeded), _response_body)

    def delete(self, collection: str) -> Future:
        """
        Deletes `collection` (or a document path).

        Returns:
            A future resolving with the raw [`ClientResponse`][wedeploy.comm.ClientResponse].
        """
        assert_not_null(collection, "Collection key must be specified")
        return self._build_url(collection).delete()

    def _build_url(self, collection: str) -> "RequestBuilder":
        request = self._client.url(self._data_url).path(collection).headers(self._headers)
        if self._helper_auth_scope is not None:
            request.auth(self._helper_auth_scope)
        return request
