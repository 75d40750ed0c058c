"""
This module provides the root "Fluent" query builder of the WeDeploy SDK.

A [**`Query`**][wedeploy.query.Query] accumulates filters, a search filter,
aggregations, highlighted fields, sort clauses and pagination bounds, and
serializes all of them into one request body on demand.

**Serialized keys:**

| Key | Content | Set by |
| --- | --- | --- |
| `type` | query type string (`"search"`, `"count"`, ...) | `type()` |
| `filter` | one `and` composite over every top-level filter | `filter()` |
| `search` | the search filter body | `search()` |
| `aggregations` | `{name: aggregation body}` | `aggregate()` |
| `highlight` | list of field names | `highlight()` |
| `sort` | list of `{"field", "direction"}` | `sort()` |
| `limit` / `offset` | integers | `limit()` / `offset()` |

Slots that were never set are left out of the body.
"""

import json
from typing import Any, Dict, List, Optional

from ..enum import SortDirection
from .aggregation import Aggregation
from .filter import UNSET, Filter


class Query:
    """
    The root container of a data request.

    The builder has no phases: every method mutates the instance in place and
    returns it, and `body()` is a pure read that can be repeated. Insertion
    order is preserved everywhere; nothing is sorted or deduplicated.

    Example:
        ```python
        from wedeploy.query import Aggregation, Filter, Query

        body = (
            Query()
            .filter("age", ">", 18)
            .filter(Filter.exists("email"))
            .search("developer")
            .aggregate("cities", Aggregation.terms("city"))
            .highlight("bio")
            .sort("name")
            .sort("age", "desc")
            .limit(10)
            .offset(5)
            .body()
        )
        ```
    """

    def __init__(self):
        self._type: Optional[str] = None
        self._filters: List[Filter] = []
        self._search: Optional[Filter] = None
        self._aggregations: Dict[str, Aggregation] = {}
        self._highlights: List[str] = []
        self._sort: List[Dict[str, str]] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None

    @classmethod
    def builder(cls) -> "Query":
        """Returns a new, empty Query."""
        return cls()

    def filter(
        self,
        field_or_filter: Any,
        operator_or_value: Any = UNSET,
        value: Any = UNSET,
    ) -> "Query":
        """
        Appends a filter. Top-level filters are always combined with a logical
        **AND**.

        Accepted shapes (see [`Filter.of()`][wedeploy.query.Filter.of]):

        * `query.filter(Filter.gt("age", 18))`
        * `query.filter("name", "foo")`: equality.
        * `query.filter("age", ">", 18)`: explicit operator.

        Returns:
            The `Query` instance for method chaining.
        """
        self._filters.append(Filter.of(field_or_filter, operator_or_value, value))
        return self

    def search(
        self,
        filter_or_text_or_field: Any,
        text_or_operator: Any = UNSET,
        value: Any = UNSET,
    ) -> "Query":
        """
        Sets the search filter, replacing any previous one.

        Accepted shapes:

        * `query.search(filter)`: the filter as is.
        * `query.search("text")`: a match over all fields.
        * `query.search("title", "text")`: a match over one field.
        * `query.search("age", ">", 18)`: an explicit operator.

        Returns:
            The `Query` instance for method chaining.
        """
        if value is not UNSET:
            search = Filter.field(filter_or_text_or_field, text_or_operator, value)
        elif text_or_operator is not UNSET:
            search = Filter.match(filter_or_text_or_field, text_or_operator)
        elif isinstance(filter_or_text_or_field, Filter):
            search = filter_or_text_or_field
        else:
            search = Filter.match(filter_or_text_or_field)
        self._search = search
        return self

    def aggregate(
        self,
        name: str,
        aggregation_or_field: Any,
        operator: Optional[str] = None,
    ) -> "Query":
        """
        Adds an aggregation under `name`.

        Args:
            name: The aggregation name. Aggregation names are unique within a
                query: reusing a name replaces the previous aggregation (last
                write wins) while keeping its original position.
            aggregation_or_field: An [`Aggregation`][wedeploy.query.Aggregation],
                or the field of a new plain aggregation.
            operator: The operator of the new aggregation, when a field is given.

        Returns:
            The `Query` instance for method chaining.
        """
        aggregation = aggregation_or_field
        if not isinstance(aggregation, Aggregation):
            aggregation = Aggregation.field(aggregation_or_field, operator)
        self._aggregations[name] = aggregation
        return self

    def highlight(self, field: str) -> "Query":
        """Adds a highlighted field. Duplicates are kept."""
        self._highlights.append(field)
        return self

    def sort(self, field: str, direction: Optional[str] = None) -> "Query":
        """
        Appends a sort clause. `direction` defaults to `"asc"`; sorting twice
        on the same field appends two clauses.
        """
        self._sort.append({"field": field, "direction": direction or str(SortDirection.ASC)})
        return self

    def limit(self, limit: int) -> "Query":
        """Sets the maximum number of returned entries."""
        self._limit = limit
        return self

    def offset(self, offset: int) -> "Query":
        """Sets the index of the first returned entry."""
        self._offset = offset
        return self

    def type(self, type_: str) -> "Query":
        """Sets the query type (e.g. `"count"`). The value is not checked."""
        self._type = type_
        return self

    def body(self) -> Dict[str, Any]:
        """
        Serializes the whole query into the request body.

        Calling this method does not change the query: two calls without
        mutations in between return equal bodies.

        Example Output:
            ```json
            {
                "filter": {"operator": "and", "filters": [{"field": "age", "operator": "gt", "value": 18}]},
                "sort": [{"field": "name", "direction": "asc"}],
                "limit": 10,
                "offset": 5
            }
            ```
        """
        body: Dict[str, Any] = {}
        if self._type is not None:
            body["type"] = self._type
        if self._filters:
            body["filter"] = Filter.compose("and", *self._filters).body()
        if self._search is not None:
            body["search"] = self._search.body()
        if self._aggregations:
            body["aggregations"] = {
                name: aggregation.body()
                for name, aggregation in self._aggregations.items()
            }
        if self._highlights:
            body["highlight"] = list(self._highlights)
        if self._sort:
            body["sort"] = [dict(clause) for clause in self._sort]
        if self._limit is not None:
            body["limit"] = self._limit
        if self._offset is not None:
            body["offset"] = self._offset
        return body

    def to_json(self) -> str:
        """Serializes the body into a JSON string."""
        return json.dumps(self.body())

    def __repr__(self) -> str:
        return f"Query({self.body()!r})"
