from enum import StrEnum


class QueryType(StrEnum):
    """
    Well-known values for the `type` slot of a [`Query`][wedeploy.query.Query].

    The query builder never checks the type against this list: any string is
    forwarded to the data service untouched.
    """

    SEARCH = "search"
    """Returns the matching documents."""

    COUNT = "count"
    """Returns only the number of matching documents."""

    FETCH = "fetch"
    """Returns the documents without search metadata."""
