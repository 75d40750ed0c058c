from typing import Any


class BucketOrder:
    """
    Sort criterion for the buckets returned by a
    [`TermsAggregation`][wedeploy.query.TermsAggregation].

    The key is either a caller supplied field name or one of the reserved
    bucket metadata keys `_count` and `_key`.

    Note:
        The sort order is stored exactly as given. When the order is attached
        to an aggregation, only the exact string `"asc"` is read as
        ascending: `"ASC"` or `"ascending"` sort descending.
    """

    COUNT_KEY = "_count"
    KEY_KEY = "_key"

    def __init__(self, key: str, sort_order: Any):
        """
        Args:
            key: The bucket property to sort on.
            sort_order: The sort order, normally `"asc"` or `"desc"`.
        """
        self._key = key
        self._sort_order = sort_order

    @classmethod
    def count(cls, sort_order: Any) -> "BucketOrder":
        """Orders buckets by their document count."""
        return cls(cls.COUNT_KEY, sort_order)

    @classmethod
    def key(cls, sort_order: Any) -> "BucketOrder":
        """Orders buckets by their key."""
        return cls(cls.KEY_KEY, sort_order)

    def get_key(self) -> str:
        return self._key

    def get_sort_order(self) -> Any:
        return self._sort_order

    def __repr__(self) -> str:
        return f"BucketOrder(key={self._key!r}, sort_order={self._sort_order!r})"
