from typing import Any, Dict, Optional


class Range:
    """
    A half-open interval with optional `from` and `to` bounds.

    Ranges are used by [`Filter.range()`][wedeploy.query.Filter.range] and by
    the range-bucketing aggregations
    ([`RangeAggregation`][wedeploy.query.RangeAggregation],
    [`DistanceAggregation`][wedeploy.query.DistanceAggregation]).
    A bound set to `None` means "unbounded on that side" and is left out of
    the serialized body.

    Example:
        ```python
        Range.range(10, 20).body()  # {"from": 10, "to": 20}
        Range.from_(10).body()      # {"from": 10}
        Range().body()              # {}
        ```
    """

    def __init__(
        self,
        from_: Optional[Any] = None,
        to: Optional[Any] = None,
        field: Optional[str] = None,
    ):
        self._from = from_
        self._to = to
        self._field = field

    @classmethod
    def range(cls, from_: Optional[Any] = None, to: Optional[Any] = None) -> "Range":
        """Creates a range with both bounds; either may be `None`."""
        return cls(from_, to)

    @classmethod
    def from_(cls, value: Any) -> "Range":
        """Creates a range bounded only from below."""
        return cls(from_=value)

    @classmethod
    def to(cls, value: Any) -> "Range":
        """Creates a range bounded only from above."""
        return cls(to=value)

    def get_from(self) -> Optional[Any]:
        return self._from

    def get_to(self) -> Optional[Any]:
        return self._to

    def get_field(self) -> Optional[str]:
        return self._field

    def body(self) -> Dict[str, Any]:
        """
        Serializes the range, e.g. `{"from": 1, "to": 5}`.

        Bounds that were never set are omitted, never emitted as `None`.
        """
        body: Dict[str, Any] = {}
        if self._from is not None:
            body["from"] = self._from
        if self._to is not None:
            body["to"] = self._to
        return body

    def __repr__(self) -> str:
        return f"Range(from_={self._from!r}, to={self._to!r})"
