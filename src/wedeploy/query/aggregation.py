"""
This module provides the aggregation builders of the WeDeploy query language.

An aggregation is a server-side summarization (average, histogram, terms
bucketing, ...) computed over one field of the matched documents. Every
aggregation is identified by its **operator** tag; the bucketing variants
only differ by the shape of their payload:

* [**`Aggregation`**][wedeploy.query.Aggregation]: a plain `(field, operator)` pair, optionally with a value and parameters.
* [**`TermsAggregation`**][wedeploy.query.TermsAggregation]: `terms` operator, bucket size and ordering stored in `params`.
* [**`RangeAggregation`**][wedeploy.query.RangeAggregation]: `range` operator, value is an ordered list of range bodies.
* [**`DistanceAggregation`**][wedeploy.query.DistanceAggregation]: `geoDistance` operator, value is `{location, ranges, unit?}`.

Serialization is implemented once, in `Aggregation.body()`: the variants only
add the mutators that shape their payload.

None of the builders validate their input: unknown operators or malformed
values are forwarded to the data service, which is in charge of rejecting
them.
"""

import copy
from typing import Any, Dict, List, Optional, Sequence, Union

from .bucket_order import BucketOrder
from .protocols import to_body
from .range import Range


class Aggregation:
    """
    Describes one aggregation operation over a field.

    Example:
        ```python
        from wedeploy.query import Aggregation, Query

        cities = (
            Aggregation.terms("city")
            .add_nested_aggregation("avg_temp", Aggregation.avg("temp"))
            .add_nested_aggregation("max_temp", Aggregation.max("temp"))
            .add_nested_aggregation(
                "diff_temp",
                Aggregation.script(
                    ["max_temp", "avg_temp"], "(params.max_temp - params.avg_temp)"
                ),
            )
        )
        body = Query().aggregate("cities", cities).body()
        ```
    """

    def __init__(
        self,
        field: str,
        operator: str,
        value: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            field: The aggregation field.
            operator: The aggregation operator (e.g. `"avg"`, `"terms"`).
            value: Optional operator-specific value.
            params: Optional operator-specific parameters.
        """
        self._field = field
        self._operator = operator
        self._value = value
        self._params = params
        self._nested_aggregations: Optional[List[Dict[str, Any]]] = None

    # --- Factories ---

    @classmethod
    def field(cls, field: str, operator: str) -> "Aggregation":
        """Creates a plain aggregation for `field` with the given operator."""
        return Aggregation(field, operator)

    @classmethod
    def avg(cls, field: str) -> "Aggregation":
        return cls.field(field, "avg")

    @classmethod
    def cardinality(cls, field: str) -> "Aggregation":
        return cls.field(field, "cardinality")

    @classmethod
    def count(cls, field: str) -> "Aggregation":
        return cls.field(field, "count")

    @classmethod
    def extended_stats(cls, field: str) -> "Aggregation":
        return cls.field(field, "extendedStats")

    @classmethod
    def max(cls, field: str) -> "Aggregation":
        return cls.field(field, "max")

    @classmethod
    def min(cls, field: str) -> "Aggregation":
        return cls.field(field, "min")

    @classmethod
    def missing(cls, field: str) -> "Aggregation":
        return cls.field(field, "missing")

    @classmethod
    def stats(cls, field: str) -> "Aggregation":
        return cls.field(field, "stats")

    @classmethod
    def sum(cls, field: str) -> "Aggregation":
        return cls.field(field, "sum")

    @classmethod
    def histogram(
        cls, field: str, interval: Union[int, float, str], unit: Optional[str] = None
    ) -> "Aggregation":
        """
        Creates a `histogram` or `date_histogram` aggregation.

        * A numeric `interval` without `unit` performs a `histogram`
          aggregation: `Aggregation.histogram("time", 100)`.
        * A string `interval` performs a `date_histogram` aggregation over one
          calendar unit (`year`, `quarter`, `month`, `week`, `day`, `hour`,
          `minute`, `second`): `Aggregation.histogram("time", "year")`.
        * A `unit` performs a `date_histogram` whose value is the interval
          immediately followed by the unit (`d`, `h`, `m`, `s`, `ms`,
          `micros`, `nanos`): `Aggregation.histogram("time", 5, "d")` has
          value `"5d"`.

        Args:
            field: The aggregation field.
            interval: The bucket interval.
            unit: Optional time unit appended to the interval.
        """
        operator = "histogram"
        value: Any = interval

        if unit is not None:
            operator = "date_histogram"
            if isinstance(interval, float) and interval.is_integer():
                interval = int(interval)
            value = f"{interval}{unit}"
        elif isinstance(interval, str):
            operator = "date_histogram"
        return Aggregation(field, operator, value)

    @classmethod
    def script(cls, field: Union[str, Sequence[str]], script: str) -> "Aggregation":
        """
        Creates a `script` aggregation.

        Args:
            field: A field name, or a list of field names (typically sibling
                aggregation names) joined with `,`.
            script: The script source.
        """
        if isinstance(field, (list, tuple)):
            field = ",".join(field)
        return Aggregation(field, "script", script)

    @classmethod
    def terms(
        cls,
        field: str,
        size: Optional[int] = None,
        bucket_order: Optional[Union[BucketOrder, Sequence[BucketOrder]]] = None,
    ) -> "TermsAggregation":
        return TermsAggregation(field, size, bucket_order)

    @classmethod
    def range(cls, field: str, *ranges: Range) -> "RangeAggregation":
        return RangeAggregation(field, *ranges)

    @classmethod
    def distance(cls, field: str, location: Any, *ranges: Range) -> "DistanceAggregation":
        return DistanceAggregation(field, location, *ranges)

    # --- Accessors ---

    def get_field(self) -> str:
        return self._field

    def get_operator(self) -> str:
        return self._operator

    def get_value(self) -> Optional[Any]:
        return self._value

    def get_params(self) -> Optional[Dict[str, Any]]:
        return self._params

    def get_nested_aggregations(self) -> Optional[List[Dict[str, Any]]]:
        """
        Returns the nested aggregations as an ordered list of
        `{"name": ..., "aggregation": ...}` entries, or `None` if none was
        added yet.
        """
        return self._nested_aggregations

    # --- Mutators ---

    def params(self, params: Optional[Dict[str, Any]]) -> "Aggregation":
        """Replaces the aggregation parameters."""
        self._params = params
        return self

    def add_nested_aggregation(self, name: str, aggregation: "Aggregation") -> "Aggregation":
        """
        Nests `aggregation` under this one.

        Entries are appended: adding two aggregations under the same name
        keeps both of them.
        """
        if self._nested_aggregations is None:
            self._nested_aggregations = []
        self._nested_aggregations.append({"name": name, "aggregation": aggregation})
        return self

    def body(self) -> Dict[str, Any]:
        """
        Serializes the aggregation.

        Example Output:
            `{"field": "city", "operator": "terms", "params": {"size": 5},
            "aggregations": [{"name": "avg_temp", "aggregation": {...}}]}`
        """
        body: Dict[str, Any] = {"field": self._field, "operator": self._operator}
        if self._value is not None:
            body["value"] = copy.deepcopy(to_body(self._value))
        if self._params is not None:
            body["params"] = copy.deepcopy(self._params)
        if self._nested_aggregations:
            body["aggregations"] = [
                {"name": entry["name"], "aggregation": to_body(entry["aggregation"])}
                for entry in self._nested_aggregations
            ]
        return body

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(field={self._field!r}, operator={self._operator!r})"
        )


def _as_range(range_or_from: Any, to: Optional[Any]) -> Range:
    if isinstance(range_or_from, Range):
        return range_or_from
    return Range.range(range_or_from, to)


class DistanceAggregation(Aggregation):
    """
    A `geoDistance` aggregation: buckets documents by their distance from a
    location.

    The value has the shape `{"location": ..., "ranges": [...], "unit": ...}`,
    where `unit` only appears once set.
    """

    def __init__(self, field: str, location: Any, *ranges: Range):
        super().__init__(
            field,
            "geoDistance",
            {"location": to_body(location), "ranges": [r.body() for r in ranges]},
        )

    def range(self, range_or_from: Any, to: Optional[Any] = None) -> "DistanceAggregation":
        """
        Appends a distance range.

        Args:
            range_or_from: A [`Range`][wedeploy.query.Range], or the lower
                bound of a new one.
            to: The upper bound, used only when `range_or_from` is not a Range.
        """
        self._value["ranges"].append(_as_range(range_or_from, to).body())
        return self

    def unit(self, unit: str) -> "DistanceAggregation":
        """Sets the distance unit (e.g. `"km"`)."""
        self._value["unit"] = unit
        return self


class RangeAggregation(Aggregation):
    """A `range` aggregation: its value is the ordered list of range bodies."""

    def __init__(self, field: str, *ranges: Range):
        super().__init__(field, "range", [r.body() for r in ranges])

    def range(self, range_or_from: Any, to: Optional[Any] = None) -> "RangeAggregation":
        """Appends a range; see `DistanceAggregation.range`."""
        self._value.append(_as_range(range_or_from, to).body())
        return self


class TermsAggregation(Aggregation):
    """
    A `terms` aggregation: one bucket per distinct value of the field.

    The bucket count and the bucket ordering are stored in the aggregation
    params, under `size` and `order`.

    Example:
        ```python
        agg = (
            Aggregation.terms("city")
            .add_bucket_order(BucketOrder.count("asc"))
            .add_bucket_order(BucketOrder.key("desc"))
        )
        agg.get_params()
        # {"order": [{"asc": True, "key": "_count"}, {"asc": False, "key": "_key"}]}
        ```
    """

    def __init__(
        self,
        field: str,
        size: Optional[int] = None,
        bucket_order: Optional[Union[BucketOrder, Sequence[BucketOrder]]] = None,
    ):
        super().__init__(field, "terms")

        if size is not None:
            self.set_size(size)

        if bucket_order is not None:
            self.add_bucket_order(bucket_order)

    def add_bucket_order(
        self, bucket_order: Union[BucketOrder, Sequence[BucketOrder]]
    ) -> "TermsAggregation":
        """
        Appends one or more bucket orders to `params["order"]`.

        Each order is stored as `{"asc": bool, "key": str}`; `asc` is `True`
        only when the sort order is exactly the string `"asc"`. Previous
        orders are kept.
        """
        if isinstance(bucket_order, BucketOrder):
            bucket_order = [bucket_order]

        self._params = self._params or {}
        if self._params.get("order") is None:
            self._params["order"] = []

        for order in bucket_order:
            self._params["order"].append(
                {"asc": bool(order.get_sort_order() == "asc"), "key": order.get_key()}
            )
        return self

    def set_size(self, size: int) -> "TermsAggregation":
        """Sets the maximum number of buckets returned."""
        self._params = self._params or {}
        self._params["size"] = size
        return self
