"""
This module provides the filter builders of the WeDeploy query language.

A [`Filter`][wedeploy.query.Filter] is a boolean predicate over document
fields. Leaf filters compare one field with a value through an operator;
composite filters combine other filters with `and`, `or` or `not`.

**Serialized shapes:**

| Filter | Body |
| --- | --- |
| `Filter.gt("age", 18)` | `{"field": "age", "operator": ">", "value": 18}` |
| `Filter.exists("email")` | `{"field": "email", "operator": "exists"}` |
| `Filter.gt("age", 18).and_(Filter.lt("age", 65))` | `{"operator": "and", "filters": [{...}, {...}]}` |
| `Filter.not_(Filter.equal("name", "foo"))` | `{"operator": "not", "filters": [{...}]}` |

Operators are never validated: `Filter.field("age", "gt", 18)` forwards
`"gt"` to the data service as is.
"""

import copy
from typing import Any, Dict, List, Optional

from .protocols import to_body
from .range import Range

ALL_FIELDS = "*"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()
"""Marks an optional argument that was not passed, as opposed to `None`."""


class Filter:
    """
    A node of a boolean predicate tree.

    Filters are created through the class factories (`Filter.equal`,
    `Filter.match`, `Filter.range`, ...). Combinators (`and_`, `or_`, `not_`)
    never mutate their operands: they return a new composite wrapping the
    operands in the order they were given, and never flatten nested
    composites.

    Example:
        ```python
        from wedeploy.query import Filter, Query

        adults = Filter.gte("age", 18).and_(Filter.exists("email"))
        query = Query().filter(adults.or_(Filter.equal("role", "admin")))
        ```
    """

    def __init__(
        self,
        operator: str,
        field: Optional[str] = None,
        value: Any = UNSET,
        filters: Optional[List["Filter"]] = None,
    ):
        """
        Internal constructor: use the class factories instead.

        Args:
            operator: The filter operator.
            field: The filtered field, for leaf filters.
            value: The compared value, for leaf filters. Left out of the body
                when not passed.
            filters: The operands, for composite filters.
        """
        self._operator = operator
        self._field = field
        self._value = value
        self._filters = filters

    # --- Argument resolution ---

    @classmethod
    def of(
        cls,
        field_or_filter: Any,
        operator_or_value: Any = UNSET,
        value: Any = UNSET,
    ) -> "Filter":
        """
        Resolves the three accepted argument shapes into a Filter:

        * `Filter.of(filter)`: the filter itself.
        * `Filter.of(field, value)`: an equality filter.
        * `Filter.of(field, operator, value)`: a filter with an explicit operator.
        """
        if isinstance(field_or_filter, Filter):
            return field_or_filter
        if value is UNSET:
            return cls.equal(field_or_filter, operator_or_value)
        return cls.field(field_or_filter, operator_or_value, value)

    # --- Leaf factories ---

    @classmethod
    def field(cls, field: str, operator: str, value: Any = UNSET) -> "Filter":
        """Creates a leaf filter with an explicit operator."""
        return cls(operator, field=field, value=value)

    @classmethod
    def equal(cls, field: str, value: Any) -> "Filter":
        return cls.field(field, "=", value)

    @classmethod
    def not_equal(cls, field: str, value: Any) -> "Filter":
        return cls.field(field, "!=", value)

    @classmethod
    def gt(cls, field: str, value: Any) -> "Filter":
        return cls.field(field, ">", value)

    @classmethod
    def gte(cls, field: str, value: Any) -> "Filter":
        return cls.field(field, ">=", value)

    @classmethod
    def lt(cls, field: str, value: Any) -> "Filter":
        return cls.field(field, "<", value)

    @classmethod
    def lte(cls, field: str, value: Any) -> "Filter":
        return cls.field(field, "<=", value)

    @classmethod
    def in_(cls, field: str, *values: Any) -> "Filter":
        """Matches documents whose field equals one of `values`."""
        return cls.field(field, "in", list(values))

    @classmethod
    def some(cls, field: str, *values: Any) -> "Filter":
        """Matches documents whose (array) field contains at least one of `values`."""
        return cls.field(field, "some", list(values))

    @classmethod
    def none(cls, field: str, *values: Any) -> "Filter":
        """Matches documents whose field contains none of `values`."""
        return cls.field(field, "none", list(values))

    @classmethod
    def exists(cls, field: str) -> "Filter":
        return cls.field(field, "exists")

    @classmethod
    def missing(cls, field: str) -> "Filter":
        return cls.field(field, "missing")

    @classmethod
    def regex(cls, field: str, value: str) -> "Filter":
        return cls.field(field, "~", value)

    @classmethod
    def match(cls, field_or_query: str, query: Any = UNSET) -> "Filter":
        """
        Creates a full-text `match` filter.

        With a single argument, the text is matched against every field
        (`*`): `Filter.match("foo")`. Otherwise the first argument names the
        field: `Filter.match("title", "foo")`.
        """
        return cls._text_filter("match", field_or_query, query)

    @classmethod
    def phrase(cls, field_or_query: str, query: Any = UNSET) -> "Filter":
        return cls._text_filter("phrase", field_or_query, query)

    @classmethod
    def prefix(cls, field_or_query: str, query: Any = UNSET) -> "Filter":
        return cls._text_filter("prefix", field_or_query, query)

    @classmethod
    def similar(cls, field_or_query: str, query: Any = UNSET) -> "Filter":
        """Creates a `similar` (more-like-this) filter; value is `{"query": ...}`."""
        field, text = cls._resolve_text_args(field_or_query, query)
        return cls.field(field, "similar", {"query": text})

    @classmethod
    def fuzzy(
        cls, field_or_query: str, query: Any = UNSET, fuzziness: Optional[Any] = None
    ) -> "Filter":
        """
        Creates a `fuzzy` filter; value is `{"query": ..., "fuzziness": ...}`,
        where `fuzziness` only appears when given.
        """
        field, text = cls._resolve_text_args(field_or_query, query)
        value: Dict[str, Any] = {"query": text}
        if fuzziness is not None:
            value["fuzziness"] = fuzziness
        return cls.field(field, "fuzzy", value)

    @classmethod
    def range(cls, field: str, range_or_min: Any, max: Any = UNSET) -> "Filter":
        """
        Creates a `range` filter.

        Args:
            field: The filtered field.
            range_or_min: A [`Range`][wedeploy.query.Range], or its lower bound.
            max: The upper bound, used only when `range_or_min` is not a Range.
        """
        if isinstance(range_or_min, Range):
            range_ = range_or_min
        else:
            range_ = Range.range(range_or_min, None if max is UNSET else max)
        return cls.field(field, "range", range_.body())

    @classmethod
    def distance(
        cls, field: str, location_or_circle: Any, range_or_distance: Optional[Any] = None
    ) -> "Filter":
        """
        Creates a geo distance (`gd`) filter.

        Args:
            field: The geo field.
            location_or_circle: A [`Circle`][wedeploy.query.geo.Circle], or the
                center location when `range_or_distance` is given.
            range_or_distance: A [`Range`][wedeploy.query.Range] of distances,
                or a maximum distance (e.g. `"10km"`).
        """
        value: Dict[str, Any]
        if range_or_distance is None:
            value = to_body(location_or_circle)
        elif isinstance(range_or_distance, Range):
            value = {"location": to_body(location_or_circle)}
            value.update(range_or_distance.body())
        else:
            value = {"location": to_body(location_or_circle), "max": range_or_distance}
        return cls.field(field, "gd", value)

    @classmethod
    def bounding_box(
        cls, field: str, box_or_upper_left: Any, lower_right: Optional[Any] = None
    ) -> "Filter":
        """Creates a geo bounding box (`gp`) filter."""
        if lower_right is None:
            value = to_body(box_or_upper_left)
            if isinstance(value, dict) and "coordinates" in value:
                value = value["coordinates"]
        else:
            value = [to_body(box_or_upper_left), to_body(lower_right)]
        return cls.field(field, "gp", value)

    @classmethod
    def polygon(cls, field: str, *points: Any) -> "Filter":
        """Creates a geo polygon (`gp`) filter from its vertices."""
        return cls.field(field, "gp", [to_body(p) for p in points])

    @classmethod
    def shape(cls, field: str, *shapes: Any) -> "Filter":
        """Creates a geo shape (`gs`) filter over a collection of shapes."""
        return cls.field(
            field,
            "gs",
            {"type": "geometrycollection", "geometries": [to_body(s) for s in shapes]},
        )

    # --- Composites ---

    @classmethod
    def compose(cls, operator: str, *filters: "Filter") -> "Filter":
        """Wraps `filters`, in order, into a composite with the given operator."""
        return cls(operator, filters=list(filters))

    def and_(
        self,
        field_or_filter: Any,
        operator_or_value: Any = UNSET,
        value: Any = UNSET,
    ) -> "Filter":
        """
        Returns `self AND other`, where `other` is resolved by
        [`Filter.of()`][wedeploy.query.Filter.of].
        """
        return Filter.compose(
            "and", self, Filter.of(field_or_filter, operator_or_value, value)
        )

    def or_(
        self,
        field_or_filter: Any,
        operator_or_value: Any = UNSET,
        value: Any = UNSET,
    ) -> "Filter":
        """Returns `self OR other`; see `and_`."""
        return Filter.compose(
            "or", self, Filter.of(field_or_filter, operator_or_value, value)
        )

    def not_(self) -> "Filter":
        """Returns the negation of this filter."""
        return Filter.compose("not", self)

    @classmethod
    def all_of(cls, *filters: "Filter") -> "Filter":
        """Class-level `and`: `Filter.all_of(a, b, c)`."""
        return cls.compose("and", *filters)

    @classmethod
    def any_of(cls, *filters: "Filter") -> "Filter":
        """Class-level `or`: `Filter.any_of(a, b, c)`."""
        return cls.compose("or", *filters)

    @classmethod
    def negate(
        cls,
        field_or_filter: Any,
        operator_or_value: Any = UNSET,
        value: Any = UNSET,
    ) -> "Filter":
        """Class-level `not`: `Filter.negate(filter)` or `Filter.negate("name", "foo")`."""
        return cls.of(field_or_filter, operator_or_value, value).not_()

    # --- Accessors ---

    def get_operator(self) -> str:
        return self._operator

    def get_field(self) -> Optional[str]:
        return self._field

    def get_value(self) -> Any:
        return None if self._value is UNSET else self._value

    def get_filters(self) -> Optional[List["Filter"]]:
        return self._filters

    def is_composite(self) -> bool:
        return self._filters is not None

    def body(self) -> Dict[str, Any]:
        """Serializes the filter tree; see the module documentation for the shapes."""
        if self._filters is not None:
            return {
                "operator": self._operator,
                "filters": [f.body() for f in self._filters],
            }

        body: Dict[str, Any] = {}
        if self._field is not None:
            body["field"] = self._field
        body["operator"] = self._operator
        if self._value is not UNSET:
            body["value"] = copy.deepcopy(to_body(self._value))
        return body

    def __repr__(self) -> str:
        if self._filters is not None:
            return f"Filter({self._operator!r}, filters={self._filters!r})"
        return f"Filter({self._field!r}, {self._operator!r}, {self.get_value()!r})"

    # --- Helpers ---

    @staticmethod
    def _resolve_text_args(field_or_query: str, query: Any):
        if query is UNSET:
            return ALL_FIELDS, field_or_query
        return field_or_query, query

    @classmethod
    def _text_filter(cls, operator: str, field_or_query: str, query: Any) -> "Filter":
        field, text = cls._resolve_text_args(field_or_query, query)
        return cls.field(field, operator, text)
