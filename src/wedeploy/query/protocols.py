import json
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Embodied(Protocol):
    """
    Structural protocol for every object that can be converted into a plain,
    JSON-compatible request body.

    A class implicitly satisfies this protocol if it provides a `body()`
    method. The builders rely on it whenever an argument may either be a
    builder object or an already plain value (e.g. the location of a
    [`DistanceAggregation`][wedeploy.query.DistanceAggregation]).

    ### Reference Implementations
    * [`Range`][wedeploy.query.Range]
    * [`Aggregation`][wedeploy.query.Aggregation]
    * [`Filter`][wedeploy.query.Filter]
    * [`Query`][wedeploy.query.Query]
    """

    def body(self) -> Any:
        """Returns a snapshot of the current state as a plain structure."""
        ...


def to_body(obj: Any) -> Any:
    """
    Returns `obj.body()` for [`Embodied`][wedeploy.query.protocols.Embodied]
    objects and `obj` itself for anything else.
    """
    if isinstance(obj, Embodied):
        return obj.body()
    return obj


def to_json(obj: Any) -> str:
    """Serializes `obj` (or its body) into a JSON string."""
    return json.dumps(to_body(obj))
