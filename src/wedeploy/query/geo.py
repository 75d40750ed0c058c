"""
Geo shapes used by geo filters and distance aggregations.

Every shape satisfies the [`Embodied`][wedeploy.query.protocols.Embodied]
protocol, so it can be passed wherever the builders accept a location.
Coordinates are forwarded as given: nothing checks latitude or longitude
ranges.
"""

from typing import Any, Dict, List

from .protocols import to_body


class Point:
    """A `[lat, lon]` pair."""

    def __init__(self, lat: float, lon: float):
        self.lat = lat
        self.lon = lon

    def body(self) -> List[float]:
        return [self.lat, self.lon]


class Line:
    def __init__(self, *points: Any):
        self._points = [to_body(p) for p in points]

    def body(self) -> Dict[str, Any]:
        return {"type": "linestring", "coordinates": list(self._points)}


class BoundingBox:
    """A box described by its upper-left and lower-right corners."""

    def __init__(self, upper_left: Any, lower_right: Any):
        self._upper_left = to_body(upper_left)
        self._lower_right = to_body(lower_right)

    def get_upper_left(self) -> Any:
        return self._upper_left

    def get_lower_right(self) -> Any:
        return self._lower_right

    def get_points(self) -> List[Any]:
        return [self._upper_left, self._lower_right]

    def body(self) -> Dict[str, Any]:
        return {"type": "envelope", "coordinates": self.get_points()}


class Circle:
    def __init__(self, center: Any, radius: Any):
        self._center = to_body(center)
        self._radius = radius

    def get_center(self) -> Any:
        return self._center

    def get_radius(self) -> Any:
        return self._radius

    def body(self) -> Dict[str, Any]:
        return {
            "type": "circle",
            "coordinates": self._center,
            "radius": self._radius,
        }


class Polygon:
    """A polygon with an outer ring and optional holes."""

    def __init__(self, *points: Any):
        self._rings: List[List[Any]] = [[to_body(p) for p in points]]

    def hole(self, *points: Any) -> "Polygon":
        """Appends an inner ring to the polygon."""
        self._rings.append([to_body(p) for p in points])
        return self

    def body(self) -> Dict[str, Any]:
        return {"type": "polygon", "coordinates": [list(r) for r in self._rings]}


def point(lat: float, lon: float) -> Point:
    return Point(lat, lon)


def line(*points: Any) -> Line:
    return Line(*points)


def bounding_box(upper_left: Any, lower_right: Any) -> BoundingBox:
    return BoundingBox(upper_left, lower_right)


def circle(center: Any, radius: Any) -> Circle:
    return Circle(center, radius)


def polygon(*points: Any) -> Polygon:
    return Polygon(*points)
