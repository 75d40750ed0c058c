from wedeploy.query import Embodied, geo


def test_point():
    assert geo.point(10, 20).body() == [10, 20]


def test_shapes():
    assert geo.line(geo.point(0, 0), "1,1").body() == {
        "type": "linestring",
        "coordinates": [[0, 0], "1,1"],
    }
    assert geo.circle(geo.point(0, 0), "2km").body() == {
        "type": "circle",
        "coordinates": [0, 0],
        "radius": "2km",
    }
    box = geo.bounding_box(geo.point(20, 0), geo.point(0, 20))
    assert box.get_points() == [[20, 0], [0, 20]]
    assert box.body() == {"type": "envelope", "coordinates": [[20, 0], [0, 20]]}


def test_polygon_with_hole():
    polygon = geo.polygon("10,0", "20,0", "15,10").hole("14,1", "16,1", "15,2")
    assert polygon.body() == {
        "type": "polygon",
        "coordinates": [["10,0", "20,0", "15,10"], ["14,1", "16,1", "15,2"]],
    }


def test_shapes_are_embodied():
    assert isinstance(geo.point(0, 0), Embodied)
    assert isinstance(geo.polygon(), Embodied)
