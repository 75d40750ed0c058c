import pytest

from wedeploy.query import Filter, Query, Range, geo


@pytest.mark.parametrize(
    "factory, operator",
    [
        (Filter.equal, "="),
        (Filter.not_equal, "!="),
        (Filter.gt, ">"),
        (Filter.gte, ">="),
        (Filter.lt, "<"),
        (Filter.lte, "<="),
        (Filter.regex, "~"),
    ],
)
def test_comparison_factories(factory, operator):
    assert factory("age", 18).body() == {"field": "age", "operator": operator, "value": 18}


def test_field_operator_is_not_validated():
    assert Filter.field("age", "gt", 18).body() == {
        "field": "age",
        "operator": "gt",
        "value": 18,
    }


def test_value_lists():
    assert Filter.in_("color", "red", "blue").body()["value"] == ["red", "blue"]
    assert Filter.some("tags", "a").body() == {
        "field": "tags",
        "operator": "some",
        "value": ["a"],
    }
    assert Filter.none("tags", "a", "b").get_operator() == "none"


def test_presence_filters_have_no_value():
    assert Filter.exists("email").body() == {"field": "email", "operator": "exists"}
    assert Filter.missing("email").body() == {"field": "email", "operator": "missing"}


def test_explicit_none_value_is_serialized():
    assert Filter.equal("name", None).body() == {
        "field": "name",
        "operator": "=",
        "value": None,
    }


def test_text_filters():
    assert Filter.match("foo").body() == {"field": "*", "operator": "match", "value": "foo"}
    assert Filter.match("title", "foo").body() == {
        "field": "title",
        "operator": "match",
        "value": "foo",
    }
    assert Filter.phrase("title", "foo bar").get_operator() == "phrase"
    assert Filter.prefix("fo").get_field() == "*"
    assert Filter.similar("title", "foo").get_value() == {"query": "foo"}
    assert Filter.fuzzy("foo").get_value() == {"query": "foo"}
    assert Filter.fuzzy("title", "foo", 2).get_value() == {"query": "foo", "fuzziness": 2}


def test_range_filter():
    assert Filter.range("age", 18, 65).get_value() == {"from": 18, "to": 65}
    assert Filter.range("age", 18).get_value() == {"from": 18}
    assert Filter.range("age", Range.to(65)).body() == {
        "field": "age",
        "operator": "range",
        "value": {"to": 65},
    }


def test_geo_filters():
    assert Filter.distance("loc", geo.point(1, 2), "10km").get_value() == {
        "location": [1, 2],
        "max": "10km",
    }
    assert Filter.distance("loc", geo.point(1, 2), Range.range(1, 5)).get_value() == {
        "location": [1, 2],
        "from": 1,
        "to": 5,
    }
    assert Filter.distance("loc", geo.circle("0,0", "2km")).get_value() == {
        "type": "circle",
        "coordinates": "0,0",
        "radius": "2km",
    }
    assert Filter.bounding_box("loc", geo.bounding_box("20,0", [0, 20])).get_value() == [
        "20,0",
        [0, 20],
    ]
    assert Filter.bounding_box("loc", "20,0", "0,20").get_value() == ["20,0", "0,20"]
    assert Filter.polygon("loc", "10,0", [20, 0], geo.point(15, 10)).get_value() == [
        "10,0",
        [20, 0],
        [15, 10],
    ]
    shape = Filter.shape("loc", geo.circle("0,0", "2km"))
    assert shape.get_operator() == "gs"
    assert shape.get_value()["type"] == "geometrycollection"
    assert len(shape.get_value()["geometries"]) == 1


def test_of_resolves_the_three_shapes():
    f = Filter.gt("age", 18)
    assert Filter.of(f) is f
    assert Filter.of("name", "foo").body() == {"field": "name", "operator": "=", "value": "foo"}
    assert Filter.of("age", ">", 18).body() == {"field": "age", "operator": ">", "value": 18}


def test_combinators_return_new_composites():
    a = Filter.gt("age", 18)
    b = Filter.lt("age", 65)

    both = a.and_(b)
    assert both is not a
    assert both.is_composite()
    assert not a.is_composite()
    assert both.body() == {"operator": "and", "filters": [a.body(), b.body()]}

    either = a.or_("name", "foo")
    assert either.body() == {
        "operator": "or",
        "filters": [a.body(), {"field": "name", "operator": "=", "value": "foo"}],
    }

    assert a.not_().body() == {"operator": "not", "filters": [a.body()]}


def test_combinators_never_flatten():
    a, b, c = Filter.exists("a"), Filter.exists("b"), Filter.exists("c")
    body = a.and_(b).and_(c).body()
    assert body["operator"] == "and"
    assert len(body["filters"]) == 2
    assert body["filters"][0] == {"operator": "and", "filters": [a.body(), b.body()]}
    assert body["filters"][1] == c.body()


def test_class_level_combinators():
    a, b, c = Filter.exists("a"), Filter.exists("b"), Filter.exists("c")
    assert Filter.all_of(a, b, c).body() == {
        "operator": "and",
        "filters": [a.body(), b.body(), c.body()],
    }
    assert Filter.any_of(a, b).get_operator() == "or"
    assert Filter.negate("name", "foo").body() == {
        "operator": "not",
        "filters": [{"field": "name", "operator": "=", "value": "foo"}],
    }


def test_body_is_a_snapshot():
    flt = Filter.in_("tag", "a", "b")
    body = flt.body()
    body["value"].append("c")
    assert flt.body()["value"] == ["a", "b"]

    fuzzy = Filter.fuzzy("name", "foo", 0.8)
    fuzzy.body()["value"]["query"] = "bar"
    assert fuzzy.body()["value"]["query"] == "foo"


def test_query_body_does_not_share_filter_values():
    query = Query().filter(Filter.in_("tag", "a", "b"))
    query.body()["filter"]["filters"][0]["value"].append("c")
    assert query.body()["filter"]["filters"][0]["value"] == ["a", "b"]
