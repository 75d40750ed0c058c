import pytest

from wedeploy.query import (
    Aggregation,
    BucketOrder,
    DistanceAggregation,
    Range,
    RangeAggregation,
    TermsAggregation,
    geo,
)


@pytest.mark.parametrize(
    "factory, operator",
    [
        (Aggregation.avg, "avg"),
        (Aggregation.cardinality, "cardinality"),
        (Aggregation.count, "count"),
        (Aggregation.extended_stats, "extendedStats"),
        (Aggregation.max, "max"),
        (Aggregation.min, "min"),
        (Aggregation.missing, "missing"),
        (Aggregation.stats, "stats"),
        (Aggregation.sum, "sum"),
    ],
)
def test_field_factories(factory, operator):
    agg = factory("price")
    assert type(agg) is Aggregation
    assert agg.get_field() == "price"
    assert agg.get_operator() == operator
    assert agg.body() == {"field": "price", "operator": operator}


def test_histogram():
    assert Aggregation.histogram("t", 5, "d").get_value() == "5d"
    assert Aggregation.histogram("t", 5, "d").get_operator() == "date_histogram"
    assert Aggregation.histogram("t", 5).get_operator() == "histogram"
    assert Aggregation.histogram("t", 5).get_value() == 5
    assert Aggregation.histogram("t", "year").get_operator() == "date_histogram"
    assert Aggregation.histogram("t", "year").get_value() == "year"


def test_histogram_unit_is_not_validated():
    assert Aggregation.histogram("t", 1.5, "fortnights").get_value() == "1.5fortnights"


def test_histogram_whole_float_interval_has_no_decimal_point():
    assert Aggregation.histogram("t", 5.0, "d").get_value() == "5d"
    assert Aggregation.histogram("t", 5.0).get_value() == 5.0


def test_script():
    agg = Aggregation.script(["a", "b"], "x")
    assert agg.get_field() == "a,b"
    assert agg.get_operator() == "script"
    assert agg.get_value() == "x"
    assert Aggregation.script("a", "x").get_field() == "a"


def test_nested_aggregations_are_not_replaced_by_name():
    agg_a = Aggregation.avg("a")
    agg_b = Aggregation.max("b")
    parent = Aggregation.terms("city")
    assert parent.get_nested_aggregations() is None

    parent.add_nested_aggregation("x", agg_a).add_nested_aggregation("x", agg_b)

    nested = parent.get_nested_aggregations()
    assert len(nested) == 2
    assert nested[0] == {"name": "x", "aggregation": agg_a}
    assert nested[1] == {"name": "x", "aggregation": agg_b}
    assert parent.body()["aggregations"] == [
        {"name": "x", "aggregation": {"field": "a", "operator": "avg"}},
        {"name": "x", "aggregation": {"field": "b", "operator": "max"}},
    ]


def test_terms_bucket_orders_accumulate():
    agg = (
        Aggregation.terms("city")
        .add_bucket_order(BucketOrder.count("asc"))
        .add_bucket_order(BucketOrder.key("desc"))
    )
    assert isinstance(agg, TermsAggregation)
    assert agg.get_params()["order"] == [
        {"asc": True, "key": "_count"},
        {"asc": False, "key": "_key"},
    ]


def test_terms_accepts_a_list_of_orders_and_a_size():
    agg = Aggregation.terms(
        "city", 5, [BucketOrder.count("desc"), BucketOrder("name", "asc")]
    )
    assert agg.body() == {
        "field": "city",
        "operator": "terms",
        "params": {
            "size": 5,
            "order": [{"asc": False, "key": "_count"}, {"asc": True, "key": "name"}],
        },
    }


def test_terms_set_size_overwrites():
    agg = Aggregation.terms("city").set_size(3).set_size(7)
    assert agg.get_params() == {"size": 7}


def test_range_aggregation():
    agg = Aggregation.range("price", Range.to(10), Range.range(10, 20))
    agg.range(20).range(Range.from_(100))
    assert isinstance(agg, RangeAggregation)
    assert agg.get_operator() == "range"
    assert agg.get_value() == [{"to": 10}, {"from": 10, "to": 20}, {"from": 20}, {"from": 100}]


def test_distance_aggregation():
    agg = Aggregation.distance("location", geo.point(10, 20), Range.to(5))
    agg.range(5, 10).unit("km")
    assert isinstance(agg, DistanceAggregation)
    assert agg.body() == {
        "field": "location",
        "operator": "geoDistance",
        "value": {
            "location": [10, 20],
            "ranges": [{"to": 5}, {"from": 5, "to": 10}],
            "unit": "km",
        },
    }


def test_distance_aggregation_without_unit():
    agg = Aggregation.distance("location", "10,20")
    assert agg.get_value() == {"location": "10,20", "ranges": []}


def test_params_and_value_pass_through_unvalidated():
    agg = Aggregation("f", "not-an-operator", {"any": "thing"}).params({"x": 1})
    assert agg.body() == {
        "field": "f",
        "operator": "not-an-operator",
        "value": {"any": "thing"},
        "params": {"x": 1},
    }


def test_body_is_a_snapshot():
    agg = Aggregation.terms("city").set_size(3)
    body = agg.body()
    body["params"]["size"] = 100
    assert agg.get_params() == {"size": 3}

    agg.set_size(4)
    assert body["params"]["size"] == 100
