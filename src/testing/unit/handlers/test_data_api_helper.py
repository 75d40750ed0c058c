import json

import pytest

from wedeploy.assertions import ResponseError
from wedeploy.enum import HttpMethod
from wedeploy.query import Aggregation, Filter

DATA_URL = "https://data.example.com"


def _params(request):
    return {name: json.loads(value) for name, value in request.params}


def test_get_sends_the_serialized_query(_client, _transport):
    _transport.responder = lambda request: (200, [{"title": "Alien"}])

    body = (
        _client.data()
        .where("year", ">", 1990)
        .where(Filter.exists("rating"))
        .search("space")
        .highlight("plot")
        .aggregate("genres", Aggregation.terms("genre"))
        .order_by("rating", "desc")
        .limit(10)
        .offset(20)
        .get("movies")
        .result(timeout=1)
    )

    assert body == [{"title": "Alien"}]
    request = _transport.last
    assert request.method == HttpMethod.GET
    assert request.url == f"{DATA_URL}/movies"
    assert _params(request) == {
        "filter": {
            "operator": "and",
            "filters": [
                {"field": "year", "operator": ">", "value": 1990},
                {"field": "rating", "operator": "exists"},
            ],
        },
        "search": {"field": "*", "operator": "match", "value": "space"},
        "aggregations": {"genres": {"field": "genre", "operator": "terms"}},
        "highlight": ["plot"],
        "sort": [{"field": "rating", "direction": "desc"}],
        "limit": 10,
        "offset": 20,
    }


def test_get_without_query_sends_no_params(_client, _transport):
    _client.data().get("movies").result(timeout=1)
    assert _transport.last.params == []


def test_count(_client, _transport):
    _transport.responder = lambda request: (200, 3)
    assert _client.data().where("genre", "sci-fi").count().get("movies").result(timeout=1) == 3
    assert dict(_transport.last.params)["type"] == "count"


def test_get_or_create_query_is_lazy(_client):
    helper = _client.data()
    query = helper.get_or_create_query()
    assert helper.get_or_create_query() is query
    helper.limit(1)
    assert query.body() == {"limit": 1}


def test_create_update_delete(_client, _transport):
    _transport.responder = lambda request: (200, {"id": "1", **(request.body or {})})
    helper = _client.data(DATA_URL).header("X-Trace", "abc").auth("tok")

    assert helper.create("movies", {"title": "Alien"}).result(timeout=1) == {
        "id": "1",
        "title": "Alien",
    }
    assert _transport.last.method == HttpMethod.POST
    assert _transport.last.headers == {"X-Trace": "abc", "Authorization": "Bearer tok"}

    helper.update("movies/1", {"title": "Aliens"}).result(timeout=1)
    assert _transport.last.method == HttpMethod.PUT
    assert _transport.last.url == f"{DATA_URL}/movies/1"

    response = helper.delete("movies/1").result(timeout=1)
    assert _transport.last.method == HttpMethod.DELETE
    assert response.status_code == 200


def test_create_accepts_a_list(_client, _transport):
    _client.data().create("movies", [{"title": "a"}, {"title": "b"}]).result(timeout=1)
    assert _transport.last.body == [{"title": "a"}, {"title": "b"}]


def test_boundary_assertions(_client, _transport):
    helper = _client.data()
    with pytest.raises(ValueError, match="Collection key must be specified"):
        helper.get(None)
    with pytest.raises(TypeError):
        helper.create("movies", "not a document")
    with pytest.raises(TypeError):
        helper.update("movies", None)
    with pytest.raises(ValueError):
        helper.delete(None)
    assert _transport.requests == []


def test_failed_responses_reject_the_future(_client, _transport):
    _transport.responder = lambda request: (404, {"message": "Collection not found"})
    future = _client.data().get("missing")
    with pytest.raises(ResponseError, match="Collection not found"):
        future.result(timeout=1)
