import pytest

from wedeploy.comm import ClientConfig, HttpTransport, WeDeployClient
from wedeploy.handlers import AuthApiHelper, DataApiHelper


def test_url_joins_segments(_client):
    assert _client.url("https://x.example.com/", "/a", "b").get_url() == "https://x.example.com/a/b"


def test_data_helpers_are_fresh(_client):
    first = _client.data()
    second = _client.data()
    assert isinstance(first, DataApiHelper)
    assert first is not second
    assert first.get_or_create_query() is not second.get_or_create_query()


def test_auth_helpers_are_cached_per_url(_client):
    helper = _client.auth()
    assert isinstance(helper, AuthApiHelper)
    assert _client.auth() is helper
    assert _client.auth("https://other.example.com") is not helper


def test_missing_service_url(_transport):
    client = WeDeployClient(transport=_transport)
    with pytest.raises(ValueError, match="Data url must be specified"):
        client.data()
    with pytest.raises(ValueError, match="Auth url must be specified"):
        client.auth()


def test_external_transport_is_not_closed(_transport):
    with WeDeployClient(transport=_transport):
        pass
    assert _transport.closed is False


def test_owned_transport_is_closed():
    client = WeDeployClient(ClientConfig(timeout=1.0, max_workers=1))
    assert isinstance(client.transport, HttpTransport)
    with client:
        pass
    # A second close is a no-op
    client.close()


def test_from_env(monkeypatch, _transport):
    monkeypatch.setenv("WEDEPLOY_DATA_URL", "https://env.example.com")
    monkeypatch.delenv("WEDEPLOY_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("WEDEPLOY_MAX_WORKERS", raising=False)
    client = WeDeployClient.from_env(transport=_transport)
    assert client.config.data_url == "https://env.example.com"
