import pytest

from wedeploy.assertions import ResponseError
from wedeploy.enum import HttpMethod
from wedeploy.models import Auth

AUTH_URL = "https://auth.example.com"


def test_token_or_email_resolution():
    auth = Auth("my-token")
    assert auth.has_token() and auth.get_token() == "my-token"
    assert not auth.has_email()

    auth = Auth("me@example.com", "secret")
    assert auth.get_email() == "me@example.com"
    assert auth.get_password() == "secret"
    assert not auth.has_token()

    auth = Auth()
    assert not auth.has_token() and not auth.has_email() and not auth.has_password()


def test_create():
    auth = Auth("my-token")
    assert Auth.create(auth) is auth
    assert Auth.create("tok").get_token() == "tok"
    assert Auth.create("me@example.com", "pw").get_password() == "pw"
    assert Auth.create({"token": "t", "id": "1"}).get_id() == "1"
    assert not Auth.create().has_token()


def test_create_from_data_maps_camel_case_keys():
    data = {
        "id": "42",
        "email": "me@example.com",
        "name": "Me",
        "createdAt": 1500000000,
        "photoUrl": "https://img.example.com/me.png",
        "supportedScopes": ["admin", "editor"],
        "nickname": "mimi",
    }
    auth = Auth.create_from_data(data, AUTH_URL)

    assert auth.get_id() == "42"
    assert auth.get_name() == "Me"
    assert auth.get_created_at() == 1500000000
    assert auth.get_photo_url() == "https://img.example.com/me.png"
    assert auth.get_supported_scopes() == ["admin", "editor"]
    assert auth.nickname == "mimi"
    assert auth.has_data() and auth.get_data() == data
    assert auth.get_data() is not data


def test_has_supported_scopes():
    auth = Auth.create_from_data({"supportedScopes": ["admin", "editor"]})
    assert auth.has_supported_scopes("admin")
    assert auth.has_supported_scopes(["admin", "editor"])
    assert not auth.has_supported_scopes(["admin", "owner"])
    assert not Auth().has_supported_scopes("admin")


def test_update_and_delete_user(_client, _transport):
    auth = Auth.create_from_data({"id": "42", "token": "tok"})
    auth.set_client(_client, AUTH_URL)

    response = auth.update_user({"name": "New"}).result(timeout=1)
    assert response.status_code == 200
    request = _transport.last
    assert request.method == HttpMethod.PATCH
    assert request.url == f"{AUTH_URL}/users/42"
    assert request.body == {"name": "New"}
    assert request.headers["Authorization"] == "Bearer tok"

    auth.delete_user().result(timeout=1)
    assert _transport.last.method == HttpMethod.DELETE
    assert _transport.last.url == f"{AUTH_URL}/users/42"


def test_failed_update_rejects_the_future(_client, _transport):
    _transport.responder = lambda request: (403, {"message": "Forbidden"})
    auth = Auth.create_from_data({"id": "42", "token": "tok"})
    auth.set_client(_client, AUTH_URL)

    with pytest.raises(ResponseError, match="Forbidden") as excinfo:
        auth.update_user({"name": "New"}).result(timeout=1)
    assert excinfo.value.response.status_code == 403


def test_remote_operations_need_a_client():
    with pytest.raises(ValueError):
        Auth.create_from_data({"id": "42"}).delete_user()
    with pytest.raises(ValueError, match="without id"):
        Auth().delete_user()
    with pytest.raises(TypeError):
        Auth("tok").update_user("not a mapping")
