"""Tests for the product service's call into the user service."""
import pytest
import requests

from common.errors import UpstreamUnavailable
from product_service import user_client as user_client_module
from product_service.app import create_app
from product_service.config import Settings
from product_service.user_client import UserClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_error=False):
        self.status_code = status_code
        self._payload = payload
        self._body_error = body_error

    def json(self):
        if self._body_error:
            raise ValueError("not json")
        return self._payload


def patch_get(monkeypatch, handler):
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        return handler(url)

    monkeypatch.setattr(user_client_module.requests, "get", fake_get)
    return calls


def test_get_user_ok(monkeypatch):
    calls = patch_get(monkeypatch, lambda url: FakeResponse(200, {"name": "Alice", "email": "a@x.com", "age": 30}))

    client = UserClient("http://users.local/users/", timeout=2.5)
    assert client.get_user("a@x.com") == {"name": "Alice", "email": "a@x.com", "age": 30}
    assert calls == [("http://users.local/users/a@x.com", 2.5)]


def test_email_is_escaped_as_one_path_segment():
    client = UserClient("http://users.local/users/")
    assert client.user_url("a/b?c#d@x.com") == "http://users.local/users/a%2Fb%3Fc%23d@x.com"


@pytest.mark.parametrize("response", [
    FakeResponse(404, {"error": "user not found"}),
    FakeResponse(503, None),
    FakeResponse(200, body_error=True),
    FakeResponse(200, ["not", "an", "object"]),
])
def test_bad_upstream_answers(monkeypatch, response):
    patch_get(monkeypatch, lambda url: response)

    with pytest.raises(UpstreamUnavailable, match="failed to get user data"):
        UserClient("http://users.local/users/").get_user("a@x.com")


@pytest.mark.parametrize("exc", [
    requests.exceptions.ConnectionError("refused"),
    requests.exceptions.Timeout("slow"),
])
def test_network_failures(monkeypatch, exc):
    def boom(url):
        raise exc

    patch_get(monkeypatch, boom)
    with pytest.raises(UpstreamUnavailable):
        UserClient("http://users.local/users/").get_user("a@x.com")


def test_missing_base_url_fails_without_calling(monkeypatch):
    calls = patch_get(monkeypatch, lambda url: FakeResponse(200, {}))

    with pytest.raises(UpstreamUnavailable):
        UserClient("").get_user("a@x.com")
    assert calls == []


def test_bookings_end_to_end_against_user_app(monkeypatch, user_client, inventory):
    """Product service talks to the real user app through its test client."""
    prefix = "http://users.local"

    def route_to_user_app(url):
        r = user_client.get(url[len(prefix):])
        return FakeResponse(r.status_code, r.get_json())

    patch_get(monkeypatch, route_to_user_app)

    app = create_app(Settings(user_service_url=prefix + "/users/"), store=inventory)
    client = app.test_client()
    assert client.post("/products/book", json={"product_id": 2, "email": "b@y.com"}).status_code == 200

    r = client.get("/users/b@y.com/bookings")
    assert r.status_code == 200
    assert r.get_json() == {
        "name": "Bob",
        "email": "b@y.com",
        "age": 25,
        "bookings": [{"productId": 2, "nama": "Gadget"}],
    }

    assert client.get("/users/ghost@x.com/bookings").status_code == 500
