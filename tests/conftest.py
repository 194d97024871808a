"""Pytest fixtures for both services (in-memory, no network)."""

import pytest

from common.errors import NotFound, UpstreamUnavailable
from product_service.app import create_app as create_product_app
from product_service.config import Settings
from product_service.store import InventoryStore, Product
from user_service.app import create_app as create_user_app
from user_service.store import User, UserStore


class FakeUserClient:
    """Answers from a UserStore instead of going over HTTP."""

    def __init__(self, users: UserStore):
        self.users = users
        self.calls = []

    def get_user(self, email):
        self.calls.append(email)
        try:
            return self.users.get_user(email).to_dict()
        except NotFound:
            raise UpstreamUnavailable("failed to get user data")


@pytest.fixture
def inventory() -> InventoryStore:
    store = InventoryStore()
    store.add_product(Product(id=1, name="Widget", quantity=2))
    store.add_product(Product(id=2, name="Gadget", quantity=1))
    store.add_product(Product(id=3, name="Gizmo", quantity=0))  # out of stock
    return store


@pytest.fixture
def users() -> UserStore:
    store = UserStore()
    store.add_user(User(name="Alice", email="a@x.com", age=30))
    store.add_user(User(name="Bob", email="b@y.com", age=25))
    return store


@pytest.fixture
def user_client(users):
    app = create_user_app(users)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def fake_user_client(users):
    return FakeUserClient(users)


@pytest.fixture
def product_client(inventory, fake_user_client):
    app = create_product_app(Settings(), store=inventory, user_client=fake_user_client)
    app.config["TESTING"] = True
    return app.test_client()
