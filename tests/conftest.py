"""Shared test fixtures."""

import pytest

from scoped_store import AdminStore, Store


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def user_store():
    user = Store()
    user.write_entries({"name": "Jane", "profile": {"email": "jane@acme.com"}})
    return user


@pytest.fixture
def credentials():
    creds = Store()
    creds.write_entries({"username": "user1"})
    return creds


@pytest.fixture
def admin_store(user_store, credentials):
    return AdminStore(user=user_store, credentials=credentials)
