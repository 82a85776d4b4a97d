"""
Shared fixtures for sign-in account tests.

Provides an in-memory AccountStore that mimics the PostgreSQL store's
semantics (unique provider logins, cascading account deletes) and records
every call so tests can assert on storage traffic.
"""

import itertools

import pytest

from scripts.signin.account import Account
from scripts.signin.providers import EmailProvider, GitHubProvider, GoogleProvider


class InMemoryAccountStore:
    def __init__(self):
        self.accounts = set()
        # (provider_id, provider_user_id) -> account_id
        self.links = {}
        self.calls = []
        self._ids = itertools.count(1)

    def _key(self, provider, account):
        return provider.id(), account.get_provider_user_id(provider)

    def find_account_id(self, provider, account):
        self.calls.append(("find_account_id", provider.id()))
        return self.links.get(self._key(provider, account))

    def create_account(self, provider, account):
        self.calls.append(("create_account", provider.id()))
        account_id = next(self._ids)
        self.accounts.add(account_id)
        self.links[self._key(provider, account)] = account_id
        return account_id

    def associate(self, provider, account, account_id):
        self.calls.append(("associate", provider.id(), account_id))
        self.links[self._key(provider, account)] = account_id

    def delete_provider_link(self, provider, account):
        self.calls.append(("delete_provider_link", provider.id()))
        key = self._key(provider, account)
        if account.get_id() is not None and self.links.get(key) == account.get_id():
            del self.links[key]

    def delete_account(self, account_id):
        self.calls.append(("delete_account", account_id))
        self.accounts.discard(account_id)
        self.links = {k: v for k, v in self.links.items() if v != account_id}

    def connected_provider_ids(self, account_id):
        self.calls.append(("connected_provider_ids", account_id))
        return {provider_id for (provider_id, _), v in self.links.items() if v == account_id}

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def store():
    return InMemoryAccountStore()


@pytest.fixture
def google():
    return GoogleProvider()


@pytest.fixture
def github():
    return GitHubProvider()


@pytest.fixture
def email():
    return EmailProvider()


@pytest.fixture
def make_account(store):
    def _make(**kwargs):
        return Account(store, **kwargs)

    return _make


GOOGLE_ALICE = {"sub": "109876543210", "email": "alice@example.com", "name": "Alice"}
GITHUB_ALICE = {"node_id": "MDQ6VXNlcjE=", "id": 1, "login": "alice"}
EMAIL_ALICE = {"email": "Alice@Example.com"}
