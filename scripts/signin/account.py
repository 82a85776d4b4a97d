"""Local account aggregating one or more identity-provider links.

An Account starts unresolved (no backing row). The first successful
link_provider() resolves it against storage, either adopting the account
already linked to that provider login or creating a new one. Later links
are associated with the resolved id.

Two accounts that turn out to belong to the same person are unified with
can_merge() / merge(). merge() lets the receiver's payload win when both
sides link the same provider; can_merge() reports that situation as
unmergeable, so callers following it never reach the overlap.
"""

from __future__ import annotations

import logging
from collections.abc import KeysView
from dataclasses import dataclass
from typing import Any, Optional, Union

from scripts.signin.account_store import AccountStore
from scripts.signin.base_provider import BaseProvider, Feature

logger = logging.getLogger("signin.account")


class AccountNotResolvedError(RuntimeError):
    """Raised when an operation needs a backing account id that was never resolved."""


@dataclass(frozen=True)
class Unresolved:
    """No backing account row yet."""


@dataclass(frozen=True)
class Resolved:
    account_id: int


AccountIdentity = Union[Unresolved, Resolved]


class Account:
    """In-memory view of one local account's provider links.

    Not safe for concurrent mutation; use one instance per request/session.
    """

    def __init__(self, store: AccountStore, display_name: Optional[str] = None) -> None:
        self._store = store
        self._identity: AccountIdentity = Unresolved()
        self._newly_created = False
        self._provider_data: dict[BaseProvider, Any] = {}
        self.display_name = display_name

    def __repr__(self) -> str:
        providers = sorted(p.id() for p in self._provider_data)
        return f"Account(id={self.get_id()!r}, providers={providers})"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def identity(self) -> AccountIdentity:
        return self._identity

    def get_id(self) -> Optional[int]:
        if isinstance(self._identity, Resolved):
            return self._identity.account_id
        return None

    def is_newly_created(self) -> bool:
        """Whether the last resolution created the backing row."""
        return self._newly_created

    def _require_id(self, operation: str) -> int:
        account_id = self.get_id()
        if account_id is None:
            raise AccountNotResolvedError(
                f"Cannot {operation}: account has no resolved id"
            )
        return account_id

    # ------------------------------------------------------------------
    # Provider links
    # ------------------------------------------------------------------

    def link_provider(self, provider: BaseProvider, provider_user_data: Any) -> None:
        """Attach an authenticated provider login and persist the link.

        Resolves the backing account on the first link (find, else create);
        associates with the resolved id afterwards.
        """
        if provider_user_data is None:
            raise ValueError(f"No user data supplied for provider {provider.id()}")

        self._provider_data[provider] = provider_user_data

        if isinstance(self._identity, Unresolved):
            account_id = self._store.find_account_id(provider, self)
            if account_id is None:
                account_id = self._store.create_account(provider, self)
                self._newly_created = True
            else:
                self._newly_created = False
            self._identity = Resolved(account_id)
            logger.info(
                "Resolved account via %s",
                provider.id(),
                extra={
                    "account_id": account_id,
                    "provider": provider.id(),
                    "newly_created": self._newly_created,
                    "display_name": self.display_name,
                },
            )
        else:
            self._store.associate(provider, self, self._identity.account_id)
            logger.debug(
                "Associated provider",
                extra={"account_id": self._identity.account_id, "provider": provider.id()},
            )

    def remove_provider(self, provider: BaseProvider) -> None:
        self._store.delete_provider_link(provider, self)
        self._provider_data.pop(provider, None)
        logger.debug(
            "Removed provider",
            extra={"account_id": self.get_id(), "provider": provider.id()},
        )

    def get_provider_data(self, provider: BaseProvider) -> Any:
        return self._provider_data.get(provider)

    def get_provider_user_id(self, provider: BaseProvider) -> Optional[str]:
        payload = self._provider_data.get(provider)
        if payload is None:
            return None
        return provider.extract_user_id(payload)

    def is_signed_in(self) -> bool:
        return bool(self._provider_data)

    def has_feature(self, feature: Feature) -> bool:
        """True if any linked provider supports the feature."""
        for provider in self._provider_data:
            if provider.has_feature(feature):
                return True
        return False

    def list_connected_providers(self) -> KeysView[BaseProvider]:
        """Live, read-only view of the linked providers."""
        return self._provider_data.keys()

    def list_additional_providers(self) -> set[str]:
        """Provider ids linked in storage but not connected in this session."""
        account_id = self._require_id("list additional providers")
        connected = {p.id() for p in self._provider_data}
        return {
            name
            for name in self._store.connected_provider_ids(account_id)
            if name not in connected
        }

    # ------------------------------------------------------------------
    # Merge / delete
    # ------------------------------------------------------------------

    def can_merge(self, other: Account) -> bool:
        """Whether other can be merged into this account.

        Same id is always mergeable. Different ids are mergeable only when
        no provider is linked on both sides.
        """
        if self.get_id() == other.get_id():
            return True
        return self.list_connected_providers().isdisjoint(
            other.list_connected_providers()
        )

    def merge(self, other: Account) -> None:
        """Absorb other's provider links, deleting other's backing account.

        When ids match, the accounts share a backing row: nothing is deleted
        and payloads are copied in memory only. An unresolved donor has no
        row to delete.
        """
        same_account = other.get_id() == self.get_id()
        if not same_account and other.get_id() is not None:
            # Donor links must be gone before they are re-linked here
            other.delete()

        for provider in list(other.list_connected_providers()):
            if provider in self._provider_data:
                if not same_account:
                    logger.warning(
                        "Merge discarded donor payload for already linked provider",
                        extra={
                            "account_id": self.get_id(),
                            "donor_id": other.get_id(),
                            "discarded_provider": provider.id(),
                        },
                    )
                continue
            if same_account:
                self._provider_data[provider] = other.get_provider_data(provider)
            else:
                self.link_provider(provider, other.get_provider_data(provider))

        logger.info(
            "Merged account",
            extra={"account_id": self.get_id(), "donor_id": other.get_id()},
        )

    def delete(self) -> None:
        """Delete the backing account and, via storage, all its provider links."""
        account_id = self._require_id("delete")
        self._store.delete_account(account_id)
        logger.info("Deleted account", extra={"account_id": account_id})
