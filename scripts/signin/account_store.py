"""Storage interface the account core calls.

Implementations own persistence and any transactional guarantees
(atomic find-or-create, cascading deletes). The provider user id for a
link is read from the account with ``account.get_provider_user_id(provider)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from scripts.signin.base_provider import BaseProvider

if TYPE_CHECKING:
    from scripts.signin.account import Account


class AccountStore(Protocol):
    def find_account_id(self, provider: BaseProvider, account: Account) -> Optional[int]:
        """Return the account id already linked to this provider login, if any."""
        ...

    def create_account(self, provider: BaseProvider, account: Account) -> int:
        """Create an account row with its first provider link. Returns the new id."""
        ...

    def associate(self, provider: BaseProvider, account: Account, account_id: int) -> None:
        """Link (or re-link) this provider login to an existing account id."""
        ...

    def delete_provider_link(self, provider: BaseProvider, account: Account) -> None:
        """Remove the provider link. A missing link is not an error."""
        ...

    def delete_account(self, account_id: int) -> None:
        """Delete the account row and all of its provider links."""
        ...

    def connected_provider_ids(self, account_id: int) -> set[str]:
        """Provider ids ever linked to the account in storage."""
        ...
