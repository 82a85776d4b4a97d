"""Email (magic link / password) provider. The address is the user id."""

from __future__ import annotations

from typing import Any

from scripts.signin.base_provider import BaseProvider, Feature


class EmailProvider(BaseProvider):
    PROVIDER_NAME = "email"
    FEATURES = frozenset({Feature.EMAIL})

    def extract_user_id(self, payload: Any) -> str:
        email = self._require_field(payload, "email")
        return str(email).strip().lower()
