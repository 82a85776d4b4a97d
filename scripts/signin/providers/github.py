"""GitHub sign-in provider: REST /user payloads."""

from __future__ import annotations

from typing import Any

from scripts.signin.base_provider import BaseProvider, Feature


class GitHubProvider(BaseProvider):
    PROVIDER_NAME = "github"
    FEATURES = frozenset({Feature.PROFILE, Feature.EMAIL})

    def extract_user_id(self, payload: Any) -> str:
        """Prefer the GraphQL node_id; fall back to the numeric REST id."""
        return str(self._require_field(payload, "node_id", "id"))
