"""Google sign-in provider: OpenID Connect userinfo payloads."""

from __future__ import annotations

from typing import Any

from scripts.signin.base_provider import BaseProvider, Feature


class GoogleProvider(BaseProvider):
    PROVIDER_NAME = "google"
    FEATURES = frozenset({
        Feature.PROFILE,
        Feature.EMAIL,
        Feature.SOCIAL_GRAPH,
        Feature.SHARING,
        Feature.TOKEN_REFRESH,
    })

    def extract_user_id(self, payload: Any) -> str:
        # "sub" for OIDC userinfo, "id" for the legacy people API
        return str(self._require_field(payload, "sub", "id"))
