"""Abstract base class for all identity providers."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any


class Feature(enum.Enum):
    """Optional capabilities an identity provider may support."""

    PROFILE = "profile"
    EMAIL = "email"
    SOCIAL_GRAPH = "social_graph"
    SHARING = "sharing"
    TOKEN_REFRESH = "token_refresh"


class BaseProvider(ABC):
    """Each provider declares PROVIDER_NAME, FEATURES and extract_user_id()."""

    PROVIDER_NAME: str = ""
    FEATURES: frozenset[Feature] = frozenset()

    def id(self) -> str:
        return self.PROVIDER_NAME

    def has_feature(self, feature: Feature) -> bool:
        return feature in self.FEATURES

    @abstractmethod
    def extract_user_id(self, payload: Any) -> str:
        """Return the provider-specific user id from an authenticated payload."""

    # ------------------------------------------------------------------
    # Providers are keyed by id, so separate instances of one IDP collide
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseProvider):
            return NotImplemented
        return self.id() == other.id()

    def __hash__(self) -> int:
        return hash(self.id())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id()!r})"

    @staticmethod
    def _require_field(payload: Any, *keys: str) -> Any:
        """Return the first present, non-empty value among keys in a dict payload."""
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a dict payload, got {type(payload).__name__}")
        for key in keys:
            value = payload.get(key)
            if value not in (None, ""):
                return value
        raise ValueError(f"Payload has none of the fields: {', '.join(keys)}")
