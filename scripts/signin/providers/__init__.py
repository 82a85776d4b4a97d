"""Concrete identity providers and a by-name registry."""

from __future__ import annotations

from scripts.signin.base_provider import BaseProvider
from scripts.signin.providers.email import EmailProvider
from scripts.signin.providers.github import GitHubProvider
from scripts.signin.providers.google import GoogleProvider

PROVIDER_REGISTRY: dict[str, type[BaseProvider]] = {
    GoogleProvider.PROVIDER_NAME: GoogleProvider,
    GitHubProvider.PROVIDER_NAME: GitHubProvider,
    EmailProvider.PROVIDER_NAME: EmailProvider,
}


def get_provider(name: str) -> BaseProvider:
    """Instantiate a provider by id. Raises KeyError for unknown names."""
    cls = PROVIDER_REGISTRY.get(name)
    if cls is None:
        raise KeyError(f"Unknown provider: {name}")
    return cls()


__all__ = [
    "EmailProvider",
    "GitHubProvider",
    "GoogleProvider",
    "PROVIDER_REGISTRY",
    "get_provider",
]
