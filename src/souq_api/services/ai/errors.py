from __future__ import annotations


class ProviderError(RuntimeError):
    """Raised when an AI provider call fails or returns unusable output."""

    def __init__(self, message: str, *, provider_id: str | None = None) -> None:
        super().__init__(message)
        self.provider_id = provider_id


class ProviderAuthenticationError(ProviderError):
    """Raised on first use when the provider's API key is not configured."""


class ProviderResponseError(ProviderError):
    """Raised when the provider answers with empty, non-JSON or mis-shaped content."""


__all__ = ["ProviderAuthenticationError", "ProviderError", "ProviderResponseError"]
