"""AI provider domain helpers."""

from .provider_registry import (  # noqa: F401
    NoProviderAvailableError,
    ProviderDescriptor,
    ProviderKind,
    ProviderRegistry,
    TTSProviderKind,
)
