"""In-process registry of AI backends, split into conversational and TTS namespaces.

Providers are keyed by a closed set of kinds. Lookups that miss (unknown id,
known id not registered) resolve to the first registered provider of the
namespace instead of failing: availability is preferred over pinning a
specific vendor. Only an empty namespace is an error, since that means
start-up never registered anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, Protocol, Tuple, Type, TypeVar

from loguru import logger


class ProviderKind(str, Enum):
    """Conversational (LLM) backends."""

    OPENAI = "openai"
    GEMINI = "gemini"


class TTSProviderKind(str, Enum):
    """Text-to-speech backends."""

    ELEVENLABS = "elevenlabs"


class NoProviderAvailableError(LookupError):
    """Raised when a namespace has no registered provider at all."""


@dataclass(frozen=True, slots=True)
class ProviderDescriptor:
    """Id and display name pair used for provider pickers."""

    id: str
    name: str

    def as_payload(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name}


class _RegisteredProvider(Protocol):
    @property
    def kind(self) -> Enum: ...

    @property
    def display_name(self) -> str: ...


K = TypeVar("K", bound=Enum)
P = TypeVar("P", bound=_RegisteredProvider)


def _coerce_kind(kind_cls: Type[K], provider_id: K | str | None) -> K | None:
    if provider_id is None:
        return None
    if isinstance(provider_id, kind_cls):
        return provider_id
    try:
        return kind_cls(provider_id)
    except ValueError:
        return None


class ProviderNamespace(Generic[K, P]):
    """Providers of one capability, keyed by kind, with a default id."""

    def __init__(self, label: str, kind_cls: Type[K], default: K | str) -> None:
        self.label = label
        self._kind_cls = kind_cls
        self.default = default
        self._providers: Dict[K, P] = {}

    def register(self, provider: P) -> None:
        kind = _coerce_kind(self._kind_cls, provider.kind)
        if kind is None:
            raise ValueError(f"Unsupported {self.label} provider kind: {provider.kind!r}")
        replaced = kind in self._providers
        self._providers[kind] = provider
        logger.info(
            "AI provider registered",
            namespace=self.label,
            provider_id=kind.value,
            provider_name=provider.display_name,
            replaced=replaced,
        )

    def resolve(self, provider_id: K | str | None = None) -> P:
        """Return the requested provider, else the first registered one."""

        requested = self.default if provider_id is None else provider_id
        kind = _coerce_kind(self._kind_cls, requested)
        if kind is not None and kind in self._providers:
            return self._providers[kind]

        if not self._providers:
            raise NoProviderAvailableError(
                f"{self.label.capitalize()} provider '{_label(requested)}' not found and no fallbacks available"
            )

        fallback_kind, fallback = next(iter(self._providers.items()))
        logger.warning(
            "AI provider not registered; falling back",
            namespace=self.label,
            requested=_label(requested),
            resolved=fallback_kind.value,
        )
        return fallback

    def descriptors(self) -> Tuple[ProviderDescriptor, ...]:
        return tuple(
            ProviderDescriptor(id=kind.value, name=provider.display_name)
            for kind, provider in self._providers.items()
        )

    def __contains__(self, provider_id: object) -> bool:
        kind = _coerce_kind(self._kind_cls, provider_id)  # type: ignore[arg-type]
        return kind is not None and kind in self._providers

    def __len__(self) -> int:
        return len(self._providers)


def _label(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class ProviderRegistry:
    """Holds the conversational and TTS provider namespaces for one application."""

    def __init__(
        self,
        *,
        default_conversational_provider: ProviderKind | str = ProviderKind.OPENAI,
        default_tts_provider: TTSProviderKind | str = TTSProviderKind.ELEVENLABS,
    ) -> None:
        self.conversational: ProviderNamespace = ProviderNamespace(
            "conversational", ProviderKind, default_conversational_provider
        )
        self.tts: ProviderNamespace = ProviderNamespace("tts", TTSProviderKind, default_tts_provider)

    def register_conversational_provider(self, provider) -> None:
        self.conversational.register(provider)

    def register_tts_provider(self, provider) -> None:
        self.tts.register(provider)

    def get_conversational_provider(self, provider_id: ProviderKind | str | None = None):
        return self.conversational.resolve(provider_id)

    def get_tts_provider(self, provider_id: TTSProviderKind | str | None = None):
        return self.tts.resolve(provider_id)

    def list_conversational_providers(self) -> Tuple[ProviderDescriptor, ...]:
        return self.conversational.descriptors()

    def list_tts_providers(self) -> Tuple[ProviderDescriptor, ...]:
        return self.tts.descriptors()


__all__ = [
    "NoProviderAvailableError",
    "ProviderDescriptor",
    "ProviderKind",
    "ProviderNamespace",
    "ProviderRegistry",
    "TTSProviderKind",
]
