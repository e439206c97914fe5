"""AI provider implementations."""

from .base import ConversationalProvider, TextToSpeechProvider  # noqa: F401
from .errors import ProviderAuthenticationError, ProviderError, ProviderResponseError  # noqa: F401
