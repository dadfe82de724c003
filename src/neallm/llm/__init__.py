from .base import LLMProvider
from .factory import create_llm_provider, default_base_url, resolve_provider_kind
from .models import ModelInfo, ProviderKind, ProviderRequest
from .providers import LMStudioProvider, OllamaProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "default_base_url",
    "resolve_provider_kind",
    "ModelInfo",
    "ProviderKind",
    "ProviderRequest",
    "LMStudioProvider",
    "OllamaProvider",
]
