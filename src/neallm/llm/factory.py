from .base import LLMProvider
from .models import ProviderKind
from .providers import LMStudioProvider, OllamaProvider

_PROVIDERS: dict[ProviderKind, type[LLMProvider]] = {
    ProviderKind.OLLAMA: OllamaProvider,
    ProviderKind.LMSTUDIO: LMStudioProvider,
}


def resolve_provider_kind(provider: ProviderKind | str) -> ProviderKind:
    """Convert a provider name to a ProviderKind.

    Args:
        provider: ProviderKind or case-insensitive name ('ollama', 'lmstudio')

    Raises:
        ValueError: If the name is not a supported provider
    """
    if isinstance(provider, ProviderKind):
        return provider
    try:
        return ProviderKind(provider.strip().lower())
    except ValueError:
        supported = ", ".join(f"'{kind.value}'" for kind in ProviderKind)
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {supported}"
        ) from None


def default_base_url(provider: ProviderKind | str) -> str:
    """Get the address a provider's server listens on out of the box."""
    return _PROVIDERS[resolve_provider_kind(provider)].default_base_url


def create_llm_provider(
    provider: ProviderKind | str,
    base_url: str | None = None,
) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides which class implements each server API.

    Args:
        provider: Provider type ('ollama' or 'lmstudio')
        base_url: Server address (default: the provider's default)
            For Ollama: http://localhost:11434
            For LM Studio: http://localhost:1234

    Returns:
        Provider instance bound to the base address

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider("ollama")
        >>> provider.build_listing_request().url
        'http://localhost:11434/api/tags'

        >>> provider = create_llm_provider("lmstudio", base_url="http://gpu-box:1234")
        >>> provider.build_listing_request().url
        'http://gpu-box:1234/v1/models'
    """
    kind = resolve_provider_kind(provider)
    return _PROVIDERS[kind](base_url=base_url)
