import os

from soka_app.config.configuration import SokaConfiguration
from soka_app.errors import SUPPORTED_PROVIDERS, InvalidProviderError, MissingApiKeyError


def validate_provider(provider: str | None) -> str:
    """Return the normalized provider name, or raise if it is not supported."""
    normalized = provider.strip().lower() if provider else None

    if normalized not in SUPPORTED_PROVIDERS:
        raise InvalidProviderError(provider=provider)

    return normalized


def provider_api_key_variable(provider: str) -> str:
    return f"{provider.strip().upper()}_API_KEY"


def resolve_api_key(configuration: SokaConfiguration) -> str:
    """Return the configured API key, falling back to the provider specific environment variable."""
    if configuration.api_key:
        return configuration.api_key

    if configuration.provider and (api_key := os.getenv(provider_api_key_variable(configuration.provider))):
        return api_key

    raise MissingApiKeyError(provider=configuration.provider)
