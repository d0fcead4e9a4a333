from .config import Credentials, ProviderConfig
from .errors import (
    AuthenticationError,
    ResponseParseError,
    ServiceCallError,
    ServiceUnavailableError,
    TranslationError,
)
from .site import SiteSettings, is_enabled, load_sites, site_credentials
from .token_cache import CachedToken, TokenCache
from .translation import MicrosoftTranslationProvider

__all__ = [
    "AuthenticationError",
    "CachedToken",
    "Credentials",
    "MicrosoftTranslationProvider",
    "ProviderConfig",
    "ResponseParseError",
    "ServiceCallError",
    "ServiceUnavailableError",
    "SiteSettings",
    "TokenCache",
    "TranslationError",
    "is_enabled",
    "load_sites",
    "site_credentials",
]
