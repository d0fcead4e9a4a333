import os
import pathlib
from dataclasses import dataclass, field

ACCESS_TOKEN_URL = os.environ.get(
    "MSTRANSLATOR_ACCESS_TOKEN_URL",
    "https://datamarket.accesscontrol.windows.net/v2/OAuth2-13",
)
TRANSLATE_URL = os.environ.get(
    "MSTRANSLATOR_TRANSLATE_URL",
    "https://api.microsofttranslator.com/v2/Http.svc/Translate",
)
TRANSLATE_ARRAY_URL = os.environ.get(
    "MSTRANSLATOR_TRANSLATE_ARRAY_URL",
    "https://api.microsofttranslator.com/v2/Http.svc/TranslateArray",
)
SCOPE = os.environ.get("MSTRANSLATOR_SCOPE", "http://api.microsofttranslator.com")
HTTP_TIMEOUT = float(os.environ.get("MSTRANSLATOR_HTTP_TIMEOUT", 20.0))  # seconds
SITES_FILE = pathlib.Path(os.environ.get("MSTRANSLATOR_SITES_FILE", "sites.json"))
LOG_LEVEL = os.environ.get("MSTRANSLATOR_LOG_LEVEL", "INFO").upper()

# Site settings vocabulary
SETTINGS_MIXIN = "jmix:microsoftTranslatorSettings"
CLIENT_ID_PROPERTY = "j:microsoftClientId"
CLIENT_SECRET_PROPERTY = "j:microsoftClientSecret"
ACTIVATED_PROPERTY = "j:microsoftTranslationActivated"

# TranslateArray envelope namespaces
OPTIONS_NAMESPACE = "http://schemas.datacontract.org/2004/07/Microsoft.MT.Web.Service.V2"
ARRAYS_NAMESPACE = "http://schemas.microsoft.com/2003/10/Serialization/Arrays"

CONTENT_TYPE_HTML = "text/html"
CONTENT_TYPE_PLAIN = "text/plain"


@dataclass(frozen=True)
class ProviderConfig:
    access_token_url: str = ACCESS_TOKEN_URL
    translate_url: str = TRANSLATE_URL
    translate_array_url: str = TRANSLATE_ARRAY_URL
    scope: str = SCOPE
    timeout: float = HTTP_TIMEOUT

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Re-read the endpoint settings from the environment."""
        return cls(
            access_token_url=os.environ.get("MSTRANSLATOR_ACCESS_TOKEN_URL", ACCESS_TOKEN_URL),
            translate_url=os.environ.get("MSTRANSLATOR_TRANSLATE_URL", TRANSLATE_URL),
            translate_array_url=os.environ.get("MSTRANSLATOR_TRANSLATE_ARRAY_URL", TRANSLATE_ARRAY_URL),
            scope=os.environ.get("MSTRANSLATOR_SCOPE", SCOPE),
            timeout=float(os.environ.get("MSTRANSLATOR_HTTP_TIMEOUT", HTTP_TIMEOUT)),
        )


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str = field(repr=False)
