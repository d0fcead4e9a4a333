import logging
from typing import Callable, Optional

import httpx

from .config import ProviderConfig
from .errors import ResponseParseError, ServiceCallError, ServiceUnavailableError
from .messages import DEFAULT_LOCALE, get_message
from .token_cache import CachedToken, TokenCache, credential_key
from .utils import now_millis, response_body_quietly

logger = logging.getLogger(__name__)


class Authenticator:
    """Resolves bearer tokens with the OAuth2 client-credentials grant.

    A token is requested only when the credential pair has no cached token or
    its cached token has expired. There is no retry: the first failure is
    raised to the caller.
    """

    def __init__(
        self,
        config: ProviderConfig,
        client: httpx.Client,
        cache: Optional[TokenCache] = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.config = config
        self.client = client
        self.cache = cache if cache is not None else TokenCache()
        self._clock = clock

    def authenticate(self, client_id: str, client_secret: str, ui_locale: str = DEFAULT_LOCALE) -> str:
        key = credential_key(client_id, client_secret)
        cached = self.cache.get(key)
        if cached is not None and not cached.is_expired(self._clock()):
            return cached.token

        fresh = self._request_token(client_id, client_secret, ui_locale)
        self.cache.put(key, fresh)
        return fresh.token

    def _request_token(self, client_id: str, client_secret: str, ui_locale: str) -> CachedToken:
        call_time = self._clock()
        try:
            response = self.client.post(
                self.config.access_token_url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "scope": self.config.scope,
                },
            )
        except httpx.HTTPError as exc:
            logger.warning("Token request to %s failed: %s", self.config.access_token_url, exc)
            raise ServiceUnavailableError(get_message("failed_to_call_service", ui_locale)) from exc

        if not response.is_success:
            raise ServiceCallError(
                get_message("error_with_code", ui_locale, code=response.status_code),
                response.status_code,
                response_body_quietly(response),
            )

        try:
            payload = response.json()
            access_token = payload["access_token"]
            expires_in = int(payload["expires_in"])
            if not isinstance(access_token, str):
                raise TypeError(f"access_token is {type(access_token).__name__}")
        except (ValueError, KeyError, TypeError) as exc:
            raise ResponseParseError(get_message("failed_to_parse", ui_locale)) from exc

        # Expire one second early.
        expiration = call_time + (expires_in - 1) * 1000
        logger.debug("Obtained access token valid for %ss", expires_in)
        return CachedToken(access_token, expiration)
