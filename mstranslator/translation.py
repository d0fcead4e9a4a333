"""Microsoft Translator provider: single text and batch translation."""
import logging
import pathlib
import xml.etree.ElementTree as ET
from typing import Callable, List, Optional, Sequence

import httpx
from jinja2 import Environment, FileSystemLoader

from .auth import Authenticator
from .config import (
    ARRAYS_NAMESPACE,
    CONTENT_TYPE_HTML,
    CONTENT_TYPE_PLAIN,
    OPTIONS_NAMESPACE,
    Credentials,
    ProviderConfig,
)
from .errors import (
    AuthenticationError,
    ResponseParseError,
    ServiceCallError,
    ServiceUnavailableError,
)
from .messages import DEFAULT_LOCALE, get_message
from .site import SiteSettings, is_enabled, site_credentials
from .token_cache import TokenCache
from .utils import (
    _build_client,
    iter_elements,
    now_millis,
    response_body_quietly,
    text_content,
)

logger = logging.getLogger(__name__)

templates = Environment(
    loader=FileSystemLoader(str(pathlib.Path(__file__).parent / "templates")),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _content_type(is_html: bool) -> str:
    return CONTENT_TYPE_HTML if is_html else CONTENT_TYPE_PLAIN


def build_translate_array_request(
    texts: Sequence[str], src_language: str, dest_language: str, is_html: bool
) -> str:
    """Render the TranslateArray XML envelope.

    HTML texts are entity-escaped; plain texts are inserted as given.
    """
    template = templates.get_template("translate_array.xml")
    return template.render(
        source=src_language,
        target=dest_language,
        content_type=_content_type(is_html),
        texts=texts,
        escape=is_html,
        options_ns=OPTIONS_NAMESPACE,
        arrays_ns=ARRAYS_NAMESPACE,
    )


class MicrosoftTranslationProvider:
    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        client: Optional[httpx.Client] = None,
        cache: Optional[TokenCache] = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.config = config or ProviderConfig()
        self._owns_client = client is None
        self.client = client if client is not None else _build_client(self.config.timeout)
        self.cache = cache if cache is not None else TokenCache()
        self.authenticator = Authenticator(self.config, self.client, self.cache, clock=clock)

    def __enter__(self) -> "MicrosoftTranslationProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.cache.clear()
        if self._owns_client:
            self.client.close()

    def authenticate(self, client_id: str, client_secret: str, ui_locale: str = DEFAULT_LOCALE) -> str:
        return self.authenticator.authenticate(client_id, client_secret, ui_locale)

    def is_enabled(self, site: SiteSettings) -> bool:
        return is_enabled(site)

    def _access_token(self, credentials: Credentials, ui_locale: str) -> str:
        token = self.authenticate(credentials.client_id, credentials.client_secret, ui_locale)
        if not token:
            raise AuthenticationError(get_message("failed_to_authenticate", ui_locale))
        return token

    def _execute(self, ui_locale: str, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ServiceUnavailableError(get_message("failed_to_call_service", ui_locale)) from exc
        if not response.is_success:
            raise ServiceCallError(
                get_message("error_with_code", ui_locale, code=response.status_code),
                response.status_code,
                response_body_quietly(response),
            )
        return response

    def translate(
        self,
        text: str,
        src_language: str,
        dest_language: str,
        is_html: bool,
        credentials: Credentials,
        ui_locale: str = DEFAULT_LOCALE,
    ) -> str:
        """Translate a single text with the Translate GET method.

        Args:
            text: text to translate
            src_language: source language code
            dest_language: destination language code
            is_html: whether ``text`` is HTML or plain text
            credentials: client id and secret of the site
            ui_locale: locale of the error messages

        Returns:
            The translated text.
        """
        token = self._access_token(credentials, ui_locale)
        response = self._execute(
            ui_locale,
            "GET",
            self.config.translate_url,
            headers={"Authorization": f"Bearer {token}"},
            params={
                "text": text,
                "from": src_language,
                "to": dest_language,
                "contentType": _content_type(is_html),
            },
        )
        try:
            element = next(iter_elements(response.content, "string"))
        except (ET.ParseError, StopIteration) as exc:
            raise ResponseParseError(get_message("failed_to_parse", ui_locale)) from exc
        return text_content(element)

    def translate_batch(
        self,
        texts: Sequence[str],
        src_language: str,
        dest_language: str,
        is_html: bool,
        credentials: Credentials,
        ui_locale: str = DEFAULT_LOCALE,
    ) -> List[str]:
        """Translate several texts at once with the TranslateArray POST method.

        Results come back in the order the service returns them.
        """
        if not texts:
            return []
        token = self._access_token(credentials, ui_locale)
        body = build_translate_array_request(texts, src_language, dest_language, is_html)
        response = self._execute(
            ui_locale,
            "POST",
            self.config.translate_array_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "text/xml; charset=UTF-8",
            },
            content=body.encode("utf-8"),
        )
        try:
            return [text_content(element) for element in iter_elements(response.content, "TranslatedText")]
        except ET.ParseError as exc:
            raise ResponseParseError(get_message("failed_to_parse", ui_locale)) from exc

    def translate_for_site(
        self,
        site: SiteSettings,
        text: str,
        src_language: str,
        dest_language: str,
        is_html: bool,
        ui_locale: str = DEFAULT_LOCALE,
    ) -> str:
        credentials = site_credentials(site, ui_locale)
        return self.translate(text, src_language, dest_language, is_html, credentials, ui_locale)

    def translate_batch_for_site(
        self,
        site: SiteSettings,
        texts: Sequence[str],
        src_language: str,
        dest_language: str,
        is_html: bool,
        ui_locale: str = DEFAULT_LOCALE,
    ) -> List[str]:
        credentials = site_credentials(site, ui_locale)
        return self.translate_batch(texts, src_language, dest_language, is_html, credentials, ui_locale)
