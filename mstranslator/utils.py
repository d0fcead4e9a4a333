import logging
import re
import time
import xml.etree.ElementTree as ET
from typing import Iterator, Optional

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


def _build_client(timeout: float) -> httpx.Client:
    return httpx.Client(
        headers={"user-agent": "mstranslator/1.0 (+https://www.microsofttranslator.com)"},
        timeout=timeout,
        follow_redirects=True,
    )


def now_millis() -> int:
    return int(time.time() * 1000)


def clean_html(raw: Optional[str]) -> str:
    if not raw:
        return ""
    text = BeautifulSoup(raw, "html.parser").get_text(" ", strip=True)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


def response_body_quietly(response: httpx.Response) -> Optional[str]:
    """Best-effort read of an error response body, for diagnostics only."""
    try:
        return response.text
    except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError, LookupError) as exc:
        logger.debug("Unable to get response body as string: %s", exc)
    return None


def local_name(tag: str) -> str:
    # ElementTree spells namespaced tags as "{uri}name"
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def iter_elements(content: bytes, name: str) -> Iterator[ET.Element]:
    """Yield elements matching ``name`` (namespace ignored), in document order.

    Raises ``xml.etree.ElementTree.ParseError`` on malformed input.
    """
    root = ET.fromstring(content)
    for element in root.iter():
        if isinstance(element.tag, str) and local_name(element.tag) == name:
            yield element


def text_content(element: ET.Element) -> str:
    return "".join(element.itertext())
