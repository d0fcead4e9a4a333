import json
from typing import Callable, Dict, List

import httpx
import pytest

from mstranslator.config import ProviderConfig
from mstranslator.translation import MicrosoftTranslationProvider

TOKEN_URL = "https://auth.example.test/token"
TRANSLATE_URL = "https://api.example.test/Translate"
TRANSLATE_ARRAY_URL = "https://api.example.test/TranslateArray"

DICTIONARY = {"Hello": "Bonjour", "World": "Monde", "<b>hi</b>": "<b>salut</b>"}


def translate_response(text: str) -> bytes:
    return (
        '<string xmlns="http://schemas.microsoft.com/2003/10/Serialization/">'
        f"{text}</string>"
    ).encode("utf-8")


def translate_array_response(texts: List[str]) -> bytes:
    items = "".join(
        "<TranslateArrayResponse><From>en</From><State />"
        f"<TranslatedText>{text}</TranslatedText>"
        "<TranslatedTextSentenceLengths xmlns:a=\"http://schemas.microsoft.com/2003/10/Serialization/Arrays\">"
        "<a:int>5</a:int></TranslatedTextSentenceLengths>"
        "</TranslateArrayResponse>"
        for text in texts
    )
    return (
        '<ArrayOfTranslateArrayResponse xmlns="http://schemas.datacontract.org/2004/07/Microsoft.MT.Web.Service.V2" '
        'xmlns:i="http://www.w3.org/2001/XMLSchema-instance">'
        f"{items}</ArrayOfTranslateArrayResponse>"
    ).encode("utf-8")


class FakeTranslatorService:
    """Stands in for the token endpoint and both translation endpoints."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.token_calls = 0
        self.expires_in = "600"
        self.overrides: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def calls_to(self, url: str) -> List[httpx.Request]:
        return [request for request in self.requests if str(request.url).split("?", 1)[0] == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url).split("?", 1)[0]
        if url in self.overrides:
            return self.overrides[url](request)
        if url == TOKEN_URL:
            self.token_calls += 1
            payload = {"access_token": f"token-{self.token_calls}", "expires_in": self.expires_in}
            return httpx.Response(200, content=json.dumps(payload).encode("utf-8"))
        if url == TRANSLATE_URL:
            text = request.url.params["text"]
            return httpx.Response(200, content=translate_response(DICTIONARY.get(text, text)))
        if url == TRANSLATE_ARRAY_URL:
            return httpx.Response(200, content=translate_array_response(["Bonjour", "Monde"]))
        return httpx.Response(404)


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


@pytest.fixture
def config() -> ProviderConfig:
    return ProviderConfig(
        access_token_url=TOKEN_URL,
        translate_url=TRANSLATE_URL,
        translate_array_url=TRANSLATE_ARRAY_URL,
        scope="http://api.microsofttranslator.com",
        timeout=5.0,
    )


@pytest.fixture
def service() -> FakeTranslatorService:
    return FakeTranslatorService()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def http_client(service: FakeTranslatorService) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(service))
    yield client
    client.close()


@pytest.fixture
def provider(config, http_client, clock) -> MicrosoftTranslationProvider:
    provider = MicrosoftTranslationProvider(config, client=http_client, clock=clock)
    yield provider
    provider.close()
