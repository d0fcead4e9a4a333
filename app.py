"""FastAPI front for the Microsoft Translator provider."""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from mstranslator.config import LOG_LEVEL, SITES_FILE, ProviderConfig
from mstranslator.errors import (
    AuthenticationError,
    ServiceCallError,
    ServiceUnavailableError,
    TranslationError,
)
from mstranslator.messages import DEFAULT_LOCALE
from mstranslator.site import SiteSettings, load_sites
from mstranslator.translation import MicrosoftTranslationProvider
from mstranslator.utils import clean_html

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ─── Wiring ────────────────────────────────────────────────────────────────────
PROVIDER = MicrosoftTranslationProvider(ProviderConfig.from_env())
SITES: Dict[str, SiteSettings] = load_sites(SITES_FILE)


class TranslateRequest(BaseModel):
    text: str
    source: str
    target: str
    html: bool = False


class BatchTranslateRequest(BaseModel):
    texts: List[str]
    source: str
    target: str
    html: bool = False


# ─── Request Helpers ───────────────────────────────────────────────────────────
def ui_locale(request: Request) -> str:
    header = request.headers.get("accept-language", "")
    first = header.split(",", 1)[0].split(";", 1)[0].strip()
    return first or DEFAULT_LOCALE


def enabled_site(name: str) -> SiteSettings:
    site = SITES.get(name)
    if site is None:
        raise HTTPException(status_code=404, detail=f"Unknown site {name!r}")
    if not PROVIDER.is_enabled(site):
        raise HTTPException(status_code=403, detail=f"Microsoft Translator is not enabled for {name!r}")
    return site


def error_status(exc: TranslationError) -> int:
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, ServiceUnavailableError):
        return 503
    return 502


# ─── FastAPI App ───────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    PROVIDER.close()


app = FastAPI(title="Microsoft Translator provider", lifespan=lifespan)


@app.exception_handler(TranslationError)
async def translation_error_handler(request: Request, exc: TranslationError) -> JSONResponse:
    content = {"error": type(exc).__name__, "message": exc.message, "detail": exc.detail}
    if isinstance(exc, ServiceCallError):
        content["status"] = exc.status_code
        content["detail"] = clean_html(exc.body) or None
    logger.info("Translation failed on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=error_status(exc), content=content)


@app.get("/sites/{site}/enabled")
def site_enabled(site: str) -> dict:
    settings = SITES.get(site)
    if settings is None:
        raise HTTPException(status_code=404, detail=f"Unknown site {site!r}")
    return {"site": site, "enabled": PROVIDER.is_enabled(settings)}


@app.post("/sites/{site}/translate")
def translate(site: str, payload: TranslateRequest, request: Request) -> dict:
    settings = enabled_site(site)
    text = PROVIDER.translate_for_site(
        settings, payload.text, payload.source, payload.target, payload.html, ui_locale(request)
    )
    return {"text": text}


@app.post("/sites/{site}/translate/batch")
def translate_batch(site: str, payload: BatchTranslateRequest, request: Request) -> dict:
    settings = enabled_site(site)
    texts = PROVIDER.translate_batch_for_site(
        settings, payload.texts, payload.source, payload.target, payload.html, ui_locale(request)
    )
    return {"texts": texts}


@app.get("/health", response_class=PlainTextResponse)
def healthcheck() -> PlainTextResponse:
    return PlainTextResponse("ok")


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=False)
