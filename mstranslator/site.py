import json
import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set, Union

from .config import (
    ACTIVATED_PROPERTY,
    CLIENT_ID_PROPERTY,
    CLIENT_SECRET_PROPERTY,
    SETTINGS_MIXIN,
    Credentials,
)
from .errors import AuthenticationError
from .messages import DEFAULT_LOCALE, get_message

logger = logging.getLogger(__name__)


class SiteSettingsError(Exception):
    """A site setting could not be read."""


@dataclass
class SiteSettings:
    name: str
    mixins: Set[str] = field(default_factory=set)
    properties: Dict[str, Any] = field(default_factory=dict)

    def is_node_type(self, mixin: str) -> bool:
        return mixin in self.mixins

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def get_property(self, name: str) -> Any:
        try:
            return self.properties[name]
        except KeyError:
            raise SiteSettingsError(f"Site {self.name!r} has no property {name!r}") from None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def is_enabled(site: SiteSettings) -> bool:
    """Check whether Microsoft Translator is activated for ``site``.

    Never raises: a site whose settings cannot be read counts as disabled.
    """
    try:
        return (
            site.is_node_type(SETTINGS_MIXIN)
            and site.has_property(ACTIVATED_PROPERTY)
            and _as_bool(site.get_property(ACTIVATED_PROPERTY))
        )
    except Exception:
        logger.exception("Failed to check if Microsoft Translator provider is enabled")
    return False


def site_credentials(site: SiteSettings, ui_locale: str = DEFAULT_LOCALE) -> Credentials:
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    try:
        if site.is_node_type(SETTINGS_MIXIN):
            if site.has_property(CLIENT_ID_PROPERTY):
                client_id = site.get_property(CLIENT_ID_PROPERTY)
            if site.has_property(CLIENT_SECRET_PROPERTY):
                client_secret = site.get_property(CLIENT_SECRET_PROPERTY)
    except Exception as exc:
        raise AuthenticationError(get_message("failed_to_get_credentials", ui_locale)) from exc
    if not client_id or not client_secret:
        raise AuthenticationError(get_message("missing_credentials", ui_locale))
    return Credentials(str(client_id), str(client_secret))


def _site_from_dict(name: str, raw: Dict[str, Any]) -> SiteSettings:
    mixins: Iterable[str] = raw.get("mixins", [])
    return SiteSettings(name=name, mixins=set(mixins), properties=dict(raw.get("properties", {})))


def load_sites(path: Union[str, pathlib.Path]) -> Dict[str, SiteSettings]:
    path = pathlib.Path(path)
    if not path.exists():
        logger.info("No site settings file at %s", path)
        return {}
    raw = json.loads(path.read_text(encoding="utf-8"))
    return {name: _site_from_dict(name, settings) for name, settings in raw.items()}
