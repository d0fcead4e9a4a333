import json
import logging
from unittest.mock import MagicMock

import pytest

from mstranslator.errors import AuthenticationError
from mstranslator.site import SiteSettings, SiteSettingsError, is_enabled, load_sites, site_credentials

MIXIN = "jmix:microsoftTranslatorSettings"


def make_site(**properties):
    return SiteSettings("acme", mixins={MIXIN}, properties=properties)


@pytest.mark.parametrize("flag", [True, "true", "TRUE"])
def test_enabled_when_mixin_and_flag_set(flag):
    assert is_enabled(make_site(**{"j:microsoftTranslationActivated": flag}))


@pytest.mark.parametrize("flag", [False, "false", "", None, 1])
def test_disabled_when_flag_not_true(flag):
    assert not is_enabled(make_site(**{"j:microsoftTranslationActivated": flag}))


def test_disabled_without_mixin():
    site = SiteSettings("acme", properties={"j:microsoftTranslationActivated": True})
    assert not is_enabled(site)


def test_disabled_without_flag():
    assert not is_enabled(make_site())


def test_read_failure_counts_as_disabled(caplog):
    site = MagicMock()
    site.is_node_type.side_effect = RuntimeError("repository unavailable")
    with caplog.at_level(logging.ERROR, logger="mstranslator.site"):
        assert is_enabled(site) is False
    assert "Failed to check if Microsoft Translator provider is enabled" in caplog.text


def test_site_credentials():
    site = make_site(**{"j:microsoftClientId": "id", "j:microsoftClientSecret": "secret"})
    credentials = site_credentials(site)
    assert credentials.client_id == "id"
    assert credentials.client_secret == "secret"
    assert "secret" not in repr(credentials)


def test_site_credentials_read_failure():
    site = MagicMock()
    site.is_node_type.return_value = True
    site.get_property.side_effect = SiteSettingsError("boom")
    with pytest.raises(AuthenticationError) as excinfo:
        site_credentials(site, "fr")
    assert excinfo.value.message.startswith("Impossible de lire")


def test_site_credentials_missing_property():
    with pytest.raises(AuthenticationError):
        site_credentials(make_site(**{"j:microsoftClientId": "id"}))


def test_site_credentials_without_mixin():
    with pytest.raises(AuthenticationError):
        site_credentials(SiteSettings("bare"))


def test_get_property_missing_raises():
    with pytest.raises(SiteSettingsError):
        SiteSettings("bare").get_property("j:microsoftClientId")


def test_load_sites(tmp_path):
    path = tmp_path / "sites.json"
    path.write_text(
        json.dumps(
            {
                "acme": {
                    "mixins": [MIXIN],
                    "properties": {"j:microsoftTranslationActivated": True},
                },
                "bare": {},
            }
        ),
        encoding="utf-8",
    )
    sites = load_sites(path)
    assert set(sites) == {"acme", "bare"}
    assert is_enabled(sites["acme"])
    assert not is_enabled(sites["bare"])


def test_load_sites_missing_file(tmp_path):
    assert load_sites(tmp_path / "nope.json") == {}
