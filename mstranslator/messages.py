from typing import Dict

DEFAULT_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "failed_to_get_credentials": "Failed to read the Microsoft Translator credentials of the site",
        "missing_credentials": "Microsoft Translator client id and client secret are not configured for the site",
        "failed_to_call_service": "Failed to call the Microsoft Translator service",
        "error_with_code": "Microsoft Translator returned an error (HTTP {code})",
        "failed_to_parse": "Failed to parse the Microsoft Translator response",
        "failed_to_authenticate": "Failed to authenticate to Microsoft Translator",
    },
    "fr": {
        "failed_to_get_credentials": "Impossible de lire les identifiants Microsoft Translator du site",
        "missing_credentials": "L'identifiant client et le secret client Microsoft Translator ne sont pas configurés pour le site",
        "failed_to_call_service": "Impossible d'appeler le service Microsoft Translator",
        "error_with_code": "Microsoft Translator a renvoyé une erreur (HTTP {code})",
        "failed_to_parse": "Impossible d'analyser la réponse de Microsoft Translator",
        "failed_to_authenticate": "Échec de l'authentification auprès de Microsoft Translator",
    },
    "de": {
        "failed_to_get_credentials": "Die Microsoft-Translator-Zugangsdaten der Site konnten nicht gelesen werden",
        "missing_credentials": "Client-ID und Client-Secret für Microsoft Translator sind für die Site nicht konfiguriert",
        "failed_to_call_service": "Der Microsoft-Translator-Dienst konnte nicht aufgerufen werden",
        "error_with_code": "Microsoft Translator hat einen Fehler gemeldet (HTTP {code})",
        "failed_to_parse": "Die Antwort von Microsoft Translator konnte nicht verarbeitet werden",
        "failed_to_authenticate": "Die Anmeldung bei Microsoft Translator ist fehlgeschlagen",
    },
}


def _language(ui_locale: str) -> str:
    if not ui_locale:
        return DEFAULT_LOCALE
    language = ui_locale.replace("-", "_").split("_", 1)[0].lower()
    return language if language in MESSAGES else DEFAULT_LOCALE


def get_message(key: str, ui_locale: str = DEFAULT_LOCALE, **kwargs) -> str:
    catalog = MESSAGES[_language(ui_locale)]
    template = catalog.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**kwargs) if kwargs else template
