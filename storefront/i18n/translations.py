"""User-facing message translations."""

import json
from pathlib import Path
from typing import Any

from storefront.logging import get_logger

logger = get_logger(__name__)

# Supported languages with their names
SUPPORTED_LANGUAGES = {
    "pt": "Português",
    "en": "English",
}

# Default language
DEFAULT_LANGUAGE = "pt"

LOCALES_PATH = Path(__file__).parent / "locales"

# Cache for loaded translations
_translations: dict[str, dict[str, Any]] = {}


def _load_translations(lang: str) -> dict[str, Any]:
    """Load translations for a language"""
    if lang in _translations:
        return _translations[lang]

    file_path = LOCALES_PATH / f"{lang}.json"

    if not file_path.exists():
        if lang != DEFAULT_LANGUAGE:
            return _load_translations(DEFAULT_LANGUAGE)
        return {}

    try:
        with open(file_path, encoding="utf-8") as f:
            _translations[lang] = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to load translations for %s: %s", lang, e)
        _translations[lang] = {}

    return _translations[lang]


def detect_language(language_code: str | None) -> str:
    """
    Normalize a language code to a supported one.

    Args:
        language_code: Code such as "pt-BR" or "en"

    Returns:
        Supported language code, or the default
    """
    if not language_code:
        return DEFAULT_LANGUAGE

    # Normalize: "pt-BR" -> "pt"
    lang = language_code.split("-")[0].lower()
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_text(key: str, lang: str = DEFAULT_LANGUAGE, default: str | None = None) -> str:
    """
    Get translated text by key.

    Falls back to the default language, then to ``default``, then to the key.
    """
    lang = detect_language(lang)

    text = _load_translations(lang).get(key)
    if text is None and lang != DEFAULT_LANGUAGE:
        text = _load_translations(DEFAULT_LANGUAGE).get(key)

    if not isinstance(text, str):
        return default if default is not None else key
    return text
