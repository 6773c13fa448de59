# Internationalization Module
from .translations import SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE, detect_language, get_text

__all__ = ["SUPPORTED_LANGUAGES", "DEFAULT_LANGUAGE", "detect_language", "get_text"]
