"""
Internationalization (i18n) module for the Faerie Sprite Editor.

Errors and warnings only carry a key and arguments; this module turns them
into text. Adding a language:
1. Add its code to LANGUAGES
2. Add a dict with the same key structure to TRANSLATIONS

Usage:
    from faerie_editor.i18n import tr, set_language

    tr("parse.cfg.type", line=1)  # "Invalid sprite type on line 1."
    set_language("pt_BR")
"""

from typing import Any, Dict, List, Optional

from .translations import TRANSLATIONS, LANGUAGES

DEFAULT_LANGUAGE = "en"

_current_language = DEFAULT_LANGUAGE


def set_language(lang_code: str) -> bool:
    """
    Set the current language.

    Returns:
        True if the language exists, False otherwise (the language is unchanged)
    """
    global _current_language
    if lang_code in TRANSLATIONS:
        _current_language = lang_code
        return True
    return False


def get_language() -> str:
    """Get the current language code."""
    return _current_language


def get_available_languages() -> Dict[str, str]:
    """Get {code: display name} for every language."""
    return LANGUAGES.copy()


def _lookup(table: Dict[str, Any], keys: List[str]) -> Optional[str]:
    value: Any = table
    for k in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(k)
    return value if isinstance(value, str) else None


def tr(key: str, /, **kwargs) -> str:
    """
    Get the translated string for a dotted key.

    Falls back to English when the current language lacks the key, and to the
    key itself when English lacks it too. Missing format arguments leave the
    string unformatted.
    """
    keys = key.split(".")
    value = _lookup(TRANSLATIONS.get(_current_language, {}), keys)

    if value is None and _current_language != DEFAULT_LANGUAGE:
        value = _lookup(TRANSLATIONS[DEFAULT_LANGUAGE], keys)

    if value is None:
        return key

    if kwargs:
        try:
            return value.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return value

    return value
