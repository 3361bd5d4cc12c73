"""Configuration constants, localized strings, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Supported languages, user-facing strings, and the
external highlighter defaults are plain data structures — not buried in
the weaving logic — so they can be changed without touching it.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts, sets, and strings, each overridable through an
environment variable. WeaveConfig bundles the per-run rendering options.

RULES:
- Languages are "fr", "en", or "non-verbose" (rendered as English)
- reduce_language() is the only place a language code is validated
- MESSAGES holds every localized string the page shell displays
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------

SUPPORTED_LANGUAGES: set[str] = {"fr", "en", "non-verbose"}
"""Language options accepted on the command line."""

_REDUCED_LANGUAGE: dict[str, str] = {
    "fr": "fr",
    "en": "en",
    "non-verbose": "en",
}

LEXER_NAMES: dict[str, str] = {
    "fr": "catala_fr",
    "en": "catala_en",
}
"""Pygments lexer alias used for the code fragments of each language."""

LEGAL_REFERENCE_LANGUAGE = "fr"
"""Only French documents link article titles to Légifrance."""


def reduce_language(language: str) -> str:
    """Map a language option to the language used for rendering.

    WHY: The non-verbose syntax has no localized strings of its own;
    it renders with the English ones.

    RULES:
    - "fr" → "fr", "en" → "en", "non-verbose" → "en"
    - Matching is case-insensitive
    - Raises ValueError for any other code
    """
    reduced = _REDUCED_LANGUAGE.get(language.strip().lower())
    if reduced is None:
        raise ValueError(
            "Unsupported language '{}'. Supported languages: {}".format(
                language, ", ".join(sorted(SUPPORTED_LANGUAGES))
            )
        )
    return reduced


def lexer_for(language: str) -> str:
    """Return the Pygments lexer alias for a (possibly unreduced) language."""
    return LEXER_NAMES[reduce_language(language)]


# ---------------------------------------------------------------------------
# Localized page strings
# ---------------------------------------------------------------------------

MESSAGES: dict[str, dict[str, str]] = {
    "fr": {
        "title": "Implémentation de texte législatif",
        "generated_by": "Document généré par",
        "source_files": "Fichiers sources tissés dans ce document",
        "last_modified": "dernière modification le",
    },
    "en": {
        "title": "Legislative text implementation",
        "generated_by": "Document generated by",
        "source_files": "Source files weaved in this document",
        "last_modified": "last modification",
    },
}


def message(language: str, key: str) -> str:
    """Look up a localized page string."""
    return MESSAGES[reduce_language(language)][key]


# ---------------------------------------------------------------------------
# Highlighter and link defaults
# ---------------------------------------------------------------------------

DEFAULT_LANGUAGE = os.getenv("CATALA_WEAVER_LANGUAGE", "en")
DEFAULT_PYGMENTIZE = os.getenv("CATALA_WEAVER_PYGMENTIZE", "pygmentize")
DEFAULT_HIGHLIGHTER = os.getenv("CATALA_WEAVER_HIGHLIGHTER", "pygmentize")
DEFAULT_STYLE = os.getenv("CATALA_WEAVER_STYLE", "colorful")
LEGIFRANCE_BASE_URL = os.getenv(
    "LEGIFRANCE_BASE_URL", "https://beta.legifrance.gouv.fr/codes/id"
).rstrip("/")

CSS_SCOPE = ".catala-code"
"""CSS selector the generated stylesheet is scoped to."""


@dataclass
class WeaveConfig:
    """Rendering options for one weaving run.

    RULES:
    - language is stored reduced ("fr" or "en")
    - highlighter_override replaces the pygmentize executable name
    - highlighter selects the delegate implementation by registry key
    """

    language: str = DEFAULT_LANGUAGE
    highlighter_override: Optional[str] = None
    highlighter: str = DEFAULT_HIGHLIGHTER
    style: str = DEFAULT_STYLE

    def __post_init__(self) -> None:
        self.language = reduce_language(self.language)
