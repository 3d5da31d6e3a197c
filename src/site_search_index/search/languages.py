"""
Tokenizer Languages

Static registry of the languages the index builder can stem, keyed by
ISO-like code, plus the filter that validates a requested language list
against it. English is the baseline language and is always accepted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

logger = logging.getLogger("search.languages")

BASELINE_LANGUAGE = "en"

# Code -> Snowball stemmer language name.
SUPPORTED_LANGUAGES: Dict[str, str] = {
    "ar": "arabic",
    "da": "danish",
    "de": "german",
    "es": "spanish",
    "fi": "finnish",
    "fr": "french",
    "hu": "hungarian",
    "it": "italian",
    "nl": "dutch",
    "no": "norwegian",
    "pt": "portuguese",
    "ro": "romanian",
    "ru": "russian",
    "sv": "swedish",
}

# Codes used by lunr-languages that map onto a registered stemmer.
LANGUAGE_ALIASES: Dict[str, str] = {
    "du": "nl",
}


@dataclass(frozen=True)
class LanguageWarning:
    """A requested language code that was dropped."""

    code: str
    message: str


def is_supported(code: str) -> bool:
    return code == BASELINE_LANGUAGE or code in SUPPORTED_LANGUAGES


def filter_languages_with_warnings(
    languages: Sequence[str],
) -> Tuple[List[str], List[LanguageWarning]]:
    """
    Validate ``languages`` and report the codes that were dropped.

    Codes are lowercased and aliases resolved. Input order is preserved
    and duplicates are kept.
    """
    accepted: List[str] = []
    warnings: List[LanguageWarning] = []

    for lang in languages:
        code = lang.lower()
        code = LANGUAGE_ALIASES.get(code, code)
        if is_supported(code):
            accepted.append(code)
            continue

        warning = LanguageWarning(code=code, message=f"{code} is not supported")
        logger.warning(warning.message)
        warnings.append(warning)

    return accepted, warnings


def filter_languages(languages: Sequence[str]) -> List[str]:
    """
    Return the supported subset of ``languages``, lowercased, in order.

    Unsupported codes are logged and dropped; this never raises.
    """
    accepted, _ = filter_languages_with_warnings(languages)
    return accepted
