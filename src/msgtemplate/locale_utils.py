"""Locale handling: code normalization, Babel lookup and language tables.

The emitter itself knows nothing about locales. MessageParser uses this
module to pick which caller-supplied language table travels with a render,
walking from the most specific locale towards ``default``.

Python 3.13+.
"""

from __future__ import annotations

import functools
import locale
import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError

from msgtemplate.constants import DEFAULT_LANGUAGE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "language_fallback_chain",
    "normalize_locale",
    "resolve_language",
]

logger = logging.getLogger(__name__)

# Variables consulted after the OS locale, highest priority first.
_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")
_PSEUDO_LOCALES = frozenset({"", "C", "POSIX"})
_SYSTEM_LOCALE_FALLBACK = "en_US"


def normalize_locale(locale_code: str) -> str:
    """Turn ``-`` separators into ``_``; Babel only parses the latter.

    >>> normalize_locale("pt-BR")
    'pt_BR'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Parse a locale code into a Babel Locale, memoized per code.

    Raises:
        babel.core.UnknownLocaleError: Babel has no data for the code
        ValueError: The code is not a well-formed identifier
    """
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def language_fallback_chain(locale_code: str) -> tuple[str, ...]:
    """Build the ordered lookup chain for a locale.

    Most specific first, ending with DEFAULT_LANGUAGE:
    ``pt-BR`` -> ``("pt_BR", "pt", "default")``.
    Script subtags are kept as an intermediate step:
    ``zh-Hant-TW`` -> ``("zh_Hant_TW", "zh_Hant", "zh", "default")``.

    Unknown or malformed locales log a warning and yield only the
    normalized code and the default.

    Args:
        locale_code: Locale code (BCP-47 or POSIX)

    Returns:
        Tuple of lookup keys without duplicates
    """
    chain: list[str] = []
    try:
        parsed = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(
            "Unknown locale '%s': %s. Falling back to '%s'", locale_code, e, DEFAULT_LANGUAGE
        )
        if locale_code:
            chain.append(normalize_locale(locale_code))
    else:
        chain.append(str(parsed))
        if parsed.script:
            chain.append(f"{parsed.language}_{parsed.script}")
        chain.append(parsed.language)
    chain.append(DEFAULT_LANGUAGE)
    return tuple(dict.fromkeys(chain))


def resolve_language[L](locale_code: str, languages: Mapping[str, L]) -> L | None:
    """Pick the language table for a locale from a caller-supplied mapping.

    Keys of ``languages`` may use either BCP-47 or POSIX separators and any
    letter case; they are compared normalized and case-insensitively.

    Args:
        locale_code: Locale to look up
        languages: Mapping of locale code -> language table

    Returns:
        The first table along language_fallback_chain(), or None

    Example:
        >>> tables = {"pt": "PT", "default": "DEFAULT"}
        >>> resolve_language("pt-BR", tables)
        'PT'
        >>> resolve_language("fi", tables)
        'DEFAULT'
    """
    index = {normalize_locale(key).lower(): value for key, value in languages.items()}
    for key in language_fallback_chain(locale_code):
        table = index.get(key.lower())
        if table is not None:
            return table
    return None


def _strip_encoding(code: str | None) -> str | None:
    """``de_DE.UTF-8`` -> ``de_DE``; None for pseudo-locales."""
    if code is None:
        return None
    bare = code.partition(".")[0]
    return None if bare in _PSEUDO_LOCALES else normalize_locale(bare)


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Guess the user's locale for MessageParser's default.

    The interpreter's own locale wins, then the first usable value of
    LC_ALL, LC_MESSAGES and LANG. ``C``/``POSIX`` never count.

    Args:
        raise_on_failure: Raise RuntimeError instead of answering ``en_US``
            when nothing usable is found.

    Returns:
        A POSIX-style code such as ``pt_BR``.
    """
    try:
        os_code = locale.getlocale()[0]
    except ValueError:
        os_code = None

    candidates = [os_code, *(os.environ.get(name) for name in _LOCALE_ENV_VARS)]
    for candidate in candidates:
        detected = _strip_encoding(candidate)
        if detected:
            return detected

    if raise_on_failure:
        msg = f"Could not determine system locale from the OS or {', '.join(_LOCALE_ENV_VARS)}"
        raise RuntimeError(msg)
    logger.debug("No system locale found; using %s", _SYSTEM_LOCALE_FALLBACK)
    return _SYSTEM_LOCALE_FALLBACK
