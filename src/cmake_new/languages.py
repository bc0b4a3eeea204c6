"""
cmake_new.languages - Language and Standard Mapping
===================================================

Maps the user's ``--lang`` token onto a canonical ``Language`` and, for
C++, an optional ``CxxStandard``.

Mapping Table
-------------
Tokens are compared case-insensitively.

    c, c89, c99, c11                 → C      (no standard)
    c++20, cxx20                     → CXX    20
    c++17, cxx17                     → CXX    17
    c++14, cxx14, c++, cxx           → CXX    14
    any other token with c++ / cxx   → CXX    (no standard)
    anything else                    → UnsupportedLanguageError

>>> map_language("C++17")
(<Language.CXX: 'CXX'>, <CxxStandard.CXX17: '17'>)
>>> map_language("c99")
(<Language.C: 'C'>, None)
"""

from __future__ import annotations

from cmake_new.errors import UnknownProjectTypeError, UnsupportedLanguageError
from cmake_new.models import CxxStandard, Language, ProjectType


C_TOKENS: frozenset[str] = frozenset({"c", "c89", "c99", "c11"})

CXX_MARKERS: tuple[str, ...] = ("c++", "cxx")

CXX_STANDARDS: dict[str, CxxStandard] = {
    "c++20": CxxStandard.CXX20,
    "cxx20": CxxStandard.CXX20,
    "c++17": CxxStandard.CXX17,
    "cxx17": CxxStandard.CXX17,
    "c++14": CxxStandard.CXX14,
    "cxx14": CxxStandard.CXX14,
    "c++": CxxStandard.CXX14,
    "cxx": CxxStandard.CXX14,
}


def map_language(token: str) -> tuple[Language, CxxStandard | None]:
    """
    Resolve a language token.

    Parameters
    ----------
    token : str
        The token as given on the command line or in the config file.

    Returns
    -------
    tuple[Language, CxxStandard | None]
        The canonical language and the explicit C++ standard, if any.

    Raises
    ------
    UnsupportedLanguageError
        If the token names neither C nor C++.
    """
    normalized = token.strip().lower()

    if normalized in C_TOKENS:
        return Language.C, None

    if any(marker in normalized for marker in CXX_MARKERS):
        return Language.CXX, CXX_STANDARDS.get(normalized)

    raise UnsupportedLanguageError(token)


def map_project_type(token: str) -> ProjectType:
    """
    Resolve a project type token (``exe`` or ``lib``, any case).

    Raises
    ------
    UnknownProjectTypeError
        For any other token.
    """
    try:
        return ProjectType(token.strip().lower())
    except ValueError:
        raise UnknownProjectTypeError(token) from None
