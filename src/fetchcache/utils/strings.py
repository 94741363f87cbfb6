# /src/fetchcache/utils/strings.py
"""
Robust string utilities.
"""

from __future__ import annotations

import re

# lowercase run, Capitalized word, UPPER run (not followed by lowercase), or digits
_WORDS = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]+|[0-9]|\b|_|$)|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def words(s: str) -> list[str]:
    return _WORDS.findall(s)


def to_snake(s: str) -> str:
    """
    'fooBar' -> 'foo_bar', 'HTTPServer2' -> 'http_server_2', '--a b--' -> 'a_b'.
    """
    return "_".join(w.lower() for w in words(s.strip()))
