"""Identifier case conversion."""

import re

__all__ = [
    "split_words",
    "to_snake_case",
    "to_camel_case",
    "to_pascal_case",
    "to_kebab_case",
]

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")

# Acronym followed by a capitalized word, a (capitalized) lowercase word, or a
# trailing run of capitals.
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+[0-9]*")


def split_words(text: str) -> list[str]:
    """Split an identifier into words on separators and case changes.

    >>> split_words("Full Name")
    ['Full', 'Name']
    >>> split_words("HTTPServer_port")
    ['HTTP', 'Server', 'port']
    """
    words = []
    for chunk in _SEPARATORS.split(text):
        words.extend(_WORD.findall(chunk))
    return words


def to_snake_case(text: str) -> str:
    return "_".join(word.lower() for word in split_words(text))


def to_kebab_case(text: str) -> str:
    return "-".join(word.lower() for word in split_words(text))


def to_camel_case(text: str) -> str:
    words = split_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def to_pascal_case(text: str) -> str:
    return "".join(word.capitalize() for word in split_words(text))
