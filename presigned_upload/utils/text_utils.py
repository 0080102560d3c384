"""
Text utility functions.
"""

import re

# Whitespace and the punctuation commonly used as word separators in identifiers
_SEPARATOR_RE = re.compile(r"[\s._/\\-]+")


def _case_boundary(prev: str, cur: str, nxt: str) -> bool:
    if not cur.isupper():
        return False
    # camelCase / version2Name
    if prev.islower() or prev.isdigit():
        return True
    # end of an acronym: HTTPServer -> HTTP | Server
    return prev.isupper() and nxt.islower()


def _split_case(chunk: str) -> list[str]:
    words = []
    start = 0
    for i in range(1, len(chunk)):
        nxt = chunk[i + 1] if i + 1 < len(chunk) else ""
        if _case_boundary(chunk[i - 1], chunk[i], nxt):
            words.append(chunk[start:i])
            start = i
    words.append(chunk[start:])
    return words


def split_words(text: str) -> list[str]:
    """Split an identifier into words on separators and case boundaries.

    Only separators are dropped; any other character, including non-ASCII
    letters and punctuation, stays inside its word.

    Example:
        >>> split_words("HTTPServer_name")
        ['HTTP', 'Server', 'name']
        >>> split_words("größe")
        ['größe']
    """
    words = []
    for chunk in _SEPARATOR_RE.split(text or ""):
        if chunk:
            words.extend(_split_case(chunk))
    return words


def param_case(text: str) -> str:
    """Convert any identifier style to lowercase hyphen-separated words.

    Example:
        >>> param_case("userId")
        'user-id'
        >>> param_case("Content Type")
        'content-type'
    """
    return "-".join(word.lower() for word in split_words(text))
