"""Small string helpers: integer parsing and formatting, splitting, trimming."""

from __future__ import annotations

__all__ = ["atoi", "itoa", "split", "strtrim", "substr", "strnstr"]

_WHITESPACE = " \t\n\v\f\r"


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does.

    Leading whitespace is skipped, one optional sign is accepted, and digits
    are read until the first non-digit. Text with no digits yields 0.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = []
    for char in rest:
        if not "0" <= char <= "9":
            break
        digits.append(char)
    if not digits:
        return 0
    return sign * int("".join(digits))


def itoa(n: int) -> str:
    """Return the decimal representation of an integer."""
    return str(int(n))


def split(text: str, sep: str) -> list[str]:
    """Split text on a single separator character, dropping empty pieces."""
    if len(sep) != 1:
        raise ValueError("separator must be exactly one character")
    return [word for word in text.split(sep) if word]


def strtrim(text: str, charset: str) -> str:
    """Remove every character found in charset from both ends of text."""
    return text.strip(charset)


def substr(text: str, start: int, length: int) -> str:
    """Return at most length characters of text beginning at start.

    A start past the end of text gives an empty string.
    """
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    if start >= len(text):
        return ""
    return text[start:start + length]


def strnstr(haystack: str, needle: str, length: int) -> int:
    """Find needle within the first length characters of haystack.

    Returns the index of the first occurrence that lies wholly inside that
    window, or -1 if there is none. An empty needle is found at index 0.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    if not needle:
        return 0
    return haystack.find(needle, 0, length)