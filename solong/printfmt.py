"""A small printf: the conversions c, d, i, p, s, u, x, X and %%."""

from __future__ import annotations

import sys
from typing import Any, Iterator

__all__ = ["format_printf", "print_formatted"]

_UINT32_MASK = 0xFFFFFFFF
_POINTER_MASK = 0xFFFFFFFFFFFFFFFF


def _to_int32(value: int) -> int:
    value = int(value) & _UINT32_MASK
    return value - (1 << 32) if value >= (1 << 31) else value


def _to_uint32(value: int) -> int:
    return int(value) & _UINT32_MASK


def _convert_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character")
        return value
    return chr(int(value) & 0xFF)


def _convert_pointer(value: Any) -> str:
    if not value:
        return "0x0"
    return f"0x{int(value) & _POINTER_MASK:x}"


def _convert_string(value: Any) -> str:
    return "(null)" if value is None else str(value)


_CONVERSIONS = {
    "c": _convert_char,
    "d": lambda value: str(_to_int32(value)),
    "i": lambda value: str(_to_int32(value)),
    "p": _convert_pointer,
    "s": _convert_string,
    "u": lambda value: str(_to_uint32(value)),
    "x": lambda value: f"{_to_uint32(value):x}",
    "X": lambda value: f"{_to_uint32(value):X}",
}


def _next_argument(values: Iterator[Any], letter: str) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise TypeError(f"not enough arguments for %{letter}") from None


def format_printf(fmt: str, *args: Any) -> str:
    """Expand fmt with args and return the resulting text.

    Integers are treated as 32-bit values, as a C int would be. An unknown
    conversion letter produces nothing and consumes no argument; a lone
    trailing '%' is dropped.
    """
    values = iter(args)
    pieces: list[str] = []
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            pieces.append(char)
            continue
        letter = next(chars, "")
        if letter == "%":
            pieces.append("%")
            continue
        convert = _CONVERSIONS.get(letter)
        if convert is not None:
            pieces.append(convert(_next_argument(values, letter)))
    return "".join(pieces)


def print_formatted(fmt: str, *args: Any) -> int:
    """Write the expanded format to standard output.

    Returns the number of bytes written, counted in UTF-8.
    """
    text = format_printf(fmt, *args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text.encode("utf-8"))