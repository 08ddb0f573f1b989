"""Map opaque user identifiers onto stable numeric ids.

Users are identified by a generated string (the token subject), while reviews
store their owner as an integer. The integer is derived with a 31-based
rolling hash over the UTF-16 code units of the identifier, using 32-bit
signed wraparound. Browser clients compute the same value with
``((h << 5) - h) + c | 0``, so the arithmetic must match exactly.
"""

import struct

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_UINT32_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    value &= _UINT32_MASK
    if value > INT32_MAX:
        value -= 2**32
    return value


def utf16_code_units(text: str) -> list[int]:
    """Return the UTF-16 code units of ``text``.

    Characters outside the Basic Multilingual Plane yield two units
    (a surrogate pair), as they do in JavaScript strings.
    """
    data = text.encode("utf-16-le", errors="surrogatepass")
    return [unit for (unit,) in struct.iter_unpack("<H", data)]


def rolling_hash(text: str) -> int:
    """Signed 32-bit ``h = h * 31 + unit`` hash of ``text``."""
    h = 0
    for unit in utf16_code_units(text):
        h = _to_int32(h * 31 + unit)
    return h


def map_identity(identifier: str | None) -> int:
    """Derive the numeric user id for an opaque identifier.

    Returns 0 for a missing or empty identifier, meaning "no identity".
    The absolute value of ``INT32_MIN`` does not fit in 32 bits, so that
    hash maps to ``INT32_MAX`` instead.
    """
    if not identifier:
        return 0

    h = rolling_hash(identifier)
    if h == INT32_MIN:
        return INT32_MAX
    return abs(h)
