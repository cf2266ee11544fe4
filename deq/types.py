"""Value model for deq: integers, reals and strings."""
from __future__ import annotations
from enum import Enum
from typing import Any
import math
import re


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class DeqType(Enum):
    INTEGER = "integer"
    REAL = "real"
    STRING = "string"

    def human(self, plural: bool = False) -> str:
        """Name used in diagnostics: 'an integer', 'reals', ..."""
        if plural:
            return f"{self.value}s"
        article = "an" if self.value[0] in "aeiou" else "a"
        return f"{article} {self.value}"


class DeqValue:
    """A value on the deq. `origin` is the index of the token that made it."""

    __slots__ = ("value", "type", "origin")

    def __init__(self, value: Any, deq_type: DeqType, origin: int):
        self.value = value
        self.type = deq_type
        self.origin = origin

    def __repr__(self):
        return f"DeqValue({self.type.value}: {self.value!r} @{self.origin})"

    def __str__(self):
        if self.type == DeqType.REAL:
            return render_real(self.value)
        return str(self.value)

    def __eq__(self, other):
        if not isinstance(other, DeqValue):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __hash__(self):
        return hash((self.type, self.value))

    def trace(self) -> str:
        return f"{self}({self.type.human()})"


# ============================================================
# Constructors
# ============================================================

def deq_integer(value: int, origin: int) -> DeqValue:
    return DeqValue(wrap_int64(int(value)), DeqType.INTEGER, origin)

def deq_real(value: float, origin: int) -> DeqValue:
    return DeqValue(float(value), DeqType.REAL, origin)

def deq_string(value: str, origin: int) -> DeqValue:
    return DeqValue(value, DeqType.STRING, origin)

def deq_bool(flag: bool, origin: int) -> DeqValue:
    return DeqValue(1 if flag else 0, DeqType.INTEGER, origin)


# ============================================================
# Rendering
# ============================================================

def render_real(x: float) -> str:
    """Six significant digits, like a C++ stream with default precision."""
    if math.isnan(x):
        return "nan" if math.copysign(1.0, x) > 0 else "-nan"
    return format(x, "g")


# ============================================================
# 64-bit integer arithmetic
# ============================================================

def wrap_int64(n: int) -> int:
    """Reduce n to a signed 64-bit two's-complement integer."""
    n &= (1 << 64) - 1
    if n > INT64_MAX:
        n -= 1 << 64
    return n


def int_div(a: int, b: int) -> int:
    """Division truncating toward zero. Raises ZeroDivisionError."""
    if b == 0:
        raise ZeroDivisionError("division by zero")
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap_int64(q)


def int_mod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend. Raises ZeroDivisionError."""
    if b == 0:
        raise ZeroDivisionError("division by zero")
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def shift_left(a: int, count: int) -> int:
    if count < 0:
        raise ValueError("negative shift count")
    if count >= 64:
        return 0
    return wrap_int64(a << count)


def shift_right(a: int, count: int) -> int:
    """Arithmetic right shift."""
    if count < 0:
        raise ValueError("negative shift count")
    return a >> min(count, 63)


def real_div(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


# ============================================================
# Literal parsing and conversions
# ============================================================

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_REAL_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_integer(text: str) -> int:
    """Parse decimal integer text. Raises ValueError."""
    text = text.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text}")
    n = int(text, 10)
    if not INT64_MIN <= n <= INT64_MAX:
        raise ValueError(f"integer out of range: {text}")
    return n


def parse_real(text: str) -> float:
    """Parse decimal real text. Raises ValueError."""
    text = text.strip()
    if not _REAL_RE.fullmatch(text):
        raise ValueError(f"invalid real: {text}")
    return float(text)


def unescape(text: str) -> str:
    """Decode backslash escapes inside a string literal."""
    result = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            esc = text[i + 1]
            if esc == "n":
                result.append("\n")
            elif esc == "t":
                result.append("\t")
            elif esc in ('"', "\\"):
                result.append(esc)
            else:
                result.append("\\" + esc)
            i += 2
            continue
        result.append(ch)
        i += 1
    return "".join(result)


def real_to_integer(x: float) -> int:
    """Truncate toward zero. Raises ValueError for nan or infinity."""
    if math.isnan(x) or math.isinf(x):
        raise ValueError(f"cannot convert {render_real(x)} to an integer")
    return wrap_int64(int(x))
