"""Retention duration parsing.

A retention duration is either a bare hour count (``"336"``, ``"1.5"``) or a
duration expression made of ``<number><unit>`` terms, e.g. ``"336h"``,
``"1h30m"`` or ``"14d"``.
"""

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Dict

from epgstation_cleaner.core.errors import DurationError

# Microseconds per unit
UNIT_MICROSECONDS: Dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # U+00B5 micro sign
    "μs": Decimal(1),  # U+03BC greek mu
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
    "d": Decimal(86_400_000_000),
    "w": Decimal(604_800_000_000),
}

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
# Longer units first so "ms" is not read as "m" followed by "s"
_UNIT = "|".join(sorted((re.escape(u) for u in UNIT_MICROSECONDS), key=len, reverse=True))

_HOURS_RE = re.compile(rf"^{_NUMBER}$")
_TERM_RE = re.compile(rf"({_NUMBER})({_UNIT})")
_EXPRESSION_RE = re.compile(rf"^(?:{_NUMBER}(?:{_UNIT}))+$")


def parse_duration(value: str) -> timedelta:
    """Parse a retention duration.

    Args:
        value: Hour count or duration expression.

    Returns:
        The duration as a timedelta (microsecond precision).

    Raises:
        DurationError: If the value is empty, negative or malformed.
    """
    if value is None:
        raise DurationError("retention duration is required")

    text = str(value).strip()
    if not text:
        raise DurationError("retention duration is empty")

    if text.startswith("-"):
        raise DurationError(f"retention duration must not be negative: {value!r}")
    if text.startswith("+"):
        text = text[1:]

    try:
        if _HOURS_RE.match(text):
            total = Decimal(text) * UNIT_MICROSECONDS["h"]
        elif _EXPRESSION_RE.match(text):
            total = sum(
                (Decimal(number) * UNIT_MICROSECONDS[unit] for number, unit in _TERM_RE.findall(text)),
                Decimal(0),
            )
        else:
            raise DurationError(f"invalid retention duration: {value!r}")
    except InvalidOperation as e:
        raise DurationError(f"invalid retention duration: {value!r}") from e

    try:
        return timedelta(microseconds=int(total.to_integral_value()))
    except OverflowError as e:
        raise DurationError(f"retention duration out of range: {value!r}") from e


def format_duration(duration: timedelta) -> str:
    """Render a timedelta as a compact ``XhYmZs`` expression for log output."""
    total_seconds = duration.total_seconds()
    hours, remainder = divmod(int(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    fraction = total_seconds - int(total_seconds)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes or (hours and (seconds or fraction)):
        parts.append(f"{minutes}m")
    if seconds or fraction or not parts:
        secs = seconds + fraction
        parts.append(f"{secs:g}s")
    return "".join(parts)
