"""Conversion of human-readable size and percentage tokens.

`docker stats` reports sizes such as ``13.5MB`` (decimal units) and
``9.809MiB`` (binary units). Each unit system has an ordered suffix table
that is matched longest suffix first, so ``kB`` is never read as a bare
``B`` with a remainder of ``10k``.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from dockerstats_exporter.core.errors import UnitConversionError

# Unsigned decimal number, optionally fractional ("10", "9.809", ".5")
_NUMBER_RE = re.compile(r"^[0-9]*\.?[0-9]+$")


class UnitSystem(Enum):
    """Unit system used to interpret a size token."""

    DECIMAL = "decimal"
    BINARY = "binary"


# (suffix, multiplier) pairs, longest suffix first within each table.
DECIMAL_UNITS: tuple[tuple[str, int], ...] = (
    ("TB", 1000**4),
    ("GB", 1000**3),
    ("MB", 1000**2),
    ("kB", 1000),
    ("KB", 1000),
    ("B", 1),
)

BINARY_UNITS: tuple[tuple[str, int], ...] = (
    ("TiB", 1024**4),
    ("GiB", 1024**3),
    ("MiB", 1024**2),
    ("kiB", 1024),
    ("KiB", 1024),
    ("B", 1),
)

_UNIT_TABLES: dict[UnitSystem, tuple[tuple[str, int], ...]] = {
    UnitSystem.DECIMAL: DECIMAL_UNITS,
    UnitSystem.BINARY: BINARY_UNITS,
}


def _match_suffix(token: str, system: UnitSystem) -> tuple[str, int] | None:
    for suffix, multiplier in _UNIT_TABLES[system]:
        if token.endswith(suffix):
            return token[: -len(suffix)], multiplier
    return None


def convert(token: str, system: UnitSystem) -> int:
    """Convert a size token to a whole number of bytes.

    Args:
        token: Size as printed by docker, e.g. "13.5MB" or "9.809MiB".
            Surrounding whitespace is ignored.
        system: Unit system whose suffix table applies.

    Returns:
        Byte count, rounded to the nearest integer with ties away from zero.

    Raises:
        UnitConversionError: If no suffix of the unit system matches or the
            remainder is not a non-negative decimal number.
    """
    stripped = token.strip()
    matched = _match_suffix(stripped, system)
    if matched is None:
        raise UnitConversionError(token, f"no {system.value} unit suffix")
    number, multiplier = matched
    number = number.strip()
    if not _NUMBER_RE.match(number):
        raise UnitConversionError(token, "invalid numeric value")
    scaled = Decimal(number) * multiplier
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_percent(text: str) -> float:
    """Parse a percentage such as "1.50%" into a float (1.5).

    Raises:
        UnitConversionError: If the text is not a finite number once the
            trailing percent sign is removed.
    """
    stripped = text.strip()
    if stripped.endswith("%"):
        stripped = stripped[:-1]
    try:
        value = float(stripped)
    except ValueError:
        raise UnitConversionError(text, "invalid percentage") from None
    if not math.isfinite(value):
        raise UnitConversionError(text, "percentage is not finite")
    return value
