"""Data units for byte-valued metrics."""

from enum import Enum


class DataUnit(str, Enum):
    """Display unit for byte-valued metrics.

    SI units (kb, mb, ...) use powers of 1000, IEC units (kib, mib, ...)
    use powers of 1024.
    """

    BITS = "bits"
    BYTES = "bytes"
    KB = "kb"
    KIB = "kib"
    MB = "mb"
    MIB = "mib"
    GB = "gb"
    GIB = "gib"
    TB = "tb"
    TIB = "tib"


# Bytes per unit
_FACTORS = {
    DataUnit.BITS: 1 / 8,
    DataUnit.BYTES: 1,
    DataUnit.KB: 1000,
    DataUnit.KIB: 1024,
    DataUnit.MB: 1000**2,
    DataUnit.MIB: 1024**2,
    DataUnit.GB: 1000**3,
    DataUnit.GIB: 1024**3,
    DataUnit.TB: 1000**4,
    DataUnit.TIB: 1024**4,
}


def convert_bytes(value: float, unit: DataUnit) -> float:
    """Convert a byte count into the given unit."""
    if unit is DataUnit.BYTES:
        return value
    return value / _FACTORS[unit]


def format_bytes(value: int, unit: DataUnit = DataUnit.BYTES) -> str:
    """Render a byte count in the given unit.

    Bits and bytes render as whole numbers, every larger unit with exactly
    two fractional digits.

    Examples:
        >>> format_bytes(16000000000)
        '16000000000'
        >>> format_bytes(1536, DataUnit.KIB)
        '1.50'
        >>> format_bytes(3, DataUnit.BITS)
        '24'
    """
    if unit is DataUnit.BYTES:
        return str(int(value))
    converted = convert_bytes(value, unit)
    if unit is DataUnit.BITS:
        return f"{converted:.0f}"
    return f"{converted:.2f}"
