"""Human-readable formatting helpers for validation output."""

SIZE_UNIT = 1024
SIZE_PREFIXES = "KMGTPE"


def format_size(size: int) -> str:
    """
    Format a byte count with binary prefixes.

    Sizes below 1024 are shown as whole bytes; larger sizes use one decimal
    place and the largest prefix that keeps the value at or above 1.0.

    Args:
        size: Size in bytes

    Returns:
        Formatted size such as "1023 B" or "1.5 MB"
    """
    if size < SIZE_UNIT:
        return f"{size} B"

    divisor, exponent = SIZE_UNIT, 0
    remaining = size // SIZE_UNIT
    while remaining >= SIZE_UNIT and exponent < len(SIZE_PREFIXES) - 1:
        divisor *= SIZE_UNIT
        exponent += 1
        remaining //= SIZE_UNIT

    return f"{size / divisor:.1f} {SIZE_PREFIXES[exponent]}B"


def display_path(path: str) -> str:
    """
    Make a filesystem path safe to print.

    Undecodable bytes in POSIX file names surface as lone surrogates, which
    strict UTF-8 streams refuse to encode; they are shown as \\xNN escapes.
    """
    return path.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")
