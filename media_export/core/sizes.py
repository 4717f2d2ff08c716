"""Human-readable byte sizes for the export report."""

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

# Width of the size column in report tables
SIZE_COLUMN_WIDTH = 9


def bytes_to_size_string(num_bytes: int) -> str:
    """
    Format a byte count using 1024-based units, e.g. ``1.5 MB``.

    Values below 1 KB are printed as whole bytes; larger values keep
    two decimals with trailing zeros removed.
    """
    if num_bytes < 0:
        raise ValueError("Byte count must not be negative")

    size = float(num_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{num_bytes} B"

    # 1023.999 KB would print as 1024 KB
    if round(size, 2) >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    number = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[unit_index]}"


def padded_size_string(num_bytes: int) -> str:
    """Size string right-aligned to the report column width."""
    return bytes_to_size_string(num_bytes).rjust(SIZE_COLUMN_WIDTH)
