"""
This module contains helper functions for formatting data into human-readable strings.

The two formatters here produce the duration and bit rate fields of the report.
Their output must be stable between runs and platforms, since reports from two
scans are compared with plain `diff`.
"""

from datetime import timedelta

from ..config.common import BIT_RATE_KILO_THRESHOLD, BIT_RATE_MEGA_THRESHOLD


def format_duration(duration: timedelta) -> str:
    """
    Formats a timedelta into a "DD:HH:MM:SS.cc" string, eliding leading zero units.

    Days and hours are only written when they are non-zero; minutes and seconds
    are always written. Units are truncated, never rounded up. The fractional
    part is the sub-second remainder truncated to hundredths and written
    without padding, and only when there is one.

    Args:
        duration: The timedelta to format. Negative values are treated as zero.

    Returns:
        The formatted duration. For example, 91 seconds becomes "01:31",
        86400 seconds becomes "01:00:00:00" and 1.12 seconds becomes "00:01.12".
    """
    total_seconds = max(0, duration.days * 86400 + duration.seconds)
    subsec_nanos = duration.microseconds * 1000 if duration >= timedelta(0) else 0

    minutes = total_seconds // 60
    hours = minutes // 60
    days = hours // 24

    result = ""
    if days > 0:
        result += f"{days:02}:"
    if hours > 0:
        result += f"{hours % 24:02}:"
    result += f"{minutes % 60:02}:"
    result += f"{total_seconds % 60:02}"

    fraction = subsec_nanos * 1e-7
    if fraction > 0.0:
        result += f".{int(fraction)}"

    return result


def format_bit_rate(bit_rate: int) -> str:
    """
    Converts a bit rate in bits per second to a human-readable string.

    The scale is decimal and the thresholds are strict, so exactly 1,000,000
    is still shown in KB/s and exactly 1,000 in B/s.

    Args:
        bit_rate: The bit rate in bits per second.

    Returns:
        A formatted string such as "12.00 MB/s", "12.00 KB/s" or "12 B/s".
    """
    if bit_rate > BIT_RATE_MEGA_THRESHOLD:
        return f"{bit_rate / 1_000_000:.2f} MB/s"
    elif bit_rate > BIT_RATE_KILO_THRESHOLD:
        return f"{bit_rate / 1_000:.2f} KB/s"
    return f"{bit_rate} B/s"
