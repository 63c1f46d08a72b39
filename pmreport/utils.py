"""
Utility Functions

Helper functions for common operations.
"""

import math


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB")
    """
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"


def format_duration(seconds: float) -> str:
    """
    Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (e.g., "2.5m")
    """
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.2f}h"


def safe_divide(a: float, b: float, default: float = math.nan) -> float:
    """
    Divide two numbers, returning default if the denominator is zero or NaN.

    Args:
        a: Numerator
        b: Denominator
        default: Value returned when b is zero or NaN

    Returns:
        Result of division or default
    """
    if b == 0 or math.isnan(b):
        return default
    return a / b


def percent_delta(value: float, reference: float) -> float:
    """Signed percentage difference of value relative to reference."""
    return safe_divide(value - reference, reference) * 100
