"""
Text formatting utilities.
"""


def format_number(value: int) -> str:
    """Format an engagement count for display.

    Args:
        value: Non-negative count

    Returns:
        "2.0M" for millions, "1.5K" for thousands, plain digits otherwise
    """
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)


def format_duration(seconds: int | None) -> str | None:
    """Format a video length as a card label.

    Args:
        seconds: Duration in seconds

    Returns:
        "45s" below one minute, "m:ss" otherwise (e.g. "61:05"), or None
    """
    if not seconds:
        return None

    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    secs = seconds % 60
    return f"{minutes}:{secs:02d}"
