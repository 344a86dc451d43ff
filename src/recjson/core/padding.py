"""
Zero-padding for ISO-8601 date/time components.

``pad_zero`` turns integers such as month, day, or hour into the two-digit
text used when assembling ISO-8601 strings by concatenation.
"""

from __future__ import annotations

from .constants import PAD_WIDTH

__all__ = ["pad_zero"]


def pad_zero(value: int) -> str:
    """
    Left-pad an integer's decimal text with a single "0" when it is below 10.

    Args:
        value (int): Integer component (e.g. month=1).

    Returns:
        str: ``"0" + str(value)`` when ``value < 10`` or the text is shorter than
        two characters; otherwise ``str(value)``.

    Notes:
        Negative values are below 10 and therefore also receive one leading
        "0" (``-5 -> "0-5"``); callers pass calendar components, which are
        never negative.

    Examples:
        >>> [pad_zero(v) for v in (0, 5, 19)]
        ['00', '05', '19']
    """
    text = str(int(value))
    if value < 10 or len(text) < PAD_WIDTH:
        text = "0" + text
    return text
