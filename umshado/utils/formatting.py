"""Text helpers for chat messages and notification previews."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[int, float, Decimal]

ELLIPSIS = "…"


def format_rand(amount: Optional[Number]) -> str:
    """
    Format an amount the way the client shows Rand prices (en-ZA grouping).

    ``format_rand(18000)`` -> ``"R18 000"``; cents are kept only when non-zero.
    """
    value = Decimal(str(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    whole, cents = divmod(abs(value), 1)
    grouped = f"{int(whole):,}".replace(",", " ")
    sign = "-" if value < 0 else ""
    if cents:
        return f"R{sign}{grouped},{int(cents * 100):02d}"
    return f"R{sign}{grouped}"


def truncate_preview(text: str, max_length: int = 80) -> str:
    """Trim text and cut it to ``max_length`` characters, ending in an ellipsis."""
    text = (text or "").strip()
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + ELLIPSIS
