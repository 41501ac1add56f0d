"""
fin_intake/formatting.py
========================
Indian number system formatting (Crores/Lakhs), ratio and percent display,
and period labels for the statement and ratio views.
"""
from __future__ import annotations
from typing import Optional

from .periods import period_start_year

NOT_COMPUTED = "-"


def format_indian_number(value: Optional[float], decimals: int = 2) -> str:
    """
    Format number in Indian notation: Cr / L / K.
    e.g. 150000 → 1.50 L,  25_00_00_000 → 25.00 Cr
    """
    if value is None:
        return NOT_COMPUTED
    if value == 0:
        return "0"

    abs_val = abs(value)
    sign = "-" if value < 0 else ""

    if abs_val >= 1_00_00_000:  # ≥ 1 Crore
        cr = abs_val / 1_00_00_000
        if cr >= 1_000:
            return f"{sign}{cr:,.0f} Cr"
        return f"{sign}{cr:,.{decimals}f} Cr"
    elif abs_val >= 1_00_000:  # ≥ 1 Lakh
        lakh = abs_val / 1_00_000
        return f"{sign}{lakh:,.{decimals}f} L"
    elif abs_val >= 1_000:
        k = abs_val / 1_000
        return f"{sign}{k:,.{decimals}f} K"
    return f"{sign}{abs_val:,.{decimals}f}"


def format_ratio(value: Optional[float], decimals: int = 2) -> str:
    if value is None:
        return NOT_COMPUTED
    return f"{value:.{decimals}f}"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    if value is None:
        return NOT_COMPUTED
    return f"{value:,.{decimals}f}%"


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return NOT_COMPUTED
    return f"{value:,.{decimals}f}"


def period_label(period: str) -> str:
    """
    Display label for a period: "2023-24" → "FY 2023-24", "FY2024" → "FY 2023-24".
    Labels without a recognisable year are returned unchanged.
    """
    start = period_start_year(period)
    if start is None:
        return period
    return f"FY {start}-{str(start + 1)[-2:]}"
