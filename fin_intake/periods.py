"""
fin_intake/periods.py
=====================
Reporting period ordering and propagation.

Periods are opaque labels ("2023-24", "FY2024", "Mar 2024") ordered by the
start year of the fiscal year they denote. A tree tracks them newest first,
and every line item in the tree is keyed by exactly that list.
"""
from __future__ import annotations
import logging
import re
from datetime import date
from typing import Iterable, List, Optional, Tuple

from .types import FinancialStatementTree
from .tree import iter_line_items

logger = logging.getLogger(__name__)


# ─── Ordering ─────────────────────────────────────────────────────────────────

def period_start_year(label: str) -> Optional[int]:
    """
    Start year of the fiscal year a period label denotes.
    Supports: 2024-25, 2024/25, FY2025, FY25, Mar 2025, plain YYYY.
    FY / March labels name the year the fiscal year ends in.
    """
    s = str(label).strip()

    # 2024-25 or 2024/2025
    m = re.search(r'(\d{4})\s*[-/]\s*(\d{2,4})', s)
    if m:
        y = int(m.group(1))
        if 1900 <= y <= 2099:
            return y

    # FY2025 or FY 2025
    m = re.search(r'FY\s*(\d{4})', s, re.IGNORECASE)
    if m:
        return int(m.group(1)) - 1

    # FY25 / FY 25
    m = re.search(r'FY\s*(\d{2})(?!\d)', s, re.IGNORECASE)
    if m:
        return 2000 + int(m.group(1)) - 1

    # Mar 2025 / Mar-25 / Mar'25
    m = re.search(r"Mar(?:ch)?['\-\s]?(\d{2,4})", s, re.IGNORECASE)
    if m:
        yr = m.group(1)
        return (int(yr) if len(yr) == 4 else 2000 + int(yr)) - 1

    m = re.search(r'(20\d{2}|19\d{2})', s)
    if m:
        return int(m.group(1))

    return None


def period_sort_key(label: str) -> Tuple[int, int, str]:
    year = period_start_year(label)
    return (0 if year is None else 1, year or 0, label)


def sort_periods(periods: Iterable[str]) -> List[str]:
    """Deduplicate and order newest first; unparseable labels go last."""
    unique = list(dict.fromkeys(periods))
    return sorted(unique, key=period_sort_key, reverse=True)


def current_period_label(today: Optional[date] = None) -> str:
    """Default label for a newly added year, e.g. 2026 → "2026-27"."""
    year = (today or date.today()).year
    return f"{year}-{str(year + 1)[-2:]}"


# ─── Propagation ──────────────────────────────────────────────────────────────

def add_period(tree: FinancialStatementTree, new_period: str) -> FinancialStatementTree:
    """
    Track ``new_period`` and key it into every line item with no value.
    Already tracked periods leave the tree untouched.
    """
    if new_period in tree.periods:
        logger.debug("Period %s already tracked; add ignored", new_period)
        return tree

    periods = sort_periods([*tree.periods, new_period])
    for _path, item in iter_line_items(tree):
        # rebuilt so key order follows the tracked order
        item.values = {p: item.values.get(p) for p in periods}
    tree.periods = periods
    logger.debug("Added period %s; tracking %s", new_period, tree.periods)
    return tree


def remove_period(tree: FinancialStatementTree, period: str) -> FinancialStatementTree:
    """
    Stop tracking ``period`` and drop it from every line item.
    The last remaining period and untracked periods are left in place.
    """
    if period not in tree.periods:
        logger.debug("Period %s not tracked; remove ignored", period)
        return tree
    if len(tree.periods) <= 1:
        logger.debug("Period %s is the only tracked period; remove ignored", period)
        return tree

    for _path, item in iter_line_items(tree):
        item.values.pop(period, None)
    tree.periods = [p for p in tree.periods if p != period]
    logger.debug("Removed period %s; tracking %s", period, tree.periods)
    return tree
