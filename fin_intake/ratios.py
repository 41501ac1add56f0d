"""
fin_intake/ratios.py
====================
Derived ratio engine for the manual-entry statement tree.

Covers:
  - Liquidity: current, quick and cash ratios
  - Profitability: gross / net profit margin, return on assets
  - Efficiency: asset turnover
  - Leverage, return on equity and the remaining turnover ratios
    (populated only with EngineConfig.extended_ratios)
  - Data completeness percentage
  - Validation messages and the consistency report

Every call is a full recompute from the tree. The tree is only read; absent
values count as 0 when summing and are never written back.
"""
from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .types import (
    FinancialStatementTree, RatioSet, RatioGroup, RecomputeResult,
    ValidationReport, EngineConfig, LineItem,
)
from .tree import get_node, iter_line_items
from .schema import REQUIRED_FIELDS, field_label
from .formatting import format_number

logger = logging.getLogger(__name__)


# ─── Ratio Set Shape ──────────────────────────────────────────────────────────

RATIO_GROUPS: Dict[str, Tuple[str, ...]] = {
    "liquidity_ratios": ("current_ratio", "quick_ratio", "cash_ratio"),
    "profitability_ratios": (
        "gross_profit_margin", "net_profit_margin", "return_on_assets", "return_on_equity",
    ),
    "leverage_ratios": ("debt_equity_ratio", "debt_ratio", "interest_coverage_ratio"),
    "efficiency_ratios": (
        "inventory_turnover", "receivables_turnover", "payables_turnover", "asset_turnover",
    ),
}

# Scaled ×100; everything else is a plain multiple
PERCENT_RATIOS = frozenset({
    "gross_profit_margin", "net_profit_margin", "return_on_assets", "return_on_equity",
})

_BS = ("balance_sheet",)
_OFL = _BS + ("owners_funds_and_liabilities",)
_ASSETS = _BS + ("assets",)
_PL = ("profit_loss",)

OWNERS_FUND = tuple(_OFL + ("owners_fund", n) for n in (
    "owners_capital_account", "owners_current_account", "reserves_and_surplus",
))
NON_CURRENT_LIABILITIES = tuple(_OFL + ("non_current_liabilities", n) for n in (
    "long_term_borrowings", "deferred_tax_liabilities",
    "other_long_term_liabilities", "long_term_provisions",
))
CURRENT_LIABILITIES = tuple(_OFL + ("current_liabilities", n) for n in (
    "short_term_borrowings", "trade_payables",
    "other_current_liabilities", "short_term_provisions",
))
CURRENT_ASSETS = tuple(_ASSETS + ("current_assets", n) for n in (
    "current_investments", "inventories", "trade_receivables",
    "cash_and_bank_balances", "short_term_loans_and_advances", "other_current_assets",
))
# Non-current items that count towards total assets in the ratio base
TOTAL_ASSET_NON_CURRENT = tuple(_ASSETS + ("non_current_assets", n) for n in (
    "property_plant_equipment", "intangible_assets", "non_current_investments",
    "long_term_loans_and_advances", "other_non_current_assets",
))

INVENTORIES = _ASSETS + ("current_assets", "inventories")
TRADE_RECEIVABLES = _ASSETS + ("current_assets", "trade_receivables")
CASH_AND_BANK = _ASSETS + ("current_assets", "cash_and_bank_balances")
TRADE_PAYABLES = _OFL + ("current_liabilities", "trade_payables")
LONG_TERM_BORROWINGS = _OFL + ("non_current_liabilities", "long_term_borrowings")
SHORT_TERM_BORROWINGS = _OFL + ("current_liabilities", "short_term_borrowings")
REVENUE = _PL + ("revenue_from_operations",)
OTHER_INCOME = _PL + ("other_income",)
TOTAL_INCOME = _PL + ("total_income",)
COST_OF_MATERIALS = _PL + ("expenses", "cost_of_materials_consumed")
FINANCE_COST = _PL + ("expenses", "finance_cost")
TOTAL_EXPENSES = _PL + ("expenses", "total_expenses")
PROFIT_BEFORE_TAX = _PL + ("profit_before_tax",)
PROFIT_FOR_PERIOD = _PL + ("profit_for_period",)


# ─── Helpers ──────────────────────────────────────────────────────────────────

def _safe_div(num: float, den: float) -> Optional[float]:
    if den == 0 or not math.isfinite(num) or not math.isfinite(den):
        return None
    v = num / den
    return v if math.isfinite(v) else None


def _pct(num: float, den: float) -> Optional[float]:
    v = _safe_div(num, den)
    if v is None or not math.isfinite(v * 100):
        return None
    return v * 100


def _entry(tree: FinancialStatementTree, path: Sequence[str], period: str) -> Optional[float]:
    """Raw entered value, or None when absent or not in this tree."""
    try:
        node = get_node(tree, path)
    except KeyError:
        return None
    if not isinstance(node, LineItem):
        return None
    return node.values.get(period)


def _amount(tree: FinancialStatementTree, path: Sequence[str], period: str) -> float:
    v = _entry(tree, path, period)
    return 0.0 if v is None else v


def _total(tree: FinancialStatementTree, paths: Sequence[Sequence[str]], period: str) -> float:
    return sum(_amount(tree, p, period) for p in paths)


def empty_ratio_set(periods: Sequence[str]) -> RatioSet:
    """Declared ratio shape with every ratio undefined for every period."""
    groups: Dict[str, RatioGroup] = {
        group: {name: {p: None for p in periods} for name in names}
        for group, names in RATIO_GROUPS.items()
    }
    return RatioSet(**groups)


# ─── Ratios ───────────────────────────────────────────────────────────────────

def compute_ratios(
    tree: FinancialStatementTree, config: Optional[EngineConfig] = None
) -> RatioSet:
    cfg = config or EngineConfig()
    ratios = empty_ratio_set(tree.periods)
    liq, prof = ratios.liquidity_ratios, ratios.profitability_ratios
    lev, eff = ratios.leverage_ratios, ratios.efficiency_ratios

    def gv(path: Sequence[str], p: str) -> float:
        return _amount(tree, path, p)

    for p in tree.periods:
        ca = _total(tree, CURRENT_ASSETS, p)
        cl = _total(tree, CURRENT_LIABILITIES, p)
        inv = gv(INVENTORIES, p)
        cash = gv(CASH_AND_BANK, p)

        # Liquidity
        liq["current_ratio"][p] = _safe_div(ca, cl)
        liq["quick_ratio"][p] = _safe_div(ca - inv, cl)
        liq["cash_ratio"][p] = _safe_div(cash, cl)

        # Profitability
        rev = gv(REVENUE, p)
        ni = gv(PROFIT_FOR_PERIOD, p)
        cogs = gv(COST_OF_MATERIALS, p)
        prof["net_profit_margin"][p] = _pct(ni, rev)
        prof["gross_profit_margin"][p] = _pct(rev - cogs, rev)

        ta = ca + _total(tree, TOTAL_ASSET_NON_CURRENT, p)
        prof["return_on_assets"][p] = _pct(ni, ta)
        eff["asset_turnover"][p] = _safe_div(rev, ta)

        if not cfg.extended_ratios:
            continue

        # Leverage & remaining turnover ratios
        equity = _total(tree, OWNERS_FUND, p)
        debt = gv(LONG_TERM_BORROWINGS, p) + gv(SHORT_TERM_BORROWINGS, p)
        tl = _total(tree, NON_CURRENT_LIABILITIES, p) + cl
        fin_cost = gv(FINANCE_COST, p)
        prof["return_on_equity"][p] = _pct(ni, equity)
        lev["debt_equity_ratio"][p] = _safe_div(debt, equity)
        lev["debt_ratio"][p] = _safe_div(tl, ta)
        lev["interest_coverage_ratio"][p] = _safe_div(gv(PROFIT_BEFORE_TAX, p) + fin_cost, fin_cost)
        eff["inventory_turnover"][p] = _safe_div(cogs, inv)
        eff["receivables_turnover"][p] = _safe_div(rev, gv(TRADE_RECEIVABLES, p))
        eff["payables_turnover"][p] = _safe_div(cogs, gv(TRADE_PAYABLES, p))

    return ratios


# ─── Completeness ─────────────────────────────────────────────────────────────

def compute_completeness(tree: FinancialStatementTree) -> float:
    """Share of line items with a value in at least one period, 0–100."""
    total_items, filled_items = 0, 0
    for _path, item in iter_line_items(tree):
        total_items += 1
        if item.filled():
            filled_items += 1
    return (filled_items / total_items * 100) if total_items > 0 else 0.0


def recompute(
    tree: FinancialStatementTree, config: Optional[EngineConfig] = None
) -> RecomputeResult:
    """Full ratio and completeness pass. Same tree in, same result out."""
    ratios = compute_ratios(tree, config)
    completeness = compute_completeness(tree)
    logger.debug(
        "Recomputed ratios for %d period(s); completeness %.1f%%",
        len(tree.periods), completeness,
    )
    return RecomputeResult(ratios=ratios, completeness=completeness)


# ─── Validation ───────────────────────────────────────────────────────────────

MISSING_STATEMENTS = "Balance Sheet and Profit & Loss data are required"
NO_REVENUE = "At least one financial year must have revenue data"


def validate(tree: FinancialStatementTree) -> List[str]:
    if tree.balance_sheet is None or tree.profit_loss is None:
        return [MISSING_STATEMENTS]

    errors: List[str] = []
    has_revenue = any(
        (rev := _entry(tree, REVENUE, p)) is not None and rev > 0
        for p in tree.periods
    )
    if not has_revenue:
        errors.append(NO_REVENUE)
    return errors


def _any_entered(tree: FinancialStatementTree, paths: Sequence[Sequence[str]], period: str) -> bool:
    return any(_entry(tree, path, period) is not None for path in paths)


def _subtree_paths(tree: FinancialStatementTree, prefix: Sequence[str]) -> List[Tuple[str, ...]]:
    n = len(prefix)
    return [path for path, _ in iter_line_items(tree) if tuple(path[:n]) == tuple(prefix)]


def _required_field_warnings(tree: FinancialStatementTree) -> List[str]:
    return [
        f"{field_label(path[-1])} is required but has no value in any period"
        for path, item in iter_line_items(tree)
        if path[-1] in REQUIRED_FIELDS and not item.filled()
    ]


def _consistency_warnings(tree: FinancialStatementTree, tolerance: float) -> List[str]:
    warnings: List[str] = []
    liab_paths = _subtree_paths(tree, _OFL)
    asset_paths = _subtree_paths(tree, _ASSETS)
    expense_paths = [p for p in _subtree_paths(tree, _PL + ("expenses",)) if p != TOTAL_EXPENSES]

    for p in tree.periods:
        if _any_entered(tree, liab_paths, p) and _any_entered(tree, asset_paths, p):
            liab = _total(tree, liab_paths, p)
            assets = _total(tree, asset_paths, p)
            if abs(liab - assets) > tolerance:
                warnings.append(
                    f"{p}: Balance sheet does not tally (owners' funds and liabilities "
                    f"{format_number(liab)} vs assets {format_number(assets)})"
                )

        total_income = _entry(tree, TOTAL_INCOME, p)
        rev = _entry(tree, REVENUE, p)
        if total_income is not None and rev is not None:
            expected = rev + _amount(tree, OTHER_INCOME, p)
            if abs(total_income - expected) > tolerance:
                warnings.append(
                    f"{p}: Total income {format_number(total_income)} differs from revenue "
                    f"plus other income {format_number(expected)}"
                )

        total_exp = _entry(tree, TOTAL_EXPENSES, p)
        if total_exp is not None and _any_entered(tree, expense_paths, p):
            expected = _total(tree, expense_paths, p)
            if abs(total_exp - expected) > tolerance:
                warnings.append(
                    f"{p}: Total expenses {format_number(total_exp)} differs from the sum "
                    f"of expense items {format_number(expected)}"
                )
    return warnings


def validate_report(
    tree: FinancialStatementTree, config: Optional[EngineConfig] = None
) -> ValidationReport:
    """Validation errors plus non-binding consistency warnings and stats."""
    cfg = config or EngineConfig()
    errors = validate(tree)
    warnings: List[str] = []
    if tree.balance_sheet is not None and tree.profit_loss is not None:
        warnings = _required_field_warnings(tree)
        warnings += _consistency_warnings(tree, cfg.balance_tolerance)

    items = [item for _path, item in iter_line_items(tree)]
    return ValidationReport(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        stats={
            "line_items": len(items),
            "filled_line_items": sum(1 for item in items if item.filled()),
            "periods": len(tree.periods),
        },
    )
