"""
fin_intake/schema.py
====================
Statement schema for the non-corporate vertical format (ICAI guidance note,
FY 2024-25) and the builder that turns it into an empty statement tree.

The shape is a nested dict: a dict value is a category, ``None`` is a line
item. Only one node depends on the entity type: partners' remuneration,
which exists solely for partnership firms.
"""
from __future__ import annotations
import copy
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .types import Category, EntityType, FinancialStatementTree, LineItem, Node, TreeShape
from .periods import sort_periods

logger = logging.getLogger(__name__)


# ─── Entity Types ─────────────────────────────────────────────────────────────

ENTITY_TYPES: Tuple[str, ...] = (
    "corporate",
    "private_limited",
    "public_limited",
    "llp",
    "partnership",
    "partnership_registered",
    "partnership_unregistered",
    "proprietorship",
    "huf",
    "trust_private",
    "trust_public",
    "society",
)

CORPORATE_ENTITY_TYPES = frozenset({"corporate", "private_limited", "public_limited", "llp"})


def is_partnership_like(entity_type: EntityType) -> bool:
    return "partnership" in str(entity_type).lower()


def is_non_corporate(entity_type: EntityType) -> bool:
    return str(entity_type).lower() not in CORPORATE_ENTITY_TYPES


# ─── Schema ───────────────────────────────────────────────────────────────────

_BALANCE_SHEET: TreeShape = {
    "owners_funds_and_liabilities": {
        "owners_fund": {
            "owners_capital_account": None,
            "owners_current_account": None,
            "reserves_and_surplus": None,
        },
        "non_current_liabilities": {
            "long_term_borrowings": None,
            "deferred_tax_liabilities": None,
            "other_long_term_liabilities": None,
            "long_term_provisions": None,
        },
        "current_liabilities": {
            "short_term_borrowings": None,
            "trade_payables": None,
            "other_current_liabilities": None,
            "short_term_provisions": None,
        },
    },
    "assets": {
        "non_current_assets": {
            "property_plant_equipment": None,
            "intangible_assets": None,
            "capital_work_in_progress": None,
            "intangible_assets_under_development": None,
            "non_current_investments": None,
            "deferred_tax_assets": None,
            "long_term_loans_and_advances": None,
            "other_non_current_assets": None,
        },
        "current_assets": {
            "current_investments": None,
            "inventories": None,
            "trade_receivables": None,
            "cash_and_bank_balances": None,
            "short_term_loans_and_advances": None,
            "other_current_assets": None,
        },
    },
}

_PROFIT_LOSS_HEAD: TreeShape = {
    "revenue_from_operations": None,
    "other_income": None,
    "total_income": None,
    "expenses": {
        "cost_of_materials_consumed": None,
        "purchases_of_stock_in_trade": None,
        "changes_in_inventories": None,
        "employee_benefits_expense": None,
        "depreciation_and_amortization": None,
        "finance_cost": None,
        "other_expenses": None,
        "total_expenses": None,
    },
    "profit_before_exceptional_extraordinary_partners_remuneration_tax": None,
    "exceptional_items": None,
    "profit_before_extraordinary_partners_remuneration_tax": None,
    "extraordinary_items": None,
    "profit_before_partners_remuneration_tax": None,
}

_PROFIT_LOSS_TAIL: TreeShape = {
    "profit_before_tax": None,
    "tax_expense": {
        "current_tax": None,
        "deferred_tax": None,
    },
    "profit_from_continuing_operations": None,
    "profit_for_period": None,
}

# Display labels and help text, as shown on the manual entry form
FIELD_LABELS: Dict[str, str] = {
    "balance_sheet": "Balance Sheet",
    "profit_loss": "Profit & Loss",
    "owners_funds_and_liabilities": "Owner's Funds and Liabilities",
    "owners_fund": "Owner's Fund",
    "owners_capital_account": "Owner's Capital Account",
    "owners_current_account": "Owner's Current Account",
    "reserves_and_surplus": "Reserves and Surplus",
    "non_current_liabilities": "Non-Current Liabilities",
    "long_term_borrowings": "Long-term Borrowings",
    "deferred_tax_liabilities": "Deferred Tax Liabilities",
    "other_long_term_liabilities": "Other Long-term Liabilities",
    "long_term_provisions": "Long-term Provisions",
    "current_liabilities": "Current Liabilities",
    "short_term_borrowings": "Short-term Borrowings",
    "trade_payables": "Trade Payables",
    "other_current_liabilities": "Other Current Liabilities",
    "short_term_provisions": "Short-term Provisions",
    "assets": "Assets",
    "non_current_assets": "Non-Current Assets",
    "property_plant_equipment": "Property, Plant & Equipment",
    "intangible_assets": "Intangible Assets",
    "capital_work_in_progress": "Capital Work in Progress",
    "intangible_assets_under_development": "Intangible Assets under Development",
    "non_current_investments": "Non-current Investments",
    "deferred_tax_assets": "Deferred Tax Assets",
    "long_term_loans_and_advances": "Long-term Loans and Advances",
    "other_non_current_assets": "Other Non-current Assets",
    "current_assets": "Current Assets",
    "current_investments": "Current Investments",
    "inventories": "Inventories",
    "trade_receivables": "Trade Receivables",
    "cash_and_bank_balances": "Cash and Bank Balances",
    "short_term_loans_and_advances": "Short-term Loans and Advances",
    "other_current_assets": "Other Current Assets",
    "revenue_from_operations": "Revenue from Operations",
    "other_income": "Other Income",
    "total_income": "Total Income",
    "expenses": "Expenses",
    "cost_of_materials_consumed": "Cost of Materials Consumed",
    "purchases_of_stock_in_trade": "Purchases of Stock-in-Trade",
    "changes_in_inventories": "Changes in Inventories",
    "employee_benefits_expense": "Employee Benefits Expense",
    "depreciation_and_amortization": "Depreciation and Amortization",
    "finance_cost": "Finance Cost",
    "other_expenses": "Other Expenses",
    "total_expenses": "Total Expenses",
    "profit_before_exceptional_extraordinary_partners_remuneration_tax":
        "Profit Before Exceptional & Extraordinary Items",
    "exceptional_items": "Exceptional Items",
    "profit_before_extraordinary_partners_remuneration_tax":
        "Profit Before Extraordinary Items",
    "extraordinary_items": "Extraordinary Items",
    "profit_before_partners_remuneration_tax": "Profit Before Partners' Remuneration & Tax",
    "partners_remuneration": "Partners' Remuneration",
    "profit_before_tax": "Profit Before Tax",
    "tax_expense": "Tax Expense",
    "current_tax": "Current Tax",
    "deferred_tax": "Deferred Tax",
    "profit_from_continuing_operations": "Profit from Continuing Operations",
    "profit_for_period": "Profit for the Period",
}

FIELD_HELP: Dict[str, str] = {
    "owners_capital_account": "Capital contributed by owners/partners",
    "owners_current_account": "Current account balance of owners/partners",
    "reserves_and_surplus": "Accumulated profits and reserves",
    "long_term_borrowings": "Loans and borrowings with maturity > 1 year",
    "short_term_borrowings": "Loans and borrowings with maturity ≤ 1 year",
    "trade_payables": "Amount owed to suppliers and creditors",
    "property_plant_equipment": "Fixed assets net of depreciation",
    "inventories": "Stock of raw materials, WIP, and finished goods",
    "trade_receivables": "Amount receivable from customers",
    "cash_and_bank_balances": "Cash in hand and bank balances",
    "revenue_from_operations": "Primary business revenue",
    "other_income": "Interest, dividends, and other non-operating income",
    "total_income": "Sum of revenue from operations and other income",
    "cost_of_materials_consumed": "Direct material costs",
    "changes_in_inventories": "Increase/decrease in stock levels",
    "employee_benefits_expense": "Salaries, wages, and benefits",
    "finance_cost": "Interest and other borrowing costs",
    "other_expenses": "Administrative and other operating expenses",
    "exceptional_items": "Unusual but related to business operations",
    "extraordinary_items": "Unusual and unrelated to normal business",
    "partners_remuneration": "Salary and commission paid to partners",
    "profit_for_period": "Final profit after all expenses and taxes",
}

REQUIRED_FIELDS = frozenset({
    "owners_capital_account",
    "cash_and_bank_balances",
    "revenue_from_operations",
})


def schema_for(entity_type: EntityType) -> Dict[str, TreeShape]:
    """Full tree shape for an entity type, keyed by statement root."""
    profit_loss: TreeShape = copy.deepcopy(_PROFIT_LOSS_HEAD)
    if is_partnership_like(entity_type):
        profit_loss["partners_remuneration"] = None
    profit_loss.update(copy.deepcopy(_PROFIT_LOSS_TAIL))
    return {
        "balance_sheet": copy.deepcopy(_BALANCE_SHEET),
        "profit_loss": profit_loss,
    }


# ─── Builder ──────────────────────────────────────────────────────────────────

def _materialise(shape: TreeShape, periods: List[str]) -> Category:
    children: Dict[str, Node] = {}
    for name, sub in shape.items():
        if sub is None:
            children[name] = LineItem({p: None for p in periods})
        else:
            children[name] = _materialise(sub, periods)
    return Category(children)


def build(entity_type: EntityType, initial_periods: Iterable[str]) -> FinancialStatementTree:
    """
    Build the empty statement tree for ``entity_type``.

    Every line item is keyed by every period in ``initial_periods`` with no
    value entered. Raises ValueError when no period is supplied.
    """
    periods = sort_periods(initial_periods)
    if not periods:
        raise ValueError("At least one reporting period is required to build a statement tree")

    shape = schema_for(entity_type)
    tree = FinancialStatementTree(
        entity_type=entity_type,
        periods=periods,
        balance_sheet=_materialise(shape["balance_sheet"], periods),
        profit_loss=_materialise(shape["profit_loss"], periods),
    )
    logger.info("Built %s statement tree for periods %s", entity_type, ", ".join(periods))
    return tree


def field_label(name: str) -> str:
    """Display label for a schema node name; falls back to title case."""
    label: Optional[str] = FIELD_LABELS.get(name)
    if label:
        return label
    return name.replace("_", " ").strip().title()
