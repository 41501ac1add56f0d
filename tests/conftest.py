"""
tests/conftest.py
=================
Shared pytest fixtures for the FinIntake test suite.
"""
import sys
import os

# Ensure the project root is on the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from fin_intake.schema import build
from fin_intake.tree import set_value

CA = ("balance_sheet", "assets", "current_assets")
NCA = ("balance_sheet", "assets", "non_current_assets")
CL = ("balance_sheet", "owners_funds_and_liabilities", "current_liabilities")
NCL = ("balance_sheet", "owners_funds_and_liabilities", "non_current_liabilities")
OF = ("balance_sheet", "owners_funds_and_liabilities", "owners_fund")
PL = ("profit_loss",)
EXP = ("profit_loss", "expenses")


@pytest.fixture
def corporate_tree():
    """Empty corporate tree tracking two years."""
    return build("corporate", ["2023-24", "2022-23"])


@pytest.fixture
def partnership_tree():
    return build("partnership", ["2023-24", "2022-23"])


@pytest.fixture
def populated_tree():
    """Two-year corporate tree with a balanced balance sheet and a full P&L for 2023-24."""
    tree = build("corporate", ["2023-24", "2022-23"])
    y = "2023-24"
    entries = {
        OF + ("owners_capital_account",): 400000,
        OF + ("reserves_and_surplus",): 200000,
        NCL + ("long_term_borrowings",): 250000,
        CL + ("short_term_borrowings",): 50000,
        CL + ("trade_payables",): 150000,
        NCA + ("property_plant_equipment",): 500000,
        NCA + ("intangible_assets",): 50000,
        CA + ("inventories",): 100000,
        CA + ("trade_receivables",): 250000,
        CA + ("cash_and_bank_balances",): 150000,
        PL + ("revenue_from_operations",): 1000000,
        PL + ("other_income",): 20000,
        PL + ("total_income",): 1020000,
        EXP + ("cost_of_materials_consumed",): 600000,
        EXP + ("employee_benefits_expense",): 150000,
        EXP + ("finance_cost",): 20000,
        EXP + ("other_expenses",): 90000,
        EXP + ("total_expenses",): 860000,
        PL + ("profit_before_tax",): 160000,
        PL + ("profit_for_period",): 120000,
    }
    for path, value in entries.items():
        set_value(tree, path, y, value)
    set_value(tree, PL + ("revenue_from_operations",), "2022-23", 800000)
    return tree
