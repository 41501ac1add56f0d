"""
tests/test_scenarios.py
=======================
End-to-end editing sessions: build, edit, change periods, recompute.
"""
import pytest

from fin_intake import (
    add_period,
    build,
    build_payload,
    get_value,
    iter_line_items,
    recompute,
    remove_period,
    set_value,
)

from conftest import CA, CL


@pytest.fixture
def session():
    tree = build("corporate", ["2023-24", "2022-23"])
    set_value(tree, CA + ("trade_receivables",), "2023-24", 500000)
    set_value(tree, CA + ("cash_and_bank_balances",), "2023-24", 200000)
    set_value(tree, CL + ("trade_payables",), "2023-24", 300000)
    return tree


def test_liquidity_after_entry(session):
    liq = recompute(session).ratios.liquidity_ratios
    assert liq["current_ratio"]["2023-24"] == pytest.approx(7 / 3)
    assert liq["quick_ratio"]["2023-24"] == pytest.approx(7 / 3)
    assert liq["cash_ratio"]["2023-24"] == pytest.approx(2 / 3)


def test_add_year_to_populated_tree(session):
    add_period(session, "2024-25")
    for _path, item in iter_line_items(session):
        assert set(item.values) == {"2023-24", "2022-23", "2024-25"}
        assert item.values["2024-25"] is None
    assert get_value(session, CA + ("trade_receivables",), "2023-24") == 500000.0
    liq = recompute(session).ratios.liquidity_ratios
    assert liq["current_ratio"]["2024-25"] is None
    assert liq["current_ratio"]["2023-24"] == pytest.approx(7 / 3)


def test_single_year_cannot_be_removed():
    tree = build("huf", ["2023-24"])
    before = build_payload(tree)
    remove_period(tree, "2023-24")
    assert tree.periods == ["2023-24"]
    assert build_payload(tree) == before


@pytest.mark.parametrize("entity_type,present", [
    ("partnership", True),
    ("partnership_unregistered", True),
    ("corporate", False),
    ("llp", False),
])
def test_partners_remuneration_by_entity_type(entity_type, present):
    tree = build(entity_type, ["2023-24"])
    payload = build_payload(tree)
    assert ("partners_remuneration" in tree.profit_loss.children) is present
    assert ("partners_remuneration" in payload["profit_loss"]) is present
