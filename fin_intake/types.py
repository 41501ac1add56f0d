"""
fin_intake/types.py
===================
Dataclasses for the manual-entry financial statement model.
The statement tree, derived ratio set, validation report and engine options.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Literal, Tuple, Union, Any

# ─── Core Data Types ──────────────────────────────────────────────────────────

# YearlyData: {period: value}; None means "not yet entered"
YearlyData = Dict[str, Optional[float]]

# Path from the tree root to a node, e.g. ("profit_loss", "expenses", "finance_cost")
NodePath = Tuple[str, ...]

EntityType = Literal[
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
]

ValidationStatus = Literal["pending", "validated", "errors"]


# ─── Statement Tree ───────────────────────────────────────────────────────────

@dataclass
class LineItem:
    """Leaf figure tracked per period. Keys always equal the tree's periods."""
    values: YearlyData = field(default_factory=dict)

    def filled(self) -> bool:
        return any(v is not None for v in self.values.values())


@dataclass
class Category:
    """Named grouping of line items and sub-categories, in schema order."""
    children: Dict[str, "Node"] = field(default_factory=dict)


Node = Union[Category, LineItem]

# TreeShape: nested {name: TreeShape | None}; None marks a line item
TreeShape = Dict[str, Any]


@dataclass
class FinancialStatementTree:
    entity_type: EntityType
    periods: List[str]
    balance_sheet: Optional[Category] = None
    profit_loss: Optional[Category] = None

    def roots(self) -> Dict[str, Category]:
        """Present statement subtrees keyed by their root name."""
        out: Dict[str, Category] = {}
        if self.balance_sheet is not None:
            out["balance_sheet"] = self.balance_sheet
        if self.profit_loss is not None:
            out["profit_loss"] = self.profit_loss
        return out


# ─── Derived Results ──────────────────────────────────────────────────────────

RatioGroup = Dict[str, YearlyData]


@dataclass
class RatioSet:
    liquidity_ratios: RatioGroup = field(default_factory=dict)
    profitability_ratios: RatioGroup = field(default_factory=dict)
    leverage_ratios: RatioGroup = field(default_factory=dict)
    efficiency_ratios: RatioGroup = field(default_factory=dict)

    def groups(self) -> Dict[str, RatioGroup]:
        return {
            "liquidity_ratios": self.liquidity_ratios,
            "profitability_ratios": self.profitability_ratios,
            "leverage_ratios": self.leverage_ratios,
            "efficiency_ratios": self.efficiency_ratios,
        }


@dataclass
class RecomputeResult:
    ratios: RatioSet
    completeness: float


@dataclass
class ValidationReport:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)


# ─── Options ──────────────────────────────────────────────────────────────────

@dataclass
class EngineConfig:
    """
    Options for recompute, validation and payload assembly.

    extended_ratios fills the leverage ratios, return on equity and the
    turnover ratios that the base computation leaves undefined.
    balance_tolerance is the absolute gap tolerated by the consistency
    warnings before a subtotal is reported as not matching.
    """
    currency: str = "INR"
    format_version: str = "non_corporate_2024"
    extended_ratios: bool = False
    balance_tolerance: float = 1.0
