"""
fin_intake/export.py
====================
Hand-off views of an editing session: the nested submission payload and
pandas DataFrames for tabular review.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

import pandas as pd

from .types import (
    Category, EngineConfig, FinancialStatementTree, LineItem, RatioSet, ValidationStatus,
)
from .tree import iter_line_items
from .schema import FIELD_HELP, REQUIRED_FIELDS, field_label, is_non_corporate
from .ratios import recompute, validate_report


def _node_to_dict(node: Category) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name, child in node.children.items():
        if isinstance(child, LineItem):
            out[name] = dict(child.values)
        else:
            out[name] = _node_to_dict(child)
    return out


def tree_to_dict(tree: FinancialStatementTree) -> Dict[str, Any]:
    """Nested plain dicts; absent values stay None (JSON null)."""
    return {name: _node_to_dict(root) for name, root in tree.roots().items()}


def ratios_to_dict(ratios: RatioSet) -> Dict[str, Dict[str, Dict[str, Optional[float]]]]:
    return {
        group: {name: dict(series) for name, series in members.items()}
        for group, members in ratios.groups().items()
    }


def statement_title(tree: FinancialStatementTree) -> str:
    if is_non_corporate(tree.entity_type):
        return "Non-Corporate Financial Information"
    return "Corporate Financial Statements"


def build_payload(
    tree: FinancialStatementTree, config: Optional[EngineConfig] = None
) -> Dict[str, Any]:
    """Tree, ratios, completeness and validation as one submission payload."""
    cfg = config or EngineConfig()
    result = recompute(tree, cfg)
    report = validate_report(tree, cfg)
    statements = tree_to_dict(tree)
    status: ValidationStatus = "validated" if report.valid else "errors"
    return {
        "format_version": cfg.format_version,
        "currency": cfg.currency,
        "entity_type": tree.entity_type,
        "statement_title": statement_title(tree),
        "financial_years": list(tree.periods),
        "balance_sheet": statements.get("balance_sheet"),
        "profit_loss": statements.get("profit_loss"),
        "ratios": ratios_to_dict(result.ratios),
        "data_completeness_score": result.completeness,
        "validation_status": status,
        "validation_errors": list(report.errors),
        "validation_warnings": list(report.warnings),
    }


def tree_to_frame(tree: FinancialStatementTree) -> pd.DataFrame:
    """One row per line item (dotted path), one column per period, newest first."""
    rows = {
        ".".join(path): [item.values.get(p) for p in tree.periods]
        for path, item in iter_line_items(tree)
    }
    df = pd.DataFrame.from_dict(rows, orient="index", columns=list(tree.periods), dtype="float64")
    df.index.name = "line_item"
    return df


def field_catalog(tree: FinancialStatementTree) -> pd.DataFrame:
    """Entry-form metadata per line item: display label, help text, required flag."""
    rows = {
        ".".join(path): {
            "label": field_label(path[-1]),
            "help": FIELD_HELP.get(path[-1], ""),
            "required": path[-1] in REQUIRED_FIELDS,
        }
        for path, _ in iter_line_items(tree)
    }
    df = pd.DataFrame.from_dict(rows, orient="index", columns=["label", "help", "required"])
    df.index.name = "line_item"
    return df


def ratios_to_frame(ratios: RatioSet) -> pd.DataFrame:
    """One row per ratio ("group.ratio"), one column per period."""
    rows: Dict[str, Dict[str, Optional[float]]] = {}
    for group, members in ratios.groups().items():
        for name, series in members.items():
            rows[f"{group}.{name}"] = series
    df = pd.DataFrame.from_dict(rows, orient="index", dtype="float64")
    df.index.name = "ratio"
    return df
