"""
fin_intake/tree.py
==================
Walking and editing the statement tree: line-item iteration, path lookup,
per-field value edits and form input normalisation.
"""
from __future__ import annotations
import math
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .types import Category, FinancialStatementTree, LineItem, Node, NodePath


# ─── Walk ─────────────────────────────────────────────────────────────────────

def _walk(node: Category, prefix: NodePath) -> Iterator[Tuple[NodePath, LineItem]]:
    for name, child in node.children.items():
        path = prefix + (name,)
        if isinstance(child, LineItem):
            yield path, child
        else:
            yield from _walk(child, path)


def iter_line_items(tree: FinancialStatementTree) -> Iterator[Tuple[NodePath, LineItem]]:
    """Yield (path, line item) for every leaf, in schema order."""
    for root_name, root in tree.roots().items():
        yield from _walk(root, (root_name,))


def line_item_paths(tree: FinancialStatementTree) -> List[NodePath]:
    return [path for path, _ in iter_line_items(tree)]


# ─── Lookup & Edit ────────────────────────────────────────────────────────────

def get_node(tree: FinancialStatementTree, path: Sequence[str]) -> Node:
    if not path:
        raise KeyError("Empty path")
    node: Optional[Node] = tree.roots().get(path[0])
    for name in path[1:]:
        if not isinstance(node, Category):
            node = None
            break
        node = node.children.get(name)
    if node is None:
        raise KeyError(f"No statement node at {'.'.join(path)}")
    return node


def get_line_item(tree: FinancialStatementTree, path: Sequence[str]) -> LineItem:
    node = get_node(tree, path)
    if not isinstance(node, LineItem):
        raise ValueError(f"{'.'.join(path)} is a category, not a line item")
    return node


def get_value(tree: FinancialStatementTree, path: Sequence[str], period: str) -> Optional[float]:
    return get_line_item(tree, path).values.get(period)


def set_value(
    tree: FinancialStatementTree, path: Sequence[str], period: str, value: Any
) -> FinancialStatementTree:
    """
    Write one cell. ``value`` may be a number, form text or None to clear
    the entry. The period must already be tracked.
    """
    item = get_line_item(tree, path)
    if period not in tree.periods:
        raise ValueError(f"Period {period} is not tracked (tracked: {', '.join(tree.periods)})")
    item.values[period] = to_amount(value)
    return tree


# ─── Input Normalisation ──────────────────────────────────────────────────────

def to_amount(val: Any) -> Optional[float]:
    """Convert form input to float, handling Indian notations. Blank → None."""
    if val is None or val == "":
        return None
    if isinstance(val, (int, float)):
        try:
            f = float(val)
        except OverflowError:
            return None
        return f if math.isfinite(f) else None
    s = str(val).strip()
    # Parenthetical negatives: (1234) → -1234
    if s.startswith('(') and s.endswith(')'):
        s = '-' + s[1:-1]
    s = (s.replace(',', '').replace('₹', '').replace('$', '')
         .replace('Rs.', '').replace('Rs', '')
         .strip())
    if s in ('', '-', '--', 'N/A', 'NA', 'n/a', 'nan', 'None'):
        return None
    if s.lower() == 'nil':
        return 0.0
    try:
        out = float(s)
    except ValueError:
        return None
    return None if math.isnan(out) or math.isinf(out) else out
