"""FinIntake — multi-year statement model and ratio engine for manual company entry."""
from .types import *
from .formatting import *
from .schema import ENTITY_TYPES, build, schema_for, field_label, is_partnership_like
from .periods import add_period, remove_period, sort_periods, current_period_label
from .tree import get_value, set_value, iter_line_items, to_amount
from .ratios import recompute, compute_ratios, compute_completeness, validate, validate_report
from .export import (
    build_payload, statement_title, tree_to_dict, tree_to_frame, ratios_to_frame, field_catalog,
)
