"""Calculator modules for cost computations."""

from .cost_calculator import (
    BREAKDOWN_EPSILON,
    CATEGORY_ORDER,
    BreakdownItem,
    DerivedOutput,
    derive,
)

__all__ = ["BREAKDOWN_EPSILON", "CATEGORY_ORDER", "BreakdownItem", "DerivedOutput", "derive"]
