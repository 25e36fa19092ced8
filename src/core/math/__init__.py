"""
Price math — integer arithmetic для clock-аукционов и минтинга.
"""

from src.core.math.pricing import (
    clamp_elapsed,
    compute_current_price,
    compute_cut,
    compute_next_gen0_price,
    integer_mean,
)

__all__ = [
    "clamp_elapsed",
    "compute_current_price",
    "compute_cut",
    "compute_next_gen0_price",
    "integer_mean",
]
