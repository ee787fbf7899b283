"""
Aggregation stage: weighted sums, means and percentage shares.
"""

from .weighted import (
    weighted_sums,
    weighted_shares,
    weighted_mean,
    round_half_up,
    largest_remainder_shares,
    to_long,
)

__all__ = [
    'weighted_sums',
    'weighted_shares',
    'weighted_mean',
    'round_half_up',
    'largest_remainder_shares',
    'to_long',
]
