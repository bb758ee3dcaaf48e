"""
MATT Clearing Module.

This module provides the uniform-price clearing engine:
- Concurrent bid verification (fan-out/fan-in)
- Revenue-maximizing clearing price search
- Winner selection
- Revenue curve data
"""

from matt.core.clearing.engine import (
    BidLike,
    ClearingResult,
    choose_best_bids,
    clear_bids,
    clear_verified_bids,
    find_clearing_price,
    sort_bids,
)

from matt.core.clearing.verification import (
    Verifier,
    verify_bids,
)

from matt.core.clearing.curve import (
    RevenuePoint,
    revenue_curve,
)

__all__ = [
    # Engine
    "BidLike",
    "ClearingResult",
    "choose_best_bids",
    "clear_bids",
    "clear_verified_bids",
    "find_clearing_price",
    "sort_bids",
    # Verification
    "Verifier",
    "verify_bids",
    # Curve
    "RevenuePoint",
    "revenue_curve",
]
