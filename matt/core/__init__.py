"""Bid model, clearing engine and auction configuration"""
from matt.core.bid import (
    Bid,
    SignedBid,
    BidFormatError,
    parse_amount,
    create_signed_bid,
)
from matt.core.clearing import (
    ClearingResult,
    RevenuePoint,
    choose_best_bids,
    clear_bids,
    clear_verified_bids,
    revenue_curve,
    verify_bids,
)

__all__ = [
    "Bid",
    "SignedBid",
    "BidFormatError",
    "parse_amount",
    "create_signed_bid",
    "ClearingResult",
    "RevenuePoint",
    "choose_best_bids",
    "clear_bids",
    "clear_verified_bids",
    "revenue_curve",
    "verify_bids",
]
