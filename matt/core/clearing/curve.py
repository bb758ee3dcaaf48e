"""
Revenue curve for the bidding view.

Lists, for every distinct bid amount, how many bidders would win at that
price and what the seller would earn. Rendering is left to the caller.
"""

from dataclasses import dataclass
from typing import List, Sequence

from matt.core.clearing.engine import BidLike


@dataclass(frozen=True)
class RevenuePoint:
    """Seller revenue if the auction cleared at `price`."""
    price: int
    bidders: int
    revenue: int


def revenue_curve(bids: Sequence[BidLike]) -> List[RevenuePoint]:
    """
    Compute the revenue at every distinct bid amount, ascending by price.

    Unlike the clearing search, the lowest amount is included so the curve
    covers the whole range of bids.
    """
    amounts = sorted(b.amount for b in bids)
    n = len(amounts)

    points = []
    for i, price in enumerate(amounts):
        if i > 0 and amounts[i - 1] == price:
            continue
        bidders = n - i
        points.append(RevenuePoint(price=price, bidders=bidders, revenue=price * bidders))
    return points
