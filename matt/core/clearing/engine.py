"""
Clearing Engine - Uniform-price clearing for MATT auctions.

In a MATT auction the seller decides how many editions to mint when the
auction closes. Every winner pays the same clearing price, chosen to
maximize seller revenue:

    revenue(p) = p * |{bids with amount >= p}|

Candidate prices are the verified bid amounts, excluding the lowest bid
(the scan starts at the second sorted bid). When several candidates reach
the same maximal revenue, the lowest price wins since the best is only
replaced on a strictly greater revenue.

Amounts are Python ints, so uint256-sized bids compare and multiply
exactly.
"""

from bisect import bisect_left
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar, runtime_checkable

from matt.core.clearing.verification import Verifier, verify_bids
from matt.utils.logger import CLEARING, get_logger

logger = get_logger(CLEARING)


# =============================================================================
# Protocols for Type Checking
# =============================================================================

@runtime_checkable
class BidLike(Protocol):
    """Anything carrying a non-negative integer amount."""
    amount: int


B = TypeVar("B", bound=BidLike)


# =============================================================================
# Clearing Result
# =============================================================================


@dataclass(frozen=True)
class ClearingResult:
    """
    Outcome of a clearing pass.

    Attributes:
        winners: Winning bids, ascending by amount (stable)
        clearing_price: Uniform price paid by every winner
        verified_count: Number of verified bids that were considered
    """
    winners: Tuple[BidLike, ...]
    clearing_price: int
    verified_count: int

    @property
    def revenue(self) -> int:
        """Total seller revenue at the clearing price."""
        return self.clearing_price * len(self.winners)

    @property
    def editions(self) -> int:
        """Number of editions to mint."""
        return len(self.winners)

    def charges(self) -> List[Tuple[BidLike, int]]:
        """(winning bid, amount to charge) pairs for settlement."""
        return [(bid, self.clearing_price) for bid in self.winners]


# =============================================================================
# Clearing
# =============================================================================


def sort_bids(bids: Sequence[B]) -> List[B]:
    """Stable ascending sort by amount."""
    return sorted(bids, key=lambda b: b.amount)


def find_clearing_price(sorted_bids: Sequence[BidLike]) -> int:
    """
    Find the revenue-maximizing uniform price.

    Args:
        sorted_bids: Verified bids, ascending by amount

    Returns:
        Winning price, or 0 when no candidate yields positive revenue
    """
    amounts = [b.amount for b in sorted_bids]
    n = len(amounts)

    top_revenue = 0
    winning_price = 0
    for i in range(1, n):
        price = amounts[i]
        # Bids at or above price form the suffix starting at its first occurrence
        revenue = price * (n - bisect_left(amounts, price))
        if revenue > top_revenue:
            top_revenue = revenue
            winning_price = price

    return winning_price


def clear_verified_bids(bids: Sequence[B]) -> ClearingResult:
    """
    Run the clearing pass over already verified bids.

    Pure and deterministic: the same input always yields the same winners
    and price. Bids are neither copied nor modified.

    Args:
        bids: Verified bids in any order

    Returns:
        ClearingResult with winners in ascending amount order
    """
    sorted_bids = sort_bids(bids)
    winning_price = find_clearing_price(sorted_bids)
    winners = tuple(b for b in sorted_bids if b.amount >= winning_price)

    result = ClearingResult(
        winners=winners,
        clearing_price=winning_price,
        verified_count=len(sorted_bids),
    )
    logger.info(
        f"Auction cleared: price={result.clearing_price}, "
        f"winners={result.editions}/{result.verified_count}, revenue={result.revenue}"
    )
    return result


async def clear_bids(
    bids: Sequence[B],
    verify: Verifier,
    max_concurrency: Optional[int] = None,
) -> ClearingResult:
    """
    Verify bids concurrently, then clear the survivors.

    Args:
        bids: Candidate bids
        verify: External predicate (sync or async); errors exclude the bid
        max_concurrency: Optional cap on concurrent verifier calls

    Returns:
        ClearingResult over the verified bids
    """
    verified = await verify_bids(bids, verify, max_concurrency=max_concurrency)
    if len(verified) < len(bids):
        logger.info(f"Dropped {len(bids) - len(verified)} unverified bids")
    return clear_verified_bids(verified)


async def choose_best_bids(
    bids: Sequence[B],
    verify: Verifier,
    max_concurrency: Optional[int] = None,
) -> List[B]:
    """
    Choose the winning bids of a MATT auction.

    Returns every verified bid whose amount is at or above the
    revenue-maximizing clearing price, ascending by amount. An empty input
    (or one where nothing verifies) returns an empty list.
    """
    result = await clear_bids(bids, verify, max_concurrency=max_concurrency)
    return list(result.winners)
