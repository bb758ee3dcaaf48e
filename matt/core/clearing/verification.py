"""
Verification - Concurrent fan-out/fan-in bid filtering.

Each bid is checked by an external verifier (typically the auction
contract's signature and allowance check). One task is dispatched per bid
and every result is joined before anything downstream runs, so the
surviving set never depends on which checks finish first.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar, Union

from matt.utils.logger import VERIFICATION, describe_bid, get_logger

logger = get_logger(VERIFICATION)

B = TypeVar("B")

Verifier = Callable[[Any], Union[bool, Awaitable[bool]]]


async def _check(bid: Any, verify: Verifier, semaphore: Optional[asyncio.Semaphore]) -> bool:
    """Run the verifier for a single bid; errors count as a failed check."""
    try:
        if semaphore is None:
            result = verify(bid)
            if inspect.isawaitable(result):
                result = await result
        else:
            async with semaphore:
                result = verify(bid)
                if inspect.isawaitable(result):
                    result = await result
    except Exception as e:
        logger.warning(f"Verifier raised for {describe_bid(bid)}: {e!r}")
        return False

    if not result:
        logger.debug(f"Bid rejected by verifier: {describe_bid(bid)}")
    return bool(result)


async def verify_bids(
    bids: Sequence[B],
    verify: Verifier,
    max_concurrency: Optional[int] = None,
) -> List[B]:
    """
    Keep the bids accepted by the verifier.

    Args:
        bids: Candidate bids
        verify: Predicate, sync or async, returning truthy for valid bids
        max_concurrency: Optional cap on in-flight verifier calls

    Returns:
        Accepted bids in their input order
    """
    if max_concurrency is not None and max_concurrency < 1:
        raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

    if not bids:
        return []

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
    results = await asyncio.gather(*(_check(bid, verify, semaphore) for bid in bids))

    verified = [bid for bid, ok in zip(bids, results) if ok]
    logger.debug(f"Verified {len(verified)}/{len(bids)} bids")
    return verified
