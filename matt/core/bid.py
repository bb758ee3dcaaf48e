"""
Bid - Signed price bids for MATT auctions.

A bid is a bidder's declaration of the most they are willing to pay for
one edition of the auctioned token. Bids are signed off-chain as EIP-712
typed messages and collected by the seller until the auction is closed.

Wire format (as produced by the bidding client):

    {
        "bid": {"bidder": "0x...", "token": "0x...", "amount": "0x100"},
        "sig": "0x..."
    }

Amounts are unbounded Python ints (uint256 on-chain). Wire documents are
parsed by matt.core.schemas.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union


class BidFormatError(ValueError):
    """Raised when a bid or bid amount cannot be parsed."""


# =============================================================================
# Amount Parsing
# =============================================================================


def parse_amount(value: Union[int, str]) -> int:
    """
    Parse a bid amount.

    Accepts non-negative ints, decimal strings ("256") and hex strings
    ("0x100"). Booleans, floats and negative values are rejected.

    Raises:
        BidFormatError: If the value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise BidFormatError(f"amount must be an integer, got {value!r}")

    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith("0x"):
                amount = int(text[2:], 16)
            else:
                amount = int(text, 10)
        except ValueError:
            raise BidFormatError(f"amount is not a valid integer: {value!r}") from None
    else:
        raise BidFormatError(f"amount must be int or str, got {type(value).__name__}")

    if amount < 0:
        raise BidFormatError(f"amount must be non-negative, got {amount}")
    return amount


def format_amount(amount: int) -> str:
    """Render an amount as a 0x-prefixed hex string."""
    return hex(amount)


# =============================================================================
# Bid Types
# =============================================================================


@dataclass(frozen=True)
class Bid:
    """
    The signed bid message.

    Attributes:
        bidder: Bidder address (0x-prefixed hex)
        token: Payment currency (ERC-20 token address)
        amount: Price offered for one edition
    """
    bidder: str
    token: str
    amount: int

    def to_dict(self) -> Dict[str, str]:
        return {
            "bidder": self.bidder,
            "token": self.token,
            "amount": format_amount(self.amount),
        }


@dataclass(frozen=True)
class SignedBid:
    """A bid message together with the bidder's signature over it."""
    bid: Bid
    sig: str

    @property
    def amount(self) -> int:
        return self.bid.amount

    @property
    def bidder(self) -> str:
        return self.bid.bidder

    def to_dict(self) -> Dict[str, Any]:
        return {"bid": self.bid.to_dict(), "sig": self.sig}


def create_signed_bid(bidder: str, token: str, amount: Union[int, str], sig: str = "0x") -> SignedBid:
    """Convenience constructor used by tests and tooling."""
    return SignedBid(bid=Bid(bidder=bidder, token=token, amount=parse_amount(amount)), sig=sig)
