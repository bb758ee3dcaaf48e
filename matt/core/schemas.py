"""
Schemas for signed-bid JSON files.

Bid files are JSON arrays in the wire format emitted by the bidding
client. Parsing goes through pydantic so malformed entries are reported
with their position; valid entries become immutable SignedBid values.
"""

import json
from pathlib import Path
from typing import Any, List, Union

from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from matt.core.bid import Bid, BidFormatError, SignedBid, parse_amount
from matt.utils.validation import MAX_BIDS, validate_array


class BidMessageModel(BaseModel):
    bidder: str
    token: str
    amount: int

    # Sees the raw JSON value, before any int coercion of booleans
    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value: Any) -> int:
        return parse_amount(value)


class SignedBidModel(BaseModel):
    bid: BidMessageModel
    sig: str

    def to_signed_bid(self) -> SignedBid:
        return SignedBid(
            bid=Bid(bidder=self.bid.bidder, token=self.bid.token, amount=self.bid.amount),
            sig=self.sig,
        )


_bid_list = TypeAdapter(List[SignedBidModel])


def parse_signed_bids(data: Union[str, bytes], max_bids: int = MAX_BIDS) -> List[SignedBid]:
    """
    Parse a JSON array of signed bids.

    Args:
        data: JSON document
        max_bids: Largest number of bids accepted in one document

    Raises:
        BidFormatError: If the document is not a valid bid list or is too long
    """
    try:
        models = _bid_list.validate_json(data)
    except ValidationError as e:
        raise BidFormatError(f"Invalid bid file: {e}") from e

    valid, err = validate_array(models, "bids", max_bids)
    if not valid:
        raise BidFormatError(f"Invalid bid file: {err}")
    return [m.to_signed_bid() for m in models]


def load_signed_bids(path: Union[str, Path], max_bids: int = MAX_BIDS) -> List[SignedBid]:
    """Read and parse a bid file."""
    return parse_signed_bids(Path(path).read_bytes(), max_bids=max_bids)


def dump_signed_bids(bids: List[SignedBid]) -> str:
    return json.dumps([b.to_dict() for b in bids], indent=2)
