"""
Typed Data - EIP-712 messages for MATT bids.

Bidders sign a `Bid` struct under the `MattAuction` domain:

    Bid(address bidder,address token,uint256 amount)
    EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)

This module builds the typed message handed to a wallet and computes the
digest that the wallet signs:

    digest = keccak256(0x19 0x01 || domainSeparator || hashStruct(bid))

Only flat structs with `string`, `address` and `uint256` members are
supported, which covers both the bid and the domain.
"""

from typing import Any, Dict, List

from matt.core.bid import Bid
from matt.crypto import encode_address, encode_uint256, keccak256

# =============================================================================
# Constants
# =============================================================================

DOMAIN_NAME = "MattAuction"
DOMAIN_VERSION = "1"
PRIMARY_TYPE = "Bid"

BID_TYPES: Dict[str, List[Dict[str, str]]] = {
    "Bid": [
        {"name": "bidder", "type": "address"},
        {"name": "token", "type": "address"},
        {"name": "amount", "type": "uint256"},
    ],
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
}

EIP712_PREFIX = b"\x19\x01"


# =============================================================================
# Message Construction
# =============================================================================


def create_domain(
    chain_id: int,
    verifying_contract: str,
    name: str = DOMAIN_NAME,
    version: str = DOMAIN_VERSION,
) -> Dict[str, Any]:
    return {
        "name": name,
        "version": version,
        "chainId": chain_id,
        "verifyingContract": verifying_contract,
    }


def create_typed_message(
    bid: Bid,
    chain_id: int,
    verifying_contract: str,
    name: str = DOMAIN_NAME,
    version: str = DOMAIN_VERSION,
) -> Dict[str, Any]:
    """
    Build the EIP-712 typed message for a bid.

    The result has the JSON shape expected by eth_signTypedData_v4.
    """
    return {
        "types": BID_TYPES,
        "primaryType": PRIMARY_TYPE,
        "domain": create_domain(chain_id, verifying_contract, name, version),
        "message": bid.to_dict(),
    }


# =============================================================================
# Hashing
# =============================================================================


def encode_type(primary_type: str, types: Dict[str, List[Dict[str, str]]] = BID_TYPES) -> str:
    """Encode a struct type, e.g. 'Bid(address bidder,...)'."""
    members = ",".join(f"{f['type']} {f['name']}" for f in types[primary_type])
    return f"{primary_type}({members})"


def type_hash(primary_type: str, types: Dict[str, List[Dict[str, str]]] = BID_TYPES) -> bytes:
    return keccak256(encode_type(primary_type, types).encode("utf-8"))


def _encode_value(field_type: str, value: Any) -> bytes:
    if field_type == "string":
        return keccak256(value.encode("utf-8"))
    if field_type == "address":
        return encode_address(value)
    if field_type == "uint256":
        if isinstance(value, str):
            value = int(value, 16) if value.lower().startswith("0x") else int(value)
        return encode_uint256(value)
    raise ValueError(f"Unsupported EIP-712 field type: {field_type}")


def hash_struct(
    primary_type: str,
    data: Dict[str, Any],
    types: Dict[str, List[Dict[str, str]]] = BID_TYPES,
) -> bytes:
    """
    Compute hashStruct(data) for a flat struct.

    Raises:
        KeyError: If a member is missing from data
        ValueError: If a member has an unsupported type or bad value
    """
    encoded = type_hash(primary_type, types)
    for field in types[primary_type]:
        encoded += _encode_value(field["type"], data[field["name"]])
    return keccak256(encoded)


def domain_separator(domain: Dict[str, Any]) -> bytes:
    return hash_struct("EIP712Domain", domain)


def signing_digest(typed_message: Dict[str, Any]) -> bytes:
    """Compute the 32-byte digest a wallet signs for a typed message."""
    types = typed_message["types"]
    return keccak256(
        EIP712_PREFIX
        + hash_struct("EIP712Domain", typed_message["domain"], types)
        + hash_struct(typed_message["primaryType"], typed_message["message"], types)
    )


def bid_digest(bid: Bid, chain_id: int, verifying_contract: str) -> bytes:
    """Shortcut: digest of a bid under the default MattAuction domain."""
    return signing_digest(create_typed_message(bid, chain_id, verifying_contract))
