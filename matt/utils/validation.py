"""
Input Validation - Caller-side checks for bid data.

The clearing engine assumes well-formed, non-negative integer amounts and
does not validate them. Callers loading bids from untrusted sources check
them here first.

All validators return (is_valid, error_message).
"""

from typing import Any, Optional, Tuple

from matt.crypto import MAX_UINT256

# =============================================================================
# Constants
# =============================================================================

MAX_SIGNATURE_SIZE = 65
MAX_ADDRESS_SIZE = 20
MAX_BIDS = 10_000

# Field bounds
MIN_AMOUNT = 0
MAX_AMOUNT = MAX_UINT256


# =============================================================================
# Validation Functions
# =============================================================================


def validate_integer(
    value: Any,
    name: str,
    min_val: int,
    max_val: int,
) -> Tuple[bool, str]:
    """
    Validate integer within bounds.

    Args:
        value: Value to validate
        name: Field name for errors
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        (is_valid, error_message)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be int, got {type(value).__name__}"

    if value < min_val:
        return False, f"{name} must be >= {min_val}, got {value}"

    if value > max_val:
        return False, f"{name} must be <= {max_val}, got {value}"

    return True, ""


def validate_amount(amount: Any) -> Tuple[bool, str]:
    """Validate a bid amount (uint256)."""
    return validate_integer(amount, "amount", MIN_AMOUNT, MAX_AMOUNT)


def validate_hex_string(value: Any, name: str, expected_bytes: Optional[int] = None) -> Tuple[bool, str]:
    """
    Validate a hex string (with or without 0x prefix).

    Args:
        value: Value to validate
        name: Field name
        expected_bytes: Expected byte length when decoded

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    hex_str = value[2:] if value.startswith("0x") else value

    if len(hex_str) % 2 != 0:
        return False, f"{name} has odd length, invalid hex"

    try:
        bytes.fromhex(hex_str)
    except ValueError:
        return False, f"{name} contains invalid hex characters"

    if expected_bytes is not None:
        actual_bytes = len(hex_str) // 2
        if actual_bytes != expected_bytes:
            return False, f"{name} must be {expected_bytes} bytes, got {actual_bytes}"

    return True, ""


def validate_address(address: Any, name: str = "address") -> Tuple[bool, str]:
    """Validate a 0x-prefixed 20-byte address."""
    if isinstance(address, str) and not address.startswith("0x"):
        return False, f"{name} must start with 0x"
    return validate_hex_string(address, name, MAX_ADDRESS_SIZE)


def validate_signature(sig: Any) -> Tuple[bool, str]:
    """Validate a 65-byte (r || s || v) signature."""
    return validate_hex_string(sig, "sig", MAX_SIGNATURE_SIZE)


def validate_array(data: Any, name: str, max_length: int = MAX_BIDS) -> Tuple[bool, str]:
    """Validate list input."""
    if not isinstance(data, (list, tuple)):
        return False, f"{name} must be list/tuple, got {type(data).__name__}"

    if len(data) > max_length:
        return False, f"{name} exceeds max length {max_length}, got {len(data)}"

    return True, ""


# =============================================================================
# Composite Validators
# =============================================================================


def validate_bid(bid: Any) -> Tuple[bool, str]:
    """Validate a parsed Bid (amount already an int)."""
    valid, err = validate_address(getattr(bid, "bidder", None), "bidder")
    if not valid:
        return False, err

    valid, err = validate_address(getattr(bid, "token", None), "token")
    if not valid:
        return False, err

    return validate_amount(getattr(bid, "amount", None))


def validate_signed_bid(signed_bid: Any, check_signature: bool = True) -> Tuple[bool, str]:
    """Validate a parsed SignedBid."""
    valid, err = validate_bid(getattr(signed_bid, "bid", None))
    if not valid:
        return False, err

    if check_signature:
        return validate_signature(getattr(signed_bid, "sig", None))
    return True, ""


# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "validate_integer",
    "validate_amount",
    "validate_hex_string",
    "validate_address",
    "validate_signature",
    "validate_array",
    "validate_bid",
    "validate_signed_bid",
    "MAX_SIGNATURE_SIZE",
    "MAX_ADDRESS_SIZE",
    "MAX_BIDS",
]
