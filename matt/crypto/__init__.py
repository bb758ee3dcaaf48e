"""
Hashing and encoding primitives for MATT.

This module provides:
- Keccak-256 (Ethereum-style) hashing for EIP-712 bid digests
- Hex/bytes helpers for addresses and signatures

Design Notes:
-------------
Signature recovery and verification are not provided here: bid
verification is delegated to an external verifier (usually the auction
contract's verifyBid). Only the hashing needed to describe what a bidder
signs lives here.
"""

from typing import Union

from Crypto.Hash import keccak


# =============================================================================
# Constants
# =============================================================================

ADDRESS_SIZE = 20
WORD_SIZE = 32
MAX_UINT256 = 2**256 - 1


# =============================================================================
# Hashing
# =============================================================================


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).

    Used for: EIP-712 type hashes, struct hashes and signing digests.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


# =============================================================================
# ABI Word Encoding
# =============================================================================


def encode_uint256(value: int) -> bytes:
    """Encode an unsigned integer as a 32-byte big-endian word."""
    if value < 0 or value > MAX_UINT256:
        raise ValueError(f"uint256 out of range: {value}")
    return value.to_bytes(WORD_SIZE, "big")


def encode_address(address: Union[str, bytes]) -> bytes:
    """Encode a 20-byte address left-padded to a 32-byte word."""
    raw = hex_to_bytes(address) if isinstance(address, str) else address
    if len(raw) != ADDRESS_SIZE:
        raise ValueError(f"address must be {ADDRESS_SIZE} bytes, got {len(raw)}")
    return raw.rjust(WORD_SIZE, b"\x00")


# =============================================================================
# Utility Functions
# =============================================================================


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


def is_valid_address(address: str) -> bool:
    """Check if string is a valid address format."""
    if not address.startswith("0x"):
        return False
    if len(address) != 42:  # 0x + 40 hex chars
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False
