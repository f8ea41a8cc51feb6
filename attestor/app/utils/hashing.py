"""
Cryptographic commitment primitives.

Binds extracted credential fields to the signed document by hashing them
together with the signature material supplied by the verifier.

Current scope:
- Keccak-256 over raw bytes
- Document commitment construction
- Signer public key hashing

IMPORTANT DESIGN RULE:
- The concatenation order is a compatibility contract with on-chain
  verifiers: message_digest || identifier || legal_name || public_key.
- No delimiters or length prefixes are inserted between fields.

Keccak-256 here is the Ethereum variant (original Keccak padding), not
FIPS-202 SHA3-256, so hashlib.sha3_256 cannot be substituted.
"""

from __future__ import annotations

from typing import Union

from Crypto.Hash import keccak


BytesLike = Union[bytes, bytearray]


def _require_bytes(name: str, value: object) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(
            f"{name} expects bytes, got {type(value).__name__}"
        )
    return bytes(value)


def _require_str(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(
            f"{name} expects str, got {type(value).__name__}"
        )
    return value


def keccak256(data: BytesLike) -> bytes:
    """Compute the 32-byte Keccak-256 digest of ``data``."""
    data = _require_bytes("data", data)
    hasher = keccak.new(digest_bits=256)
    hasher.update(data)
    return hasher.digest()


def commit(
    primary_identifier: str,
    legal_name: str,
    message_digest: BytesLike,
    public_key: BytesLike,
) -> bytes:
    """
    Compute the 32-byte document commitment.

    Args:
        primary_identifier:
            Kind-specific identifier (GSTIN or PAN), hashed as UTF-8.
        legal_name:
            Trimmed legal / holder name, hashed as UTF-8.
        message_digest:
            Digest over which the document signature was computed.
        public_key:
            Raw signer public key bytes.

    Returns:
        Keccak-256(message_digest || identifier || legal_name || public_key)
    """
    preimage = b"".join(
        (
            _require_bytes("message_digest", message_digest),
            _require_str("primary_identifier", primary_identifier).encode("utf-8"),
            _require_str("legal_name", legal_name).encode("utf-8"),
            _require_bytes("public_key", public_key),
        )
    )
    return keccak256(preimage)


def hash_public_key(public_key: BytesLike) -> bytes:
    """Keccak-256 of the raw signer public key bytes."""
    return keccak256(_require_bytes("public_key", public_key))
