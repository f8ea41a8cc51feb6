"""
Verified document schema.

Defines the immutable hand-off object produced by the external PDF /
signature verifier and consumed read-only by the extraction pipeline.

The Attestor never re-verifies a VerifiedDocument. The signature validity
flag is trusted verbatim.
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


PAGE_SEPARATOR = " "


class VerifiedDocument(BaseModel):
    """
    Output of the external verifier.

    AUTHORITY
    ---------
    - pages:
        Ordered page texts as extracted by the verifier.
    - signature_valid:
        Cryptographic validity of the embedded signature, as decided by
        the verifier.
    - message_digest:
        Digest over which the signature was computed.
    - public_key:
        Raw signer public key bytes.
    """

    pages: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Ordered page texts",
    )

    signature_valid: bool = Field(
        ...,
        description="Signature validity flag reported by the verifier",
    )

    message_digest: bytes = Field(
        ...,
        description="Digest the document signature was computed over",
    )

    public_key: bytes = Field(
        ...,
        description="Signer public key bytes",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def full_text(self) -> str:
        """Concatenate all pages with a single space, page order preserved."""
        return PAGE_SEPARATOR.join(self.pages)


__all__ = [
    "PAGE_SEPARATOR",
    "VerifiedDocument",
]
