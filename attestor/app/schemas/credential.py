"""
Credential schemas.

Defines the closed set of supported credential kinds, the static
per-kind extraction descriptor, and the records produced by the pipeline:

- ExtractedFields:     structured fields for a single kind (internal)
- PublicOutputRecord:  the sole artifact crossing the Attestor boundary

All records are immutable once constructed.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


COMMITMENT_SIZE = 32


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class CredentialKind(str, Enum):
    """
    Category of identity credential.

    New kinds are added here AND registered in CREDENTIAL_KIND_SPECS.
    """

    GST_CERTIFICATE = "gst_certificate"
    PAN_CARD = "pan_card"


# ---------------------------------------------------------------------------
# Kind descriptors
# ---------------------------------------------------------------------------


class CredentialKindSpec(BaseModel):
    """
    Static extraction descriptor for a credential kind.

    Patterns are stored as source strings and compiled once, lazily,
    by attestor.app.extraction.patterns.
    """

    kind: CredentialKind
    identifier_field: str
    identifier_pattern: str
    name_label: str
    name_stop_keywords: Tuple[str, ...]
    struct_name: str

    model_config = ConfigDict(frozen=True)


CREDENTIAL_KIND_SPECS: Mapping[CredentialKind, CredentialKindSpec] = {
    CredentialKind.GST_CERTIFICATE: CredentialKindSpec(
        kind=CredentialKind.GST_CERTIFICATE,
        identifier_field="gst_number",
        identifier_pattern=(
            r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z{1}[0-9A-Z]{1}"
        ),
        name_label="Legal Name",
        name_stop_keywords=("Trade Name", "Additional"),
        struct_name="GSTValuesStruct",
    ),
    CredentialKind.PAN_CARD: CredentialKindSpec(
        kind=CredentialKind.PAN_CARD,
        identifier_field="pan_number",
        identifier_pattern=r"[A-Z]{5}[0-9]{4}[A-Z]{1}",
        name_label="Name",
        name_stop_keywords=("Father", "DOB"),
        struct_name="PANValuesStruct",
    ),
}


def spec_for(kind: CredentialKind) -> CredentialKindSpec:
    return CREDENTIAL_KIND_SPECS[kind]


# ---------------------------------------------------------------------------
# Extraction result (INTERNAL)
# ---------------------------------------------------------------------------


class ExtractedFields(BaseModel):
    """
    Fields extracted for a single credential kind.

    Either every required field is present and non-empty, or no
    ExtractedFields instance exists.
    """

    kind: CredentialKind
    identifier: str = Field(..., min_length=1)
    legal_name: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def enforce_identifier_grammar(self):
        """The identifier must match the kind's grammar in full."""
        # Imported here: the patterns module depends on this one.
        from attestor.app.extraction.patterns import patterns_for

        if patterns_for(self.kind).identifier.fullmatch(self.identifier) is None:
            raise ValueError(
                f"Identifier does not match the {self.kind.value} grammar"
            )
        return self

    def as_mapping(self) -> Dict[str, str]:
        """Return the fields keyed by their kind-specific names."""
        return {
            spec_for(self.kind).identifier_field: self.identifier,
            "legal_name": self.legal_name,
        }


# ---------------------------------------------------------------------------
# Public output record (PUBLIC, FROZEN)
# ---------------------------------------------------------------------------


class PublicOutputRecord(BaseModel):
    """
    Canonical public record of a classified credential.

    signature_valid is copied verbatim from the upstream verifier. A record
    with signature_valid=False is well-formed but not signature-backed.
    """

    kind: CredentialKind = Field(
        ...,
        description="Credential kind discriminant",
    )

    identifier: str = Field(
        ...,
        min_length=1,
        description="Kind-specific primary identifier (GSTIN or PAN)",
    )

    legal_name: str = Field(
        ...,
        min_length=1,
        description="Legal / holder name",
    )

    signature_valid: bool = Field(
        ...,
        description="Signature validity flag reported by the verifier",
    )

    document_commitment: bytes = Field(
        ...,
        description="Keccak-256 over digest, identifier, name and key",
    )

    public_key_hash: bytes = Field(
        ...,
        description="Keccak-256 of the raw signer public key bytes",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("document_commitment", "public_key_hash")
    @classmethod
    def validate_digest_size(cls, v: bytes) -> bytes:
        if len(v) != COMMITMENT_SIZE:
            raise ValueError(
                f"Expected a {COMMITMENT_SIZE}-byte digest, got {len(v)} bytes"
            )
        return v

    @property
    def identifier_field(self) -> str:
        return spec_for(self.kind).identifier_field

    def to_display_dict(self) -> Dict[str, object]:
        """
        Human-readable projection with 0x-prefixed hex digests.

        PRESENTATION ONLY. Field order is not significant here; use
        attestor.app.encoding.public_output for the positional layout.
        """
        return {
            "kind": self.kind.value,
            self.identifier_field: self.identifier,
            "legal_name": self.legal_name,
            "signature_valid": self.signature_valid,
            "document_commitment": "0x" + self.document_commitment.hex(),
            "public_key_hash": "0x" + self.public_key_hash.hex(),
        }


__all__ = [
    "COMMITMENT_SIZE",
    "CREDENTIAL_KIND_SPECS",
    "CredentialKind",
    "CredentialKindSpec",
    "ExtractedFields",
    "PublicOutputRecord",
    "spec_for",
]
