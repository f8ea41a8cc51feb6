"""
Public output encoding.

Maps a PublicOutputRecord onto the positional schema handed to the ABI /
wire-encoding collaborator. Field order is load-bearing: the external
boundary decodes by position, not by name.

Per-kind layout:

    GST: (string gst_number, string legal_name, bool signature_valid,
          bytes32 document_commitment, bytes32 public_key_hash)
    PAN: (string pan_number, string legal_name, bool signature_valid,
          bytes32 document_commitment, bytes32 public_key_hash)

Byte-level ABI encoding is NOT performed here.
"""

from __future__ import annotations

from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict

from attestor.app.schemas.credential import (
    CredentialKind,
    PublicOutputRecord,
    spec_for,
)


class ExternalField(BaseModel):
    name: str
    abi_type: str
    value: Any

    model_config = ConfigDict(frozen=True)


class ExternalRecord(BaseModel):
    """
    Positional record for the external boundary.

    Immutable. ``members`` is ordered exactly as the on-chain struct.
    """

    kind: CredentialKind
    struct_name: str
    members: Tuple[ExternalField, ...]

    model_config = ConfigDict(frozen=True)

    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.members)

    def abi_types(self) -> Tuple[str, ...]:
        return tuple(f.abi_type for f in self.members)

    def values(self) -> Tuple[Any, ...]:
        return tuple(f.value for f in self.members)

    def signature(self) -> str:
        """Tuple type signature, e.g. ``(string,string,bool,bytes32,bytes32)``."""
        return "(" + ",".join(self.abi_types()) + ")"

    def struct_definition(self) -> str:
        """Render the matching Solidity struct declaration."""
        members = "\n".join(
            f"    {f.abi_type} {f.name};" for f in self.members
        )
        return f"struct {self.struct_name} {{\n{members}\n}}"


def encode(record: PublicOutputRecord) -> ExternalRecord:
    """Map ``record`` onto its kind's positional external schema."""
    spec = spec_for(record.kind)

    return ExternalRecord(
        kind=record.kind,
        struct_name=spec.struct_name,
        members=(
            ExternalField(
                name=spec.identifier_field,
                abi_type="string",
                value=record.identifier,
            ),
            ExternalField(
                name="legal_name",
                abi_type="string",
                value=record.legal_name,
            ),
            ExternalField(
                name="signature_valid",
                abi_type="bool",
                value=record.signature_valid,
            ),
            ExternalField(
                name="document_commitment",
                abi_type="bytes32",
                value=record.document_commitment,
            ),
            ExternalField(
                name="public_key_hash",
                abi_type="bytes32",
                value=record.public_key_hash,
            ),
        ),
    )
