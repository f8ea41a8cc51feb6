"""
Attestor error taxonomy.

Every failure mode is a distinct, typed exception. Extraction failures for
a single credential kind are internal to the classifier; only
UnrecognizedCredential (or a successful record) crosses its boundary.
"""

from __future__ import annotations

from typing import Sequence, Tuple


class AttestorError(RuntimeError):
    """Base class for all Attestor failures."""


class VerificationError(AttestorError):
    """Raised when the verifier boundary cannot produce a VerifiedDocument."""


class PatternCompilationFailed(AttestorError):
    """
    Raised when a fixed extraction pattern fails to compile.

    This is an environment defect, not a data problem. It is never
    interpreted as "kind did not match".
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Pattern compilation failed for {pattern!r}: {reason}")


class ExtractionError(AttestorError):
    """Base class for a failed extraction attempt for one credential kind."""

    message = "Extraction failed"

    def __init__(self, kind) -> None:
        self.kind = kind
        super().__init__(f"{self.message} ({kind.value})")


class IdentifierNotFound(ExtractionError):
    message = "Primary identifier not found in document text"


class LegalNameNotFound(ExtractionError):
    message = "Legal name not found in document text"


class UnrecognizedCredential(AttestorError):
    """Raised when no candidate credential kind extracts successfully."""

    def __init__(self, attempted_kinds: Sequence = ()) -> None:
        self.attempted_kinds: Tuple = tuple(attempted_kinds)
        tried = ", ".join(k.value for k in self.attempted_kinds) or "none"
        super().__init__(f"Unrecognized credential (attempted: {tried})")
