"""
Credential field extraction from verified document text.

Given the full text of a verified document and a candidate credential
kind, locates the kind's primary identifier and legal name.

IMPORTANT DESIGN CONSTRAINTS
----------------------------
- Matching is case-sensitive and takes the first occurrence only.
- Extraction is all-or-nothing: a partial record is never returned.
- Pure function of its inputs; no state is retained between calls.
"""

from __future__ import annotations

import logging

from attestor.app.errors import IdentifierNotFound, LegalNameNotFound
from attestor.app.extraction.patterns import patterns_for
from attestor.app.schemas.credential import CredentialKind, ExtractedFields

logger = logging.getLogger(__name__)


def extract_identifier(kind: CredentialKind, text: str) -> str:
    match = patterns_for(kind).identifier.search(text)
    if match is None:
        raise IdentifierNotFound(kind)
    return match.group(0)


def extract_legal_name(kind: CredentialKind, text: str) -> str:
    match = patterns_for(kind).legal_name.search(text)
    if match is None:
        raise LegalNameNotFound(kind)

    legal_name = match.group(1).strip()
    if not legal_name:
        raise LegalNameNotFound(kind)

    return legal_name


def extract(kind: CredentialKind, text: str) -> ExtractedFields:
    """
    Extract the required fields for ``kind`` from ``text``.

    Parameters
    ----------
    kind:
        Candidate credential kind.
    text:
        Concatenated page text (see VerifiedDocument.full_text).

    Raises
    ------
    IdentifierNotFound
        The kind's identifier grammar does not occur in the text.
    LegalNameNotFound
        The name label is absent or the captured name is empty.
    PatternCompilationFailed
        The fixed patterns could not be compiled.
    """
    identifier = extract_identifier(kind, text)
    legal_name = extract_legal_name(kind, text)

    logger.debug(
        "Extracted %s fields (identifier length %d)",
        kind.value,
        len(identifier),
    )

    return ExtractedFields(
        kind=kind,
        identifier=identifier,
        legal_name=legal_name,
    )
