"""
Attestation entry point.

Wires the verifier boundary to the credential classifier:

    signed PDF bytes -> VerifiedDocument -> PublicOutputRecord

IMPORTANT:
This module is a DUMB AUTHORITY. It enforces execution order only and
never inspects document text or reinterprets classification results.
"""

from __future__ import annotations

import logging
from typing import Optional

from attestor.app.config import AttestorConfig
from attestor.app.coordinator.classifier import CredentialClassifier
from attestor.app.schemas.credential import PublicOutputRecord
from attestor.app.schemas.document import VerifiedDocument
from attestor.app.verification.pdf_verifier import (
    AsyncDocumentVerifier,
    DocumentVerifier,
    PdfSignatureVerifier,
)

logger = logging.getLogger(__name__)


def attest(
    pdf_bytes: bytes,
    *,
    config: Optional[AttestorConfig] = None,
    verifier: Optional[DocumentVerifier] = None,
    classifier: Optional[CredentialClassifier] = None,
) -> PublicOutputRecord:
    """
    Verify a signed credential PDF and build its public output record.

    Synchronous; for scripts and worker threads. Use aattest() inside a
    running event loop.

    Raises:
        VerificationError:
            The verifier could not produce a VerifiedDocument.
        UnrecognizedCredential:
            No supported credential kind could be extracted.
    """
    verifier = verifier or PdfSignatureVerifier(config)

    document = verifier.verify_and_extract(pdf_bytes)
    return _classify(document, classifier)


async def aattest(
    pdf_bytes: bytes,
    *,
    config: Optional[AttestorConfig] = None,
    verifier: Optional[AsyncDocumentVerifier] = None,
    classifier: Optional[CredentialClassifier] = None,
) -> PublicOutputRecord:
    """
    Async variant of attest() for callers running inside an event loop.

    Signature validation is awaited on the caller's loop. Classification
    is synchronous and CPU-bound on document text only.
    """
    verifier = verifier or PdfSignatureVerifier(config)

    document = await verifier.averify_and_extract(pdf_bytes)
    return _classify(document, classifier)


def _classify(
    document: VerifiedDocument,
    classifier: Optional[CredentialClassifier],
) -> PublicOutputRecord:
    classifier = classifier or CredentialClassifier()
    record = classifier.classify(document)

    logger.info(
        "Attested %s (signature_valid=%s, commitment=0x%s)",
        record.kind.value,
        record.signature_valid,
        record.document_commitment.hex(),
    )
    return record
