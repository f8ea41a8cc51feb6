"""
Verifier boundary: signed PDF bytes -> VerifiedDocument.

This module is the only place the Attestor touches PDF containers. PDF
parsing and signature cryptography are delegated entirely to pikepdf,
pyHanko and pypdf; nothing here re-implements either.

Behavior:
    - Size and page-count limits are enforced from AttestorConfig.
    - The first embedded signature is validated for integrity and
      cryptographic validity only. Trust-chain evaluation is out of scope.
    - A signature that fails validation is NOT an error. The document is
      still returned with signature_valid=False.
    - Inputs that are not PDFs, exceed limits, or carry no embedded
      signature raise VerificationError.

Exception handling policy:
    Only the domain exceptions these libraries raise for malformed input
    (pikepdf.PdfError, PdfReadError, SignatureValidationError) are caught.
    Logic errors propagate.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional, Protocol, Tuple

import pikepdf
import pypdf
from pypdf.errors import PdfReadError as PageTextReadError
from pyhanko.pdf_utils.misc import PdfReadError
from pyhanko.pdf_utils.reader import PdfFileReader
from pyhanko.sign.validation import async_validate_pdf_signature
from pyhanko.sign.validation.errors import SignatureValidationError
from pyhanko_certvalidator import ValidationContext

from attestor.app.config import AttestorConfig
from attestor.app.errors import VerificationError
from attestor.app.schemas.document import VerifiedDocument

logger = logging.getLogger(__name__)


PDF_HEADER = b"%PDF-"


class DocumentVerifier(Protocol):
    """
    Interface of the external PDF / signature verifier.

    Implementations must either return a VerifiedDocument or raise
    VerificationError.
    """

    def verify_and_extract(self, pdf_bytes: bytes) -> VerifiedDocument:
        ...


class AsyncDocumentVerifier(Protocol):
    """Async variant of DocumentVerifier for callers inside an event loop."""

    async def averify_and_extract(self, pdf_bytes: bytes) -> VerifiedDocument:
        ...


class PdfSignatureVerifier:
    """
    pyHanko-backed verifier.

    Stateless apart from configuration. Safe to share across calls.
    """

    def __init__(self, config: Optional[AttestorConfig] = None) -> None:
        self._config = config or AttestorConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def verify_and_extract(self, pdf_bytes: bytes) -> VerifiedDocument:
        """
        Synchronous entry point for scripts and worker threads.

        Must not be called from a running event loop; await
        averify_and_extract() there instead.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.averify_and_extract(pdf_bytes))

        raise RuntimeError(
            "verify_and_extract() called from a running event loop; "
            "await averify_and_extract() instead"
        )

    async def averify_and_extract(self, pdf_bytes: bytes) -> VerifiedDocument:
        self._check_container(pdf_bytes)

        signature_valid, message_digest, public_key = (
            await self._validate_signature(pdf_bytes)
        )
        pages = self._extract_pages(pdf_bytes)

        logger.info(
            "Verified PDF: %d page(s), signature_valid=%s",
            len(pages),
            signature_valid,
        )

        return VerifiedDocument(
            pages=pages,
            signature_valid=signature_valid,
            message_digest=message_digest,
            public_key=public_key,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _check_container(self, pdf_bytes: bytes) -> None:
        if not isinstance(pdf_bytes, (bytes, bytearray)):
            raise TypeError(
                f"pdf_bytes expects bytes, got {type(pdf_bytes).__name__}"
            )

        if len(pdf_bytes) > self._config.max_pdf_size_bytes:
            raise VerificationError(
                f"PDF exceeds maximum size of "
                f"{self._config.MAX_PDF_SIZE_MB} MB"
            )

        if not bytes(pdf_bytes[:1024]).lstrip().startswith(PDF_HEADER):
            raise VerificationError("Input is not a PDF document")

        try:
            with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
                page_count = len(pdf.pages)
        except pikepdf.PdfError as exc:
            logger.warning("pikepdf failed to parse document: %s", exc)
            raise VerificationError(
                f"PDF is structurally unparsable: {exc}"
            ) from exc

        if page_count > self._config.MAX_PAGE_COUNT:
            raise VerificationError(
                f"PDF has {page_count} pages, maximum is "
                f"{self._config.MAX_PAGE_COUNT}"
            )

    async def _validate_signature(
        self, pdf_bytes: bytes
    ) -> Tuple[bool, bytes, bytes]:
        try:
            reader = PdfFileReader(io.BytesIO(pdf_bytes))

            if not reader.embedded_signatures:
                raise VerificationError("PDF carries no embedded signature")

            # The first applied signature covers the issued document.
            embedded_sig = reader.embedded_signatures[0]

            # Trust-chain evaluation is out of scope: the signer certificate
            # is the only anchor and nothing is fetched.
            validation_context = ValidationContext(
                trust_roots=[embedded_sig.signer_cert],
                allow_fetching=False,
            )
            status = await async_validate_pdf_signature(
                embedded_sig, validation_context
            )

            message_digest = embedded_sig.compute_digest()
            public_key = embedded_sig.signer_cert.public_key.dump()

        except (PdfReadError, SignatureValidationError) as exc:
            logger.warning("Signature extraction failed: %s", exc)
            raise VerificationError(
                f"Signature could not be processed: {exc}"
            ) from exc

        signature_valid = bool(status.intact and status.valid)
        if not signature_valid:
            logger.warning("Embedded signature failed cryptographic validation")

        return signature_valid, message_digest, public_key

    @staticmethod
    def _extract_pages(pdf_bytes: bytes) -> Tuple[str, ...]:
        try:
            reader = pypdf.PdfReader(io.BytesIO(pdf_bytes))
            return tuple(page.extract_text() or "" for page in reader.pages)
        except PageTextReadError as exc:
            raise VerificationError(
                f"Page text could not be extracted: {exc}"
            ) from exc


def verify_and_extract(
    pdf_bytes: bytes,
    config: Optional[AttestorConfig] = None,
) -> VerifiedDocument:
    """Verify ``pdf_bytes`` with the default pyHanko-backed verifier."""
    return PdfSignatureVerifier(config).verify_and_extract(pdf_bytes)
