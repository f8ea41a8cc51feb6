"""
Credential classifier.

Decides which credential kind a verified document is and builds its public
output record.

Classification is a single synchronous decision between two states:

    Unclassified (initial)  ->  Classified (terminal)

Candidate kinds are evaluated as an ordered list of strategies with early
exit on the first strategy that extracts every required field. The default
order is GST certificate, then PAN card. Adding a kind is a data change:
append a strategy.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from attestor.app.errors import ExtractionError, UnrecognizedCredential
from attestor.app.extraction.field_extractor import extract
from attestor.app.schemas.credential import (
    CredentialKind,
    ExtractedFields,
    PublicOutputRecord,
)
from attestor.app.schemas.document import VerifiedDocument
from attestor.app.utils.hashing import commit, hash_public_key

logger = logging.getLogger(__name__)


DEFAULT_KIND_ORDER = (
    CredentialKind.GST_CERTIFICATE,
    CredentialKind.PAN_CARD,
)


class ClassificationStrategy:
    """Extraction attempt for a single credential kind."""

    def __init__(self, kind: CredentialKind) -> None:
        self.kind = kind

    def attempt(self, text: str) -> ExtractedFields:
        return extract(self.kind, text)

    def __repr__(self) -> str:
        return f"ClassificationStrategy({self.kind.value})"


def default_strategies() -> List[ClassificationStrategy]:
    return [ClassificationStrategy(kind) for kind in DEFAULT_KIND_ORDER]


class CredentialClassifier:
    """
    First-match-wins credential classifier.

    IMPORTANT:
    - The signature is NOT re-verified. signature_valid is copied from the
      input document verbatim, and a record is emitted even when it is False.
    - Per-kind extraction errors are diagnostics only. They are logged and
      discarded; UnrecognizedCredential is the only failure that escapes.
    - PatternCompilationFailed is an environment defect and propagates.
    """

    def __init__(
        self,
        strategies: Optional[Iterable[ClassificationStrategy]] = None,
    ) -> None:
        self._strategies: Sequence[ClassificationStrategy] = tuple(
            strategies if strategies is not None else default_strategies()
        )

    @property
    def kinds(self) -> tuple:
        return tuple(s.kind for s in self._strategies)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(self, doc: VerifiedDocument) -> PublicOutputRecord:
        fields = self._select(doc.full_text())
        return self._build_record(fields, doc)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select(self, text: str) -> ExtractedFields:
        for strategy in self._strategies:
            try:
                fields = strategy.attempt(text)
            except ExtractionError as exc:
                logger.debug("Skipping %s: %s", strategy.kind.value, exc)
                continue

            logger.debug("Classified document as %s", strategy.kind.value)
            return fields

        raise UnrecognizedCredential(self.kinds)

    @staticmethod
    def _build_record(
        fields: ExtractedFields, doc: VerifiedDocument
    ) -> PublicOutputRecord:
        return PublicOutputRecord(
            kind=fields.kind,
            identifier=fields.identifier,
            legal_name=fields.legal_name,
            signature_valid=doc.signature_valid,
            document_commitment=commit(
                fields.identifier,
                fields.legal_name,
                doc.message_digest,
                doc.public_key,
            ),
            public_key_hash=hash_public_key(doc.public_key),
        )


_default_classifier = CredentialClassifier()


def classify(doc: VerifiedDocument) -> PublicOutputRecord:
    """Classify ``doc`` with the default GST-then-PAN strategy order."""
    return _default_classifier.classify(doc)
