import pytest

from attestor.app.coordinator.attestation import aattest
from attestor.app.errors import VerificationError
from attestor.app.schemas.credential import CredentialKind
from attestor.app.verification.pdf_verifier import PdfSignatureVerifier

from attestor.tests.fixtures.document_factory import (
    GST_LEGAL_NAME,
    GST_NUMBER,
    gst_certificate_text,
    signed_pdf,
    tampered,
    verified_document,
)

pytestmark = pytest.mark.anyio


@pytest.fixture
def anyio_backend():
    return "asyncio"


GST_LINES = (
    f"Registration Number : {GST_NUMBER}",
    f"Legal Name {GST_LEGAL_NAME}",
)


# pyHanko's synchronous sign_pdf runs its own event loop, so the signed
# PDFs are built in synchronous fixtures, outside the test's running loop.
@pytest.fixture
def signed_gst_pdf():
    return signed_pdf(*GST_LINES)


@pytest.fixture
def tampered_gst_pdf(signed_gst_pdf):
    return tampered(signed_gst_pdf)


class _AsyncStubVerifier:
    def __init__(self, document):
        self.document = document

    async def averify_and_extract(self, pdf_bytes):
        return self.document


async def test_aattest_awaits_async_verifier():
    verifier = _AsyncStubVerifier(verified_document(gst_certificate_text()))

    record = await aattest(b"%PDF-stub", verifier=verifier)

    assert record.kind is CredentialKind.GST_CERTIFICATE
    assert record.identifier == GST_NUMBER


async def test_aattest_validates_signed_pdf_on_running_loop(signed_gst_pdf):
    record = await aattest(signed_gst_pdf)

    assert record.identifier == GST_NUMBER
    assert record.legal_name == GST_LEGAL_NAME
    assert record.signature_valid is True


async def test_aattest_flags_tampered_pdf(tampered_gst_pdf):
    record = await aattest(tampered_gst_pdf)

    assert record.signature_valid is False


async def test_aattest_propagates_verification_error():
    with pytest.raises(VerificationError):
        await aattest(b"not a pdf")


async def test_sync_verifier_refuses_running_loop():
    with pytest.raises(RuntimeError, match="averify_and_extract"):
        PdfSignatureVerifier().verify_and_extract(b"%PDF-stub")
