import io
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import pikepdf
from asn1crypto import keys as asn1_keys
from asn1crypto import x509 as asn1_x509
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from pikepdf import Dictionary, Name
from pyhanko.pdf_utils.incremental_writer import IncrementalPdfFileWriter
from pyhanko.sign import signers
from pyhanko_certvalidator.registry import SimpleCertificateStore

from attestor.app.schemas.document import VerifiedDocument


# ------------------------------------------------------------------
# Signature material
# ------------------------------------------------------------------

MESSAGE_DIGEST = bytes(range(32))
PUBLIC_KEY = b"\x30\x82\x01\x22" + bytes(range(64, 128))

GST_NUMBER = "22AAAAA0000A1Z5"
GST_LEGAL_NAME = "Acme Traders Pvt Ltd"

PAN_NUMBER = "ABCDE1234F"
PAN_HOLDER_NAME = "RAVI KUMAR"


# ------------------------------------------------------------------
# Page texts
# ------------------------------------------------------------------

def gst_certificate_text() -> str:
    """
    Page text in the layout of a GST registration certificate.

    Note the GSTIN also contains a PAN-shaped substring.
    """
    return (
        "Government of India Form GST REG-06 "
        f"Registration Certificate Registration Number : {GST_NUMBER}\n"
        f"1. Legal Name {GST_LEGAL_NAME}\n"
        " Trade Name, if any ACME TRADERS\n"
        "3. Additional trade names\n"
    )


def pan_card_text() -> str:
    """Page text in the layout of an e-PAN card."""
    return (
        "INCOME TAX DEPARTMENT GOVT. OF INDIA\n"
        "Permanent Account Number Card\n"
        f"{PAN_NUMBER}\n"
        f"Name\n{PAN_HOLDER_NAME}\n"
        "Father's Name\nSURESH KUMAR\n"
        "DOB 01/01/1990\n"
    )


def verified_document(
    *pages: str,
    signature_valid: bool = True,
    message_digest: bytes = MESSAGE_DIGEST,
    public_key: bytes = PUBLIC_KEY,
) -> VerifiedDocument:
    return VerifiedDocument(
        pages=tuple(pages),
        signature_valid=signature_valid,
        message_digest=message_digest,
        public_key=public_key,
    )


# ------------------------------------------------------------------
# PDF containers (unsigned; exercise the verifier boundary only)
# ------------------------------------------------------------------

def unsigned_pdf(page_count: int = 1) -> bytes:
    buffer = io.BytesIO()
    with pikepdf.new() as pdf:
        for _ in range(page_count):
            pdf.add_blank_page(page_size=(595, 842))
        pdf.save(buffer)
    return buffer.getvalue()


def text_pdf(*lines: str) -> bytes:
    """Single-page PDF rendering ``lines`` in Helvetica, one per line."""
    buffer = io.BytesIO()
    with pikepdf.new() as pdf:
        pdf.add_blank_page(page_size=(595, 842))
        page = pdf.pages[0]

        font = pdf.make_indirect(
            Dictionary(
                Type=Name.Font,
                Subtype=Name.Type1,
                BaseFont=Name.Helvetica,
            )
        )
        page.obj["/Resources"] = Dictionary(Font=Dictionary(F1=font))

        shown = " ".join(f"({line}) Tj T*" for line in lines)
        content = f"BT /F1 12 Tf 14 TL 72 770 Td {shown} ET"
        page.obj["/Contents"] = pdf.make_stream(content.encode("latin-1"))

        pdf.save(buffer)
    return buffer.getvalue()


# ------------------------------------------------------------------
# Signed PDF (self-signed RSA credentials, PAdES via pyHanko)
#
# The signer is not anchored in any trust store. The verifier only
# evaluates integrity and cryptographic validity, so this fixture
# yields signature_valid=True.
# ------------------------------------------------------------------

@lru_cache(maxsize=1)
def _signing_credentials():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    subject = x509.Name(
        [x509.NameAttribute(NameOID.COMMON_NAME, "Attestor Test Signer")]
    )
    now = datetime.now(timezone.utc)

    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(subject)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .sign(key, hashes.SHA256())
    )
    return key, cert


def signer_spki() -> bytes:
    """DER SubjectPublicKeyInfo of the fixture signing key."""
    _, cert = _signing_credentials()
    return cert.public_key().public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def signed_pdf(*lines: str) -> bytes:
    key, cert = _signing_credentials()

    signing_cert = asn1_x509.Certificate.load(
        cert.public_bytes(serialization.Encoding.DER)
    )
    signer = signers.SimpleSigner(
        signing_cert=signing_cert,
        signing_key=asn1_keys.PrivateKeyInfo.load(
            key.private_bytes(
                serialization.Encoding.DER,
                serialization.PrivateFormat.PKCS8,
                serialization.NoEncryption(),
            )
        ),
        cert_registry=SimpleCertificateStore.from_certs([signing_cert]),
    )

    writer = IncrementalPdfFileWriter(io.BytesIO(text_pdf(*lines)))
    output = signers.sign_pdf(
        writer,
        signers.PdfSignatureMetadata(field_name="Signature1"),
        signer=signer,
    )
    return output.getvalue()


def tampered(pdf_bytes: bytes) -> bytes:
    """Flip one byte inside the signed range without changing the length."""
    return pdf_bytes.replace(b"/MediaBox", b"/MediaBoy", 1)
