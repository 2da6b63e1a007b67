import base64
import datetime
import hashlib

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID
from lxml import etree

from samlkit.certs import (
    SHA256_FINGERPRINT,
    SHA512_FINGERPRINT,
    certificate_from_signature,
    fingerprint,
    fingerprint_format,
    parse_cert,
)

DSIG_NS = "http://www.w3.org/2000/09/xmldsig#"
SAMLP_NS = "urn:oasis:names:tc:SAML:2.0:protocol"


@pytest.fixture(scope="module")
def cert():
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "idp.example.com")])
    start = datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(1000)
        .not_valid_before(start)
        .not_valid_after(start + datetime.timedelta(days=365))
        .sign(key, hashes.SHA256())
    )


def _der(cert):
    return cert.public_bytes(serialization.Encoding.DER)


def _b64(cert):
    return base64.b64encode(_der(cert)).decode("ascii")


def _response_with_cert(text):
    root = etree.Element(f"{{{SAMLP_NS}}}Response", nsmap={"samlp": SAMLP_NS})
    sig = etree.SubElement(root, f"{{{DSIG_NS}}}Signature", nsmap={"ds": DSIG_NS})
    key_info = etree.SubElement(sig, f"{{{DSIG_NS}}}KeyInfo")
    data = etree.SubElement(key_info, f"{{{DSIG_NS}}}X509Data")
    cert_el = etree.SubElement(data, f"{{{DSIG_NS}}}X509Certificate")
    cert_el.text = text
    return root, cert_el


def test_fingerprint_format_pins_layout():
    assert fingerprint_format(b"\x01\xab\xff") == "01:AB:FF"


def test_fingerprint_format_empty():
    assert fingerprint_format(b"") == ""


def test_parse_cert_ignores_whitespace(cert):
    encoded = _b64(cert)
    wrapped = "\n  ".join(encoded[i : i + 64] for i in range(0, len(encoded), 64))
    parsed = parse_cert("\n" + wrapped + "\n")
    assert _der(parsed) == _der(cert)


def test_parse_cert_bad_base64():
    with pytest.raises(ValueError, match="cannot base64 decode cert string"):
        parse_cert("!!!not base64!!!")


def test_parse_cert_not_a_certificate():
    with pytest.raises(ValueError, match="cannot parse certificate"):
        parse_cert(base64.b64encode(b"not a certificate").decode("ascii"))


def test_fingerprint_sha256_matches_digest(cert):
    result = fingerprint(cert, SHA256_FINGERPRINT)
    assert result.replace(":", "").lower() == hashlib.sha256(_der(cert)).hexdigest()
    assert result == result.upper()
    assert len(result.split(":")) == 32


def test_fingerprint_sha512_matches_digest(cert):
    result = fingerprint(cert, SHA512_FINGERPRINT)
    assert result.replace(":", "").lower() == hashlib.sha512(_der(cert)).hexdigest()
    assert len(result.split(":")) == 64


def test_fingerprint_unknown_algorithm(cert):
    with pytest.raises(ValueError, match="fingerprint, unknown algorithm: sha1"):
        fingerprint(cert, "sha1")


def test_certificate_from_signature_match(cert):
    root, _ = _response_with_cert(_b64(cert))
    expected = fingerprint(cert, SHA256_FINGERPRINT)
    certs = certificate_from_signature(root, expected, SHA256_FINGERPRINT)
    assert len(certs) == 1
    assert _der(certs[0]) == _der(cert)


def test_certificate_from_signature_mismatch(cert):
    root, _ = _response_with_cert(_b64(cert))
    with pytest.raises(ValueError, match="cannot validate signature on Response: fingerprint mismatch"):
        certificate_from_signature(root, "00:11", SHA256_FINGERPRINT)


def test_certificate_from_signature_no_certificate():
    root = etree.Element(f"{{{SAMLP_NS}}}Response")
    with pytest.raises(ValueError, match="no certificate present"):
        certificate_from_signature(root, "00", SHA256_FINGERPRINT)


def test_certificate_from_signature_extra_child(cert):
    root, cert_el = _response_with_cert(_b64(cert))
    etree.SubElement(cert_el, "extra")
    with pytest.raises(ValueError, match="child len != 1: 2"):
        certificate_from_signature(root, "00", SHA256_FINGERPRINT)


def test_certificate_from_signature_empty_certificate():
    root, _ = _response_with_cert(None)
    with pytest.raises(ValueError, match="child len != 1: 0"):
        certificate_from_signature(root, "00", SHA256_FINGERPRINT)


def test_certificate_from_signature_unknown_algorithm(cert):
    root, _ = _response_with_cert(_b64(cert))
    with pytest.raises(ValueError, match="unknown algorithm"):
        certificate_from_signature(root, "00", "md5")


def test_certificate_from_signature_bad_certificate():
    root, _ = _response_with_cert("%%%")
    with pytest.raises(ValueError, match="cannot validate signature on Response: parse cert"):
        certificate_from_signature(root, "00", SHA256_FINGERPRINT)