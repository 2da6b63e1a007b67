"""Identity-provider certificate parsing and fingerprint checks."""

from __future__ import annotations

import base64
import binascii
import hashlib

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from lxml import etree

SHA256_FINGERPRINT = "http://www.w3.org/2001/04/xmlenc#sha256"
SHA512_FINGERPRINT = "http://www.w3.org/2001/04/xmlenc#sha512"

_FINGERPRINT_HASHES = {
    SHA256_FINGERPRINT: hashlib.sha256,
    SHA512_FINGERPRINT: hashlib.sha512,
}

_CERT_PATH = ("Signature", "KeyInfo", "X509Data", "X509Certificate")


def parse_cert(x509_data: str) -> x509.Certificate:
    """Parse a base64 DER certificate, ignoring any whitespace in it."""
    cleaned = "".join(x509_data.split())
    try:
        der = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"parse cert, cannot base64 decode cert string: {exc}") from exc
    try:
        return x509.load_der_x509_certificate(der)
    except ValueError as exc:
        raise ValueError(f"parse cert, cannot parse certificate: {exc}") from exc


def fingerprint_format(digest: bytes) -> str:
    """Format a digest as colon-separated upper-case hex byte pairs."""
    return ":".join(f"{byte:02X}" for byte in digest)


def fingerprint(cert: x509.Certificate, algorithm: str) -> str:
    """Return the fingerprint of ``cert``'s DER encoding under ``algorithm``."""
    hash_factory = _FINGERPRINT_HASHES.get(algorithm)
    if hash_factory is None:
        raise ValueError(f"fingerprint, unknown algorithm: {algorithm}")
    der = cert.public_bytes(serialization.Encoding.DER)
    return fingerprint_format(hash_factory(der).digest())


def _local_tag(el: etree._Element) -> str:
    return etree.QName(el).localname


def _find_certificate_element(el: etree._Element) -> etree._Element | None:
    path = "/".join(f"*[local-name()='{name}']" for name in _CERT_PATH)
    found = el.xpath("./" + path)
    return found[0] if found else None


def certificate_from_signature(
    el: etree._Element, expected_fingerprint: str, algorithm: str
) -> list[x509.Certificate]:
    """Return the certificate embedded in ``el``'s Signature if its fingerprint matches.

    Raises ValueError when the certificate is missing, malformed, or has a
    different fingerprint.
    """
    tag = _local_tag(el)
    cert_el = _find_certificate_element(el)
    if cert_el is None:
        raise ValueError(f"cannot validate signature on {tag}: no certificate present")

    child_count = len(cert_el) + (1 if cert_el.text else 0)
    if child_count != 1:
        raise ValueError(
            f"cannot validate signature on {tag}: x509 cert el child len != 1: {child_count}"
        )
    if not cert_el.text:
        raise ValueError(
            f"cannot validate signature on {tag}: x509 cert el first child not char data"
        )

    try:
        cert = parse_cert(cert_el.text)
        actual = fingerprint(cert, algorithm)
    except ValueError as exc:
        raise ValueError(f"cannot validate signature on {tag}: {exc}") from exc

    if actual != expected_fingerprint:
        raise ValueError(f"cannot validate signature on {tag}: fingerprint mismatch")
    return [cert]