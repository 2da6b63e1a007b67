"""Helpers for decoding SAML messages carried by HTTP-Redirect URLs."""

from __future__ import annotations

import base64
import binascii
import zlib
from urllib.parse import parse_qs, urlsplit


def _inflate_parameter(url: str, name: str, what: str) -> bytes:
    values = parse_qs(urlsplit(url).query, keep_blank_values=True).get(name, [""])
    try:
        compressed = base64.b64decode(values[0], validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"cannot decode {what}: {exc}") from exc

    inflater = zlib.decompressobj(-zlib.MAX_WBITS)
    try:
        data = inflater.decompress(compressed)
    except zlib.error as exc:
        raise ValueError(f"cannot decompress {what}: {exc}") from exc
    if not inflater.eof:
        raise ValueError(f"cannot decompress {what}: unexpected EOF")
    return data


def parse_redirect_request(url: str) -> bytes:
    """Return the decoded SAMLRequest XML from an HTTP-Redirect URL."""
    return _inflate_parameter(url, "SAMLRequest", "request")


def parse_redirect_response(url: str) -> bytes:
    """Return the decoded SAMLResponse XML from an HTTP-Redirect URL."""
    return _inflate_parameter(url, "SAMLResponse", "response")