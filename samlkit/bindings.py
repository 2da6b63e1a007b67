"""Encoding of SAML messages for the HTTP-Redirect and HTTP-POST bindings."""

from __future__ import annotations

import base64
import zlib
from typing import Union
from urllib.parse import quote_plus, urlsplit, urlunsplit

from lxml import etree

from .xmlutil import element_to_bytes

XMLSource = Union[bytes, bytearray, str, etree._Element]

_ATTR_ESCAPES = {
    "\0": "\ufffd",
    '"': "&#34;",
    "&": "&amp;",
    "'": "&#39;",
    "+": "&#43;",
    "<": "&lt;",
    ">": "&gt;",
}

_URL_KEEP = set(
    "!#$&*+,/:;=?@[]-._~%"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
)

_SAFE_SCHEMES = {"http", "https", "mailto"}

_UNSAFE_URL = "#ZgotmplZ"


def _xml_bytes(xml: XMLSource) -> bytes:
    if isinstance(xml, etree._Element):
        return element_to_bytes(xml)
    if isinstance(xml, (bytes, bytearray)):
        return bytes(xml)
    if isinstance(xml, str):
        return xml.encode("utf-8")
    raise TypeError(f"expected XML as bytes, str or element, not {type(xml).__name__}")


def _escape_attr(value: str) -> str:
    return "".join(_ATTR_ESCAPES.get(char, char) for char in value)


def _filter_url(url: str) -> str:
    """Reject URLs with unsafe schemes and percent-encode characters outside URL syntax."""
    colon = url.find(":")
    if colon >= 0 and "/" not in url[:colon]:
        if url[:colon].lower() not in _SAFE_SCHEMES:
            return _UNSAFE_URL
    parts = []
    for char in url:
        if char in _URL_KEEP:
            parts.append(char)
        else:
            parts.extend(f"%{byte:02X}" for byte in char.encode("utf-8"))
    return "".join(parts)


def encode_redirect_payload(xml: XMLSource) -> str:
    """Deflate ``xml`` at the highest level and return it base64 encoded."""
    compressor = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
    compressed = compressor.compress(_xml_bytes(xml)) + compressor.flush()
    return base64.b64encode(compressed).decode("ascii")


def redirect_url(
    destination: str, field_name: str, xml: XMLSource, relay_state: str = ""
) -> str:
    """Return ``destination`` with the encoded message appended to its query.

    Any query already present is kept first; the message follows as
    ``field_name`` and then ``RelayState`` when one is given. The order is
    fixed so that the query can be signed as it stands.
    """
    parts = urlsplit(destination)
    encoded = encode_redirect_payload(xml)
    pieces = [parts.query] if parts.query else []
    pieces.append(f"{field_name}={quote_plus(encoded, safe='')}")
    if relay_state:
        pieces.append(f"RelayState={quote_plus(relay_state, safe='')}")
    return urlunsplit(parts._replace(query="&".join(pieces)))


def render_post_form(
    url: str,
    field_name: str,
    payload: XMLSource,
    relay_state: str = "",
    form_id: str = "SAMLRequestForm",
) -> bytes:
    """Return a self-submitting HTML form posting the base64 encoded ``payload``."""
    encoded = base64.b64encode(_xml_bytes(payload)).decode("ascii")
    action = _escape_attr(_filter_url(url))
    form_id_attr = _escape_attr(form_id)
    html = (
        f'<form method="post" action="{action}" id="{form_id_attr}">'
        f'<input type="hidden" name="{_escape_attr(field_name)}" value="{_escape_attr(encoded)}" />'
        f'<input type="hidden" name="RelayState" value="{_escape_attr(relay_state)}" />'
        '<input id="SAMLSubmitButton" type="submit" value="Submit" />'
        "</form>"
        "<script>document.getElementById('SAMLSubmitButton').style.visibility=\"hidden\";"
        f"document.getElementById('{form_id}').submit();</script>"
    )
    return html.encode("utf-8")