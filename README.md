# samlkit

Building blocks for the service-provider side of SAML 2.0 single sign-on:
parsing and formatting SAML timestamps, encoding messages for the
HTTP-Redirect and HTTP-POST bindings, checking identity-provider
certificates by fingerprint, and namespace-aware lookup of XML elements.

## Installation

```
pip install samlkit
```

The `test` extra (`pip install "samlkit[test]"`) adds pytest for running the
test suite.

## Modules

### `samlkit.relaxed_time`

`RelaxedTime` wraps a `datetime`.

- `RelaxedTime.parse(text)` accepts RFC 3339 text (with `Z` or a numeric
  offset, with or without fractional seconds) and zone-less timestamps, which
  are taken as UTC. Text may be `str` or `bytes`. Empty text gives the zero
  time (year 1, UTC). The result is rounded to the millisecond. Text that
  does not parse raises `ValueError`, for example
  `parsing time "1981-02-03T14:15:16Z04:00": extra text: "04:00"`.
- `format()` (and `str()`) returns the time in UTC, rounded to the
  millisecond, with trailing zeros of the fraction dropped.

```python
from samlkit.relaxed_time import RelaxedTime

t = RelaxedTime.parse("1981-02-03T14:15:16.178901234Z")
print(t)  # 1981-02-03T14:15:16.179Z
```

### `samlkit.bindings`

- `encode_redirect_payload(xml)` deflates the XML (raw deflate, level 9) and
  returns it base64 encoded.
- `redirect_url(destination, field_name, xml, relay_state="")` appends the
  encoded message to the destination's query, after any query already
  present, followed by `RelayState` when one is given. The parameter order is
  fixed so the query can be signed as it stands.
- `render_post_form(url, field_name, payload, relay_state="", form_id="SAMLRequestForm")`
  returns the bytes of a self-submitting HTML form posting the base64 encoded
  payload. Attribute values are escaped, and an action URL with a scheme
  other than `http`, `https` or `mailto` is replaced by `#ZgotmplZ`.

The XML may be given as `bytes`, `str` or an `lxml` element.

### `samlkit.testsaml`

`parse_redirect_request(url)` and `parse_redirect_response(url)` decode the
`SAMLRequest` or `SAMLResponse` parameter of an HTTP-Redirect URL back to XML
bytes, raising `ValueError` if it cannot be decoded or decompressed.

```python
from samlkit.bindings import redirect_url
from samlkit.testsaml import parse_redirect_request

url = redirect_url("https://idp.example.com/sso", "SAMLRequest", b"<AuthnRequest/>", "state")
assert parse_redirect_request(url) == b"<AuthnRequest/>"
```

### `samlkit.certs`

- `parse_cert(x509_data)` parses a base64 DER certificate, ignoring
  whitespace.
- `fingerprint(cert, algorithm)` returns the certificate's fingerprint, for
  `SHA256_FINGERPRINT` or `SHA512_FINGERPRINT`, formatted by
  `fingerprint_format(digest)` as colon-separated upper-case hex pairs
  (`AB:CD:...`).
- `certificate_from_signature(el, expected_fingerprint, algorithm)` takes the
  certificate from `el`'s `Signature/KeyInfo/X509Data/X509Certificate` and
  returns it in a one-element list if its fingerprint matches; otherwise it
  raises `ValueError`.

### `samlkit.xmlutil`

- `find_children(parent_el, namespace, tag)`, `find_one_child(...)` and
  `find_child(...)` look up direct children by namespace URI and local name,
  regardless of prefix. `find_one_child` raises `ValueError` unless there is
  exactly one match; `find_child` returns `None` for none and raises for
  several.
- `element_to_bytes(el)` and `element_to_string(el)` serialise an element as
  a standalone document with the namespaces it uses; `element_to_string`
  returns `""` on failure.
- `first_set(a, b)` returns `a` unless it is empty, otherwise `b`.

### `samlkit.xmlenc.errors`

Exception classes for XML Encryption failures, all derived from
`XMLEncError`: `AlgorithmNotImplementedError`,
`CannotFindRequiredElementError`, `IncorrectTagError`,
`IncorrectKeyLengthError` and `IncorrectKeyTypeError`.

## What this package does not do

samlkit provides helpers only. It has no service-provider object, does not
build authentication or logout requests, does not produce or check XML
signatures, does not encrypt or decrypt XML Encryption elements, does not
validate assertions or responses, and makes no HTTP requests. It serves no
metadata or endpoints and has no command-line tool.