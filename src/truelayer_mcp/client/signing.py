"""Request signing for the TrueLayer API (``Tl-Signature``, version 2).

A signature is a detached JWS (ES512) over the request line, the signed
headers and the raw body::

    POST /v3/payouts\\n
    Idempotency-Key: 619410b3-...\\n
    {"currency": "GBP", ...}

The JWS header lists the signed header names in ``tl_headers`` so the
receiver can rebuild the same payload. Headers are signed in case-insensitive
name order, which makes the signature independent of how the mapping was
built. ECDSA nonces are derived per RFC 6979, so signing is deterministic.
"""

import base64
import binascii
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from ..errors import SigningError

SIGNATURE_HEADER = "Tl-Signature"
SIGNING_ALGORITHM = "ES512"
SIGNING_VERSION = "2"

# P-521 scalars are 521 bits, padded to 66 bytes in the JWS encoding
_COORDINATE_SIZE = 66


@dataclass(frozen=True, slots=True)
class SigningCredential:
    """Key material used to sign requests."""

    kid: str
    private_key_pem: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class SigningInput:
    """The exact request parts that a signature binds."""

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | bytes = ""

    @property
    def body_bytes(self) -> bytes:
        """Return the body as the bytes that go on the wire."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """Headers (including the signature) and body ready to transmit."""

    method: str
    path: str
    headers: dict[str, str]
    body: bytes


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


@lru_cache(maxsize=8)
def _load_private_key(private_key_pem: str) -> ec.EllipticCurvePrivateKey:
    """Parse and validate a PEM encoded P-521 private key."""
    try:
        key = serialization.load_pem_private_key(private_key_pem.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        msg = "Private key is not a valid unencrypted PEM key."
        raise SigningError(msg) from exc
    if not isinstance(key, ec.EllipticCurvePrivateKey) or not isinstance(key.curve, ec.SECP521R1):
        msg = "Private key must be an EC key on curve P-521 (secp521r1)."
        raise SigningError(msg)
    return key


def _ordered_headers(headers: Mapping[str, str]) -> list[tuple[str, str]]:
    ordered = sorted(headers.items(), key=lambda item: item[0].lower())
    names = [name.lower() for name, _ in ordered]
    if len(set(names)) != len(names):
        msg = "Signed headers must not repeat a name with different casing."
        raise SigningError(msg)
    return ordered


def build_signing_payload(method: str, path: str, headers: list[tuple[str, str]], body: bytes) -> bytes:
    """Return the byte sequence the signature is computed over."""
    lines = [f"{method.upper()} {path}\n"]
    lines.extend(f"{name}: {value}\n" for name, value in headers)
    return "".join(lines).encode("utf-8") + body


def _jws_header(kid: str, header_names: list[str]) -> bytes:
    header = {
        "alg": SIGNING_ALGORITHM,
        "kid": kid,
        "tl_version": SIGNING_VERSION,
        "tl_headers": ",".join(header_names),
    }
    return json.dumps(header, separators=(",", ":")).encode("utf-8")


def sign(credential: SigningCredential, signing_input: SigningInput) -> str:
    """Return the ``Tl-Signature`` value for the given request parts.

    Args:
        credential: Key identifier and PEM encoded P-521 private key.
        signing_input: Method, path, headers and body to bind.

    Returns:
        A detached JWS (``<header>..<signature>``).

    Raises:
        SigningError: If the key id is empty or the key cannot be used.

    """
    if not credential.kid or not credential.kid.strip():
        msg = "Signing key id (kid) must not be empty."
        raise SigningError(msg)
    key = _load_private_key(credential.private_key_pem)

    headers = _ordered_headers(signing_input.headers)
    header_b64 = _b64url(_jws_header(credential.kid, [name for name, _ in headers]))
    payload = build_signing_payload(signing_input.method, signing_input.path, headers, signing_input.body_bytes)
    signing_message = f"{header_b64}.{_b64url(payload)}".encode("ascii")

    der_signature = key.sign(signing_message, ec.ECDSA(hashes.SHA512(), deterministic_signing=True))
    r, s = decode_dss_signature(der_signature)
    raw_signature = r.to_bytes(_COORDINATE_SIZE, "big") + s.to_bytes(_COORDINATE_SIZE, "big")
    return f"{header_b64}..{_b64url(raw_signature)}"


def build_signed_request(credential: SigningCredential, signing_input: SigningInput) -> SignedRequest:
    """Sign the request and attach the signature header.

    The returned headers are the input headers plus ``Tl-Signature``; the body
    is passed through unchanged so that what is sent is what was signed.
    """
    signature = sign(credential, signing_input)
    headers = dict(signing_input.headers)
    headers[SIGNATURE_HEADER] = signature
    return SignedRequest(
        method=signing_input.method.upper(),
        path=signing_input.path,
        headers=headers,
        body=signing_input.body_bytes,
    )


def verify(public_key_pem: str, signing_input: SigningInput, signature: str) -> bool:
    """Check a ``Tl-Signature`` value against a public key.

    Only the headers named in the JWS ``tl_headers`` field are taken from
    ``signing_input``; a named header that is missing fails verification.
    """
    try:
        header_b64, detached, signature_b64 = signature.split(".")
        header = json.loads(_b64url_decode(header_b64))
        raw_signature = _b64url_decode(signature_b64)
    except (ValueError, binascii.Error):
        return False
    if detached or not isinstance(header, dict) or header.get("alg") != SIGNING_ALGORITHM or len(raw_signature) != 2 * _COORDINATE_SIZE:
        return False

    try:
        public_key = serialization.load_pem_public_key(public_key_pem.encode("utf-8"))
    except (ValueError, TypeError, UnsupportedAlgorithm):
        return False
    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        return False

    lookup = {name.lower(): (name, value) for name, value in signing_input.headers.items()}
    signed_headers: list[tuple[str, str]] = []
    for name in filter(None, str(header.get("tl_headers", "")).split(",")):
        if name.lower() not in lookup:
            return False
        signed_headers.append((name, lookup[name.lower()][1]))

    payload = build_signing_payload(signing_input.method, signing_input.path, signed_headers, signing_input.body_bytes)
    signing_message = f"{header_b64}.{_b64url(payload)}".encode("ascii")
    der_signature = encode_dss_signature(
        int.from_bytes(raw_signature[:_COORDINATE_SIZE], "big"),
        int.from_bytes(raw_signature[_COORDINATE_SIZE:], "big"),
    )
    try:
        public_key.verify(der_signature, signing_message, ec.ECDSA(hashes.SHA512()))
    except InvalidSignature:
        return False
    return True


__all__ = [
    "SIGNATURE_HEADER",
    "SignedRequest",
    "SigningCredential",
    "SigningInput",
    "build_signed_request",
    "build_signing_payload",
    "sign",
    "verify",
]
