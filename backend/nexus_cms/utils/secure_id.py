import base64
import binascii
import hashlib
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESSIV
from flask import current_app

SEPARATOR = "::"


def _secret(secret: Optional[str] = None) -> str:
    return secret if secret is not None else current_app.config["SECRET_KEY"]


def _cipher(secret: str) -> AESSIV:
    # SHA-512 gives exactly the 64 bytes AES-256-SIV wants
    return AESSIV(hashlib.sha512(secret.encode("utf-8")).digest())


def _marker(secret: str) -> str:
    return hashlib.sha256(f"nexus-marker:{secret}".encode("utf-8")).hexdigest()[:16]


def encode_id(value: int, secret: Optional[str] = None) -> str:
    """
    Encode an internal row id into an opaque public token.

    SIV mode without a nonce is deterministic: the same id and secret always
    produce the same token, while any modification fails authentication.
    """
    secret = _secret(secret)
    plaintext = f"{int(value)}{SEPARATOR}{_marker(secret)}".encode("utf-8")
    token = _cipher(secret).encrypt(plaintext, None)
    return base64.urlsafe_b64encode(token).rstrip(b"=").decode("ascii")


def decode_id(token, secret: Optional[str] = None) -> Optional[int]:
    """Reverse ``encode_id``. Returns None for anything it did not produce."""
    if not isinstance(token, str) or not token:
        return None

    secret = _secret(secret)
    try:
        raw = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
        plaintext = _cipher(secret).decrypt(raw, None).decode("utf-8")
    except (binascii.Error, ValueError, InvalidTag, UnicodeDecodeError):
        return None

    value, sep, marker = plaintext.partition(SEPARATOR)
    if not sep or marker != _marker(secret):
        return None

    if not value.isdigit():
        return None

    value = int(value)
    return value if value > 0 else None
