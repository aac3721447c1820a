"""
Crypto - Signed Statement Verification

Authenticates that a specific key holder produced a specific statement:
- canonical_message: deterministic bytes signed by the author's wallet
- verify_signature: Ed25519 detached-signature check (PyNaCl)
- SignatureVerifier: the above bound to one message format / encoding set

Fail-closed policy: a forged signature, a truncated signature, a key of the
wrong length and an undecodable key all produce the same False outcome.
This module only verifies; signing happens in the author's wallet.
"""
from __future__ import annotations

import base64
import binascii
import logging
import math
import struct
from enum import Enum
from typing import TYPE_CHECKING

import base58
from nacl.exceptions import CryptoError
from nacl.signing import VerifyKey

from core.schemas.errors import (
    CanonicalizationException,
    MalformedSignatureError,
    ThreadlineException,
)
from core.schemas.statements import (
    SignedStatement,
    StatementStatus,
    StatementVerification,
)

if TYPE_CHECKING:
    from core.config.runtime import SignatureConfig


logger = logging.getLogger(__name__)


PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64

# Separator for the delimited message format
MESSAGE_DELIMITER = ":"


class MessageFormat(str, Enum):
    """How (content, context_id, timestamp) are joined into signed bytes."""

    # Each field as a 4-byte big-endian length followed by its UTF-8 bytes
    LENGTH_PREFIXED = "length_prefixed"
    # "content:context_id:timestamp"; fields must not contain ":"
    DELIMITED = "delimited"


class KeyEncoding(str, Enum):
    """Text encodings accepted for public keys and signatures."""

    BASE58 = "base58"
    BASE64 = "base64"
    HEX = "hex"


def canonical_message(
    content: str,
    context_id: str,
    timestamp_ms: int,
    message_format: MessageFormat | str = MessageFormat.LENGTH_PREFIXED,
) -> bytes:
    """
    Serialize statement fields into the exact bytes that get signed.

    The timestamp is rendered as plain base-10 digits, so the same
    millisecond value always produces the same bytes.

    Raises:
        CanonicalizationException: On non-string fields, a timestamp that is
            not a non-negative int, or (delimited format) a field containing
            the delimiter.
    """
    if not isinstance(content, str) or not isinstance(context_id, str):
        raise CanonicalizationException(
            "content and context_id must be strings",
            details={"content_type": type(content).__name__,
                     "context_id_type": type(context_id).__name__},
        )
    if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, int) or timestamp_ms < 0:
        raise CanonicalizationException(
            "timestamp_ms must be a non-negative integer",
            details={"timestamp_ms": repr(timestamp_ms)},
        )

    fields = [content, context_id, str(timestamp_ms)]
    message_format = MessageFormat(message_format)

    if message_format is MessageFormat.DELIMITED:
        for name, value in (("content", content), ("context_id", context_id)):
            if MESSAGE_DELIMITER in value:
                raise CanonicalizationException(
                    f"{name} contains the message delimiter {MESSAGE_DELIMITER!r}",
                    details={"field": name},
                )
        return MESSAGE_DELIMITER.join(fields).encode("utf-8")

    message = bytearray()
    for value in fields:
        encoded = value.encode("utf-8")
        message += struct.pack(">I", len(encoded))
        message += encoded
    return bytes(message)


def max_encoded_length(size: int, encoding: KeyEncoding | str) -> int:
    """Longest text the encoding can produce for size bytes."""
    encoding = KeyEncoding(encoding)
    if encoding is KeyEncoding.BASE58:
        return math.ceil(size * math.log(256, 58))
    if encoding is KeyEncoding.BASE64:
        return 4 * math.ceil(size / 3)
    # hex, plus an optional 0x prefix
    return 2 * size + 2


def decode_key_material(
    text: str,
    encoding: KeyEncoding | str,
    max_size: int = SIGNATURE_SIZE,
) -> bytes:
    """
    Decode a public key or signature from its text encoding.

    Text longer than any encoding of max_size bytes is rejected before
    decoding; base58 decoding is quadratic in the input length.

    Raises:
        MalformedSignatureError: If the text is too long or cannot be decoded.
    """
    if not isinstance(text, str) or not text:
        raise MalformedSignatureError("Key material must be a non-empty string")

    encoding = KeyEncoding(encoding)
    limit = max_encoded_length(max_size, encoding)
    if len(text) > limit:
        raise MalformedSignatureError(
            f"{encoding.value} key material longer than {limit} characters",
            details={"encoding": encoding.value, "length": len(text), "max_length": limit},
        )

    try:
        if encoding is KeyEncoding.BASE58:
            return base58.b58decode(text)
        if encoding is KeyEncoding.BASE64:
            return base64.b64decode(text, validate=True)
        hex_content = text[2:] if text[:2].lower() == "0x" else text
        return bytes.fromhex(hex_content)
    except (ValueError, binascii.Error) as e:
        raise MalformedSignatureError(
            f"Cannot decode {encoding.value} key material: {e}",
            details={"encoding": encoding.value},
        ) from e


def decode_public_key(text: str, encoding: KeyEncoding | str = KeyEncoding.BASE58) -> bytes:
    """Decode a public key; exact length is checked at verification time."""
    return decode_key_material(text, encoding, max_size=PUBLIC_KEY_SIZE)


def decode_signature(text: str, encoding: KeyEncoding | str = KeyEncoding.BASE64) -> bytes:
    """Decode a detached signature; exact length is checked at verification time."""
    return decode_key_material(text, encoding, max_size=SIGNATURE_SIZE)


def verify_signature(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """
    Verify an Ed25519 detached signature.

    Returns:
        True only if signature is a valid signature of exactly message under
        public_key. Malformed lengths, invalid points and mismatches all
        return False.
    """
    if not all(isinstance(v, (bytes, bytearray)) for v in (message, signature, public_key)):
        return False
    if len(signature) != SIGNATURE_SIZE or len(public_key) != PUBLIC_KEY_SIZE:
        return False

    try:
        VerifyKey(bytes(public_key)).verify(bytes(message), bytes(signature))
        return True
    except (CryptoError, ValueError, TypeError):
        return False


def verify_encoded_signature(
    message: bytes,
    signature_text: str,
    public_key_text: str,
    signature_encoding: KeyEncoding | str = KeyEncoding.BASE64,
    public_key_encoding: KeyEncoding | str = KeyEncoding.BASE58,
) -> bool:
    """Decode a text signature and key, then verify; decode failures give False."""
    try:
        signature = decode_signature(signature_text, signature_encoding)
        public_key = decode_public_key(public_key_text, public_key_encoding)
    except MalformedSignatureError as e:
        logger.debug("Rejected undecodable signature material: %s", e.message)
        return False
    return verify_signature(message, signature, public_key)


class SignatureVerifier:
    """
    Verifies signed statements under one message format and encoding set.

    Example:
        >>> verifier = SignatureVerifier()
        >>> result = verifier.verify_statement(statement)
        >>> result.ok
        True
    """

    def __init__(
        self,
        message_format: MessageFormat | str = MessageFormat.LENGTH_PREFIXED,
        public_key_encoding: KeyEncoding | str = KeyEncoding.BASE58,
        signature_encoding: KeyEncoding | str = KeyEncoding.BASE64,
    ) -> None:
        self.message_format = MessageFormat(message_format)
        self.public_key_encoding = KeyEncoding(public_key_encoding)
        self.signature_encoding = KeyEncoding(signature_encoding)

    @classmethod
    def from_config(cls, config: "SignatureConfig") -> "SignatureVerifier":
        return cls(
            message_format=config.message_format,
            public_key_encoding=config.public_key_encoding,
            signature_encoding=config.signature_encoding,
        )

    def canonical_message(self, content: str, context_id: str, timestamp_ms: int) -> bytes:
        return canonical_message(content, context_id, timestamp_ms, self.message_format)

    def verify(self, message: bytes, signature_text: str, public_key_text: str) -> bool:
        return verify_encoded_signature(
            message,
            signature_text,
            public_key_text,
            signature_encoding=self.signature_encoding,
            public_key_encoding=self.public_key_encoding,
        )

    def verify_statement(self, statement: SignedStatement) -> StatementVerification:
        """
        Check a statement's signature against its claimed public key.

        The statement is not modified. Unsigned statements, statements whose
        fields cannot be canonicalized, and bad signatures all come back
        VERIFIED_INVALID.
        """
        ok = False
        if statement.status is StatementStatus.SIGNED:
            try:
                message = self.canonical_message(
                    statement.content, statement.context_id, statement.timestamp_ms
                )
            except ThreadlineException as e:
                logger.info("Statement %s cannot be canonicalized: %s", statement.context_id, e.message)
            else:
                ok = self.verify(message, statement.signature, statement.public_key)

        if not ok:
            logger.info("Statement %s not verified", statement.context_id)

        return StatementVerification(
            context_id=statement.context_id,
            public_key=statement.public_key,
            status=StatementStatus.VERIFIED_VALID if ok else StatementStatus.VERIFIED_INVALID,
        )


__all__ = [
    "PUBLIC_KEY_SIZE",
    "SIGNATURE_SIZE",
    "MESSAGE_DELIMITER",
    "MessageFormat",
    "KeyEncoding",
    "canonical_message",
    "max_encoded_length",
    "decode_key_material",
    "decode_public_key",
    "decode_signature",
    "verify_signature",
    "verify_encoded_signature",
    "SignatureVerifier",
]
