"""
Ledger account addresses.

An address is a 32-byte Ed25519 public key. Its canonical text form is
the unpadded RFC 4648 base32 encoding of the key followed by a 4-byte
checksum (the last four bytes of SHA-512/256 over the key), which is
always 58 characters long.

Addresses are serialized to the wallet only in this text form, never
as raw bytes.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from dataclasses import dataclass

from algopay.errors import InvalidAddress

# Public key length in bytes.
KEY_LEN = 32

# Checksum length in bytes (suffix of the SHA-512/256 digest).
CHECKSUM_LEN = 4

# Length of the canonical text form, checksum included.
ADDRESS_LEN = 58


def _checksum(public_key: bytes) -> bytes:
    return hashlib.new("sha512_256", public_key).digest()[-CHECKSUM_LEN:]


@dataclass(frozen=True)
class Address:
    """A ledger account address.

    Attributes:
        public_key: The 32 raw public key bytes.
    """

    public_key: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.public_key, bytes) or len(self.public_key) != KEY_LEN:
            raise ValueError(
                f"public_key must be {KEY_LEN} bytes, got: {self.public_key!r}"
            )

    @classmethod
    def parse(cls, text: str) -> Address:
        """Parse the canonical text form of an address.

        Raises:
            InvalidAddress: If the text has the wrong length, is not
                base32, or the checksum does not match.
        """
        if not isinstance(text, str) or len(text) != ADDRESS_LEN:
            raise InvalidAddress(
                f"address must be {ADDRESS_LEN} characters, got: {text!r}",
                details={"address": text},
            )
        padded = text + "=" * (-len(text) % 8)
        try:
            raw = base64.b32decode(padded)
        except (binascii.Error, ValueError) as exc:
            raise InvalidAddress(
                f"address is not valid base32: {text!r}",
                details={"address": text},
            ) from exc

        public_key, checksum = raw[:KEY_LEN], raw[KEY_LEN:]
        if _checksum(public_key) != checksum:
            raise InvalidAddress(
                f"address checksum mismatch: {text!r}",
                details={"address": text},
            )
        return cls(public_key)

    def encode(self) -> str:
        """Canonical text form (58 chars, no padding)."""
        raw = self.public_key + _checksum(self.public_key)
        return base64.b32encode(raw).decode("ascii").rstrip("=")

    def __str__(self) -> str:
        return self.encode()
