from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Final

from construct import Const, GreedyBytes, Prefixed, Struct, VarInt
from construct.core import ConstructError
from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

logger = logging.getLogger(__name__)

SAVE_SUFFIX: Final[str] = ".dat"

# BinaryFormatter preamble for a single serialized string record.
CSHARP_HEADER: Final[bytes] = bytes(
    (0x00, 0x01, 0x00, 0x00, 0x00, 0xFF, 0xFF, 0xFF, 0xFF, 0x01, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x06, 0x01, 0x00, 0x00, 0x00)
)
RECORD_END: Final[bytes] = b"\x0b"
SAVE_KEY: Final[bytes] = b"UKu52ePUBwetZ9wNX88o54dnfKRu0T1l"

SAVE_CONTAINER = Struct(
    "header" / Const(CSHARP_HEADER),
    "payload" / Prefixed(VarInt, GreedyBytes),
    "end" / Const(RECORD_END),
)


class SaveError(ValueError):
    pass


class DecodeError(SaveError):
    """The byte-level container, cipher or UTF-8 layer could not be reversed."""


class FormatError(SaveError):
    """The decoded text is not a usable save document."""


def _cipher():
    return AES.new(SAVE_KEY, AES.MODE_ECB)


def unwrap(data: bytes) -> bytes:
    """Return the AES ciphertext carried by a save container."""

    try:
        container = SAVE_CONTAINER.parse(bytes(data))
    except ConstructError as exc:
        raise DecodeError(f"bad save container: {exc}") from exc
    try:
        return base64.b64decode(container.payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"bad base64 payload: {exc}") from exc


def decode(data: bytes) -> str:
    ciphertext = unwrap(data)
    if not ciphertext or len(ciphertext) % AES.block_size:
        raise DecodeError(f"ciphertext length {len(ciphertext)} is not a multiple of {AES.block_size}")
    try:
        plain = unpad(_cipher().decrypt(ciphertext), AES.block_size)
    except ValueError as exc:
        raise DecodeError(f"bad padding: {exc}") from exc
    try:
        text = plain.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"plaintext is not utf-8: {exc}") from exc
    logger.debug("decoded save: %d container bytes, %d text chars", len(data), len(text))
    return text


def encode(text: str) -> bytes:
    ciphertext = _cipher().encrypt(pad(text.encode("utf-8"), AES.block_size))
    return SAVE_CONTAINER.build({"payload": base64.b64encode(ciphertext)})


def read_save(path: str | Path) -> str:
    return decode(Path(path).read_bytes())


def write_save(path: str | Path, text: str) -> None:
    Path(path).write_bytes(encode(text))
