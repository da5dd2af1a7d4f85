from __future__ import annotations

from .codec import DecodeError, FormatError, SaveError, decode, encode, read_save, write_save
from .document import RawDocument, parse_document

__all__ = [
    "DecodeError",
    "FormatError",
    "RawDocument",
    "SaveError",
    "decode",
    "encode",
    "parse_document",
    "read_save",
    "write_save",
]
