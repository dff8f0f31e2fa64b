"""
RLE and LZ77 byte compression.
"""

from .errors import (
    CodecError,
    EmptyInputError,
    FormatError,
    FormatErrorKind,
    InvalidInputError,
)
from .file_type import detect_type, get_compressor, suggest_algorithm
from .LZ77 import LZ77
from .RLE import RLECompressor

__version__ = "0.1.0"


def encode_rle(data: bytes) -> bytes:
    return RLECompressor().encode(data)


def decode_rle(data: bytes) -> bytes:
    return RLECompressor().decode(data)


def encode_window(data: bytes, window_size: int | None = None) -> bytes:
    return LZ77(window_size).encode(data)


def decode_window(data: bytes) -> bytes:
    return LZ77().decode(data)


__all__ = [
    "CodecError",
    "EmptyInputError",
    "FormatError",
    "FormatErrorKind",
    "InvalidInputError",
    "LZ77",
    "RLECompressor",
    "decode_rle",
    "decode_window",
    "detect_type",
    "encode_rle",
    "encode_window",
    "get_compressor",
    "suggest_algorithm",
]
