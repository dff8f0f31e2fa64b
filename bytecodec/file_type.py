"""
File type detection and algorithm suggestion.

The type is sniffed from the first bytes of the file and falls back to the
file extension.
"""

import os
import string

from .compressor_ABC import Compressor
from .LZ77 import LZ77
from .RLE import RLECompressor

# Magic numbers for common file types
MAGIC_NUMBERS = (
    # Text files
    ("text/plain", (
        b"\xef\xbb\xbf",  # UTF-8 with BOM
        b"\xff\xfe",      # UTF-16 LE
        b"\xfe\xff",      # UTF-16 BE
    )),
    # Image files
    ("image/png", (b"\x89PNG",)),
    ("image/jpeg", (b"\xff\xd8\xff",)),
    ("image/gif", (b"GIF8",)),
    # Archive files
    ("application/zip", (b"PK\x03\x04",)),
    ("application/x-gzip", (b"\x1f\x8b",)),
    ("application/x-bzip2", (b"BZh",)),
)

EXTENSION_TO_MIME = {
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".json": "application/json",
    ".xml": "application/xml",
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".zip": "application/zip",
    ".gz": "application/x-gzip",
    ".bz2": "application/x-bzip2",
}

DEFAULT_MIME = "application/octet-stream"

# mime types RLE handles better, everything else goes to LZ77
RLE_MIME_TYPES = frozenset({"application/json", "application/xml"})

COMPRESSORS = {
    RLECompressor.name: RLECompressor,
    LZ77.name: LZ77,
}

_PRINTABLE = frozenset(
    (string.ascii_letters + string.digits + string.whitespace + string.punctuation).encode()
)


def detect_bytes(header: bytes) -> str | None:
    """Mime type from the magic number at the start of header, or None."""
    for mime_type, signatures in MAGIC_NUMBERS:
        for signature in signatures:
            if header.startswith(signature):
                return mime_type
    return None


def detect_type(path: str) -> str:
    """
    Detects the file type based on magic numbers and extension.

    Raises:
        FileNotFoundError: path does not exist
    """
    with open(path, "rb") as f:
        header = f.read(4)

    mime_type = detect_bytes(header)
    if mime_type is not None:
        return mime_type

    extension = os.path.splitext(path)[1].lower()
    return EXTENSION_TO_MIME.get(extension, DEFAULT_MIME)


def suggest_algorithm(mime_type: str) -> str:
    """Suggests the compression algorithm name for a mime type."""
    # RLE is better for files with repeated patterns
    if mime_type.startswith("text/") or mime_type in RLE_MIME_TYPES:
        return RLECompressor.name
    return LZ77.name


def suggest_for_data(data: bytes) -> str:
    """RLE for plain printable ASCII, LZ77 for anything else."""
    if all(b in _PRINTABLE for b in data):
        return RLECompressor.name
    return LZ77.name


def compressor_class(name: str) -> type[Compressor]:
    """
    Compressor class registered under name.

    Raises:
        ValueError: no compressor has that name
    """
    try:
        return COMPRESSORS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown compression algorithm: {name}. Use one of: {', '.join(COMPRESSORS)}"
        ) from None


def get_compressor(name: str, **options) -> Compressor:
    """
    Build the compressor registered under name.

    Options the compressor does not take (window_size for RLE) are dropped.
    """
    cls = compressor_class(name)
    if cls is RLECompressor:
        options.pop("window_size", None)
    return cls(**options)
