"""
Exceptions raised by the RLE and LZ77 codecs.
"""

from enum import Enum


class FormatErrorKind(Enum):
    """What exactly is wrong with a token stream."""

    ODD_LENGTH = "odd length"
    ZERO_COUNT = "zero count"
    INCOMPLETE_LITERAL = "incomplete literal"
    INCOMPLETE_REFERENCE = "incomplete reference"
    ZERO_DISTANCE_OR_LENGTH = "zero distance or length"
    DISTANCE_EXCEEDS_OUTPUT = "reference exceeds available data"
    UNKNOWN_TOKEN = "unknown token"


class CodecError(ValueError):
    """Base class for every codec failure."""


class InvalidInputError(CodecError, TypeError):
    """Input is not a byte buffer."""


class EmptyInputError(CodecError):
    """Input buffer has zero length."""


class FormatError(CodecError):
    """
    Malformed token stream.

    Args:
        kind: FormatErrorKind describing the problem
        position: offset of the offending token in the stream
        detail: optional extra text for the message
    """

    def __init__(self, kind: FormatErrorKind, position: int = 0, detail: str = ""):
        self.kind = kind
        self.position = position
        message = f"Invalid format: {kind.value} at byte {position}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


def check_buffer(data) -> memoryview:
    """
    Validate codec input and return a read-only view of it.

    Raises:
        InvalidInputError: data is not a contiguous bytes, bytearray or memoryview
        EmptyInputError: data is empty
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInputError(
            f"Input must be a byte buffer, got {type(data).__name__}"
        )
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        try:
            view = view.cast("B")
        except TypeError as e:
            raise InvalidInputError(f"Input must be a contiguous byte buffer: {e}") from e
    if len(view) == 0:
        raise EmptyInputError("Input data cannot be empty")
    return view
