"""
This class implements the LZ77 compression algorithm.
It compresses data by finding repeated sequences and encoding them
as backreferences into the bytes already produced.

Token stream:
    0x00 byte                 literal
    0x01 distance length      backreference, both fields one byte
"""

from typing import Iterator, Optional, Union

from .compressor_ABC import Compressor
from .errors import FormatError, FormatErrorKind, check_buffer
from .lz_window import LZWindow
from .LZ_Pair import LZPair

LITERAL = 0x00
REFERENCE = LZPair.TAG


class LZ77(Compressor):
    """
    LZ77 compression algorithm implementation.
    This class provides methods to compress and decompress data using the LZ77 algorithm.
    """

    name = "lz77"
    extension = ".lz77"

    DEFAULT_WINDOW_SIZE = 1024
    MIN_WINDOW_SIZE = 32
    MAX_WINDOW_SIZE = 32768  # Maximum size of the search window

    def __init__(self, window_size: Optional[int] = None, verbose: bool = False) -> None:
        """
        Initialize LZ77 compressor with specified window size.

        Args:
            window_size: size of the search window, clamped to
                [MIN_WINDOW_SIZE, MAX_WINDOW_SIZE]
            verbose: print every emitted token while encoding
        """
        super().__init__(verbose=verbose)
        if window_size is None:
            window_size = self.DEFAULT_WINDOW_SIZE
        self.window_size = min(max(window_size, self.MIN_WINDOW_SIZE), self.MAX_WINDOW_SIZE)
        self.window = LZWindow(self.window_size)

    def tokenize(self, data: bytes) -> list[Union[int, LZPair]]:
        """
        Turn data into a list of tokens: ints for literals, LZPair for matches.

        Args:
            data: Input data to compress

        Returns:
            Token list in stream order
        """
        data = check_buffer(data)
        tokens = []
        i = 0

        while i < len(data):
            match = self.window.find(data, i)

            if match:
                if self.verbose:
                    print(f"Match at position {i}: distance={match.dist}, length={match.length}")
                tokens.append(match)
                i += match.length
            else:
                if self.verbose:
                    print(f"Literal at position {i}: {data[i]}")
                tokens.append(data[i])
                i += 1

        return tokens

    def encode(self, data: bytes) -> bytes:
        """
        Compresses data into the LZ77 token stream.

        Args:
            data: Input data to compress

        Returns:
            Token stream bytes
        """
        output_buffer = bytearray()
        for token in self.tokenize(data):
            if isinstance(token, LZPair):
                output_buffer += token.to_bytes()
            else:
                output_buffer.append(LITERAL)
                output_buffer.append(token)
        return bytes(output_buffer)

    def decode(self, data: bytes) -> bytes:
        """
        Decompresses an LZ77 token stream.

        Args:
            data: Token stream bytes

        Returns:
            Decompressed data

        Raises:
            FormatError: truncated, zero-sized, out-of-range or unknown token
        """
        data = check_buffer(data)
        output_buffer = bytearray()
        i = 0

        while i < len(data):
            tag = data[i]

            if tag == LITERAL:
                if i + 1 >= len(data):
                    raise FormatError(FormatErrorKind.INCOMPLETE_LITERAL, i)
                output_buffer.append(data[i + 1])
                i += 2
            elif tag == REFERENCE:
                if i + 2 >= len(data):
                    raise FormatError(FormatErrorKind.INCOMPLETE_REFERENCE, i)
                distance = data[i + 1]
                length = data[i + 2]

                if distance == 0 or length == 0:
                    raise FormatError(FormatErrorKind.ZERO_DISTANCE_OR_LENGTH, i)
                if distance > len(output_buffer):
                    raise FormatError(
                        FormatErrorKind.DISTANCE_EXCEEDS_OUTPUT,
                        i,
                        f"distance {distance}, output so far {len(output_buffer)}",
                    )

                LZWindow.copy_back(output_buffer, distance, length)
                i += 3
            else:
                raise FormatError(FormatErrorKind.UNKNOWN_TOKEN, i, f"tag 0x{tag:02x}")

        return bytes(output_buffer)

    def token_spans(self, data: bytes) -> Iterator[tuple[int, int]]:
        i = 0
        while i < len(data):
            tag = data[i]
            if tag == LITERAL and i + 1 < len(data):
                yield 2, 1
                i += 2
            elif tag == REFERENCE and i + 2 < len(data):
                yield 3, data[i + 2]
                i += 3
            else:
                return
