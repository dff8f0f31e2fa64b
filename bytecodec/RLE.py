"""
Run-Length Encoding (RLE) Compression Module

The token stream is a flat sequence of (count, value) byte pairs, so a run
longer than 255 bytes is split into several pairs.
"""

from typing import Iterator

from .compressor_ABC import Compressor
from .errors import FormatError, FormatErrorKind, check_buffer


class RLECompressor(Compressor):
    """Class for RLE compression and decompression"""

    name = "rle"
    extension = ".rle"
    MAX_RUN = 255

    @staticmethod
    def runs(data: bytes) -> list[tuple[int, int]]:
        """
        Split data into runs.

        Args:
            data: Input data as bytes

        Returns:
            List of (count, value) tuples, every count in 1..255
        """
        data = check_buffer(data)

        result = []
        current_byte = data[0]
        count = 1

        for byte in data[1:]:
            if byte == current_byte and count < RLECompressor.MAX_RUN:
                count += 1
            else:
                result.append((count, current_byte))
                current_byte = byte
                count = 1

        # Add the last run
        result.append((count, current_byte))

        return result

    def encode(self, data: bytes) -> bytes:
        """
        Compress data using RLE.

        Args:
            data: Input data as bytes

        Returns:
            Token stream of (count, value) pairs
        """
        result = bytearray()
        for count, value in self.runs(data):
            result.append(count)
            result.append(value)
        return bytes(result)

    def decode(self, data: bytes) -> bytes:
        """
        Decompress RLE data.

        Args:
            data: Token stream of (count, value) pairs

        Returns:
            Decompressed data as bytes

        Raises:
            FormatError: odd stream length or a zero count
        """
        data = check_buffer(data)
        if len(data) % 2 != 0:
            raise FormatError(
                FormatErrorKind.ODD_LENGTH, len(data) - 1, "data length must be even"
            )

        result = bytearray()
        for pos in range(0, len(data), 2):
            count = data[pos]
            if count == 0:
                raise FormatError(FormatErrorKind.ZERO_COUNT, pos)
            result.extend(bytes((data[pos + 1],)) * count)
        return bytes(result)

    def token_spans(self, data: bytes) -> Iterator[tuple[int, int]]:
        for pos in range(0, len(data) - 1, 2):
            yield 2, data[pos]
