from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Iterator, Optional, Tuple

from .errors import EmptyInputError


class Compressor(ABC):
    """
    Interface shared by the byte codecs.

    A subclass supplies encode/decode for whole in-memory buffers. On top of
    that this class runs the chunked stream pipeline: every chunk of the
    input goes through encode on its own, so runs and matches never cross a
    chunk boundary, and the encoded chunks are written back to back.
    """

    name = ""
    extension = ""
    DEFAULT_CHUNK_SIZE = 64 * 1024

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    @abstractmethod
    def encode(self, data: bytes) -> bytes:
        """Compress a complete, non-empty buffer."""

    @abstractmethod
    def decode(self, data: bytes) -> bytes:
        """Decompress a complete, non-empty token stream."""

    @abstractmethod
    def token_spans(self, data: bytes) -> Iterator[Tuple[int, int]]:
        """
        Walk the token stream without decoding it.

        Yields (encoded size, decoded size) for every complete token and
        stops at a truncated tail. Malformed tokens are left to decode().
        """

    def _size_log(self, before: int, after: int) -> str:
        diff = before - after
        if diff > 0:
            ratio = diff / before * 100
            return f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)"
        return f"Size increased by {-diff} bytes"

    def compress(
        self,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        chunk_size: Optional[int] = None,
    ) -> str:
        """
        Reads the input stream chunk by chunk, encodes every chunk and writes
        the results to the output stream.

        Args:
            input_stream: stream of raw bytes
            output_stream: stream for the token stream
            chunk_size: bytes per chunk, DEFAULT_CHUNK_SIZE if not given

        Returns:
            Log line with the size difference
        """
        if chunk_size is None:
            chunk_size = self.DEFAULT_CHUNK_SIZE
        if chunk_size < 1:
            raise ValueError("Chunk size must be positive")

        read_total = 0
        written_total = 0
        while True:
            chunk = input_stream.read(chunk_size)
            if not chunk:
                break
            read_total += len(chunk)
            encoded = self.encode(chunk)
            output_stream.write(encoded)
            written_total += len(encoded)
            if self.verbose:
                print(f"{self.name}: chunk of {len(chunk)} bytes -> {len(encoded)} bytes")

        if read_total == 0:
            raise EmptyInputError("Input data cannot be empty")

        return self._size_log(read_total, written_total)

    def decompress(
        self,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        chunk_size: Optional[int] = None,
    ) -> str:
        """
        Reads a token stream written by compress() and writes the raw bytes.

        The stream is cut into frames at the token where the decoded size
        reaches chunk_size, and each frame is decoded on its own. Use the
        same chunk size as for compression.

        Args:
            input_stream: stream with the token stream
            output_stream: stream for the decoded bytes
            chunk_size: bytes per chunk, DEFAULT_CHUNK_SIZE if not given

        Returns:
            Log line with the size difference
        """
        if chunk_size is None:
            chunk_size = self.DEFAULT_CHUNK_SIZE
        if chunk_size < 1:
            raise ValueError("Chunk size must be positive")

        pending = bytearray()
        read_total = 0
        written_total = 0
        while True:
            block = input_stream.read(chunk_size)
            if block:
                read_total += len(block)
                pending += block

            while pending:
                cut = self._frame_end(pending, chunk_size)
                if cut is None:
                    break
                decoded = self.decode(bytes(pending[:cut]))
                del pending[:cut]
                output_stream.write(decoded)
                written_total += len(decoded)
                if self.verbose:
                    print(f"{self.name}: frame of {cut} bytes -> {len(decoded)} bytes")

            if not block:
                break

        if read_total == 0:
            raise EmptyInputError("Input data cannot be empty")
        if pending:
            # last frame, shorter than a chunk or malformed
            decoded = self.decode(bytes(pending))
            output_stream.write(decoded)
            written_total += len(decoded)

        return self._size_log(read_total, written_total)

    def _frame_end(self, pending: bytearray, chunk_size: int) -> Optional[int]:
        """Offset right after the token that completes a chunk, if any."""
        consumed = 0
        produced = 0
        for encoded, decoded in self.token_spans(pending):
            consumed += encoded
            produced += decoded
            if produced >= chunk_size:
                return consumed
        return None

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Helper that compresses one file into another.

        Args:
            input_file: path to the source file
            output_file: path to the compressed file
            options: passed to the constructor

        Returns:
            Compression log
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.compress(in_file, out_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Helper that decompresses one file into another.

        Args:
            input_file: path to the compressed file
            output_file: path to the restored file
            options: passed to the constructor

        Returns:
            Decompression log
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.decompress(in_file, out_file)

    @classmethod
    def compress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Helper that runs the stream pipeline over an in-memory buffer.

        Returns:
            Tuple (compressed data, compression log)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Helper that runs the stream pipeline over an in-memory token stream.

        Returns:
            Tuple (decompressed data, decompression log)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info
