"""
File and stream transfer around the codecs.

Reads a file or stream, runs the chosen codec over it, writes the result and
records timing and size statistics. Batch runs collect one result per file
and never stop on a failing file.
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from .compressor_ABC import Compressor
from .file_type import (
    COMPRESSORS,
    compressor_class,
    detect_type,
    get_compressor,
    suggest_algorithm,
    suggest_for_data,
)

AUTO = "auto"


@dataclass
class CompressionStats:
    original_size: int
    compressed_size: int
    compression_time: float
    algorithm: str
    options: dict = field(default_factory=dict)

    @property
    def compression_ratio(self) -> float:
        """Compressed size over original size."""
        if not self.original_size:
            return 0.0
        return self.compressed_size / self.original_size


@dataclass
class DecompressionStats:
    compressed_size: int
    decompressed_size: int
    decompression_time: float
    algorithm: str


@dataclass
class BatchItem:
    path: str
    output: Optional[str]
    stats: Optional[object] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    items: list = field(default_factory=list)

    @property
    def succeeded(self) -> list:
        return [item for item in self.items if item.ok]

    @property
    def failed(self) -> list:
        return [item for item in self.items if not item.ok]

    def summary(self) -> str:
        lines = []
        for item in self.items:
            status = "OK  " if item.ok else "FAIL"
            if item.ok:
                lines.append(f"{status} {item.path} -> {item.output}")
            else:
                lines.append(f"{status} {item.path}: {item.error}")
        lines.append(
            f"{len(self.succeeded)} succeeded, {len(self.failed)} failed, {len(self.items)} total"
        )
        return "\n".join(lines)


def validate_paths(input_path, output_path, check_input_exists: bool = True) -> None:
    """
    Validates file paths and checks that the input exists.

    Raises:
        ValueError: a path is empty or not a string
        FileNotFoundError: input file does not exist
    """
    if not input_path or not isinstance(input_path, (str, os.PathLike)):
        raise ValueError("Invalid input path")
    if not output_path or not isinstance(output_path, (str, os.PathLike)):
        raise ValueError("Invalid output path")
    if check_input_exists and not os.path.isfile(input_path):
        raise FileNotFoundError(f"Input file does not exist: {input_path}")


def resolve_algorithm(algorithm: str, input_path=None) -> str:
    """Turns "auto" into a concrete algorithm name using the input file type."""
    if algorithm.lower() != AUTO:
        return algorithm.lower()
    if input_path is None:
        raise ValueError("Algorithm 'auto' needs an input file to inspect")
    return suggest_algorithm(detect_type(input_path))


def algorithm_from_path(path) -> Optional[str]:
    """Algorithm name from a compressed file's extension, or None."""
    suffix = Path(path).suffix.lower()
    for name, cls in COMPRESSORS.items():
        if cls.extension == suffix:
            return name
    return None


def output_path_for(path, algorithm: str, output_dir=None) -> str:
    """Default compressed file name: <name>.<algorithm>."""
    path = Path(path)
    target = path.name + compressor_class(algorithm).extension
    directory = Path(output_dir) if output_dir is not None else path.parent
    return str(directory / target)


def restored_path_for(path, output_dir=None) -> str:
    """Default restored file name: the compressed name without its codec extension."""
    path = Path(path)
    if algorithm_from_path(path) is not None:
        target = path.stem
    else:
        target = path.name + ".out"
    directory = Path(output_dir) if output_dir is not None else path.parent
    return str(directory / target)


def compress_file(
    input_path,
    output_path,
    algorithm: str = AUTO,
    window_size: Optional[int] = None,
    verbose: bool = False,
) -> CompressionStats:
    """
    Compresses a file using the specified algorithm.

    Args:
        input_path: file to compress
        output_path: where the token stream goes
        algorithm: "rle", "lz77" or "auto"
        window_size: LZ77 search window
        verbose: print progress

    Returns:
        CompressionStats
    """
    validate_paths(input_path, output_path)
    algorithm = resolve_algorithm(algorithm, input_path)
    compressor = get_compressor(algorithm, window_size=window_size, verbose=verbose)

    with open(input_path, "rb") as f:
        data = f.read()
    if verbose:
        print(f"Compressing {input_path} ({len(data)} bytes) with {algorithm}")

    start_time = time.perf_counter()
    compressed = compressor.encode(data)
    compression_time = time.perf_counter() - start_time

    with open(output_path, "wb") as f:
        f.write(compressed)

    options = {}
    if window_size is not None and algorithm == "lz77":
        options["window_size"] = compressor.window_size
    return CompressionStats(
        original_size=len(data),
        compressed_size=len(compressed),
        compression_time=compression_time,
        algorithm=algorithm,
        options=options,
    )


def decompress_file(
    input_path,
    output_path,
    algorithm: Optional[str] = None,
    verbose: bool = False,
) -> DecompressionStats:
    """
    Decompresses a file using the specified algorithm.

    When algorithm is None it is taken from the file extension.

    Returns:
        DecompressionStats
    """
    validate_paths(input_path, output_path)
    if algorithm is None or algorithm.lower() == AUTO:
        algorithm = algorithm_from_path(input_path)
        if algorithm is None:
            raise ValueError(f"Cannot tell the algorithm from the file name: {input_path}")
    compressor = get_compressor(algorithm, verbose=verbose)

    with open(input_path, "rb") as f:
        data = f.read()
    if verbose:
        print(f"Decompressing {input_path} ({len(data)} bytes) with {algorithm}")

    start_time = time.perf_counter()
    decompressed = compressor.decode(data)
    decompression_time = time.perf_counter() - start_time

    with open(output_path, "wb") as f:
        f.write(decompressed)

    return DecompressionStats(
        compressed_size=len(data),
        decompressed_size=len(decompressed),
        decompression_time=decompression_time,
        algorithm=algorithm,
    )


class _PrefixedStream:
    """Binary stream that hands out an already read head before the rest."""

    def __init__(self, head: bytes, stream: BinaryIO):
        self.head = head
        self.stream = stream

    def read(self, size: int = -1) -> bytes:
        if self.head:
            head, self.head = self.head, b""
            return head
        return self.stream.read(size)


def _stream_compressor(algorithm: str, window_size=None, verbose=False) -> Compressor:
    if algorithm.lower() == AUTO:
        raise ValueError("Algorithm 'auto' needs a file name, pick rle or lz77")
    return get_compressor(algorithm, window_size=window_size, verbose=verbose)


def compress_stream(
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    algorithm: str,
    chunk_size: Optional[int] = None,
    window_size: Optional[int] = None,
    verbose: bool = False,
) -> str:
    """
    Chunked compression from one binary stream to another. Returns the log.

    With algorithm "auto" the first chunk decides: RLE for printable text,
    LZ77 otherwise, and the log starts with the chosen name.
    """
    if algorithm.lower() != AUTO:
        compressor = _stream_compressor(algorithm, window_size, verbose)
        return compressor.compress(input_stream, output_stream, chunk_size)

    if chunk_size is None:
        chunk_size = Compressor.DEFAULT_CHUNK_SIZE
    if chunk_size < 1:
        raise ValueError("Chunk size must be positive")
    head = input_stream.read(chunk_size)
    algorithm = suggest_for_data(head)
    compressor = get_compressor(algorithm, window_size=window_size, verbose=verbose)
    log = compressor.compress(_PrefixedStream(head, input_stream), output_stream, chunk_size)
    return f"Algorithm: {algorithm}\n{log}"


def decompress_stream(
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    algorithm: str,
    chunk_size: Optional[int] = None,
    verbose: bool = False,
) -> str:
    """Chunked decompression, chunk_size must match the one used to compress."""
    compressor = _stream_compressor(algorithm, verbose=verbose)
    return compressor.decompress(input_stream, output_stream, chunk_size)


def batch_compress(
    paths: Iterable,
    output_dir=None,
    algorithm: str = AUTO,
    window_size: Optional[int] = None,
    verbose: bool = False,
) -> BatchReport:
    """
    Compresses every file in paths, one output per input.

    Failing files are recorded in the report and the batch goes on.
    """
    report = BatchReport()
    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)

    for path in paths:
        path = str(path)
        item = BatchItem(path=path, output=None)
        try:
            name = resolve_algorithm(algorithm, path)
            item.output = output_path_for(path, name, output_dir)
            item.stats = compress_file(path, item.output, name, window_size, verbose)
        except (ValueError, OSError) as e:
            item.error = f"{type(e).__name__}: {e}"
            if verbose:
                print(f"Failed {path}: {item.error}")
        report.items.append(item)

    return report


def batch_decompress(
    paths: Iterable,
    output_dir=None,
    algorithm: Optional[str] = None,
    verbose: bool = False,
) -> BatchReport:
    """
    Decompresses every file in paths, taking the algorithm from each
    extension unless one is given.
    """
    report = BatchReport()
    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)

    for path in paths:
        path = str(path)
        item = BatchItem(path=path, output=restored_path_for(path, output_dir))
        try:
            item.stats = decompress_file(path, item.output, algorithm, verbose)
        except (ValueError, OSError) as e:
            item.error = f"{type(e).__name__}: {e}"
            if verbose:
                print(f"Failed {path}: {item.error}")
        report.items.append(item)

    return report
