"""
Command line interface: python -m bytecodec <command> ...
"""

import argparse
import sys

from .benchmark import format_results, run_benchmark
from .file_type import COMPRESSORS, detect_type, suggest_algorithm
from .transfer import (
    AUTO,
    batch_compress,
    batch_decompress,
    compress_file,
    compress_stream,
    decompress_file,
    decompress_stream,
)

STDIO = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bytecodec", description="RLE and LZ77 byte compressor"
    )
    subparsers = parser.add_subparsers(dest="command")
    algorithms = [AUTO, *COMPRESSORS]

    compress_parser = subparsers.add_parser("compress", help="Compress a file")
    compress_parser.add_argument("input", help="Input file, - for stdin")
    compress_parser.add_argument("output", help="Output file, - for stdout")
    compress_parser.add_argument("-a", "--algorithm", default=AUTO, choices=algorithms)
    compress_parser.add_argument("-w", "--window-size", type=int, default=None)
    compress_parser.add_argument("--chunk-size", type=int, default=None)
    compress_parser.add_argument("-v", "--verbose", action="store_true")

    decompress_parser = subparsers.add_parser("decompress", help="Decompress a file")
    decompress_parser.add_argument("input", help="Input file, - for stdin")
    decompress_parser.add_argument("output", help="Output file, - for stdout")
    decompress_parser.add_argument("-a", "--algorithm", default=AUTO, choices=algorithms)
    decompress_parser.add_argument("--chunk-size", type=int, default=None)
    decompress_parser.add_argument("-v", "--verbose", action="store_true")

    batch_parser = subparsers.add_parser("batch-compress", help="Compress many files")
    batch_parser.add_argument("files", nargs="+")
    batch_parser.add_argument("-o", "--output-dir", default=None)
    batch_parser.add_argument("-a", "--algorithm", default=AUTO, choices=algorithms)
    batch_parser.add_argument("-w", "--window-size", type=int, default=None)
    batch_parser.add_argument("-v", "--verbose", action="store_true")

    unbatch_parser = subparsers.add_parser("batch-decompress", help="Decompress many files")
    unbatch_parser.add_argument("files", nargs="+")
    unbatch_parser.add_argument("-o", "--output-dir", default=None)
    unbatch_parser.add_argument("-a", "--algorithm", default=AUTO, choices=algorithms)
    unbatch_parser.add_argument("-v", "--verbose", action="store_true")

    detect_parser = subparsers.add_parser("detect", help="Show file type and suggested algorithm")
    detect_parser.add_argument("input")

    bench_parser = subparsers.add_parser("benchmark", help="Time both codecs")
    bench_parser.add_argument("--sizes", type=int, nargs="+", default=[1000, 10000])
    bench_parser.add_argument("--repeats", type=int, default=3)
    bench_parser.add_argument("--seed", type=int, default=0)
    bench_parser.add_argument("-w", "--window-size", type=int, default=None)

    subparsers.add_parser("gui", help="Open the desktop window")

    return parser


def _compress(args) -> None:
    if STDIO in (args.input, args.output):
        # auto looks at the first chunk of the input
        with _open(args.input, "rb") as fin, _open(args.output, "wb") as fout:
            log = compress_stream(
                fin, fout, args.algorithm, args.chunk_size, args.window_size, args.verbose
            )
        print(log, file=sys.stderr)
        return

    stats = compress_file(
        args.input, args.output, args.algorithm, args.window_size, args.verbose
    )
    print(f"File compressed successfully using {stats.algorithm} algorithm")
    print(
        f"{stats.original_size} -> {stats.compressed_size} bytes "
        f"(ratio {stats.compression_ratio:.2f}, {stats.compression_time:.3f}s)"
    )


def _decompress(args) -> None:
    if STDIO in (args.input, args.output):
        if args.algorithm == AUTO:
            raise ValueError("Pick an algorithm with -a when reading or writing stdio")
        with _open(args.input, "rb") as fin, _open(args.output, "wb") as fout:
            log = decompress_stream(fin, fout, args.algorithm, args.chunk_size, args.verbose)
        print(log, file=sys.stderr)
        return

    stats = decompress_file(args.input, args.output, args.algorithm, args.verbose)
    print(f"File decompressed successfully using {stats.algorithm} algorithm")
    print(
        f"{stats.compressed_size} -> {stats.decompressed_size} bytes "
        f"({stats.decompression_time:.3f}s)"
    )


class _StdStream:
    """Context manager over a binary std stream that leaves it open."""

    def __init__(self, stream):
        self.stream = stream

    def __enter__(self):
        return self.stream

    def __exit__(self, *exc):
        self.stream.flush()
        return False


def _open(path: str, mode: str):
    if path == STDIO:
        return _StdStream(sys.stdin.buffer if "r" in mode else sys.stdout.buffer)
    return open(path, mode)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "compress":
            _compress(args)
        elif args.command == "decompress":
            _decompress(args)
        elif args.command == "batch-compress":
            report = batch_compress(
                args.files, args.output_dir, args.algorithm, args.window_size, args.verbose
            )
            print(report.summary())
            return 1 if report.failed else 0
        elif args.command == "batch-decompress":
            report = batch_decompress(args.files, args.output_dir, args.algorithm, args.verbose)
            print(report.summary())
            return 1 if report.failed else 0
        elif args.command == "detect":
            mime_type = detect_type(args.input)
            print(f"{args.input}: {mime_type} (suggested: {suggest_algorithm(mime_type)})")
        elif args.command == "benchmark":
            results = run_benchmark(args.sizes, args.repeats, args.seed, args.window_size)
            print(format_results(results))
        elif args.command == "gui":
            from .gui import run

            return run()
        else:
            parser.print_help()
            return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
