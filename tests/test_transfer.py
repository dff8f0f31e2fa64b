"""Tests for file, stream and batch transfer."""

import io

import pytest

from bytecodec.errors import EmptyInputError, FormatError
from bytecodec.LZ77 import LZ77
from bytecodec.RLE import RLECompressor
from bytecodec.transfer import (
    algorithm_from_path,
    batch_compress,
    batch_decompress,
    compress_file,
    compress_stream,
    decompress_file,
    decompress_stream,
    output_path_for,
    restored_path_for,
    validate_paths,
)

TEXT = b"the quick brown fox jumps over the lazy dog. " * 40


class TestPaths:
    """Path checks and default names."""

    def test_validate_rejects_empty_paths(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="Invalid input path"):
            validate_paths("", str(tmp_path / "out"))
        with pytest.raises(ValueError, match="Invalid output path"):
            validate_paths(str(tmp_path / "in"), None, check_input_exists=False)

    def test_validate_missing_input(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError, match="does not exist"):
            validate_paths(str(tmp_path / "nope"), str(tmp_path / "out"))

    def test_output_names(self, tmp_path) -> None:
        assert output_path_for("/data/a.txt", "rle") == "/data/a.txt.rle"
        assert output_path_for("/data/a.txt", "lz77", tmp_path) == str(tmp_path / "a.txt.lz77")
        assert restored_path_for("/data/a.txt.lz77") == "/data/a.txt"
        assert restored_path_for("/data/a.bin") == "/data/a.bin.out"

    def test_output_name_unknown_algorithm(self) -> None:
        with pytest.raises(ValueError, match="Unknown compression algorithm"):
            output_path_for("/data/a.txt", "zstd")

    def test_algorithm_from_path(self) -> None:
        assert algorithm_from_path("x.rle") == "rle"
        assert algorithm_from_path("x.LZ77") == "lz77"
        assert algorithm_from_path("x.zip") is None


class TestFiles:
    """Single file compress and decompress with statistics."""

    @pytest.mark.parametrize("algorithm", ["rle", "lz77"])
    def test_round_trip(self, tmp_path, algorithm: str) -> None:
        source = tmp_path / "input.bin"
        source.write_bytes(TEXT)
        packed = tmp_path / f"input.{algorithm}"
        restored = tmp_path / "restored.bin"

        stats = compress_file(str(source), str(packed), algorithm)
        assert stats.algorithm == algorithm
        assert stats.original_size == len(TEXT)
        assert stats.compressed_size == packed.stat().st_size
        assert stats.compression_ratio == pytest.approx(stats.compressed_size / len(TEXT))
        assert stats.compression_time >= 0

        back = decompress_file(str(packed), str(restored))
        assert back.algorithm == algorithm
        assert back.decompressed_size == len(TEXT)
        assert restored.read_bytes() == TEXT

    def test_auto_picks_rle_for_text(self, tmp_path) -> None:
        source = tmp_path / "notes.txt"
        source.write_bytes(b"aaaabbbb")
        stats = compress_file(str(source), str(tmp_path / "notes.txt.rle"))
        assert stats.algorithm == "rle"

    def test_auto_picks_lz77_for_binary(self, tmp_path) -> None:
        source = tmp_path / "blob.dat"
        source.write_bytes(bytes(range(10)) * 10)
        stats = compress_file(str(source), str(tmp_path / "blob.dat.lz77"), window_size=64)
        assert stats.algorithm == "lz77"
        assert stats.options == {"window_size": 64}

    def test_empty_file(self, tmp_path) -> None:
        source = tmp_path / "empty.txt"
        source.write_bytes(b"")
        with pytest.raises(EmptyInputError):
            compress_file(str(source), str(tmp_path / "empty.rle"), "rle")

    def test_corrupt_file_leaves_no_output(self, tmp_path) -> None:
        packed = tmp_path / "bad.rle"
        packed.write_bytes(b"\x05")
        target = tmp_path / "bad"
        with pytest.raises(FormatError):
            decompress_file(str(packed), str(target))
        assert not target.exists()

    def test_unknown_extension_needs_algorithm(self, tmp_path) -> None:
        packed = tmp_path / "data.bin"
        packed.write_bytes(b"\x02a")
        with pytest.raises(ValueError, match="Cannot tell the algorithm"):
            decompress_file(str(packed), str(tmp_path / "out"))
        decompress_file(str(packed), str(tmp_path / "out"), "rle")
        assert (tmp_path / "out").read_bytes() == b"aa"


class TestStreams:
    """Chunked stream pipeline."""

    @pytest.mark.parametrize("algorithm", ["rle", "lz77"])
    @pytest.mark.parametrize("chunk_size", [7, 100, 4096])
    def test_round_trip(self, algorithm: str, chunk_size: int) -> None:
        packed = io.BytesIO()
        compress_stream(io.BytesIO(TEXT), packed, algorithm, chunk_size)
        restored = io.BytesIO()
        decompress_stream(io.BytesIO(packed.getvalue()), restored, algorithm, chunk_size)
        assert restored.getvalue() == TEXT

    def test_chunks_are_encoded_independently(self) -> None:
        packed = io.BytesIO()
        compress_stream(io.BytesIO(b"a" * 150), packed, "rle", chunk_size=100)
        assert packed.getvalue() == bytes([100, ord("a"), 50, ord("a")])

    def test_lz77_chunks_match_per_chunk_encoding(self) -> None:
        packed = io.BytesIO()
        compress_stream(io.BytesIO(TEXT), packed, "lz77", chunk_size=256)
        codec = LZ77()
        expected = b"".join(codec.encode(TEXT[i : i + 256]) for i in range(0, len(TEXT), 256))
        assert packed.getvalue() == expected

    def test_whole_stream_still_decodes_in_one_piece(self) -> None:
        packed = io.BytesIO()
        compress_stream(io.BytesIO(TEXT), packed, "lz77", chunk_size=64)
        assert LZ77().decode(packed.getvalue()) == TEXT

    def test_log_line(self) -> None:
        log = compress_stream(io.BytesIO(b"z" * 1000), io.BytesIO(), "rle")
        assert log.startswith("Size reduced by")

    def test_log_is_returned_not_stored(self) -> None:
        compressor = RLECompressor()
        first = compressor.compress(io.BytesIO(b"z" * 1000), io.BytesIO())
        second = compressor.compress(io.BytesIO(b"ab"), io.BytesIO())
        assert first == "Size reduced by 992 bytes (99.2% total saving)"
        assert second == "Size increased by 2 bytes"
        assert not hasattr(compressor, "log")

    def test_empty_stream(self) -> None:
        with pytest.raises(EmptyInputError):
            compress_stream(io.BytesIO(b""), io.BytesIO(), "lz77")
        with pytest.raises(EmptyInputError):
            decompress_stream(io.BytesIO(b""), io.BytesIO(), "rle")

    def test_truncated_stream(self) -> None:
        with pytest.raises(FormatError):
            decompress_stream(io.BytesIO(b"\x00a\x01\x01"), io.BytesIO(), "lz77", 4)

    def test_auto_picks_rle_for_text(self) -> None:
        packed = io.BytesIO()
        log = compress_stream(io.BytesIO(b"z" * 150), packed, "auto", chunk_size=100)
        assert log.startswith("Algorithm: rle\n")
        assert packed.getvalue() == bytes([100, ord("z"), 50, ord("z")])

    def test_auto_picks_lz77_for_binary(self) -> None:
        data = bytes(range(8)) * 40
        packed = io.BytesIO()
        log = compress_stream(io.BytesIO(data), packed, "auto", chunk_size=64)
        assert log.startswith("Algorithm: lz77\n")
        restored = io.BytesIO()
        decompress_stream(io.BytesIO(packed.getvalue()), restored, "lz77", chunk_size=64)
        assert restored.getvalue() == data

    def test_auto_empty_stream(self) -> None:
        with pytest.raises(EmptyInputError):
            compress_stream(io.BytesIO(b""), io.BytesIO(), "auto")

    def test_auto_decompress_not_allowed(self) -> None:
        with pytest.raises(ValueError, match="needs a file name"):
            decompress_stream(io.BytesIO(b"\x01a"), io.BytesIO(), "auto")

    @pytest.mark.parametrize("chunk_size", [0, -5])
    def test_non_positive_chunk_size(self, chunk_size: int) -> None:
        with pytest.raises(ValueError, match="Chunk size must be positive"):
            compress_stream(io.BytesIO(b"abc"), io.BytesIO(), "rle", chunk_size)
        with pytest.raises(ValueError, match="Chunk size must be positive"):
            decompress_stream(io.BytesIO(b"\x01a"), io.BytesIO(), "rle", chunk_size)
        with pytest.raises(ValueError, match="Chunk size must be positive"):
            compress_stream(io.BytesIO(b"abc"), io.BytesIO(), "auto", chunk_size)

    def test_bytes_helpers(self) -> None:
        packed, _ = RLECompressor.compress_bytes(b"x" * 10)
        assert packed == b"\x0ax"
        restored, _ = RLECompressor.decompress_bytes(packed)
        assert restored == b"x" * 10

    def test_file_helpers(self, tmp_path) -> None:
        source = tmp_path / "in"
        source.write_bytes(TEXT)
        LZ77.compress_file(str(source), str(tmp_path / "in.lz77"), window_size=128)
        LZ77.decompress_file(str(tmp_path / "in.lz77"), str(tmp_path / "out"))
        assert (tmp_path / "out").read_bytes() == TEXT


class TestBatch:
    """Batch runs keep going past failures."""

    def test_batch_with_failures(self, tmp_path) -> None:
        good = tmp_path / "good.txt"
        good.write_bytes(b"aaaaabbbbb")
        empty = tmp_path / "empty.txt"
        empty.write_bytes(b"")
        missing = tmp_path / "missing.txt"
        out_dir = tmp_path / "packed"

        report = batch_compress([good, empty, missing], out_dir)
        assert len(report.items) == 3
        assert [item.path for item in report.succeeded] == [str(good)]
        assert len(report.failed) == 2
        assert "EmptyInputError" in report.failed[0].error
        assert "FileNotFoundError" in report.failed[1].error
        assert "1 succeeded, 2 failed, 3 total" in report.summary()

        restored_dir = tmp_path / "restored"
        bad = tmp_path / "bad.lz77"
        bad.write_bytes(b"\x07")
        back = batch_decompress([report.succeeded[0].output, bad], restored_dir)
        assert [item.ok for item in back.items] == [True, False]
        assert "FormatError" in back.items[1].error
        assert (restored_dir / "good.txt").read_bytes() == b"aaaaabbbbb"

    def test_batch_forced_algorithm(self, tmp_path) -> None:
        files = []
        for i in range(3):
            path = tmp_path / f"f{i}.txt"
            path.write_bytes(TEXT)
            files.append(path)
        report = batch_compress(files, algorithm="lz77")
        assert not report.failed
        assert all(item.output.endswith(".lz77") for item in report.items)
        assert all(item.stats.algorithm == "lz77" for item in report.items)

    def test_batch_unknown_algorithm_recorded_per_file(self, tmp_path) -> None:
        first = tmp_path / "a.txt"
        first.write_bytes(b"aaaa")
        second = tmp_path / "b.txt"
        second.write_bytes(b"bbbb")
        report = batch_compress([first, second], tmp_path / "out", algorithm="zstd")
        assert len(report.items) == 2
        assert len(report.failed) == 2
        assert all(item.error.startswith("ValueError: Unknown compression algorithm")
                   for item in report.items)
        assert not (tmp_path / "out" / "a.txt.zstd").exists()
