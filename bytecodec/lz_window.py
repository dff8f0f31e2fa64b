# lz_window.py

from .LZ_Pair import LZPair


class LZWindow:
    """
    Sliding search window for LZ77.
    The window is the last `size` bytes before the current position of the
    input buffer, so nothing is copied while encoding: find() looks back
    into the same buffer it is compressing.
    """
    MIN_MATCH = LZPair.MIN_LENGTH
    MAX_MATCH = LZPair.MAX_LENGTH

    def __init__(self, size: int):
        """
        :param size: how many bytes back the search may reach
        """
        if size < 1:
            raise ValueError("Window size must be positive")
        # distances are written as a single byte
        self.size = min(size, LZPair.MAX_DIST)

    def longest_match(self, data, offset: int) -> tuple[int, int]:
        """
        Returns (dist, length) of the longest match for data[offset:].
        Distances are tried nearest first and a candidate only replaces the
        best one when it is strictly longer, so ties go to the smallest dist.
        A match may run past `offset` (dist < length), the decoder copies
        byte by byte and reproduces it.
        """
        best_dist = 0
        best_len = 0
        limit = min(self.MAX_MATCH, len(data) - offset)
        if limit <= 0:
            return best_dist, best_len

        first = data[offset]
        for dist in range(1, min(self.size, offset) + 1):
            start = offset - dist
            if data[start] != first:
                continue
            match_len = 1
            while match_len < limit and data[start + match_len] == data[offset + match_len]:
                match_len += 1
            if match_len > best_len:
                best_len = match_len
                best_dist = dist
                if best_len == limit:
                    break
        return best_dist, best_len

    def find(self, data, offset: int) -> LZPair | None:
        """
        Returns LZPair(dist, length) for the longest match at `offset`,
        or None when it is shorter than MIN_MATCH.
        """
        dist, length = self.longest_match(data, offset)
        if length >= self.MIN_MATCH:
            return LZPair(dist, length)
        return None

    @staticmethod
    def copy_back(output: bytearray, dist: int, length: int) -> None:
        """
        Appends `length` bytes to output, each taken `dist` bytes behind
        the end of the growing output.
        """
        start = len(output) - dist
        if dist >= length:
            output += output[start : start + length]
            return
        for i in range(length):
            output.append(output[start + i])
