# LZ_Pair.py

class LZPair:
    """
    A backreference token of the LZ77 stream:
    - dist: how far back in the output the copy starts (1..255)
    - length: how many bytes to copy (3..255)
    On the wire it is three bytes: 0x01, dist, length.
    """
    TAG = 0x01
    MIN_LENGTH = 3
    MAX_LENGTH = 255
    MAX_DIST = 255

    def __init__(self, dist: int, length: int):
        """
        :param dist: distance back from the current output position (>=1)
        :param length: match length (>=3, <=255)
        """
        if not 1 <= dist <= LZPair.MAX_DIST or not (
            LZPair.MIN_LENGTH <= length <= LZPair.MAX_LENGTH
        ):
            raise ValueError(f"Cannot encode pair (dist={dist}, length={length})")
        self.dist = dist
        self.length = length

    def to_bytes(self) -> bytes:
        return bytes((LZPair.TAG, self.dist, self.length))

    def __eq__(self, other):
        if not isinstance(other, LZPair):
            return NotImplemented
        return self.dist == other.dist and self.length == other.length

    def __hash__(self):
        return hash((self.dist, self.length))

    def __repr__(self):
        return f"<LZPair dist={self.dist} len={self.length}>"
