"""Mode indicator, character count and payload of the leading data segment."""

from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

ALNUM = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"


class EncodingMode(Enum):
    # indicator, display name, character count bits for v1-9 / v10-26 / v27-40, payload unit bits
    NUMERIC = ('0001', 'Numeric', (10, 12, 14), 10)
    ALPHANUMERIC = ('0010', 'Alphanumeric', (9, 11, 13), 11)
    BYTE = ('0100', 'Byte', (8, 16, 16), 8)
    UNKNOWN = (None, 'Unknown', (8, 8, 8), 8)

    def __init__(self, indicator, label, length_bits, unit_bits):
        self.indicator = indicator
        self.label = label
        self._length_bits = length_bits
        self.unit_bits = unit_bits

    def length_bits(self, version: int) -> int:
        return self._length_bits[0 if version <= 9 else 1 if version <= 26 else 2]

    @classmethod
    def from_indicator(cls, bits: str) -> 'EncodingMode':
        for mode in cls:
            if mode.indicator == bits:
                return mode
        return cls.UNKNOWN


class Segment(NamedTuple):
    mode: EncodingMode
    length: int
    groups: Tuple[int, ...]
    text: str


class InsufficientDataError(ValueError):
    """The codeword stream ended before the declared payload was read."""

    def __init__(self, needed: int, available: int, partial: Optional[Segment] = None):
        super().__init__(f"Need {needed} more bits, only {available} left")
        self.needed = needed
        self.available = available
        self.partial = partial


class BitReader:
    """MSB-first reader over a codeword sequence."""

    def __init__(self, codewords: Sequence[int]):
        self.bits = [(cw >> (7 - i)) & 1 for cw in codewords for i in range(8)]
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.bits) - self.pos

    def read(self, n: int) -> int:
        if n > self.remaining:
            raise InsufficientDataError(n, self.remaining)
        val = sum(self.bits[self.pos+i] << (n-1-i) for i in range(n))
        self.pos += n
        return val

    def read_str(self, n: int) -> str:
        return format(self.read(n), f'0{n}b')


# Payload readers append (group value, decoded text) pairs so a short stream
# still leaves everything read so far in `out`.

def _read_numeric(reader: BitReader, length: int, out: List[Tuple[int, str]]) -> None:
    count = length
    while count >= 3:
        val = reader.read(10)
        if val > 999:
            raise ValueError(f"Numeric group {val} out of range")
        out.append((val, f"{val:03d}"))
        count -= 3
    if count == 2:
        val = reader.read(7)
        if val > 99:
            raise ValueError(f"Numeric group {val} out of range")
        out.append((val, f"{val:02d}"))
    elif count == 1:
        val = reader.read(4)
        if val > 9:
            raise ValueError(f"Numeric group {val} out of range")
        out.append((val, str(val)))


def _read_alphanumeric(reader: BitReader, length: int, out: List[Tuple[int, str]]) -> None:
    for _ in range(length // 2):
        val = reader.read(11)
        if val >= 45 * 45:
            raise ValueError(f"Alphanumeric group {val} out of range")
        out.append((val, ALNUM[val // 45] + ALNUM[val % 45]))
    if length % 2:
        val = reader.read(6)
        if val >= 45:
            raise ValueError(f"Alphanumeric group {val} out of range")
        out.append((val, ALNUM[val]))


def _read_byte(reader: BitReader, length: int, out: List[Tuple[int, str]]) -> None:
    for _ in range(length):
        val = reader.read(8)
        out.append((val, chr(val)))


PAYLOAD_READERS = {
    EncodingMode.NUMERIC: _read_numeric,
    EncodingMode.ALPHANUMERIC: _read_alphanumeric,
    EncodingMode.BYTE: _read_byte,
}


def decode_segment(codewords: Sequence[int], version: int) -> Segment:
    """Decode the first segment of the ordered data codewords.

    An unknown mode indicator yields an empty UNKNOWN segment. Raises
    InsufficientDataError (with the partial segment attached) if the stream
    is shorter than the character count requires.
    """
    reader = BitReader(codewords)
    mode = EncodingMode.from_indicator(reader.read_str(4))
    if mode is EncodingMode.UNKNOWN:
        return Segment(mode, 0, (), '')

    length = reader.read(mode.length_bits(version))
    out = []
    try:
        PAYLOAD_READERS[mode](reader, length, out)
    except InsufficientDataError as e:
        e.partial = Segment(mode, length, tuple(g for g, _ in out), ''.join(t for _, t in out))
        raise
    return Segment(mode, length, tuple(g for g, _ in out), ''.join(t for _, t in out))
