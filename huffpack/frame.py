"""
Frame format for Huffman-coded byte streams.

Bundles everything the decoder needs into one blob.
"""

import struct
from dataclasses import dataclass, field

from .errors import EmptyInput, FrameError, TableTooLarge, TruncatedFrame
from .frequency import FrequencyTable, total_symbols


# ============================================================================
# Frame Layout
# ============================================================================

"""
Frame:
  - Symbol count: 1 byte (uint8), number of distinct byte values N
  - Padding: 1 byte (uint8), filler bits in the last payload byte (0-7)
  - Table: N entries, ascending by symbol, each
      - Symbol: 1 byte (uint8)
      - Frequency: 4 bytes (uint32, little-endian)
  - Payload: packed codewords, everything up to the end of the frame

There is no payload length field, so a frame cannot be followed by other
data in the same buffer.
"""

HEADER_FORMAT = '<BB'
ENTRY_FORMAT = '<BI'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)   # 2
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)     # 5

MAX_SYMBOLS = 0xFF
MAX_FREQ = 0xFFFFFFFF


@dataclass
class EncodedFrame:
    """Frequency table, padding count and packed payload."""
    freq_table: FrequencyTable
    padding: int
    payload: bytes = field(repr=False)

    @property
    def n_symbols(self) -> int:
        """Length of the original input."""
        return total_symbols(self.freq_table)

    @property
    def bit_length(self) -> int:
        return len(self.payload) * 8 - self.padding

    @property
    def table_bytes(self) -> int:
        return HEADER_SIZE + ENTRY_SIZE * len(self.freq_table)

    @property
    def compressed_bytes(self) -> int:
        return self.table_bytes + len(self.payload)

    @property
    def compression_ratio(self) -> float:
        return self.n_symbols / self.compressed_bytes if self.compressed_bytes > 0 else float('inf')

    @property
    def bits_per_symbol(self) -> float:
        return self.bit_length / self.n_symbols if self.n_symbols > 0 else 0

    def to_bytes(self) -> bytes:
        return serialize_frame(self)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'EncodedFrame':
        return deserialize_frame(data)


def serialize_frame(frame: EncodedFrame) -> bytes:
    """
    Serialize a frame.

    Raises:
        TableTooLarge: more than 255 symbols, or a count above 2**32 - 1
        ValueError: padding outside 0-7
    """
    table = frame.freq_table
    if len(table) > MAX_SYMBOLS:
        raise TableTooLarge(
            f"{len(table)} distinct symbols do not fit the one-byte count (max {MAX_SYMBOLS})"
        )
    if not 0 <= frame.padding <= 7:
        raise ValueError(f"Padding must be 0-7, got {frame.padding}")

    parts = [struct.pack(HEADER_FORMAT, len(table), frame.padding)]
    for symbol in sorted(table):
        freq = table[symbol]
        if freq > MAX_FREQ:
            raise TableTooLarge(f"Frequency {freq} of symbol {symbol} does not fit in uint32")
        parts.append(struct.pack(ENTRY_FORMAT, symbol, freq))
    parts.append(bytes(frame.payload))

    return b''.join(parts)


def deserialize_frame(data: bytes) -> EncodedFrame:
    """
    Parse a frame.

    Raises:
        TruncatedFrame: data shorter than the header or declared table
        EmptyInput: the frame declares no symbols
        FrameError: duplicate symbol or zero frequency in the table
    """
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise TruncatedFrame(f"Frame too small: {len(data)} bytes, header needs {HEADER_SIZE}")

    n_entries, padding = struct.unpack_from(HEADER_FORMAT, data, 0)
    if n_entries == 0:
        raise EmptyInput("Frame declares an empty frequency table")

    payload_offset = HEADER_SIZE + n_entries * ENTRY_SIZE
    if len(data) < payload_offset:
        raise TruncatedFrame(
            f"Frame declares {n_entries} table entries ({payload_offset} bytes), "
            f"only {len(data)} bytes available"
        )

    freq_table: FrequencyTable = {}
    for symbol, freq in struct.iter_unpack(ENTRY_FORMAT, data[HEADER_SIZE:payload_offset]):
        if symbol in freq_table:
            raise FrameError(f"Duplicate symbol in frequency table: {symbol}")
        if freq == 0:
            raise FrameError(f"Zero frequency for symbol {symbol}")
        freq_table[symbol] = freq

    return EncodedFrame(
        freq_table=freq_table,
        padding=padding,
        payload=data[payload_offset:],
    )
