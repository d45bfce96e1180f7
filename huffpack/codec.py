"""
High-level encode/decode API.

  encode(data)  -> frame bytes
  decode(frame) -> original bytes
"""

import numpy as np
from dataclasses import dataclass

from .bitstream import pack_bits, unpack_and_decode
from .errors import EmptyInput, MalformedBitstream
from .frame import EncodedFrame, deserialize_frame, serialize_frame
from .frequency import build_frequency_table, histogram, table_to_histogram
from .traversal import build_codebook
from .tree import build_huffman_tree


@dataclass
class CodecConfig:
    """Configuration for HuffmanEncoder / HuffmanDecoder."""
    verify: bool = False   # Decode every frame right after encoding it


def encode_frame(data: bytes) -> EncodedFrame:
    """
    Huffman-code data into an in-memory frame.

    Raises:
        EmptyInput: if data is empty
    """
    if not data:
        raise EmptyInput("Cannot encode empty input")

    freq_table = build_frequency_table(data)
    tree = build_huffman_tree(freq_table)
    codebook = build_codebook(tree)
    packed = pack_bits(data, codebook)

    return EncodedFrame(
        freq_table=freq_table,
        padding=packed.padding,
        payload=packed.payload,
    )


def decode_frame(frame: EncodedFrame) -> bytes:
    """
    Decode an in-memory frame.

    The decoded bytes must reproduce the frame's frequency table exactly,
    which catches a corrupted padding count even when the bits happen to
    end on a codeword boundary.

    Raises:
        MalformedBitstream: if the payload does not decode to the table
    """
    tree = build_huffman_tree(frame.freq_table)
    decoded = unpack_and_decode(frame.payload, frame.padding, tree)

    if len(decoded) != frame.n_symbols:
        raise MalformedBitstream(
            f"Decoded {len(decoded)} symbols, frequency table describes {frame.n_symbols}"
        )
    if not np.array_equal(histogram(decoded), table_to_histogram(frame.freq_table)):
        raise MalformedBitstream("Decoded symbol counts do not match the frequency table")

    return decoded


def encode(data: bytes) -> bytes:
    """Encode bytes into a serialized frame."""
    return serialize_frame(encode_frame(data))


def decode(frame_bytes: bytes) -> bytes:
    """Decode a serialized frame back into the original bytes."""
    return decode_frame(deserialize_frame(frame_bytes))


def verify_roundtrip(data: bytes) -> bool:
    """Verify lossless roundtrip."""
    return decode(encode(data)) == bytes(data)


# ============================================================================
# Class API
# ============================================================================

class HuffmanEncoder:
    def __init__(self, config: CodecConfig = None):
        self.config = config or CodecConfig()

    def encode(self, data: bytes) -> bytes:
        frame_bytes = encode(data)
        if self.config.verify and decode(frame_bytes) != bytes(data):
            raise MalformedBitstream("Encoded frame does not decode back to the input")
        return frame_bytes


class HuffmanDecoder:
    def __init__(self, config: CodecConfig = None):
        self.config = config or CodecConfig()

    def decode(self, frame_bytes: bytes) -> bytes:
        return decode(frame_bytes)
