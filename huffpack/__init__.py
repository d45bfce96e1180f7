"""
huffpack: Huffman Coding for Byte Streams

A static (two-pass) Huffman coder that packs a byte stream into a
self-describing frame: frequency table, padding count and payload.
"""

from .codec import encode, decode, encode_frame, decode_frame, verify_roundtrip
from .errors import (
    HuffmanError, TableTooLarge, EmptyInput,
    FrameError, TruncatedFrame, MalformedBitstream,
)

__version__ = "0.1.0"
