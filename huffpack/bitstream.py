"""
Bit packing against a codebook, and tree-walk decoding.

Bits are packed most-significant-bit first. The final byte is filled with
zero bits; `padding` records how many (0-7, 0 meaning byte aligned).
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence

from .errors import MalformedBitstream
from .traversal import Codebook
from .tree import CodeTree, Leaf, Root, children


@dataclass
class PackedBits:
    """Packed payload and its bit accounting."""
    payload: bytes
    padding: int
    bit_length: int

    @property
    def n_bytes(self) -> int:
        return len(self.payload)


def padding_for(bit_length: int) -> int:
    """Filler bits needed to complete the last byte (0-7)."""
    return (8 - bit_length % 8) % 8


# ============================================================================
# Packer
# ============================================================================

def concat_codewords(data: bytes, codebook: Codebook) -> np.ndarray:
    """Concatenate the codeword of every input byte, in input order."""
    bits = []
    try:
        for byte in data:
            bits.extend(codebook[byte])
    except KeyError as e:
        raise ValueError(f"No codeword for symbol {e.args[0]}") from e
    return np.array(bits, dtype=np.bool_)


def pack_bits(data: bytes, codebook: Codebook) -> PackedBits:
    """
    Encode data into a packed bitstream.

    Args:
        data: Bytes to encode; every byte must have a codeword
        codebook: Symbol -> codeword

    Returns:
        PackedBits with payload, padding (0-7) and exact bit length
    """
    bits = concat_codewords(data, codebook)
    bit_length = len(bits)
    payload = np.packbits(bits).tobytes()

    return PackedBits(
        payload=payload,
        padding=padding_for(bit_length),
        bit_length=bit_length,
    )


# ============================================================================
# Unpacker
# ============================================================================

def unpack_bits(payload: bytes, padding: int) -> np.ndarray:
    """
    Unpack payload bytes and drop the trailing filler bits.

    Raises:
        MalformedBitstream: if padding is out of range for this payload
    """
    if not 0 <= padding <= 7:
        raise MalformedBitstream(f"Padding must be 0-7, got {padding}")
    if not payload and padding:
        raise MalformedBitstream(f"Padding {padding} declared for an empty payload")

    raw = np.frombuffer(bytes(payload), dtype=np.uint8)
    bits = np.unpackbits(raw).astype(np.bool_)
    return bits[:len(bits) - padding]


def decode_bits(bits: Sequence[bool], tree: Root) -> bytes:
    """
    Decode a bit sequence by walking the tree.

    True descends left, False right. Reaching a leaf emits its value and
    restarts at the root.

    Raises:
        MalformedBitstream: on a missing branch, or if the bits end
        anywhere other than on a leaf boundary
    """
    output = bytearray()
    node: CodeTree = tree

    for i, bit in enumerate(bits):
        left, right = children(node)
        node = left if bit else right
        if node is None:
            raise MalformedBitstream(f"Bit {i} leads to a missing branch")
        if isinstance(node, Leaf):
            output.append(node.value)
            node = tree

    if node is not tree:
        raise MalformedBitstream("Bitstream ends in the middle of a codeword")

    return bytes(output)


def unpack_and_decode(payload: bytes, padding: int, tree: Root) -> bytes:
    """Unpack payload bits and decode them against tree."""
    return decode_bits(unpack_bits(payload, padding), tree)
