#!/usr/bin/env python3
"""
Unit tests for bit packing and tree-walk decoding.
"""

import sys
from pathlib import Path
import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from huffpack.bitstream import (
    pack_bits, unpack_bits, decode_bits, unpack_and_decode, padding_for,
)
from huffpack.errors import MalformedBitstream
from huffpack.frequency import build_frequency_table
from huffpack.traversal import build_codebook
from huffpack.tree import build_huffman_tree


KNOWN_DATA = b"AAAAAAAABBBBCCD"


def _prepare(data: bytes):
    tree = build_huffman_tree(build_frequency_table(data))
    return tree, build_codebook(tree)


def test_padding_for():
    assert padding_for(0) == 0
    assert padding_for(1) == 7
    assert padding_for(8) == 0
    assert padding_for(16) == 0
    assert padding_for(25) == 7
    assert padding_for(31) == 1

    print("✓ Padding arithmetic")


def test_pack_known_vector():
    """
    A=0, B=10, C=110, D=111:
      00000000 10101010 11011011 1[0000000]
    """
    _, codebook = _prepare(KNOWN_DATA)
    packed = pack_bits(KNOWN_DATA, codebook)

    assert packed.bit_length == 25
    assert packed.padding == 7
    assert packed.payload == bytes([0x00, 0xAA, 0xDB, 0x80])
    assert packed.bit_length < len(KNOWN_DATA) * 8

    print("✓ Known vector packing")


def test_pack_byte_aligned():
    """8 one-bit codes fill exactly one byte with no padding."""
    data = b"ABABABAB"
    tree, codebook = _prepare(data)
    packed = pack_bits(data, codebook)

    # B sorts first on the tie and takes the left (1) branch
    assert packed.payload == bytes([0x55])
    assert packed.padding == 0
    assert packed.bit_length == 8

    assert unpack_and_decode(packed.payload, packed.padding, tree) == data

    print("✓ Byte-aligned packing")


def test_byte_aligned_multi_byte():
    """Exact multiples of 8 bits never drop or duplicate the last symbol."""
    for data in (b"AB" * 8, b"AAAAAAAABBBBCCDD" * 8, b"xyzw" * 4):
        tree, codebook = _prepare(data)
        packed = pack_bits(data, codebook)

        assert packed.bit_length % 8 == 0
        assert packed.padding == 0
        assert unpack_and_decode(packed.payload, packed.padding, tree) == data

    print("✓ Multi-byte aligned roundtrip")


def test_unpack_drops_padding():
    bits = unpack_bits(bytes([0xDB, 0x80]), 7)

    assert len(bits) == 9
    assert bits.tolist() == [True, True, False, True, True, False, True, True, True]

    print("✓ Unpack drops padding")


def test_unpack_rejects_bad_padding():
    with pytest.raises(MalformedBitstream):
        unpack_bits(bytes([0xFF]), 8)
    with pytest.raises(MalformedBitstream):
        unpack_bits(bytes([0xFF]), -1)
    with pytest.raises(MalformedBitstream):
        unpack_bits(b"", 3)

    assert len(unpack_bits(b"", 0)) == 0

    print("✓ Bad padding rejected")


def test_decode_ends_mid_codeword():
    tree, _ = _prepare(KNOWN_DATA)

    # "11" is a prefix of C and D but not a full codeword
    with pytest.raises(MalformedBitstream):
        decode_bits([True, True], tree)

    print("✓ Mid-codeword ending rejected")


def test_decode_missing_branch():
    """The single-symbol tree has no right branch."""
    tree, codebook = _prepare(b"AAAA")
    assert codebook == {ord('A'): (True,)}

    assert decode_bits([True, True], tree) == b"AA"
    with pytest.raises(MalformedBitstream):
        decode_bits([True, False], tree)

    print("✓ Missing branch rejected")


def test_single_symbol_packing():
    data = b"AAAA"
    tree, codebook = _prepare(data)
    packed = pack_bits(data, codebook)

    assert packed.payload == bytes([0xF0])
    assert packed.padding == 4
    assert unpack_and_decode(packed.payload, packed.padding, tree) == data

    print("✓ Single symbol packing")


def test_missing_codeword():
    _, codebook = _prepare(b"AB")
    with pytest.raises(ValueError):
        pack_bits(b"ABC", codebook)

    print("✓ Missing codeword rejected")


def test_random_roundtrip():
    rng = np.random.default_rng(7)

    for size in (1, 7, 8, 9, 1000):
        data = rng.integers(0, 200, size=size, dtype=np.uint8).tobytes()
        tree, codebook = _prepare(data)
        packed = pack_bits(data, codebook)

        assert packed.padding == padding_for(packed.bit_length)
        assert len(packed.payload) == (packed.bit_length + 7) // 8
        assert unpack_and_decode(packed.payload, packed.padding, tree) == data

    print("✓ Random roundtrip")


def run_all_tests():
    """Run all tests."""
    print("="*60)
    print(" Bitstream Tests")
    print("="*60)

    test_padding_for()
    test_pack_known_vector()
    test_pack_byte_aligned()
    test_byte_aligned_multi_byte()
    test_unpack_drops_padding()
    test_unpack_rejects_bad_padding()
    test_decode_ends_mid_codeword()
    test_decode_missing_branch()
    test_single_symbol_packing()
    test_missing_codeword()
    test_random_roundtrip()

    print("\n" + "="*60)
    print(" All tests passed!")
    print("="*60)


if __name__ == "__main__":
    run_all_tests()
