#!/usr/bin/env python3
"""
Huffman codec command line.

  python huffman_codec.py encode input.txt output.huf
  python huffman_codec.py decode output.huf restored.txt
  python huffman_codec.py inspect output.huf
  python huffman_codec.py demo
"""

import argparse
import base64
import sys
from pathlib import Path

from huffpack import encode, decode, HuffmanError
from huffpack.analysis import analyze_codebook, compute_entropy
from huffpack.codec import HuffmanEncoder, CodecConfig, decode_frame
from huffpack.frame import EncodedFrame
from huffpack.traversal import build_codebook, format_codebook
from huffpack.tree import build_huffman_tree


DEMO_DATA = b"A_DEAD_DAD_CEDED_A_BAD_BABE_A_BEADED_ABACA_BED"


def print_frame(frame: EncodedFrame, show_codebook: bool = True):
    """Print frame statistics, the codebook and the payload as base64."""
    codebook = build_codebook(build_huffman_tree(frame.freq_table))

    print(f"Symbols:          {frame.n_symbols:,} ({len(frame.freq_table)} distinct)")
    print(f"Padding:          {frame.padding} bits")
    print(f"Payload:          {len(frame.payload):,} bytes ({frame.bit_length:,} bits)")
    print(f"Frame:            {frame.compressed_bytes:,} bytes")
    print(f"Entropy:          {compute_entropy(frame.freq_table):.3f} bits/symbol")
    print(f"Bits per symbol:  {frame.bits_per_symbol:.3f}")
    print(f"Compression:      {frame.compression_ratio:.2f}x")

    if show_codebook:
        print(f"\nCodebook:")
        print(format_codebook(codebook))

    print(f"\nPayload (base64): {base64.b64encode(frame.payload).decode('ascii')}")


def cmd_encode(args):
    data = Path(args.input).read_bytes()
    encoder = HuffmanEncoder(CodecConfig(verify=args.verify))
    frame_bytes = encoder.encode(data)
    Path(args.output).write_bytes(frame_bytes)

    print(f"{args.input}: {len(data):,} -> {len(frame_bytes):,} bytes "
          f"({len(data) / len(frame_bytes):.2f}x)")


def cmd_decode(args):
    frame_bytes = Path(args.input).read_bytes()
    data = decode(frame_bytes)
    Path(args.output).write_bytes(data)

    print(f"{args.input}: {len(frame_bytes):,} -> {len(data):,} bytes")


def cmd_inspect(args):
    frame = EncodedFrame.from_bytes(Path(args.input).read_bytes())
    decode_frame(frame)
    print_frame(frame, show_codebook=not args.no_codebook)


def cmd_demo(args):
    print(f"{'='*60}")
    print(f" Huffman Demo")
    print(f"{'='*60}")
    print(f"Original: {DEMO_DATA.decode('ascii')} (len = {len(DEMO_DATA)})")

    frame_bytes = encode(DEMO_DATA)
    frame = EncodedFrame.from_bytes(frame_bytes)
    print()
    print_frame(frame)

    decoded = decode(frame_bytes)
    stats = analyze_codebook(DEMO_DATA)
    print(f"\nDecoded:  {decoded.decode('ascii')} (len = {len(decoded)})")
    print(f"Lossless:         {decoded == DEMO_DATA}")
    print(f"Efficiency:       {stats['efficiency']*100:.1f}% of Shannon limit")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Huffman byte-stream codec")
    subparsers = parser.add_subparsers(dest='command', help='Command')

    encode_parser = subparsers.add_parser('encode', help='Encode a file into a frame')
    encode_parser.add_argument('input', help='File to encode')
    encode_parser.add_argument('output', help='Frame output path')
    encode_parser.add_argument('--verify', action='store_true',
                               help='Decode the frame again before writing it')

    decode_parser = subparsers.add_parser('decode', help='Decode a frame')
    decode_parser.add_argument('input', help='Frame to decode')
    decode_parser.add_argument('output', help='Decoded output path')

    inspect_parser = subparsers.add_parser('inspect', help='Show frame statistics and codebook')
    inspect_parser.add_argument('input', help='Frame to inspect')
    inspect_parser.add_argument('--no-codebook', action='store_true',
                                help='Do not print the codebook')

    subparsers.add_parser('demo', help='Encode and decode a built-in sample')

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    commands = {
        'encode': cmd_encode,
        'decode': cmd_decode,
        'inspect': cmd_inspect,
        'demo': cmd_demo,
    }

    try:
        commands[args.command](args)
    except (HuffmanError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
