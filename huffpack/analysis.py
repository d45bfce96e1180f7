"""
Codebook statistics.

Compares the average Huffman code length against the Shannon entropy of the
source. For any Huffman code:  entropy <= average length < entropy + 1.
"""

import numpy as np

from .frame import HEADER_SIZE, ENTRY_SIZE
from .frequency import FrequencyTable, build_frequency_table, total_symbols
from .traversal import Codebook, build_codebook
from .tree import build_huffman_tree


def compute_entropy(freq_table: FrequencyTable) -> float:
    """
    Compute Shannon entropy of the source in bits per symbol.

    For a single-symbol source, entropy = 0.
    """
    counts = np.array(list(freq_table.values()), dtype=np.float64)
    if counts.size == 0:
        return 0.0
    probs = counts / counts.sum()
    probs = probs[probs > 0]  # Avoid log(0)

    return float(-np.sum(probs * np.log2(probs)))


def average_code_length(freq_table: FrequencyTable, codebook: Codebook) -> float:
    """Frequency-weighted mean codeword length in bits per symbol."""
    total = total_symbols(freq_table)
    if total == 0:
        return 0.0
    weighted = sum(freq * len(codebook[symbol]) for symbol, freq in freq_table.items())
    return weighted / total


def analyze_codebook(data: bytes) -> dict:
    """
    Analyze how well a Huffman code fits data.

    Returns:
        Dictionary with entropy, average code length, efficiency, the
        expected frame size and per-symbol code lengths.
    """
    freq_table = build_frequency_table(data)
    codebook = build_codebook(build_huffman_tree(freq_table))

    entropy = compute_entropy(freq_table)
    avg_len = average_code_length(freq_table, codebook)
    payload_bits = sum(freq * len(codebook[s]) for s, freq in freq_table.items())
    frame_bytes = HEADER_SIZE + ENTRY_SIZE * len(freq_table) + (payload_bits + 7) // 8

    return {
        'n_symbols': len(data),
        'n_distinct': len(freq_table),
        'entropy': entropy,
        'average_code_length': avg_len,
        'efficiency': entropy / avg_len if avg_len > 0 else 1.0,
        'payload_bits': payload_bits,
        'frame_bytes': frame_bytes,
        'compression_ratio': len(data) / frame_bytes if frame_bytes > 0 else float('inf'),
        'code_lengths': {s: len(p) for s, p in sorted(codebook.items())},
    }
