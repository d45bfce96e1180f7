"""
Symbol frequency counting.
"""

import numpy as np
from typing import Dict


# Symbol -> occurrence count
FrequencyTable = Dict[int, int]

ALPHABET_SIZE = 256


def build_frequency_table(data: bytes) -> FrequencyTable:
    """
    Count occurrences of every byte value in data.

    Returns:
        Mapping of byte value to count, in ascending symbol order.
        Symbols that never occur are left out.
    """
    symbols = np.frombuffer(bytes(data), dtype=np.uint8)
    counts = np.bincount(symbols, minlength=ALPHABET_SIZE)
    present = np.nonzero(counts)[0]
    return {int(s): int(counts[s]) for s in present}


def histogram(data: bytes) -> np.ndarray:
    """Dense 256-bin histogram of data."""
    symbols = np.frombuffer(bytes(data), dtype=np.uint8)
    return np.bincount(symbols, minlength=ALPHABET_SIZE)


def table_to_histogram(freq_table: FrequencyTable) -> np.ndarray:
    """Dense 256-bin histogram from a frequency table."""
    counts = np.zeros(ALPHABET_SIZE, dtype=np.int64)
    for symbol, freq in freq_table.items():
        counts[symbol] = freq
    return counts


def total_symbols(freq_table: FrequencyTable) -> int:
    """Number of symbols the table describes (sum of all counts)."""
    return sum(freq_table.values())
