"""
Huffman tree construction.

The tree is a closed union of three node shapes:

  Leaf      terminal node carrying a byte value and its count
  Internal  merge of two subtrees, freq = sum of the subtree's leaves
  Root      single entry point; never merged, never compared as a symbol

Nodes are immutable and own their children. There are no parent links:
every walk over the tree is top-down from the Root.
"""

import bisect
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .errors import EmptyInput
from .frequency import FrequencyTable


# Root reports an unbounded frequency so it can never be picked for a merge
ROOT_FREQ = float('inf')

# Value reported by non-leaf nodes when breaking frequency ties
SENTINEL_VALUE = 0xFF


# ============================================================================
# Node Types
# ============================================================================

@dataclass(frozen=True)
class Leaf:
    value: int
    freq: int


@dataclass(frozen=True)
class Internal:
    freq: int
    left: 'CodeTree'
    right: 'CodeTree'


@dataclass(frozen=True)
class Root:
    """
    Entry point of a tree.

    `right` is None only for a single-symbol table: the lone leaf hangs off
    the left branch and gets the one-bit code [True].
    """
    left: 'CodeTree'
    right: Optional['CodeTree']


CodeTree = Union[Leaf, Internal, Root]


def node_freq(node: CodeTree):
    if isinstance(node, Leaf):
        return node.freq
    if isinstance(node, Internal):
        return node.freq
    if isinstance(node, Root):
        return ROOT_FREQ
    raise TypeError(f"Not a tree node: {node!r}")


def node_value(node: CodeTree) -> int:
    if isinstance(node, Leaf):
        return node.value
    if isinstance(node, (Internal, Root)):
        return SENTINEL_VALUE
    raise TypeError(f"Not a tree node: {node!r}")


def order_key(node: CodeTree) -> Tuple:
    """
    Total order used while building the tree.

    Frequency ascending; equal frequencies are ordered by value descending.
    Encoder and decoder must agree on this exactly or they derive different
    trees from the same table.
    """
    return (node_freq(node), -node_value(node))


def children(node: CodeTree) -> Tuple[Optional[CodeTree], Optional[CodeTree]]:
    """(left, right) of a branching node, (None, None) for a leaf."""
    if isinstance(node, Leaf):
        return None, None
    return node.left, node.right


# ============================================================================
# Builder
# ============================================================================

def build_huffman_tree(freq_table: FrequencyTable) -> Root:
    """
    Build a Huffman tree by greedy merging of the two lowest-ordered nodes.

    The result depends only on the (value, freq) pairs in the table, not on
    the table's iteration order.

    Args:
        freq_table: Mapping of byte value to a positive count

    Returns:
        Root of the tree

    Raises:
        EmptyInput: if the table is empty
    """
    if not freq_table:
        raise EmptyInput("Cannot build a Huffman tree from an empty frequency table")

    nodes: List[CodeTree] = []
    for value, freq in freq_table.items():
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Symbol out of byte range: {value}")
        if freq <= 0:
            raise ValueError(f"Frequency of symbol {value} must be positive, got {freq}")
        nodes.append(Leaf(value=value, freq=freq))
    nodes.sort(key=order_key)

    if len(nodes) == 1:
        return Root(left=nodes[0], right=None)

    while len(nodes) > 2:
        left = nodes.pop(0)
        right = nodes.pop(0)

        merged = Internal(
            freq=left.freq + right.freq,
            left=left,
            right=right,
        )
        bisect.insort(nodes, merged, key=order_key)

    return Root(left=nodes[0], right=nodes[1])


def leaf_count(tree: CodeTree) -> int:
    """Number of leaves under tree (iterative)."""
    count = 0
    stack = [tree]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        if isinstance(node, Leaf):
            count += 1
        else:
            stack.extend(children(node))
    return count


def tree_depth(tree: CodeTree) -> int:
    """Length of the longest root-to-leaf path (iterative)."""
    deepest = 0
    stack = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        if node is None:
            continue
        if isinstance(node, Leaf):
            deepest = max(deepest, depth)
        else:
            left, right = children(node)
            stack.append((left, depth + 1))
            stack.append((right, depth + 1))
    return deepest
