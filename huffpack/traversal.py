"""
Codebook generation by iterative tree traversal.

Huffman trees built from skewed data can be as deep as the alphabet, so the
walk keeps its own stack of cursors instead of recursing.

Branch convention (shared with the decoder in bitstream.py):
  left  -> True
  right -> False
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .tree import CodeTree, Leaf, children


# A codeword: root-to-leaf branch choices
Path = Tuple[bool, ...]

# Symbol -> codeword
Codebook = Dict[int, Path]

LEFT = True
RIGHT = False


@dataclass
class TreeCursor:
    """Position in the walk: a node, the path to it, and how far it got."""
    node: CodeTree
    path: Path = ()
    left_visited: bool = False
    finished: bool = False

    def visit(self) -> Optional[Union[Tuple[Path, int], 'TreeCursor']]:
        """
        Advance the cursor by one step.

        Returns:
            (path, value) when sitting on a leaf for the first time,
            a new cursor for the next child of a branching node,
            None once exhausted.
        """
        if self.finished:
            return None

        if isinstance(self.node, Leaf):
            self.finished = True
            return self.path, self.node.value

        left, right = children(self.node)
        if not self.left_visited:
            self.left_visited = True
            if left is not None:
                return TreeCursor(left, self.path + (LEFT,))

        self.finished = True
        if right is None:
            return None
        return TreeCursor(right, self.path + (RIGHT,))


class TreeIterator:
    """Yields (path, value) for every leaf, left subtree before right."""

    def __init__(self, tree: CodeTree):
        self.cursors: List[TreeCursor] = [TreeCursor(tree)]

    def __iter__(self) -> Iterator[Tuple[Path, int]]:
        return self

    def __next__(self) -> Tuple[Path, int]:
        while self.cursors:
            result = self.cursors[-1].visit()
            if result is None:
                self.cursors.pop()
            elif isinstance(result, TreeCursor):
                self.cursors.append(result)
            else:
                return result
        raise StopIteration


def build_codebook(tree: CodeTree) -> Codebook:
    """Map every symbol in the tree to its codeword."""
    codebook: Codebook = {}
    for path, value in TreeIterator(tree):
        if value in codebook:
            raise ValueError(f"Symbol {value} appears more than once in the tree")
        codebook[value] = path
    return codebook


def build_reverse_codebook(tree: CodeTree) -> Dict[Path, int]:
    """Map every codeword in the tree back to its symbol."""
    return {path: value for value, path in build_codebook(tree).items()}


def path_to_str(path: Path) -> str:
    return ''.join('1' if bit else '0' for bit in path)


def is_prefix_free(codebook: Codebook) -> bool:
    """True if no codeword is a prefix of another."""
    # After sorting, a prefix always sits directly before some word it prefixes
    words = sorted(path_to_str(p) for p in codebook.values())
    for a, b in zip(words, words[1:]):
        if b.startswith(a):
            return False
    return True


def format_codebook(codebook: Codebook) -> str:
    """
    Render a codebook as text, one "<bits>: <symbol>" line per entry.

    Printable ASCII symbols are shown as characters, others as hex.
    """
    lines = []
    for value, path in sorted(codebook.items(), key=lambda kv: (len(kv[1]), path_to_str(kv[1]), kv[0])):
        char = chr(value)
        label = repr(char) if char.isprintable() and value < 0x80 else f"0x{value:02x}"
        lines.append(f"{path_to_str(path)}: {label}")
    return '\n'.join(lines)
