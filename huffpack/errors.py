"""
Error types raised by the codec.

Everything derives from ValueError so callers that already treat bad input
as a ValueError keep working.
"""


class HuffmanError(ValueError):
    """Base class for all codec errors."""


class TableTooLarge(HuffmanError):
    """Frequency table does not fit the frame's one-byte count or u32 fields."""


class EmptyInput(HuffmanError):
    """No symbols to build a tree from."""


class FrameError(HuffmanError):
    """Frame bytes are inconsistent with the frame layout."""


class TruncatedFrame(FrameError):
    """Fewer bytes available than the header declares."""


class MalformedBitstream(FrameError):
    """Payload bits do not decode cleanly against the frequency table."""
