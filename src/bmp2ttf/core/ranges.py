"""Membership table for supported Unicode code points.

The table is a 64 KiB bitset covering Plane 0, built lazily from
SUPPORTED_BLOCKS on first query. Construction happens exactly once per table
even under concurrent first use; reads after that take no lock.
"""

import threading
from collections.abc import Iterable

import structlog

from bmp2ttf.domain.record import MAX_CODEPOINT
from bmp2ttf.domain.unicode_block import SUPPORTED_BLOCKS, UnicodeBlock

logger = structlog.get_logger("bmp2ttf.ranges")

_TABLE_SIZE = MAX_CODEPOINT + 1


class UnicodeRangeTable:
    """Answers "is this code point an allowed glyph target?".

    Example:
        table = UnicodeRangeTable()
        table.is_supported(0x41)    # True, Basic Latin
        table.is_supported(0x0530)  # False, gap after Cyrillic Supplement
    """

    def __init__(self, blocks: Iterable[UnicodeBlock] = SUPPORTED_BLOCKS) -> None:
        self._blocks = tuple(blocks)
        self._bits: bytearray | None = None
        self._lock = threading.Lock()
        self._build_count = 0

    @property
    def blocks(self) -> tuple[UnicodeBlock, ...]:
        """Blocks this table was built from."""
        return self._blocks

    @property
    def is_built(self) -> bool:
        """Whether the bitset has been constructed."""
        return self._bits is not None

    @property
    def build_count(self) -> int:
        """Number of times the bitset was constructed (0 or 1)."""
        return self._build_count

    def build(self) -> None:
        """Construct the bitset now instead of on first query."""
        self._ensure_built()

    def is_supported(self, codepoint: int) -> bool:
        """Check whether a code point lies in one of the supported blocks.

        Args:
            codepoint: Any integer

        Returns:
            True if supported; False for unsupported or out-of-range values
        """
        if not 0 <= codepoint <= MAX_CODEPOINT:
            return False
        return bool(self._ensure_built()[codepoint])

    def block_of(self, codepoint: int) -> UnicodeBlock | None:
        """Return the supported block containing ``codepoint``, if any."""
        if not self.is_supported(codepoint):
            return None
        for block in self._blocks:
            if codepoint in block:
                return block
        return None

    def _ensure_built(self) -> bytearray:
        bits = self._bits
        if bits is not None:
            return bits

        with self._lock:
            if self._bits is None:
                bits = bytearray(_TABLE_SIZE)
                for block in self._blocks:
                    low = max(block.low, 0)
                    high = min(block.high, MAX_CODEPOINT)
                    if low > high:
                        continue
                    bits[low : high + 1] = b"\x01" * (high - low + 1)
                self._build_count += 1
                self._bits = bits
                logger.debug(
                    "Unicode range table built",
                    blocks=len(self._blocks),
                    supported=sum(bits),
                )
            return self._bits


_default_table: UnicodeRangeTable | None = None
_default_lock = threading.Lock()


def default_table() -> UnicodeRangeTable:
    """Return the process-wide table for callers that do not own one."""
    global _default_table
    if _default_table is None:
        with _default_lock:
            if _default_table is None:
                _default_table = UnicodeRangeTable()
    return _default_table
