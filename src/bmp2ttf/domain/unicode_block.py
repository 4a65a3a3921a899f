"""Unicode blocks accepted as glyph targets.

Only Plane 0 is supported. The list is fixed; there is deliberately no way to
extend it at runtime.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UnicodeBlock:
    """An inclusive range of code points belonging to one Unicode block.

    Attributes:
        name: Block name as published by Unicode
        low: First code point in the block
        high: Last code point in the block (inclusive)
    """

    name: str
    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"Invalid block {self.name}: {self.low:#06x} > {self.high:#06x}")

    def __contains__(self, codepoint: object) -> bool:
        return isinstance(codepoint, int) and self.low <= codepoint <= self.high

    def __len__(self) -> int:
        return self.high - self.low + 1

    def __str__(self) -> str:
        return f"U+{self.low:04X}..U+{self.high:04X} {self.name}"


SUPPORTED_BLOCKS: tuple[UnicodeBlock, ...] = (
    UnicodeBlock("Basic Latin", 0x0020, 0x007F),
    UnicodeBlock("Latin-1 Supplement", 0x00A0, 0x00FF),
    UnicodeBlock("Latin Extended-A", 0x0100, 0x017F),
    UnicodeBlock("Latin Extended-B", 0x0180, 0x024F),
    UnicodeBlock("IPA Extensions", 0x0250, 0x02AF),
    UnicodeBlock("Spacing Modifier Letters", 0x02B0, 0x02FF),
    UnicodeBlock("Combining Diacritical Marks", 0x0300, 0x036F),
    UnicodeBlock("Greek and Coptic", 0x0370, 0x03FF),
    UnicodeBlock("Cyrillic", 0x0400, 0x04FF),
    UnicodeBlock("Cyrillic Supplement", 0x0500, 0x052F),
    UnicodeBlock("General Punctuation", 0x2000, 0x206F),
    UnicodeBlock("Superscripts and Subscripts", 0x2070, 0x209F),
    UnicodeBlock("Currency Symbols", 0x20A0, 0x20CF),
    UnicodeBlock("Letterlike Symbols", 0x2100, 0x214F),
    UnicodeBlock("Number Forms", 0x2150, 0x218F),
    UnicodeBlock("Arrows", 0x2190, 0x21FF),
    UnicodeBlock("Mathematical Operators", 0x2200, 0x22FF),
    UnicodeBlock("Miscellaneous Technical", 0x2300, 0x23FF),
    UnicodeBlock("Enclosed Alphanumerics", 0x2460, 0x24FF),
    UnicodeBlock("Box Drawing", 0x2500, 0x257F),
    UnicodeBlock("Block Elements", 0x2580, 0x259F),
    UnicodeBlock("Geometric Shapes", 0x25A0, 0x25FF),
    UnicodeBlock("Miscellaneous Symbols", 0x2600, 0x26FF),
    UnicodeBlock("Dingbats", 0x2700, 0x27BF),
    UnicodeBlock("CJK Symbols and Punctuation", 0x3000, 0x303F),
    UnicodeBlock("Hiragana", 0x3040, 0x309F),
    UnicodeBlock("Katakana", 0x30A0, 0x30FF),
    UnicodeBlock("Enclosed CJK Letters and Months", 0x3200, 0x32FF),
    UnicodeBlock("CJK Compatibility", 0x3300, 0x33FF),
    UnicodeBlock("CJK Unified Ideographs Extension A", 0x3400, 0x4DBF),
    UnicodeBlock("CJK Unified Ideographs", 0x4E00, 0x9FEA),
    UnicodeBlock("CJK Compatibility Ideographs", 0xF900, 0xFAFF),
    UnicodeBlock("Halfwidth and Fullwidth Forms", 0xFF00, 0xFFEF),
)
