"""
Block-digit glyphs and the glyph blocks built from them.

Each symbol is a 3×5 segment matrix (the tty-clock digit set); every lit
segment is drawn as two full-block characters and every glyph carries a
one-column gap on its right, so all clock glyphs share one width and height.
"""

from dataclasses import dataclass, field

from rich.cells import cell_len

FILLED = "██"
EMPTY = "  "
GAP = " "

MATRIX_COLUMNS = 3
MATRIX_ROWS = 5

# fmt: off
SEGMENTS: dict[str, tuple[int, ...]] = {
    "0": (1, 1, 1,  1, 0, 1,  1, 0, 1,  1, 0, 1,  1, 1, 1),
    "1": (0, 0, 1,  0, 0, 1,  0, 0, 1,  0, 0, 1,  0, 0, 1),
    "2": (1, 1, 1,  0, 0, 1,  1, 1, 1,  1, 0, 0,  1, 1, 1),
    "3": (1, 1, 1,  0, 0, 1,  1, 1, 1,  0, 0, 1,  1, 1, 1),
    "4": (1, 0, 1,  1, 0, 1,  1, 1, 1,  0, 0, 1,  0, 0, 1),
    "5": (1, 1, 1,  1, 0, 0,  1, 1, 1,  0, 0, 1,  1, 1, 1),
    "6": (1, 1, 1,  1, 0, 0,  1, 1, 1,  1, 0, 1,  1, 1, 1),
    "7": (1, 1, 1,  0, 0, 1,  0, 0, 1,  0, 0, 1,  0, 0, 1),
    "8": (1, 1, 1,  1, 0, 1,  1, 1, 1,  1, 0, 1,  1, 1, 1),
    "9": (1, 1, 1,  1, 0, 1,  1, 1, 1,  0, 0, 1,  1, 1, 1),
    ":": (0, 0, 0,  0, 1, 0,  0, 0, 0,  0, 1, 0,  0, 0, 0),
    "-": (0, 0, 0,  0, 0, 0,  1, 1, 1,  0, 0, 0,  0, 0, 0),
}
# fmt: on


@dataclass(frozen=True)
class Glyph:
    """A rectangular block of text rows drawn as one symbol."""

    rows: tuple[str, ...]

    @property
    def width(self) -> int:
        return max((cell_len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        return len(self.rows)


def _build_glyph(segments: tuple[int, ...]) -> Glyph:
    rows = []
    for r in range(MATRIX_ROWS):
        cells = segments[r * MATRIX_COLUMNS : (r + 1) * MATRIX_COLUMNS]
        rows.append("".join(FILLED if lit else EMPTY for lit in cells) + GAP)
    return Glyph(tuple(rows))


GLYPHS: dict[str, Glyph] = {ch: _build_glyph(seg) for ch, seg in SEGMENTS.items()}


@dataclass
class GlyphBlock:
    """Glyphs laid out left to right with no extra spacing."""

    glyphs: list[Glyph] = field(default_factory=list)

    def width(self) -> int:
        return sum(g.width for g in self.glyphs)

    def height(self) -> int:
        if not self.glyphs:
            return 0
        return max(g.height for g in self.glyphs)

    def cells(self, x: int, y: int):
        """Yield ``(x, y, ch)`` for every character when drawn at origin ``(x, y)``."""
        for glyph in self.glyphs:
            for dy, row in enumerate(glyph.rows):
                dx = 0
                for ch in row:
                    yield x + dx, y + dy, ch
                    dx += cell_len(ch)
            x += glyph.width


def render(text: str) -> GlyphBlock:
    """
    Build the clock glyph block for a formatted duration string.

    Raises:
        KeyError: if ``text`` contains a character with no glyph.
    """
    return GlyphBlock([GLYPHS[ch] for ch in text])


def title_block(title: str) -> GlyphBlock:
    """Build the single-row block for the title line."""
    return GlyphBlock([Glyph((title,))])
