"""
Screen placement for the clock and its title.
"""

from dataclasses import dataclass

from .glyphs import GlyphBlock


@dataclass(frozen=True)
class LayoutOrigin:
    """Top-left drawing coordinates of the clock and title blocks."""

    clock_x: int
    clock_y: int
    title_x: int
    title_y: int


def compute_origin(
    term_width: int,
    term_height: int,
    clock: GlyphBlock,
    title: GlyphBlock,
) -> LayoutOrigin:
    """
    Center the clock on screen and place the title above it.

    The title sits two title-heights above the clock's vertical center line.
    The result is computed once per session; later resizes do not move it.
    """
    mid_x = term_width // 2
    mid_y = term_height // 2
    return LayoutOrigin(
        clock_x=mid_x - clock.width() // 2,
        clock_y=mid_y - clock.height() // 2,
        title_x=mid_x - title.width() // 2,
        title_y=mid_y - 2 * title.height() - clock.height() // 2,
    )
