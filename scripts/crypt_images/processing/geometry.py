"""
Frame geometry for two-row sprite sheets.

Every sheet holds ``frame_count`` equally sized columns and two rows:

    - Top:    Normal
    - Bottom: Shadow
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .errors import InvalidInputError

SHEET_ROWS = 2


@dataclass(frozen=True)
class FrameRect:
    """Location of one frame within a sprite sheet."""
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Return the rect as a Pillow ``(left, upper, right, lower)`` box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class FrameIndex:
    """Row/column position of a frame."""
    row: int
    column: int
    frame_count: int

    @property
    def linear(self) -> int:
        return self.row * self.frame_count + self.column


@dataclass(frozen=True)
class FrameGeometry:
    """Per-frame size derived from sheet dimensions."""
    frame_width: int
    frame_height: int
    frame_count: int

    def rect(self, row: int, column: int) -> FrameRect:
        """
        Get the rectangle of the frame at (row, column).

        Raises:
            InvalidInputError: If the position is outside the grid
        """
        if not 0 <= row < SHEET_ROWS:
            raise InvalidInputError(f"row must be 0 or 1, got {row}")
        if not 0 <= column < self.frame_count:
            raise InvalidInputError(
                f"column must be in [0, {self.frame_count}), got {column}"
            )

        return FrameRect(
            x=column * self.frame_width,
            y=row * self.frame_height,
            width=self.frame_width,
            height=self.frame_height,
        )

    def rects(self) -> Iterator[Tuple[FrameIndex, FrameRect]]:
        """Yield every frame position and rectangle in row-major order."""
        for row in range(SHEET_ROWS):
            for column in range(self.frame_count):
                yield FrameIndex(row, column, self.frame_count), self.rect(row, column)


def calculate_frame_geometry(sheet_width: Optional[int], sheet_height: Optional[int],
                             frame_count: Optional[int]) -> FrameGeometry:
    """
    Calculate frame size for a sheet with ``frame_count`` columns and two rows.

    Remainders are truncated, so an odd sheet height drops its last pixel row.

    Args:
        sheet_width: Sheet width in pixels
        sheet_height: Sheet height in pixels
        frame_count: Number of frames per row

    Returns:
        FrameGeometry for the sheet

    Raises:
        InvalidInputError: If an input is missing, the frame count is below 1
            or the sheet is too small to hold a frame
    """
    if sheet_width is None or sheet_height is None:
        raise InvalidInputError("sheet dimensions are required")
    if frame_count is None or frame_count < 1:
        raise InvalidInputError(f"frame_count must be at least 1, got {frame_count}")

    frame_width = sheet_width // frame_count
    frame_height = sheet_height // SHEET_ROWS

    if frame_width < 1 or frame_height < 1:
        raise InvalidInputError(
            f"sheet {sheet_width}x{sheet_height} is too small for {frame_count} frames"
        )

    return FrameGeometry(frame_width, frame_height, frame_count)
