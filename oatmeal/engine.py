"""
Rendering Engine
=================
Viewport buffer of colored cells and the terminal frame it paints to.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


SPACE = ' '


class Color(Enum):
    """Palette, valued by ANSI color number."""
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    WHITE = 7


@dataclass
class Cell:
    """A single cell in the viewport buffer."""
    char: str = SPACE
    fg: Color = Color.BLACK
    bg: Color = Color.BLACK


class ViewportBuffer:
    """
    Fixed-size grid of cells describing one frame.

    Rebuilt every frame; holds only what is visible, never the map.
    Writes outside the buffer raise IndexError.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f'buffer size must be positive, got {width}x{height}')
        self.width = width
        self.height = height
        self.cells: List[Cell] = [Cell() for _ in range(width * height)]

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f'cell ({row}, {col}) outside {self.width}x{self.height} buffer'
            )
        return row * self.width + col

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[self._index(row, col)]

    def put(self, row: int, col: int, char: str,
            fg: Color = Color.WHITE, bg: Color = Color.BLACK):
        """Put a character at an exact position."""
        self.cells[self._index(row, col)] = Cell(char, fg, bg)

    def put_string(self, row: int, col: int, text: str,
                   fg: Color = Color.WHITE, bg: Color = Color.BLACK):
        """Put a string starting at (row, col), left to right."""
        for i, char in enumerate(text):
            self.put(row, col + i, char, fg, bg)

    def print_centered(self, text: str, offset: int = 0):
        """
        Center text horizontally, `offset` rows from the vertical middle.

        No wrapping or clipping: text that does not fit raises.
        """
        col = self.width // 2 - len(text) // 2
        row = self.height // 2 + offset
        self.put_string(row, col, text, Color.WHITE, Color.BLACK)

    def _print_banner(self, row: int, text: str):
        self.put_string(row, 0, text + SPACE, Color.BLACK, Color.YELLOW)

    def print_lower_left(self, text: str):
        """Banner on the last row: text plus one trailing blank, black on yellow."""
        self._print_banner(self.height - 1, text)

    def print_upper_left(self, text: str):
        """Same banner on the first row."""
        self._print_banner(0, text)

    def text_row(self, row: int) -> str:
        """Symbols of one row, without colors."""
        start = self._index(row, 0)
        return ''.join(cell.char for cell in self.cells[start:start + self.width])

    def rows(self) -> List[List[Cell]]:
        return [
            self.cells[row * self.width:(row + 1) * self.width]
            for row in range(self.height)
        ]


def compose_frame(term, buffer: ViewportBuffer) -> str:
    """
    Build the output string that paints a buffer on a blessed Terminal.

    Scans left to right, top to bottom. Color sequences are only emitted
    when the foreground or background differs from the previously painted
    cell. Ends with a full attribute reset.
    """
    output_parts = [term.home]
    fg: Optional[Color] = None
    bg: Optional[Color] = None

    for y, row in enumerate(buffer.rows()):
        if y > 0:
            output_parts.append(term.move_xy(0, y))
        for cell in row:
            if cell.fg != fg:
                output_parts.append(term.color(cell.fg.value))
                fg = cell.fg
            if cell.bg != bg:
                output_parts.append(term.on_color(cell.bg.value))
                bg = cell.bg
            output_parts.append(cell.char if cell.char else SPACE)

    output_parts.append(term.normal)
    return ''.join(str(part) for part in output_parts)
