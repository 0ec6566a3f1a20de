"""
Keys
=====
Terminal-agnostic key presses shared by the levels and the terminal port.
"""

from dataclasses import dataclass
from enum import Enum, auto


class KeyKind(Enum):
    CHAR = auto()
    CTRL = auto()
    ALT = auto()
    ESC = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()


@dataclass(frozen=True)
class Key:
    """A terminal-agnostic key press. `char` is set for CHAR/CTRL/ALT."""
    kind: KeyKind
    char: str = ''

    @classmethod
    def of(cls, char: str) -> 'Key':
        return cls(KeyKind.CHAR, char)

    @classmethod
    def ctrl(cls, char: str) -> 'Key':
        return cls(KeyKind.CTRL, char)

    @classmethod
    def alt(cls, char: str) -> 'Key':
        return cls(KeyKind.ALT, char)

    def is_char(self, char: str) -> bool:
        return self.kind is KeyKind.CHAR and self.char == char


ESC = Key(KeyKind.ESC)
LEFT = Key(KeyKind.LEFT)
RIGHT = Key(KeyKind.RIGHT)
UP = Key(KeyKind.UP)
DOWN = Key(KeyKind.DOWN)
