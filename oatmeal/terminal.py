"""
Terminal Port
==============
Key normalization and the blessed-backed terminal the game loop talks to.
"""

import contextlib
import logging
import sys
from typing import Optional, TextIO

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")

from .engine import ViewportBuffer, compose_frame
from .keys import DOWN, ESC, LEFT, RIGHT, UP, Key


logger = logging.getLogger(__name__)

ESCAPE_CHAR = '\x1b'


class TerminalError(RuntimeError):
    """The terminal cannot be driven (not a tty, no capabilities)."""


_NAMED_KEYS = {
    'KEY_ESCAPE': ESC,
    'KEY_LEFT': LEFT,
    'KEY_RIGHT': RIGHT,
    'KEY_UP': UP,
    'KEY_DOWN': DOWN,
}


def normalize_key(keystroke) -> Optional[Key]:
    """
    Map a blessed Keystroke to a Key.

    Returns None for anything the game does not understand: timeouts,
    function keys, multi-byte sequences.
    """
    if keystroke is None:
        return None

    named = _NAMED_KEYS.get(getattr(keystroke, 'name', None))
    if named is not None:
        return named

    text = str(keystroke)
    if text == ESCAPE_CHAR:
        return ESC
    if len(text) == 2 and text[0] == ESCAPE_CHAR and text[1].isprintable():
        return Key.alt(text[1])
    if len(text) != 1:
        return None

    code = ord(text)
    if code < 0x20:
        return Key.ctrl(chr(code + 0x60))
    if text.isprintable():
        return Key.of(text)
    return None


class TerminalUI:
    """
    Owns the terminal for the lifetime of a session.

    Use as a context manager: entering switches to the alternate screen,
    raw input and a hidden cursor; leaving restores all three, on error
    paths too. In raw mode Ctrl-C arrives as a key rather than SIGINT.
    """

    def __init__(self, term: Optional[Terminal] = None,
                 stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.term = term if term is not None else Terminal(stream=self.stream)
        self._stack: Optional[contextlib.ExitStack] = None

    def __enter__(self) -> 'TerminalUI':
        if not self.term.is_a_tty:
            raise TerminalError('stdout is not a terminal')
        stack = contextlib.ExitStack()
        try:
            stack.enter_context(self.term.fullscreen())
            stack.enter_context(self.term.raw())
            stack.enter_context(self.term.hidden_cursor())
            self._write(self.term.home + self.term.clear)
        except BaseException:
            stack.close()
            raise
        self._stack = stack
        logger.debug('Terminal acquired (%dx%d)', self.term.width, self.term.height)
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self._write(self.term.normal)
        finally:
            if self._stack is not None:
                self._stack.close()
                self._stack = None
        logger.debug('Terminal released')
        return False

    def _write(self, text: str):
        print(text, end='', file=self.stream, flush=True)

    def read_key(self) -> Key:
        """Block until a recognized key arrives."""
        while True:
            key = normalize_key(self.term.inkey())
            if key is not None:
                return key

    def render(self, buffer: ViewportBuffer):
        self._write(compose_frame(self.term, buffer))
