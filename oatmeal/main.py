#!/usr/bin/env python3
"""
10K Types of Oatmeal
=====================
Explore a dungeon one tile at a time in your terminal.

Usage:
    python run.py [width] [height]

Controls:
    ARROWS  - Move (or move the look cursor)
    L       - Toggle look mode
    Q/ESC   - Leave the dungeon
"""

import argparse
import logging
import os
import sys
from enum import Enum, auto
from typing import Callable, List, Optional, Sequence

from .levels import (
    Action, Level, WELCOME_LEVEL, execute, get_buffer, make_level
)
from .terminal import TerminalUI


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

# Smallest viewport that fits the welcome text
MIN_WIDTH = 27
MIN_HEIGHT = 3

LOG_ENV_VAR = 'OATMEAL_LOG'
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


# =============================================================================
# CONFIGURATION
# =============================================================================

def parse_dimension(value: Optional[str], default: int, minimum: int = 1) -> int:
    """
    Read a viewport dimension, falling back to `default` on anything odd.

    Missing or non-numeric values fall back, and so do values below
    `minimum`. `parse_viewport` passes MIN_WIDTH/MIN_HEIGHT, so a viewport
    too small for the welcome text quietly becomes the default size.
    """
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='oatmeal',
        description='Explore a dungeon in your terminal.',
        add_help=False,
    )
    parser.add_argument('width', nargs='?', default=None,
                        help=f'viewport width (default {DEFAULT_WIDTH})')
    parser.add_argument('height', nargs='?', default=None,
                        help=f'viewport height (default {DEFAULT_HEIGHT})')
    return parser


def parse_viewport(argv: Optional[Sequence[str]] = None) -> tuple:
    """Return (width, height) from the command line. Never fails."""
    args, _ = build_parser().parse_known_args(argv)
    width = parse_dimension(args.width, DEFAULT_WIDTH, MIN_WIDTH)
    height = parse_dimension(args.height, DEFAULT_HEIGHT, MIN_HEIGHT)
    return width, height


def configure_logging(path: Optional[str] = None):
    """
    Send package logs to a file, if one is configured.

    The screen belongs to the game, so without a path nothing is emitted.
    """
    package_logger = logging.getLogger('oatmeal')
    if not path:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


# =============================================================================
# GAME DRIVER
# =============================================================================

class RunResult(Enum):
    QUIT = auto()       # a level asked to quit
    EXHAUSTED = auto()  # a level pointed past the last one


class Game:
    """
    Runs levels in sequence against a terminal port.

    The port needs `render(buffer)` and `read_key()`.
    """

    def __init__(self, ui, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 level_factory: Callable[[int], Optional[Level]] = make_level):
        self.ui = ui
        self.width = width
        self.height = height
        self.level_factory = level_factory
        self.level: Optional[Level] = None
        self.level_history: List[int] = []

    def _enter(self, index: int) -> bool:
        level = self.level_factory(index)
        if level is None:
            logger.info('No level %d, ending run', index)
            self.level = None
            return False
        logger.debug('Entering level %d (%s)', index, type(level).__name__)
        self.level = level
        self.level_history.append(index)
        return True

    def step(self) -> Optional[RunResult]:
        """Render, read one key, apply it. Returns a result once the run ends."""
        self.ui.render(get_buffer(self.level, self.width, self.height))
        key = self.ui.read_key()
        outcome = execute(self.level, key)

        if outcome.action is Action.QUIT:
            logger.info('Quit from level %d', self.level.level_index)
            self.level = None
            return RunResult.QUIT
        if outcome.action is Action.NEXT:
            if not self._enter(outcome.index):
                return RunResult.EXHAUSTED
        elif outcome.action is Action.IGNORED:
            logger.debug('Ignored %s', key)
        return None

    def run(self, start_index: int = WELCOME_LEVEL) -> RunResult:
        logger.info('Session start, viewport %dx%d', self.width, self.height)
        if not self._enter(start_index):
            return RunResult.EXHAUSTED
        result = None
        while result is None:
            result = self.step()
        logger.info('Session end: %s', result.name)
        return result


# =============================================================================
# MAIN
# =============================================================================

def main(argv: Optional[Sequence[str]] = None):
    """Entry point. Sets up the terminal and runs the level sequence."""
    configure_logging(os.environ.get(LOG_ENV_VAR))
    width, height = parse_viewport(argv)

    try:
        with TerminalUI() as ui:
            Game(ui, width, height).run()
    except Exception as exc:
        logger.exception('Fatal error')
        print(f'oatmeal: {exc}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
