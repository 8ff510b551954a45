"""Terminal setup and teardown around an application run.

``terminal_session`` enters the alternate screen, switches to raw mode and
hides the cursor, undoing each step in reverse order on exit.  A failing
setup step raises ``SetupError``; failing teardown steps are logged so that
the remaining ones still run.
"""

from __future__ import annotations

import logging
import termios
from contextlib import contextmanager
from typing import Callable, Iterator

from ablet.terminal import Terminal

__all__ = ["SetupError", "terminal_session"]

logger = logging.getLogger(__name__)


class SetupError(Exception):
    """The terminal could not be prepared for drawing."""


def _cleanup(step: Callable[[], None], what: str) -> None:
    try:
        step()
    except (OSError, termios.error):
        logger.error("couldn't %s", what, exc_info=True)


@contextmanager
def terminal_session(
    terminal: Terminal,
    on_input: Callable[[str], None],
    on_resize: Callable[[], None],
) -> Iterator[Terminal]:
    try:
        terminal.enter_alternate_screen()
    except OSError as e:
        raise SetupError(f"error during terminal setup: {e}") from e
    try:
        try:
            terminal.start(on_input, on_resize)
        except (OSError, termios.error) as e:
            raise SetupError(f"error during terminal setup: {e}") from e
        try:
            try:
                terminal.hide_cursor()
            except OSError as e:
                raise SetupError(f"error during terminal setup: {e}") from e
            try:
                yield terminal
            finally:
                _cleanup(terminal.show_cursor, "show cursor")
        finally:
            _cleanup(terminal.stop, "restore terminal mode")
    finally:
        _cleanup(terminal.leave_alternate_screen, "leave alternate screen")
