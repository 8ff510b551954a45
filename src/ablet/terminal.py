"""Drawing surfaces and the process terminal.

``Surface`` is what buffers render onto; ``Terminal`` adds the input and
screen-mode control the orchestrator needs.  ``ProcessTerminal`` implements
both on stdin/stdout with ANSI escape sequences.

Drawing calls are queued and written to stdout in a single ``flush()`` so
that a frame reaches the terminal at once.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

from ablet.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START, StdinBuffer
from ablet.style import Style

__all__ = ["Surface", "Terminal", "ProcessTerminal"]

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_ALT_SCREEN_ENTER = "\x1b[?1049h"
_ALT_SCREEN_LEAVE = "\x1b[?1049l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_TO_FMT = "\x1b[{};{}H"


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class Surface(Protocol):
    """What the renderer needs from a character grid."""

    def clear(self) -> None: ...

    def move_cursor(self, row: int, col: int) -> None: ...

    def print_styled(self, text: str, style: Style) -> None: ...

    def query_size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``."""
        ...

    def flush(self) -> None: ...


class Terminal(Surface, Protocol):
    """A ``Surface`` that also owns input and screen modes."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def enter_alternate_screen(self) -> None: ...

    def leave_alternate_screen(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """``Terminal`` on the process's own stdin/stdout.

    Frames are queued by the ``Surface`` methods and written by
    :meth:`flush`.  Mode switches (alternate screen, cursor visibility,
    bracketed paste) bypass the queue.  Input is read by an asyncio reader,
    so :meth:`start` must run inside the event loop that consumes events.
    """

    def __init__(self, write_log_path: str = "") -> None:
        self._pending: list[str] = []
        self._write_log_path = write_log_path

        self._on_input: Callable[[str], None] | None = None
        self._on_resize: Callable[[], None] | None = None
        self._stdin_buffer: StdinBuffer | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._saved_mode: list | None = None
        self._prev_sigwinch: signal.Handlers | None = None

    # -- Surface ------------------------------------------------------------

    def clear(self) -> None:
        self._pending.append(_CLEAR_SCREEN)

    def move_cursor(self, row: int, col: int) -> None:
        # ANSI positions are 1-based
        self._pending.append(_MOVE_TO_FMT.format(row + 1, col + 1))

    def print_styled(self, text: str, style: Style) -> None:
        self._pending.append(style.apply(text))

    def query_size(self) -> tuple[int, int]:
        size = os.get_terminal_size(sys.stdout.fileno())
        return size.columns, size.lines

    def flush(self) -> None:
        """Write the queued frame in one go.

        The queue is emptied even when the write fails, so a failed frame is
        dropped rather than replayed.
        """
        frame = "".join(self._pending)
        self._pending.clear()
        if not frame:
            return
        self._raw_write(frame)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(frame)
            except OSError:
                logger.debug("couldn't append to %s", self._write_log_path)

    # -- screen modes -------------------------------------------------------

    def hide_cursor(self) -> None:
        self._raw_write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._raw_write(_SHOW_CURSOR)

    def enter_alternate_screen(self) -> None:
        self._raw_write(_ALT_SCREEN_ENTER)

    def leave_alternate_screen(self) -> None:
        self._raw_write(_ALT_SCREEN_LEAVE)

    # -- input --------------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        """Switch to raw mode and deliver input and resizes to the callbacks.

        *on_input* receives one complete key sequence per call; pastes arrive
        wrapped in bracketed paste markers.
        """
        self._on_input = on_input
        self._on_resize = on_resize

        fd = sys.stdin.fileno()
        self._saved_mode = termios.tcgetattr(fd)
        tty.setraw(fd)
        self._raw_write(_BRACKETED_PASTE_ENABLE)

        self._stdin_buffer = StdinBuffer(timeout=0.01)
        self._stdin_buffer.on_data(self._deliver)
        self._stdin_buffer.on_paste(
            lambda text: self._deliver(BRACKETED_PASTE_START + text + BRACKETED_PASTE_END)
        )

        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("no running event loop, terminal input is not read")
            self._loop = None
            self._prev_sigwinch = signal.signal(signal.SIGWINCH, self._handle_sigwinch)
        else:
            self._loop.add_reader(fd, self._read_stdin)
            self._loop.add_signal_handler(signal.SIGWINCH, self._handle_resize)

    def stop(self) -> None:
        """Undo :meth:`start`, in reverse order."""
        fd = sys.stdin.fileno()
        if self._loop is not None:
            self._loop.remove_signal_handler(signal.SIGWINCH)
            self._loop.remove_reader(fd)
            self._loop = None
        elif self._prev_sigwinch is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch)
            self._prev_sigwinch = None

        if self._stdin_buffer is not None:
            self._stdin_buffer.destroy()
            self._stdin_buffer = None

        self._raw_write(_BRACKETED_PASTE_DISABLE)
        if self._saved_mode is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None

        self._on_input = None
        self._on_resize = None

    def _read_stdin(self) -> None:
        try:
            raw = os.read(sys.stdin.fileno(), 4096)
        except OSError:
            return
        if raw and self._stdin_buffer is not None:
            self._stdin_buffer.process(raw.decode("utf-8", errors="replace"))

    def _deliver(self, data: str) -> None:
        if self._on_input is not None:
            self._on_input(data)

    def _handle_resize(self) -> None:
        if self._on_resize is not None:
            self._on_resize()

    def _handle_sigwinch(self, signum: int, frame: object) -> None:
        self._handle_resize()

    def _raw_write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()
