"""The orchestrator: a split tree of buffers plus a prompt line.

``Ablet`` owns the layout, the buffers and documents it created, and a
prompt buffer drawn in a strip reserved at the bottom of the screen (one
separator row and one prompt row).  Each call to :meth:`Ablet.render`
redraws the whole screen and flushes it in one write.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import TypeVar

from ablet.atext import TextLike
from ablet.buffer import Buffer
from ablet.config import AbletConfig, config_from_env
from ablet.document import Document
from ablet.events import Event, ResizeEvent
from ablet.geometry import Size, rect
from ablet.handlers import EventHandler
from ablet.keys import parse_event
from ablet.session import terminal_session
from ablet.splittree import BorderMap, Leaf, Proportion, Split, SplitTree
from ablet.style import Style
from ablet.terminal import ProcessTerminal, Terminal
from ablet.utils import truncate_to_width

__all__ = ["Ablet", "Prompt", "PROMPT_STRIP_HEIGHT"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

# separator row + prompt row
PROMPT_STRIP_HEIGHT = 2


@dataclass
class Prompt:
    buffer: Buffer


class Ablet:
    def __init__(
        self,
        terminal: Terminal | None = None,
        config: AbletConfig | None = None,
    ) -> None:
        self.config: AbletConfig = config if config is not None else config_from_env()
        self.terminal: Terminal = (
            terminal
            if terminal is not None
            else ProcessTerminal(write_log_path=self.config.write_log_path)
        )

        self.documents: list[Document] = []
        self.buffers: list[Buffer] = []
        self.prompt = Prompt(self.new_buffer())
        self._default_buffer = self.new_buffer()

        self._tree_lock = threading.Lock()
        # frames from different threads must not interleave on the terminal
        self._render_lock = threading.Lock()
        self._split_tree = SplitTree(
            Split([Proportion(1)], [Leaf(self._default_buffer)]),
            self.config.layout_orientation,
        )

        # None entries only wake the prompt loop for a redraw
        self._events: asyncio.Queue[Event | None] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None

    # ------------------------------------------------------------------
    # Buffers, documents and layout
    # ------------------------------------------------------------------

    @property
    def default_buffer(self) -> Buffer:
        return self._default_buffer

    @property
    def default_document(self) -> Document:
        return self._default_buffer.document

    @property
    def prompt_buffer(self) -> Buffer:
        return self.prompt.buffer

    def new_document(self, content: TextLike | None = None) -> Document:
        document = Document(content)
        self.documents.append(document)
        return document

    def new_buffer(self, document: Document | None = None) -> Buffer:
        """A buffer on *document*, or on a fresh document."""
        if document is None:
            document = self.new_document()
        buffer = Buffer(document)
        self.buffers.append(buffer)
        return buffer

    @property
    def split_tree(self) -> SplitTree:
        with self._tree_lock:
            return self._split_tree

    @split_tree.setter
    def split_tree(self, tree: SplitTree) -> None:
        with self._tree_lock:
            self._split_tree = tree

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> None:
        """Redraw the whole screen.

        Terminal I/O errors propagate; the frame is dropped and the next
        call starts from scratch.
        """
        with self._render_lock:
            self._render()

    def _render(self) -> None:
        surface = self.terminal
        cols, rows = surface.query_size()
        surface.clear()

        area = Size(cols, max(rows - PROMPT_STRIP_HEIGHT, 0))
        split_map = self.split_tree.compute_rects(area)
        if split_map is None:
            logger.debug("layout doesn't fit into %dx%d", cols, rows)
            surface.move_cursor(0, 0)
            surface.print_styled(
                truncate_to_width(self.config.too_small_message, cols), Style()
            )
            surface.flush()
            return

        for pane, buffer in sorted(split_map.rects.items(), key=lambda item: item[0]):
            buffer.render_at(pane, surface)
        self._draw_borders(split_map.border_map)

        surface.move_cursor(rows - 2, 0)
        surface.print_styled(self.config.horizontal_border * cols, Style())
        self.prompt.buffer.render_at(rect(rows - 1, 0, cols, 1), surface)

        surface.flush()

    def _draw_borders(self, border_map: BorderMap) -> None:
        surface = self.terminal
        for row, cells in enumerate(border_map.rows()):
            for col, info in enumerate(cells):
                if info.in_vertical_border:
                    glyph = self.config.vertical_border
                elif info.in_horizontal_border:
                    glyph = self.config.horizontal_border
                else:
                    continue
                surface.move_cursor(row, col)
                surface.print_styled(glyph, Style())

    def _render_frame(self) -> None:
        try:
            self.render()
        except OSError:
            logger.exception("render failed, retrying on the next frame")

    def request_render(self) -> None:
        """Ask for a redraw; safe to call from any thread.

        While a prompt is running this wakes its loop, otherwise the screen
        is redrawn right away.
        """
        loop = self._loop
        if loop is not None:
            loop.call_soon_threadsafe(self._events.put_nowait, None)
        else:
            self._render_frame()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def session(self) -> AbstractContextManager[Terminal]:
        """Set the terminal up for drawing, wired to this instance's input."""
        return terminal_session(self.terminal, self.feed_input, self.feed_resize)

    def feed_input(self, data: str) -> None:
        """Terminal input callback: queue the event *data* describes."""
        event = parse_event(data)
        if event is not None:
            self._events.put_nowait(event)

    def feed_resize(self) -> None:
        self._events.put_nowait(ResizeEvent())

    async def next_event(self) -> Event:
        while True:
            event = await self._events.get()
            if event is not None:
                return event

    async def edit_prompt(self, handler: EventHandler[T]) -> T:
        """Let *handler* edit the prompt until it returns a value."""
        buffer = self.prompt.buffer
        buffer.set_cursor_visible(True)
        self._loop = asyncio.get_running_loop()
        try:
            while True:
                self._render_frame()
                event = await self._events.get()
                if event is None:
                    continue
                result = handler.handle(event, buffer)
                if result is not None:
                    return result
        finally:
            self._loop = None
            buffer.set_cursor_visible(False)
