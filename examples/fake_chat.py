"""A fake chat: every line typed at the prompt is echoed into the log panes.

Run with ``python examples/fake_chat.py``; Ctrl+C quits.  Set
``ABLET_LOG_FILE`` to collect log records, ``ABLET_WRITE_LOG`` to capture the
raw frames written to the terminal.
"""

from __future__ import annotations

import asyncio
import logging

from ablet import AText, Ablet, Color, LineResult, SimpleLineHandler, Style, split_tree

logger = logging.getLogger("fake_chat")

NICK_STYLE = Style(fg=Color.GREEN).bold()


async def run() -> None:
    app = Ablet()
    if app.config.log_file:
        logging.basicConfig(
            filename=app.config.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    chat = app.default_buffer
    chat.add_line("Hello World")
    app.split_tree = split_tree(
        "vertical",
        [
            (2, [(1, chat), (1, chat)]),
            (1, chat),
        ],
    )

    handler = SimpleLineHandler()
    with app.session():
        while True:
            result = await app.edit_prompt(handler)
            if result is LineResult.ABORT:
                logger.info("aborted by user")
                return
            line = app.prompt_buffer.take_text()
            logger.debug("echoing %r", line.plain())
            chat.add_line(AText.from_multiple([("you: ", NICK_STYLE), line]))


if __name__ == "__main__":
    asyncio.run(run())
