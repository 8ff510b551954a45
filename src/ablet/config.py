"""Runtime configuration, overridable through ``ABLET_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from ablet.splittree import Orientation

__all__ = ["AbletConfig", "config_from_env"]

logger = logging.getLogger(__name__)

TOO_SMALL_MESSAGE = "The terminal window is too small to render the ui, please enlarge"


@dataclass
class AbletConfig:
    """Settings of an :class:`~ablet.ablet.Ablet` instance.

    ``write_log_path`` mirrors every flushed frame to a file, which is handy
    when debugging escape sequences.  ``log_file`` is where the example
    application sends its log records; the library itself never configures
    logging.
    """

    layout_orientation: Orientation = Orientation.VERTICAL
    vertical_border: str = "│"
    horizontal_border: str = "─"
    too_small_message: str = TOO_SMALL_MESSAGE
    write_log_path: str = ""
    log_file: str = ""


def config_from_env(environ: dict[str, str] | None = None) -> AbletConfig:
    """Build a config from the environment, keeping defaults for bad values."""
    env = os.environ if environ is None else environ
    config = AbletConfig()

    orientation = env.get("ABLET_ORIENTATION")
    if orientation:
        try:
            config.layout_orientation = Orientation(orientation.lower())
        except ValueError:
            logger.warning("ignoring unknown ABLET_ORIENTATION %r", orientation)

    config.write_log_path = env.get("ABLET_WRITE_LOG", "")
    config.log_file = env.get("ABLET_LOG_FILE", "")
    return config
