"""ablet: split a terminal into panes and render styled documents into them."""

# Orchestrator
from ablet.ablet import Ablet, Prompt

# Styled text and documents
from ablet.atext import AText, StyledRange, styled
from ablet.buffer import Buffer, BufferPosition, Selection, View
from ablet.builder import split, split_tree

# Configuration
from ablet.config import AbletConfig, config_from_env
from ablet.document import Document

# Input
from ablet.events import KeyEvent, PasteEvent, ResizeEvent

# Geometry
from ablet.geometry import Overlap, Position, Range, Rect, Size, rect
from ablet.handlers import EventHandler, LineResult, SimpleLineHandler
from ablet.keys import Key, parse_event, parse_key

# Terminal
from ablet.session import SetupError, terminal_session

# Layout
from ablet.splittree import (
    Branch,
    Fixed,
    Leaf,
    Orientation,
    Proportion,
    Split,
    SplitMap,
    SplitTree,
)
from ablet.style import Attribute, Color, Rgb, Style
from ablet.terminal import ProcessTerminal, Surface, Terminal

__all__ = [
    # Orchestrator
    "Ablet",
    "Prompt",
    # Styled text
    "AText",
    "StyledRange",
    "styled",
    "Attribute",
    "Color",
    "Rgb",
    "Style",
    # Documents and buffers
    "Document",
    "Buffer",
    "BufferPosition",
    "Selection",
    "View",
    # Geometry
    "Overlap",
    "Position",
    "Range",
    "Rect",
    "Size",
    "rect",
    # Layout
    "Branch",
    "Fixed",
    "Leaf",
    "Orientation",
    "Proportion",
    "Split",
    "SplitMap",
    "SplitTree",
    "split",
    "split_tree",
    # Input
    "EventHandler",
    "Key",
    "KeyEvent",
    "LineResult",
    "PasteEvent",
    "ResizeEvent",
    "SimpleLineHandler",
    "parse_event",
    "parse_key",
    # Terminal
    "ProcessTerminal",
    "SetupError",
    "Surface",
    "Terminal",
    "terminal_session",
    # Configuration
    "AbletConfig",
    "config_from_env",
]
