"""Keyboard input parsing for legacy (xterm-style) terminal sequences.

``parse_key`` turns one complete input sequence, as emitted by
:class:`~ablet.stdin_buffer.StdinBuffer`, into a key identifier such as
``"a"``, ``"ctrl+c"`` or ``"shift+up"``.  ``parse_event`` wraps that into an
:mod:`ablet.events` value and recognises bracketed paste payloads.
"""

from __future__ import annotations

from ablet.events import Event, KeyEvent, PasteEvent
from ablet.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START

__all__ = [
    "KeyId",
    "Key",
    "LEGACY_KEY_SEQUENCES",
    "MODIFIED_KEY_SEQUENCES",
    "parse_key",
    "parse_event",
]

KeyId = str


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

# CSI/SS3 final characters of cursor and F1-F4 keys
_FINAL_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# CSI <n> ~ keys
_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    **{f"\x1b[{final}": key for final, key in _FINAL_KEYS.items() if final in "ABCDHF"},
    **{f"\x1bO{final}": key for final, key in _FINAL_KEYS.items()},
    **{f"\x1b[{n}~": key for n, key in _TILDE_KEYS.items()},
    "\x1b[E": "clear",
    "\x1b[Z": "shift+tab",
}


def _modifier_prefix(param: int) -> str:
    """xterm modifier parameter (1 + bitmask) to a ``"ctrl+shift+"`` prefix."""
    bits = param - 1
    prefix = ""
    if bits & 4:
        prefix += "ctrl+"
    if bits & 1:
        prefix += "shift+"
    if bits & 2:
        prefix += "alt+"
    return prefix


def _modified_sequences() -> dict[str, str]:
    table: dict[str, str] = {}
    for param in range(2, 9):
        prefix = _modifier_prefix(param)
        for final, key in _FINAL_KEYS.items():
            table[f"\x1b[1;{param}{final}"] = prefix + key
            if final in "PQRS":
                table[f"\x1bO{param}{final}"] = prefix + key
        for n, key in _TILDE_KEYS.items():
            if n not in (1, 4):
                table[f"\x1b[{n};{param}~"] = prefix + key
    return table


MODIFIED_KEY_SEQUENCES: dict[str, str] = _modified_sequences()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _single_char_key(ch: str) -> KeyId | None:
    if ch == "\x1b":
        return "escape"
    if ch in ("\r", "\n"):
        return "enter"
    if ch == "\t":
        return "tab"
    if ch == " ":
        return "space"
    if ch in ("\x7f", "\x08"):
        return "backspace"
    if ch == "\x00":
        return "ctrl+space"
    if 1 <= ord(ch) <= 26:
        return "ctrl+" + chr(ord(ch) + ord("a") - 1)
    if ch.isprintable():
        return ch
    return None


def parse_key(data: str) -> KeyId | None:
    """Parse one complete input sequence into a key identifier."""
    if not data:
        return None

    key = LEGACY_KEY_SEQUENCES.get(data) or MODIFIED_KEY_SEQUENCES.get(data)
    if key is not None:
        return key

    if len(data) == 1:
        return _single_char_key(data)

    # Alt + key arrives as ESC followed by the key
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch.isupper():
            return "shift+alt+" + ch.lower()
        inner = _single_char_key(ch)
        if inner is None:
            return None
        if inner.startswith("ctrl+"):
            return "ctrl+alt+" + inner[len("ctrl+"):]
        return "alt+" + inner.lower()

    return None


def parse_event(data: str) -> Event | None:
    """Turn one complete input sequence (or paste) into an event."""
    if data.startswith(BRACKETED_PASTE_START) and data.endswith(BRACKETED_PASTE_END):
        return PasteEvent(data[len(BRACKETED_PASTE_START):-len(BRACKETED_PASTE_END)])

    key = parse_key(data)
    if key is None:
        # Unrecognised multi-character input is most likely an unbracketed paste
        if len(data) > 1 and not data.startswith("\x1b"):
            return PasteEvent(data)
        return None
    return KeyEvent.from_key_id(key)
