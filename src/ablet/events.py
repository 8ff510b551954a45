"""Input events delivered to prompt handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

__all__ = ["KeyEvent", "PasteEvent", "ResizeEvent", "Event"]

_NAMED_CHARS = {"space": " "}


@dataclass(frozen=True)
class KeyEvent:
    """A key press: ``code`` is a key name (``"enter"``, ``"up"``) or a
    single character, ``modifiers`` a subset of ``{"ctrl", "alt", "shift"}``.
    """

    code: str
    modifiers: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_key_id(cls, key_id: str) -> KeyEvent:
        """Build from an identifier like ``"ctrl+shift+up"``."""
        if key_id.endswith("+"):
            # "+" or "alt++": the key itself is "+"
            code, prefix = "+", key_id[:-1]
        else:
            prefix, _, code = key_id.rpartition("+")
        return cls(code, frozenset(m for m in prefix.split("+") if m))

    @property
    def ctrl(self) -> bool:
        return "ctrl" in self.modifiers

    @property
    def alt(self) -> bool:
        return "alt" in self.modifiers

    @property
    def char(self) -> str | None:
        """The character this key types, or ``None`` for control keys."""
        if self.ctrl or self.alt:
            return None
        if len(self.code) == 1:
            return self.code
        return _NAMED_CHARS.get(self.code)


@dataclass(frozen=True)
class PasteEvent:
    text: str


@dataclass(frozen=True)
class ResizeEvent:
    pass


Event = Union[KeyEvent, PasteEvent, ResizeEvent]
