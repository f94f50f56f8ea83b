"""Editable text fields of the connection form."""

from __future__ import annotations

from typing import Callable

from rtypeclient.geometry import Color

BACKSPACE = 8
FIELD_NAMES = ("name", "ip", "port")
DEFAULT_MAX_WIDTH = 800.0 - 20.0
DEFAULT_GLYPH_WIDTH = 36.0
DEFAULT_PLAYER_NAME = "Player"
ACTIVE_OUTLINE = 3


def _default_measure(text: str) -> float:
    return len(text) * DEFAULT_GLYPH_WIDTH


class TextField:
    """A single-line field with a cursor and a maximum rendered width."""

    def __init__(
        self,
        text: str = "",
        max_width: float = DEFAULT_MAX_WIDTH,
        measure: Callable[[str], float] | None = None,
    ) -> None:
        self.text = text
        self.cursor = len(text)
        self.max_width = max_width
        self.measure = measure if measure is not None else _default_measure

    @property
    def too_wide(self) -> bool:
        return self.measure(self.text) > self.max_width

    def insert_char(self, char: str) -> bool:
        """Insert at the cursor if the text would still fit; returns whether it did."""
        if self.measure(self.text + char) > self.max_width:
            return False
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += 1
        return True

    def backspace(self) -> None:
        if self.cursor > 0 and self.text:
            self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
            self.cursor -= 1
        self.cursor = min(self.cursor, len(self.text))

    def move_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def paste(self, text: str) -> None:
        """Insert text at the cursor without a width check."""
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)


class ConnectionForm:
    """Name, address and port fields, with one of them active for typing."""

    def __init__(
        self,
        max_width: float = DEFAULT_MAX_WIDTH,
        measure: Callable[[str], float] | None = None,
    ) -> None:
        self.fields = {
            name: TextField(max_width=max_width, measure=measure) for name in FIELD_NAMES
        }
        self.active: str | None = None
        self.outline_thickness = {name: 0 for name in FIELD_NAMES}
        self.outline_colors = {name: Color.BLUE for name in FIELD_NAMES}

    @property
    def active_field(self) -> TextField | None:
        return None if self.active is None else self.fields[self.active]

    def select(self, name: str | None) -> None:
        """Activate a field and put its cursor at the end; None deactivates all."""
        if name is not None and name not in self.fields:
            raise KeyError(f"No field named {name!r}")
        self.active = name
        for field_name in self.fields:
            self.outline_thickness[field_name] = ACTIVE_OUTLINE if field_name == name else 0
        if name is not None:
            field = self.fields[name]
            field.cursor = len(field.text)

    def type_text(self, code: int) -> None:
        """Apply a typed character code to the active field."""
        field = self.active_field
        if field is None:
            return
        overflow = field.too_wide
        if code == BACKSPACE:
            field.backspace()
        elif code < 128:
            overflow = not field.insert_char(chr(code))
        field.cursor = min(field.cursor, len(field.text))
        if overflow:
            self.outline_colors[self.active] = Color.RED
        else:
            for name in self.fields:
                self.outline_colors[name] = Color.BLUE

    def player_name(self) -> str:
        return self.fields["name"].text or DEFAULT_PLAYER_NAME