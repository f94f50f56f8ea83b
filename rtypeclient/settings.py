"""The settings overlay: aspect ratio, frame rate, sound, brightness and key bindings."""

from __future__ import annotations

from typing import Callable

from rtypeclient.geometry import Color, Rect, Vector2
from rtypeclient.keymapping import Action, Key, KeyMapping
from rtypeclient.scenes import SceneManager

OUTLINE = 5

_ACTION_NAMES = {
    Action.MOVE_UP: "Up",
    Action.MOVE_DOWN: "Down",
    Action.MOVE_LEFT: "Left",
    Action.MOVE_RIGHT: "Right",
    Action.FIRE: "Fire",
}

_KEY_NAMES = {
    Key.SPACE: "Space",
    Key.UP: "Up",
    Key.DOWN: "Down",
    Key.LEFT: "Left",
    Key.RIGHT: "Right",
}

ACTION_ORDER = (
    Action.MOVE_UP,
    Action.MOVE_DOWN,
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.FIRE,
)


def action_to_string(action: Action) -> str:
    return _ACTION_NAMES.get(action, "Unknown Action")


def key_to_string(key: Key) -> str:
    if key in _KEY_NAMES:
        return _KEY_NAMES[key]
    if len(key.name) == 1:
        return key.name
    return "Unknown Key"


def _frame(x: float, y: float, width: float, height: float) -> Rect:
    """Clickable bounds of a frame, outline included."""
    return Rect(x - OUTLINE, y - OUTLINE, width + 2 * OUTLINE, height + 2 * OUTLINE)


_ASPECT_BUTTONS = (
    (_frame(475, 550, 150, 50), 16.0 / 9.0),
    (_frame(475, 650, 150, 50), 4.0 / 3.0),
    (_frame(475, 750, 150, 50), 16.0 / 10.0),
    (_frame(475, 850, 150, 50), 21.0 / 9.0),
)

_FPS_BUTTONS = (
    (_frame(875, 550, 150, 50), 30),
    (_frame(875, 650, 150, 50), 60),
    (_frame(875, 750, 150, 50), 144),
    (_frame(875, 850, 150, 50), 0),
)

SOUND_PLUS = _frame(1450, 575, 50, 50)
SOUND_MINUS = _frame(1250, 575, 50, 50)
BRIGHTNESS_PLUS = _frame(1450, 815, 50, 50)
BRIGHTNESS_MINUS = _frame(1250, 815, 50, 50)


class Settings:
    """State and click handling of the settings overlay."""

    def __init__(
        self,
        key_mapping: KeyMapping,
        scene_manager: SceneManager,
        on_aspect_ratio: Callable[[float], object] | None = None,
        on_fps: Callable[[int], object] | None = None,
    ) -> None:
        self.key_mapping = key_mapping
        self.scene_manager = scene_manager
        self.on_aspect_ratio = on_aspect_ratio
        self.on_fps = on_fps
        self.aspect_ratio = 16.0 / 9.0
        self.fps = 60
        self.show_overlay = False
        self.active_action: Action | None = None
        self.action_boxes = {
            action: _frame(150, 550 + index * 80, 250, 40)
            for index, action in enumerate(ACTION_ORDER)
        }
        self.action_outlines = {action: Color.WHITE for action in ACTION_ORDER}

    def toggle_overlay(self) -> None:
        self.show_overlay = not self.show_overlay

    @property
    def sound_text(self) -> str:
        return f"{self.scene_manager.sound_level}%"

    @property
    def brightness_text(self) -> str:
        return f"{self.scene_manager.brightness_level}%"

    def action_label(self, action: Action) -> str:
        key = self.key_mapping.key_for(action)
        return f"{action_to_string(action)}: {key_to_string(key)}"

    def _set_aspect_ratio(self, ratio: float) -> None:
        self.aspect_ratio = ratio
        if self.on_aspect_ratio is not None:
            self.on_aspect_ratio(ratio)

    def _set_fps(self, fps: int) -> None:
        self.fps = fps
        if self.on_fps is not None:
            self.on_fps(fps)

    def click(self, point: Vector2) -> None:
        """Handle a left click at a point in view coordinates."""
        handled = False
        for bounds, ratio in _ASPECT_BUTTONS:
            if bounds.contains(point):
                self._set_aspect_ratio(ratio)
                handled = True
                break
        if not handled:
            for bounds, fps in _FPS_BUTTONS:
                if bounds.contains(point):
                    self._set_fps(fps)
                    break

        manager = self.scene_manager
        if SOUND_PLUS.contains(point):
            if manager.sound_level < 100:
                manager.set_sound_level(manager.sound_level + 10)
        elif SOUND_MINUS.contains(point):
            if manager.sound_level > 0:
                manager.set_sound_level(manager.sound_level - 10)

        if BRIGHTNESS_PLUS.contains(point):
            if manager.brightness_level < 100:
                manager.set_brightness_level(manager.brightness_level + 10)
        elif BRIGHTNESS_MINUS.contains(point):
            if manager.brightness_level > 0:
                manager.set_brightness_level(manager.brightness_level - 10)

        clicked = None
        for action, bounds in self.action_boxes.items():
            if bounds.contains(point):
                clicked = action
                self.action_outlines[action] = Color.RED
            else:
                self.action_outlines[action] = Color.WHITE
        self.active_action = clicked

    def handle_key_pressed(self, key: Key) -> None:
        """Bind the key to the action being edited, if any."""
        if self.active_action is None:
            return
        self.key_mapping.set_key(self.active_action, key)
        self.action_outlines[self.active_action] = Color.WHITE
        self.active_action = None