"""Scene switching, brightness and sound levels, and letterboxed viewports."""

from __future__ import annotations

from enum import Enum, auto
from typing import Protocol

from rtypeclient.geometry import Color, Rect, Vector2

SCREEN_SIZE = Vector2(1920, 1080)


class Scene(Enum):
    LOBBY = auto()
    CONNECTION = auto()
    GAME = auto()
    MENU = auto()
    MENU_MINI_GAME = auto()
    MINI_GAME = auto()


class _GameLike(Protocol):
    def set_player_dead(self) -> None: ...

    def remove_client_entity(self, client_id: int) -> None: ...


def fit_viewport(window_width: float, window_height: float, aspect_ratio: float) -> Rect:
    """Viewport, in window fractions, that keeps the aspect ratio with centred bars."""
    window_ratio = window_width / window_height
    if window_ratio > aspect_ratio:
        new_width = aspect_ratio * window_height
        left = (window_width - new_width) / (2 * window_width)
        return Rect(left, 0.0, new_width / window_width, 1.0)
    new_height = window_width / aspect_ratio
    top = (window_height - new_height) / (2 * window_height)
    return Rect(0.0, top, 1.0, new_height / window_height)


class SceneManager:
    """Tracks the current scene and the global sound and brightness levels."""

    def __init__(self, client_id: int = 0, game: _GameLike | None = None) -> None:
        self.client_id = client_id
        self.game = game
        self.current_scene = Scene.LOBBY
        self.sound_level = 100
        self.brightness_level = 100
        self.overlay_size = SCREEN_SIZE
        self.overlay_color = Color(255, 255, 255, 0)

    def switch_scene(self, scene: Scene) -> None:
        self.current_scene = scene

    def handle_disconnection(self, client_id: int) -> None:
        """Mark the local player dead, or drop another player while in game."""
        if self.game is None:
            return
        if client_id == self.client_id:
            self.game.set_player_dead()
        elif self.current_scene is Scene.GAME:
            self.game.remove_client_entity(client_id)

    def set_brightness_level(self, level: int) -> None:
        """Clamp to 0..100 and darken the overlay accordingly."""
        self.brightness_level = min(max(level, 0), 100)
        alpha = (100 - self.brightness_level) * 255 // 100
        self.overlay_color = Color(0, 0, 0, alpha)

    def set_sound_level(self, level: int) -> None:
        self.sound_level = level

    @property
    def click_volume(self) -> int:
        return self.sound_level

    @property
    def music_volume(self) -> int:
        return self.sound_level

    @property
    def laser_volume(self) -> int:
        return self.sound_level // 2