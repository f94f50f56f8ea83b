"""Monster, power-up and ship sprite animation frames."""

from __future__ import annotations

from dataclasses import dataclass

from rtypeclient.components import AnimationComponent
from rtypeclient.geometry import Color, Rect, Vector2

POWER_UP_TEXTURE = "r-typesheet3.gif"
POWER_UP_RECT = Rect(0, 0, 17, 18)
POWER_UP_FRAMES = 12
POWER_UP_SCALE = Vector2(3.0, 3.0)
POWER_UP_SPEED = 1.5

MISSILE_TEXTURE = "r-typesheet1.gif"
MISSILE_RECT = Rect(246, 80, 18, 18)
MISSILE_SCALE = Vector2(3.0, 3.0)
MISSILE_OFFSET = Vector2(40, 5)

EXPLOSION_TEXTURE = "r-typesheet44.gif"

SHIP_FRAME_WIDTH = 33
SHIP_FRAME_HEIGHT = 17


@dataclass(frozen=True)
class MonsterSpec:
    """How a monster type looks when it spawns."""

    texture: str
    scale: Vector2
    texture_rect: Rect
    num_frames: int
    color: Color = Color.WHITE


def _spec(texture: str, scale: float, rect: Rect, frames: int, **extra) -> MonsterSpec:
    return MonsterSpec(texture, Vector2(scale, scale), rect, frames, **extra)


_MONSTER_SPECS = {
    0: _spec("r-typesheet5.gif", 2.5, Rect(0, 0, 33, 36), 8),
    1: _spec("r-typesheet26.gif", 2.5, Rect(0, 0, 65, 50), 3),
    2: _spec("r-typesheet8.gif", 2.5, Rect(0, 0, 33, 34), 16),
    3: _spec("r-typesheet7.gif", 4.5, Rect(0, 0, 33, 33), 6),
    4: _spec("r-typesheet23.gif", 3.5, Rect(0, 0, 33, 33), 8),
    5: _spec("r-typesheet16.gif", 5.5, Rect(272, 8, 17, 16), 4),
    6: _spec("r-typesheet18.gif", 2.5, Rect(0, 66, 33, 33), 4),
    7: _spec("r-typesheet14.gif", 1.5, Rect(0, 0, 50, 50), 5),
    8: _spec("r-typesheet22.gif", 5.5, Rect(0, 0, 33, 33), 16),
    10: _spec("r-typesheet17.gif", 2.5, Rect(0, 0, 65, 132), 8),
    20: _spec("r-typesheet36.gif", 4.0, Rect(0, 0, 264, 143), 8),
    30: _spec("r-typesheet50.png", 4.5, Rect(42, 278, 100, 115), 13),
    31: _spec("r-typesheet30a.gif", 2.5, Rect(0, 0, 34, 34), 3, color=Color.RED),
    40: _spec("r-typesheet51.png", 3.5, Rect(0, 0, 64, 64), 6),
}


def monster_spec(monster_type: int) -> MonsterSpec:
    """Spawn appearance of a monster type; ValueError for unknown types."""
    try:
        return _MONSTER_SPECS[monster_type]
    except KeyError:
        raise ValueError(f"Unknown monster type: {monster_type}") from None


def _serpentine_rect(frame_index: int) -> Rect:
    width, height, per_row, rows = 264, 143, 2, 4
    index = frame_index % (per_row * rows)
    row, column = divmod(index, per_row)
    if row % 2 == 1:
        column = per_row - 1 - column
    return Rect(column * width, row * height, width, height)


def monster_frame_rect(monster_type: int, frame_index: int) -> Rect | None:
    """Texture rectangle of a monster frame, or None if the type is not animated."""
    i = frame_index
    if monster_type == 0:
        return Rect(i * 33, 0, 33, 36)
    if monster_type == 1:
        return Rect(i * 65, 0, 65, 50)
    if monster_type == 2:
        return Rect((i % 8) * 33, (i // 8) * 34, 33, 34)
    if monster_type == 3:
        return Rect((i % 3) * 33, (i // 3) * 33, 33, 33)
    if monster_type == 4:
        return Rect(i * 33, 0, 33, 33)
    if monster_type == 5:
        return Rect(271 + i * 17, 8, 17, 16)
    if monster_type == 6:
        return Rect(i * 33, 66, 33, 33)
    if monster_type == 7:
        return Rect(i * 50, 0, 50, 50)
    if monster_type == 8:
        return Rect((i % 8) * 33, (i // 8) * 33, 33, 33)
    if monster_type == 10:
        return Rect(i * 65, 0, 65, 132)
    if monster_type == 20:
        return _serpentine_rect(i)
    if monster_type == 30:
        return Rect(i * 160 + 42, 278, 100, 115)
    if monster_type == 31:
        return Rect(i * 34, 0, 34, 34)
    if monster_type == 40:
        return Rect(i * 64, 0, 64, 64)
    return None


def power_up_frame_rect(frame_index: int) -> Rect:
    return Rect(frame_index * 17, 0, 17, 18)


def ship_frame_rect(top: float, direction_y: float) -> Rect:
    """Ship frame tilted by vertical movement; the direction is truncated to an int."""
    vertical = int(direction_y)
    if vertical > 0:
        left = 0
    elif vertical < 0:
        left = 99
    else:
        left = 66
    return Rect(left, top, SHIP_FRAME_WIDTH, SHIP_FRAME_HEIGHT)


def animate_monster(animation: AnimationComponent, delta_time: float) -> Rect | None:
    """Advance a monster's animation; returns the new frame rectangle when it changes."""
    animation.timer += delta_time
    if animation.timer < animation.frame_time:
        return None
    animation.frame_index = (animation.frame_index + 1) % animation.num_frames
    animation.timer = 0.0
    return monster_frame_rect(animation.monster_type, animation.frame_index)


def animate_power_up(animation: AnimationComponent, delta_time: float) -> Rect | None:
    """Advance a power-up's animation; returns the new frame rectangle when it changes."""
    animation.timer += delta_time * POWER_UP_SPEED
    if animation.timer < animation.frame_time:
        return None
    animation.frame_index = (animation.frame_index + 1) % animation.num_frames
    animation.timer = 0.0
    return power_up_frame_rect(animation.frame_index)