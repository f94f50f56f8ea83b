"""Component types used by the game and the player ship setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum

from rtypeclient.ecs import Coordinator, Entity
from rtypeclient.geometry import Color, Rect, Vector2

logger = logging.getLogger(__name__)

SPACESHIP_TEXTURE = "r-typesheet42.gif"


class EntityType(IntEnum):
    PLAYER = 0
    MONSTER = 1
    MISSILE = 2
    POWER_UP = 3


@dataclass
class TransformComponent:
    position: Vector2 = field(default_factory=Vector2)
    scale: Vector2 = field(default_factory=lambda: Vector2(1.0, 1.0))
    rotation: float = 0.0


@dataclass
class VelocityComponent:
    velocity: Vector2 = field(default_factory=Vector2)


@dataclass
class SpriteComponent:
    texture: str = ""
    texture_rect: Rect = field(default_factory=Rect)
    color: Color = field(default_factory=lambda: Color.WHITE)


@dataclass
class InputComponent:
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    pressed: bool = False
    space_held: bool = False
    space_released: bool = False
    is_firing: bool = False


@dataclass
class NameComponent:
    name: str = ""


@dataclass
class HealthComponent:
    current_health: int = 100
    max_health: int = 100


@dataclass
class XPComponent:
    current_xp: int = 0


@dataclass
class LevelComponent:
    current_level: int = 1


@dataclass
class AnimationComponent:
    frame_index: int = 0
    frame_time: float = 0.1
    timer: float = 0.0
    num_frames: int = 1
    monster_type: int = 0


@dataclass
class TypeComponent:
    type: EntityType = EntityType.PLAYER


@dataclass
class ScoreComponent:
    score: int = 0


_ALL_COMPONENTS = (
    TransformComponent,
    SpriteComponent,
    VelocityComponent,
    InputComponent,
    NameComponent,
    TypeComponent,
    AnimationComponent,
    HealthComponent,
    XPComponent,
    LevelComponent,
    ScoreComponent,
)


def register_all(coordinator: Coordinator) -> None:
    """Register every component type with the coordinator."""
    for component_type in _ALL_COMPONENTS:
        coordinator.register_component(component_type)


def setup_spaceship(
    coordinator: Coordinator,
    entity: Entity,
    position: Vector2,
    texture_rect: Rect,
    name: str,
) -> None:
    """Give an entity everything a player ship carries."""
    coordinator.add_component(
        entity,
        TransformComponent(position=position, scale=Vector2(2.5, 2.5), rotation=0.0),
    )
    coordinator.add_component(
        entity, SpriteComponent(texture=SPACESHIP_TEXTURE, texture_rect=texture_rect)
    )
    coordinator.add_component(entity, VelocityComponent(Vector2(0.0, 0.0)))
    coordinator.add_component(entity, InputComponent())
    coordinator.add_component(entity, NameComponent(name))
    coordinator.add_component(entity, HealthComponent(100, 100))
    coordinator.add_component(entity, XPComponent(0))
    coordinator.add_component(entity, LevelComponent(1))
    logger.debug("Spaceship created at position (%s, %s)", position.x, position.y)