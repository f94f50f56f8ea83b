"""Game systems: movement, rendering, explosions, input, lasers, score, health and level."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Collection

from rtypeclient.components import (
    AnimationComponent,
    HealthComponent,
    InputComponent,
    LevelComponent,
    SpriteComponent,
    TransformComponent,
    VelocityComponent,
    XPComponent,
)
from rtypeclient.ecs import Entity, System
from rtypeclient.geometry import Color, Rect, Vector2
from rtypeclient.keymapping import Action, Key, KeyMapping

logger = logging.getLogger(__name__)

EXPLOSION_MONSTER_TYPE = 1000
EXPLOSION_FRAME_WIDTH = 66
EXPLOSION_FRAME_TOP = 98
EXPLOSION_FRAME_HEIGHT = 65

LASER_EFFECT_OFFSET = Vector2(72, -2)
LASER_EFFECT_RECTS = (Rect(212, 80, 18, 18), Rect(230, 80, 18, 18))

SCOREBOARD_TITLE = "Scoreboard :"

_SCORE_COLORS = {
    0: Color.MAGENTA,
    1: Color.CYAN,
    2: Color.GREEN,
    3: Color.BLUE,
    4: Color.RED,
}


def health_fraction(current: float, maximum: float) -> float:
    """Share of health left, never below zero."""
    fraction = current / maximum
    if current < 0:
        return 0.0
    return fraction


def xp_fraction(current_xp: float) -> float:
    """Share of the experience bar filled, out of 100 points, never below zero."""
    return max(current_xp / 100.0, 0.0)


def score_color(client_id: int) -> Color:
    """Colour of a player's line on the scoreboard."""
    return _SCORE_COLORS.get(client_id, Color.WHITE)


class MovementSystem(System):
    """Moves entities along their velocity."""

    def update(self, delta_time: float) -> None:
        coordinator = self.coordinator
        for entity in sorted(self.entities):
            if coordinator.has_component(
                entity, VelocityComponent
            ) and coordinator.has_component(entity, TransformComponent):
                velocity = coordinator.get_component(entity, VelocityComponent)
                transform = coordinator.get_component(entity, TransformComponent)
                transform.position = transform.position + velocity.velocity * delta_time
            else:
                logger.warning(
                    "Entity %s is missing required components. "
                    "Removing from MovementSystem.",
                    entity,
                )
                self.entities.discard(entity)


class RenderSystem(System):
    """Hands every drawable entity to a draw callback."""

    def render(
        self, draw: Callable[[SpriteComponent, TransformComponent], object]
    ) -> None:
        coordinator = self.coordinator
        for entity in sorted(self.entities):
            if coordinator.has_component(
                entity, SpriteComponent
            ) and coordinator.has_component(entity, TransformComponent):
                sprite = coordinator.get_component(entity, SpriteComponent)
                transform = coordinator.get_component(entity, TransformComponent)
                draw(sprite, transform)
            else:
                logger.warning(
                    "Entity %s does not have the required components. "
                    "Removing from RenderSystem.",
                    entity,
                )
                self.entities.discard(entity)


class ExplosionSystem(System):
    """Plays explosion animations and removes them once finished."""

    def update(self, delta_time: float) -> None:
        coordinator = self.coordinator
        finished: list[Entity] = []
        for entity in sorted(self.entities):
            animation = coordinator.get_component(entity, AnimationComponent)
            sprite = coordinator.get_component(entity, SpriteComponent)
            if animation.monster_type != EXPLOSION_MONSTER_TYPE:
                continue
            animation.timer += delta_time
            if animation.timer >= animation.frame_time:
                animation.frame_index += 1
                animation.timer = 0.0
                if animation.frame_index >= animation.num_frames:
                    finished.append(entity)
                    continue
                sprite.texture_rect = Rect(
                    animation.frame_index * EXPLOSION_FRAME_WIDTH,
                    EXPLOSION_FRAME_TOP,
                    EXPLOSION_FRAME_WIDTH,
                    EXPLOSION_FRAME_HEIGHT,
                )
        for entity in finished:
            coordinator.destroy_entity(entity)


class InputSystem(System):
    """Turns the set of pressed keys into input component flags."""

    def __init__(self, coordinator=None) -> None:
        super().__init__(coordinator)
        self.key_mapping: KeyMapping | None = None

    def update(self, pressed_keys: Collection[Key]) -> None:
        if self.key_mapping is None:
            return
        mapping = self.key_mapping
        for entity in sorted(self.entities):
            state = self.coordinator.get_component(entity, InputComponent)
            state.up = mapping.key_for(Action.MOVE_UP) in pressed_keys
            state.down = mapping.key_for(Action.MOVE_DOWN) in pressed_keys
            state.left = mapping.key_for(Action.MOVE_LEFT) in pressed_keys
            state.right = mapping.key_for(Action.MOVE_RIGHT) in pressed_keys
            state.pressed = mapping.key_for(Action.FIRE) in pressed_keys

            if state.pressed and not state.space_held:
                state.space_released = True
                state.space_held = True
                state.is_firing = True
            elif not state.pressed:
                state.space_held = False
                state.space_released = False
                state.is_firing = False
            else:
                state.space_released = False


@dataclass
class LaserEffect:
    """Muzzle flash shown in front of a ship that just fired."""

    texture: str
    position: Vector2
    texture_rect: Rect = LASER_EFFECT_RECTS[0]
    scale: Vector2 = field(default_factory=lambda: Vector2(2.5, 2.5))
    duration: float = 0.3
    elapsed_time: float = 0.0
    frame_time: float = 0.1
    current_frame_time: float = 0.0
    current_frame: int = 0
    max_frames: int = 2


class LaserSystem(System):
    """Keeps and animates the muzzle flashes of firing ships."""

    def __init__(self, coordinator=None) -> None:
        super().__init__(coordinator)
        self.projectile_texture: str | None = None
        self.effects: dict[Entity, LaserEffect] = {}

    def _anchor(self, entity: Entity) -> Vector2:
        transform = self.coordinator.get_component(entity, TransformComponent)
        return transform.position + LASER_EFFECT_OFFSET

    def add_laser_effect(self, entity: Entity) -> LaserEffect:
        if self.projectile_texture is None:
            raise RuntimeError("Projectile texture is not set!")
        effect = LaserEffect(
            texture=self.projectile_texture, position=self._anchor(entity)
        )
        self.effects[entity] = effect
        return effect

    def update(self, delta_time: float) -> None:
        for entity, effect in list(self.effects.items()):
            effect.elapsed_time += delta_time
            effect.current_frame_time += delta_time
            if effect.current_frame_time >= effect.frame_time:
                effect.current_frame = (effect.current_frame + 1) % effect.max_frames
                effect.texture_rect = LASER_EFFECT_RECTS[
                    0 if effect.current_frame == 0 else 1
                ]
                effect.current_frame_time = 0.0
            if effect.elapsed_time >= effect.duration:
                del self.effects[entity]
            else:
                effect.position = self._anchor(entity)

    def on_entity_destroyed(self, entity: Entity) -> None:
        self.effects.pop(entity, None)


class ScoreSystem(System):
    """Keeps the score of every player for the scoreboard."""

    def __init__(self, coordinator=None) -> None:
        super().__init__(coordinator)
        self.all_scores: dict[int, int] = {}

    def update_score(self, client_id: int, new_score: int) -> None:
        self.all_scores[client_id] = new_score

    def remove_score(self, client_id: int) -> None:
        self.all_scores.pop(client_id, None)

    def lines(self) -> list[tuple[str, Color]]:
        """Scoreboard lines ordered by client id, each with its colour."""
        return [
            (f"Player {client_id}: {score}", score_color(client_id))
            for client_id, score in sorted(self.all_scores.items())
        ]


@dataclass(frozen=True)
class HealthBar:
    """A health bar: where it sits, its full size and how full it is."""

    position: Vector2
    size: Vector2
    fraction: float

    @property
    def fill_size(self) -> Vector2:
        return Vector2(self.size.x * self.fraction, self.size.y)


class HealthSystem(System):
    """Works out the health bars of the player and of other entities."""

    def bars(self, player_entity: Entity) -> list[HealthBar]:
        coordinator = self.coordinator
        result: list[HealthBar] = []
        if coordinator.has_component(player_entity, HealthComponent):
            health = coordinator.get_component(player_entity, HealthComponent)
            result.append(
                HealthBar(
                    Vector2(10, 10),
                    Vector2(200, 20),
                    health_fraction(health.current_health, health.max_health),
                )
            )
        for entity in sorted(self.entities):
            if entity == player_entity:
                continue
            if not (
                coordinator.has_component(entity, TransformComponent)
                and coordinator.has_component(entity, HealthComponent)
            ):
                continue
            transform = coordinator.get_component(entity, TransformComponent)
            health = coordinator.get_component(entity, HealthComponent)
            result.append(
                HealthBar(
                    Vector2(transform.position.x, transform.position.y + 50),
                    Vector2(50, 5),
                    health_fraction(health.current_health, health.max_health),
                )
            )
        return result


@dataclass(frozen=True)
class LevelStatus:
    """The player's experience bar fill and level caption."""

    xp_fraction: float
    level: int

    @property
    def text(self) -> str:
        return f"Level: {self.level}"


class LevelSystem(System):
    """Reports the player's experience and level."""

    def status(self, player_entity: Entity) -> LevelStatus | None:
        coordinator = self.coordinator
        if not (
            coordinator.has_component(player_entity, XPComponent)
            and coordinator.has_component(player_entity, LevelComponent)
        ):
            return None
        xp = coordinator.get_component(player_entity, XPComponent)
        level = coordinator.get_component(player_entity, LevelComponent)
        return LevelStatus(xp_fraction(xp.current_xp), level.current_level)