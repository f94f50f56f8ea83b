"""The game world: entities spawned by the server, other players and the local ship."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from rtypeclient.animation import (
    EXPLOSION_TEXTURE,
    MISSILE_OFFSET,
    MISSILE_RECT,
    MISSILE_SCALE,
    MISSILE_TEXTURE,
    POWER_UP_FRAMES,
    POWER_UP_RECT,
    POWER_UP_SCALE,
    POWER_UP_TEXTURE,
    monster_spec,
    ship_frame_rect,
)
from rtypeclient.components import (
    AnimationComponent,
    EntityType,
    HealthComponent,
    InputComponent,
    LevelComponent,
    NameComponent,
    ScoreComponent,
    SpriteComponent,
    TransformComponent,
    TypeComponent,
    VelocityComponent,
    XPComponent,
    register_all,
    setup_spaceship,
)
from rtypeclient.ecs import Coordinator, Entity
from rtypeclient.geometry import Color, Rect, Vector2
from rtypeclient.keymapping import KeyMapping
from rtypeclient.systems import (
    EXPLOSION_FRAME_HEIGHT,
    EXPLOSION_FRAME_TOP,
    EXPLOSION_FRAME_WIDTH,
    EXPLOSION_MONSTER_TYPE,
    ExplosionSystem,
    HealthSystem,
    InputSystem,
    LaserSystem,
    LevelSystem,
    MovementSystem,
    RenderSystem,
    ScoreSystem,
)

logger = logging.getLogger(__name__)

PLAYER_START = Vector2(400, 540)
PLAYER_NAME = "Player"
POSITION_UPDATE_INTERVAL = 0.05
DEAD_COLOR = Color(255, 255, 255, 128)
EXPLOSION_SCALE = Vector2(1.5, 1.5)
EXPLOSION_FRAMES = 5
SOUND_SHOOT = "shoot"
SOUND_EXPLOSION = "explosion"

_CLIENT_RECTS = {
    0: Rect(66, 17, 33, 17),
    1: Rect(0, 0, 33, 17),
    2: Rect(0, 34, 33, 17),
    3: Rect(0, 51, 33, 17),
    4: Rect(0, 68, 33, 17),
}
_FALLBACK_CLIENT_RECT = Rect(0, 17, 33, 17)


def texture_rect_for_client(client_id: int) -> Rect:
    """Ship frame of a client; negative ids keep the sign of their remainder."""
    remainder = abs(client_id) % 5
    if client_id < 0:
        remainder = -remainder
    return _CLIENT_RECTS.get(remainder, _FALLBACK_CLIENT_RECT)


@dataclass
class _BulletComponent:
    """Marks projectiles handled by the laser system."""

    damage: int = 0


@dataclass
class InterpolationData:
    """Smooths another player's movement between two position updates."""

    start_position: Vector2 = field(default_factory=Vector2)
    target_position: Vector2 = field(default_factory=Vector2)
    elapsed_time: float = 0.0
    total_time: float = POSITION_UPDATE_INTERVAL


class GameWorld:
    """Entities of a running game and the handlers for server messages."""

    def __init__(
        self,
        client_id: int = 0,
        key_mapping: KeyMapping | None = None,
        play_sound: Callable[[str], object] | None = None,
    ) -> None:
        self.client_id = client_id
        self.key_mapping = key_mapping if key_mapping is not None else KeyMapping()
        self.play_sound = play_sound
        self.player_dead = False
        self.game_entities: dict[int, Entity] = {}
        self.client_entities: dict[int, Entity] = {}
        self.player_names: dict[int, str] = {}
        self.entity_last_update_time: dict[int, float] = {}
        self.interpolation: dict[int, InterpolationData] = {}

        coordinator = Coordinator()
        self.coordinator = coordinator
        register_all(coordinator)
        coordinator.register_component(_BulletComponent)

        self.movement_system = coordinator.register_system(MovementSystem)
        self.render_system = coordinator.register_system(RenderSystem)
        self.input_system = coordinator.register_system(InputSystem)
        self.input_system.key_mapping = self.key_mapping
        self.health_system = coordinator.register_system(HealthSystem)
        self.level_system = coordinator.register_system(LevelSystem)
        self.explosion_system = coordinator.register_system(ExplosionSystem)
        self.score_system = coordinator.register_system(ScoreSystem)
        self.laser_system = coordinator.register_system(LaserSystem)
        self.laser_system.projectile_texture = MISSILE_TEXTURE

        coordinator.set_system_signature(
            LevelSystem, TransformComponent, XPComponent, LevelComponent
        )
        coordinator.set_system_signature(
            HealthSystem, TransformComponent, HealthComponent
        )
        coordinator.set_system_signature(InputSystem, InputComponent)
        coordinator.set_system_signature(
            MovementSystem, TransformComponent, VelocityComponent
        )
        coordinator.set_system_signature(
            ExplosionSystem, SpriteComponent, AnimationComponent
        )
        coordinator.set_system_signature(
            RenderSystem, TransformComponent, SpriteComponent
        )
        coordinator.set_system_signature(ScoreSystem, ScoreComponent)
        coordinator.set_system_signature(
            LaserSystem, TransformComponent, SpriteComponent, _BulletComponent
        )

        self.player_entity = coordinator.create_entity()
        coordinator.add_component(self.player_entity, ScoreComponent(0))
        setup_spaceship(
            coordinator,
            self.player_entity,
            PLAYER_START,
            texture_rect_for_client(client_id),
            PLAYER_NAME,
        )

    def _sound(self, name: str) -> None:
        if self.play_sound is not None:
            self.play_sound(name)

    def _upsert(self, entity: Entity, component_type: type, **values) -> None:
        coordinator = self.coordinator
        if coordinator.has_component(entity, component_type):
            component = coordinator.get_component(entity, component_type)
            for name, value in values.items():
                setattr(component, name, value)
        else:
            coordinator.add_component(entity, component_type(**values))

    def entity_by_client_id(self, client_id: int) -> Entity | None:
        return self.client_entities.get(client_id)

    def handle_entity_spawn(
        self,
        entity_id: int,
        entity_type,
        pos_x: float,
        pos_y: float,
        velocity_x: float,
        velocity_y: float,
        owner_id: int,
        monster_type: int,
    ) -> None:
        """Create an entity announced by the server, or move it if already known."""
        if entity_id in self.game_entities:
            self.handle_entity_update(entity_id, pos_x, pos_y)
            return

        coordinator = self.coordinator
        entity = coordinator.create_entity()
        self.game_entities[entity_id] = entity
        try:
            kind = EntityType(entity_type)
        except ValueError:
            kind = entity_type
        coordinator.add_component(entity, TypeComponent(kind))

        if kind == EntityType.MONSTER:
            self._init_monster(entity, pos_x, pos_y, velocity_x, velocity_y, monster_type)
        elif kind == EntityType.MISSILE:
            self._init_missile(entity, pos_x, pos_y)
        elif kind == EntityType.POWER_UP:
            self._init_power_up(entity, pos_x, pos_y)
        else:
            logger.warning("Unknown entity type: %s", int(kind))

        if kind != EntityType.PLAYER and kind != EntityType.POWER_UP:
            self.entity_last_update_time[entity_id] = 0.0

    def _init_monster(
        self,
        entity: Entity,
        pos_x: float,
        pos_y: float,
        velocity_x: float,
        velocity_y: float,
        monster_type: int,
    ) -> None:
        try:
            spec = monster_spec(monster_type)
        except ValueError:
            logger.warning("Unknown monster type: %s", monster_type)
            return
        coordinator = self.coordinator
        coordinator.add_component(
            entity,
            TransformComponent(Vector2(pos_x, pos_y), spec.scale, 0.0),
        )
        coordinator.add_component(
            entity, VelocityComponent(Vector2(velocity_x, velocity_y))
        )
        coordinator.add_component(
            entity, SpriteComponent(spec.texture, spec.texture_rect, spec.color)
        )
        coordinator.add_component(
            entity,
            AnimationComponent(
                frame_time=0.1, num_frames=spec.num_frames, monster_type=monster_type
            ),
        )

    def _init_common(
        self, entity: Entity, position: Vector2, scale: Vector2
    ) -> None:
        self.coordinator.add_component(entity, TransformComponent(position, scale, 0.0))
        self.coordinator.add_component(entity, VelocityComponent(Vector2(0.0, 0.0)))

    def _init_missile(self, entity: Entity, pos_x: float, pos_y: float) -> None:
        self._init_common(entity, Vector2(pos_x, pos_y) + MISSILE_OFFSET, MISSILE_SCALE)
        self.coordinator.add_component(
            entity, SpriteComponent(MISSILE_TEXTURE, MISSILE_RECT)
        )

    def _init_power_up(self, entity: Entity, pos_x: float, pos_y: float) -> None:
        self._init_common(entity, Vector2(pos_x, pos_y), POWER_UP_SCALE)
        self.coordinator.add_component(
            entity, SpriteComponent(POWER_UP_TEXTURE, POWER_UP_RECT)
        )
        self.coordinator.add_component(
            entity,
            AnimationComponent(frame_index=0, frame_time=0.1, num_frames=POWER_UP_FRAMES),
        )

    def handle_entity_update(self, entity_id: int, pos_x: float, pos_y: float) -> None:
        entity = self.game_entities.get(entity_id)
        if entity is None:
            return
        transform = self.coordinator.get_component(entity, TransformComponent)
        transform.position = Vector2(pos_x, pos_y)
        self.entity_last_update_time[entity_id] = 0.0

    def handle_entity_destroy(self, entity_id: int) -> None:
        """Remove a server entity; destroyed monsters leave an explosion behind."""
        entity = self.game_entities.get(entity_id)
        if entity is None:
            return
        coordinator = self.coordinator
        if coordinator.has_component(entity, TypeComponent):
            kind = coordinator.get_component(entity, TypeComponent).type
            if kind == EntityType.MONSTER:
                self._sound(SOUND_EXPLOSION)
                if coordinator.has_component(entity, TransformComponent):
                    self._spawn_explosion(
                        coordinator.get_component(entity, TransformComponent).position
                    )
        coordinator.destroy_entity(entity)
        del self.game_entities[entity_id]
        self.client_entities = {
            client_id: client_entity
            for client_id, client_entity in self.client_entities.items()
            if client_entity != entity
        }

    def _spawn_explosion(self, position: Vector2) -> Entity:
        coordinator = self.coordinator
        explosion = coordinator.create_entity()
        coordinator.add_component(
            explosion, TransformComponent(position, EXPLOSION_SCALE, 0.0)
        )
        coordinator.add_component(
            explosion,
            SpriteComponent(
                EXPLOSION_TEXTURE,
                Rect(0, EXPLOSION_FRAME_TOP, EXPLOSION_FRAME_WIDTH, EXPLOSION_FRAME_HEIGHT),
            ),
        )
        coordinator.add_component(
            explosion,
            AnimationComponent(
                frame_index=0,
                frame_time=0.1,
                num_frames=EXPLOSION_FRAMES,
                monster_type=EXPLOSION_MONSTER_TYPE,
            ),
        )
        return explosion

    def handle_position_update(
        self,
        client_id: int,
        pos_x: float,
        pos_y: float,
        velocity_x: float,
        velocity_y: float,
    ) -> None:
        """Start moving another player's ship towards its reported position."""
        if client_id == self.client_id:
            return
        coordinator = self.coordinator
        if client_id not in self.client_entities:
            entity = coordinator.create_entity()
            name = self.player_names.setdefault(client_id, "")
            setup_spaceship(
                coordinator,
                entity,
                Vector2(pos_x, pos_y),
                texture_rect_for_client(client_id),
                name,
            )
            self.client_entities[client_id] = entity

        entity = self.client_entities[client_id]
        transform = coordinator.get_component(entity, TransformComponent)
        data = self.interpolation.setdefault(client_id, InterpolationData())
        data.start_position = transform.position
        data.target_position = Vector2(pos_x, pos_y)
        data.elapsed_time = 0.0
        data.total_time = POSITION_UPDATE_INTERVAL
        sprite = coordinator.get_component(entity, SpriteComponent)
        sprite.texture_rect = ship_frame_rect(sprite.texture_rect.top, velocity_y)

    def handle_player_info(self, client_id: int, name: str) -> None:
        self.player_names[client_id] = name
        if client_id == self.client_id:
            entity = self.player_entity
        elif client_id in self.client_entities:
            entity = self.client_entities[client_id]
        else:
            return
        self._upsert(entity, NameComponent, name=name)

    def handle_score_update(self, client_id: int, new_score: int) -> None:
        self.score_system.update_score(client_id, new_score)

    def handle_fire(self, client_id: int) -> None:
        """Show the muzzle flash of another player who fired."""
        entity = self.entity_by_client_id(client_id)
        if entity is None:
            return
        self.laser_system.add_laser_effect(entity)
        self._sound(SOUND_SHOOT)

    def handle_health_update(
        self, client_id: int, current_health: int, max_health: int
    ) -> None:
        coordinator = self.coordinator
        entity = self.entity_by_client_id(client_id)
        if client_id == self.client_id:
            if coordinator.has_component(self.player_entity, HealthComponent):
                health = coordinator.get_component(self.player_entity, HealthComponent)
                health.current_health = current_health
                health.max_health = max_health
                if health.current_health <= 0:
                    self.set_player_dead()
            return
        if entity is None:
            logger.error(
                "Invalid entity received for health update (clientId: %s)", client_id
            )
            return
        if coordinator.has_component(entity, HealthComponent):
            health = coordinator.get_component(entity, HealthComponent)
            health.current_health = current_health
            health.max_health = max_health

    def handle_experience_update(
        self, client_id: int, current_xp: int, current_level: int
    ) -> None:
        entity = self.entity_by_client_id(client_id)
        if client_id == self.client_id:
            self._upsert(self.player_entity, XPComponent, current_xp=current_xp)
            self._upsert(self.player_entity, LevelComponent, current_level=current_level)
            logger.info(
                "Updated Player %s to Level %s with XP %s",
                client_id,
                current_level,
                current_xp,
            )
        if entity is None:
            return
        self._upsert(entity, LevelComponent, current_level=current_level)
        self._upsert(entity, XPComponent, current_xp=current_xp)

    def remove_client_entity(self, client_id: int) -> None:
        entity = self.client_entities.pop(client_id, None)
        if entity is None:
            return
        self.coordinator.destroy_entity(entity)
        self.player_names.pop(client_id, None)
        self.interpolation.pop(client_id, None)

    def set_player_dead(self) -> None:
        """Mark the local player dead and fade its ship."""
        self.player_dead = True
        sprite = self.coordinator.get_component(self.player_entity, SpriteComponent)
        sprite.color = DEAD_COLOR