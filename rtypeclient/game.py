"""The in-game scene: waiting room, stage transitions, player control and scrolling."""

from __future__ import annotations

import math
from collections import deque
from enum import Enum, auto
from typing import Callable, Collection

from rtypeclient.animation import animate_monster, animate_power_up, ship_frame_rect
from rtypeclient.components import (
    AnimationComponent,
    EntityType,
    InputComponent,
    SpriteComponent,
    TransformComponent,
    TypeComponent,
    VelocityComponent,
)
from rtypeclient.geometry import Color, Rect, Vector2
from rtypeclient.keymapping import Key, KeyMapping
from rtypeclient.pathhelper import PathHelper
from rtypeclient.stage import StageSystem, normalize_stage
from rtypeclient.world import PLAYER_START, SOUND_SHOOT, GameWorld

SCREEN_WIDTH = 1920.0
SCREEN_HEIGHT = 1080.0
MOVEMENT_SPEED = 200.0
SHIP_WIDTH = 33
SHIP_HEIGHT = 17

WAITING_AREA_SIZE = 400.0
WAITING_AREA_OUTLINE = 5.0
LOADING_RADIUS = 50.0
LOADING_POINTS = 60
LOADING_START_ANGLE = 30.0
LOADING_END_ANGLE = 330.0
LOADING_ROTATION_SPEED = 150.0

QUIT_BUTTON_POSITION = Vector2(SCREEN_WIDTH / 2 - 150, SCREEN_HEIGHT / 2 - 50)


class Direction(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


def _waiting_area() -> Rect:
    """Bounds of the waiting area, outline included."""
    left = (SCREEN_WIDTH - WAITING_AREA_SIZE) / 2.0
    top = (SCREEN_HEIGHT - WAITING_AREA_SIZE) / 2.0
    return Rect(
        left - WAITING_AREA_OUTLINE,
        top - WAITING_AREA_OUTLINE,
        WAITING_AREA_SIZE + 2 * WAITING_AREA_OUTLINE,
        WAITING_AREA_SIZE + 2 * WAITING_AREA_OUTLINE,
    )


def _loading_circle() -> list[Vector2]:
    """Centre of the loading arc followed by the points of its rim."""
    center = Vector2(SCREEN_WIDTH / 2.0, SCREEN_HEIGHT / 2.0)
    points = [center]
    step = (LOADING_END_ANGLE - LOADING_START_ANGLE) / LOADING_POINTS
    for i in range(LOADING_POINTS + 1):
        radian = math.radians(LOADING_START_ANGLE + i * step)
        points.append(
            Vector2(
                center.x + LOADING_RADIUS * math.cos(radian),
                center.y + LOADING_RADIUS * math.sin(radian),
            )
        )
    return points


class Game:
    """State and per-frame logic of a running game."""

    def __init__(
        self,
        client_id: int = 0,
        key_mapping: KeyMapping | None = None,
        path_helper: PathHelper | None = None,
        send_position: Callable[[float, float, float, float, Direction | None], object]
        | None = None,
        on_fire: Callable[[], object] | None = None,
        on_quit: Callable[[], object] | None = None,
        play_sound: Callable[[str], object] | None = None,
        scroll_speed: float = 500.0,
        background_width: float = SCREEN_WIDTH,
        fade_speed: float = 300.0,
        text_fade_speed: float = 150.0,
        missile_cooldown: float = 0.3,
        entity_timeout: float = 5.0,
        position_update_interval: float = 0.05,
        quit_bounds: Rect | None = None,
    ) -> None:
        self.path_helper = path_helper if path_helper is not None else PathHelper()
        self.world = GameWorld(client_id, key_mapping, play_sound)
        self.play_sound = play_sound
        self.send_position = send_position
        self.on_fire = on_fire
        self.on_quit = on_quit

        self.stage_system = StageSystem(self.path_helper)
        self.stage_system.set_stage(1)
        self.background_path = self.stage_system.current_stage_data().background_path
        self.stage_messages: deque[int] = deque()

        self.scroll_speed = scroll_speed
        self.background_width = background_width
        self.view_center_x = 500.0

        self.fade_speed = fade_speed
        self.text_fade_speed = text_fade_speed
        self.is_fading = False
        self.fade_in = False
        self.fade_alpha = 0.0
        self.fade_color = Color(0, 0, 0, 0)
        self.is_text_fading = False
        self.text_fade_alpha = 0.0
        self.stage_text = ""
        self.stage_text_color = Color.WHITE
        self.show_stage_text = False
        self.stage_text_timer = 0.0

        self.is_waiting = True
        self.waiting_area = _waiting_area()
        self.loading_circle = _loading_circle()

        self.missile_cooldown = missile_cooldown
        self.missile_cooldown_timer = 0.0
        self.entity_timeout = entity_timeout
        self.position_update_interval = position_update_interval
        self.position_update_timer = 0.0

        self.quit_button_visible = False
        self.was_escape_pressed = False
        self.quit_bounds = quit_bounds

    @property
    def coordinator(self):
        return self.world.coordinator

    @property
    def player_entity(self):
        return self.world.player_entity

    @property
    def view_left_edge(self) -> float:
        return self.view_center_x - SCREEN_WIDTH / 2

    @property
    def fade_visible(self) -> bool:
        return self.is_fading or self.fade_alpha > 0

    def toggle_waiting(self, waiting: bool) -> None:
        self.is_waiting = waiting

    def _sound(self, name: str) -> None:
        if self.play_sound is not None:
            self.play_sound(name)

    def start_fade(self, to_black: bool) -> None:
        """Start fading the screen to black, or back in with the stage caption."""
        self.is_fading = True
        self.fade_in = to_black
        self.fade_alpha = 0.0 if to_black else 255.0
        self.fade_color = Color(0, 0, 0, int(self.fade_alpha))
        if not to_black:
            self.is_text_fading = True
            self.text_fade_alpha = 0.0
            self.stage_text_color = Color(255, 255, 255, 0)

    def _announce_stage(self, stage_number: int) -> None:
        self.stage_text = f"Stage {stage_number}"
        self.show_stage_text = True
        self.stage_text_timer = 0.0

    def handle_stage_change(self, new_stage: int) -> None:
        """Switch background, put every ship back at the start and show the stage."""
        self.start_fade(True)
        self.stage_system.set_stage(normalize_stage(new_stage))
        stage = self.stage_system.current_stage_data()
        self.background_path = self.path_helper.image_path(stage.background_path)

        coordinator = self.coordinator
        for entity in self.world.client_entities.values():
            coordinator.get_component(entity, TransformComponent).position = PLAYER_START
        coordinator.get_component(
            self.player_entity, TransformComponent
        ).position = PLAYER_START
        self._announce_stage(new_stage)
        self.start_fade(False)

    def _in_waiting_area(self, entity) -> bool:
        if not self.coordinator.has_component(entity, TransformComponent):
            return False
        position = self.coordinator.get_component(entity, TransformComponent).position
        return self.waiting_area.contains(position)

    def check_players_in_waiting_area(self) -> bool:
        """Leave the waiting room once every ship is inside the waiting area."""
        others = (
            entity
            for entity in self.world.client_entities.values()
            if entity != self.player_entity
        )
        all_in = all(self._in_waiting_area(entity) for entity in others)
        all_in = all_in and self._in_waiting_area(self.player_entity)
        if all_in and self.is_waiting:
            self.is_waiting = False
            self.start_fade(True)
            self._announce_stage(self.stage_system.current_stage)
            self.start_fade(False)
        return all_in

    def click(self, point: Vector2) -> None:
        """Left click: the quit button closes the game while it is shown."""
        if not self.quit_button_visible or self.quit_bounds is None:
            return
        if self.quit_bounds.contains(point):
            if self.on_quit is not None:
                self.on_quit()
            self.quit_button_visible = False

    def _update_loading_circle(self, delta_time: float) -> None:
        delta = math.radians(LOADING_ROTATION_SPEED * delta_time)
        center = self.loading_circle[0]
        rotated = [center]
        for point in self.loading_circle[1:]:
            offset = point - center
            angle = math.atan2(offset.y, offset.x) + delta
            distance = math.hypot(offset.x, offset.y)
            rotated.append(
                center + Vector2(math.cos(angle) * distance, math.sin(angle) * distance)
            )
        self.loading_circle = rotated

    def _update_fades(self, delta_time: float) -> None:
        if self.is_fading:
            if self.fade_in:
                self.fade_alpha += self.fade_speed * delta_time
                if self.fade_alpha >= 255.0:
                    self.fade_alpha = 255.0
                    self.is_fading = False
            else:
                self.fade_alpha -= self.fade_speed * delta_time
                if self.fade_alpha <= 0.0:
                    self.fade_alpha = 0.0
                    self.is_fading = False
                    if self.show_stage_text and not self.is_text_fading:
                        self.is_text_fading = True
                        self.text_fade_alpha = 0.0
            self.fade_color = Color(0, 0, 0, int(self.fade_alpha))
        if self.is_text_fading:
            self.text_fade_alpha += self.text_fade_speed * delta_time
            if self.text_fade_alpha >= 255.0:
                self.text_fade_alpha = 255.0
                self.is_text_fading = False
                self.show_stage_text = False
                self.stage_text_timer = 0.0
            self.stage_text_color = Color(255, 255, 255, int(self.text_fade_alpha))

    def _expire_entities(self, delta_time: float) -> None:
        world = self.world
        for entity_id in list(world.entity_last_update_time):
            world.entity_last_update_time[entity_id] += delta_time
            if world.entity_last_update_time[entity_id] >= self.entity_timeout:
                if entity_id in world.game_entities:
                    world.handle_entity_destroy(entity_id)
                world.entity_last_update_time.pop(entity_id, None)

    def _interpolate_players(self, delta_time: float) -> None:
        world = self.world
        for client_id, data in world.interpolation.items():
            entity = world.client_entities.get(client_id)
            if entity is None:
                continue
            transform = self.coordinator.get_component(entity, TransformComponent)
            data.elapsed_time = min(data.elapsed_time + delta_time, data.total_time)
            t = data.elapsed_time / data.total_time
            transform.position = data.start_position + (
                data.target_position - data.start_position
            ) * t

    def _animate_entities(self, delta_time: float) -> None:
        coordinator = self.coordinator
        for entity in list(self.world.game_entities.values()):
            kind = coordinator.get_component(entity, TypeComponent).type
            if kind not in (EntityType.MONSTER, EntityType.POWER_UP):
                continue
            if not coordinator.has_component(entity, AnimationComponent):
                continue
            animation = coordinator.get_component(entity, AnimationComponent)
            if kind == EntityType.MONSTER:
                rect = animate_monster(animation, delta_time)
            else:
                rect = animate_power_up(animation, delta_time)
            if rect is not None:
                coordinator.get_component(entity, SpriteComponent).texture_rect = rect

    def update(self, delta_time: float, pressed_keys: Collection[Key]) -> None:
        """Advance the game by one frame with the given keys held down."""
        world = self.world
        coordinator = self.coordinator
        player = self.player_entity

        world.input_system.update(pressed_keys)
        if self.is_waiting:
            self.check_players_in_waiting_area()
            self._update_loading_circle(delta_time)
        self._update_fades(delta_time)
        self._expire_entities(delta_time)
        self._interpolate_players(delta_time)

        state = coordinator.get_component(player, InputComponent)
        velocity = coordinator.get_component(player, VelocityComponent)
        transform = coordinator.get_component(player, TransformComponent)

        vx = vy = 0.0
        direction: Direction | None = None
        if state.up:
            vy -= MOVEMENT_SPEED
            direction = Direction.UP
        if state.down:
            vy += MOVEMENT_SPEED
            direction = Direction.DOWN
        if state.left:
            vx -= MOVEMENT_SPEED
            direction = Direction.LEFT
        if state.right:
            vx += MOVEMENT_SPEED
            direction = Direction.RIGHT

        self.missile_cooldown_timer += delta_time
        if state.pressed and self.missile_cooldown_timer >= self.missile_cooldown:
            if self.on_fire is not None:
                self.on_fire()
            world.laser_system.add_laser_effect(player)
            self.missile_cooldown_timer = 0.0
            self._sound(SOUND_SHOOT)

        if vx != 0.0 and vy != 0.0:
            vx /= math.sqrt(2.0)
            vy /= math.sqrt(2.0)
        velocity.velocity = Vector2(vx, vy)

        if self.stage_messages:
            self.handle_stage_change(self.stage_messages.popleft())

        world.explosion_system.update(delta_time)
        sprite = coordinator.get_component(player, SpriteComponent)
        sprite.texture_rect = ship_frame_rect(sprite.texture_rect.top, vy)
        transform.position = transform.position + velocity.velocity * delta_time
        self._animate_entities(delta_time)

        max_x = SCREEN_WIDTH - SHIP_WIDTH * transform.scale.x
        max_y = SCREEN_HEIGHT - SHIP_HEIGHT * transform.scale.y
        transform.position = Vector2(
            min(max(transform.position.x, 0.0), max_x),
            min(max(transform.position.y, 0.0), max_y),
        )

        world.movement_system.update(delta_time)
        world.laser_system.update(delta_time)

        self.position_update_timer += delta_time
        if self.position_update_timer >= self.position_update_interval:
            if self.send_position is not None:
                position = coordinator.get_component(player, TransformComponent).position
                self.send_position(
                    position.x, position.y, velocity.velocity.x, velocity.velocity.y,
                    direction,
                )
            self.position_update_timer = 0.0

        self.view_center_x -= self.scroll_speed * delta_time
        if self.view_left_edge <= 0:
            self.view_center_x += self.background_width

        escape = Key.ESCAPE in pressed_keys
        if escape and not self.was_escape_pressed:
            self.quit_button_visible = not self.quit_button_visible
        self.was_escape_pressed = escape