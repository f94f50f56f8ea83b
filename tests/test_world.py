import pytest

from rtypeclient.animation import MISSILE_OFFSET, monster_spec
from rtypeclient.components import (
    AnimationComponent,
    EntityType,
    HealthComponent,
    LevelComponent,
    NameComponent,
    SpriteComponent,
    TransformComponent,
    TypeComponent,
    XPComponent,
)
from rtypeclient.geometry import Rect, Vector2
from rtypeclient.systems import EXPLOSION_MONSTER_TYPE
from rtypeclient.world import GameWorld, texture_rect_for_client


@pytest.fixture
def sounds():
    return []


@pytest.fixture
def world(sounds):
    return GameWorld(client_id=1, play_sound=sounds.append)


def test_texture_rect_for_client_pinned_values():
    assert texture_rect_for_client(0) == Rect(66, 17, 33, 17)
    assert texture_rect_for_client(1) == Rect(0, 0, 33, 17)
    assert texture_rect_for_client(-1) == Rect(0, 17, 33, 17)


def test_texture_rect_cycles_every_five():
    for client_id in range(5):
        assert texture_rect_for_client(client_id) == texture_rect_for_client(client_id + 5)


def test_player_ship_setup(world):
    c = world.coordinator
    transform = c.get_component(world.player_entity, TransformComponent)
    assert transform.position == Vector2(400, 540)
    assert c.get_component(world.player_entity, NameComponent).name == "Player"
    sprite = c.get_component(world.player_entity, SpriteComponent)
    assert sprite.texture_rect == texture_rect_for_client(1)


def test_spawn_monster(world):
    world.handle_entity_spawn(7, EntityType.MONSTER, 100.0, 200.0, -50.0, 0.0, 0, 0)
    entity = world.game_entities[7]
    c = world.coordinator
    transform = c.get_component(entity, TransformComponent)
    assert transform.position == Vector2(100.0, 200.0)
    assert transform.scale == monster_spec(0).scale
    assert c.get_component(entity, AnimationComponent).num_frames == monster_spec(0).num_frames
    assert world.entity_last_update_time[7] == 0.0


def test_spawn_existing_moves_entity(world):
    world.handle_entity_spawn(7, EntityType.MONSTER, 100.0, 200.0, 0.0, 0.0, 0, 1)
    entity = world.game_entities[7]
    world.handle_entity_spawn(7, EntityType.MONSTER, 300.0, 400.0, 0.0, 0.0, 0, 1)
    assert world.game_entities[7] == entity
    position = world.coordinator.get_component(entity, TransformComponent).position
    assert position == Vector2(300.0, 400.0)


def test_spawn_missile_is_offset(world):
    world.handle_entity_spawn(3, EntityType.MISSILE, 10.0, 20.0, 0.0, 0.0, 1, 0)
    entity = world.game_entities[3]
    position = world.coordinator.get_component(entity, TransformComponent).position
    assert position == Vector2(10.0, 20.0) + MISSILE_OFFSET
    assert 3 in world.entity_last_update_time


def test_spawn_power_up_not_timed(world):
    world.handle_entity_spawn(4, EntityType.POWER_UP, 10.0, 20.0, 0.0, 0.0, 0, 0)
    entity = world.game_entities[4]
    assert world.coordinator.has_component(entity, AnimationComponent)
    assert 4 not in world.entity_last_update_time


def test_spawn_unknown_monster_type_keeps_bare_entity(world):
    world.handle_entity_spawn(5, EntityType.MONSTER, 0.0, 0.0, 0.0, 0.0, 0, 99)
    entity = world.game_entities[5]
    assert world.coordinator.has_component(entity, TypeComponent)
    assert not world.coordinator.has_component(entity, TransformComponent)


def test_spawn_unknown_entity_type(world):
    world.handle_entity_spawn(6, 9, 0.0, 0.0, 0.0, 0.0, 0, 0)
    entity = world.game_entities[6]
    assert world.coordinator.get_component(entity, TypeComponent).type == 9


def test_update_unknown_entity_is_ignored(world):
    world.handle_entity_update(42, 1.0, 2.0)
    assert 42 not in world.entity_last_update_time


def test_destroy_monster_leaves_explosion(world, sounds):
    world.handle_entity_spawn(7, EntityType.MONSTER, 100.0, 200.0, 0.0, 0.0, 0, 0)
    world.handle_entity_destroy(7)
    assert 7 not in world.game_entities
    assert sounds == ["explosion"]
    explosions = [
        e
        for e in world.explosion_system.entities
        if world.coordinator.get_component(e, AnimationComponent).monster_type
        == EXPLOSION_MONSTER_TYPE
    ]
    assert len(explosions) == 1
    position = world.coordinator.get_component(explosions[0], TransformComponent).position
    assert position == Vector2(100.0, 200.0)


def test_destroy_missile_no_explosion(world, sounds):
    world.handle_entity_spawn(3, EntityType.MISSILE, 10.0, 20.0, 0.0, 0.0, 1, 0)
    world.handle_entity_destroy(3)
    assert sounds == []
    assert world.game_entities == {}


def test_position_update_creates_other_player(world):
    world.handle_position_update(2, 50.0, 60.0, 0.0, 10.0)
    entity = world.entity_by_client_id(2)
    assert entity is not None
    data = world.interpolation[2]
    assert data.target_position == Vector2(50.0, 60.0)
    assert data.start_position == Vector2(50.0, 60.0)
    sprite = world.coordinator.get_component(entity, SpriteComponent)
    assert sprite.texture_rect.left == 0
    assert sprite.texture_rect.top == texture_rect_for_client(2).top


def test_position_update_for_self_ignored(world):
    world.handle_position_update(1, 50.0, 60.0, 0.0, 0.0)
    assert world.client_entities == {}


def test_player_info_names_ships(world):
    world.handle_position_update(2, 50.0, 60.0, 0.0, 0.0)
    world.handle_player_info(2, "Alice")
    world.handle_player_info(1, "Bob")
    c = world.coordinator
    assert c.get_component(world.client_entities[2], NameComponent).name == "Alice"
    assert c.get_component(world.player_entity, NameComponent).name == "Bob"
    world.handle_player_info(3, "Carol")
    assert world.player_names[3] == "Carol"
    assert 3 not in world.client_entities


def test_score_update(world):
    world.handle_score_update(2, 300)
    assert world.score_system.all_scores == {2: 300}


def test_health_update_kills_player(world):
    world.handle_health_update(1, 0, 100)
    assert world.player_dead
    sprite = world.coordinator.get_component(world.player_entity, SpriteComponent)
    assert sprite.color.a == 128


def test_health_update_other_player(world):
    world.handle_position_update(2, 0.0, 0.0, 0.0, 0.0)
    world.handle_health_update(2, 40, 100)
    health = world.coordinator.get_component(world.client_entities[2], HealthComponent)
    assert (health.current_health, health.max_health) == (40, 100)
    assert not world.player_dead


def test_experience_update_self(world):
    world.handle_experience_update(1, 55, 3)
    c = world.coordinator
    assert c.get_component(world.player_entity, XPComponent).current_xp == 55
    assert c.get_component(world.player_entity, LevelComponent).current_level == 3


def test_experience_update_other(world):
    world.handle_position_update(2, 0.0, 0.0, 0.0, 0.0)
    world.handle_experience_update(2, 20, 4)
    entity = world.client_entities[2]
    assert world.coordinator.get_component(entity, LevelComponent).current_level == 4
    assert world.coordinator.get_component(world.player_entity, XPComponent).current_xp == 0


def test_remove_client_entity(world):
    world.handle_position_update(2, 0.0, 0.0, 0.0, 0.0)
    world.handle_player_info(2, "Alice")
    world.remove_client_entity(2)
    assert world.entity_by_client_id(2) is None
    assert 2 not in world.player_names
    assert 2 not in world.interpolation


def test_handle_fire_adds_laser_effect(world, sounds):
    world.handle_position_update(2, 0.0, 0.0, 0.0, 0.0)
    world.handle_fire(2)
    assert world.client_entities[2] in world.laser_system.effects
    assert sounds == ["shoot"]
    world.handle_fire(9)
    assert sounds == ["shoot"]