import math

import pytest

from rtypeclient.components import EntityType, TransformComponent
from rtypeclient.game import Direction, Game
from rtypeclient.geometry import Rect, Vector2
from rtypeclient.keymapping import Key
from rtypeclient.pathhelper import PathHelper
from rtypeclient.stage import normalize_stage


@pytest.fixture
def game():
    return Game(client_id=0, path_helper=PathHelper(base_dir="/base/"))


def _player_position(game):
    return game.coordinator.get_component(game.player_entity, TransformComponent).position


def _set_player_position(game, position):
    game.coordinator.get_component(
        game.player_entity, TransformComponent
    ).position = position


def test_start_fade_to_black(game):
    game.start_fade(True)
    assert game.is_fading and game.fade_in
    assert game.fade_alpha == 0.0


def test_start_fade_back_in_starts_text_fade(game):
    game.start_fade(False)
    assert game.fade_alpha == 255.0
    assert game.is_text_fading
    assert game.text_fade_alpha == 0.0
    assert game.stage_text_color.a == 0


def test_stage_change_resets_positions_and_caption(game):
    _set_player_position(game, Vector2(10, 10))
    game.handle_stage_change(3)
    assert game.stage_system.current_stage == 3
    assert game.stage_text == "Stage 3"
    assert game.show_stage_text
    assert _player_position(game) == Vector2(400, 540)
    assert game.background_path.endswith("game_lava.png")
    assert game.background_path.startswith("/base/")


def test_stage_change_past_last_stage_cycles(game):
    game.handle_stage_change(7)
    assert game.stage_system.current_stage == normalize_stage(7)
    assert game.stage_text == "Stage 7"


def test_waiting_until_player_in_area(game):
    assert game.check_players_in_waiting_area() is False
    assert game.is_waiting
    _set_player_position(game, Vector2(960, 540))
    assert game.check_players_in_waiting_area() is True
    assert not game.is_waiting
    assert game.stage_text == "Stage 1"


def test_other_player_outside_area_keeps_waiting(game):
    game.world.handle_position_update(1, 10, 10, 0, 0)
    _set_player_position(game, Vector2(960, 540))
    assert game.check_players_in_waiting_area() is False
    assert game.is_waiting


def test_moving_up_decreases_y_and_sends_position():
    sent = []
    game = Game(
        path_helper=PathHelper(base_dir="/base/"),
        send_position=lambda *args: sent.append(args),
    )
    before = _player_position(game)
    game.update(0.05, {Key.UP})
    after = _player_position(game)
    assert after.y < before.y
    assert after.x == before.x
    assert len(sent) == 1
    assert sent[0][4] is Direction.UP
    assert sent[0][1] == after.y


def test_player_clamped_to_screen(game):
    _set_player_position(game, Vector2(-100, -100))
    game.update(0.01, set())
    position = _player_position(game)
    assert position.x >= 0.0
    assert position.y >= 0.0


def test_escape_toggles_quit_once_per_press(game):
    game.update(0.01, {Key.ESCAPE})
    assert game.quit_button_visible
    game.update(0.01, {Key.ESCAPE})
    assert game.quit_button_visible
    game.update(0.01, set())
    game.update(0.01, {Key.ESCAPE})
    assert not game.quit_button_visible


def test_quit_click_calls_callback():
    quits = []
    game = Game(
        path_helper=PathHelper(base_dir="/base/"),
        on_quit=lambda: quits.append(True),
        quit_bounds=Rect(810, 490, 300, 100),
    )
    game.update(0.01, {Key.ESCAPE})
    game.click(Vector2(900, 520))
    assert quits == [True]
    assert not game.quit_button_visible


def test_stale_entities_time_out():
    game = Game(path_helper=PathHelper(base_dir="/base/"), entity_timeout=1.0)
    game.world.handle_entity_spawn(42, EntityType.MONSTER, 100, 100, 0, 0, 0, 0)
    assert 42 in game.world.game_entities
    game.update(1.5, set())
    assert 42 not in game.world.game_entities
    assert 42 not in game.world.entity_last_update_time


def test_stage_message_applied_on_update(game):
    game.stage_messages.append(2)
    game.update(0.01, set())
    assert game.stage_system.current_stage == 2
    assert not game.stage_messages


def test_fade_finishes_after_long_frame(game):
    game.start_fade(False)
    game.update(10.0, set())
    assert game.fade_alpha == 0.0
    assert not game.is_fading
    assert not game.fade_visible


def test_other_player_reaches_interpolated_target(game):
    game.world.handle_position_update(1, 500, 600, 0, 0)
    game.world.handle_position_update(1, 600, 600, 0, 0)
    game.update(0.05, set())
    entity = game.world.client_entities[1]
    position = game.coordinator.get_component(entity, TransformComponent).position
    assert position == Vector2(600, 600)


def test_view_left_edge_stays_positive(game):
    for _ in range(10):
        game.update(0.1, set())
        assert game.view_left_edge > 0


def test_loading_circle_rotation_keeps_radius(game):
    center = game.loading_circle[0]
    game.update(0.2, set())
    assert game.loading_circle[0] == center
    for point in game.loading_circle[1:]:
        offset = point - center
        assert math.hypot(offset.x, offset.y) == pytest.approx(50.0)