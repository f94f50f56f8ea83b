# rtypeclient

This package holds the game-state core of a client for a multiplayer side-scrolling shooter. It covers the entities and their components, the systems that act on them, the stages, the scenes, the settings, the connection form fields, and the per-frame game update. It is pure Python and has no dependencies.

## Modules

- `rtypeclient.geometry`
  - `Vector2`, `Rect` (with `contains`) and `Color` value types.
  - Named colours such as `Color.RED` and `Color.TRANSPARENT`.
- `rtypeclient.pathhelper`
  - `PathHelper` builds font, image, sound, shader and asset paths under `../../assets/`, relative to a base directory.
  - By default that base directory is the one returned by `executable_dir()`.
- `rtypeclient.keymapping`
  - The `Action` and `Key` enums.
  - `KeyMapping`, with `key_for` and `set_key`. The defaults are arrow keys to move and `Key.SPACE` to fire.
- `rtypeclient.ecs`
  - `EntityManager`, `ComponentManager`, `SystemManager`, a `System` base class, and a `Coordinator` that ties them together.
  - Creating more than `MAX_ENTITIES` entities raises `EntityLimitError`.
- `rtypeclient.components`
  - Component dataclasses: `TransformComponent`, `VelocityComponent`, `SpriteComponent`, `InputComponent`, `NameComponent`, `HealthComponent`, `XPComponent`, `LevelComponent`, `AnimationComponent`, `TypeComponent` and `ScoreComponent`.
  - The `EntityType` enum.
  - `register_all(coordinator)`.
  - `setup_spaceship(...)`, which gives an entity everything a player ship carries.
- `rtypeclient.systems`
  - Systems: `MovementSystem`, `RenderSystem`, `ExplosionSystem`, `InputSystem`, `LaserSystem`, `ScoreSystem`, `HealthSystem` and `LevelSystem`.
  - `RenderSystem.render` calls a `draw(sprite, transform)` callback that you supply.
  - `HealthSystem.bars` and `LevelSystem.status` return what should be drawn.
  - Helper functions: `health_fraction`, `xp_fraction` and `score_color`.
- `rtypeclient.stage`
  - `Stage`, `StageSystem` (with `set_stage` and `current_stage_data`) and `normalize_stage`.
  - `normalize_stage` makes stages after 5 cycle through stages 2 to 4.
- `rtypeclient.animation`
  - `MonsterSpec` and `monster_spec`.
  - Frame rectangles: `monster_frame_rect`, `power_up_frame_rect` and `ship_frame_rect`.
  - `animate_monster` and `animate_power_up`.
- `rtypeclient.scenes`
  - The `Scene` enum.
  - `SceneManager`, which handles scene switching, disconnections, and clamped brightness and sound levels.
  - `fit_viewport`, which computes a letterboxed viewport.
- `rtypeclient.settings`
  - `Settings`, the logic of the settings overlay:
    - clicks on the aspect-ratio, FPS, sound and brightness buttons;
    - key rebinding through `click` and `handle_key_pressed`.
  - `action_to_string` and `key_to_string`.
- `rtypeclient.textinput`
  - `TextField`, which has a cursor and a maximum rendered width.
  - `ConnectionForm`, with the name, ip and port fields, `select`, `type_text` and `player_name`.
- `rtypeclient.world`
  - `GameWorld` holds handlers for server messages:
    - `handle_entity_spawn`, `handle_entity_update` and `handle_entity_destroy`;
    - `handle_position_update` and `handle_player_info`;
    - `handle_score_update`, `handle_health_update` and `handle_experience_update`;
    - `remove_client_entity` and `set_player_dead`.
  - `texture_rect_for_client`.
- `rtypeclient.game`
  - `Game` wraps a `GameWorld` and adds the waiting room, stage transitions with fades, player movement and firing, background scrolling and the quit toggle.
  - Call `Game.update(delta_time, pressed_keys)` once per frame.
  - To change stage, push stage numbers onto `Game.stage_messages` or call `handle_stage_change`.

## Example

```python
from rtypeclient.components import TransformComponent, VelocityComponent, register_all
from rtypeclient.ecs import Coordinator
from rtypeclient.geometry import Vector2
from rtypeclient.systems import MovementSystem

coordinator = Coordinator()
register_all(coordinator)
movement = coordinator.register_system(MovementSystem)
coordinator.set_system_signature(MovementSystem, TransformComponent, VelocityComponent)

ship = coordinator.create_entity()
coordinator.add_component(ship, TransformComponent(position=Vector2(0, 0)))
coordinator.add_component(ship, VelocityComponent(Vector2(100, 0)))
movement.update(0.5)
print(coordinator.get_component(ship, TransformComponent).position)  # Vector2(x=50.0, y=0.0)
```

The next example drives a whole game frame:

```python
from rtypeclient.game import Game
from rtypeclient.keymapping import Key

game = Game(client_id=0, send_position=lambda x, y, vx, vy, direction: None)
game.update(0.016, {Key.RIGHT, Key.SPACE})
```

## What this package does not do

This package does no drawing, opens no window, and plays no audio. Its systems return data, or call the callbacks you pass them:

- `draw`;
- `play_sound`;
- `send_position`;
- `on_fire`;
- `on_quit`.

It has no network code. Server messages have to be decoded elsewhere and handed to the `GameWorld` and `Game` handlers. It has no command-line program and no main loop.

## Installation

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```