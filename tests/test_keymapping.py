import pytest

from rtypeclient.keymapping import Action, Key, KeyMapping


@pytest.mark.parametrize(
    "action, key",
    [
        (Action.MOVE_UP, Key.UP),
        (Action.MOVE_DOWN, Key.DOWN),
        (Action.MOVE_LEFT, Key.LEFT),
        (Action.MOVE_RIGHT, Key.RIGHT),
        (Action.FIRE, Key.SPACE),
    ],
)
def test_default_bindings(action, key):
    assert KeyMapping().key_for(action) is key


def test_set_key_round_trip():
    mapping = KeyMapping()
    mapping.set_key(Action.FIRE, Key.Z)
    assert mapping.key_for(Action.FIRE) is Key.Z
    assert mapping.key_for(Action.MOVE_UP) is Key.UP


def test_mappings_are_independent():
    first = KeyMapping()
    second = KeyMapping()
    first.set_key(Action.MOVE_UP, Key.W)
    assert second.key_for(Action.MOVE_UP) is Key.UP


def test_every_action_is_bound():
    mapping = KeyMapping()
    assert {action for action, _ in mapping.items()} == set(Action)


def test_unknown_action_raises():
    with pytest.raises(KeyError):
        KeyMapping().key_for("jump")