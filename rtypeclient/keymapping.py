"""Player actions and the keys bound to them."""

from __future__ import annotations

from enum import Enum, auto


class Action(Enum):
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    FIRE = auto()


class Key(Enum):
    A = auto()
    B = auto()
    C = auto()
    D = auto()
    E = auto()
    F = auto()
    G = auto()
    H = auto()
    I = auto()  # noqa: E741
    J = auto()
    K = auto()
    L = auto()
    M = auto()
    N = auto()
    O = auto()  # noqa: E741
    P = auto()
    Q = auto()
    R = auto()
    S = auto()
    T = auto()
    U = auto()
    V = auto()
    W = auto()
    X = auto()
    Y = auto()
    Z = auto()
    SPACE = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ESCAPE = auto()
    ENTER = auto()
    BACKSPACE = auto()
    F11 = auto()
    LCONTROL = auto()
    RCONTROL = auto()
    LSYSTEM = auto()
    RSYSTEM = auto()
    UNKNOWN = auto()


_DEFAULT_KEYS = {
    Action.MOVE_UP: Key.UP,
    Action.MOVE_DOWN: Key.DOWN,
    Action.MOVE_LEFT: Key.LEFT,
    Action.MOVE_RIGHT: Key.RIGHT,
    Action.FIRE: Key.SPACE,
}


class KeyMapping:
    """Maps each action to the key that triggers it."""

    def __init__(self) -> None:
        self._keys: dict[Action, Key] = dict(_DEFAULT_KEYS)

    def key_for(self, action: Action) -> Key:
        """The key bound to an action; KeyError if the action is unbound."""
        return self._keys[action]

    def set_key(self, action: Action, key: Key) -> None:
        self._keys[action] = key

    def items(self):
        return self._keys.items()