"""
Decoded keyboard events consumed by the simulation

The core never polls a device. Whatever owns the window translates raw
key codes into KeyEvent values and hands the batch to World.step.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class Key(Enum):
    SPACE = "space"
    DOWN = "down"
    OTHER = "other"


class KeyAction(Enum):
    PRESS = "press"
    RELEASE = "release"


JUMP_KEY = Key.SPACE
CROUCH_KEY = Key.DOWN
RESTART_KEY = Key.SPACE


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    action: KeyAction

    @property
    def pressed(self) -> bool:
        return self.action is KeyAction.PRESS

    @property
    def released(self) -> bool:
        return self.action is KeyAction.RELEASE

    @classmethod
    def press(cls, key: Key) -> "KeyEvent":
        return cls(key, KeyAction.PRESS)

    @classmethod
    def release(cls, key: Key) -> "KeyEvent":
        return cls(key, KeyAction.RELEASE)


def presses(events: Iterable[KeyEvent], key: Key) -> List[KeyEvent]:
    """All press events for a given key, in arrival order"""
    return [e for e in events if e.pressed and e.key is key]
