from game.runner.input import Key, KeyAction, KeyEvent, JUMP_KEY, CROUCH_KEY, RESTART_KEY, presses
from game.runner.world import World


def test_only_bound_keys_are_distinguished() -> None:
    assert set(Key) == {JUMP_KEY, CROUCH_KEY, RESTART_KEY, Key.OTHER}


def test_event_constructors() -> None:
    assert KeyEvent.press(Key.SPACE) == KeyEvent(Key.SPACE, KeyAction.PRESS)
    assert KeyEvent.release(Key.DOWN).released
    assert not KeyEvent.release(Key.DOWN).pressed


def test_presses_keeps_order_and_filters_key() -> None:
    events = [
        KeyEvent.press(Key.SPACE),
        KeyEvent.release(Key.SPACE),
        KeyEvent.press(Key.OTHER),
        KeyEvent.press(Key.SPACE),
    ]
    assert presses(events, Key.SPACE) == [events[0], events[3]]
    assert presses(events, Key.DOWN) == []


def test_unbound_keys_do_nothing() -> None:
    world = World(seed=0)
    events = [KeyEvent.press(Key.OTHER), KeyEvent.release(Key.OTHER)]

    result = world.step(1 / 60, events)

    assert not result.jumped
    assert not world.player.crouching
