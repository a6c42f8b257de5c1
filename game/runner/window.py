"""
Arcade front end for the runner
-------------------------------
Plays three collaborator roles around the World:
- clock: on_update hands Arcade's delta_time to World.step
- input decoder: raw key codes become KeyEvent values, buffered until
  the next update
- renderer: draws ground, player, obstacles, health text and the
  GAME OVER banner from world state

Play:
    python -m game.runner.window --seed 7
"""

from __future__ import annotations

import argparse
from typing import List, Optional

import arcade

from .config import (
    PLAYER_COLOR,
    GROUND_LEVEL,
    GROUND_SIZE,
    GROUND_EDGE,
    GROUND_COLOR,
    OBSTACLE_COLOR,
    GAME_OVER_TEXT,
    GAME_OVER_COLOR,
)
from .input import Key, KeyEvent
from .world import World


KEY_MAP = {
    arcade.key.SPACE: Key.SPACE,
    arcade.key.DOWN: Key.DOWN,
}


def decode_key(symbol: int) -> Key:
    return KEY_MAP.get(symbol, Key.OTHER)


class RunnerWindow(arcade.Window):
    """Arcade window for playing or watching a runner world"""

    def __init__(self, world: World, width: int = 800, height: int = 600,
                 interactive: bool = True, verbose: bool = False):
        super().__init__(width, height, "Runner - Arcade")
        self.world = world
        self.interactive = interactive
        self.verbose = verbose
        self._pending: List[KeyEvent] = []

        # Colors
        self.BG = (18, 18, 22)
        self.HUD_C = (220, 220, 220)
        self.background_color = self.BG

    # ----------------------------
    # Input decoding
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self._pending.append(KeyEvent.press(decode_key(symbol)))

    def on_key_release(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        self._pending.append(KeyEvent.release(decode_key(symbol)))

    # ----------------------------
    # Clock
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return

        events, self._pending = self._pending, []
        result = self.world.step(delta_time, events)

        if self.verbose:
            if result.hits:
                print(f"Hit! Health: {self.world.health}")
            if result.game_over:
                print(f"Game over after {self.world.frame} frames. Press SPACE to restart.")
            if result.restarted:
                print("Restarted")

    # ----------------------------
    # Rendering
    # ----------------------------

    def to_screen(self, x: float, y: float):
        """World origin is the window center"""
        return x + self.width / 2.0, y + self.height / 2.0

    def _draw_bottom_anchored(self, x, y, w, h, color):
        sx, sy = self.to_screen(x, y)
        arcade.draw_lrbt_rectangle_filled(sx - w / 2.0, sx + w / 2.0, sy, sy + h, color)

    def on_draw(self):
        """Draw the current game state"""
        self.clear()

        # Ground hangs below GROUND_LEVEL from its top-left corner
        left, top = self.to_screen(-GROUND_EDGE, GROUND_LEVEL)
        arcade.draw_lrbt_rectangle_filled(
            left, left + GROUND_SIZE[0], top - GROUND_SIZE[1], top, GROUND_COLOR
        )

        for o in self.world.obstacles:
            self._draw_bottom_anchored(o.x, o.y, o.width, o.height, OBSTACLE_COLOR)

        player = self.world.player
        if player is not None:
            self._draw_bottom_anchored(player.x, player.y, player.width, player.height, PLAYER_COLOR)

        if self.world.health_text is not None:
            arcade.draw_text(self.world.health_text, 12, self.height - 30, self.HUD_C, 16)

        if self.world.game_over_banner:
            arcade.draw_text(
                GAME_OVER_TEXT,
                self.width / 2.0,
                self.height / 2.0,
                GAME_OVER_COLOR,
                80,
                anchor_x="center",
                anchor_y="center",
            )


def play(seed: Optional[int] = None, width: int = 800, height: int = 600, verbose: bool = True):
    """Open a window and run an interactive session until it is closed"""
    world = World(seed=seed)
    RunnerWindow(world, width, height, interactive=True, verbose=verbose)
    print("SPACE: jump / restart, DOWN: crouch, ESC: quit")
    arcade.run()


def main():
    parser = argparse.ArgumentParser(description="Play the runner")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for obstacle placement (default: random)",
    )
    parser.add_argument("--width", type=int, default=800, help="Window width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Window height (default: 600)")
    parser.add_argument("--quiet", action="store_true", help="Do not print game events")

    args = parser.parse_args()
    play(seed=args.seed, width=args.width, height=args.height, verbose=not args.quiet)


if __name__ == "__main__":
    main()
