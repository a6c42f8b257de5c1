"""
Fixed game constants for the runner

World units: the origin sits at the center of the view, y grows upward.
Speeds are in units per second, gravity in units per second squared.
"""

# Motion
GAME_SPEED = 400.0
JUMP_FORCE = 1000.0
GRAVITY = -4000.0

# Player
PLAYER_X = -300.0
PLAYER_SIZE = (30.0, 50.0)  # width, height
PLAYER_COLOR = (128, 255, 128)
INITIAL_HEALTH = 3

# Ground
GROUND_LEVEL = -100.0
GROUND_SIZE = (800.0, 10.0)
GROUND_EDGE = GROUND_SIZE[0] / 2.0
GROUND_COLOR = (128, 128, 128)

# Obstacles
SPAWN_INTERVAL = 1.0  # seconds
OBSTACLE_SIZE = (30.0, 30.0)
OBSTACLE_COLOR = (255, 0, 0)
OBSTACLE_Y_SPREAD = 50  # vertical offset is rng % spread

# HUD
HEALTH_TEXT_FORMAT = "Health: {}"
GAME_OVER_TEXT = "GAME OVER"
GAME_OVER_COLOR = (255, 0, 0)
