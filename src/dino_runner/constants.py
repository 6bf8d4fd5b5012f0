"""
constants.py: Centralized configuration for the runner world, physics and difficulty curve.
"""

from dataclasses import dataclass

# -------- Field Config --------
FIELD_WIDTH = 800
FIELD_HEIGHT = 200
GROUND_LINE_Y = 170             # Where cacti stand and the ground is drawn

# -------- Dino Config --------
DINO_X = 50                     # Fixed dino X position
DINO_GROUND_Y = 150             # Top edge of the dino when standing
DINO_WIDTH = 40
DINO_HEIGHT = 40
DINO_DUCK_HEIGHT = 25
DINO_HITBOX_INSET = 5

# -------- Physics Config (pixels / tick) --------
GRAVITY_ACCEL = 0.6
JUMP_IMPULSE = -12.0            # Instantaneous upward velocity
MAX_FALL_VELOCITY = 12.0        # Clamping for stability

# -------- Animation Config (milliseconds) --------
RUN_FRAME_MS = 200
DUCK_FRAME_MS = 200

# -------- Obstacle Config --------
OBSTACLE_MIN_GAP = 400
OBSTACLE_MAX_GAP = 800
OBSTACLE_HITBOX_INSET = 3
CACTUS_SMALL_SIZE = (17, 35)    # (width, height)
CACTUS_LARGE_SIZE = (25, 50)
BIRD_SIZE = (40, 25)
BIRD_HIGH_ALTITUDE = 80         # Above the ground line
BIRD_LOW_ALTITUDE = 40

# -------- Difficulty Config --------
INITIAL_SPEED = 3.0
MAX_SPEED = 15.0
SPEED_INCREASE = 0.05
SPEED_INCREASE_INTERVAL = 150   # Every 150 points
SCORE_PER_TICK = 0.1
SCORE_CUE_INTERVAL = 100
GROUND_WRAP = -24               # Ground texture period

# -------- Cloud Config --------
CLOUD_COUNT = 5
CLOUD_WIDTH = 46
CLOUD_HEIGHT = 14
CLOUD_MIN_Y = 20
CLOUD_Y_RANGE = 60
CLOUD_MIN_SPEED = 0.5
CLOUD_SPEED_RANGE = 1.0
CLOUD_RESPAWN_SPREAD = 200

# -------- Audio Config --------
JUMP_VOLUME = 0.3
SCORE_VOLUME = 0.2
HIT_VOLUME = 0.5

# -------- Host Config --------
RENDER_FPS = 60
COMMAND_QUEUE_SIZE = 64
TOUCH_DUCK_ZONE_WIDTH = 80       # Right-hand strip where a finger press ducks
HIGH_SCORE_DB = "dino_runner.db"
HIGH_SCORE_KEY = "dino-high-score"


@dataclass(frozen=True)
class GameConfig:
    """Tunables handed to the engine. Defaults mirror the module constants."""
    field_width: float = FIELD_WIDTH
    field_height: float = FIELD_HEIGHT
    ground_line_y: float = GROUND_LINE_Y

    dino_x: float = DINO_X
    ground_y: float = DINO_GROUND_Y
    dino_width: float = DINO_WIDTH
    dino_height: float = DINO_HEIGHT
    duck_height: float = DINO_DUCK_HEIGHT
    dino_inset: float = DINO_HITBOX_INSET

    gravity: float = GRAVITY_ACCEL
    jump_impulse: float = JUMP_IMPULSE
    max_fall_speed: float = MAX_FALL_VELOCITY

    min_gap: float = OBSTACLE_MIN_GAP
    max_gap: float = OBSTACLE_MAX_GAP
    obstacle_inset: float = OBSTACLE_HITBOX_INSET

    initial_speed: float = INITIAL_SPEED
    max_speed: float = MAX_SPEED
    speed_increase: float = SPEED_INCREASE
    speed_increase_interval: int = SPEED_INCREASE_INTERVAL
    score_per_tick: float = SCORE_PER_TICK
    score_cue_interval: int = SCORE_CUE_INTERVAL
    ground_wrap: float = GROUND_WRAP

    cloud_count: int = CLOUD_COUNT
