"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from .constants import (
    DINO_X, DINO_GROUND_Y, RUN_FRAME_MS,
    DUCK_FRAME_MS, INITIAL_SPEED, CACTUS_SMALL_SIZE, CACTUS_LARGE_SIZE,
    BIRD_SIZE, BIRD_HIGH_ALTITUDE, BIRD_LOW_ALTITUDE
)


class Phase(Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class DinoMode(Enum):
    RUNNING = "running"
    JUMPING = "jumping"
    DUCKING = "ducking"
    DEAD = "dead"


class ObstacleKind(Enum):
    CACTUS_SMALL = "cactus_small"
    CACTUS_LARGE = "cactus_large"
    BIRD_HIGH = "bird_high"
    BIRD_LOW = "bird_low"


class Command(Enum):
    """Input vocabulary shared by every physical input source."""
    START = "start"
    JUMP = "jump"
    DUCK_HOLD = "duck_hold"
    DUCK_RELEASE = "duck_release"


@dataclass(frozen=True)
class ModeSprite:
    """Animation timing and posture for one dino mode."""
    frames: int
    frame_time_ms: float
    crouched: bool = False


MODE_SPRITES: Dict[DinoMode, ModeSprite] = {
    DinoMode.RUNNING: ModeSprite(frames=2, frame_time_ms=RUN_FRAME_MS),
    DinoMode.JUMPING: ModeSprite(frames=1, frame_time_ms=0),
    DinoMode.DUCKING: ModeSprite(frames=2, frame_time_ms=DUCK_FRAME_MS, crouched=True),
    DinoMode.DEAD: ModeSprite(frames=1, frame_time_ms=0),
}
assert set(MODE_SPRITES) == set(DinoMode), "every dino mode needs a sprite record"

# (width, height, altitude of the top edge above the ground line)
OBSTACLE_GEOMETRY: Dict[ObstacleKind, Tuple[float, float, float]] = {
    ObstacleKind.CACTUS_SMALL: (CACTUS_SMALL_SIZE[0], CACTUS_SMALL_SIZE[1], CACTUS_SMALL_SIZE[1]),
    ObstacleKind.CACTUS_LARGE: (CACTUS_LARGE_SIZE[0], CACTUS_LARGE_SIZE[1], CACTUS_LARGE_SIZE[1]),
    ObstacleKind.BIRD_HIGH: (BIRD_SIZE[0], BIRD_SIZE[1], BIRD_HIGH_ALTITUDE),
    ObstacleKind.BIRD_LOW: (BIRD_SIZE[0], BIRD_SIZE[1], BIRD_LOW_ALTITUDE),
}
assert set(OBSTACLE_GEOMETRY) == set(ObstacleKind), "every obstacle kind needs geometry"


@dataclass
class Dino:
    """The player character."""
    x: float = DINO_X
    y: float = DINO_GROUND_Y
    velocity_y: float = 0.0
    mode: DinoMode = DinoMode.RUNNING
    animation_frame: int = 0
    animation_elapsed: float = 0.0

    def set_mode(self, mode: DinoMode):
        """Switches mode, restarting the animation cycle on an actual change."""
        if mode is self.mode:
            return
        self.mode = mode
        self.animation_frame = 0
        self.animation_elapsed = 0.0

    @property
    def sprite(self) -> ModeSprite:
        return MODE_SPRITES[self.mode]


@dataclass
class Obstacle:
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float


@dataclass
class Cloud:
    """Decorative background element."""
    x: float
    y: float
    speed: float


@dataclass(frozen=True)
class HitBox:
    x: float
    y: float
    width: float
    height: float


@dataclass
class GameSession:
    """Top-level mutable state of one play session."""
    phase: Phase = Phase.MENU
    score: float = 0.0
    high_score: int = 0
    speed: float = INITIAL_SPEED
    ground_offset: float = 0.0
    duck_held: bool = False
    dino: Dino = field(default_factory=Dino)
    obstacles: List[Obstacle] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=list)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a session handed to the renderer once per frame."""
    phase: Phase
    score: int
    high_score: int
    speed: float
    ground_offset: float
    dino: Dino
    obstacles: Tuple[Obstacle, ...]
    clouds: Tuple[Cloud, ...]
