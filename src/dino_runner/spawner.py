"""
spawner.py: Procedural obstacle generation and scrolling.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import GameConfig
from .data_models import Obstacle, ObstacleKind, OBSTACLE_GEOMETRY

SPAWN_KINDS: Tuple[ObstacleKind, ...] = tuple(ObstacleKind)


def roll_spawn(rng_state: tuple, min_gap: float,
               max_gap: float) -> Tuple[ObstacleKind, float, tuple]:
    """
    Picks the next obstacle kind and the gap to the one after it.
    Pure over the RNG state: the same state always gives the same roll.
    """
    rng = random.Random()
    rng.setstate(rng_state)
    kind = rng.choice(SPAWN_KINDS)
    gap = rng.uniform(min_gap, max_gap)
    return kind, gap, rng.getstate()


@dataclass
class ObstacleSpawner:
    """Owns the spawn countdown and the seeded RNG state for one session."""
    config: GameConfig = field(default_factory=GameConfig)
    seed: Optional[int] = None
    distance_to_next_spawn: float = field(init=False)
    rng_state: tuple = field(init=False, repr=False)

    def __post_init__(self):
        self.rng_state = random.Random(self.seed).getstate()
        self.reset()

    def reset(self):
        self.distance_to_next_spawn = self.config.min_gap

    def make_obstacle(self, kind: ObstacleKind) -> Obstacle:
        """Builds an obstacle of the given kind at the right edge of the field."""
        width, height, altitude = OBSTACLE_GEOMETRY[kind]
        return Obstacle(
            kind=kind,
            x=float(self.config.field_width),
            y=float(self.config.ground_line_y - altitude),
            width=width,
            height=height,
        )

    def step(self, obstacles: List[Obstacle], speed: float) -> List[Obstacle]:
        """
        Scrolls obstacles left by speed, drops those fully off screen and
        spawns a new one when the countdown runs out. Returns the new list.
        """
        for obstacle in obstacles:
            obstacle.x -= speed
        live = [o for o in obstacles if o.x + o.width > 0]

        self.distance_to_next_spawn -= speed
        if self.distance_to_next_spawn <= 0:
            kind, gap, self.rng_state = roll_spawn(
                self.rng_state, self.config.min_gap, self.config.max_gap)
            live.append(self.make_obstacle(kind))
            self.distance_to_next_spawn = gap

        return live
