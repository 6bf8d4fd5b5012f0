"""
physics_core.py: Deterministic dino kinematics, animation timing and background scroll.
"""

import random
from typing import List, Optional

from .constants import (
    GameConfig, CLOUD_WIDTH, CLOUD_MIN_Y, CLOUD_Y_RANGE, CLOUD_MIN_SPEED,
    CLOUD_SPEED_RANGE, CLOUD_RESPAWN_SPREAD
)
from .data_models import Dino, DinoMode, Cloud


class PhysicsCore:
    """
    Per-tick physics for the dino and the decorative clouds.
    All velocities are in pixels per tick; only animation uses elapsed time.
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.cloud_rng = random.Random(seed)

    def apply_gravity_and_movement(self, y: float, velocity: float) -> tuple:
        """
        Calculates new position and velocity after one tick.
        """
        velocity += self.config.gravity
        velocity = min(velocity, self.config.max_fall_speed)
        y += velocity

        y = round(y, 4)
        velocity = round(velocity, 4)

        return y, velocity

    def is_grounded(self, dino: Dino) -> bool:
        return dino.y >= self.config.ground_y

    def jump(self, dino: Dino) -> bool:
        """Launches the dino if it stands on the ground. Returns True on launch."""
        if dino.mode is DinoMode.JUMPING or not self.is_grounded(dino):
            return False
        dino.velocity_y = self.config.jump_impulse
        dino.set_mode(DinoMode.JUMPING)
        return True

    def duck(self, dino: Dino) -> bool:
        if not self.is_grounded(dino):
            return False
        dino.set_mode(DinoMode.DUCKING)
        return True

    def respawn(self, dino: Dino):
        dino.x = self.config.dino_x
        dino.y = self.config.ground_y
        dino.velocity_y = 0.0
        dino.mode = DinoMode.RUNNING
        dino.animation_frame = 0
        dino.animation_elapsed = 0.0

    def step_dino(self, dino: Dino, duck_held: bool, dt_ms: float):
        """
        Deterministic single-tick update. Mutates the dino.
        """
        # 1. Ducking ends as soon as the input is released
        if not duck_held and dino.mode is DinoMode.DUCKING:
            dino.set_mode(DinoMode.RUNNING)

        # 2. Apply gravity and movement
        dino.y, dino.velocity_y = self.apply_gravity_and_movement(dino.y, dino.velocity_y)

        # 3. Ground clamp
        if dino.y >= self.config.ground_y:
            dino.y = self.config.ground_y
            dino.velocity_y = 0.0
            if dino.mode is DinoMode.JUMPING:
                dino.set_mode(DinoMode.RUNNING)

        # 4. Animation
        self.advance_animation(dino, dt_ms)

    def advance_animation(self, dino: Dino, dt_ms: float):
        sprite = dino.sprite
        dino.animation_elapsed += dt_ms
        if sprite.frame_time_ms > 0 and dino.animation_elapsed >= sprite.frame_time_ms:
            dino.animation_elapsed = 0.0
            dino.animation_frame = (dino.animation_frame + 1) % sprite.frames

    def make_clouds(self) -> List[Cloud]:
        """Scatters the initial clouds across the visible field."""
        rng = self.cloud_rng
        return [
            Cloud(
                x=rng.random() * self.config.field_width,
                y=CLOUD_MIN_Y + rng.random() * CLOUD_Y_RANGE,
                speed=CLOUD_MIN_SPEED + rng.random() * CLOUD_SPEED_RANGE,
            )
            for _ in range(self.config.cloud_count)
        ]

    def step_clouds(self, clouds: List[Cloud]):
        """Moves clouds left; a cloud leaving the field re-enters on the right."""
        rng = self.cloud_rng
        for cloud in clouds:
            cloud.x -= cloud.speed
            if cloud.x + CLOUD_WIDTH < 0:
                cloud.x = self.config.field_width + rng.random() * CLOUD_RESPAWN_SPREAD
                cloud.y = CLOUD_MIN_Y + rng.random() * CLOUD_Y_RANGE
                cloud.speed = CLOUD_MIN_SPEED + rng.random() * CLOUD_SPEED_RANGE
