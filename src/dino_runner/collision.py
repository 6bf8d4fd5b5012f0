"""
collision.py: Axis-aligned hit-box construction and overlap tests.
"""

from typing import Iterable, Optional

from .constants import GameConfig
from .data_models import Dino, Obstacle, HitBox


def dino_height(dino: Dino, config: GameConfig) -> float:
    """Sprite height for the dino's current posture."""
    return config.duck_height if dino.sprite.crouched else config.dino_height


def dino_hitbox(dino: Dino, config: GameConfig) -> HitBox:
    """The dino's sprite box shrunk on all sides; shorter while ducking."""
    inset = config.dino_inset
    return HitBox(
        x=dino.x + inset,
        y=dino.y + inset,
        width=config.dino_width - 2 * inset,
        height=dino_height(dino, config) - 2 * inset,
    )


def obstacle_hitbox(obstacle: Obstacle, config: GameConfig) -> HitBox:
    inset = config.obstacle_inset
    return HitBox(
        x=obstacle.x + inset,
        y=obstacle.y + inset,
        width=obstacle.width - 2 * inset,
        height=obstacle.height - 2 * inset,
    )


def boxes_overlap(a: HitBox, b: HitBox) -> bool:
    """Strict overlap on both axes. Boxes sharing only an edge do not collide."""
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def first_collision(dino: Dino, obstacles: Iterable[Obstacle],
                    config: GameConfig) -> Optional[Obstacle]:
    """Returns the first obstacle, in collection order, hitting the dino."""
    dino_box = dino_hitbox(dino, config)
    for obstacle in obstacles:
        if boxes_overlap(dino_box, obstacle_hitbox(obstacle, config)):
            return obstacle
    return None
