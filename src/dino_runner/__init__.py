"""
dino_runner: a side-scrolling runner with a deterministic simulation core.
"""

from .constants import GameConfig
from .data_models import Command, DinoMode, GameSnapshot, ObstacleKind, Phase
from .engine_loop import GameEngine
from .game_state import GameStateMachine

__all__ = [
    "Command", "DinoMode", "GameConfig", "GameEngine", "GameSnapshot",
    "GameStateMachine", "ObstacleKind", "Phase",
]
