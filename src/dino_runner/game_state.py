"""
game_state.py: Phase transitions and per-tick orchestration of one play session.
"""

import math
from dataclasses import replace
from typing import Optional

from .audio import CuePlayer, SilentCues
from .collision import first_collision
from .constants import GameConfig, JUMP_VOLUME, SCORE_VOLUME, HIT_VOLUME
from .data_models import (
    GameSession, GameSnapshot, Dino, DinoMode, Phase, Command
)
from .high_score_db import HighScoreStore, MemoryHighScoreStore
from .physics_core import PhysicsCore
from .scoring import ScoreKeeper
from .spawner import ObstacleSpawner

START_COMMANDS = (Command.START, Command.JUMP)


class GameStateMachine:
    """
    Owns the session and moves it between MENU, PLAYING and GAME_OVER.

    Commands are applied immediately by dispatch(); tick() advances the world
    by one frame and only does work while PLAYING. Audio and storage failures
    are reported and dropped so the simulation never stops on them.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 store: Optional[HighScoreStore] = None,
                 cues: Optional[CuePlayer] = None,
                 seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.cues = cues if cues is not None else SilentCues()

        self.physics = PhysicsCore(self.config, seed)
        self.spawner = ObstacleSpawner(self.config, seed)
        self.scorer = ScoreKeeper(self.config)

        self.session = GameSession(
            high_score=self._load_high_score(),
            speed=self.config.initial_speed,
            dino=Dino(x=self.config.dino_x, y=self.config.ground_y),
            clouds=self.physics.make_clouds(),
        )

    # ---------- Commands ----------

    def dispatch(self, command: Command):
        """Applies one input command to the current phase. Invalid ones are ignored."""
        session = self.session

        if command is Command.DUCK_HOLD:
            session.duck_held = True
        elif command is Command.DUCK_RELEASE:
            session.duck_held = False

        phase = session.phase
        if phase is Phase.MENU or phase is Phase.GAME_OVER:
            if command in START_COMMANDS:
                self.start_run()
        elif phase is Phase.PLAYING:
            if command in START_COMMANDS:
                if self.physics.jump(session.dino):
                    self._emit("jump", JUMP_VOLUME)
            elif command is Command.DUCK_HOLD:
                self.physics.duck(session.dino)
        else:
            assert False, f"unknown phase {phase}"

    def start_run(self):
        """Enters PLAYING with a fresh run; the same reset serves the first run and restarts."""
        self._reset_run()
        self.session.phase = Phase.PLAYING

    def return_to_menu(self):
        self._reset_run()
        self.session.duck_held = False
        self.session.phase = Phase.MENU

    def _reset_run(self):
        session = self.session
        self.scorer.reset(session)
        self.physics.respawn(session.dino)
        session.obstacles = []
        self.spawner.reset()

    # ---------- Simulation ----------

    def tick(self, dt_ms: float):
        """Advances one frame: physics, spawner, clouds, score/difficulty, collision."""
        session = self.session
        if session.phase is not Phase.PLAYING:
            return
        score_before = session.score

        self.physics.step_dino(session.dino, session.duck_held, dt_ms)
        session.obstacles = self.spawner.step(session.obstacles, session.speed)
        self.physics.step_clouds(session.clouds)

        if self.scorer.step(session):
            self._emit("score", SCORE_VOLUME)

        if first_collision(session.dino, session.obstacles, self.config) is not None:
            self._game_over()

        assert session.score >= score_before, "score went backwards"
        assert session.dino.y <= self.config.ground_y, "dino below the ground line"
        assert session.dino.velocity_y <= self.config.max_fall_speed

    def _game_over(self):
        session = self.session
        session.phase = Phase.GAME_OVER
        session.dino.set_mode(DinoMode.DEAD)
        self._emit("hit", HIT_VOLUME)

        final = math.floor(session.score)
        if final > session.high_score:
            session.high_score = final
            self._save_high_score(final)

    # ---------- Queries ----------

    @property
    def score(self) -> int:
        return math.floor(self.session.score)

    @property
    def high_score(self) -> int:
        return self.session.high_score

    def snapshot(self) -> GameSnapshot:
        """Copies the session into a read-only view for rendering."""
        session = self.session
        return GameSnapshot(
            phase=session.phase,
            score=self.score,
            high_score=session.high_score,
            speed=session.speed,
            ground_offset=session.ground_offset,
            dino=replace(session.dino),
            obstacles=tuple(replace(o) for o in session.obstacles),
            clouds=tuple(replace(c) for c in session.clouds),
        )

    # ---------- Collaborator boundaries ----------

    def _emit(self, cue: str, volume: float):
        try:
            self.cues.play(cue, volume)
        except Exception as e:
            print(f"Audio cue '{cue}' failed: {e}")

    def _load_high_score(self) -> int:
        try:
            return max(int(self.store.read()), 0)
        except Exception as e:
            print(f"Could not read high score: {e}")
            return 0

    def _save_high_score(self, score: int):
        try:
            self.store.write(score)
        except Exception as e:
            print(f"Could not save high score {score}: {e}")
