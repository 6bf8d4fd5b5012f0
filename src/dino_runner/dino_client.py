#!/usr/bin/env python3
"""
dino_client.py

Reference pygame host: window, frame scheduler, input mapping and rendering.
The simulation itself lives in game_state / engine_loop.
"""

import argparse
import sqlite3
from typing import Dict, Optional

import pygame

from .audio import ToneCues
from .collision import dino_height
from .constants import (
    GameConfig, FIELD_WIDTH, FIELD_HEIGHT, GROUND_LINE_Y,
    CLOUD_WIDTH, CLOUD_HEIGHT, RENDER_FPS, HIGH_SCORE_DB, TOUCH_DUCK_ZONE_WIDTH
)
from .data_models import Command, DinoMode, GameSnapshot, Phase
from .engine_loop import FrameCallback, GameEngine
from .game_state import GameStateMachine
from .high_score_db import HighScoreStore, MemoryHighScoreStore, SqliteHighScoreStore

KEY_DOWN_COMMANDS = {
    pygame.K_SPACE: Command.START,
    pygame.K_UP: Command.START,
    pygame.K_DOWN: Command.DUCK_HOLD,
}
KEY_UP_COMMANDS = {
    pygame.K_DOWN: Command.DUCK_RELEASE,
}


def map_event(event: pygame.event.Event) -> Optional[Command]:
    """Translates keyboard, mouse and touch events to the command vocabulary."""
    if event.type == pygame.KEYDOWN:
        return KEY_DOWN_COMMANDS.get(event.key)
    if event.type == pygame.KEYUP:
        return KEY_UP_COMMANDS.get(event.key)
    if event.type == pygame.MOUSEBUTTONDOWN:
        # pygame also synthesises a mouse click for every finger press
        if getattr(event, "touch", False):
            return None
        return Command.START
    if event.type == pygame.FINGERDOWN:
        # finger x is normalised to 0..1 across the window
        if event.x * FIELD_WIDTH >= FIELD_WIDTH - TOUCH_DUCK_ZONE_WIDTH:
            return Command.DUCK_HOLD
        return Command.START
    if event.type == pygame.FINGERUP:
        return Command.DUCK_RELEASE
    return None


def open_store(db_file: str) -> HighScoreStore:
    """Opens the sqlite high-score file, keeping scores in memory if that fails."""
    try:
        return SqliteHighScoreStore(db_file)
    except sqlite3.Error as e:
        print(f"Could not open high score file {db_file}: {e}. Scores will not be saved.")
        return MemoryHighScoreStore()


# ----------------- Frame Scheduler -----------------

class PygameScheduler:
    """Runs at most one pending frame callback per clock tick."""

    def __init__(self, fps: int = RENDER_FPS):
        self.fps = fps
        self.clock = pygame.time.Clock()
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 0

    def now_ms(self) -> float:
        return float(pygame.time.get_ticks())

    def request_frame(self, callback: FrameCallback) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel_frame(self, handle: int):
        self._pending.pop(handle, None)

    def wait_and_fire(self):
        """Waits for the next refresh and runs the callbacks that were pending."""
        self.clock.tick(self.fps)
        due, self._pending = self._pending, {}
        now = self.now_ms()
        for callback in due.values():
            callback(now)


# ----------------- Renderer -----------------

class Renderer:
    def __init__(self, screen: pygame.Surface, config: Optional[GameConfig] = None):
        self.screen = screen
        self.config = config or GameConfig()
        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)

    def __call__(self, snap: GameSnapshot):
        screen = self.screen
        screen.fill((135, 206, 235))
        white = (255, 255, 255)
        dark = (60, 60, 60)

        # Clouds
        for cloud in snap.clouds:
            pygame.draw.ellipse(screen, white, (cloud.x, cloud.y, CLOUD_WIDTH, CLOUD_HEIGHT))

        # Ground with scrolling texture
        pygame.draw.rect(screen, (160, 82, 45),
                         (0, GROUND_LINE_Y, FIELD_WIDTH, FIELD_HEIGHT - GROUND_LINE_Y))
        pygame.draw.line(screen, dark, (0, GROUND_LINE_Y), (FIELD_WIDTH, GROUND_LINE_Y), 2)
        x = snap.ground_offset
        while x < FIELD_WIDTH:
            pygame.draw.line(screen, (120, 60, 30), (x, GROUND_LINE_Y + 6), (x + 8, GROUND_LINE_Y + 6))
            x += 24

        # Obstacles
        for obstacle in snap.obstacles:
            color = (34, 139, 34) if obstacle.kind.name.startswith("CACTUS") else (90, 90, 90)
            pygame.draw.rect(screen, color,
                             (obstacle.x, obstacle.y, obstacle.width, obstacle.height))

        # Dino
        dino = snap.dino
        height = dino_height(dino, self.config)
        color = (139, 69, 19) if dino.mode is DinoMode.DEAD else (50, 205, 50)
        pygame.draw.rect(screen, color, (dino.x, dino.y, self.config.dino_width, height))
        if dino.mode is DinoMode.RUNNING:
            leg = 4 if dino.animation_frame else 0
            pygame.draw.rect(screen, color, (dino.x + 8 + leg, dino.y + height, 6, 4))

        # HUD
        score_text = self.font.render(
            f"HI {snap.high_score:05d}  {snap.score:05d}", True, dark)
        screen.blit(score_text, (FIELD_WIDTH - score_text.get_width() - 20, 12))

        if snap.phase is Phase.MENU:
            msg = self.large_font.render("Press SPACE or click to start", True, dark)
            screen.blit(msg, (FIELD_WIDTH // 2 - msg.get_width() // 2, FIELD_HEIGHT // 2 - 40))
        elif snap.phase is Phase.GAME_OVER:
            msg = self.large_font.render("GAME OVER - SPACE to restart", True, (200, 30, 30))
            screen.blit(msg, (FIELD_WIDTH // 2 - msg.get_width() // 2, FIELD_HEIGHT // 2 - 40))

        pygame.display.flip()


# ----------------- Game Client -----------------

class DinoClient:
    def __init__(self, db_file: str = HIGH_SCORE_DB, seed: Optional[int] = None,
                 fps: int = RENDER_FPS, muted: bool = False):
        pygame.init()
        self.screen = pygame.display.set_mode((FIELD_WIDTH, FIELD_HEIGHT))
        pygame.display.set_caption("Dino Runner")

        self.store = open_store(db_file)
        self.cues = ToneCues(muted=muted)
        self.scheduler = PygameScheduler(fps)
        config = GameConfig()
        machine = GameStateMachine(config, store=self.store, cues=self.cues, seed=seed)
        self.engine = GameEngine(self.scheduler, Renderer(self.screen, config), machine)

    def handle_events(self) -> bool:
        """Feeds input to the engine. Returns False when the window should close."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_m:
                print(f"Sound {'off' if self.cues.toggle_mute() else 'on'}")
                continue
            command = map_event(event)
            if command is not None:
                self.engine.post(command)
        return True

    def run(self):
        """The main client execution loop."""
        print(f"High score: {self.engine.get_high_score()}")
        self.engine.start()
        try:
            while self.handle_events():
                self.scheduler.wait_and_fire()
        finally:
            self.engine.stop()
            print(f"Final score: {self.engine.get_score()}  High score: {self.engine.get_high_score()}")
            self.store.close()
            pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Side-scrolling dino runner")
    parser.add_argument("--db", default=HIGH_SCORE_DB, help="sqlite file holding the high score")
    parser.add_argument("--seed", type=int, default=None, help="seed for obstacle generation")
    parser.add_argument("--fps", type=int, default=RENDER_FPS, help="frame rate cap")
    parser.add_argument("--mute", action="store_true", help="start with sound off")
    args = parser.parse_args(argv)

    DinoClient(db_file=args.db, seed=args.seed, fps=args.fps, muted=args.mute).run()


if __name__ == "__main__":
    main()
