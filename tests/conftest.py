import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from dino_runner.constants import GameConfig
from dino_runner.data_models import Obstacle, ObstacleKind
from dino_runner.game_state import GameStateMachine
from dino_runner.high_score_db import MemoryHighScoreStore


class FakeScheduler:
    """Manual clock: frames fire only when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self.pending = {}
        self.cancelled = []
        self._next = 0

    def now_ms(self):
        return self.now

    def request_frame(self, callback):
        self._next += 1
        self.pending[self._next] = callback
        return self._next

    def cancel_frame(self, handle):
        self.pending.pop(handle, None)
        self.cancelled.append(handle)

    def advance(self, ms=16.0):
        self.now += ms
        due, self.pending = self.pending, {}
        for callback in due.values():
            callback(self.now)


class RecordingCues:
    def __init__(self):
        self.played = []

    def play(self, cue, volume):
        self.played.append((cue, volume))

    def names(self):
        return [cue for cue, _ in self.played]


class BrokenCues:
    def play(self, cue, volume):
        raise RuntimeError("no audio device")


class BrokenStore:
    def read(self):
        raise OSError("disk gone")

    def write(self, score):
        raise OSError("disk gone")


def blocking_obstacle(machine):
    """A large cactus sitting on the dino, surviving one scroll step."""
    dino = machine.session.dino
    return Obstacle(kind=ObstacleKind.CACTUS_LARGE, x=dino.x + 3,
                    y=dino.y - 30, width=25, height=50)


@pytest.fixture
def quiet_config():
    """No spawns, no speed ramp: the world only moves what the test puts in it."""
    return GameConfig(min_gap=1e9, max_gap=1e9, speed_increase_interval=10 ** 9)


@pytest.fixture
def cues():
    return RecordingCues()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def machine(cues, store):
    return GameStateMachine(store=store, cues=cues, seed=1234)


@pytest.fixture
def scheduler():
    return FakeScheduler()
