"""
engine_loop.py: The frame-driven entry point hosts use to run a game.
"""

from collections import deque
from typing import Any, Callable, Deque, Optional, Protocol

from .constants import COMMAND_QUEUE_SIZE
from .data_models import Command, GameSnapshot
from .game_state import GameStateMachine

FrameCallback = Callable[[float], None]
Renderer = Callable[[GameSnapshot], None]


class FrameScheduler(Protocol):
    """Host display-refresh hook, in the spirit of requestAnimationFrame."""

    def now_ms(self) -> float: ...

    def request_frame(self, callback: FrameCallback) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


class GameEngine:
    """
    Sequences one tick per display refresh: drain input, simulate, render.
    Only one frame is ever pending with the scheduler.
    """

    def __init__(self, scheduler: FrameScheduler,
                 renderer: Optional[Renderer] = None,
                 machine: Optional[GameStateMachine] = None,
                 queue_size: int = COMMAND_QUEUE_SIZE):
        self.scheduler = scheduler
        self.renderer = renderer
        self.machine = machine or GameStateMachine()
        self.commands: Deque[Command] = deque(maxlen=queue_size)

        self.running = False
        self.last_time = 0.0
        self.frame_handle: Any = None
        self._was_stopped = False

    def start(self):
        """Begins scheduling frames. A restart after stop() begins from the menu."""
        if self.running:
            return
        if self._was_stopped:
            self.machine.return_to_menu()
            self.commands.clear()
        self.running = True
        self.last_time = self.scheduler.now_ms()
        self.frame_handle = self.scheduler.request_frame(self._frame)

    def stop(self):
        if not self.running:
            return
        self.running = False
        self._was_stopped = True
        if self.frame_handle is not None:
            self.scheduler.cancel_frame(self.frame_handle)
            self.frame_handle = None

    def post(self, command: Command):
        """Queues a command from an input callback; applied at the next frame."""
        self.commands.append(command)

    def get_score(self) -> int:
        return self.machine.score

    def get_high_score(self) -> int:
        return self.machine.high_score

    def _frame(self, now_ms: float):
        self.frame_handle = None
        if not self.running:
            return

        delta_time = now_ms - self.last_time
        self.last_time = now_ms

        # 1. Consume input gathered since the previous frame
        while self.commands:
            self.machine.dispatch(self.commands.popleft())

        # 2. Simulate
        self.machine.tick(delta_time)

        # 3. Render
        if self.renderer is not None:
            self.renderer(self.machine.snapshot())

        if self.running:
            self.frame_handle = self.scheduler.request_frame(self._frame)
