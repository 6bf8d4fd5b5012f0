"""
scoring.py: Score accrual, speed ramp and ground scroll.
"""

import math
from typing import Optional

from .constants import GameConfig
from .data_models import GameSession


class ScoreKeeper:
    """
    Advances score and difficulty by one tick.

    The increment is per tick, not per elapsed millisecond, so the score rate
    follows the host's frame rate. Speed steps up each time the floored score
    enters a new multiple of the increase interval.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def reset(self, session: GameSession):
        session.score = 0.0
        session.speed = self.config.initial_speed
        session.ground_offset = 0.0

    def step(self, session: GameSession) -> bool:
        """Updates the session. Returns True when a score cue boundary was crossed."""
        cfg = self.config
        before = math.floor(session.score)
        session.score = round(session.score + cfg.score_per_tick, 4)
        after = math.floor(session.score)

        if after // cfg.speed_increase_interval > before // cfg.speed_increase_interval:
            session.speed = min(round(session.speed + cfg.speed_increase, 4), cfg.max_speed)
        assert session.speed > 0, "speed must stay positive"

        session.ground_offset -= session.speed
        if session.ground_offset <= cfg.ground_wrap:
            session.ground_offset = 0.0

        return after // cfg.score_cue_interval > before // cfg.score_cue_interval
