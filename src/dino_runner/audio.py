"""Cue playback for the runner through pygame.mixer.

Cues are short square-wave tones synthesised at first use, so the game needs
no sound files:

    cues = ToneCues()
    cues.play("jump", 0.3)

All operations fail gracefully if the mixer can't initialize; the failure is
printed once and every call becomes a no-op.
"""

from __future__ import annotations

from array import array
from typing import Dict, Optional, Protocol, Tuple

import pygame

# cue -> (frequency Hz, duration ms)
CUE_TONES: Dict[str, Tuple[int, int]] = {
    "jump": (520, 80),
    "score": (880, 120),
    "hit": (150, 250),
}


class CuePlayer(Protocol):
    def play(self, cue: str, volume: float) -> None: ...


class SilentCues:
    """Cue player that drops everything."""

    def play(self, cue: str, volume: float) -> None:
        return None


def square_wave(frequency: int, duration_ms: int, sample_rate: int,
                channels: int, amplitude: int = 8000) -> bytes:
    """Signed 16-bit interleaved samples of a square wave."""
    total = int(sample_rate * duration_ms / 1000)
    period = max(1, int(sample_rate / frequency))
    samples = array("h")
    for i in range(total):
        value = amplitude if (i % period) < period // 2 else -amplitude
        samples.extend([value] * channels)
    return samples.tobytes()


class ToneCues:
    """Fire-and-forget cue player.

    Notes
    -----
    - Initializes pygame.mixer lazily on first use.
    - Volume is applied per channel so cue volumes don't leak into each other.
    - Unknown cue ids are reported once and ignored.
    """

    def __init__(self, *, muted: bool = False, frequency: int = 44100) -> None:
        self.muted = muted
        self.frequency = frequency
        self._inited = False
        self._failed_init = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._missing_warned: set = set()

    def ensure_init(self) -> bool:
        """Initialize pygame.mixer and build the tones. Returns True on success.

        Safe to call multiple times.
        """
        if self._inited:
            return True
        if self._failed_init:
            return False
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=self.frequency, size=-16, channels=2, buffer=512)
            rate, _, channels = pygame.mixer.get_init()
            for cue, (tone, duration) in CUE_TONES.items():
                self._sounds[cue] = pygame.mixer.Sound(
                    buffer=square_wave(tone, duration, rate, channels))
            self._inited = True
        except Exception as e:  # pragma: no cover - environment dependent
            print(f"[ToneCues] Mixer init failed: {e}")
            self._failed_init = True
        return self._inited

    def set_muted(self, muted: bool) -> None:
        self.muted = muted

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def play(self, cue: str, volume: float) -> Optional[pygame.mixer.Channel]:
        if self.muted or not self.ensure_init():
            return None
        snd = self._sounds.get(cue)
        if snd is None:
            if cue not in self._missing_warned:
                print(f"[ToneCues] Warning: unknown cue '{cue}'")
                self._missing_warned.add(cue)
            return None
        ch = pygame.mixer.find_channel(True)
        if ch is None:
            return None
        ch.set_volume(max(0.0, min(1.0, float(volume))))
        ch.play(snd)
        return ch
