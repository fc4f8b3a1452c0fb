"""Waveform generators.

Each oscillator maps a phase in [0, 1) (and the current time, for the
square duty sweep) to one sample in roughly [-1, 1]. Periodic shapes are
stateless; the noise shapes keep a PRNG stream and their last draws, so a
separate instance is needed per harmonic.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Callable, Protocol, TypeAlias

from .numeric import clamp, fract, lerp
from .prng import NOISE_SEED, Random
from .sound import Sound, Waveform

_TWO_PI = 2.0 * math.pi
_BREAKER_SHIFT = math.sqrt(0.75)


class Oscillator(Protocol):
    def get_sample(self, sound: Sound, phase: float, time: float) -> float: ...


class SineOscillator:
    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        return math.sin(_TWO_PI * phase)


class TriangleOscillator:
    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        if phase < 0.25:
            return 4.0 * phase
        if phase < 0.75:
            return 2.0 - 4.0 * phase
        return -4.0 + 4.0 * phase


class SawtoothOscillator:
    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        if phase < 0.5:
            return 2.0 * phase
        return -2.0 + 2.0 * phase


class SquareOscillator:
    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        if phase < sound.square_duty_at(time):
            return 1.0
        return -1.0


class TangentOscillator:
    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        # Arbitrary cutoff so the poles don't wreck normalization.
        return clamp(0.3 * math.tan(math.pi * phase), -2.0, 2.0)


class WhistleOscillator:
    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        return 0.75 * math.sin(_TWO_PI * phase) + 0.25 * math.sin(40.0 * math.pi * phase)


class BreakerOscillator:
    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        # Shifted so the wave starts at a zero crossing.
        p = fract(phase + _BREAKER_SHIFT)
        return -1.0 + 2.0 * abs(1.0 - p * p * 2.0)


class _NoiseOscillator(ABC):
    """Draws a new value twice per cycle, on each wrap of the doubled phase."""

    def __init__(self, sound: Sound) -> None:
        self._interpolate = sound.interpolate_noise
        self._random = Random(NOISE_SEED)
        self._prev_phase = 0.0
        self._prev_random = 0.0
        self._curr_random = 0.0

    @abstractmethod
    def _next_value(self) -> float: ...

    def get_sample(self, sound: Sound, phase: float, time: float) -> float:
        # Two draws per cycle are needed to reach the requested frequency.
        phase = fract(phase * 2.0)
        if phase < self._prev_phase:
            self._prev_random = self._curr_random
            self._curr_random = self._next_value()
        self._prev_phase = phase
        if self._interpolate:
            return lerp(self._prev_random, self._curr_random, phase)
        return self._curr_random


class WhiteNoiseOscillator(_NoiseOscillator):
    def _next_value(self) -> float:
        return self._random.uniform(-1.0, 1.0)


class PinkNoiseOscillator(_NoiseOscillator):
    """Paul Kellet's "pk3" pink noise filter over white noise."""

    def __init__(self, sound: Sound) -> None:
        super().__init__(sound)
        self._b = [0.0] * 7

    def _next_value(self) -> float:
        white = self._random.uniform(-1.0, 1.0)
        b = self._b
        b[0] = 0.99886 * b[0] + white * 0.0555179
        b[1] = 0.99332 * b[1] + white * 0.0750759
        b[2] = 0.96900 * b[2] + white * 0.1538520
        b[3] = 0.86650 * b[3] + white * 0.3104856
        b[4] = 0.55000 * b[4] + white * 0.5329522
        b[5] = -0.7616 * b[5] + white * 0.0168980
        value = (b[0] + b[1] + b[2] + b[3] + b[4] + b[5] + b[6] + white * 0.5362) / 7.0
        b[6] = white * 0.115926
        return value


class BrownNoiseOscillator(_NoiseOscillator):
    def _next_value(self) -> float:
        return clamp(self._curr_random + 0.1 * self._random.uniform(-1.0, 1.0), -1.0, 1.0)


OscillatorFactory: TypeAlias = Callable[[Sound], Oscillator]


def _stateless(cls: type[Oscillator]) -> OscillatorFactory:
    return lambda _sound: cls()


OSCILLATORS: Mapping[Waveform, OscillatorFactory] = MappingProxyType(
    {
        "sine": _stateless(SineOscillator),
        "triangle": _stateless(TriangleOscillator),
        "sawtooth": _stateless(SawtoothOscillator),
        "square": _stateless(SquareOscillator),
        "tangent": _stateless(TangentOscillator),
        "whistle": _stateless(WhistleOscillator),
        "breaker": _stateless(BreakerOscillator),
        "whitenoise": WhiteNoiseOscillator,
        "pinknoise": PinkNoiseOscillator,
        "brownnoise": BrownNoiseOscillator,
    }
)


def create_oscillator(sound: Sound) -> Oscillator:
    """Build a fresh oscillator for the sound's waveform."""
    try:
        factory = OSCILLATORS[sound.waveform]
    except KeyError as exc:
        raise ValueError(f"Unknown waveform: {sound.waveform!r}. Valid: {list(OSCILLATORS)}") from exc
    return factory(sound)
