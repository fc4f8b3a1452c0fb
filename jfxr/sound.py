"""The Sound parameter set and the time-dependent signal functions derived from it."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

from .numeric import cos, divide, fract, non_negative, sin

_LOGGER = logging.getLogger("jfxr.sound")

Waveform = Literal[
    "sine",
    "triangle",
    "sawtooth",
    "square",
    "tangent",
    "whistle",
    "breaker",
    "whitenoise",
    "pinknoise",
    "brownnoise",
]
WAVEFORMS: tuple[Waveform, ...] = get_args(Waveform)
NOISE_WAVEFORMS: frozenset[Waveform] = frozenset({"whitenoise", "pinknoise", "brownnoise"})

DEFAULT_SAMPLE_RATE = 44_100.0


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class Sound(BaseModel):
    """Complete parameter set for one sound effect.

    Attribute names are snake_case; the camelCase aliases are the keys used by
    the ``.jfxr`` file format. Values are not range-checked: anything finite is
    computed through, even when it falls outside the ranges in
    ``jfxr.parameters``.
    """

    name: str = Field(default="", alias="_name")

    # Sound properties
    sample_rate: float = DEFAULT_SAMPLE_RATE

    # Amplitude
    attack: float = 0.0
    sustain: float = 0.0
    sustain_punch: float = 0.0
    decay: float = 0.0
    tremolo_depth: float = 0.0
    tremolo_frequency: float = 10.0

    # Pitch
    frequency: float = 500.0
    frequency_sweep: float = 0.0
    frequency_delta_sweep: float = 0.0
    repeat_frequency: float = 0.0
    frequency_jump1_onset: float = 33.0
    frequency_jump1_amount: float = 0.0
    frequency_jump2_onset: float = 66.0
    frequency_jump2_amount: float = 0.0

    # Harmonics
    harmonics: int = 0
    harmonics_falloff: float = 0.5

    # Tone
    waveform: Waveform = "sine"
    interpolate_noise: bool = True
    vibrato_depth: float = 0.0
    vibrato_frequency: float = 10.0
    square_duty: float = 50.0
    square_duty_sweep: float = 0.0

    # Filters
    flanger_offset: float = 0.0
    flanger_offset_sweep: float = 0.0
    bit_crush: int = 16
    bit_crush_sweep: int = 0
    low_pass_cutoff: float = 22_050.0
    low_pass_cutoff_sweep: float = 0.0
    high_pass_cutoff: float = 0.0
    high_pass_cutoff_sweep: float = 0.0

    # Output
    compression: float = 1.0
    normalization: bool = True
    amplification: float = 100.0

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=_to_camel,
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sound":
        """Create a sound from a dict keyed by attribute names or camelCase aliases."""
        return cls.model_validate(data)

    def to_dict(self, *, by_alias: bool = True) -> dict[str, Any]:
        return self.model_dump(by_alias=by_alias)

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2.0

    def duration(self) -> float:
        return self.attack + self.sustain + self.decay

    def num_samples(self) -> int:
        """Length of the output buffer; never less than one sample."""
        total = self.sample_rate * self.duration()
        if not total > 1.0:
            return 1
        return math.ceil(total)

    def effective_repeat_frequency(self) -> float:
        # A zero duration gives an infinite floor; the frequency functions
        # then see a NaN fraction and fall back to their clamps.
        return max(self.repeat_frequency, divide(1.0, self.duration()))

    def fraction_in_repetition(self, time: float) -> float:
        return fract(time * self.effective_repeat_frequency())

    def frequency_at(self, time: float) -> float:
        fraction = self.fraction_in_repetition(time)
        freq = (
            self.frequency
            + fraction * self.frequency_sweep
            + fraction * fraction * self.frequency_delta_sweep
        )
        if fraction > self.frequency_jump1_onset / 100.0:
            freq *= 1.0 + self.frequency_jump1_amount / 100.0
        if fraction > self.frequency_jump2_onset / 100.0:
            freq *= 1.0 + self.frequency_jump2_amount / 100.0
        if self.vibrato_depth != 0.0:
            freq += 1.0 - self.vibrato_depth * (
                0.5 - 0.5 * sin(2.0 * math.pi * time * self.vibrato_frequency)
            )
        return non_negative(freq)

    def square_duty_at(self, time: float) -> float:
        fraction = self.fraction_in_repetition(time)
        return (self.square_duty + fraction * self.square_duty_sweep) / 100.0

    def amplitude_at(self, time: float) -> float:
        attack = self.attack
        sustain = self.sustain
        decay = self.decay
        if time < attack:
            amp = time / attack
        elif time < attack + sustain:
            amp = 1.0 + self.sustain_punch / 100.0 * (1.0 - (time - attack) / sustain)
        elif time < attack + sustain + decay:
            amp = 1.0 - (time - attack - sustain) / decay
        else:
            # Reachable through roundoff: the sample count is rounded up.
            amp = 0.0
        if self.tremolo_depth != 0.0:
            amp *= 1.0 - (self.tremolo_depth / 100.0) * (
                0.5 + 0.5 * cos(2.0 * math.pi * time * self.tremolo_frequency)
            )
        return amp
