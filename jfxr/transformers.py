# pyright: reportUnknownMemberType=false

"""The nine synthesis stages.

Every stage processes the half-open sample range ``[start, end)`` of the
shared output buffer in place. Stages keep whatever state they need between
calls, so blocks must arrive in order, contiguously, and each block must go
through the stages in pipeline order. Positions that drive sweeps are
fractions of the whole buffer, never of the current block, which keeps the
output independent of the block size.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Literal, Protocol, TypeAlias

import numpy as np

from .numeric import (
    FloatArray,
    clamp,
    cos,
    divide,
    fract,
    power,
    round_half_away_array,
    saturating_index,
    sin,
)
from .oscillators import Oscillator, create_oscillator
from .sound import Sound

_LOGGER = logging.getLogger("jfxr.transformers")

FLANGER_MAX_OFFSET_SECONDS = 0.1
MIN_BIT_DEPTH = 1
MAX_BIT_DEPTH = 16


class Transformer(Protocol):
    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None: ...


class Generator:
    """Sums the fundamental and its harmonics into the buffer."""

    def __init__(self, sound: Sound) -> None:
        amp = 1.0
        total_amp = 0.0
        oscillators: list[Oscillator] = []
        for _ in range(sound.harmonics + 1):
            total_amp += amp
            amp *= sound.harmonics_falloff
            oscillators.append(create_oscillator(sound))
        self._oscillators = oscillators
        self._first_harmonic_amp = divide(1.0, total_amp)
        self.phase = 0.0

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        sample_rate = sound.sample_rate
        falloff = sound.harmonics_falloff
        first_amp = self._first_harmonic_amp
        harmonics = list(enumerate(self._oscillators, start=1))
        phase = self.phase
        block: list[float] = []
        for i in range(start, end):
            time = divide(i, sample_rate)
            phase = fract(phase + divide(sound.frequency_at(time), sample_rate))
            sample = 0.0
            amp = first_amp
            for multiple, oscillator in harmonics:
                harmonic_phase = fract(phase * multiple)
                sample += amp * oscillator.get_sample(sound, harmonic_phase, time)
                amp *= falloff
            block.append(sample)
        buffer[start:end] = block
        self.phase = phase


class Envelope:
    def __init__(self, sound: Sound) -> None:
        _ = sound

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        if (
            sound.attack == 0.0
            and sound.sustain_punch == 0.0
            and sound.decay == 0.0
            and sound.tremolo_depth == 0.0
        ):
            return
        sample_rate = sound.sample_rate
        block = buffer[start:end].tolist()
        for offset, sample in enumerate(block):
            block[offset] = sample * sound.amplitude_at(divide(start + offset, sample_rate))
        buffer[start:end] = block


class Flanger:
    """Mixes in a copy of the signal delayed by a swept offset (up to 100 ms)."""

    def __init__(self, sound: Sound) -> None:
        self.delay_line: list[float] | None = None
        if sound.flanger_offset != 0.0 or sound.flanger_offset_sweep != 0.0:
            span = sound.sample_rate * FLANGER_MAX_OFFSET_SECONDS
            # A zero or NaN sample rate leaves no room for a delay line.
            length = math.ceil(span) if span > 0.0 else 0
            self.delay_line = [0.0] * length
        self.cursor = 0

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        delay_line = self.delay_line
        if not delay_line:
            return
        num_samples = len(buffer)
        sample_rate = sound.sample_rate
        offset_ms = sound.flanger_offset
        sweep_ms = sound.flanger_offset_sweep
        length = len(delay_line)
        cursor = self.cursor
        block = buffer[start:end].tolist()
        for offset, sample in enumerate(block):
            i = start + offset
            delay_line[cursor] = sample
            delay = saturating_index(
                (offset_ms + i / num_samples * sweep_ms) / 1000.0 * sample_rate, length - 1
            )
            block[offset] = sample + delay_line[(cursor - delay) % length]
            cursor = (cursor + 1) % length
        buffer[start:end] = block
        self.cursor = cursor


class BitCrush:
    def __init__(self, sound: Sound) -> None:
        _ = sound

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        if sound.bit_crush == 0 and sound.bit_crush_sweep == 0:
            return
        num_samples = len(buffer)
        positions = np.arange(start, end, dtype=np.float64)
        bits = round_half_away_array(
            float(sound.bit_crush) + positions / num_samples * float(sound.bit_crush_sweep)
        )
        bits = np.clip(np.nan_to_num(bits, nan=0.0), MIN_BIT_DEPTH, MAX_BIT_DEPTH)
        steps = np.ldexp(1.0, bits.astype(np.int32))
        block = buffer[start:end]
        buffer[start:end] = -1.0 + 2.0 * round_half_away_array((0.5 + 0.5 * block) * steps) / steps


class LowPass:
    """Single-pole IIR low-pass with a per-sample (swept) cutoff."""

    def __init__(self, sound: Sound) -> None:
        _ = sound
        self.prev_output = 0.0

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        cutoff_base = sound.low_pass_cutoff
        sweep = sound.low_pass_cutoff_sweep
        sample_rate = sound.sample_rate
        nyquist = sound.nyquist
        if cutoff_base >= nyquist and cutoff_base + sweep >= nyquist:
            return
        num_samples = len(buffer)
        prev_output = self.prev_output
        block = buffer[start:end].tolist()
        for offset, sample in enumerate(block):
            fraction = (start + offset) / num_samples
            cutoff = clamp(cutoff_base + fraction * sweep, 0.0, nyquist)
            wc = divide(cutoff, sample_rate) * math.pi
            cos_wc = cos(wc)
            if cos_wc <= 0.0:
                alpha = 1.0
            else:
                # cos(wc) = 2a / (1 + a^2), solved for a and flipped to a smoothing factor.
                alpha = 1.0 - (1.0 / cos_wc - math.sqrt(1.0 / (cos_wc * cos_wc) - 1.0))
            prev_output = alpha * sample + (1.0 - alpha) * prev_output
            block[offset] = prev_output
        buffer[start:end] = block
        self.prev_output = prev_output


class HighPass:
    """Single-pole IIR high-pass with a per-sample (swept) cutoff."""

    def __init__(self, sound: Sound) -> None:
        _ = sound
        self.prev_input = 0.0
        self.prev_output = 0.0

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        cutoff_base = sound.high_pass_cutoff
        sweep = sound.high_pass_cutoff_sweep
        sample_rate = sound.sample_rate
        nyquist = sound.nyquist
        if cutoff_base <= 0.0 and cutoff_base + sweep <= 0.0:
            return
        num_samples = len(buffer)
        prev_input = self.prev_input
        prev_output = self.prev_output
        block = buffer[start:end].tolist()
        for offset, sample in enumerate(block):
            fraction = (start + offset) / num_samples
            cutoff = clamp(cutoff_base + fraction * sweep, 0.0, nyquist)
            wc = divide(cutoff, sample_rate) * math.pi
            # a = (1 - sin wc) / cos wc
            alpha = divide(1.0 - sin(wc), cos(wc))
            prev_output = alpha * (prev_output - prev_input + sample)
            prev_input = sample
            block[offset] = prev_output
        buffer[start:end] = block
        self.prev_input = prev_input
        self.prev_output = prev_output


class Compress:
    def __init__(self, sound: Sound) -> None:
        _ = sound

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        compression = sound.compression
        if compression == 1.0:
            return
        block = buffer[start:end].tolist()
        for offset, sample in enumerate(block):
            if sample >= 0.0:
                block[offset] = power(sample, compression)
            else:
                block[offset] = -power(-sample, compression)
        buffer[start:end] = block


NormalizeState = Literal["accumulating", "finalized"]


class Normalize:
    """Scales the finished buffer so its peak is 1.0.

    Peaks are accumulated block by block; the rescale runs once, over the
    whole buffer, on the block that reaches the end.
    """

    def __init__(self, sound: Sound) -> None:
        _ = sound
        self.max_sample = 0.0
        self.state: NormalizeState = "accumulating"

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        if not sound.normalization:
            return
        if self.state == "finalized":
            return
        # fmax skips NaN samples when tracking the peak.
        self.max_sample = float(np.fmax.reduce(np.abs(buffer[start:end]), initial=self.max_sample))
        if end < len(buffer):
            return
        with np.errstate(divide="ignore", invalid="ignore"):
            factor = np.float64(1.0) / np.float64(self.max_sample)
            if not np.isfinite(factor):
                _LOGGER.warning(
                    "Normalizing a silent buffer (peak=%r); output will not be finite.",
                    self.max_sample,
                )
            buffer[:end] *= factor
        self.state = "finalized"


class Amplify:
    def __init__(self, sound: Sound) -> None:
        _ = sound

    def run(self, sound: Sound, buffer: FloatArray, start: int, end: int) -> None:
        factor = sound.amplification / 100.0
        if factor == 1.0:
            return
        buffer[start:end] *= factor


TransformerFactory: TypeAlias = Callable[[Sound], Transformer]

PIPELINE: tuple[TransformerFactory, ...] = (
    Generator,
    Envelope,
    Flanger,
    BitCrush,
    LowPass,
    HighPass,
    Compress,
    Normalize,
    Amplify,
)


def build_pipeline(sound: Sound) -> list[Transformer]:
    """Instantiate every stage, in processing order, for one run."""
    return [stage(sound) for stage in PIPELINE]
