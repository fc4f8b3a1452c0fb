"""Synth driver: owns the output buffer and pushes it through the pipeline in blocks."""

from __future__ import annotations

import logging

import numpy as np

from .errors import InvalidConfigError
from .numeric import FloatArray
from .sound import Sound
from .transformers import Transformer, build_pipeline

_LOGGER = logging.getLogger("jfxr.synth")

DEFAULT_BLOCK_SIZE = 10_240


class Synth:
    """Incremental renderer for a single :class:`Sound`.

    Call :meth:`tick` repeatedly to render one block at a time (for example to
    keep a UI responsive), or :meth:`generate` to run to completion. The block
    size never changes the rendered samples. Stopping early leaves the
    unrendered tail of :attr:`samples` at zero.
    """

    def __init__(self, sound: Sound, *, block_size: int = DEFAULT_BLOCK_SIZE) -> None:
        if block_size < 1:
            raise InvalidConfigError(f"block_size must be positive, got {block_size}")
        self._sound = sound
        self._block_size = block_size
        self._samples: FloatArray = np.zeros(sound.num_samples(), dtype=np.float64)
        self._position = 0
        self._transformers: list[Transformer] = build_pipeline(sound)
        _LOGGER.debug(
            "Synth ready: name=%r waveform=%s samples=%d block_size=%d",
            sound.name,
            sound.waveform,
            self._samples.size,
            block_size,
        )

    @property
    def sound(self) -> Sound:
        return self._sound

    @property
    def sample_rate(self) -> float:
        return self._sound.sample_rate

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def samples(self) -> FloatArray:
        return self._samples

    @property
    def num_samples(self) -> int:
        return int(self._samples.size)

    @property
    def position(self) -> int:
        return self._position

    @property
    def progress(self) -> float:
        return self._position / self.num_samples

    @property
    def is_complete(self) -> bool:
        return self._position >= self.num_samples

    def tick(self) -> bool:
        """Render the next block. Returns True once every sample is rendered."""
        num_samples = self.num_samples
        if self._position >= num_samples:
            return True

        start = self._position
        end = min(start + self._block_size, num_samples)
        for transformer in self._transformers:
            transformer.run(self._sound, self._samples, start, end)
        self._position = end

        done = end >= num_samples
        if done:
            _LOGGER.debug("Synth finished %d samples for %r", num_samples, self._sound.name)
        return done

    def generate(self) -> FloatArray:
        while not self.tick():
            pass
        return self._samples


def generate(sound: Sound, *, block_size: int = DEFAULT_BLOCK_SIZE) -> FloatArray:
    """Render ``sound`` in one call at its own sample rate."""
    return Synth(sound, block_size=block_size).generate()
