from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Callable, cast

import numpy as np
import soundfile as sf  # type: ignore[import]
from numpy.typing import NDArray

from .errors import AudioExportError

_LOGGER = logging.getLogger("jfxr.audio")

Float32Array = NDArray[np.float32]
AudioNumbers = NDArray[np.floating[Any]] | Sequence[float]

WAV_SUBTYPE = "FLOAT"


def to_float32(samples: AudioNumbers) -> Float32Array:
    """Flatten rendered samples to a mono float32 array."""

    return np.asarray(samples, dtype=np.float32).reshape(-1)


def _resolve_sample_rate(sample_rate: float) -> int:
    rate = float(sample_rate)
    if not np.isfinite(rate) or rate <= 0.0 or rate != int(rate):
        raise AudioExportError(f"WAV sample rate must be a positive integer, got {sample_rate!r}")
    return int(rate)


def write_wav(path: str | Path, samples: AudioNumbers, *, sample_rate: float) -> Path:
    """Write rendered samples to a mono 32-bit float wav file.

    Samples are written as-is: values outside [-1, 1] are preserved by the
    float format rather than clipped.
    """

    target = Path(path)
    rate = _resolve_sample_rate(sample_rate)
    match samples:
        case str() | bytes():
            raise AudioExportError("samples must be a sequence of numbers")
        case _:
            pass
    mono = to_float32(samples)
    if mono.size == 0:
        raise AudioExportError("No samples to write")
    if not np.all(np.isfinite(mono)):
        raise AudioExportError("Rendered audio contains non-finite samples")

    write_fn = getattr(sf, "write", None)
    assert callable(write_fn)
    write_audio = cast(Callable[..., None], write_fn)
    try:
        write_audio(target, mono, rate, subtype=WAV_SUBTYPE)
    except (RuntimeError, OSError) as exc:
        # soundfile reports libsndfile failures as RuntimeError subclasses.
        raise AudioExportError(f"Failed to write {target}: {exc}") from exc
    _LOGGER.info("Wrote %d samples at %d Hz to %s", mono.size, rate, target)
    return target
