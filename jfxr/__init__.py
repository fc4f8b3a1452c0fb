from __future__ import annotations

from .audio import to_float32, write_wav
from .errors import (
    AudioExportError,
    InvalidConfigError,
    InvalidFieldError,
    JfxrError,
    JfxrFormatError,
    JsonSyntaxError,
    MissingFieldError,
    NotAnObjectError,
    UnsupportedVersionError,
)
from .fileformat import VERSION, load_jfxr, read_jfxr, save_jfxr, write_jfxr
from .logging_utils import configure_logging as _configure_logging
from .parameters import PARAMETER_GROUPS, PARAMETERS, ParameterInfo, describe
from .sound import DEFAULT_SAMPLE_RATE, NOISE_WAVEFORMS, WAVEFORMS, Sound, Waveform
from .synth import DEFAULT_BLOCK_SIZE, Synth, generate

__all__ = [
    "DEFAULT_BLOCK_SIZE",
    "DEFAULT_SAMPLE_RATE",
    "NOISE_WAVEFORMS",
    "PARAMETERS",
    "PARAMETER_GROUPS",
    "VERSION",
    "WAVEFORMS",
    "AudioExportError",
    "InvalidConfigError",
    "InvalidFieldError",
    "JfxrError",
    "JfxrFormatError",
    "JsonSyntaxError",
    "MissingFieldError",
    "NotAnObjectError",
    "ParameterInfo",
    "Sound",
    "Synth",
    "UnsupportedVersionError",
    "Waveform",
    "describe",
    "generate",
    "load_jfxr",
    "read_jfxr",
    "save_jfxr",
    "to_float32",
    "write_jfxr",
    "write_wav",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
