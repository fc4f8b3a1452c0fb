"""Display metadata for every Sound parameter.

Labels, descriptions, units and slider ranges for editors and the CLI. The
synthesis engine never reads this table; out-of-range values are still
rendered as given.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal

from .sound import NOISE_WAVEFORMS, WAVEFORMS, Sound

ParameterKind = Literal["float", "int", "bool", "enum"]
GroupName = Literal["sound", "amplitude", "pitch", "harmonics", "tone", "filters", "output"]


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    label: str
    kind: ParameterKind
    description: str = ""
    unit: str = ""
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    logarithmic: bool = False
    choices: tuple[str, ...] = ()


def _float(
    label: str,
    description: str = "",
    *,
    unit: str = "",
    min_value: float = 0.0,
    max_value: float,
    step: float = 1.0,
    logarithmic: bool = False,
) -> ParameterInfo:
    return ParameterInfo(
        label=label,
        kind="float",
        description=description,
        unit=unit,
        min_value=min_value,
        max_value=max_value,
        step=step,
        logarithmic=logarithmic,
    )


def _int(
    label: str,
    description: str = "",
    *,
    unit: str = "",
    min_value: int = 0,
    max_value: int,
    step: int = 1,
) -> ParameterInfo:
    return ParameterInfo(
        label=label,
        kind="int",
        description=description,
        unit=unit,
        min_value=min_value,
        max_value=max_value,
        step=step,
    )


def _bool(label: str, description: str = "") -> ParameterInfo:
    return ParameterInfo(label=label, kind="bool", description=description)


PARAMETERS: Mapping[str, ParameterInfo] = MappingProxyType(
    {
        # Sound properties
        "sample_rate": _float(
            "Sample rate", unit="Hz", min_value=44_100.0, max_value=44_100.0
        ),
        # Amplitude
        "attack": _float(
            "Attack",
            "Time from the start of the sound until the point where it reaches its maximum "
            'volume. Increase this for a gradual fade-in; decrease it to add more "punch".',
            unit="s",
            max_value=5.0,
            step=0.01,
        ),
        "sustain": _float(
            "Sustain",
            "Amount of time for which the sound holds its maximum volume after the attack "
            "phase. Increase this to increase the sound's duration.",
            unit="s",
            max_value=5.0,
            step=0.01,
        ),
        "sustain_punch": _float(
            "Sustain punch",
            "Additional volume at the start of the sustain phase, which linearly fades back "
            'to the base level. Use this to add extra "punch" to the sustain phase.',
            unit="%",
            max_value=100.0,
            step=10.0,
        ),
        "decay": _float(
            "Decay",
            "Time it takes from the end of the sustain phase until the sound has faded away. "
            "Increase this for a gradual fade-out.",
            unit="s",
            max_value=5.0,
            step=0.01,
            logarithmic=True,
        ),
        "tremolo_depth": _float(
            "Tremolo depth",
            "Amount by which the volume oscillates as a sine wave around its base value.",
            unit="%",
            max_value=100.0,
        ),
        "tremolo_frequency": _float(
            "Tremolo frequency",
            "Frequency at which the volume oscillates as a sine wave around its base value.",
            unit="Hz",
            max_value=1000.0,
            logarithmic=True,
        ),
        # Pitch
        "frequency": _float(
            "Frequency",
            "Initial frequency, or pitch, of the sound. This determines how high the sound "
            "starts out; higher values result in higher notes.",
            unit="Hz",
            min_value=10.0,
            max_value=10_000.0,
            step=100.0,
            logarithmic=True,
        ),
        "frequency_sweep": _float(
            "Frequency sweep",
            "Amount by which the frequency is changed linearly over the duration of the sound.",
            unit="Hz",
            min_value=-10_000.0,
            max_value=10_000.0,
            step=100.0,
            logarithmic=True,
        ),
        "frequency_delta_sweep": _float(
            "Freq. delta sweep",
            "Amount by which the frequency is changed quadratically over the duration of the "
            "sound.",
            unit="Hz",
            min_value=-10_000.0,
            max_value=10_000.0,
            step=100.0,
            logarithmic=True,
        ),
        "repeat_frequency": _float(
            "Repeat frequency",
            "Amount of times per second that the frequency is reset to its base value, and "
            "starts its sweep cycle anew.",
            unit="Hz",
            max_value=100.0,
            step=0.1,
            logarithmic=True,
        ),
        "frequency_jump1_onset": _float(
            "Freq. jump 1 onset",
            "Point in time, as a fraction of the repeat cycle, at which the frequency makes a "
            "sudden jump.",
            unit="%",
            max_value=100.0,
            step=5.0,
        ),
        "frequency_jump1_amount": _float(
            "Freq. jump 1 amount",
            "Amount by which the frequency jumps at the given onset, as a fraction of the "
            "current frequency.",
            unit="%",
            min_value=-100.0,
            max_value=100.0,
            step=5.0,
        ),
        "frequency_jump2_onset": _float(
            "Freq. jump 2 onset",
            "Point in time, as a fraction of the repeat cycle, at which the frequency makes a "
            "sudden jump.",
            unit="%",
            max_value=100.0,
            step=5.0,
        ),
        "frequency_jump2_amount": _float(
            "Freq. jump 2 amount",
            "Amount by which the frequency jumps at the given onset, as a fraction of the "
            "current frequency.",
            unit="%",
            min_value=-100.0,
            max_value=100.0,
            step=5.0,
        ),
        # Harmonics
        "harmonics": _int(
            "Harmonics",
            "Number of harmonics (overtones) to add. Generates the same sound at several "
            "multiples of the base frequency (2×, 3×, …), and mixes them with the original "
            "sound. Note that this slows down rendering quite a lot, so you may want to leave "
            "it at 0 until the last moment.",
            max_value=5,
        ),
        "harmonics_falloff": _float(
            "Harmonics falloff",
            "Volume of each subsequent harmonic, as a fraction of the previous one.",
            max_value=1.0,
            step=0.01,
        ),
        # Tone
        "waveform": ParameterInfo(
            label="Waveform",
            kind="enum",
            description="Shape of the waveform. This is the most important factor in "
            "determining the character, or timbre, of the sound.",
            choices=WAVEFORMS,
        ),
        "interpolate_noise": _bool(
            "Interpolate noise",
            "Whether to use linear interpolation between individual samples of noise. This "
            "results in a smoother sound.",
        ),
        "vibrato_depth": _float(
            "Vibrato depth",
            "Amount by which to vibrate around the base frequency.",
            unit="Hz",
            max_value=1000.0,
            step=10.0,
            logarithmic=True,
        ),
        "vibrato_frequency": _float(
            "Vibrato frequency",
            "Number of times per second to vibrate around the base frequency.",
            unit="Hz",
            max_value=1000.0,
            logarithmic=True,
        ),
        "square_duty": _float(
            "Square duty",
            'For square waves only, the initial fraction of time the square is in the "on" '
            "state.",
            unit="%",
            max_value=100.0,
            step=5.0,
        ),
        "square_duty_sweep": _float(
            "Square duty sweep",
            "For square waves only, change the square duty linearly by this many percentage "
            "points over the course of the sound.",
            unit="%",
            min_value=-100.0,
            max_value=100.0,
            step=5.0,
        ),
        # Filters
        "flanger_offset": _float(
            "Flanger offset",
            "The initial offset for the flanger effect. Mixes the sound with itself, delayed "
            "initially by this amount.",
            unit="ms",
            max_value=50.0,
        ),
        "flanger_offset_sweep": _float(
            "Flanger offset sweep",
            "Amount by which the flanger offset changes linearly over the course of the sound.",
            unit="ms",
            min_value=-50.0,
            max_value=50.0,
        ),
        "bit_crush": _int(
            "Bit crush",
            "Number of bits per sample. Reduces the number of bits in each sample by this "
            "amount, and then increase it again. The result is a lower-fidelity sound effect.",
            unit="bits",
            min_value=1,
            max_value=16,
        ),
        "bit_crush_sweep": _int(
            "Bit crush sweep",
            "Amount by which to change the bit crush value linearly over the course of the "
            "sound.",
            unit="bits",
            min_value=-16,
            max_value=16,
        ),
        "low_pass_cutoff": _float(
            "Low-pass cutoff",
            "Threshold above which frequencies should be filtered out, using a simple IIR "
            'low-pass filter. Use this to take some "edge" off the sound.',
            unit="Hz",
            max_value=22_050.0,
            step=100.0,
            logarithmic=True,
        ),
        "low_pass_cutoff_sweep": _float(
            "Low-pass sweep",
            "Amount by which to change the low-pass cutoff frequency over the course of the "
            "sound.",
            unit="Hz",
            min_value=-22_050.0,
            max_value=22_050.0,
            step=100.0,
            logarithmic=True,
        ),
        "high_pass_cutoff": _float(
            "High-pass cutoff",
            "Threshold below which frequencies should be filtered out, using a simple "
            "high-pass filter.",
            unit="Hz",
            max_value=22_050.0,
            step=100.0,
            logarithmic=True,
        ),
        "high_pass_cutoff_sweep": _float(
            "High-pass sweep",
            "Amount by which to change the high-pass cutoff frequency over the course of the "
            "sound.",
            unit="Hz",
            min_value=-22_050.0,
            max_value=22_050.0,
            step=100.0,
            logarithmic=True,
        ),
        # Output
        "compression": _float(
            "Compression",
            "Power to which sample values should be raised. 1 is the neutral setting. Use a "
            "value less than 1 to increase the volume of quiet parts of the sound, higher "
            "than 1 to make quiet parts even quieter.",
            max_value=5.0,
            step=0.1,
        ),
        "normalization": _bool(
            "Normalization",
            "Whether to adjust the volume of the sound so that the peak volume is at 100%.",
        ),
        "amplification": _float(
            "Amplification",
            "Percentage to amplify the sound by, after any normalization has occurred. Note "
            "that setting this too high can result in clipping.",
            unit="%",
            max_value=500.0,
            step=10.0,
        ),
    }
)

PARAMETER_GROUPS: Mapping[GroupName, tuple[str, ...]] = MappingProxyType(
    {
        "sound": ("sample_rate",),
        "amplitude": (
            "attack",
            "sustain",
            "sustain_punch",
            "decay",
            "tremolo_depth",
            "tremolo_frequency",
        ),
        "pitch": (
            "frequency",
            "frequency_sweep",
            "frequency_delta_sweep",
            "repeat_frequency",
            "frequency_jump1_onset",
            "frequency_jump1_amount",
            "frequency_jump2_onset",
            "frequency_jump2_amount",
        ),
        "harmonics": ("harmonics", "harmonics_falloff"),
        "tone": (
            "waveform",
            "interpolate_noise",
            "vibrato_depth",
            "vibrato_frequency",
            "square_duty",
            "square_duty_sweep",
        ),
        "filters": (
            "flanger_offset",
            "flanger_offset_sweep",
            "bit_crush",
            "bit_crush_sweep",
            "low_pass_cutoff",
            "low_pass_cutoff_sweep",
            "high_pass_cutoff",
            "high_pass_cutoff_sweep",
        ),
        "output": ("compression", "normalization", "amplification"),
    }
)


def describe(name: str) -> ParameterInfo:
    try:
        return PARAMETERS[name]
    except KeyError:
        raise KeyError(f"Unknown parameter: {name!r}") from None


def default_value(name: str) -> Any:
    describe(name)
    return Sound.model_fields[name].default


def disabled_reason(name: str, sound: Sound) -> str | None:
    """Why an editor should grey out ``name`` for this sound, or None if it applies."""
    if name == "interpolate_noise" and sound.waveform not in NOISE_WAVEFORMS:
        return "Noise interpolation only applies to noise waveforms"
    if name in ("square_duty", "square_duty_sweep") and sound.waveform != "square":
        return "Duty cycle only applies to square waveforms"
    return None


def _assert_parameter_parity() -> None:
    fields = set(Sound.model_fields) - {"name"}
    described = set(PARAMETERS)
    grouped = {name for names in PARAMETER_GROUPS.values() for name in names}
    if fields == described == grouped:
        return
    raise AssertionError(
        f"Parameter table mismatch: missing={sorted(fields - described)!r}, "
        f"extra={sorted(described - fields)!r}, ungrouped={sorted(described - grouped)!r}"
    )


_assert_parameter_parity()
