import math

import pytest

from jfxr.oscillators import (
    OSCILLATORS,
    BreakerOscillator,
    BrownNoiseOscillator,
    PinkNoiseOscillator,
    SawtoothOscillator,
    SineOscillator,
    SquareOscillator,
    TangentOscillator,
    TriangleOscillator,
    WhistleOscillator,
    WhiteNoiseOscillator,
    create_oscillator,
)
from jfxr.sound import WAVEFORMS, Sound

SOUND = Sound(sustain=1.0)


def test_every_waveform_has_an_oscillator() -> None:
    assert set(OSCILLATORS) == set(WAVEFORMS)
    for waveform in WAVEFORMS:
        oscillator = create_oscillator(Sound(waveform=waveform))
        assert callable(oscillator.get_sample)


def test_create_oscillator_returns_fresh_instances() -> None:
    sound = Sound(waveform="whitenoise")
    assert create_oscillator(sound) is not create_oscillator(sound)


class TestPeriodicShapes:
    def test_sine(self) -> None:
        osc = SineOscillator()
        assert osc.get_sample(SOUND, 0.0, 0.0) == 0.0
        assert osc.get_sample(SOUND, 0.25, 0.0) == pytest.approx(1.0)
        assert osc.get_sample(SOUND, 0.75, 0.0) == pytest.approx(-1.0)

    def test_triangle(self) -> None:
        osc = TriangleOscillator()
        assert osc.get_sample(SOUND, 0.125, 0.0) == 0.5
        assert osc.get_sample(SOUND, 0.25, 0.0) == 1.0
        assert osc.get_sample(SOUND, 0.5, 0.0) == 0.0
        assert osc.get_sample(SOUND, 0.875, 0.0) == -0.5

    def test_sawtooth(self) -> None:
        osc = SawtoothOscillator()
        assert osc.get_sample(SOUND, 0.25, 0.0) == 0.5
        assert osc.get_sample(SOUND, 0.5, 0.0) == -1.0
        assert osc.get_sample(SOUND, 0.75, 0.0) == -0.5

    def test_square_follows_duty(self) -> None:
        osc = SquareOscillator()
        assert osc.get_sample(SOUND, 0.25, 0.0) == 1.0
        assert osc.get_sample(SOUND, 0.75, 0.0) == -1.0
        narrow = Sound(sustain=1.0, square_duty=10.0)
        assert osc.get_sample(narrow, 0.25, 0.0) == -1.0

    def test_square_duty_sweeps_over_time(self) -> None:
        osc = SquareOscillator()
        sound = Sound(sustain=1.0, square_duty=10.0, square_duty_sweep=80.0)
        assert osc.get_sample(sound, 0.3, 0.0) == -1.0
        assert osc.get_sample(sound, 0.3, 0.5) == 1.0

    def test_tangent_is_clipped(self) -> None:
        osc = TangentOscillator()
        assert osc.get_sample(SOUND, 0.0, 0.0) == 0.0
        assert osc.get_sample(SOUND, 0.25, 0.0) == pytest.approx(0.3)
        assert osc.get_sample(SOUND, 0.499, 0.0) == 2.0
        assert osc.get_sample(SOUND, 0.501, 0.0) == -2.0

    def test_whistle(self) -> None:
        osc = WhistleOscillator()
        assert osc.get_sample(SOUND, 0.25, 0.0) == pytest.approx(0.75)

    def test_breaker_starts_near_zero(self) -> None:
        osc = BreakerOscillator()
        assert osc.get_sample(SOUND, 0.0, 0.0) == pytest.approx(0.0, abs=1e-12)
        for step in range(100):
            assert -1.0 <= osc.get_sample(SOUND, step / 100.0, 0.0) <= 1.0


def _drive(oscillator, sound: Sound, steps: int, increment: float = 0.013) -> list[float]:
    values = []
    phase = 0.0
    for _ in range(steps):
        phase = math.fmod(phase + increment, 1.0)
        values.append(oscillator.get_sample(sound, phase, 0.0))
    return values


class TestNoise:
    def test_holds_value_until_phase_wraps(self) -> None:
        sound = Sound(waveform="whitenoise", interpolate_noise=False)
        osc = WhiteNoiseOscillator(sound)
        for phase in (0.1, 0.2, 0.3, 0.4):
            assert osc.get_sample(sound, phase, 0.0) == 0.0
        drawn = osc.get_sample(sound, 0.6, 0.0)
        assert drawn != 0.0
        assert osc.get_sample(sound, 0.7, 0.0) == drawn

    def test_interpolates_between_draws(self) -> None:
        sound = Sound(waveform="whitenoise", interpolate_noise=True)
        osc = WhiteNoiseOscillator(sound)
        osc.get_sample(sound, 0.4, 0.0)
        start = osc.get_sample(sound, 0.5, 0.0)
        assert start == 0.0
        middle = osc.get_sample(sound, 0.75, 0.0)
        end = osc.get_sample(sound, 0.99, 0.0)
        assert abs(middle) < abs(end)

    @pytest.mark.parametrize(
        ("cls", "waveform"),
        [
            (WhiteNoiseOscillator, "whitenoise"),
            (PinkNoiseOscillator, "pinknoise"),
            (BrownNoiseOscillator, "brownnoise"),
        ],
    )
    def test_instances_share_one_stream(self, cls, waveform) -> None:
        sound = Sound(waveform=waveform)
        first = _drive(cls(sound), sound, 500)
        second = _drive(cls(sound), sound, 500)
        assert first == second
        assert any(value != 0.0 for value in first)

    def test_white_noise_is_bounded(self) -> None:
        sound = Sound(waveform="whitenoise", interpolate_noise=False)
        assert all(-1.0 <= value <= 1.0 for value in _drive(WhiteNoiseOscillator(sound), sound, 2000))

    def test_brown_noise_is_clamped(self) -> None:
        sound = Sound(waveform="brownnoise", interpolate_noise=False)
        values = _drive(BrownNoiseOscillator(sound), sound, 5000, increment=0.37)
        assert all(-1.0 <= value <= 1.0 for value in values)

    def test_pink_noise_filters_the_white_stream(self) -> None:
        white_sound = Sound(waveform="whitenoise", interpolate_noise=False)
        pink_sound = Sound(waveform="pinknoise", interpolate_noise=False)
        white = _drive(WhiteNoiseOscillator(white_sound), white_sound, 400, increment=0.37)
        pink = _drive(PinkNoiseOscillator(pink_sound), pink_sound, 400, increment=0.37)
        assert pink != white
        assert all(math.isfinite(value) for value in pink)


def test_noise_base_is_abstract() -> None:
    from jfxr.oscillators import _NoiseOscillator

    with pytest.raises(TypeError):
        _NoiseOscillator(Sound(waveform="whitenoise"))  # type: ignore[abstract]


def _first_draws(oscillator, sound: Sound) -> list[float]:
    # Doubled phase 0.8 then 0.2 wraps once per pair of calls.
    draws = []
    for _ in range(2):
        oscillator.get_sample(sound, 0.4, 0.0)
        draws.append(oscillator.get_sample(sound, 0.6, 0.0))
    return draws


WHITE_DRAWS = [-1.0 + 2.0 * raw / 0xFFFFFFFF for raw in (91492987, 1477143755)]


def test_white_noise_first_draws() -> None:
    sound = Sound(waveform="whitenoise", interpolate_noise=False)
    assert _first_draws(WhiteNoiseOscillator(sound), sound) == pytest.approx(WHITE_DRAWS)


def test_pink_noise_first_draws_follow_pk3() -> None:
    sound = Sound(waveform="pinknoise", interpolate_noise=False)
    first, second = WHITE_DRAWS
    gains = [0.0555179, 0.0750759, 0.1538520, 0.3104856, 0.5329522, 0.0168980]
    poles = [0.99886, 0.99332, 0.96900, 0.86650, 0.55000, -0.7616]

    b = [first * gain for gain in gains]
    expected_first = (sum(b) + first * 0.5362) / 7.0
    b = [pole * value + second * gain for pole, value, gain in zip(poles, b, gains)]
    expected_second = (sum(b) + first * 0.115926 + second * 0.5362) / 7.0

    draws = _first_draws(PinkNoiseOscillator(sound), sound)
    assert draws == pytest.approx([expected_first, expected_second], rel=1e-12)
