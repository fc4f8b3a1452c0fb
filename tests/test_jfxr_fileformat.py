import json
import math
from pathlib import Path
from typing import Any

import pytest

from jfxr.errors import (
    InvalidFieldError,
    JfxrFormatError,
    JsonSyntaxError,
    MissingFieldError,
    NotAnObjectError,
    UnsupportedVersionError,
)
from jfxr.fileformat import VERSION, load_jfxr, read_jfxr, save_jfxr, write_jfxr
from jfxr.sound import Sound
from jfxr.synth import generate


def _payload(**overrides: Any) -> dict[str, Any]:
    payload = json.loads(write_jfxr(Sound(name="Blip", sustain=0.2)))
    payload.update(overrides)
    return payload


def _read(payload: dict[str, Any]) -> Sound:
    return read_jfxr(json.dumps(payload))


class TestWrite:
    def test_envelope_keys(self) -> None:
        payload = json.loads(write_jfxr(Sound(name="Blip")))
        assert payload["_version"] == VERSION
        assert payload["_name"] == "Blip"
        assert payload["_locked"] == []

    def test_parameters_use_camel_case(self) -> None:
        payload = json.loads(write_jfxr(Sound(frequency_jump1_onset=12.0)))
        assert payload["frequencyJump1Onset"] == 12.0
        assert payload["sampleRate"] == 44_100.0
        assert payload["interpolateNoise"] is True
        assert payload["bitCrush"] == 16
        assert "frequency_jump1_onset" not in payload

    def test_read_back(self) -> None:
        sound = Sound(name="Laser", waveform="square", harmonics=2, square_duty=25.0)
        assert read_jfxr(write_jfxr(sound)) == sound


class TestRead:
    def test_accepts_integers_for_float_parameters(self) -> None:
        sound = _read(_payload(frequency=440, attack=0))
        assert sound.frequency == 440.0
        assert isinstance(sound.frequency, float)

    def test_ignores_locked_and_unknown_keys(self) -> None:
        sound = _read(_payload(_locked=["frequency"], _comment="hi"))
        assert sound.name == "Blip"

    def test_accepts_bytes(self) -> None:
        sound = read_jfxr(json.dumps(_payload()).encode("utf-8"))
        assert sound.sustain == 0.2

    def test_older_versions_are_accepted(self) -> None:
        sound = _read(_payload(_version=0))
        assert sound.name == "Blip"


class TestReadErrors:
    def test_bad_json(self) -> None:
        with pytest.raises(JsonSyntaxError):
            read_jfxr("{")

    def test_not_an_object(self) -> None:
        with pytest.raises(NotAnObjectError):
            read_jfxr("[1, 2]")

    def test_missing_version(self) -> None:
        payload = _payload()
        del payload["_version"]
        with pytest.raises(MissingFieldError) as excinfo:
            _read(payload)
        assert excinfo.value.field == "_version"

    @pytest.mark.parametrize("version", ["1", 1.5, True, None, -1])
    def test_version_must_be_integer(self, version: object) -> None:
        with pytest.raises(InvalidFieldError) as excinfo:
            _read(_payload(_version=version))
        assert excinfo.value.field == "_version"

    def test_newer_version(self) -> None:
        with pytest.raises(UnsupportedVersionError) as excinfo:
            _read(_payload(_version=VERSION + 1))
        assert excinfo.value.version == VERSION + 1
        assert excinfo.value.supported == VERSION

    @pytest.mark.parametrize("key", ["_name", "frequency", "waveform", "normalization"])
    def test_missing_parameter(self, key: str) -> None:
        payload = _payload()
        del payload[key]
        with pytest.raises(MissingFieldError) as excinfo:
            _read(payload)
        assert excinfo.value.field == key

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("waveform", "organ"),
            ("normalization", 1),
            ("interpolateNoise", "yes"),
            ("harmonics", 1.5),
            ("bitCrush", True),
            ("frequency", "440"),
            ("_name", 3),
        ],
    )
    def test_invalid_parameter(self, key: str, value: object) -> None:
        with pytest.raises(InvalidFieldError) as excinfo:
            _read(_payload(**{key: value}))
        assert excinfo.value.field == key

    def test_errors_share_a_base(self) -> None:
        with pytest.raises(JfxrFormatError):
            read_jfxr("null")


def test_save_and_load(tmp_path: Path) -> None:
    sound = Sound(name="Coin", waveform="triangle", sustain=0.1, decay=0.3)
    path = save_jfxr(sound, tmp_path / "coin.jfxr")
    assert path.exists()
    assert load_jfxr(path) == sound


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_jfxr(tmp_path / "absent.jfxr")


@pytest.mark.parametrize(
    "overrides",
    [
        {"vibrato_depth": 10.0, "vibrato_frequency": math.inf},
        {"tremolo_depth": 10.0, "tremolo_frequency": math.inf},
    ],
)
def test_infinite_parameters_survive_a_file_and_render(overrides: dict[str, float]) -> None:
    sound = Sound(sustain=0.01, normalization=False, **overrides)
    text = write_jfxr(sound)
    assert "Infinity" in text
    loaded = read_jfxr(text)
    assert loaded == sound
    assert generate(loaded).size == sound.num_samples()
