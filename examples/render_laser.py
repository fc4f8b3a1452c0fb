from __future__ import annotations

from pathlib import Path

from jfxr import Sound, Synth, save_jfxr, write_wav

OUTPUT_DIR = Path(__file__).resolve().parent / "output"


def build_laser() -> Sound:
    return Sound(
        name="Laser",
        waveform="sawtooth",
        attack=0.0,
        sustain=0.05,
        sustain_punch=40.0,
        decay=0.2,
        frequency=1800.0,
        frequency_sweep=-1500.0,
        harmonics=1,
        harmonics_falloff=0.4,
        low_pass_cutoff=8000.0,
        amplification=80.0,
    )


def main() -> None:
    sound = build_laser()
    synth = Synth(sound)
    samples = synth.generate()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    save_jfxr(sound, OUTPUT_DIR / "laser.jfxr")
    path = write_wav(OUTPUT_DIR / "laser.wav", samples, sample_rate=sound.sample_rate)
    print(f"Rendered {synth.num_samples} samples ({sound.duration():.2f} s) to {path}")


if __name__ == "__main__":
    main()
