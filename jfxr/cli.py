from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import IO

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table
from rich.text import Text
from rich.traceback import Traceback

from .audio import write_wav
from .fileformat import FILE_SUFFIX, load_jfxr, save_jfxr
from .logging_utils import configure_logging, debug_enabled, get_log_path, log_exception
from .parameters import PARAMETER_GROUPS, PARAMETERS, ParameterInfo, default_value
from .sound import WAVEFORMS, Sound
from .synth import DEFAULT_BLOCK_SIZE, Synth

_LOGGER = logging.getLogger("jfxr.cli")
_CONSOLE = Console()


def render_error(context: str, exc: BaseException, *, stream: IO[str] | None = None) -> None:
    target = stream or sys.stderr
    debug = debug_enabled()
    log_path = get_log_path()
    if not target.isatty():
        target.write(f"{context} failed: {type(exc).__name__}: {exc} (logs: {log_path})\n")
        if debug:
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=target)
        return
    console = Console(file=target)
    body = Text.assemble(
        ("jfxr error while ", "bold"),
        (context, "bold"),
        (":\n\n", "bold"),
        (type(exc).__name__, "bold red"),
        (": ", "bold"),
        str(exc),
        (f"\nLogs: {log_path}", "dim"),
        ("\n\nSet JFXR_DEBUG=1 for console trace.", "dim"),
    )
    console.print(Panel(body, title="Error", border_style="red"))
    if debug:
        console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jfxr", description="Procedural sound effect synthesis.")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a .jfxr file to a wav file.")
    render.add_argument("input", type=Path)
    render.add_argument("-o", "--output", type=Path, default=None)
    render.add_argument("--block-size", type=_positive_int, default=DEFAULT_BLOCK_SIZE)

    info = sub.add_parser("info", help="Summarize a .jfxr file.")
    info.add_argument("input", type=Path)

    sub.add_parser("params", help="List every sound parameter.")

    new = sub.add_parser("new", help="Write a .jfxr file with default parameters.")
    new.add_argument("output", type=Path)
    new.add_argument("--waveform", choices=WAVEFORMS, default="sine")
    new.add_argument("--name", type=str, default="")
    return parser


def _render(input_path: Path, output_path: Path | None, block_size: int) -> Path:
    sound = load_jfxr(input_path)
    target = output_path or input_path.with_suffix(".wav")
    synth = Synth(sound, block_size=block_size)
    with Progress(
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=_CONSOLE,
        transient=True,
    ) as progress:
        label = escape(sound.name or input_path.name)
        task = progress.add_task(f"Rendering {label}", total=synth.num_samples)
        done = False
        while not done:
            done = synth.tick()
            progress.update(task, completed=synth.position)
    path = write_wav(target, synth.samples, sample_rate=sound.sample_rate)
    _CONSOLE.print(f"Wrote {synth.num_samples} samples to {path}")
    return path


def _info(input_path: Path) -> None:
    sound = load_jfxr(input_path)
    _CONSOLE.print(f"Name: {escape(sound.name) or '(unnamed)'}")
    _CONSOLE.print(f"Waveform: {sound.waveform}")
    _CONSOLE.print(f"Duration: {sound.duration():.3f} s")
    _CONSOLE.print(f"Samples: {sound.num_samples()} at {sound.sample_rate:g} Hz")


def _format_range(info: ParameterInfo) -> str:
    match info.kind:
        case "bool":
            return "on/off"
        case "enum":
            return ", ".join(info.choices)
        case _:
            scale = " (log)" if info.logarithmic else ""
            return f"{info.min_value:g} .. {info.max_value:g}{scale}"


def _params_table() -> Table:
    table = Table(title="jfxr parameters")
    table.add_column("Group", style="cyan")
    table.add_column("Parameter", style="bold")
    table.add_column("Label")
    table.add_column("Default", justify="right")
    table.add_column("Unit")
    table.add_column("Range")
    for group, names in PARAMETER_GROUPS.items():
        for name in names:
            info = PARAMETERS[name]
            table.add_row(
                group,
                name,
                info.label,
                str(default_value(name)),
                info.unit,
                _format_range(info),
            )
    return table


def _new(output_path: Path, waveform: str, name: str) -> Path:
    target = output_path if output_path.suffix else output_path.with_suffix(FILE_SUFFIX)
    sound = Sound.from_dict({"waveform": waveform, "name": name})
    path = save_jfxr(sound, target)
    _CONSOLE.print(f"Wrote {waveform} sound to {path}")
    return path


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        parser = build_parser()
        args = parser.parse_args(argv)

        match args.command:
            case "render":
                _render(args.input, args.output, args.block_size)
                return 0
            case "info":
                _info(args.input)
                return 0
            case "params":
                _CONSOLE.print(_params_table())
                return 0
            case "new":
                _new(args.output, args.waveform, args.name)
                return 0
            case _:
                parser.print_help()
                return 1
    except Exception as exc:
        _LOGGER.warning("jfxr CLI failed: %s", exc, exc_info=debug_enabled())
        log_exception("jfxr CLI", exc)
        render_error("jfxr CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
