from __future__ import annotations

import argparse
import sys

import pandas as pd

from radar_plotter.core.plotting import prepare_radar_frame
from radar_plotter.core.state import (
    RadarSession,
    ScaleSettings,
    set_auto_scale,
    set_input_text,
    set_range_override,
)
from radar_plotter.data.loaders import load_text_file
from radar_plotter.utils.log import describe_text, log_event, log_exception


def _split_assignment(text: str, option: str) -> tuple[str, str]:
    dim, sep, value = str(text).rpartition("=")
    if not sep or not dim.strip():
        raise argparse.ArgumentTypeError(f"{option} expects DIM=VALUE, got {text!r}")
    return dim.strip(), value.strip()


def _range_arg(text: str) -> tuple[str, str, str]:
    dim, value = _split_assignment(text, "--range")
    low, sep, high = value.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"--range expects DIM=MIN:MAX, got {text!r}")
    return dim, low.strip(), high.strip()


def _unit_arg(text: str) -> tuple[str, str]:
    return _split_assignment(text, "--unit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radar-plotter",
        description="Resolve radar chart axis ranges and normalized points for a pasted table.",
    )
    parser.add_argument("path", nargs="?", default="-", help="Tab- or comma-delimited table (default: stdin).")
    parser.add_argument("--integer", action="store_true", help="Round axis bounds to multiples of 10.")
    parser.add_argument("--fixed", action="store_true", help="Keep manual ranges instead of auto-scaling.")
    parser.add_argument("--reverse", action="append", default=[], metavar="DIM",
                        help="Put larger values nearer the centre on DIM (repeatable).")
    parser.add_argument("--range", dest="ranges", action="append", default=[], type=_range_arg,
                        metavar="DIM=MIN:MAX", help="Manual range for DIM (repeatable; implies --fixed).")
    parser.add_argument("--unit", dest="units", action="append", default=[], type=_unit_arg,
                        metavar="DIM=UNIT", help="Unit shown next to DIM (repeatable).")
    return parser


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return load_text_file(path)


def run(ns: argparse.Namespace, out=None, err=None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        text = _read_input(ns.path)
    except (OSError, UnicodeDecodeError) as exc:
        log_exception(f"cli.read_input path={ns.path}")
        print(f"Cannot read {ns.path}: {exc}", file=err)
        return 1

    session = RadarSession(scale_settings=ScaleSettings(integer_mode=ns.integer))
    if not set_input_text(session, text):
        log_event("cli.parse", "no table found", path=ns.path, input=describe_text(text))
        print("Input needs a header row and at least one data row.", file=err)
        return 2

    if ns.fixed or ns.ranges:
        set_auto_scale(session, False)
    try:
        for dim, low, high in ns.ranges:
            set_range_override(session, dim, min=low or None, max=high or None)
        for dim in ns.reverse:
            set_range_override(session, dim, reverse=True)
        for dim, unit in ns.units:
            set_range_override(session, dim, unit=unit)
    except KeyError as exc:
        print(exc.args[0] if exc.args else str(exc), file=err)
        return 2

    frame = prepare_radar_frame(session)
    with pd.option_context("display.max_rows", None, "display.width", 120):
        print("Ranges", file=out)
        print(frame.ranges_table().to_string(index=False), file=out)
        print("", file=out)
        print("Points", file=out)
        print(frame.points_table().round(4).to_string(index=False), file=out)
    for msg in frame.errors:
        print(f"warning: {msg}", file=err)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    ns = build_parser().parse_args(args)
    return run(ns)


if __name__ == "__main__":
    raise SystemExit(main())
