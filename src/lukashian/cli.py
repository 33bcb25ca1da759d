from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import sys
from fractions import Fraction
from pathlib import Path
from typing import Optional


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _key(value: Optional[str]) -> Optional[int]:
    from lukashian.core.keys import parse_key
    return None if value is None else parse_key(value)


def _time_of_day(s: str):
    """'5000' -> beeps, '1/3' or '0.25' -> proportion."""
    if "/" in s or "." in s:
        return Fraction(s)
    return int(s)


def _utc(i) -> Optional[str]:
    """ISO UTC time of an instant, or None before year 1 or after year 9999."""
    from lukashian import UnsupportedError

    try:
        return i.to_datetime().isoformat()
    except UnsupportedError:
        return None


def _print_utc(label: str, i) -> None:
    utc = _utc(i)
    if utc is not None:
        print(f"{label}: {utc}")


def _print_instant(i, label: str = "Instant") -> None:
    print(f"{label:<12}: {i}")
    print(f"  epoch ms  : {i.epoch_ms}")
    print(f"  beeps     : {i.beeps:04d}")
    print(f"  unix ms   : {i.to_unix_ms()}")
    _print_utc("  UTC       ", i)


def cmd_now(argv: list[str], key: Optional[int]) -> int:
    from lukashian import Instant

    p = argparse.ArgumentParser(prog="lukashian now", description="Print the current instant")
    p.parse_args(argv)

    _print_instant(Instant.now(key=key), "Now")
    return 0


def cmd_year(argv: list[str], key: Optional[int]) -> int:
    from lukashian import Year

    p = argparse.ArgumentParser(prog="lukashian year", description="Print the bounds of a year")
    p.add_argument("year", type=int)
    args = p.parse_args(argv)

    y = Year.of(args.year, key=key)
    print(f"Year {y}")
    print(f"  days         : {y.number_of_days}")
    print(f"  length (ms)  : {y.length_ms}")
    print(f"  first day    : {y.first_day()!r} (epoch day {y.first_day().epoch_day})")
    print(f"  last day     : {y.last_day()!r} (epoch day {y.last_day().epoch_day})")
    _print_utc("  starts (UTC) ", y.first_instant())
    _print_utc("  ends (UTC)   ", y.last_instant())
    return 0


def cmd_day(argv: list[str], key: Optional[int]) -> int:
    from lukashian import Day

    p = argparse.ArgumentParser(prog="lukashian day", description="Print a day, by year and day number or by epoch day")
    p.add_argument("year", type=int, nargs="?")
    p.add_argument("day", type=int, nargs="?")
    p.add_argument("--epoch", type=int, help="epoch day instead of year and day number")
    args = p.parse_args(argv)

    if args.epoch is not None:
        d = Day.of_epoch(args.epoch, key=key)
    elif args.year is not None and args.day is not None:
        d = Day.of(args.year, args.day, key=key)
    else:
        p.error("give YEAR DAY or --epoch E")

    print(f"Day {d} (epoch day {d.epoch_day})")
    print(f"  length (ms)      : {d.length_ms}")
    print(f"  beep length (ms) : {float(d.length_of_beep_ms):.4f}")
    print(f"  end year         : {d.get_end_year()}")
    _print_utc("  starts (UTC)     ", d.first_instant())
    _print_utc("  ends (UTC)       ", d.last_instant())
    return 0


def cmd_instant(argv: list[str], key: Optional[int]) -> int:
    from lukashian import Instant

    p = argparse.ArgumentParser(prog="lukashian instant", description="Unix clock -> Lukashian instant")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--unix-ms", type=int)
    g.add_argument("--epoch-ms", type=int)
    args = p.parse_args(argv)

    if args.unix_ms is not None:
        i = Instant.from_unix_ms(args.unix_ms, key=key)
    else:
        i = Instant.of(args.epoch_ms, key=key)
    _print_instant(i)
    return 0


def cmd_to_unix(argv: list[str], key: Optional[int]) -> int:
    from lukashian import Instant

    p = argparse.ArgumentParser(prog="lukashian to-unix", description="Lukashian day and time -> unix clock")
    p.add_argument("year", type=int)
    p.add_argument("day", type=int)
    p.add_argument("time", nargs="?", default="0", help="beeps (0-9999) or a proportion such as 1/3")
    args = p.parse_args(argv)

    i = Instant.of_year_day(args.year, args.day, _time_of_day(args.time), key=key)
    _print_instant(i)
    return 0


def cmd_export(argv: list[str], key: Optional[int]) -> int:
    from lukashian import calendar_data
    from lukashian.core.keys import key_name
    from lukashian.providers.external import default_cache_dir, write_blobs

    p = argparse.ArgumentParser(prog="lukashian export", description="Write calendar data as blobs for FileProvider")
    p.add_argument("directory", nargs="?", help="output directory (default: cache dir / calendar name)")
    args = p.parse_args(argv)

    data = calendar_data(key)
    out = Path(args.directory) if args.directory else default_cache_dir() / key_name(data.key).lower()
    write_blobs(data, out)
    print(f"Wrote: {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="lukashian", description="Lukashian calendar CLI.")
    p.add_argument("--calendar", default=None, help="calendar key or name (EARTH, MARS, ...); default: registry default")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("now", help="Current instant")
    sub.add_parser("year", help="Bounds and length of a year")
    sub.add_parser("day", help="Bounds and length of a day")
    sub.add_parser("instant", help="Unix clock or epoch ms -> instant")
    sub.add_parser("to-unix", help="Year, day and time -> unix clock")
    sub.add_parser("export", help="Write calendar data blobs")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (optional extras)")
    p_diag.add_argument(
        "tool",
        choices=["day-lengths", "validate-solstices"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    key = _key(args.calendar)

    commands = {
        "now": cmd_now,
        "year": cmd_year,
        "day": cmd_day,
        "instant": cmd_instant,
        "to-unix": cmd_to_unix,
        "export": cmd_export,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest, key)

    if args.cmd == "diag":
        tool_map = {
            "day-lengths": "lukashian.diagnostics.day_lengths",
            "validate-solstices": "lukashian.diagnostics.validate_solstices",
        }
        if args.calendar is not None:
            rest = ["--calendar", args.calendar] + rest
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
