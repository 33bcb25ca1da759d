#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import numpy as np

import lukashian
from lukashian.core.keys import key_name, parse_key


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lukashian[diagnostics]"') from e


def day_lengths(first_year: int, last_year: int, key: Optional[int] = None):
    """
    Epoch days and lengths (ms) of every day starting in first_year .. last_year.
    """
    data = lukashian.calendar_data(key)
    first = lukashian.Year.of(first_year, key=data.key).first_day().epoch_day
    last = lukashian.Year.of(last_year, key=data.key).last_day().epoch_day

    ends = data.day_ends_ms[first - 1 : last]
    prev = data.day_ends_ms[first - 2 : last - 1] if first > 1 else np.concatenate(([0], data.day_ends_ms[: last - 1]))
    return np.arange(first, last + 1), ends - prev


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot true solar day lengths of a range of years.")
    p.add_argument("--calendar", default=None)
    p.add_argument("--year-start", type=int, default=5925)
    p.add_argument("--year-end", type=int, default=5927)
    p.add_argument("--out-png", default="day_lengths.png")
    args = p.parse_args(argv)

    key = None if args.calendar is None else parse_key(args.calendar)
    plt = _need_matplotlib()

    days, lengths = day_lengths(args.year_start, args.year_end, key)
    mean = float(lengths.mean())
    print(f"{len(days)} days, mean length {mean:.1f} ms, min {int(lengths.min())}, max {int(lengths.max())}")

    fig, ax = plt.subplots(figsize=(12, 5))
    ax.plot(days, (lengths - mean) / 1000.0, lw=0.8)
    ax.set_xlabel("epoch day")
    ax.set_ylabel("length - mean (s)")
    ax.set_title(f"Day lengths, calendar {key_name(lukashian.calendar_data(key).key)}, years {args.year_start}-{args.year_end}")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(args.out_png, dpi=120)
    print(f"Wrote: {args.out_png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
