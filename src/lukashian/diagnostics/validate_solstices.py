#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import numpy as np

import lukashian
from lukashian.core.keys import EARTH, key_name, parse_key
from lukashian.ephemeris.de422 import DE422_FIRST_JD, DE422_LAST_JD, DE422Sun, solve_solstice_near
from lukashian.reference import astro_args as aa
from lukashian.reference import solstice
from lukashian.reference.solstice import GREGORIAN_OFFSET


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lukashian[diagnostics]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Compare Lukashian year ends with December solstices from DE422.")
    p.add_argument("--calendar", default=None, help="a calendar built on the standard Earth year ends (default EARTH)")
    p.add_argument("--year-start", type=int, default=1000, help="Gregorian year")
    p.add_argument("--year-end", type=int, default=3000, help="Gregorian year")
    p.add_argument("--step-years", type=int, default=10)
    p.add_argument("--out-png", default=None, help="also plot the differences")
    args = p.parse_args(argv)

    key = EARTH if args.calendar is None else parse_key(args.calendar)
    plt = _need_matplotlib() if args.out_png else None

    print("Loading DE422 Ephemeris...")
    sun = DE422Sun.load()

    # Year ends count from the solstice that ends year 0, in TT
    jde_ms_at_epoch = int(solstice.southern_solstice_jde_ms(0))

    years = []
    diffs_s = []
    for gy in range(args.year_start, args.year_end + 1, args.step_years):
        ly = gy + GREGORIAN_OFFSET
        guess = float(solstice.southern_solstice_jde(ly))
        if not (DE422_FIRST_JD + 5 < guess < DE422_LAST_JD - 5):
            continue
        jd_de = solve_solstice_near(sun, guess)
        end_jde_ms = jde_ms_at_epoch + lukashian.Year.of(ly, key=key).ms_at_end
        years.append(gy)
        diffs_s.append((end_jde_ms - jd_de * aa.DAY_MS) / 1000.0)

    if not years:
        print("No solstices in range.")
        return 1

    d = np.array(diffs_s)
    print(f"Calendar {key_name(key)}, {len(years)} solstices {years[0]}-{years[-1]} (Lukashian year end - DE422, seconds):")
    print(f"  mean {d.mean():+.1f}  rms {np.sqrt((d**2).mean()):.1f}  worst {d[np.abs(d).argmax()]:+.1f} ({years[int(np.abs(d).argmax())]})")

    if plt is not None:
        fig, ax = plt.subplots(figsize=(12, 5))
        ax.plot(years, d, ".", ms=3)
        ax.set_xlabel("Gregorian year")
        ax.set_ylabel("year end - DE422 solstice (s)")
        ax.set_title(f"Lukashian year ends vs DE422, calendar {key_name(key)}")
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        fig.savefig(args.out_png, dpi=120)
        print(f"Wrote: {args.out_png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
