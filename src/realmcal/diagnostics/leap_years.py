#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import realmcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "realmcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "realmcal[diagnostics]"') from e


def parse_calendars(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not out:
        raise SystemExit("--calendars must name at least one calendar")
    return out


def leap_rows(calendars: List[str], start_year: int, end_year: int) -> List[List[bool]]:
    """One row per calendar, one column per year in [start_year, end_year]."""
    rows = []
    for cal in calendars:
        drv = realmcal.get_driver(cal)
        rows.append([drv.is_leap_year(y) for y in range(start_year, end_year + 1)])
    return rows


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-year barcode diagram across calendars.")
    p.add_argument("--start-year", type=int, default=1480)
    p.add_argument("--end-year", type=int, default=1520)
    p.add_argument("--calendars", default="harptos,gregorian")
    p.add_argument("--out", default="leap_years.png")
    p.add_argument("--title", default="Leap years across calendars")
    p.add_argument("--year-step", type=int, default=5, help="label every k years (default: 5)")
    p.add_argument("--cell-edge", default="0.88", help="Cell border color (matplotlib gray string).")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    np = _need_numpy()
    plt = _need_matplotlib()

    calendars = parse_calendars(args.calendars)
    Z = np.array(leap_rows(calendars, args.start_year, args.end_year), dtype=float)

    fig, ax = plt.subplots(figsize=(16, 0.6 * len(calendars) + 1.4))
    x_edges = np.arange(args.start_year - 0.5, args.end_year + 1.5, 1.0)
    y_edges = np.arange(-0.5, len(calendars) + 0.5, 1.0)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap="Greys",
        vmin=0, vmax=1.4,
        edgecolors=args.cell_edge,
        linewidth=0.6,
    )

    ax.tick_params(axis="both", which="both", length=0)
    xt = list(range(args.start_year, args.end_year + 1, max(1, args.year_step)))
    ax.set_xticks(xt)
    ax.set_xticklabels([str(y) for y in xt])
    ax.set_xlabel("Year")
    ax.set_yticks(list(range(len(calendars))))
    ax.set_yticklabels(calendars)
    ax.invert_yaxis()

    ax.set_title(args.title)
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
