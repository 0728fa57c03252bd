#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import numpy as np

import lunarcal


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lunarcal[diagnostics]"') from e


def leap_months(start_year: int, end_year: int) -> List[Tuple[int, int]]:
    """(lunar year, month number) of every leap month in the range."""
    out = []
    for Y in range(start_year, end_year + 1):
        for m in lunarcal.months_in_year(Y):
            if m.is_leap_month:
                out.append((Y, m.month))
    return out


def build_points(start_year: int, end_year: int) -> Tuple[np.ndarray, np.ndarray]:
    pts = leap_months(start_year, end_year)
    xs = [y for y, _ in pts]
    ys = [m for _, m in pts]
    return np.array(xs, dtype=int), np.array(ys, dtype=int)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-month barcode diagram of the lunisolar calendar.")
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2060)
    p.add_argument("--out", default="leapmonth_barcode.png")
    p.add_argument("--title", default="Leap month pattern")
    p.add_argument("--list", action="store_true", help="Print the leap months instead of plotting.")
    p.add_argument("--year-step", type=int, default=5, help="Label every k years (default: 5).")
    args = p.parse_args(argv)

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    if args.list:
        for Y, M in leap_months(start_year, end_year):
            print(f"{Y}  leap {M}")
        return 0

    plt = _need_matplotlib()

    fig, ax = plt.subplots(figsize=(16, 3.6))

    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(0.5, 13.5, 1.0)
    Z = np.zeros((12, end_year - start_year + 1), dtype=float)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap="Greys",
        vmin=0, vmax=1,
        edgecolors="0.88",
        linewidth=0.6,
        zorder=0,
    )

    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, 12.5)
    ax.tick_params(axis="both", which="both", length=0)

    step = max(1, int(args.year_step))
    xt = list(range(start_year, end_year + 1, step))
    ax.set_xticks(xt)
    ax.set_xticklabels([str(y) for y in xt])
    ax.set_xlabel("Lunar year")
    ax.set_yticks(list(range(1, 13)))
    ax.set_ylabel("Leap month")

    x, m = build_points(start_year, end_year)
    ax.scatter(x, m, s=22, marker="o", c="0.15", linewidths=0.0, zorder=5)

    ax.set_title(args.title)
    fig.tight_layout()
    fig.savefig(args.out, dpi=250)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
