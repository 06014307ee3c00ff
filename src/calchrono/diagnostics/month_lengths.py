#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import calchrono
from calchrono.engines.specs import HIJRAH_TABULAR_SPEC


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "calchrono[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "calchrono[diagnostics]"') from e


def month_length_rows(chronology, start_year: int, end_year: int) -> List[List[int]]:
    c = calchrono.chronology_for(chronology) if isinstance(chronology, str) else chronology
    return [
        [c.length_of_month(Y, M) for M in range(1, c.months_per_year + 1)]
        for Y in range(start_year, end_year + 1)
    ]


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Month-length grid (years x months), e.g. to see Hijrah deviations against the tabular rule."
    )
    p.add_argument("--chronology", default="Hijrah")
    p.add_argument("--compare", default="tabular",
                   help="Chronology whose month lengths are subtracted; 'tabular' is the unpatched Hijrah, '' disables.")
    p.add_argument("--start-year", type=int, default=1420)
    p.add_argument("--end-year", type=int, default=1460)
    p.add_argument("--out", default="", help="Write the figure to this file instead of showing it.")
    p.add_argument("--text", action="store_true", help="Print the grid instead of plotting (no extras needed).")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    rows = month_length_rows(args.chronology, args.start_year, args.end_year)
    compare = calchrono.make_chronology(HIJRAH_TABULAR_SPEC) if args.compare == "tabular" else args.compare
    base = month_length_rows(compare, args.start_year, args.end_year) if args.compare else None

    if args.text:
        for i, row in enumerate(rows):
            ref = base[i] if base is not None else row
            # '*' marks a month whose length differs from the comparison
            cells = [f"{v:2d}{'*' if v != b else ' '}" for v, b in zip(row, ref)]
            print(f"{args.start_year + i:>6}  " + " ".join(cells))
        return 0

    np = _need_numpy()
    plt = _need_matplotlib()

    Z = np.array(rows, dtype=float)
    if base is not None:
        Z = Z - np.array(base, dtype=float)
        cmap, vmin, vmax, label = "coolwarm", -2.0, 2.0, f"days vs {args.compare}"
    else:
        cmap, vmin, vmax, label = "Greys", 28.0, 31.0, "month length (days)"

    fig, ax = plt.subplots(figsize=(16, 3.6))
    x_edges = np.arange(args.start_year - 0.5, args.end_year + 1.5, 1.0)
    y_edges = np.arange(0.5, Z.shape[1] + 1.0, 1.0)
    mesh = ax.pcolormesh(x_edges, y_edges, Z.T, shading="flat", cmap=cmap, vmin=vmin, vmax=vmax,
                         edgecolors="0.88", linewidth=0.6)
    ax.set_xlim(args.start_year - 0.5, args.end_year + 0.5)
    ax.set_ylim(0.5, Z.shape[1] + 0.5)
    ax.tick_params(axis="both", which="both", length=0)
    ax.set_xlabel(f"{args.chronology} year")
    ax.set_ylabel("month")
    fig.colorbar(mesh, ax=ax, label=label)
    fig.tight_layout()

    if args.out:
        fig.savefig(args.out, dpi=150)
        print(f"wrote {args.out}")
    else:
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
