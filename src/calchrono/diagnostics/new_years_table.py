from __future__ import annotations

import argparse
from typing import List, Tuple

import calchrono


DEFAULT_CHRONOLOGIES: List[Tuple[str, str]] = [
    ("Hijrah", "Hijrah"),
    ("Coptic", "Coptic"),
]


def mmdd(iso: str) -> str:
    return iso[-5:]


def parse_chronologies(arg: str) -> List[Tuple[str, str]]:
    """
    Parse chronology list from CLI.
    Example:
      --chronologies "AH=Hijrah,AM=Coptic"
    If you pass just ids, the label is the id:
      --chronologies "Hijrah,Coptic"
    """
    items = [x.strip() for x in arg.split(",") if x.strip()]
    out: List[Tuple[str, str]] = []
    for it in items:
        if "=" in it:
            name, chrono = it.split("=", 1)
            out.append((name.strip(), chrono.strip()))
        else:
            out.append((it, it))
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the ISO date of New Year (month 1 day 1) for the ISO years in a range."
    )
    p.add_argument("--from-year", type=int, default=2000, help="First ISO year (default: 2000).")
    p.add_argument("--to-year", type=int, default=2030, help="Last ISO year (default: 2030).")
    p.add_argument(
        "--chronologies",
        type=str,
        default="",
        help='Comma list like "AH=Hijrah,AM=Coptic" (default: Hijrah and Coptic).',
    )
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table columns (default: mmdd).",
    )
    args = p.parse_args(argv)

    chronologies = parse_chronologies(args.chronologies) if args.chronologies else DEFAULT_CHRONOLOGIES

    def fmt(iso: str) -> str:
        return mmdd(iso) if args.dates == "mmdd" else iso

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year"] + [name for name, _ in chronologies]
    colw = [5] + [max(16 if args.dates == "iso" else 12, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0])]
        jan1 = calchrono.date(Y, 1, 1)
        dec31 = calchrono.date(Y, 12, 31)
        for (_, chrono), w in zip(chronologies, colw[1:]):
            # a Hijrah year is shorter than an ISO year, so some ISO years hold two
            labels = []
            cy = calchrono.convert(jan1, chrono).proleptic_year
            while True:
                ny = calchrono.new_year_day(cy, chronology=chrono)
                if ny["epoch_day"] > dec31.epoch_day:
                    break
                if ny["epoch_day"] >= jan1.epoch_day:
                    labels.append(f"{fmt(ny['iso'])} ({cy})")
                cy += 1
            row.append((", ".join(labels) or "-").ljust(w))
        print("  ".join(row))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
