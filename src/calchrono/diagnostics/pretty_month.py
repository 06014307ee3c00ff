from __future__ import annotations

import argparse

import calchrono
from calchrono.core.time import epoch_day_to_ymd, format_ymd, ymd_to_epoch_day, length_of_month


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def layout_weeks(first_dow: int, days: list[tuple[str, str]]) -> list[list[tuple[str, str]]]:
    """Lay out (top, bottom) day labels in Monday-first weeks; first_dow is 1..7."""
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = [cell("", "") for _ in range(first_dow - 1)]
    for top, bot in days:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def chrono_month_calendar(chronology: str, Y: int, M: int) -> None:
    rows = calchrono.days_in_month(Y, M, chronology=chronology)
    days = [(f"{r['day']:2d}", f"{r['iso'][1]:02d}-{r['iso'][2]:02d}") for r in rows]
    b = calchrono.month_bounds(Y, M, chronology=chronology)
    title = f"{chronology} month  Y={Y}  M={M}   ({b['first_iso']} .. {b['last_iso']})"
    print_grid(title, layout_weeks(int(rows[0]["day_of_week"]), days))


def iso_month_calendar(chronology: str, gy: int, gm: int) -> None:
    c = calchrono.chronology_for(chronology)
    first = ymd_to_epoch_day(gy, gm, 1)
    days = []
    for e in range(first, first + length_of_month(gy, gm)):
        d = c.date_epoch_day(e)
        days.append((f"{epoch_day_to_ymd(e)[2]:2d}", f"{d.month:02d}-{d.day:02d}"))
    title = f"{chronology} over ISO month  {format_ymd(gy, gm, 1)[:-3]}"
    print_grid(title, layout_weeks(calchrono.date_from_epoch_day(first).day_of_week, days))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a month of any chronology and/or an ISO month with paired labels."
    )
    p.add_argument("--chronology", default="Hijrah", help="ISO|ThaiBuddhist|Minguo|Coptic|Hijrah (default: Hijrah)")
    p.add_argument("--month", nargs=2, type=int, metavar=("Y", "M"),
                   help="Month of the chronology to print: Y M (e.g. 1445 9)")
    p.add_argument("--iso", nargs=2, type=int, metavar=("GY", "GM"),
                   help="ISO month to print: GY GM (e.g. 2024 3)")
    args = p.parse_args(argv)

    if not args.month and not args.iso:
        chrono_month_calendar(args.chronology, Y=1445, M=9)
        iso_month_calendar(args.chronology, gy=2024, gm=3)
        return 0

    if args.month:
        Y, M = args.month
        chrono_month_calendar(args.chronology, Y=Y, M=M)

    if args.iso:
        gy, gm = args.iso
        iso_month_calendar(args.chronology, gy=gy, gm=gm)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
