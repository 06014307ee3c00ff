from __future__ import annotations

import argparse
import random
from typing import List

import calchrono
from calchrono.core.time import format_ymd, epoch_day_to_ymd


def parse_chronologies(s: str) -> List[str]:
    # "Hijrah,Coptic" -> ["Hijrah", "Coptic"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    chronology: str,
    N: int,
    start: int,
    end: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """epoch day -> (y, m, d) -> epoch day, plus day-to-day continuity, on N random days."""
    random.seed(seed)
    c = calchrono.chronology_for(chronology)
    failures = 0

    for _ in range(N):
        e0 = random.randint(start, end)
        d0 = c.date_epoch_day(e0)

        back = c.date(d0.proleptic_year, d0.month, d0.day)
        if back.epoch_day != e0:
            failures += 1
            print("\nFAIL (round trip)")
            print("chronology:", chronology)
            print("iso:", format_ymd(*epoch_day_to_ymd(e0)))
            print("date:", d0)
            print("back:", back, back.epoch_day)
            if failures >= max_failures:
                return failures

        nxt = c.date_epoch_day(e0 + 1)
        if d0.day == d0.length_of_month():
            ok = nxt.day == 1
        else:
            ok = (nxt.proleptic_year, nxt.month, nxt.day) == (d0.proleptic_year, d0.month, d0.day + 1)
        if not ok:
            failures += 1
            print("\nFAIL (continuity)")
            print("chronology:", chronology)
            print("date:", d0, "next:", nxt)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip and continuity checks for chronologies.")
    p.add_argument("--chronologies", default="ISO,ThaiBuddhist,Minguo,Coptic,Hijrah",
                   help="Comma list of chronology ids (default: all built-ins).")
    p.add_argument("--n", type=int, default=20000, help="Samples per chronology (default: 20000).")
    p.add_argument("--start", type=int, default=-600_000, help="First epoch day (default: -600000).")
    p.add_argument("--end", type=int, default=2_800_000, help="Last epoch day (default: 2800000).")
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--max-failures", type=int, default=10)
    args = p.parse_args(argv)

    if args.end < args.start:
        raise SystemExit("--end must be >= --start")

    total = 0
    for chrono in parse_chronologies(args.chronologies):
        c = calchrono.chronology_for(chrono)
        lo, hi = c.epoch_day_bounds()
        start, end = max(args.start, lo), min(args.end, hi - 1)
        f = roundtrip_test(chrono, args.n, start, end, args.seed, max_failures=args.max_failures)
        print(f"{chrono:<14} N={args.n}  epoch days {start}..{end}  failures={f}")
        total += f

    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
