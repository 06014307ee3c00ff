from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from calchrono.core.errors import CalchronoError


_DATE_RE = re.compile(r"^([+-]?\d+)-(\d{1,2})-(\d{1,2})$")


def _parse_ymd(s: str) -> tuple[int, int, int]:
    m = _DATE_RE.match(s.strip())
    if m is None:
        raise SystemExit(f"Bad date {s!r}: expected [-]YYYY-MM-DD")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


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


def cmd_convert(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono convert", description="Convert a date between chronologies")
    p.add_argument("date", help="[-]YYYY-MM-DD (proleptic year)")
    p.add_argument("--from", dest="source", default="ISO", help="Chronology of the input date (default: ISO)")
    p.add_argument("--to", dest="target", action="append", default=[],
                   help="Target chronology (repeatable; default: all registered)")
    p.add_argument("--explain", action="store_true", help="Print every field of each result")
    args = p.parse_args(argv)

    d = calchrono.date(*_parse_ymd(args.date), chronology=args.source)
    targets = args.target or calchrono.list_chronologies()
    for name in targets:
        out = calchrono.convert(d, name)
        print(f"{name:<14} {out}")
        if args.explain:
            for k, v in calchrono.explain(out).items():
                print(f"    {k:<30} {v}")
    return 0


def cmd_info(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono info", description="Describe a chronology")
    p.add_argument("chronology", help="Chronology id or calendar type")
    args = p.parse_args(argv)

    for k, v in calchrono.chronology_info(args.chronology).items():
        print(f"{k:<16} {v}")
    return 0


def cmd_list(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono list", description="List registered chronologies")
    p.parse_args(argv)

    for name, calendar_type in calchrono.calendar_types().items():
        print(f"{name:<14} {calendar_type}")
    return 0


def cmd_range(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono range", description="Print the value range of a field")
    p.add_argument("chronology")
    p.add_argument("field", help="ChronoField name, e.g. day_of_month")
    p.add_argument("--date", default=None, help="Range for this [-]YYYY-MM-DD date of the chronology instead")
    args = p.parse_args(argv)

    try:
        field = calchrono.ChronoField[args.field.upper()]
    except KeyError:
        raise SystemExit(f"Unknown field '{args.field}'. Available: {[f.name.lower() for f in calchrono.ChronoField]}") from None
    if args.date:
        d = calchrono.date(*_parse_ymd(args.date), chronology=args.chronology)
        print(d.range(field))
    else:
        print(calchrono.field_range(args.chronology, field))
    return 0


def cmd_deviation_check(argv: list[str]) -> int:
    from calchrono.engines import deviation

    p = argparse.ArgumentParser(prog="calchrono deviation-check",
                                description="Validate a Hijrah deviation config and show what it changes")
    p.add_argument("path", nargs="?", default=None, help="Config file (default: usual discovery order)")
    p.add_argument("--strict", action="store_true", help="Stop at the first bad entry")
    p.add_argument("--allow-overlap", action="store_true", help="Accept overlapping ranges")
    args = p.parse_args(argv)

    source = deviation.locate_deviation_config(args.path)
    if source is None:
        print("No deviation config found; default tables in use.")
        return 0
    if not source.is_file():
        raise SystemExit(f"No such deviation config: {source}")

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SystemExit(f"Cannot read deviation config {source}: {e}") from e
    patches, errors = deviation.parse_deviation_config(text, strict=args.strict)
    for exc in errors:
        print(f"line {exc.line}: {exc.token!r}: {exc}")
    tables = deviation.build_tables(patches, strict=args.strict, allow_overlap=args.allow_overlap)

    print(f"{source}: {len(patches)} entries parsed, {len(tables.patches)} applied, {len(errors)} rejected")
    for patch in tables.patches:
        print(f"  {patch}  (line {patch.line})")
    print(f"day-of-month range {tables.day_of_month_range}, day-of-year range {tables.day_of_year_range}")
    return 1 if errors or len(tables.patches) != len(patches) else 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="calchrono", description="Multi-calendar date toolkit CLI.")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("convert", help="Convert a date between chronologies")
    sub.add_parser("info", help="Describe a chronology")
    sub.add_parser("list", help="List registered chronologies")
    sub.add_parser("range", help="Print the value range of a field")
    sub.add_parser("deviation-check", help="Validate a Hijrah deviation config")

    # diagnostics
    sub.add_parser("pretty-month", help="Print month calendars with paired ISO labels (diagnostics)")
    sub.add_parser("new-years", help="Print New Year table (diagnostics)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "month-lengths"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    commands = {
        "convert": cmd_convert,
        "info": cmd_info,
        "list": cmd_list,
        "range": cmd_range,
        "deviation-check": cmd_deviation_check,
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "pretty-month":
            return _run_module_main("calchrono.diagnostics.pretty_month", rest)

        if args.cmd == "new-years":
            return _run_module_main("calchrono.diagnostics.new_years_table", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "calchrono.diagnostics.round_trip",
                "month-lengths": "calchrono.diagnostics.month_lengths",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except CalchronoError as e:
        raise SystemExit(f"calchrono {args.cmd}: {e}") from e

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
