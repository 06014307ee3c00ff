# tests/test_cli.py
import os
from unittest import mock

import pytest

from calchrono import cli
from calchrono.engines import deviation as dev


def run(capsys, *argv):
    rc = cli.main(list(argv))
    return rc, capsys.readouterr().out


def test_list(capsys):
    rc, out = run(capsys, "list")
    assert rc == 0
    assert "Hijrah" in out and "islamic-civil" in out
    assert len(out.splitlines()) == 5


def test_convert_to_selected_chronologies(capsys):
    rc, out = run(capsys, "convert", "2023-07-19", "--to", "Hijrah", "--to", "buddhist")
    assert rc == 0
    lines = out.splitlines()
    assert lines[0].split() == ["Hijrah", "Hijrah", "AH", "1445-01-01"]
    assert lines[1].split() == ["buddhist", "ThaiBuddhist", "BE", "2566-07-19"]


def test_convert_from_another_chronology_with_explain(capsys):
    rc, out = run(capsys, "convert", "1686-04-23", "--from", "Coptic", "--to", "ISO", "--explain")
    assert rc == 0
    assert out.splitlines()[0].split() == ["ISO", "1970-01-01"]
    assert "epoch_day" in out
    assert "THURSDAY" in out


def test_convert_rejects_bad_input(capsys):
    with pytest.raises(SystemExit):
        cli.main(["convert", "2024/01/01"])
    with pytest.raises(SystemExit) as ei:
        cli.main(["convert", "2023-02-29"])
    assert "calchrono convert" in str(ei.value.code)
    with pytest.raises(SystemExit) as ei:
        cli.main(["convert", "2024-01-01", "--to", "Julian"])
    assert "Julian" in str(ei.value.code)


def test_info(capsys):
    rc, out = run(capsys, "info", "roc")
    assert rc == 0
    assert "Minguo" in out
    assert "BEFORE_ROC" in out


def test_range(capsys):
    rc, out = run(capsys, "range", "Coptic", "day_of_month")
    assert rc == 0
    assert out.strip() == "1 - 5/30"
    rc, out = run(capsys, "range", "ISO", "day_of_month", "--date", "2023-02-10")
    assert out.strip() == "1 - 28"
    with pytest.raises(SystemExit) as ei:
        cli.main(["range", "ISO", "fortnight"])
    assert "day_of_month" in str(ei.value.code)


def test_deviation_check(capsys, tmp_path):
    path = tmp_path / "site.cfg"
    path.write_text("1429/0-1429/1:1\n1429/11-1430/0:1\n", encoding="utf-8")
    rc, out = run(capsys, "deviation-check", str(path))
    assert rc == 0
    assert "2 entries parsed, 2 applied, 0 rejected" in out
    assert "1429/11-1430/0:1  (line 2)" in out
    assert "day-of-month range (28, 31), day-of-year range (353, 355)" in out


def test_deviation_check_reports_problems(capsys, tmp_path):
    path = tmp_path / "site.cfg"
    path.write_text("1429/0-1429/1:1\n1429/1-1429/2:1\n1430/0:1\n", encoding="utf-8")
    rc, out = run(capsys, "deviation-check", str(path))
    assert rc == 1
    assert "line 3: '1430/0:1'" in out
    assert "2 entries parsed, 1 applied, 1 rejected" in out

    rc, out = run(capsys, "deviation-check", str(path), "--allow-overlap")
    assert "2 applied" in out


def test_deviation_check_unreadable_config(tmp_path):
    path = tmp_path / "latin1.cfg"
    path.write_bytes(b"# r\xe9glage\n1429/0-1429/1:1\n")
    with pytest.raises(SystemExit) as ei:
        cli.main(["deviation-check", str(path)])
    assert "Cannot read deviation config" in str(ei.value.code)


def test_deviation_check_without_config(capsys, tmp_path):
    with mock.patch.dict(os.environ, {dev.ENV_CONFIG_DIR: str(tmp_path), dev.ENV_CONFIG_FILE: ""}):
        rc, out = run(capsys, "deviation-check")
    assert rc == 0
    assert "default tables in use" in out
    with pytest.raises(SystemExit):
        cli.main(["deviation-check", str(tmp_path / "missing.cfg")])


def test_diagnostics_dispatch(capsys):
    rc, out = run(capsys, "pretty-month", "--month", "1445", "9")
    assert rc == 0
    assert "1445" in out
    rc, out = run(capsys, "new-years", "--from-year", "2008", "--to-year", "2008", "--dates", "iso")
    assert "2008-01-10 (1429)" in out
    assert "2008-12-29 (1430)" in out
    rc, out = run(capsys, "diag", "round-trip", "--n", "200", "--seed", "1")
    assert rc == 0
    rc, out = run(capsys, "diag", "month-lengths", "--text", "--start-year", "1444", "--end-year", "1445")
    assert len(out.splitlines()) == 2
    assert "*" not in out
