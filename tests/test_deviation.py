# tests/test_deviation.py

import logging
import os
from unittest import mock

import pytest

import calchrono
from calchrono import DeviationConfigError
from calchrono.engines import deviation as dev
from calchrono.engines import hijrah_tables as ht
from calchrono.engines.hijrah import HijrahChronology
from calchrono.engines.specs import HIJRAH_ID


def patched(*entries, allow_overlap=False):
    patches = [dev.parse_entry(e) for e in entries]
    tables = dev.build_tables(patches, strict=True, allow_overlap=allow_overlap)
    return HijrahChronology(HIJRAH_ID, tables)


def assert_consistent(c, first_year, last_year):
    start = c.date(first_year, 1, 1).epoch_day
    end = c.date(last_year, 12, c.length_of_month(last_year, 12)).epoch_day
    prev = None
    for e in range(start, end + 1):
        d = c.date_epoch_day(e)
        assert c.date(d.year, d.month, d.day).epoch_day == e
        if prev is not None and prev.day != c.length_of_month(prev.year, prev.month):
            assert (d.year, d.month, d.day) == (prev.year, prev.month, prev.day + 1)
        prev = d


# ------------------------------------------------------------
# Applying patches
# ------------------------------------------------------------

def test_patch_moves_one_month_boundary():
    plain = calchrono.get_chronology("Hijrah", load_deviations=False)
    c = patched("1429/0-1429/1:1")

    assert c.date(1429, 1, 1).epoch_day == 13888
    assert c.date(1429, 2, 1).epoch_day == plain.date(1429, 2, 1).epoch_day - 1
    assert c.date(1429, 3, 1).epoch_day == plain.date(1429, 3, 1).epoch_day
    assert c.date(1430, 1, 1).epoch_day == plain.date(1430, 1, 1).epoch_day
    assert c.length_of_month(1429, 1) == 29
    assert c.length_of_month(1429, 2) == 30
    assert c.length_of_year(1429) == 354
    for m in range(1, 13):
        assert c.date(1428, m, 1).epoch_day == plain.date(1428, m, 1).epoch_day

    d = c.date_epoch_day(13888 + 29)
    assert (d.year, d.month, d.day) == (1429, 2, 1)
    assert_consistent(c, 1428, 1430)


def test_patch_across_a_year_boundary():
    plain = calchrono.get_chronology("Hijrah", load_deviations=False)
    c = patched("1429/11-1430/0:1")

    assert c.length_of_month(1429, 12) == 28
    assert c.length_of_month(1430, 1) == 31
    assert c.length_of_year(1429) == 353
    assert c.length_of_year(1430) == 355
    assert c.date(1430, 1, 1).epoch_day == plain.date(1430, 1, 1).epoch_day - 1
    assert c.date(1430, 2, 1).epoch_day == plain.date(1430, 2, 1).epoch_day
    assert c.tables.day_of_month_range == (28, 31)
    assert c.tables.day_of_year_range == (353, 355)
    assert c.range(calchrono.ChronoField.DAY_OF_MONTH).as_tuple() == (1, 28, 31)
    assert_consistent(c, 1429, 1430)


def test_patch_across_a_cycle_boundary():
    plain = calchrono.get_chronology("Hijrah", load_deviations=False)
    c = patched("1440/11-1441/0:1")

    assert c.date(1441, 1, 1).epoch_day == plain.date(1441, 1, 1).epoch_day - 1
    assert c.date(1442, 1, 1).epoch_day == plain.date(1442, 1, 1).epoch_day
    assert c.date(1500, 6, 1).epoch_day == plain.date(1500, 6, 1).epoch_day
    assert_consistent(c, 1440, 1441)


def test_negative_offset_lengthens_start_month():
    c = patched("1445/8-1445/9:-1")
    assert c.length_of_month(1445, 9) == 31
    assert c.length_of_month(1445, 10) == 28
    assert_consistent(c, 1445, 1445)


def test_overlap_rejected_unless_allowed():
    builder = ht.HijrahTableBuilder()
    builder.add(dev.parse_entry("1429/0-1429/1:1"))
    with pytest.raises(DeviationConfigError, match="overlaps"):
        builder.add(dev.parse_entry("1429/1-1429/2:-1"))
    assert len(builder.patches) == 1

    c = patched("1429/0-1429/1:1", "1429/1-1429/2:-1", allow_overlap=True)
    assert [c.length_of_month(1429, m) for m in (1, 2, 3)] == [29, 31, 29]
    assert_consistent(c, 1429, 1429)


def test_rejected_patch_leaves_builder_unchanged():
    builder = ht.HijrahTableBuilder()
    with pytest.raises(DeviationConfigError) as err:
        builder.add(dev.parse_entry("1429/0-1429/1:3", line=7))
    assert err.value.line == 7
    assert builder.patches == ()
    tables = builder.build()
    assert not tables.is_patched
    assert dict(tables.month_lengths) == {}
    assert tables.day_of_month_range == (29, 30)


def test_builder_is_single_use():
    builder = ht.HijrahTableBuilder()
    builder.build()
    with pytest.raises(RuntimeError):
        builder.add(dev.parse_entry("1429/0-1429/1:1"))


# ------------------------------------------------------------
# Parsing
# ------------------------------------------------------------

@pytest.mark.parametrize(
    "token, message",
    [
        ("1429/0-1429/1", "Offset has incorrect format at line 3."),
        ("1429/0-1429/1:x", "Offset is not properly set at line 3."),
        ("1429/0:1", "Start and end year/month has incorrect format at line 3."),
        ("1429-1429/1:1", "Start year/month has incorrect format at line 3."),
        ("abc/0-1429/1:1", "Start year is not properly set at line 3."),
        ("1429/x-1429/1:1", "Start month is not properly set at line 3."),
        ("1429/0-1429:1", "End year/month has incorrect format at line 3."),
        ("1429/0-y/1:1", "End year is not properly set at line 3."),
        ("1429/0-1429/:1", "End month is not properly set at line 3."),
    ],
)
def test_parse_errors_carry_line_and_token(token, message):
    with pytest.raises(DeviationConfigError) as err:
        dev.parse_entry(token, 3)
    assert str(err.value) == message
    assert err.value.line == 3
    assert err.value.token == token


@pytest.mark.parametrize("token", ["0/0-1/0:1", "1/12-2/0:1", "1430/0-1429/0:1", "1429/5-1429/4:1", "1/0-10000/0:1"])
def test_out_of_range_patches(token):
    with pytest.raises(DeviationConfigError):
        dev.parse_entry(token, 1)


def test_patch_text_form():
    p = dev.parse_entry(" 1429/0-1429/1:1 ", 2)
    assert str(p) == "1429/0-1429/1:1"
    assert p == ht.DeviationPatch(1429, 0, 1429, 1, 1)
    assert p.line == 2


CONFIG = """\
# comment
1429/0-1429/1:1; 1430/3-1430/4:1

1431/0-1431/1:bad
;1432/0-1432/1:-1;
"""


def test_lenient_parsing_skips_bad_entries():
    patches, errors = dev.parse_deviation_config(CONFIG)
    assert [str(p) for p in patches] == ["1429/0-1429/1:1", "1430/3-1430/4:1", "1432/0-1432/1:-1"]
    assert [p.line for p in patches] == [2, 2, 5]
    assert len(errors) == 1
    assert errors[0].line == 4
    assert errors[0].token == "1431/0-1431/1:bad"


def test_strict_parsing_stops_at_first_error():
    with pytest.raises(DeviationConfigError) as err:
        dev.parse_deviation_config(CONFIG, strict=True)
    assert err.value.line == 4


def test_parse_line():
    assert dev.parse_line("  ") == []
    assert dev.parse_line("# 1429/0-1429/1:1") == []
    assert len(dev.parse_line("1429/0-1429/1:1;1430/0-1430/1:1", 9)) == 2


# ------------------------------------------------------------
# Discovery and loading
# ------------------------------------------------------------

def write_config(path, text="1429/0-1429/1:1\n"):
    path.write_text(text, encoding="utf-8")
    return path


def test_packaged_config_has_no_deviations():
    with mock.patch.dict(os.environ, {dev.ENV_CONFIG_DIR: "", dev.ENV_CONFIG_FILE: ""}):
        source = dev.locate_deviation_config()
        assert source is not None
        assert source.name == dev.DEFAULT_CONFIG_FILENAME
        assert not dev.load_hijrah_tables().is_patched


def test_directory_from_environment(tmp_path):
    write_config(tmp_path / dev.DEFAULT_CONFIG_FILENAME)
    with mock.patch.dict(os.environ, {dev.ENV_CONFIG_DIR: str(tmp_path), dev.ENV_CONFIG_FILE: ""}):
        assert dev.locate_deviation_config() == tmp_path / dev.DEFAULT_CONFIG_FILENAME
        tables = dev.load_hijrah_tables()
    assert [str(p) for p in tables.patches] == ["1429/0-1429/1:1"]


def test_file_name_and_directory_from_environment(tmp_path):
    write_config(tmp_path / "local.cfg")
    env = {dev.ENV_CONFIG_DIR: str(tmp_path), dev.ENV_CONFIG_FILE: "local.cfg"}
    with mock.patch.dict(os.environ, env):
        assert dev.locate_deviation_config() == tmp_path / "local.cfg"


def test_file_path_from_environment(tmp_path):
    path = write_config(tmp_path / "site.cfg")
    with mock.patch.dict(os.environ, {dev.ENV_CONFIG_DIR: "", dev.ENV_CONFIG_FILE: str(path)}):
        assert dev.locate_deviation_config() == path
        c = calchrono.get_chronology("Hijrah")
    assert c.length_of_month(1429, 1) == 29


def test_missing_file_in_directory_means_defaults(tmp_path):
    with mock.patch.dict(os.environ, {dev.ENV_CONFIG_DIR: str(tmp_path), dev.ENV_CONFIG_FILE: ""}):
        assert dev.locate_deviation_config() is None
        assert not dev.load_hijrah_tables().is_patched


def test_explicit_path_wins(tmp_path):
    path = write_config(tmp_path / "explicit.cfg", "1445/8-1445/9:-1\n")
    write_config(tmp_path / dev.DEFAULT_CONFIG_FILENAME)
    with mock.patch.dict(os.environ, {dev.ENV_CONFIG_DIR: str(tmp_path), dev.ENV_CONFIG_FILE: ""}):
        c = calchrono.load_hijrah(str(path))
    assert c.info()["deviations"] == ["1445/8-1445/9:-1"]


def test_unreadable_config_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="calchrono"):
        tables = dev.load_hijrah_tables(tmp_path / "missing.cfg")
    assert not tables.is_patched
    assert "using default tables" in caplog.text


def test_strict_load_falls_back_on_bad_entry(tmp_path, caplog):
    path = write_config(tmp_path / "bad.cfg", "1429/0-1429/1:1\n1430/0-1430:1\n")
    with caplog.at_level(logging.WARNING, logger="calchrono"):
        strict = dev.load_hijrah_tables(path, strict=True)
        lenient = dev.load_hijrah_tables(path)
    assert not strict.is_patched
    assert [str(p) for p in lenient.patches] == ["1429/0-1429/1:1"]
    assert "1430/0-1430:1" in caplog.text


def test_lenient_load_skips_overlapping_patch(tmp_path, caplog):
    path = write_config(tmp_path / "overlap.cfg", "1429/0-1429/1:1\n1429/1-1429/2:1\n")
    with caplog.at_level(logging.WARNING, logger="calchrono"):
        tables = dev.load_hijrah_tables(path)
    assert [str(p) for p in tables.patches] == ["1429/0-1429/1:1"]
    assert "overlaps" in caplog.text
