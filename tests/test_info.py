import pytest

from vcf_script.core import ScriptSurface
from vcf_script.errors import InvalidValueError, UnknownFieldError
from vcf_script.utils import MISSING


def test_read_scalar_list_and_flag(surface, records):
    info = surface.info
    assert info.DP == "30"
    assert info.AF == ["0.5"]
    assert info.DB is True
    surface.bind(records[2])
    assert info.DP == MISSING
    assert info.AF == []
    assert info.DB is False


def test_list_round_trip(surface, records):
    surface.info.AF = [0.25, "0.75"]
    assert surface.info.AF == ["0.25", "0.75"]
    assert records[0].info["AF"] == ["0.25", "0.75"]
    surface.info.AF = "0.1,0.2,0.3"
    assert surface.info["AF"] == ["0.1", "0.2", "0.3"]


@pytest.mark.parametrize("cleared", [MISSING, "", [], False, None])
def test_missing_like_values_remove_field(surface, records, cleared):
    surface.info.DP = cleared
    surface.info.AF = cleared
    surface.info.DB = cleared
    assert "DP" not in records[0].info
    assert "AF" not in records[0].info
    assert "DB" not in records[0].info
    assert surface.info.DP == MISSING
    assert surface.info.AF == []
    assert surface.info.DB is False


def test_flag_write(surface, records):
    surface.bind(records[1])
    surface.info.DB = True
    assert records[1].info["DB"] is True
    assert "DB" in records[1].to_line().split("\t")[7].split(";")


@pytest.mark.parametrize("bad", [0, 1, "no", "yes", ["x"]])
def test_flag_accepts_only_true(surface, records, bad):
    with pytest.raises(InvalidValueError):
        surface.info.DB = bad
    assert records[0].info["DB"] is True


def test_scalar_write(surface, records):
    surface.info["DP"] = 12
    assert records[0].info["DP"] == "12"
    surface.info.set("DP", 1.5)
    assert surface.info.get("DP") == "1.5"
    del surface.info["DP"]
    assert surface.info.DP == MISSING


@pytest.mark.parametrize("bad", [True, "a;b", "tab\there"])
def test_invalid_scalar_values(surface, bad):
    with pytest.raises(InvalidValueError):
        surface.info.DP = bad


def test_undeclared_field_is_an_error(surface):
    with pytest.raises(UnknownFieldError):
        surface.info.NEW
    with pytest.raises(UnknownFieldError):
        surface.info.NEW = "1"
    assert "NEW" not in surface.info
    assert "NEW" not in surface.header.info


def test_declared_info_field_becomes_writable(surface, records):
    line = '##INFO=<ID=NEW,Number=.,Type=String,Description="Added">'
    assert surface.ensure_info_header(line) is True
    assert surface.ensure_info_header(line) is False
    assert list(surface.header.info).count("NEW") == 1
    assert surface.info.NEW == []
    surface.info.NEW = "x,y"
    assert records[0].info["NEW"] == ["x", "y"]
    # other accessors are unaffected by the declaration
    assert surface.info.DP == "30"


def test_ensure_header_rejects_wrong_kind(surface):
    with pytest.raises(InvalidValueError):
        surface.ensure_info_header('##FORMAT=<ID=GQ,Number=1,Type=Integer,Description="x">')


def test_auto_declare(header, records):
    surface = ScriptSurface(header, auto_declare_info=True)
    surface.bind(records[0])
    surface.info.ANN = "a,b"
    surface.info.HOT = True
    assert header.info["ANN"].number == "."
    assert header.info["HOT"].is_flag
    assert surface.info.ANN == ["a", "b"]
    assert surface.info.HOT is True
    # clearing an undeclared field does not declare it
    surface.info.GONE = MISSING
    assert "GONE" not in header.info
    # reading is still strict
    with pytest.raises(UnknownFieldError):
        surface.info.OTHER


def test_undeclared_data_is_left_alone(surface, records):
    records[0].info["XTRA"] = "1"
    surface.info.DP = 5
    assert records[0].info["XTRA"] == "1"


@pytest.mark.parametrize("bad", [["0.1,0.2"], ["0.1", "0.2,0.3"]])
def test_list_items_may_not_contain_commas(surface, records, bad):
    with pytest.raises(InvalidValueError):
        surface.info.AF = bad
    with pytest.raises(InvalidValueError):
        surface.info.DP = bad
    assert records[0].info["AF"] == ["0.5"]
    assert records[0].info["DP"] == "30"
