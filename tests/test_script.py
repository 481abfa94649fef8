import pytest

from vcf_script.errors import (
    IncompatibleVersionError,
    ScriptCompileError,
    ScriptEvaluationError,
    UnknownSampleError,
)
from vcf_script.script import ScriptedRecordProcessor


def _accepted(processor, header, records):
    processor.set_header(header)
    out = []
    for rec in records:
        processor.set_record(rec)
        out.append(processor.accept())
    return out


def test_keep_expression(header, records):
    proc = ScriptedRecordProcessor("rec.QUAL != MISSING and rec.QUAL > 20")
    assert _accepted(proc, header, records) == [True, False, False]


def test_record_function_can_drop_and_modify(header, records):
    script = """
def record():
    if rec.CHROM == 'chr2':
        return False
    SAMPLES['S2'].GT = '1/1'
"""
    proc = ScriptedRecordProcessor(None, [script])
    assert proc.has_record_function is False
    assert _accepted(proc, header, records) == [True, True, False]
    assert proc.has_record_function is True
    assert records[0].format["GT"][1] == "1/1"


def test_expression_and_record_function_both_apply(header, records):
    proc = ScriptedRecordProcessor("rec.CHROM == 'chr1'", ["def record():\n    return rec.POS > 150\n"])
    assert _accepted(proc, header, records) == [False, True, False]


def test_begin_script_declares_fields(header, records):
    script = """
ensure_info_header('##INFO=<ID=NS,Number=1,Type=Integer,Description="Called samples">')
def record():
    INFO.NS = sum(1 for name in SAMPLES if has(SAMPLES[name].GT) and SAMPLES[name].GT != './.')
"""
    proc = ScriptedRecordProcessor(None, [script])
    _accepted(proc, header, records)
    assert "NS" in header.info
    assert [r.info["NS"] for r in records] == ["2", "1", "1"]


def test_end_function_sees_accumulated_state(header, records):
    script = """
seen = []
def record():
    seen.append(rec.POS)
def end():
    stderr('positions', seen)
"""
    proc = ScriptedRecordProcessor(None, [script])
    _accepted(proc, header, records)
    proc.end()
    assert proc.globals["seen"] == [100, 200, 300]


def test_end_without_function_is_noop(header):
    proc = ScriptedRecordProcessor("True")
    proc.set_header(header)
    proc.end()


def test_version_gate_in_begin_script(header):
    proc = ScriptedRecordProcessor(None, ["check_min_version('9.0')"], version="3.12.1")
    with pytest.raises(IncompatibleVersionError):
        proc.set_header(header)
    ok = ScriptedRecordProcessor(None, ["check_min_version('3.11')"], version="3.12.1")
    ok.set_header(header)


def test_compile_errors():
    with pytest.raises(ScriptCompileError):
        ScriptedRecordProcessor("rec.QUAL >")
    with pytest.raises(ScriptCompileError):
        ScriptedRecordProcessor(None, ["def broken(:\n"])


def test_runtime_errors_are_wrapped(header, records):
    proc = ScriptedRecordProcessor("1 / 0")
    proc.set_header(header)
    proc.set_record(records[0])
    with pytest.raises(ScriptEvaluationError, match="chr1:100"):
        proc.accept()


def test_core_errors_propagate_unchanged(header, records):
    proc = ScriptedRecordProcessor("SAMPLES['nobody'].GT == '0/1'")
    proc.set_header(header)
    proc.set_record(records[0])
    with pytest.raises(UnknownSampleError):
        proc.accept()


def test_set_record_requires_header(records):
    with pytest.raises(RuntimeError):
        ScriptedRecordProcessor("True").set_record(records[0])


def test_load_sources(tmp_path):
    script = tmp_path / "s.py"
    script.write_text("x = 1\n")
    assert ScriptedRecordProcessor.load_sources([str(script), "y = 2"]) == ["x = 1\n", "y = 2"]
