import gzip

import pytest

from vcf_script.errors import VcfFormatError
from vcf_script.io import FieldDescriptor, SimpleVCFReader, VcfHeader, VcfWriter, parse_meta_line

from conftest import VCF_TEXT


def test_read_header(vcf_path):
    header = SimpleVCFReader(vcf_path).read_header()
    assert header.samples == ["S1", "S2"]
    assert list(header.info) == ["DP", "AF", "DB"]
    assert list(header.formats) == ["GT", "DP"]
    assert header.info["AF"].is_multi_valued
    assert header.info["DB"].is_flag
    assert "##source=unit-test" in header.meta_lines


def test_parse_records(vcf_path):
    recs = list(SimpleVCFReader(vcf_path).parse())
    assert len(recs) == 3
    first, second, third = recs
    assert first.chrom == "chr1" and first.pos == 100
    assert first.ids == ["rs1"]
    assert first.info == {"DP": "30", "AF": ["0.5"], "DB": True}
    assert first.format == {"GT": ["0/1", "0/0"], "DP": ["12", "18"]}
    assert second.ids == [] and second.qual is None and second.filters == []
    assert second.alts == ["T", "A"]
    assert second.info["AF"] == ["0.1", "0.2"]
    assert third.ids == ["rs3", "rs4"]
    # a bare '.' sample column expands to missing sub-fields
    assert third.format == {"GT": ["0/1", "."], "DP": ["5", "."]}


def test_max_records(vcf_path):
    assert len(list(SimpleVCFReader(vcf_path, max_records=2).parse())) == 2


def test_gzip_input(tmp_path):
    path = tmp_path / "input.vcf.gz"
    with gzip.open(path, "wt") as fh:
        fh.write(VCF_TEXT)
    assert [r.pos for r in SimpleVCFReader(str(path)).parse()] == [100, 200, 300]


def test_record_line_round_trip(vcf_path):
    data_lines = [l for l in VCF_TEXT.splitlines() if l and not l.startswith("#")]
    recs = list(SimpleVCFReader(vcf_path).parse())
    assert recs[0].to_line() == data_lines[0]
    assert recs[1].to_line() == data_lines[1]
    # trailing missing sub-fields are dropped: '.:.' -> '.'
    assert recs[2].to_line() == data_lines[2]


def test_wrong_column_count(tmp_path):
    path = tmp_path / "bad.vcf"
    path.write_text(VCF_TEXT + "chr3\t1\t.\tA\tG\t.\t.\t.\tGT\t0/1\n")
    with pytest.raises(VcfFormatError, match="line 13"):
        list(SimpleVCFReader(str(path)).parse())


def test_missing_column_header(tmp_path):
    path = tmp_path / "bad.vcf"
    path.write_text("##fileformat=VCFv4.2\n")
    with pytest.raises(VcfFormatError):
        SimpleVCFReader(str(path)).read_header()


def test_duplicate_sample_names():
    with pytest.raises(VcfFormatError):
        VcfHeader(["S1", "S1"])


def test_parse_meta_line_quoted_description():
    fd = parse_meta_line('##INFO=<ID=X,Number=2,Type=Integer,Description="a, \\"quoted\\" text",Source=me>')
    assert (fd.kind, fd.id, fd.number, fd.type) == ("INFO", "X", "2", "Integer")
    assert fd.description == 'a, "quoted" text'
    assert fd.extra == {"Source": "me"}
    assert parse_meta_line(fd.to_line()).description == fd.description


def test_parse_meta_line_requires_number_and_type():
    with pytest.raises(VcfFormatError):
        parse_meta_line('##FORMAT=<ID=GT,Description="Genotype">')


def test_writer_output(tmp_path, vcf_path):
    reader = SimpleVCFReader(vcf_path)
    header = reader.read_header()
    header.ensure_info(FieldDescriptor("INFO", "NEW", "1", "Integer", "new field"))
    out = tmp_path / "out.vcf.gz"
    with VcfWriter(str(out)) as writer:
        writer.write_header(header)
        for rec in reader.parse():
            writer.write(rec)
    assert writer.records_written == 3
    with gzip.open(out, "rt") as fh:
        lines = fh.read().splitlines()
    assert lines[0] == "##fileformat=VCFv4.2"
    assert '##INFO=<ID=NEW,Number=1,Type=Integer,Description="new field">' in lines
    assert lines[lines.index("#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\tS2") + 1].startswith("chr1\t100")
