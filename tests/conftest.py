import pytest

from vcf_script.core import ScriptSurface
from vcf_script.io import VcfHeader, parse_record_line

VCF_TEXT = """##fileformat=VCFv4.2
##source=unit-test
##FILTER=<ID=LowQual,Description="Low quality">
##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">
##INFO=<ID=AF,Number=A,Type=Float,Description="Allele frequency">
##INFO=<ID=DB,Number=0,Type=Flag,Description="dbSNP membership">
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Read depth">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\tS2
chr1\t100\trs1\tA\tG\t50\tPASS\tDP=30;AF=0.5;DB\tGT:DP\t0/1:12\t0/0:18
chr1\t200\t.\tC\tT,A\t.\t.\tDP=8;AF=0.1,0.2\tGT\t1/1\t./.
chr2\t300\trs3;rs4\tG\tC\t12.5\tLowQual\t.\tGT:DP\t0/1:5\t.
"""


@pytest.fixture
def vcf_path(tmp_path):
    path = tmp_path / "input.vcf"
    path.write_text(VCF_TEXT)
    return str(path)


@pytest.fixture
def header():
    h = VcfHeader()
    for line in VCF_TEXT.splitlines():
        if line.startswith("##"):
            h.add_meta_line(line)
        elif line.startswith("#CHROM"):
            h.add_column_line(line)
    return h


@pytest.fixture
def records(header):
    lines = [l for l in VCF_TEXT.splitlines() if l and not l.startswith("#")]
    return [parse_record_line(l, header) for l in lines]


@pytest.fixture
def surface(header, records):
    s = ScriptSurface(header, version="3.12.1")
    s.bind(records[0])
    return s
