import pandas as pd
import pytest

from vcf_script.errors import UnknownFieldError, UnknownSampleError
from vcf_script.io import SimpleVCFReader
from vcf_script.script import ScriptedRecordProcessor
from vcf_script.tables import field_table


def test_field_table(vcf_path):
    df = field_table(SimpleVCFReader(vcf_path), ["CHROM", "POS", "ID", "QUAL", "FILTER", "INFO.AF", "INFO.DB", "S2.GT"])
    assert list(df.columns) == ["CHROM", "POS", "ID", "QUAL", "FILTER", "INFO.AF", "INFO.DB", "S2.GT"]
    assert df["POS"].tolist() == [100, 200, 300]
    assert df.loc[0, "ID"] == "rs1"
    assert df.loc[2, "ID"] == "rs3,rs4"
    assert pd.isna(df.loc[1, "QUAL"])
    assert df.loc[2, "QUAL"] == 12.5
    assert df.loc[0, "FILTER"] == "PASS"
    assert pd.isna(df.loc[1, "FILTER"])
    assert df.loc[1, "INFO.AF"] == "0.1,0.2"
    assert df["INFO.DB"].tolist() == [True, False, False]
    assert pd.isna(df.loc[2, "S2.GT"])


def test_field_table_with_processor(vcf_path):
    proc = ScriptedRecordProcessor("rec.CHROM == 'chr1'", ["def record():\n    INFO.DP = 1\n"])
    df = field_table(SimpleVCFReader(vcf_path), ["POS", "INFO.DP"], processor=proc)
    assert df["POS"].tolist() == [100, 200]
    assert df["INFO.DP"].tolist() == ["1", "1"]


def test_field_table_limit(vcf_path):
    assert len(field_table(SimpleVCFReader(vcf_path), ["POS"], limit=1)) == 1


@pytest.mark.parametrize("spec, error", [
    ("INFO.NOPE", UnknownFieldError),
    ("S1.NOPE", UnknownFieldError),
    ("S9.GT", UnknownSampleError),
    ("WHAT", UnknownFieldError),
])
def test_unknown_fields_fail_up_front(vcf_path, spec, error):
    with pytest.raises(error):
        field_table(SimpleVCFReader(vcf_path), ["POS", spec])
