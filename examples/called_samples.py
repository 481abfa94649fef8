# Begin script for `vcf-script filter -j examples/called_samples.py`.
# Adds INFO/NS (number of samples with a called genotype), tags sites with
# fewer than MIN_CALLED such samples, and reports a count at the end.

MIN_CALLED = 2

check_min_version("1.0")
ensure_info_header('##INFO=<ID=NS,Number=1,Type=Integer,Description="Number of samples with a called genotype">')

tagged = 0


def called(gt):
    return has(gt) and "." not in gt


def record():
    global tagged
    n = sum(1 for name in SAMPLES if called(SAMPLES[name].GT))
    INFO.NS = n
    if n < MIN_CALLED:
        rec.FILTER.add("FewCalls")
        tagged += 1


def end():
    stderr(f"{tagged} sites with fewer than {MIN_CALLED} called samples")
