"""Command line interface for vcf_script.

Current subcommands:
	filter – keep/drop (and optionally modify) records with Python scripts
	query  – tabulate selected fields of the (kept) records as TSV

Example:
	python -m vcf_script.cli filter --vcf input.vcf.gz --out kept.vcf.gz -e "rec.QUAL != MISSING and rec.QUAL >= 30"
	python -m vcf_script.cli query --vcf input.vcf --fields CHROM,POS,INFO.DP,NA12878.GT --out table.tsv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .errors import VcfScriptError
from .io import SimpleVCFReader, VcfWriter
from .pipeline import run_filter
from .script import ScriptedRecordProcessor
from .tables import field_table

logger = logging.getLogger("vcf_script")


def _build_processor(args: argparse.Namespace, required: bool) -> ScriptedRecordProcessor | None:
	beginnings = ScriptedRecordProcessor.load_sources(args.scripts or [])
	expression = args.keep_expr
	if expression is not None:
		p = Path(expression)
		if p.is_file():
			expression = p.read_text().strip()
	if expression is None and not beginnings:
		if required:
			raise VcfScriptError("at least one of --keep-expr or --script is required")
		return None
	return ScriptedRecordProcessor(expression, beginnings, auto_declare_info=args.auto_declare_info)


def cmd_filter(args: argparse.Namespace) -> int:
	processor = _build_processor(args, required=True)
	reader = SimpleVCFReader(args.vcf, max_records=args.max_site)
	with VcfWriter(args.out) as writer:
		stats = run_filter(reader, processor, writer, fail_filter=args.fail)
	if args.out != '-':
		print(f"{stats.summary()}; written to {args.out}")
	return 0


def cmd_query(args: argparse.Namespace) -> int:
	processor = _build_processor(args, required=False)
	fields = [f.strip() for f in args.fields.split(',') if f.strip()]
	reader = SimpleVCFReader(args.vcf, max_records=args.max_site)
	df = field_table(reader, fields, processor=processor)
	out = sys.stdout if args.out == '-' else args.out
	df.to_csv(out, sep='\t', index=False, na_rep='.')
	if args.out != '-':
		print(f"{len(df):,} rows written to {args.out}")
	return 0


def _add_script_args(sp: argparse.ArgumentParser) -> None:
	sp.add_argument("-e", "--keep-expr", dest="keep_expr", default=None, help="Records for which this Python expression is true are kept. May be a file name")
	sp.add_argument("-j", "--script", dest="scripts", action="append", default=[], help="Python script run once before the first record (may define record() and end()). File name or inline source; repeatable")
	sp.add_argument("--auto-declare-info", action="store_true", help="Writing an undeclared INFO field adds it to the header instead of failing")
	sp.add_argument("--max-site", type=int, default=None, help="Limit number of records parsed (debug)")


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="vcf-script", description="Scripted VCF record filtering and annotation")
	p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
	p.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
	sub = p.add_subparsers(dest="command")

	sp = sub.add_parser("filter", help="Filter / modify records with Python scripts")
	sp.add_argument("--vcf", required=True, help="Input VCF or VCF.GZ file")
	sp.add_argument("--out", default='-', help="Output VCF ('.gz' for gzip, '-' for stdout)")
	sp.add_argument("--fail", default=None, metavar="FILTER", help="Keep failing records, tagging them with this FILTER value instead of removing them")
	_add_script_args(sp)
	sp.set_defaults(func=cmd_filter)

	sp2 = sub.add_parser("query", help="Tabulate record fields as TSV")
	sp2.add_argument("--vcf", required=True, help="Input VCF or VCF.GZ file")
	sp2.add_argument("--fields", required=True, help="Comma separated fields, e.g. CHROM,POS,QUAL,INFO.DP,SAMPLE1.GT")
	sp2.add_argument("--out", default='-', help="Output TSV ('-' for stdout)")
	_add_script_args(sp2)
	sp2.set_defaults(func=cmd_query)
	return p


def _setup_logging(args: argparse.Namespace) -> None:
	level = logging.INFO
	if args.verbose:
		level = logging.DEBUG
	elif args.quiet:
		level = logging.WARNING
	logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def main(argv=None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	if not hasattr(args, 'func'):
		parser.print_help()
		return 1
	_setup_logging(args)
	try:
		return args.func(args)
	except (VcfScriptError, OSError) as e:
		logger.error("%s", e)
		return 2


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
