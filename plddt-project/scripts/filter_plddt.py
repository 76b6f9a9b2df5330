#!/usr/bin/env python3
"""
pLDDT Filter

Removes atom records from AlphaFold PDB structures where pLDDT (stored in
the B-factor column) is below a cutoff. Input directories are scanned
recursively; filtered files are written flat into the output directory
under their original file names.

Outputs:
    - OUTPUT_DIR/*.pdb: Filtered PDB files
    - Optional per-file CSV report (--report)
"""
from __future__ import annotations


import argparse
import re
import sys
from pathlib import Path

from plddt_utils import (
    build_work_items,
    find_name_collisions,
    find_pdb_files,
    load_config,
    resolve_workers,
    run_batch,
    summarize,
    write_report,
)


# Plain ASCII decimal, optional sign and exponent; no digit separators.
CUTOFF_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

USAGE = "filter_plddt.py <input_dir> <output_dir> <cutoff> [threads]"

EPILOG = """\
Example:
  filter_plddt.py af_models filtered_models 50 112

Notes:
  pLDDT values are read from columns 61-66 of ATOM/HETATM records.
  Lines shorter than 67 characters are always kept.
  Files are processed in parallel worker processes.
  Files with the same name in different subdirectories overwrite each other.
  ! This program comes with ZERO WARRANTY. Always do your QC and take backups !
"""


class FilterArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on invalid arguments."""

    def error(self, message):
        print(f"Invalid arguments: {message}", file=sys.stderr)
        print(f"Usage: {USAGE}", file=sys.stderr)
        print(" Use -h for help.", file=sys.stderr)
        sys.exit(1)


def cutoff_value(text: str) -> float:
    if not CUTOFF_PATTERN.fullmatch(text):
        raise ValueError(f"not a decimal number: {text!r}")
    return float(text)


def parse_args(argv=None):
    parser = FilterArgumentParser(
        usage=USAGE,
        description=(
            "Removes residues from AlphaFold PDB structures where pLDDT "
            "(stored in B-factor column) is below the specified cutoff."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input_dir",
        help="Directory containing PDB files (searched recursively).",
    )
    parser.add_argument(
        "output_dir",
        help="Directory where filtered PDB files will be written (created if absent).",
    )
    parser.add_argument(
        "cutoff",
        type=cutoff_value,
        help="pLDDT threshold, e.g. 50. Atom records below it are removed.",
    )
    parser.add_argument(
        "threads",
        nargs="?",
        type=int,
        default=None,
        help="Optional number of worker processes (non-positive uses the default).",
    )
    parser.add_argument(
        "--config",
        default="",
        help="YAML config (default: plddt-project/config/filter.yaml if present).",
    )
    parser.add_argument(
        "--report",
        default="",
        help="Optional CSV path for per-file record counts.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(Path(args.config) if args.config else None)
        pdb_files = find_pdb_files(Path(args.input_dir), config["suffix"])
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"Error: cannot create output directory {output_dir}: {exc}", file=sys.stderr)
        return 1

    total = len(pdb_files)
    print(f"Found {total} PDB files", flush=True)

    items = build_work_items(pdb_files, output_dir)
    collisions = find_name_collisions(items)
    if collisions:
        print(
            f"  Warning: {len(collisions)} file names occur in more than one "
            f"subdirectory; only the last one written is kept",
            file=sys.stderr,
        )
        for name, paths in sorted(collisions.items()):
            print(f"    {name}: {len(paths)} inputs", file=sys.stderr)

    workers = resolve_workers(args.threads, config["workers"])
    outcomes = run_batch(
        items,
        args.cutoff,
        workers,
        strict=config["strict_record_names"],
        report_interval=config["report_interval"],
    )

    print(f"Completed processing {total} files")

    summary = summarize(outcomes)
    if summary["files_failed"]:
        print(f"  {summary['files_failed']} files skipped due to errors")

    if args.report:
        report_path = Path(args.report)
        write_report(report_path, outcomes)
        kept = summary["kept_fraction"]
        mean = summary["mean_plddt"]
        print(
            f"Kept {summary['atoms_kept']}/{summary['atom_records']} atom records"
            + (f" ({100.0 * kept:.1f}%)" if kept is not None else "")
            + (f", mean pLDDT {mean:.2f}" if mean is not None else "")
        )
        print(f"Wrote {report_path} ({len(outcomes)} files)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
