"""Shared utilities for the AlphaFold pLDDT filtering pipeline."""

from .records import (
    RecordKind,
    classify_line,
    extract_bfactor,
    parse_leading_float,
)
from .pdb_filter import (
    FilterStatus,
    FilterResult,
    FileOutcome,
    filter_pdb_bytes,
    filter_pdb_file,
)
from .dispatch import (
    WorkItem,
    ProgressCounter,
    find_pdb_files,
    build_work_items,
    find_name_collisions,
    resolve_workers,
    split_ranges,
    iter_outcomes,
    run_batch,
)
from .config import load_config, DEFAULTS
from .report import write_report, summarize

__all__ = [
    # Records
    "RecordKind",
    "classify_line",
    "extract_bfactor",
    "parse_leading_float",
    # File filter
    "FilterStatus",
    "FilterResult",
    "FileOutcome",
    "filter_pdb_bytes",
    "filter_pdb_file",
    # Dispatch
    "WorkItem",
    "ProgressCounter",
    "find_pdb_files",
    "build_work_items",
    "find_name_collisions",
    "resolve_workers",
    "split_ranges",
    "iter_outcomes",
    "run_batch",
    # Config
    "load_config",
    "DEFAULTS",
    # Report
    "write_report",
    "summarize",
]
