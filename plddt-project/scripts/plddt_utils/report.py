"""Per-file CSV report and batch summary for filter runs."""
from __future__ import annotations


import csv
from pathlib import Path

import numpy as np

from .pdb_filter import FileOutcome


REPORT_FIELDS = [
    "file",
    "status",
    "lines",
    "atom_records",
    "atoms_kept",
    "atoms_dropped",
    "mean_plddt",
]


def outcome_row(outcome: FileOutcome) -> dict:
    return {
        "file": str(outcome.input_path),
        "status": outcome.status.value,
        "lines": outcome.lines,
        "atom_records": outcome.atom_records,
        "atoms_kept": outcome.atoms_kept,
        "atoms_dropped": outcome.atom_records - outcome.atoms_kept,
        "mean_plddt": f"{outcome.mean_plddt:.2f}" if outcome.mean_plddt is not None else "NA",
    }


def write_report(report_path: Path, outcomes: list[FileOutcome]) -> None:
    """Write one CSV row per processed file, sorted by input path."""
    report_path.parent.mkdir(parents=True, exist_ok=True)
    rows = [outcome_row(o) for o in sorted(outcomes, key=lambda o: str(o.input_path))]
    with report_path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        writer.writerows(rows)


def summarize(outcomes: list[FileOutcome]) -> dict:
    """
    Aggregate statistics over successfully filtered files.

    Returns:
        Dict with ``files_ok``, ``files_failed``, ``atom_records``,
        ``atoms_kept``, ``kept_fraction`` (None without atom records) and
        ``mean_plddt`` (mean of per-file means, None without values).
    """
    ok = [o for o in outcomes if o.ok]
    atom_records = np.array([o.atom_records for o in ok], dtype=np.int64)
    atoms_kept = np.array([o.atoms_kept for o in ok], dtype=np.int64)
    means = np.array([o.mean_plddt for o in ok if o.mean_plddt is not None], dtype=float)

    total_atoms = int(atom_records.sum())
    total_kept = int(atoms_kept.sum())
    return {
        "files_ok": len(ok),
        "files_failed": len(outcomes) - len(ok),
        "atom_records": total_atoms,
        "atoms_kept": total_kept,
        "kept_fraction": total_kept / total_atoms if total_atoms else None,
        "mean_plddt": float(np.mean(means)) if means.size else None,
    }
