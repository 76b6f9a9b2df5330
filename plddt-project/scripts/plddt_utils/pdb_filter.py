"""Per-file pLDDT filtering of PDB structures."""
from __future__ import annotations


import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .records import RecordKind, classify_line, extract_bfactor


class FilterStatus(Enum):
    OK = "ok"
    OPEN_FAILED = "open_failed"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"


@dataclass
class FilterResult:
    """Output bytes and record counts for one filtered file."""

    data: bytes
    lines: int = 0
    atom_records: int = 0
    atoms_kept: int = 0
    bfactor_sum: float = 0.0

    @property
    def atoms_dropped(self) -> int:
        return self.atom_records - self.atoms_kept

    def mean_plddt(self) -> float | None:
        """Mean extracted B-factor over all atom records, or None if there are none."""
        if not self.atom_records:
            return None
        return self.bfactor_sum / self.atom_records


@dataclass
class FileOutcome:
    input_path: Path
    output_path: Path
    status: FilterStatus
    message: str = ""
    lines: int = 0
    atom_records: int = 0
    atoms_kept: int = 0
    mean_plddt: float | None = None

    @property
    def ok(self) -> bool:
        return self.status is FilterStatus.OK


def filter_pdb_bytes(data: bytes, cutoff: float, strict: bool = False) -> FilterResult:
    """
    Drop ATOM/HETATM lines whose B-factor is below ``cutoff``.

    Every other line is kept verbatim. Each kept line is terminated by a
    single LF, including a final line that had none. A CR before the LF
    stays part of the line.

    Args:
        data: Raw bytes of a PDB file.
        cutoff: Inclusive lower bound on retained B-factor values.
        strict: Passed to ``classify_line``.

    Returns:
        FilterResult holding the output bytes and record counts.
    """
    out = bytearray()
    size = len(data)
    pos = 0
    lines = 0
    atom_records = 0
    atoms_kept = 0
    bfactor_sum = 0.0

    while pos < size:
        line_end = data.find(b"\n", pos)
        if line_end == -1:
            line_end = size
        line = data[pos:line_end]
        lines += 1

        if classify_line(line, strict) is RecordKind.FILTERABLE_ATOM:
            atom_records += 1
            bfactor = extract_bfactor(line)
            bfactor_sum += bfactor
            if bfactor >= cutoff:
                atoms_kept += 1
                out += line
                out += b"\n"
        else:
            out += line
            out += b"\n"

        pos = line_end + 1

    return FilterResult(
        data=bytes(out),
        lines=lines,
        atom_records=atom_records,
        atoms_kept=atoms_kept,
        bfactor_sum=bfactor_sum,
    )


def write_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to a temporary file beside ``path``, then move it into place."""
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        with tmp_path.open("wb") as handle:
            handle.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        raise


def filter_pdb_file(
    input_path: Path,
    output_path: Path,
    cutoff: float,
    strict: bool = False,
) -> FileOutcome:
    """
    Filter one PDB file by pLDDT and write the result.

    The input is read whole and parsed before anything is written, so a
    failed read never leaves an output file behind.

    Args:
        input_path: Source PDB file.
        output_path: Destination file (its directory must exist).
        cutoff: pLDDT threshold; atom records below it are dropped.
        strict: Six-byte record name compare (see ``classify_line``).

    Returns:
        FileOutcome with the status and record counts.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    try:
        handle = input_path.open("rb")
    except OSError as exc:
        return FileOutcome(input_path, output_path, FilterStatus.OPEN_FAILED, str(exc))

    with handle:
        try:
            data = handle.read()
        except OSError as exc:
            return FileOutcome(input_path, output_path, FilterStatus.READ_FAILED, str(exc))

    result = filter_pdb_bytes(data, cutoff, strict)

    try:
        write_atomic(output_path, result.data)
    except OSError as exc:
        return FileOutcome(input_path, output_path, FilterStatus.WRITE_FAILED, str(exc))

    return FileOutcome(
        input_path,
        output_path,
        FilterStatus.OK,
        lines=result.lines,
        atom_records=result.atom_records,
        atoms_kept=result.atoms_kept,
        mean_plddt=result.mean_plddt(),
    )
