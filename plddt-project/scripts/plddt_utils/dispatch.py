"""Batch dispatch of the pLDDT filter across a process pool."""
from __future__ import annotations


import math
import os
import sys
import threading
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Iterator, NamedTuple

from .pdb_filter import FileOutcome, filter_pdb_file


REPORT_INTERVAL = 100
# Upper bound on files per submitted range, so results reach the parent while the batch runs.
MAX_RANGE_SIZE = 16


class WorkItem(NamedTuple):
    input_path: Path
    output_path: Path


def find_pdb_files(input_dir: Path, suffix: str = ".pdb") -> list[Path]:
    """
    Recursively collect regular files whose name ends in ``suffix``.

    The suffix match is case-sensitive.

    Raises:
        FileNotFoundError: If ``input_dir`` is not an existing directory.
    """
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Missing input directory: {input_dir}")
    return sorted(
        path
        for path in input_dir.rglob(f"*{suffix}")
        if path.name.endswith(suffix) and path.is_file()
    )


def build_work_items(pdb_files: list[Path], output_dir: Path) -> list[WorkItem]:
    """Pair each input with ``output_dir / <file name>`` (outputs are flattened)."""
    return [WorkItem(path, output_dir / path.name) for path in pdb_files]


def find_name_collisions(items: list[WorkItem]) -> dict[str, list[Path]]:
    """Return output names shared by more than one input; the last input processed wins."""
    by_name = defaultdict(list)
    for item in items:
        by_name[item.output_path.name].append(item.input_path)
    return {name: paths for name, paths in by_name.items() if len(paths) > 1}


def resolve_workers(requested: int | None, configured: int | None = None) -> int:
    """Pick the worker count: a positive request, then a positive config value, then the CPU count."""
    for value in (requested, configured):
        if value is not None and value > 0:
            return value
    if hasattr(os, "sched_getaffinity"):
        return max(1, len(os.sched_getaffinity(0)))
    return os.cpu_count() or 1


class ProgressCounter:
    """
    Shared count of completed files with serialized progress lines.

    A line is printed every ``interval`` completions. The printed count is
    a snapshot taken under the lock, so with concurrent callers lines for
    higher counts may appear before lower ones.
    """

    def __init__(self, total: int, interval: int = REPORT_INTERVAL, stream=None):
        self.total = total
        self.interval = interval
        self.stream = stream
        self._count = 0
        self._count_lock = threading.Lock()
        self._print_lock = threading.Lock()

    @property
    def count(self) -> int:
        return self._count

    def increment(self) -> int:
        with self._count_lock:
            self._count += 1
            done = self._count
        if done % self.interval == 0:
            self.report(done)
        return done

    def report(self, done: int) -> None:
        percent = (100.0 * done) / self.total if self.total else 100.0
        with self._print_lock:
            print(
                f"Processed {done}/{self.total} ({percent:.1f}%)",
                file=self.stream if self.stream is not None else sys.stdout,
                flush=True,
            )


def _filter_range(items: list[WorkItem], cutoff: float, strict: bool) -> list[FileOutcome]:
    return [
        filter_pdb_file(item.input_path, item.output_path, cutoff, strict)
        for item in items
    ]


def split_ranges(items: list[WorkItem], workers: int, max_size: int = MAX_RANGE_SIZE) -> list[list[WorkItem]]:
    """
    Split ``items`` into contiguous ranges of equal size (the last may be shorter).

    The size is an even share per worker, capped at ``max_size``.
    """
    if not items:
        return []
    size = max(1, min(math.ceil(len(items) / max(1, workers)), max_size))
    return [items[start:start + size] for start in range(0, len(items), size)]


def iter_outcomes(
    items: list[WorkItem],
    cutoff: float,
    workers: int,
    strict: bool = False,
) -> Iterator[FileOutcome]:
    """
    Run the filter over ``items`` and yield one outcome per item.

    Contiguous ranges are submitted to a process pool and yielded as each
    range finishes, so outcomes arrive in completion order. With a single
    worker everything runs in this process.
    """
    if not items:
        return
    if workers <= 1:
        for item in items:
            yield filter_pdb_file(item.input_path, item.output_path, cutoff, strict)
        return

    workers = min(workers, len(items))
    with ProcessPoolExecutor(max_workers=workers) as ex:
        futures = [
            ex.submit(_filter_range, chunk, cutoff, strict)
            for chunk in split_ranges(items, workers)
        ]
        for future in as_completed(futures):
            yield from future.result()


def run_batch(
    items: list[WorkItem],
    cutoff: float,
    workers: int,
    strict: bool = False,
    report_interval: int = REPORT_INTERVAL,
) -> list[FileOutcome]:
    """
    Filter every work item, printing progress and per-file warnings.

    Per-file failures are reported on stderr and never stop the batch.

    Returns:
        Outcomes in completion order.
    """
    progress = ProgressCounter(len(items), report_interval)
    outcomes = []
    for outcome in iter_outcomes(items, cutoff, workers, strict):
        if not outcome.ok:
            print(
                f"  Warning: {outcome.status.value} for {outcome.input_path}: {outcome.message}",
                file=sys.stderr,
            )
        outcomes.append(outcome)
        progress.increment()
    return outcomes
