"""PDB record classification and B-factor (pLDDT) extraction."""
from __future__ import annotations


import re
from enum import Enum


# B-factor occupies columns 61-66 (1-based), i.e. bytes 60-65.
BFACTOR_OFFSET = 60
# Lines must extend past the B-factor column before a numeric parse.
MIN_ATOM_LINE_LENGTH = 67

ATOM_PREFIX = b"ATOM"
HETATM_PREFIX = b"HETA"
ATOM_RECORD = b"ATOM  "
HETATM_RECORD = b"HETATM"

# Leading whitespace, optional sign, integer part, optional fraction.
_LEADING_NUMBER = re.compile(rb"[ \t\n\v\f\r]*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


class RecordKind(Enum):
    FILTERABLE_ATOM = "filterable_atom"
    PASSTHROUGH = "passthrough"


def classify_line(line: bytes, strict: bool = False) -> RecordKind:
    """
    Classify a raw PDB line (without its LF terminator).

    Args:
        line: Raw line bytes.
        strict: Compare the full six-byte record name (``ATOM  `` or
                ``HETATM``). By default only the four-byte prefixes
                ``ATOM``/``HETA`` are checked, which also accepts ATOM
                records whose serial number spills into columns 5-6.

    Returns:
        RecordKind.FILTERABLE_ATOM or RecordKind.PASSTHROUGH.
    """
    if len(line) < MIN_ATOM_LINE_LENGTH:
        return RecordKind.PASSTHROUGH
    if strict:
        head = line[:6]
        if head == ATOM_RECORD or head == HETATM_RECORD:
            return RecordKind.FILTERABLE_ATOM
        return RecordKind.PASSTHROUGH
    head = line[:4]
    if head == ATOM_PREFIX or head == HETATM_PREFIX:
        return RecordKind.FILTERABLE_ATOM
    return RecordKind.PASSTHROUGH


def parse_leading_float(data: bytes) -> float:
    """Parse the leading decimal number of ``data``; 0.0 if there is none.

    Parsing stops at the first byte that cannot continue the number, so
    packed fixed-column fields do not cause a failure.
    """
    match = _LEADING_NUMBER.match(data)
    if match is None:
        return 0.0
    return float(match.group(1))


def extract_bfactor(line: bytes) -> float:
    """Read the B-factor (pLDDT) value starting at byte 60 of an atom line."""
    return parse_leading_float(line[BFACTOR_OFFSET:])
