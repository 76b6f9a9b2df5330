"""Shared fixtures for the pLDDT filter tests."""
from __future__ import annotations

import pytest


def format_atom_line(
    bfactor: float,
    serial: int = 1,
    group: str = "ATOM",
    atom_name: str = " N  ",
    res_name: str = "ALA",
    chain: str = "A",
    res_seq: int = 1,
    element: str = "N",
) -> str:
    """Build a 78-column PDB atom record with ``bfactor`` in columns 61-66."""
    return (
        f"{group:<6s}{serial:>5d} {atom_name} "
        f"{res_name:>3s} {chain:1s}{res_seq:>4d}    "
        f"{0.0:>8.3f}{0.0:>8.3f}{0.0:>8.3f}"
        f"{1.0:>6.2f}{bfactor:>6.2f}          {element:>2s}"
    )


@pytest.fixture
def atom_line():
    return format_atom_line


@pytest.fixture
def af_model_text(atom_line):
    """Small AlphaFold-style model with mixed confidence."""
    lines = [
        "HEADER    PREDICTED MODEL",
        "REMARK   1 PLDDT IN B-FACTOR COLUMN",
        atom_line(92.31, serial=1, res_seq=1),
        atom_line(92.31, serial=2, atom_name=" CA ", res_seq=1, element="C"),
        atom_line(41.07, serial=3, res_seq=2),
        atom_line(41.07, serial=4, atom_name=" CA ", res_seq=2, element="C"),
        atom_line(70.00, serial=5, res_seq=3),
        "TER       6      ALA A   3",
        atom_line(12.50, serial=7, group="HETATM", res_name="ZN", chain="B", res_seq=101, element="ZN"),
        "END",
    ]
    return "\n".join(lines) + "\n"
