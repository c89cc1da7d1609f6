"""
Pytest configuration for the percolation tests.

Puts the project root on sys.path so the flat modules import without an install.
"""

import os
import sys

import pytest

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from percolation import Percolation  # noqa: E402


@pytest.fixture
def grid3():
    return Percolation(3)


@pytest.fixture
def open_grid():
    """A 4x4 grid with every site open."""
    perc = Percolation(4)
    for row in range(4):
        for col in range(4):
            perc.open_site(row, col)
    return perc
