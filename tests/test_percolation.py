"""
Tests for the N-by-N percolation grid.
"""

import random

import pytest

from percolation import Percolation


class TestConstruction:

    @pytest.mark.parametrize("n", [1, 2, 5])
    def test_fresh_grid_blocked(self, n):
        perc = Percolation(n)
        assert not perc.percolates()
        assert perc.numberOfOpenSites() == 0
        for row in range(n):
            for col in range(n):
                assert not perc.isOpen(row, col)
                assert not perc.isFull(row, col)

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_size_rejected(self, n):
        with pytest.raises(ValueError):
            Percolation(n)

    def test_virtual_nodes_outside_cells(self, grid3):
        assert len(grid3.wqfGrid) == 11
        assert grid3.virtualTop == 9
        assert grid3.virtualBottom == 10
        cells = {grid3.flattenGrid(r, c) for r in range(3) for c in range(3)}
        assert cells == set(range(9))


class TestBounds:

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3), (5, 5)])
    def test_out_of_range(self, grid3, row, col):
        with pytest.raises(IndexError):
            grid3.open_site(row, col)
        with pytest.raises(IndexError):
            grid3.isOpen(row, col)
        with pytest.raises(IndexError):
            grid3.isFull(row, col)

    def test_failed_open_changes_nothing(self, grid3):
        with pytest.raises(IndexError):
            grid3.open_site(3, 1)
        assert grid3.numberOfOpenSites() == 0
        assert grid3.wqfGrid.get_count() == 11


class TestOpen:

    def test_open_is_idempotent(self, grid3):
        grid3.open_site(0, 1)
        count = grid3.wqfGrid.get_count()
        grid3.open_site(0, 1)
        assert grid3.isOpen(0, 1)
        assert grid3.isFull(0, 1)
        assert grid3.numberOfOpenSites() == 1
        assert grid3.wqfGrid.get_count() == count
        assert not grid3.percolates()

    def test_left_column_path(self, grid3):
        results = []
        for row in range(3):
            grid3.open_site(row, 0)
            results.append(grid3.percolates())
        assert results == [False, False, True]

    def test_diagonal_does_not_connect(self):
        perc = Percolation(2)
        perc.open_site(0, 0)
        perc.open_site(1, 1)
        assert not perc.percolates()
        assert not perc.isFull(1, 1)

    @pytest.mark.parametrize("n", [1, 2, 3, 7])
    def test_full_grid_percolates(self, n):
        perc = Percolation(n)
        for row in range(n):
            for col in range(n):
                perc.open_site(row, col)
        assert perc.percolates()
        assert perc.numberOfOpenSites() == n * n

    def test_single_site_grid(self):
        perc = Percolation(1)
        perc.open_site(0, 0)
        assert perc.isFull(0, 0)
        assert perc.percolates()

    def test_monotonic(self):
        rnd = random.Random(3)
        perc = Percolation(6)
        sites = [(r, c) for r in range(6) for c in range(6)]
        rnd.shuffle(sites)
        seen = False
        for row, col in sites:
            perc.open_site(row, col)
            if seen:
                assert perc.percolates()
            seen = perc.percolates()
        assert seen


class TestFull:

    def test_full_needs_top_connection(self, grid3):
        grid3.open_site(1, 1)
        assert grid3.isOpen(1, 1)
        assert not grid3.isFull(1, 1)
        grid3.open_site(0, 1)
        assert grid3.isFull(1, 1)

    def test_blocked_site_is_not_full(self, grid3):
        grid3.open_site(0, 0)
        assert not grid3.isFull(0, 1)

    def test_no_backwash_through_bottom(self, grid3):
        for row in range(3):
            grid3.open_site(row, 0)
        grid3.open_site(2, 2)
        assert grid3.percolates()
        assert not grid3.isFull(2, 2)
        assert grid3.isFull(2, 0)

    def test_full_everywhere_on_open_grid(self, open_grid):
        for row in range(4):
            for col in range(4):
                assert open_grid.isFull(row, col)
