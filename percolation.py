import numpy as np

from union_find import WeightedQuickUnionUF


class Percolation:
    """
    N-by-N grid of sites, each either open or blocked. Sites are addressed
    as (row, col) with 0 <= row, col < n.

    A full site is an open site that can be connected to an open site in the
    top row via a chain of neighbouring (left, right, up, down) open sites.
    The system percolates if there is a path of open sites from the top row
    to the bottom row.
    """

    # create a n by n grid with all sites blocked
    def __init__(self, n: int):
        if n <= 0:
            raise ValueError(f"n must be a positive integer, got {n}")

        self.gridSize = n
        self.gridSquare = n * n
        self.grid = np.zeros((n, n), dtype=bool)

        # virtual top and bottom
        self.wqfGrid = WeightedQuickUnionUF(self.gridSquare + 2)
        # virtual top only, so bottom-row sites do not backwash into isFull
        self.wqfFull = WeightedQuickUnionUF(self.gridSquare + 1)

        self.virtualTop = self.gridSquare
        self.virtualBottom = self.gridSquare + 1

        self.openSite = 0

    # open the site[row, col] if it's not open yet
    def open_site(self, row: int, col: int) -> None:
        self.validState(row, col)

        if self.grid[row, col]:
            return

        self.grid[row, col] = True
        self.openSite += 1

        flatIndex = self.flattenGrid(row, col)

        ## top row
        if row == 0:
            self.wqfGrid.union(self.virtualTop, flatIndex)
            self.wqfFull.union(self.virtualTop, flatIndex)

        ## bottom row
        if row == self.gridSize - 1:
            self.wqfGrid.union(self.virtualBottom, flatIndex)

        ## up, down, left, right
        for nRow, nCol in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
            if self.isOnGrid(nRow, nCol) and self.grid[nRow, nCol]:
                neighbour = self.flattenGrid(nRow, nCol)
                self.wqfGrid.union(flatIndex, neighbour)
                self.wqfFull.union(flatIndex, neighbour)

    # is site[row, col] open?
    def isOpen(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return bool(self.grid[row, col])

    # is site[row, col] connected to the top through open sites?
    def isFull(self, row: int, col: int) -> bool:
        self.validState(row, col)
        if not self.grid[row, col]:
            return False
        return self.wqfFull.connected(self.virtualTop, self.flattenGrid(row, col))

    def percolates(self) -> bool:
        return self.wqfGrid.connected(self.virtualTop, self.virtualBottom)

    def numberOfOpenSites(self) -> int:
        return self.openSite

    def validState(self, row: int, col: int):
        if not self.isOnGrid(row, col):
            raise IndexError(
                f"site ({row}, {col}) is out of bounds, "
                f"row and col must be between 0 and {self.gridSize - 1}"
            )

    def flattenGrid(self, row: int, col: int) -> int:
        return self.gridSize * row + col

    def isOnGrid(self, row: int, col: int) -> bool:
        return 0 <= row < self.gridSize and 0 <= col < self.gridSize
