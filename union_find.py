from numba import njit, config

# Enable Numba disk caching for faster subsequent runs
config.CACHE_DIR = '.numba_cache'


class WeightedQuickUnionUF:
    """
    Disjoint sets over the elements 0..n-1, linked by size with path
    compression on every find.

    Percolation builds one over the n*n grid cells plus its virtual top
    and bottom elements. get_parent() exposes the raw links for tracing.
    """

    def __init__(self, n):
        """
        :param n: universe size; 0 gives an empty structure.
        """
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")

        # roots point at themselves
        self.parent = list(range(n))
        # only meaningful at roots: elements in that root's tree
        self.size = [1] * n
        self.count = n

    def __len__(self):
        return len(self.parent)

    def get_count(self):
        return self.count

    def get_parent(self):
        """Snapshot of the element -> parent links, safe to mutate."""
        return list(self.parent)

    def component_size(self, p):
        return self.size[self.find(p)]

    def _validate(self, p):
        n = len(self.parent)
        if p < 0 or p >= n:
            raise IndexError(f"index {p} is not between 0 and {n-1}")

    def find(self, p):
        """
        Root of the element p. Every element passed on the way up is
        relinked straight to that root.
        """
        self._validate(p)

        root = p
        while root != self.parent[root]:
            root = self.parent[root]

        while p != root:
            next_p = self.parent[p]
            self.parent[p] = root
            p = next_p

        return root

    def connected(self, p, q):
        self._validate(p)
        self._validate(q)
        return self.find(p) == self.find(q)

    def union(self, p, q):
        """
        Link the root of the smaller component under the root of the larger.
        When both have the same size, q's root goes under p's root, so a
        sequence of unions always yields the same parent mapping.
        """
        self._validate(p)
        self._validate(q)

        rootP = self.find(p)
        rootQ = self.find(q)
        if rootP == rootQ:
            return

        if self.size[rootP] < self.size[rootQ]:
            rootP, rootQ = rootQ, rootP
        self.parent[rootQ] = rootP
        self.size[rootP] += self.size[rootQ]
        self.count -= 1


# CPU using optimized Numba, same rules as WeightedQuickUnionUF over plain arrays
@njit(cache=True)
def find_cpu(parent, x):
    root = x
    while parent[root] != root:
        root = parent[root]
    while x != root:
        next_x = parent[x]
        parent[x] = root
        x = next_x
    return root


@njit(cache=True)
def union_sized_cpu(parent, size, a, b):
    ra = find_cpu(parent, a)
    rb = find_cpu(parent, b)
    if ra == rb:
        return False
    if size[ra] < size[rb]:
        parent[ra] = rb
        size[rb] += size[ra]
    else:
        parent[rb] = ra
        size[ra] += size[rb]
    return True

