import logging
import math
from concurrent.futures import ProcessPoolExecutor, as_completed

import numpy as np
from numba import njit

from percolation import Percolation
from percolation_config import CONFIDENCE_Z, StatsConfig
from union_find import find_cpu, union_sized_cpu

logger = logging.getLogger(__name__)


def simulate_trial(n, rng):
    """
    One trial on a fresh n-by-n grid: open uniformly random blocked sites
    until the system percolates. Already open draws are rejected and redrawn.

    :return: fraction of sites open at the moment of first percolation.
    """
    simulator = Percolation(n)
    while True:
        row = int(rng.integers(n))
        col = int(rng.integers(n))
        if simulator.isOpen(row, col):
            continue

        simulator.open_site(row, col)
        if simulator.percolates():
            return simulator.numberOfOpenSites() / (n * n)


@njit(cache=True)
def percolation_trial_cpu(n, order):
    """Open sites in the given order on jitted union-find arrays.
    Returns how many sites were open at first percolation."""
    N = n * n
    parent = np.arange(N + 2, dtype=np.int64)
    size = np.ones(N + 2, dtype=np.int64)
    open_flags = np.zeros(N, dtype=np.uint8)

    top, bottom = N, N + 1

    for k in range(N):
        site = order[k]
        open_flags[site] = 1
        row = site // n
        col = site % n

        if row == 0:
            union_sized_cpu(parent, size, site, top)
        if row == n - 1:
            union_sized_cpu(parent, size, site, bottom)
        if row > 0 and open_flags[site - n]:
            union_sized_cpu(parent, size, site, site - n)
        if row < n - 1 and open_flags[site + n]:
            union_sized_cpu(parent, size, site, site + n)
        if col > 0 and open_flags[site - 1]:
            union_sized_cpu(parent, size, site, site - 1)
        if col < n - 1 and open_flags[site + 1]:
            union_sized_cpu(parent, size, site, site + 1)

        if find_cpu(parent, top) == find_cpu(parent, bottom):
            return k + 1

    return N


def simulate_trial_numba(n, rng):
    # a uniform permutation opens the same sequence of distinct sites as rejection sampling
    order = rng.permutation(n * n).astype(np.int64)
    return percolation_trial_cpu(n, order) / (n * n)


TRIAL_ENGINES = {
    "python": simulate_trial,
    "numba": simulate_trial_numba,
}


def run_trial(n, engine, seed_seq):
    rng = np.random.default_rng(seed_seq)
    return TRIAL_ENGINES[engine](n, rng)


class PercolationStats:
    """
    Monte Carlo estimate of the percolation threshold of an n-by-n grid.

    Construct, call run(), then read trials_mean(), trials_std() and the
    95% confidence interval.
    """

    def __init__(self, n: int, trials: int, seed=None, engine="python", workers=1):
        config = StatsConfig(n=n, trials=trials, seed=seed, engine=engine, workers=workers)

        self.gridSize = config.n
        self.trialCount = config.trials
        self.engine = config.engine
        self.workers = config.workers
        if isinstance(seed, np.random.SeedSequence):
            self.seedSequence = seed
        else:
            self.seedSequence = np.random.SeedSequence(seed)
        self.trialResults = None

    @classmethod
    def from_config(cls, config: StatsConfig):
        return cls(config.n, config.trials, seed=config.seed,
                   engine=config.engine, workers=config.workers)

    def run(self):
        """
        Run all trials and store one threshold per trial.

        :return: read-only numpy array of length trials.
        """
        seeds = self.seedSequence.spawn(self.trialCount)
        logger.info("running %d trials on a %dx%d grid (engine=%s, workers=%d)",
                    self.trialCount, self.gridSize, self.gridSize, self.engine, self.workers)

        if self.workers == 1:
            results = []
            for i, seed in enumerate(seeds):
                results.append(run_trial(self.gridSize, self.engine, seed))
                if (i + 1) % 50 == 0:
                    logger.debug("progress: %d/%d trials", i + 1, self.trialCount)
        else:
            results = [0.0] * self.trialCount
            with ProcessPoolExecutor(max_workers=self.workers) as ex:
                futs = {ex.submit(run_trial, self.gridSize, self.engine, seed): i
                        for i, seed in enumerate(seeds)}
                for done, fut in enumerate(as_completed(futs), start=1):
                    results[futs[fut]] = fut.result()
                    if done % 50 == 0:
                        logger.debug("progress: %d/%d trials", done, self.trialCount)

        trialResults = np.asarray(results, dtype=float)
        trialResults.flags.writeable = False
        self.trialResults = trialResults

        logger.info("n=%d: mean threshold %.6f over %d trials",
                    self.gridSize, self.trials_mean(), self.trialCount)
        return self.trialResults

    def _results(self):
        if self.trialResults is None:
            raise RuntimeError("no trial results yet, call run() first")
        return self.trialResults

    def trials_mean(self):
        return float(np.mean(self._results()))

    def trials_std(self):
        """Sample standard deviation (n - 1 denominator); 0.0 for a single trial."""
        results = self._results()
        if self.trialCount == 1:
            return 0.0
        return float(np.std(results, ddof=1))

    def confidenceLo(self):
        return self.trials_mean() - (CONFIDENCE_Z * self.trials_std()) / math.sqrt(self.trialCount)

    def confidenceHi(self):
        return self.trials_mean() + (CONFIDENCE_Z * self.trials_std()) / math.sqrt(self.trialCount)

    def trials_confidence_interval(self):
        return self.confidenceLo(), self.confidenceHi()

    def report(self):
        lo, hi = self.trials_confidence_interval()
        lines = [
            "=" * 60,
            "STATS REPORT",
            "=" * 60,
            f"grid size n = {self.gridSize}, trials = {self.trialCount}",
            f"mean value of critical value pc = {self.trials_mean(): .6f}",
            f"std value of critical value pc = {self.trials_std(): .6f}",
            f"the 95% confidence interval is {lo} ~ {hi}",
            "=" * 60,
        ]
        return "\n".join(lines)


def run_sweep(config):
    """
    Estimate the threshold for every grid size in a SweepConfig.

    :return: dict with arrays 'L_values', 'means', 'stds' and the list of
             PercolationStats objects under 'stats'.
    """
    L_values, means, stds, stats = [], [], [], []
    seeds = np.random.SeedSequence(config.seed).spawn(len(config.sizes()))

    for n_value, seed in zip(config.sizes(), seeds):
        logger.info("simulate n = %d", n_value)
        simu = PercolationStats(n_value, config.trials, seed=seed,
                                engine=config.engine, workers=config.workers)
        simu.run()
        L_values.append(n_value)
        means.append(simu.trials_mean())
        stds.append(simu.trials_std())
        stats.append(simu)

    return {
        'L_values': np.array(L_values),
        'means': np.array(means),
        'stds': np.array(stds),
        'stats': stats,
    }
