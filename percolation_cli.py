import argparse
import logging
import sys
import time

from percolation_config import DEFAULT_LOG_LEVEL, ENGINES, SCALING_EXPONENT, StatsConfig, SweepConfig
from percolation_logging import configure_logging
from percolation_stats import PercolationStats, run_sweep
from union_find import WeightedQuickUnionUF

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Run a Monte Carlo simulation for 2D site percolation."
    )
    parser.add_argument(
        '--log-level',
        default=DEFAULT_LOG_LEVEL,
        help="Logging level (DEBUG, INFO, WARNING, ...)."
    )
    sub = parser.add_subparsers(dest='command', required=True)

    stats = sub.add_parser('stats', help="Estimate the threshold of one N x N grid.")
    stats.add_argument('N', type=int, help="Size of the square grid (N x N).")
    stats.add_argument('T', type=int, help="The number of Monte Carlo trials to perform.")
    _add_run_options(stats)
    stats.add_argument(
        '--histogram',
        action='store_true',
        help="Plot a histogram of the per-trial thresholds."
    )

    sweep = sub.add_parser('sweep', help="Estimate the threshold over a range of grid sizes.")
    sweep.add_argument(
        '--Lmin',
        type=int,
        default=50,
        help="Minimum size of the square grid (N_min x N_min)."
    )
    sweep.add_argument(
        '--Lmax',
        type=int,
        default=200,
        help="Maximum size of the square grid (N_max x N_max)."
    )
    sweep.add_argument(
        '--Lstep',
        type=int,
        default=50,
        help="Step size for increasing the grid size N."
    )
    sweep.add_argument(
        '--t',
        type=int,
        default=500,
        help="The number of Monte Carlo trials to perform per grid size."
    )
    _add_run_options(sweep)
    sweep.add_argument('--plot', action='store_true', help="Plot mean pc vs L and the extrapolation.")
    sweep.add_argument(
        '--exponent',
        type=float,
        default=SCALING_EXPONENT,
        help="Finite-size scaling exponent for the extrapolation plot."
    )

    uf = sub.add_parser('uf', help="Trace union-find parent links for pairs read from input.")
    uf.add_argument(
        'input',
        nargs='?',
        default='-',
        help="File holding N followed by 'p q' pairs ('-' or omitted: stdin)."
    )
    return parser


def _add_run_options(parser):
    parser.add_argument('--seed', type=int, default=None, help="Seed for reproducible runs.")
    parser.add_argument('--engine', choices=ENGINES, default='python', help="Trial implementation.")
    parser.add_argument('--workers', type=int, default=1, help="Processes used to run trials.")


def cmd_stats(args, parser):
    try:
        config = StatsConfig(n=args.N, trials=args.T, seed=args.seed,
                             engine=args.engine, workers=args.workers)
    except ValueError as e:
        logger.error("invalid arguments: %s", e)
        parser.error(str(e))

    stats = PercolationStats.from_config(config)
    t0 = time.time()
    stats.run()
    t = time.time() - t0

    lo, hi = stats.trials_confidence_interval()
    print(f"time used               = {t}s")
    print(f"mean                    = {stats.trials_mean()}")
    print(f"stddev                  = {stats.trials_std()}")
    print(f"95% confidence interval = {lo}, {hi}")

    if args.histogram:
        from percolation_plots import plot_threshold_histogram
        plot_threshold_histogram(stats.trialResults, config.n)
    return 0


def cmd_sweep(args, parser):
    try:
        config = SweepConfig(Lmin=args.Lmin, Lmax=args.Lmax, Lstep=args.Lstep, trials=args.t,
                             seed=args.seed, engine=args.engine, workers=args.workers)
    except ValueError as e:
        logger.error("invalid arguments: %s", e)
        parser.error(str(e))

    print("Starting Monte Carlo Percolation Analysis...")
    print(f"System sizes (N): {config.Lmin} to {config.Lmax}, step {config.Lstep}")
    print(f"Trials per size: {config.trials}")

    t0 = time.time()
    sweep = run_sweep(config)
    for simu in sweep['stats']:
        print(simu.report())
    print(f"\n--- Simulation Complete in {time.time() - t0:.2f}s ---")

    if args.plot:
        from percolation_plots import plot_extrapolation, plot_percolation_stats
        print("plotting...")
        plot_percolation_stats(sweep['L_values'], sweep['means'], sweep['stds'])
        if len(sweep['L_values']) >= 2:
            _, res = plot_extrapolation(sweep['L_values'], sweep['means'], exponent=args.exponent)
            print(f"\n--- Extrapolation Results (exponent {args.exponent:.2f}) ---")
            print(f"pc(infinity) = {res['pc_inf']:.6f}, R^2 = {res['R2']:.4f}")
        else:
            logger.warning("skipping extrapolation, it needs at least two grid sizes")
    return 0


def cmd_uf(args, parser):
    if args.input == '-':
        tokens = sys.stdin.read().split()
    else:
        try:
            with open(args.input) as fh:
                tokens = fh.read().split()
        except OSError as e:
            parser.error(f"cannot read {args.input}: {e}")
    try:
        values = [int(tok) for tok in tokens]
    except ValueError as e:
        parser.error(f"input must be whitespace separated integers: {e}")
    if not values:
        parser.error("input is empty, expected the number of sites first")

    n, pairs = values[0], values[1:]
    if len(pairs) % 2:
        parser.error("input has an unpaired site index at the end")

    try:
        uf = WeightedQuickUnionUF(n)
        for p, q in zip(pairs[0::2], pairs[1::2]):
            uf.union(p, q)
            print(f"({p}, {q})")
            print(" " + " ".join(str(x) for x in uf.get_parent()) + "\n")
    except (ValueError, IndexError) as e:
        logger.error("union-find trace failed: %s", e)
        parser.error(str(e))

    print(f"{uf.get_count()} components")
    return 0


COMMANDS = {
    'stats': cmd_stats,
    'sweep': cmd_sweep,
    'uf': cmd_uf,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        parser.error(str(e))
    return COMMANDS[args.command](args, parser)


if __name__ == "__main__":
    sys.exit(main())
