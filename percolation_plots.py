import numpy as np
import matplotlib.pyplot as plt
from scipy.stats import linregress

from percolation_config import SCALING_EXPONENT


def plot_percolation_stats(L_values, means, stds, show=True):
    """
    Error bar plot of the mean critical probability against grid size L.
    """
    fig = plt.figure(figsize=(10, 6))

    plt.errorbar(
        L_values,
        means,
        yerr=stds,
        fmt='o-',               # Circle markers, connected line
        color='blue',
        ecolor='blue',
        capsize=5,
        label='Mean $p_c \\pm \\sigma$'
    )

    plt.xlabel('Linear System Size ($L$)', fontsize=14)
    plt.ylabel('Mean Critical Probability ($\\bar{p}_c$)', fontsize=14)
    plt.title('Mean $p_c$ vs. System Size ($L$), Top-Bottom Crossing', fontsize=16)

    plt.grid(True, linestyle='--', alpha=0.6)
    plt.legend(loc='best')

    if show:
        plt.show()
    return fig


def plot_extrapolation(L_values, means, exponent=SCALING_EXPONENT, show=True):
    """
    Plots mean critical probability vs L^(exponent), fits a line and
    takes its intercept as the estimate of pc(infinity).

    :return: (figure, {'pc_inf', 'slope', 'R2'})
    """
    L_values = np.asarray(L_values, dtype=float)
    means = np.asarray(means, dtype=float)
    if len(L_values) < 2:
        raise ValueError("extrapolation needs at least two grid sizes")

    X_scaling = L_values ** exponent

    slope, intercept, r_value, p_value, std_err = linregress(X_scaling, means)
    result = {'pc_inf': float(intercept), 'slope': float(slope), 'R2': float(r_value ** 2)}

    fig = plt.figure(figsize=(10, 6))

    X_plot_max = float(np.max(X_scaling) * 1.05)
    X_line = np.linspace(0.0, X_plot_max, 100)
    Y_line = slope * X_line + intercept

    # Fit line
    plt.plot(X_line, Y_line, color='blue', linestyle='--',
             label=f"Fit: $p_c(\\infty)$ = {intercept:.5f}")
    # Data points
    plt.plot(X_scaling, means, 'o', color='blue', markersize=8,
             label="Data $\\bar{p}_c(L)$")
    # Intercept marker at X=0
    plt.plot(0, intercept, 'x', color='blue', markersize=10)

    plt.xlabel(f'$L^{{{exponent:.2f}}}$', fontsize=14)
    plt.ylabel('Mean Critical Probability ($\\bar{p}_c$)', fontsize=14)
    plt.title('Finite-Size Scaling Extrapolation', fontsize=16)
    plt.xlim(-0.05 * X_plot_max, X_plot_max)
    plt.grid(True, linestyle='--', alpha=0.6)
    plt.legend(loc='best')

    if show:
        plt.show()
    return fig, result


def plot_threshold_histogram(thresholds, n, bins=30, show=True):
    """Histogram of the per-trial thresholds of one PercolationStats run."""
    thresholds = np.asarray(thresholds, dtype=float)
    mean = float(np.mean(thresholds))

    fig = plt.figure(figsize=(8, 6))
    plt.hist(thresholds, bins=bins, color='steelblue', edgecolor='black', alpha=0.8)
    plt.axvline(mean, color='r', linestyle='--', label=f'mean = {mean:.4f}')
    plt.axvline(0.5927, color='purple', linestyle=':', label='Theory: 0.5927', alpha=0.7)
    plt.xlabel("Open site fraction at first percolation", fontsize=12)
    plt.ylabel("Trials", fontsize=12)
    plt.title(f"Percolation Thresholds, {n}x{n} Grid ({len(thresholds)} trials)", fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.tight_layout()

    if show:
        plt.show()
    return fig
