"""
Visualisation functions for fluid2d simulation output.

This module provides plotting functions for:
- Scalar time series (mass, kinetic energy, divergence, max speed)
- 2D density snapshots with optional velocity quivers
"""

import pathlib
import numpy as np
import matplotlib
import matplotlib.pyplot as plt

from . import analysis

# Use non-interactive backend by default for batch processing
matplotlib.use("Agg")


PLOT_SPECS = {
    "mass": {"ylabel": "Σ ρ dx dy", "title": "Total Density vs Time"},
    "kinetic_energy": {"ylabel": "Energy E", "title": "Kinetic Energy vs Time"},
    "max_speed": {"ylabel": "max |u|", "title": "Maximum Speed vs Time"},
    "divergence_l2": {"ylabel": "‖∇·u‖₂", "title": "Velocity Divergence vs Time"},
}


def plot_scalars(times, series_dict, outdir=".", dpi=150, smooth_window=1):
    """
    Plot scalar time series, one figure per known series.

    Args:
        times (ndarray): Time values (N,)
        series_dict (dict): Dictionary of scalar arrays {name: (N,) array}
        outdir (str or Path): Output directory for figures
        dpi (int): Figure DPI
        smooth_window (int): Overlay a moving average over this many samples
            when greater than 1

    Returns:
        list: Paths of the written figures
    """
    outdir = pathlib.Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    written = []
    for key, spec in PLOT_SPECS.items():
        if key not in series_dict:
            continue

        plt.figure(figsize=(8, 4.5))
        plt.plot(times, series_dict[key], linewidth=1.5, label="raw")
        if 1 < smooth_window <= len(times):
            smoothed = analysis.moving_average(series_dict[key], smooth_window)
            # Centre each window on its middle sample
            offset = (smooth_window - 1) // 2
            plt.plot(times[offset:offset + len(smoothed)], smoothed, linewidth=1.5,
                     label=f"moving average ({smooth_window})")
            plt.legend()
        plt.xlabel("Time t")
        plt.ylabel(spec["ylabel"])
        plt.title(spec["title"])
        plt.grid(True, alpha=0.3, linestyle="--")
        plt.tight_layout()
        path = outdir / f"{key}.png"
        plt.savefig(path, dpi=dpi, bbox_inches="tight")
        plt.close()
        written.append(path)

    return written


def plot_density(density, x, y, time=None, velocity=None, outfile="density.png",
                 dpi=150, clim=None, quiver_stride=8):
    """
    Plot a density field with an optional velocity quiver overlay.

    Args:
        density (ndarray): Density (imax+1, jmax+1) indexed [i, j]
        x (ndarray): x coordinates (imax+1,)
        y (ndarray): y coordinates (jmax+1,)
        time (float, optional): Simulation time for the title
        velocity (ndarray, optional): Velocity (2, imax+1, jmax+1)
        outfile (str or Path): Output image path
        dpi (int): Figure DPI
        clim (tuple, optional): (vmin, vmax) colour limits
        quiver_stride (int): Plot every n-th velocity vector

    Returns:
        Path: The written image
    """
    outfile = pathlib.Path(outfile)
    outfile.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(6, 5))
    # Fields are [i, j] = [x, y]; pcolormesh expects [y, x]
    mesh = ax.pcolormesh(x, y, np.asarray(density).T, shading="auto", cmap="magma")
    if clim is not None:
        mesh.set_clim(*clim)
    fig.colorbar(mesh, ax=ax, label="density")

    if velocity is not None:
        s = max(1, int(quiver_stride))
        X, Y = np.meshgrid(x[::s], y[::s], indexing="ij")
        ax.quiver(X, Y, velocity[0][::s, ::s], velocity[1][::s, ::s],
                  color="white", alpha=0.7)

    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if time is not None:
        ax.set_title(f"t = {time:.3f}")

    fig.savefig(outfile, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return outfile
