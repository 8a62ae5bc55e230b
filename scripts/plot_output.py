#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Plot fluid2d simulation output: scalar time series and density snapshots.

This script provides a simple interface to visualise the output of a single
fluid2d run directory (containing snapshots.h5 and scalars.h5).

Usage:
    python plot_output.py --rundir snapshots/imax128_jmax128_K32 --outdir ./figures

    python plot_output.py --rundir snapshots/imax128_jmax128_K32 \\
                          --outdir ./my_plots --dpi 100 --snap_stride 2

For help:
    python plot_output.py --help
"""

import argparse
import pathlib
import sys
import numpy as np
from tqdm import tqdm

# Add parent directory to path to import post-processing module
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

from post import io, visualisation, analysis


def get_args(argv=None):
    """Parse command-line arguments."""
    ap = argparse.ArgumentParser(
        description="Plot scalars and density snapshots for a single fluid2d run.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Required arguments
    ap.add_argument("--rundir", type=str, required=True,
                    help="Path to run directory containing 'snapshots.h5' and 'scalars.h5'")

    # Output
    ap.add_argument("--outdir", type=str, default="./figures",
                    help="Output directory for generated figures")
    ap.add_argument("--dpi", type=int, default=150,
                    help="Figure DPI (resolution)")

    # What to plot
    ap.add_argument("--no_scalars", action="store_true",
                    help="Skip scalar time-series plots")
    ap.add_argument("--no_snapshots", action="store_true",
                    help="Skip snapshot frame generation")
    ap.add_argument("--no_quiver", action="store_true",
                    help="Do not overlay velocity vectors on density frames")

    # Scalar processing
    ap.add_argument("--smooth_window", type=int, default=1,
                    help="Moving-average window (samples) overlaid on scalar plots; 1 disables")
    ap.add_argument("--t_avg_start", type=float, default=None,
                    help="Start time for late-time averages (default: second half of the run)")

    # Snapshot selection
    ap.add_argument("--snap_stride", type=int, default=1,
                    help="Stride between snapshot writes")

    return ap.parse_args(argv)


def main(argv=None):
    """Main execution function."""
    args = get_args(argv)

    rundir = pathlib.Path(args.rundir).resolve()
    out_root = pathlib.Path(args.outdir).resolve()
    out_root.mkdir(parents=True, exist_ok=True)

    print("=" * 70)
    print("fluid2d Output Plotting")
    print("=" * 70)
    print(f"Run directory: {rundir}")
    print(f"Output directory: {out_root}")
    print("=" * 70)

    # 1) Scalar time series
    if not args.no_scalars:
        print("\n[1/2] Plotting scalar time series...")
        scalars_path = rundir / "scalars.h5"

        if not scalars_path.exists():
            print(f"  Warning: No scalars file found at {scalars_path}")
        else:
            times, series_dict = io.read_scalars(scalars_path)
            print(f"  Loaded {len(times)} time points")

            visualisation.plot_scalars(times, series_dict, outdir=out_root / "scalars",
                                       dpi=args.dpi, smooth_window=args.smooth_window)
            print(f"  Saved to {out_root / 'scalars'}")

            stats = analysis.compute_statistics_summary(times, series_dict)
            print("\n  Statistics (full time range):")
            for name, stat in stats.items():
                print(f"    {name:15s}: mean={stat['mean']:10.3e}, "
                      f"std={stat['std']:10.3e}")

            t_avg_start = args.t_avg_start
            if t_avg_start is None:
                t_avg_start = 0.5 * (times[0] + times[-1])
            print(f"\n  Time averages for t >= {t_avg_start:.4f}:")
            for name, series in series_dict.items():
                try:
                    mean = analysis.time_average(times, series, t_start=t_avg_start)
                except ValueError as e:
                    print(f"    Skipping {name}: {e}")
                    continue
                print(f"    {name:15s}: {mean:10.3e}")

            if "kinetic_energy" in series_dict and len(times) > 1:
                try:
                    fit = analysis.fit_decay_rate(times, series_dict["kinetic_energy"])
                    print(f"\n  Kinetic energy decay rate: {fit['rate']:.4e} (R²={fit['r_squared']:.3f})")
                except ValueError as e:
                    print(f"  Skipping decay fit: {e}")

    # 2) Snapshots
    if not args.no_snapshots:
        print("\n[2/2] Plotting snapshot frames...")
        snapshot_path = rundir / "snapshots.h5"

        if not snapshot_path.exists():
            print(f"  Warning: No snapshot file found at {snapshot_path}")
        else:
            x, y = io.read_grid(snapshot_path)
            times, density_list, velocity_list = io.read_snapshots(snapshot_path)

            # Shared colour limits across all frames
            vmax = max(float(np.max(d)) for d in density_list)
            clim = (0.0, vmax if vmax > 0 else 1.0)

            subdir = out_root / "snapshots"
            stride = max(1, args.snap_stride)
            for n in tqdm(range(0, len(times), stride), desc="Plotting density frames"):
                visualisation.plot_density(
                    density_list[n], x, y,
                    time=times[n],
                    velocity=None if args.no_quiver else velocity_list[n],
                    outfile=subdir / f"density_{n:06d}.png",
                    dpi=args.dpi,
                    clim=clim,
                )
            print(f"  Saved {len(range(0, len(times), stride))} frames to {subdir}")

    print("\n" + "=" * 70)
    print("Plotting complete!")
    print(f"All figures saved to: {out_root}")
    print("=" * 70)


if __name__ == "__main__":
    main()
