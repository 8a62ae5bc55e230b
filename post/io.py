"""
Data loading and file I/O utilities for fluid2d post-processing.

This module provides functions to read simulation output files:
- Scalar time series from scalars.h5
- Density and velocity snapshots from snapshots.h5
"""

import re
import pathlib
import h5py
import numpy as np


SNAPSHOT_PATTERN = re.compile(r"(density|velocity)_([0-9]{6,})$")


def read_scalars(scalars_path):
    """
    Read scalar time series from a scalars.h5 file.

    Args:
        scalars_path (str or Path): Path to scalars.h5

    Returns:
        tuple: (times, series_dict)
            - times: (N,) array of simulation times
            - series_dict: Dictionary of scalar arrays {name: (N,) array}

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If the time dataset is missing
    """
    scalars_path = pathlib.Path(scalars_path)
    if not scalars_path.exists():
        raise FileNotFoundError(f"No scalars file found at {scalars_path}")

    with h5py.File(scalars_path, "r") as f:
        if "time" not in f:
            raise KeyError(f"Required dataset 'time' not found in {scalars_path}")
        times = np.array(f["time"])
        series_dict = {key: np.array(f[key]) for key in f.keys() if key != "time"}

    # Sort by time
    order = np.argsort(times, kind="stable")
    times = times[order]
    for k in series_dict:
        series_dict[k] = series_dict[k][order]

    return times, series_dict


def read_grid(snapshot_path):
    """
    Read the coordinate arrays stored with the snapshots.

    Args:
        snapshot_path (str or Path): Path to snapshots.h5

    Returns:
        tuple: (x, y) coordinate arrays of length imax+1 and jmax+1
    """
    with h5py.File(snapshot_path, "r") as f:
        return np.array(f["grid/x"]), np.array(f["grid/y"])


def list_snapshot_times(snapshot_path):
    """
    List the simulation times that have a density snapshot.

    Args:
        snapshot_path (str or Path): Path to snapshots.h5

    Returns:
        ndarray: Snapshot times ordered by step index
    """
    entries = []
    with h5py.File(snapshot_path, "r") as f:
        for name in f.keys():
            m = SNAPSHOT_PATTERN.match(name)
            if m and m.group(1) == "density":
                entries.append((int(m.group(2)), float(f[name].attrs["time"])))
    return np.array([t for _, t in sorted(entries)])


def read_snapshots(snapshot_path):
    """
    Read every density and velocity snapshot, ordered by step index.

    Args:
        snapshot_path (str or Path): Path to snapshots.h5

    Returns:
        tuple: (times, density_list, velocity_list)
            - times: (T,) array of snapshot times
            - density_list: List of T density arrays (imax+1, jmax+1)
            - velocity_list: List of T velocity arrays (2, imax+1, jmax+1)

    Raises:
        FileNotFoundError: If no snapshots are found
    """
    density = {}
    velocity = {}
    times = {}

    with h5py.File(snapshot_path, "r") as f:
        for name in f.keys():
            m = SNAPSHOT_PATTERN.match(name)
            if not m:
                continue
            step = int(m.group(2))
            if m.group(1) == "density":
                density[step] = np.array(f[name])
                times[step] = float(f[name].attrs["time"])
            else:
                velocity[step] = np.array(f[name])

    if not density:
        raise FileNotFoundError(f"No snapshots found in {snapshot_path}")

    steps = sorted(density.keys())
    density_list = [density[s] for s in steps]
    velocity_list = [velocity.get(s) for s in steps]

    return np.array([times[s] for s in steps]), density_list, velocity_list


def get_snapshot_info(snapshot_path):
    """
    Get metadata about a snapshot file.

    Args:
        snapshot_path (str or Path): Path to snapshots.h5

    Returns:
        dict: Metadata dictionary with keys:
            - n_writes: Number of snapshots in file
            - times: Array of simulation times
            - attrs: Run parameters stored as file attributes
    """
    times = list_snapshot_times(snapshot_path)
    with h5py.File(snapshot_path, "r") as f:
        attrs = dict(f.attrs)

    return {
        "n_writes": len(times),
        "times": times,
        "attrs": attrs,
    }
