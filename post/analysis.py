"""
Analysis utilities for fluid2d simulation output.

This module provides functions for statistical analysis of scalar series:
- Time averaging and statistics
- Smoothing
- Mass budget and exponential decay fits
"""

import numpy as np
from scipy import stats


def _time_mask(times, t_start, t_end):
    t_start = times[0] if t_start is None else t_start
    t_end = times[-1] if t_end is None else t_end

    mask = (times >= t_start) & (times <= t_end)
    if not np.any(mask):
        raise ValueError(f"No data points in time range [{t_start}, {t_end}]")
    return mask


def time_average(times, series, t_start=None, t_end=None):
    """
    Compute time average of a series over a specified interval.

    Args:
        times (ndarray): Time values (N,)
        series (ndarray): Data series (N,) or (N, M)
        t_start (float or None): Start time (default: first time)
        t_end (float or None): End time (default: last time)

    Returns:
        float or ndarray: Time-averaged value (scalar if 1D input, array if 2D)
    """
    mask = _time_mask(times, t_start, t_end)
    if series.ndim == 1:
        return np.mean(series[mask])
    else:
        return np.mean(series[mask], axis=0)


def moving_average(array, window_size):
    """
    Compute moving average of a time series.

    Args:
        array (ndarray): Input array (N,)
        window_size (int): Window size for averaging

    Returns:
        ndarray: Smoothed array (N-window_size+1,)
    """
    if window_size < 1:
        raise ValueError("Window size must be at least 1")

    return np.convolve(array, np.ones(window_size) / window_size, mode='valid')


def compute_statistics_summary(times, series_dict, t_start=None, t_end=None):
    """
    Compute summary statistics for all scalar series.

    Args:
        times (ndarray): Time values (N,)
        series_dict (dict): Dictionary of scalar arrays
        t_start (float or None): Start time for statistics
        t_end (float or None): End time for statistics

    Returns:
        dict: Statistics dictionary {name: {"mean": ..., "std": ..., "min": ..., "max": ...}}
    """
    mask = _time_mask(times, t_start, t_end)
    stats_dict = {}

    for name, series in series_dict.items():
        data = series[mask]
        stats_dict[name] = {
            "mean": np.mean(data),
            "std": np.std(data),
            "min": np.min(data),
            "max": np.max(data),
            "median": np.median(data)
        }

    return stats_dict


def mass_change(times, mass):
    """
    Net and relative change of total density between first and last sample.

    Returns:
        tuple: (delta, relative) where relative is NaN if the initial mass is 0
    """
    order = np.argsort(times)
    m0 = mass[order[0]]
    m1 = mass[order[-1]]
    delta = m1 - m0
    relative = delta / m0 if m0 != 0 else np.nan
    return delta, relative


def fit_decay_rate(times, series, t_start=None, t_end=None):
    """
    Fit an exponential decay series ~ A exp(-rate * t) over a time range.

    Useful for the kinetic energy of an unforced run or the density lost
    through Dirichlet walls.

    Args:
        times (ndarray): Time values (N,)
        series (ndarray): Positive data series (N,)
        t_start (float or None): Start of fitting range
        t_end (float or None): End of fitting range

    Returns:
        dict: Fit results with keys:
            - rate: Decay rate (positive for a decaying series)
            - amplitude: Fitted value at t = 0
            - r_squared: R² of the fit in log space
            - t_fit: Times used in the fit
            - series_fit: Fitted series at t_fit

    Raises:
        ValueError: If fewer than two positive samples fall in the range
    """
    mask = _time_mask(times, t_start, t_end) & (series > 0)
    if np.count_nonzero(mask) < 2:
        raise ValueError("Need at least two positive samples to fit a decay rate")

    t_fit = times[mask]
    slope, intercept, r_value, _, _ = stats.linregress(t_fit, np.log(series[mask]))

    return {
        "rate": -slope,
        "amplitude": np.exp(intercept),
        "r_squared": r_value**2,
        "t_fit": t_fit,
        "series_fit": np.exp(intercept + slope * t_fit),
    }
