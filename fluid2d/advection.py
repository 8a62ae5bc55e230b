"""
Semi-Lagrangian advection with clamped bilinear interpolation.

For each interior point the velocity is traced backward over one timestep to
a fractional grid location. The location is clamped to [0.5, max - 0.5] on
each axis so that the four interpolation corners stay within the interior
plus the boundary ring, then the source field is sampled bilinearly.

Grid indices are carried as arrays of the run dtype so that traced positions
and weights stay in float32 for single-precision runs.
"""

import math

import numpy as np
from numba import njit


@njit(cache=True)
def lerp_info(i, j, velocity, dt_dx, dt_dy, index_x, index_y, half):
    """
    Trace grid point (i, j) backward and return its interpolation stencil.

    Args:
        i, j (int): Interior grid indices
        velocity (ndarray): Pre-advection velocity (2, imax+1, jmax+1)
        dt_dx, dt_dy: Timestep divided by grid spacing
        index_x, index_y (ndarray): Grid indices 0..imax and 0..jmax as reals
        half: 0.5 in the run dtype

    Returns:
        tuple: (i0, i1, a0, a1, j0, j1, b0, b1) where (i0, i1) and (j0, j1)
            are the bracketing indices and (a0, a1), (b0, b1) the weights
    """
    one = half + half

    i_prev = index_x[i] - dt_dx * velocity[0, i, j]
    if i_prev < half:
        i_prev = half
    elif i_prev > index_x[-1] - half:
        i_prev = index_x[-1] - half

    i0 = int(math.floor(i_prev))
    a1 = i_prev - index_x[i0]
    a0 = one - a1

    j_prev = index_y[j] - dt_dy * velocity[1, i, j]
    if j_prev < half:
        j_prev = half
    elif j_prev > index_y[-1] - half:
        j_prev = index_y[-1] - half

    j0 = int(math.floor(j_prev))
    b1 = j_prev - index_y[j0]
    b0 = one - b1

    return i0, i0 + 1, a0, a1, j0, j0 + 1, b0, b1


@njit(cache=True)
def _advect_kernel(source, target, velocity, dt_dx, dt_dy, index_x, index_y, half):
    nx, ny = target.shape
    for i in range(1, nx - 1):
        for j in range(1, ny - 1):
            i0, i1, a0, a1, j0, j1, b0, b1 = lerp_info(
                i, j, velocity, dt_dx, dt_dy, index_x, index_y, half
            )

            d00 = source[i0, j0]
            d10 = source[i1, j0]
            d01 = source[i0, j1]
            d11 = source[i1, j1]

            target[i, j] = b0 * (a0 * d00 + a1 * d10) + b1 * (a0 * d01 + a1 * d11)


def grid_indices(shape, dtype):
    """Return (index_x, index_y, half) for a field of the given shape and dtype."""
    real = np.dtype(dtype).type
    return (np.arange(shape[0], dtype=real), np.arange(shape[1], dtype=real), real(0.5))


def advect(source, target, velocity, dt_dx, dt_dy):
    """
    Advect a scalar field along velocity into target (interior only).

    Args:
        source (ndarray): Field sampled at the traced locations (imax+1, jmax+1)
        target (ndarray): Destination field, interior overwritten
        velocity (ndarray): Pre-advection velocity used for tracing
        dt_dx, dt_dy: Timestep divided by grid spacing
    """
    real = target.dtype.type
    index_x, index_y, half = grid_indices(target.shape, real)
    _advect_kernel(source, target, velocity, real(dt_dx), real(dt_dy), index_x, index_y, half)


def advect_vector(source, target, velocity, dt_dx, dt_dy):
    """Advect every component of a vector field with the same traced locations."""
    for c in range(source.shape[0]):
        advect(source[c], target[c], velocity, dt_dx, dt_dy)
