"""
Diagnostic functions for 2D fluid simulations.

This module provides helper functions for:
- Integral quantities (total density, kinetic energy)
- Divergence norms of the velocity field
- Velocity magnitude and the advective Courant number

All diagnostics are read-only and are accumulated in float64 regardless of
the simulation precision.
"""

import numpy as np


def total_mass(density, dx, dy):
    """
    Integrate density over the whole grid.

    Args:
        density (ndarray): Scalar field (imax+1, jmax+1)
        dx, dy (float): Grid spacing

    Returns:
        float: Σ density * dx * dy
    """
    return float(np.sum(density, dtype=np.float64) * dx * dy)


def discrete_divergence(velocity, dx, dy):
    """
    Centered-difference divergence on the interior points.

    Args:
        velocity (ndarray): Velocity field (2, imax+1, jmax+1)
        dx, dy (float): Grid spacing

    Returns:
        ndarray: Divergence at interior points (imax-1, jmax-1), float64
    """
    u = velocity[0].astype(np.float64)
    v = velocity[1].astype(np.float64)
    du_dx = (u[2:, 1:-1] - u[:-2, 1:-1]) / (2.0 * dx)
    dv_dy = (v[1:-1, 2:] - v[1:-1, :-2]) / (2.0 * dy)
    return du_dx + dv_dy


def divergence_l2(velocity, dx, dy):
    """
    L2 norm of the interior divergence.

    Args:
        velocity (ndarray): Velocity field (2, imax+1, jmax+1)
        dx, dy (float): Grid spacing

    Returns:
        float: sqrt(Σ div² dx dy) over interior points
    """
    div = discrete_divergence(velocity, dx, dy)
    return float(np.sqrt(np.sum(div * div) * dx * dy))


def kinetic_energy(velocity, dx, dy):
    """Return 0.5 Σ |u|² dx dy over the grid."""
    usq = np.sum(velocity.astype(np.float64) ** 2)
    return float(0.5 * usq * dx * dy)


def compute_max_velocity(velocity):
    """
    Compute maximum velocity magnitude.

    Args:
        velocity (ndarray): Velocity field (2, imax+1, jmax+1)

    Returns:
        float: Maximum velocity magnitude |u|_max
    """
    u = velocity[0].astype(np.float64)
    v = velocity[1].astype(np.float64)
    return float(np.sqrt(np.max(u * u + v * v)))


def courant_number(velocity, dt, dx, dy):
    """
    Advective Courant number max(|u| dt/dx + |v| dt/dy).

    Reported for monitoring only; the solver never adapts dt from it.
    """
    u = np.abs(velocity[0].astype(np.float64))
    v = np.abs(velocity[1].astype(np.float64))
    return float(np.max(u * (dt / dx) + v * (dt / dy)))
