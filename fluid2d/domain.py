"""
Grid geometry and derived stencil coefficients.

This module builds the fixed rectangular grid the simulator runs on and
precomputes every coefficient that depends only on the grid spacing, the
timestep and the viscosities:
- Implicit diffusion weights (one triple for density, one for velocity)
- Poisson relaxation weights used by the projection
- Advection and centered-difference scale factors
"""

from collections import namedtuple
from dataclasses import dataclass

import numpy as np


SUPPORTED_DTYPES = (np.float32, np.float64)

StencilWeights = namedtuple("StencilWeights", ["center", "x", "y"])


@dataclass(frozen=True)
class Grid:
    """Immutable 2D grid of (imax+1) x (jmax+1) points on [x0,x1] x [y0,y1]."""

    x0: float
    y0: float
    x1: float
    y1: float
    imax: int
    jmax: int
    dx: float
    dy: float
    x: np.ndarray
    y: np.ndarray
    dtype: type

    @property
    def shape(self):
        """Shape of every scalar field on this grid."""
        return (self.imax + 1, self.jmax + 1)


def resolve_dtype(dtype):
    """
    Map a dtype-like value onto one of the supported numpy scalar types.

    Args:
        dtype: np.float32, np.float64, or anything np.dtype() accepts

    Returns:
        type: np.float32 or np.float64

    Raises:
        ValueError: If the dtype is not a supported floating-point type
    """
    scalar = np.dtype(dtype).type
    if scalar not in SUPPORTED_DTYPES:
        raise ValueError(f"Unsupported precision {np.dtype(dtype).name}; use float32 or float64")
    return scalar


def build_grid(x0, y0, x1, y1, imax, jmax, dtype=np.float64):
    """
    Build the grid geometry and coordinate arrays.

    Args:
        x0, y0 (float): Lower-left corner of the domain
        x1, y1 (float): Upper-right corner of the domain
        imax (int): Number of cells in x (grid has imax+1 points)
        jmax (int): Number of cells in y (grid has jmax+1 points)
        dtype: Floating-point type for coordinates (np.float32 or np.float64)

    Returns:
        Grid: Immutable geometry with x[i] = x0 + i*dx and y[j] = y0 + j*dy

    Raises:
        ValueError: If the grid has no interior points or zero extent
    """
    real = resolve_dtype(dtype)

    if imax < 2 or jmax < 2:
        raise ValueError("Grid resolution imax and jmax must be >= 2")
    if x1 <= x0 or y1 <= y0:
        raise ValueError("Domain bounds must satisfy x0 < x1 and y0 < y1")

    dx = real((real(x1) - real(x0)) / real(imax))
    dy = real((real(y1) - real(y0)) / real(jmax))
    x = (real(x0) + dx * np.arange(imax + 1, dtype=real)).astype(real)
    y = (real(y0) + dy * np.arange(jmax + 1, dtype=real)).astype(real)

    return Grid(
        x0=real(x0), y0=real(y0), x1=real(x1), y1=real(y1),
        imax=int(imax), jmax=int(jmax),
        dx=dx, dy=dy, x=x, y=y, dtype=real,
    )


def diffusion_weights(viscosity, dt, dx, dy, dtype=np.float64):
    """
    Compute the implicit-diffusion relaxation kernel.

    The backward-Euler diffusion equation
        (1 + 2λx + 2λy) q - λx (q_E + q_W) - λy (q_N + q_S) = q_source
    with λx = ν dt/dx², λy = ν dt/dy² is rearranged into a weighted average
        q = γ0 q_source + γx (q_E + q_W) + γy (q_N + q_S)
    so that γ0 + 2γx + 2γy = 1.

    Args:
        viscosity (float): Diffusion coefficient ν
        dt (float): Timestep
        dx, dy (float): Grid spacing
        dtype: Floating-point type for the weights

    Returns:
        StencilWeights: (center=γ0, x=γx, y=γy)
    """
    real = resolve_dtype(dtype)
    lambda_x = real(viscosity) * real(dt) / (real(dx) * real(dx))
    lambda_y = real(viscosity) * real(dt) / (real(dy) * real(dy))
    gamma0 = real(1) / (real(1) + real(2) * (lambda_x + lambda_y))
    return StencilWeights(real(gamma0), real(lambda_x * gamma0), real(lambda_y * gamma0))


def poisson_weights(dx, dy, dtype=np.float64):
    """
    Compute the five-point Poisson relaxation kernel.

    Solving ∇²φ = f on the grid gives
        φ = εx (φ_E + φ_W) + εy (φ_N + φ_S) - ε0 f
    with ε0 = dx² dy² / (2 (dx² + dy²)), εx = ε0/dx², εy = ε0/dy².

    Args:
        dx, dy (float): Grid spacing
        dtype: Floating-point type for the weights

    Returns:
        StencilWeights: (center=ε0, x=εx, y=εy)
    """
    real = resolve_dtype(dtype)
    dxdx = real(dx) * real(dx)
    dydy = real(dy) * real(dy)
    eps0 = real(0.5) * dxdx * dydy / (dxdx + dydy)
    return StencilWeights(real(eps0), real(eps0 / dxdx), real(eps0 / dydy))


def advection_factors(dt, dx, dy, dtype=np.float64):
    """Return (dt/dx, dt/dy) used to convert velocity into a cell displacement."""
    real = resolve_dtype(dtype)
    return real(real(dt) / real(dx)), real(real(dt) / real(dy))


def centered_difference_factors(dx, dy, dtype=np.float64):
    """Return (0.5/dx, 0.5/dy) for centered first derivatives."""
    real = resolve_dtype(dtype)
    return real(real(0.5) / real(dx)), real(real(0.5) / real(dy))
