"""
Initial conditions and time-varying sources for 2D fluid simulations.

The simulator treats all of these as opaque strategy functions evaluated once
per interior grid point:

    initial density   f(x, y, i, j)    -> density
    initial velocity  f(x, y, i, j)    -> (u, v)
    density source    f(t, x, y, i, j) -> rate
    velocity source   f(t, x, y, i, j) -> (du, dv)

The factories below return closures with those signatures. They are pure
functions of their arguments.
"""

import numpy as np


def zero_density(x, y, i, j):
    return 0.0


def zero_velocity(x, y, i, j):
    return 0.0, 0.0


def zero_density_source(t, x, y, i, j):
    return 0.0


def zero_velocity_source(t, x, y, i, j):
    return 0.0, 0.0


def point_density(i0, j0, value=1.0):
    """
    Density equal to value at grid point (i0, j0) and zero elsewhere.

    Args:
        i0, j0 (int): Grid indices of the non-zero point
        value (float): Density at that point

    Returns:
        callable: f(x, y, i, j) -> density
    """
    def density(x, y, i, j):
        return value if (i == i0 and j == j0) else 0.0
    return density


def gaussian_density(xc, yc, radius, amplitude=1.0):
    """
    Gaussian blob of density centred at (xc, yc).

    Args:
        xc, yc (float): Blob centre in physical coordinates
        radius (float): e-folding radius
        amplitude (float): Peak density

    Returns:
        callable: f(x, y, i, j) -> density
    """
    inv_r2 = 1.0 / (radius * radius)

    def density(x, y, i, j):
        r2 = (x - xc) ** 2 + (y - yc) ** 2
        return amplitude * np.exp(-r2 * inv_r2)
    return density


def vortex_velocity(xc, yc, radius, strength=1.0):
    """
    Gaussian-core swirl centred at (xc, yc).

    The azimuthal speed is strength * (r/radius) * exp(-r²/radius²), which
    vanishes at the centre and decays away from the core.

    Args:
        xc, yc (float): Vortex centre
        radius (float): Core radius
        strength (float): Speed scale (positive = counter-clockwise)

    Returns:
        callable: f(x, y, i, j) -> (u, v)
    """
    inv_r = 1.0 / radius

    def velocity(x, y, i, j):
        rx = (x - xc) * inv_r
        ry = (y - yc) * inv_r
        envelope = strength * np.exp(-(rx * rx + ry * ry))
        return -ry * envelope, rx * envelope
    return velocity


def disk_density_source(xc, yc, radius, rate, t_stop=None):
    """
    Constant density injection inside a disk.

    Args:
        xc, yc (float): Disk centre
        radius (float): Disk radius
        rate (float): Injection rate (density per unit time); negative drains
        t_stop (float, optional): Source switches off for t >= t_stop

    Returns:
        callable: f(t, x, y, i, j) -> rate
    """
    r2_max = radius * radius

    def source(t, x, y, i, j):
        if t_stop is not None and t >= t_stop:
            return 0.0
        if (x - xc) ** 2 + (y - yc) ** 2 <= r2_max:
            return rate
        return 0.0
    return source


def jet_velocity_source(xc, yc, radius, speed, angle=0.0, omega=0.0, t_stop=None):
    """
    Momentum injection inside a disk along a (possibly rotating) direction.

    The jet direction at time t is angle + omega * t (radians, measured from
    the +x axis).

    Args:
        xc, yc (float): Disk centre
        radius (float): Disk radius
        speed (float): Acceleration magnitude (velocity per unit time)
        angle (float): Initial jet direction in radians
        omega (float): Angular frequency of the jet direction
        t_stop (float, optional): Source switches off for t >= t_stop

    Returns:
        callable: f(t, x, y, i, j) -> (du, dv)
    """
    r2_max = radius * radius

    def source(t, x, y, i, j):
        if t_stop is not None and t >= t_stop:
            return 0.0, 0.0
        if (x - xc) ** 2 + (y - yc) ** 2 > r2_max:
            return 0.0, 0.0
        theta = angle + omega * t
        return speed * np.cos(theta), speed * np.sin(theta)
    return source
