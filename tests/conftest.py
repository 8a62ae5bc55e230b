"""Pytest configuration and fixtures for fluid2d tests."""

import numpy as np
import pytest

from fluid2d import Fluid2D, sources


@pytest.fixture(params=[np.float32, np.float64], ids=["float32", "float64"])
def dtype(request):
    """Both supported precisions."""
    return request.param


@pytest.fixture
def unit_square_params():
    """Parameters for a 4x4 grid on the unit square."""
    return {
        "x0": 0.0,
        "y0": 0.0,
        "x1": 1.0,
        "y1": 1.0,
        "dt": 0.01,
        "density_viscosity": 0.1,
        "velocity_viscosity": 0.1,
        "imax": 4,
        "jmax": 4,
        "iterations": 20,
        "density_dirichlet": True,
    }


@pytest.fixture
def make_sim():
    """Factory for simulators on the unit square with overridable settings."""

    def factory(imax=16, jmax=16, dt=0.01, viscosity=0.01, iterations=20,
                density_dirichlet=True, dtype=np.float64, **strategies):
        return Fluid2D(
            0.0, 0.0, 1.0, 1.0, dt, viscosity, viscosity,
            imax, jmax, iterations, density_dirichlet,
            dtype=dtype, **strategies,
        )

    return factory


@pytest.fixture
def random_field():
    """Random scalar field on a 7x9 point grid."""
    rng = np.random.default_rng(1234)
    return rng.standard_normal((7, 9))


@pytest.fixture
def random_velocity():
    """Random velocity field on a 7x9 point grid."""
    rng = np.random.default_rng(4321)
    return rng.standard_normal((2, 7, 9))


@pytest.fixture
def blob_strategies():
    """Gaussian density blob at rest with no sources."""
    return {
        "initial_density": sources.gaussian_density(0.5, 0.5, 0.15),
        "initial_velocity": sources.zero_velocity,
    }
