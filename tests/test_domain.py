"""Tests for grid geometry and derived stencil coefficients."""

import numpy as np
import pytest

from fluid2d import domain


class TestBuildGrid:
    """Geometry and coordinate arrays."""

    def test_coordinates(self, dtype):
        grid = domain.build_grid(-1.0, 0.0, 1.0, 2.0, 8, 4, dtype)

        assert grid.shape == (9, 5)
        assert grid.x.dtype == dtype
        assert grid.y.dtype == dtype
        assert grid.x[0] == dtype(-1.0)
        assert grid.y[0] == dtype(0.0)
        assert np.isclose(grid.x[-1], 1.0, rtol=1e-6)
        assert np.isclose(grid.y[-1], 2.0, rtol=1e-6)
        assert np.isclose(grid.dx, 0.25)
        assert np.isclose(grid.dy, 0.5)

    def test_grid_is_immutable(self):
        grid = domain.build_grid(0.0, 0.0, 1.0, 1.0, 4, 4)
        with pytest.raises(AttributeError):
            grid.imax = 8

    @pytest.mark.parametrize("imax, jmax", [(0, 4), (1, 4), (4, 1)])
    def test_rejects_empty_interior(self, imax, jmax):
        with pytest.raises(ValueError):
            domain.build_grid(0.0, 0.0, 1.0, 1.0, imax, jmax)

    def test_rejects_zero_extent(self):
        with pytest.raises(ValueError):
            domain.build_grid(0.0, 0.0, 0.0, 1.0, 4, 4)
        with pytest.raises(ValueError):
            domain.build_grid(0.0, 1.0, 1.0, 1.0, 4, 4)

    def test_rejects_integer_dtype(self):
        with pytest.raises(ValueError):
            domain.build_grid(0.0, 0.0, 1.0, 1.0, 4, 4, np.int32)


class TestCoefficients:
    """Diffusion, Poisson and advection factors."""

    def test_diffusion_weights_form_an_average(self, dtype):
        w = domain.diffusion_weights(0.1, 0.01, 0.25, 0.5, dtype)

        assert all(isinstance(c, dtype) for c in w)
        total = w.center + 2 * w.x + 2 * w.y
        assert np.isclose(total, 1.0, rtol=1e-6)
        # Finer spacing couples more strongly
        assert w.x > w.y

    def test_diffusion_weights_values(self):
        # λx = λy = 0.1 * 0.01 / 0.0625 = 0.016
        w = domain.diffusion_weights(0.1, 0.01, 0.25, 0.25)
        assert np.isclose(w.center, 1.0 / 1.064)
        assert np.isclose(w.x, 0.016 / 1.064)
        assert np.isclose(w.y, 0.016 / 1.064)

    def test_zero_viscosity_is_identity(self):
        w = domain.diffusion_weights(0.0, 0.01, 0.25, 0.25)
        assert w.center == 1.0
        assert w.x == 0.0
        assert w.y == 0.0

    def test_poisson_weights_square_cells(self):
        w = domain.poisson_weights(0.1, 0.1)
        assert np.isclose(w.center, 0.0025)
        assert np.isclose(w.x, 0.25)
        assert np.isclose(w.y, 0.25)

    def test_poisson_weights_rectangular_cells(self):
        dx, dy = 0.1, 0.2
        w = domain.poisson_weights(dx, dy)
        assert np.isclose(w.x * dx * dx, w.center)
        assert np.isclose(w.y * dy * dy, w.center)
        assert np.isclose(2 * w.x + 2 * w.y, 1.0)

    def test_advection_factors(self, dtype):
        dt_dx, dt_dy = domain.advection_factors(0.5, 1.0, 0.25, dtype)
        assert dt_dx == dtype(0.5)
        assert dt_dy == dtype(2.0)
