"""Tests for semi-Lagrangian advection."""

import numpy as np
import pytest

from fluid2d import advection


@pytest.fixture
def ramp():
    """Scalar field on a 9x7 point grid with distinct values everywhere."""
    i = np.arange(9)[:, None]
    j = np.arange(7)[None, :]
    return (10.0 * i + j).astype(np.float64)


def stencil(i, j, vel, dt_dx, dt_dy):
    index_x, index_y, half = advection.grid_indices(vel.shape[1:], vel.dtype)
    return advection.lerp_info(i, j, vel, dt_dx, dt_dy, index_x, index_y, half)


class TestLerpInfo:

    def test_at_rest_points_at_itself(self):
        vel = np.zeros((2, 9, 7))
        i0, i1, a0, a1, j0, j1, b0, b1 = stencil(3, 2, vel, 0.5, 0.5)
        assert (i0, i1, j0, j1) == (3, 4, 2, 3)
        assert (a0, a1, b0, b1) == (1.0, 0.0, 1.0, 0.0)

    def test_fractional_trace(self):
        vel = np.zeros((2, 9, 7))
        vel[0, 4, 3] = 0.5
        vel[1, 4, 3] = -1.0
        # i - 0.5*0.5 = 3.75, j + 0.5*1.0 = 3.5
        i0, i1, a0, a1, j0, j1, b0, b1 = stencil(4, 3, vel, 0.5, 0.5)
        assert (i0, i1, j0, j1) == (3, 4, 3, 4)
        assert np.isclose(a1, 0.75) and np.isclose(a0, 0.25)
        assert np.isclose(b1, 0.5) and np.isclose(b0, 0.5)

    def test_clamps_to_half_cell_inside_boundary(self):
        vel = np.zeros((2, 9, 7))
        vel[0, 1, 1] = 1e6
        vel[1, 1, 1] = -1e6
        i0, i1, a0, a1, j0, j1, b0, b1 = stencil(1, 1, vel, 0.5, 0.5)
        assert (i0, i1, a1) == (0, 1, 0.5)
        assert (j0, j1, b1) == (5, 6, 0.5)

    def test_single_precision_stays_single(self):
        vel = np.full((2, 9, 7), 0.3, dtype=np.float32)
        stencil(4, 3, vel, np.float32(0.5), np.float32(0.5))

        signatures = [s for s in advection.lerp_info.nopython_signatures
                      if str(s.args[2].dtype) == "float32"]
        assert signatures
        float_types = {str(t) for t in signatures[0].return_type.types
                       if "float" in str(t)}
        assert float_types == {"float32"}


class TestAdvect:

    def test_zero_velocity_reproduces_interior(self, ramp):
        vel = np.zeros((2,) + ramp.shape)
        target = np.zeros_like(ramp)

        advection.advect(ramp, target, vel, 0.5, 0.5)

        np.testing.assert_array_equal(target[1:-1, 1:-1], ramp[1:-1, 1:-1])

    def test_whole_cell_shift_is_exact_lookup(self, ramp):
        # dt/dx * u = 0.5 * 2.0 = 1 cell
        vel = np.zeros((2,) + ramp.shape)
        vel[0] = 2.0
        target = np.zeros_like(ramp)

        advection.advect(ramp, target, vel, 0.5, 0.5)

        np.testing.assert_array_equal(target[2:-1, 1:-1], ramp[1:-2, 1:-1])

    def test_half_cell_shift_averages_neighbours(self, ramp):
        vel = np.zeros((2,) + ramp.shape)
        vel[1] = 1.0
        target = np.zeros_like(ramp)

        advection.advect(ramp, target, vel, 0.5, 0.5)

        expected = 0.5 * (ramp[1:-1, 1:-1] + ramp[1:-1, :-2])
        np.testing.assert_allclose(target[1:-1, 1:-1], expected)

    def test_clamped_trace_samples_boundary_ring(self, ramp):
        vel = np.zeros((2,) + ramp.shape)
        vel[0] = 1e6
        target = np.zeros_like(ramp)

        advection.advect(ramp, target, vel, 0.5, 0.5)

        expected = 0.5 * (ramp[0, 1:-1] + ramp[1, 1:-1])
        for i in range(1, 8):
            np.testing.assert_allclose(target[i, 1:-1], expected)

    def test_boundary_ring_not_written(self, ramp):
        vel = np.zeros((2,) + ramp.shape)
        target = np.full_like(ramp, -1.0)
        advection.advect(ramp, target, vel, 0.5, 0.5)
        assert np.all(target[0, :] == -1.0)
        assert np.all(target[:, -1] == -1.0)

    def test_vector_uses_same_trace_for_both_components(self, ramp, dtype):
        vel = np.zeros((2,) + ramp.shape, dtype=dtype)
        vel[0] = 0.7
        vel[1] = -0.3
        source = np.stack([ramp, 2.0 * ramp]).astype(dtype)
        target = np.zeros_like(source)

        advection.advect_vector(source, target, vel, dtype(0.5), dtype(0.5))

        single = np.zeros_like(ramp, dtype=dtype)
        advection.advect(source[0], single, vel, dtype(0.5), dtype(0.5))
        np.testing.assert_array_equal(target[0], single)
        np.testing.assert_allclose(target[1, 1:-1, 1:-1], 2.0 * single[1:-1, 1:-1], rtol=1e-6)
        assert target.dtype == dtype
