"""Tests for Gauss-Seidel implicit diffusion."""

import numpy as np

from fluid2d import boundary, domain, relaxation


def reference_sweep(work, source, g0, gx, gy):
    """Row-major in-place sweep written out in plain Python."""
    nx, ny = work.shape
    for i in range(1, nx - 1):
        for j in range(1, ny - 1):
            work[i, j] = (g0 * source[i, j]
                          + gx * (work[i + 1, j] + work[i - 1, j])
                          + gy * (work[i, j + 1] + work[i, j - 1]))


def reference_sweep_j_outer(work, source, g0, gx, gy):
    """Same sweep visiting i fastest, as for [y][x] storage."""
    nx, ny = work.shape
    for j in range(1, ny - 1):
        for i in range(1, nx - 1):
            work[i, j] = (g0 * source[i, j]
                          + gx * (work[i + 1, j] + work[i - 1, j])
                          + gy * (work[i, j + 1] + work[i, j - 1]))


class TestGaussSeidelSweep:

    def test_matches_sequential_reference(self, random_field):
        w = domain.diffusion_weights(0.3, 0.1, 0.2, 0.25)
        source = random_field
        expected = random_field.copy()
        result = random_field.copy()

        reference_sweep(expected, source, *w)
        relaxation.gauss_seidel_sweep(result, source, w.center, w.x, w.y)

        np.testing.assert_allclose(result, expected, rtol=1e-13, atol=1e-13)

    def test_uses_values_updated_earlier_in_sweep(self, random_field):
        w = domain.diffusion_weights(0.3, 0.1, 0.2, 0.25)
        source = random_field
        gauss_seidel = random_field.copy()
        relaxation.gauss_seidel_sweep(gauss_seidel, source, w.center, w.x, w.y)

        # Jacobi update reads only the old values
        old = random_field
        jacobi = old.copy()
        jacobi[1:-1, 1:-1] = (w.center * source[1:-1, 1:-1]
                              + w.x * (old[2:, 1:-1] + old[:-2, 1:-1])
                              + w.y * (old[1:-1, 2:] + old[1:-1, :-2]))

        # First interior cell only sees old neighbours
        assert np.isclose(gauss_seidel[1, 1], jacobi[1, 1])
        assert not np.allclose(gauss_seidel[2:-1, 2:-1], jacobi[2:-1, 2:-1])

    def test_boundary_ring_untouched(self, random_field):
        w = domain.diffusion_weights(0.3, 0.1, 0.2, 0.25)
        work = random_field.copy()
        relaxation.gauss_seidel_sweep(work, random_field, w.center, w.x, w.y)

        np.testing.assert_array_equal(work[0, :], random_field[0, :])
        np.testing.assert_array_equal(work[-1, :], random_field[-1, :])
        np.testing.assert_array_equal(work[:, 0], random_field[:, 0])
        np.testing.assert_array_equal(work[:, -1], random_field[:, -1])

    def test_sweep_order_is_equivalent(self, random_field):
        w = domain.diffusion_weights(0.3, 0.1, 0.2, 0.25)
        i_outer = random_field.copy()
        j_outer = random_field.copy()
        kernel = random_field.copy()

        for _ in range(3):
            reference_sweep(i_outer, random_field, *w)
            reference_sweep_j_outer(j_outer, random_field, *w)
            relaxation.gauss_seidel_sweep(kernel, random_field, w.center, w.x, w.y)

        np.testing.assert_array_equal(i_outer, j_outer)
        np.testing.assert_allclose(kernel, j_outer, rtol=1e-13, atol=1e-13)


class TestDiffuse:

    def test_zero_iterations_is_identity(self, random_field):
        w = domain.diffusion_weights(0.3, 0.1, 0.2, 0.25)
        work = random_field.copy()
        relaxation.diffuse_scalar(work, random_field, w, 0, boundary.dirichlet_zero)
        np.testing.assert_array_equal(work, random_field)

    def test_constant_is_fixed_point_with_neumann(self, dtype):
        w = domain.diffusion_weights(0.5, 0.01, 0.1, 0.1, dtype)
        source = np.full((10, 12), 3.0, dtype=dtype)
        work = source.copy()

        relaxation.diffuse_scalar(work, source, w, 25, boundary.neumann_zero)

        np.testing.assert_allclose(work, 3.0, rtol=1e-5)
        assert work.dtype == dtype

    def test_dirichlet_bounds_by_source(self):
        w = domain.diffusion_weights(0.5, 0.01, 0.1, 0.1)
        source = np.ones((10, 10))
        boundary.dirichlet_zero(source)
        work = source.copy()

        relaxation.diffuse_scalar(work, source, w, 30, boundary.dirichlet_zero)

        assert np.all(work <= 1.0 + 1e-12)
        assert np.all(work >= 0.0)
        assert work[1, 1] < 1.0
        assert np.sum(work) < np.sum(source)

    def test_boundary_refreshed_after_each_sweep(self, random_field):
        w = domain.diffusion_weights(0.3, 0.1, 0.2, 0.25)
        work = random_field.copy()
        relaxation.diffuse_scalar(work, random_field, w, 3, boundary.neumann_zero)
        np.testing.assert_array_equal(work[0, 1:-1], work[1, 1:-1])
        assert work[0, 0] == work[1, 1]

    def test_vector_components_relax_independently(self, random_velocity):
        w = domain.diffusion_weights(0.3, 0.1, 0.2, 0.25)
        work = random_velocity.copy()
        relaxation.diffuse_vector(work, random_velocity, w, 4, boundary.velocity_no_slip)

        # Same sweeps per component, with the velocity wall policy in between
        expected = random_velocity.copy()
        for _ in range(4):
            for c in range(2):
                reference_sweep(expected[c], random_velocity[c], *w)
            boundary.velocity_no_slip(expected)

        np.testing.assert_allclose(work, expected, rtol=1e-12, atol=1e-12)
