"""
Gauss-Seidel relaxation for implicit diffusion.

Each sweep visits the interior in row-major order over the [i, j] container
and overwrites the working array in place, so cells later in the sweep see
values already updated earlier in the same sweep. The number of sweeps is
fixed; there is no residual check.
"""

from numba import njit


@njit(cache=True)
def gauss_seidel_sweep(work, source, gamma0, gamma_x, gamma_y):
    """
    One in-place relaxation sweep of the implicit diffusion kernel.

        work[i,j] = γ0 source[i,j] + γx (work[i+1,j] + work[i-1,j])
                                   + γy (work[i,j+1] + work[i,j-1])

    Args:
        work (ndarray): Working scalar field (imax+1, jmax+1), updated in place
        source (ndarray): Field being diffused (read only)
        gamma0, gamma_x, gamma_y: Diffusion stencil weights
    """
    nx, ny = work.shape
    for i in range(1, nx - 1):
        for j in range(1, ny - 1):
            sum_x = work[i + 1, j] + work[i - 1, j]
            sum_y = work[i, j + 1] + work[i, j - 1]
            work[i, j] = gamma0 * source[i, j] + gamma_x * sum_x + gamma_y * sum_y


def diffuse_scalar(work, source, weights, iterations, boundary):
    """
    Relax a scalar field for a fixed number of sweeps.

    Args:
        work (ndarray): Working buffer, expected to start equal to source
        source (ndarray): Post-source field (read only)
        weights (StencilWeights): (γ0, γx, γy)
        iterations (int): Number of sweeps K
        boundary (callable): Policy reapplied to work after every sweep
    """
    for _ in range(iterations):
        gauss_seidel_sweep(work, source, weights.center, weights.x, weights.y)
        boundary(work)


def diffuse_vector(work, source, weights, iterations, boundary):
    """
    Relax both velocity components for a fixed number of sweeps.

    Args:
        work (ndarray): Working velocity (2, imax+1, jmax+1)
        source (ndarray): Post-source velocity (read only)
        weights (StencilWeights): (γ0, γx, γy)
        iterations (int): Number of sweeps K
        boundary (callable): Velocity policy reapplied after every sweep
    """
    for _ in range(iterations):
        for c in range(work.shape[0]):
            gauss_seidel_sweep(work[c], source[c], weights.center, weights.x, weights.y)
        boundary(work)
