"""
Projection of velocity onto its (approximately) divergence-free part.

The projection computes the centered-difference divergence of velocity,
solves ∇²φ = div(u) for a potential φ that is zero on the domain edge, and
subtracts ∇φ from the velocity. The Poisson solve is a fixed number of
Gauss-Seidel sweeps starting from φ = 0.
"""

from numba import njit

from .boundary import neumann_zero, velocity_no_slip


@njit(cache=True)
def compute_divergence(velocity, divergence, half_div_dx, half_div_dy):
    """
    Centered-difference divergence on the interior.

    Args:
        velocity (ndarray): Velocity field (2, imax+1, jmax+1)
        divergence (ndarray): Output scalar field, interior overwritten
        half_div_dx, half_div_dy: 0.5/dx and 0.5/dy
    """
    nx, ny = divergence.shape
    for i in range(1, nx - 1):
        for j in range(1, ny - 1):
            diff_x = velocity[0, i + 1, j] - velocity[0, i - 1, j]
            diff_y = velocity[1, i, j + 1] - velocity[1, i, j - 1]
            divergence[i, j] = half_div_dx * diff_x + half_div_dy * diff_y


@njit(cache=True)
def solve_poisson(potential, divergence, eps0, eps_x, eps_y, iterations):
    """
    Relax ∇²φ = divergence in place with zero boundary values.

    The boundary ring of potential is never written, so it keeps whatever
    the caller left there (zero after a reset).

    Args:
        potential (ndarray): Potential φ, updated in place
        divergence (ndarray): Right-hand side
        eps0, eps_x, eps_y: Poisson stencil weights
        iterations (int): Number of sweeps K
    """
    nx, ny = potential.shape
    for _ in range(iterations):
        for i in range(1, nx - 1):
            for j in range(1, ny - 1):
                sum_x = potential[i + 1, j] + potential[i - 1, j]
                sum_y = potential[i, j + 1] + potential[i, j - 1]
                potential[i, j] = eps_x * sum_x + eps_y * sum_y - eps0 * divergence[i, j]


@njit(cache=True)
def subtract_gradient(velocity, potential, half_div_dx, half_div_dy):
    """Subtract the centered-difference gradient of potential from velocity."""
    nx, ny = potential.shape
    for i in range(1, nx - 1):
        for j in range(1, ny - 1):
            diff_x = potential[i + 1, j] - potential[i - 1, j]
            diff_y = potential[i, j + 1] - potential[i, j - 1]
            velocity[0, i, j] -= half_div_dx * diff_x
            velocity[1, i, j] -= half_div_dy * diff_y


def project(velocity, divergence, potential, weights, half_div_dx, half_div_dy, iterations):
    """
    Reduce the divergence of velocity in place.

    Args:
        velocity (ndarray): Velocity field (2, imax+1, jmax+1), corrected in place
        divergence (ndarray): Working scalar field for div(u)
        potential (ndarray): Working scalar field for φ
        weights (StencilWeights): Poisson weights (ε0, εx, εy)
        half_div_dx, half_div_dy: 0.5/dx and 0.5/dy
        iterations (int): Number of Poisson sweeps K
    """
    compute_divergence(velocity, divergence, half_div_dx, half_div_dy)

    # Boundary divergence is stencil support, not data
    neumann_zero(divergence)

    potential.fill(0)
    solve_poisson(potential, divergence, weights.center, weights.x, weights.y, iterations)

    subtract_gradient(velocity, potential, half_div_dx, half_div_dy)
    velocity_no_slip(velocity)
