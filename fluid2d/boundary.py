"""
Boundary policies for grid fields.

Boundary points are never independent degrees of freedom: every policy here
rewrites the outer ring of a field from its interior, so applying a policy
twice gives the same result as applying it once.

Scalar fields use either a Dirichlet-zero or a Neumann-zero policy; the
velocity field always uses the no-slip/no-flux policy.
"""


def dirichlet_zero(data):
    """
    Set every boundary point and corner of a scalar field to zero.

    Args:
        data (ndarray): Scalar field (imax+1, jmax+1), modified in place
    """
    data[0, :] = 0
    data[-1, :] = 0
    data[:, 0] = 0
    data[:, -1] = 0


def neumann_zero(data):
    """
    Apply a zero normal-derivative condition to a scalar field.

    Each edge point copies its single interior neighbour and each corner
    copies its diagonal interior neighbour.

    Args:
        data (ndarray): Scalar field (imax+1, jmax+1), modified in place
    """
    # x-edges i=0 and i=imax
    data[0, 1:-1] = data[1, 1:-1]
    data[-1, 1:-1] = data[-2, 1:-1]

    # y-edges j=0 and j=jmax
    data[1:-1, 0] = data[1:-1, 1]
    data[1:-1, -1] = data[1:-1, -2]

    # Corners
    data[0, 0] = data[1, 1]
    data[-1, 0] = data[-2, 1]
    data[0, -1] = data[1, -2]
    data[-1, -1] = data[-2, -2]


def velocity_no_slip(velocity):
    """
    Apply the no-slip/no-flux wall condition to a velocity field.

    On x-edges the normal component u is zero and v has zero normal
    derivative; on y-edges v is zero and u has zero normal derivative.
    All four corners are (0, 0).

    Args:
        velocity (ndarray): Velocity field (2, imax+1, jmax+1), modified in place
    """
    u = velocity[0]
    v = velocity[1]

    # x-edges
    u[0, 1:-1] = 0
    u[-1, 1:-1] = 0
    v[0, 1:-1] = v[1, 1:-1]
    v[-1, 1:-1] = v[-2, 1:-1]

    # y-edges
    u[1:-1, 0] = u[1:-1, 1]
    u[1:-1, -1] = u[1:-1, -2]
    v[1:-1, 0] = 0
    v[1:-1, -1] = 0

    # Corners
    for i, j in ((0, 0), (-1, 0), (0, -1), (-1, -1)):
        u[i, j] = 0
        v[i, j] = 0


def density_policy(dirichlet):
    """Return the scalar boundary function selected by the density flag."""
    return dirichlet_zero if dirichlet else neumann_zero
