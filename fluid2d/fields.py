"""
Grid-shaped field storage with double buffering.

Density and velocity each own two buffers that exchange the roles
"previous" (read-from) and "current" (write-into) after every stage. The
exchange only flips an index; no data is copied. Divergence and the Poisson
potential are single working buffers that the projection recomputes.

Velocity buffers carry a leading component axis: velocity[0] is u (x) and
velocity[1] is v (y), both indexed [i, j].
"""

import numpy as np


class DoubleBuffer:
    """Two equally shaped arrays with swappable previous/current roles."""

    def __init__(self, shape, dtype):
        self._buffers = [np.zeros(shape, dtype=dtype), np.zeros(shape, dtype=dtype)]
        self._previous = 0

    @property
    def previous(self):
        return self._buffers[self._previous]

    @property
    def current(self):
        return self._buffers[1 - self._previous]

    def swap(self):
        """Exchange roles so the buffer just written becomes previous."""
        self._previous = 1 - self._previous

    def synchronize(self):
        """Copy current into previous so both generations agree."""
        np.copyto(self.previous, self.current)

    def seed_current(self):
        """Copy previous into current so a relaxation starts from it."""
        np.copyto(self.current, self.previous)


class FieldState:
    """
    All grid-shaped arrays owned by one simulator.

    Args:
        grid (Grid): Geometry providing the (imax+1, jmax+1) shape and dtype
    """

    def __init__(self, grid):
        shape = grid.shape
        self.density = DoubleBuffer(shape, grid.dtype)
        self.velocity = DoubleBuffer((2,) + shape, grid.dtype)
        self.divergence = np.zeros(shape, dtype=grid.dtype)
        self.potential = np.zeros(shape, dtype=grid.dtype)


def read_only(array):
    """Return a non-writeable view of array for external readers."""
    view = array.view()
    view.flags.writeable = False
    return view
