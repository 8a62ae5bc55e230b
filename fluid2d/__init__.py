"""
fluid2d: 2D Stable-Fluids Simulator
===================================

Density and velocity on a fixed rectangular grid, advanced by implicit
diffusion, semi-Lagrangian advection and a Poisson projection.

Modules:
    config: Configuration and command-line argument parsing
    domain: Grid geometry and derived stencil coefficients
    fields: Double-buffered field storage
    boundary: Dirichlet, Neumann and velocity wall policies
    relaxation: Gauss-Seidel implicit diffusion
    advection: Semi-Lagrangian advection with bilinear interpolation
    projection: Divergence removal via a Poisson solve
    sources: Initial conditions and time-varying sources
    solver: The Fluid2D simulator and the batch time integration driver
    utils: Diagnostic functions
"""

__version__ = "0.1.0"

from . import config
from . import domain
from . import fields
from . import boundary
from . import relaxation
from . import advection
from . import projection
from . import sources
from . import solver
from . import utils

from .solver import Fluid2D

__all__ = [
    "config",
    "domain",
    "fields",
    "boundary",
    "relaxation",
    "advection",
    "projection",
    "sources",
    "solver",
    "utils",
    "Fluid2D",
]
