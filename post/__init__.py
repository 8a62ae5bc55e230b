"""
fluid2d Post-Processing Toolkit
===============================

A modular post-processing and visualisation toolkit for fluid2d simulation output.

Modules:
    io: Data loading and file I/O utilities
    visualisation: Plotting functions for time series and density snapshots
    analysis: Analysis utilities (statistics, averages, mass budget)
"""

__version__ = "0.1.0"

from . import io
from . import visualisation
from . import analysis

__all__ = ["io", "visualisation", "analysis"]
