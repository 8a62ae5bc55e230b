#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
fluid2d: 2D Stable-Fluids Simulator
===================================

Fixed-step density and velocity simulations on a rectangular grid.

Usage:
    # Rising plume on a 128x128 grid
    python main.py --scenario plume --imax 128 --jmax 128 --n_steps 500

    # Single precision vortex with Neumann density walls
    python main.py --scenario vortex --precision float32 --density_bc neumann

For help:
    python main.py --help
"""

import logging
import sys

import numpy as np

from fluid2d import config, solver


def main():
    """
    Main entry point for fluid2d simulations.

    Parses command-line arguments, validates configuration, sets up logging,
    and runs the simulation.
    """
    # Parse arguments
    args = config.get_args()

    # Setup logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    # Validate arguments
    try:
        config.validate_args(args)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    # Determine data type
    dtype = np.float64 if args.precision == "float64" else np.float32

    # Log configuration
    logger.info("=" * 70)
    logger.info("fluid2d: 2D Stable-Fluids Simulator")
    logger.info("=" * 70)
    logger.info("Domain: %dx%d grid on [%.2f,%.2f]x[%.2f,%.2f]",
                args.imax, args.jmax, args.x0, args.x1, args.y0, args.y1)
    logger.info("Physics: dt=%.2e, density visc=%.2e, velocity visc=%.2e, density BC=%s",
                args.dt, args.density_viscosity, args.velocity_viscosity, args.density_bc)
    logger.info("Solver: %d Gauss-Seidel sweeps per solve", args.iterations)
    logger.info("Scenario: %s", args.scenario)
    logger.info("Time: %d steps (t_end=%.4f)", args.n_steps, args.n_steps * args.dt)
    logger.info("Precision: %s", args.precision)
    logger.info("Output directory: %s", args.outdir)
    logger.info("=" * 70)

    run_dir = solver.run_simulation(args, dtype)

    # Final summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Run completed successfully, output written to %s", run_dir)
    logger.info("=" * 70)


if __name__ == "__main__":
    main()
