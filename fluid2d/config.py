"""
Configuration and command-line argument parsing for fluid2d simulations.

This module handles all command-line arguments and parameter validation
for the stable-fluids driver.
"""

import argparse


def get_args(argv=None):
    """
    Parse command-line arguments for a fluid2d simulation.

    Args:
        argv (list, optional): Argument list to parse instead of sys.argv[1:]

    Returns:
        argparse.Namespace: Parsed command-line arguments containing all
            simulation parameters (domain, physics, solver, scenario and
            output settings)
    """
    ap = argparse.ArgumentParser(
        description="2D stable-fluids simulation (implicit diffusion, semi-Lagrangian advection, projection)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Domain / resolution parameters
    domain_group = ap.add_argument_group('Domain and Resolution')
    domain_group.add_argument(
        "--x0", type=float, default=0.0,
        help="Lower x bound of the domain"
    )
    domain_group.add_argument(
        "--y0", type=float, default=0.0,
        help="Lower y bound of the domain"
    )
    domain_group.add_argument(
        "--x1", type=float, default=1.0,
        help="Upper x bound of the domain"
    )
    domain_group.add_argument(
        "--y1", type=float, default=1.0,
        help="Upper y bound of the domain"
    )
    domain_group.add_argument(
        "--imax", type=int, default=128,
        help="Number of cells in x direction (grid has imax+1 points)"
    )
    domain_group.add_argument(
        "--jmax", type=int, default=128,
        help="Number of cells in y direction (grid has jmax+1 points)"
    )

    # Physics parameters
    physics_group = ap.add_argument_group('Physical Parameters')
    physics_group.add_argument(
        "--dt", type=float, default=1e-3,
        help="Timestep (fixed; not adapted for stability)"
    )
    physics_group.add_argument(
        "--density_viscosity", type=float, default=1e-4,
        help="Diffusion coefficient of the density field"
    )
    physics_group.add_argument(
        "--velocity_viscosity", type=float, default=1e-4,
        help="Kinematic viscosity of the velocity field"
    )
    physics_group.add_argument(
        "--density_bc", type=str, default="dirichlet",
        choices=["dirichlet", "neumann"],
        help="Density boundary condition: zero value or zero normal derivative"
    )

    # Solver parameters
    solver_group = ap.add_argument_group('Solver')
    solver_group.add_argument(
        "--iterations", type=int, default=32,
        help="Gauss-Seidel sweeps per diffusion and Poisson solve (0 disables both)"
    )

    # Scenario
    scenario_group = ap.add_argument_group('Scenario')
    scenario_group.add_argument(
        "--scenario", type=str, default="plume",
        choices=["plume", "vortex", "quiescent"],
        help="Initial condition and source configuration"
    )
    scenario_group.add_argument(
        "--source_rate", type=float, default=10.0,
        help="Density injection rate of the plume source"
    )
    scenario_group.add_argument(
        "--jet_speed", type=float, default=20.0,
        help="Acceleration of the plume's velocity jet"
    )
    scenario_group.add_argument(
        "--jet_omega", type=float, default=0.0,
        help="Angular frequency of the jet direction (radians per unit time)"
    )
    scenario_group.add_argument(
        "--vortex_strength", type=float, default=1.0,
        help="Swirl speed scale of the vortex scenario"
    )
    scenario_group.add_argument(
        "--source_radius", type=float, default=0.05,
        help="Radius of the plume sources as a fraction of the domain width"
    )
    scenario_group.add_argument(
        "--t_source", type=float, default=None,
        help="Time after which sources switch off (default: never)"
    )

    # Time integration
    time_group = ap.add_argument_group('Time Integration')
    time_group.add_argument(
        "--n_steps", type=int, default=500,
        help="Number of timesteps to run"
    )

    # Output cadences
    output_group = ap.add_argument_group('Output Settings')
    output_group.add_argument(
        "--snap_every", type=int, default=50,
        help="Snapshot output interval in steps (density and velocity)"
    )
    output_group.add_argument(
        "--log_every", type=int, default=10,
        help="Progress logging and scalar sampling interval in steps"
    )

    # Output directories and precision
    misc_group = ap.add_argument_group('Miscellaneous')
    misc_group.add_argument(
        "--outdir", type=str, default="snapshots",
        help="Root output directory for simulation data"
    )
    misc_group.add_argument(
        "--tag", type=str, default="",
        help="Optional tag to add to output directory name"
    )
    misc_group.add_argument(
        "--precision", type=str, default="float64",
        choices=["float64", "float32"],
        help="Floating-point precision for simulation"
    )

    return ap.parse_args(argv)


def validate_args(args):
    """
    Validate command-line arguments for consistency.

    Args:
        args: Parsed arguments from get_args()

    Raises:
        ValueError: If arguments are inconsistent or invalid
    """
    # Check domain parameters
    if args.imax < 2 or args.jmax < 2:
        raise ValueError("Grid resolution imax and jmax must be >= 2")

    if args.x1 <= args.x0 or args.y1 <= args.y0:
        raise ValueError("Domain bounds must satisfy x0 < x1 and y0 < y1")

    # Check physics parameters
    if args.dt <= 0:
        raise ValueError("Timestep dt must be positive")

    if args.density_viscosity < 0 or args.velocity_viscosity < 0:
        raise ValueError("Viscosities must be non-negative")

    # Check solver parameters
    if args.iterations < 0:
        raise ValueError("Number of Gauss-Seidel iterations must be non-negative")

    # Check scenario parameters
    if args.scenario == "plume" and args.source_radius <= 0:
        raise ValueError("source_radius must be positive for the plume scenario")

    if args.t_source is not None and args.t_source < 0:
        raise ValueError("t_source must be non-negative when specified")

    # Check time and output parameters
    if args.n_steps <= 0:
        raise ValueError("Number of steps must be positive")

    if args.snap_every <= 0 or args.log_every <= 0:
        raise ValueError("All output intervals must be positive")
