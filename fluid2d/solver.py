"""
Stable-fluids simulator and batch time integration.

This module contains the core simulation logic:
- The Fluid2D simulator (initialization and the per-step stage sequence)
- Scenario setup from command-line arguments
- The time integration loop with progress logging
- HDF5 output of snapshots and scalar time series
"""

import logging
import pathlib

import h5py
import numpy as np

from . import advection
from . import boundary
from . import domain
from . import projection
from . import relaxation
from . import sources
from . import utils
from .fields import FieldState, read_only

logger = logging.getLogger(__name__)


class Fluid2D:
    """
    Density and velocity on a fixed 2D grid advanced by the stable-fluids method.

    Every step runs, in order: density source, density diffusion, density
    advection, velocity source, velocity diffusion and velocity advection.
    Each velocity stage ends with a projection. The diffusion and Poisson
    solves use a fixed number of Gauss-Seidel sweeps; nothing adapts dt or
    the sweep count, so choosing a stable configuration is up to the caller.

    Args:
        x0, y0, x1, y1 (float): Domain bounds, x0 < x1 and y0 < y1
        dt (float): Timestep
        density_viscosity (float): Diffusion coefficient of density
        velocity_viscosity (float): Kinematic viscosity of velocity
        imax, jmax (int): Number of cells per axis (>= 2)
        iterations (int): Gauss-Seidel sweeps K per solve (>= 0)
        density_dirichlet (bool): True for zero-valued density boundary,
            False for zero normal derivative
        initial_density (callable): f(x, y, i, j) -> density
        initial_velocity (callable): f(x, y, i, j) -> (u, v)
        density_source (callable): f(t, x, y, i, j) -> rate
        velocity_source (callable): f(t, x, y, i, j) -> (du, dv)
        dtype: np.float32 or np.float64

    Raises:
        ValueError: If the geometry is degenerate, iterations is negative
            or the dtype is unsupported
    """

    def __init__(self, x0, y0, x1, y1, dt, density_viscosity, velocity_viscosity,
                 imax, jmax, iterations, density_dirichlet,
                 initial_density=sources.zero_density,
                 initial_velocity=sources.zero_velocity,
                 density_source=sources.zero_density_source,
                 velocity_source=sources.zero_velocity_source,
                 dtype=np.float64):
        if iterations < 0:
            raise ValueError("Number of Gauss-Seidel iterations must be non-negative")

        self.grid = domain.build_grid(x0, y0, x1, y1, imax, jmax, dtype)
        real = self.grid.dtype
        dx, dy = self.grid.dx, self.grid.dy

        self.dt = real(dt)
        self.iterations = int(iterations)
        self.density_dirichlet = bool(density_dirichlet)

        # Derived coefficients
        self.density_weights = domain.diffusion_weights(density_viscosity, dt, dx, dy, real)
        self.velocity_weights = domain.diffusion_weights(velocity_viscosity, dt, dx, dy, real)
        self.poisson_weights = domain.poisson_weights(dx, dy, real)
        self._dt_dx, self._dt_dy = domain.advection_factors(dt, dx, dy, real)
        self._half_div_dx, self._half_div_dy = domain.centered_difference_factors(dx, dy, real)

        self._fields = FieldState(self.grid)
        self._density_boundary = boundary.density_policy(self.density_dirichlet)

        self.initial_density = initial_density
        self.initial_velocity = initial_velocity
        self.density_source = density_source
        self.velocity_source = velocity_source

        self._time = real(0)

    # ------------------------------------------------------------------
    # Read accessors (views are valid until the next step)
    # ------------------------------------------------------------------

    @property
    def density(self):
        """Most recent density (imax+1, jmax+1), read only."""
        return read_only(self._fields.density.previous)

    @property
    def velocity(self):
        """Most recent velocity (2, imax+1, jmax+1), read only."""
        return read_only(self._fields.velocity.previous)

    @property
    def divergence(self):
        """Divergence computed by the last projection, read only."""
        return read_only(self._fields.divergence)

    @property
    def potential(self):
        """Poisson potential computed by the last projection, read only."""
        return read_only(self._fields.potential)

    @property
    def x(self):
        return read_only(self.grid.x)

    @property
    def y(self):
        return read_only(self.grid.y)

    @property
    def time(self):
        return self._time

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self):
        """
        Seed both buffer generations from the initial-condition functions.

        The interior of the current buffers is filled from the strategies,
        boundaries are derived, velocity is projected once, and the result
        is copied into the previous buffers.
        """
        density = self._fields.density.current
        velocity = self._fields.velocity.current

        for i, j, x, y in self._interior_points():
            density[i, j] = self.initial_density(x, y, i, j)
            u, v = self.initial_velocity(x, y, i, j)
            velocity[0, i, j] = u
            velocity[1, i, j] = v

        self._density_boundary(density)
        boundary.velocity_no_slip(velocity)
        self.adjust_velocity()

        self._fields.density.synchronize()
        self._fields.velocity.synchronize()

        logger.debug("Initialized %dx%d grid (%s)", self.grid.imax, self.grid.jmax,
                     np.dtype(self.grid.dtype).name)

    def step(self):
        """Advance density and velocity by one timestep dt."""
        self.update_density_source()
        self.update_density_diffusion()
        self.update_density_advection()

        self.update_velocity_source()
        self.update_velocity_diffusion()
        self.update_velocity_advection()

        self._time = self.grid.dtype(self._time + self.dt)

    # ------------------------------------------------------------------
    # Density stages
    # ------------------------------------------------------------------

    def update_density_source(self):
        """Inject density from the source function, flooring the result at zero."""
        previous = self._fields.density.previous
        current = self._fields.density.current
        t = self._time

        for i, j, x, y in self._interior_points():
            value = previous[i, j] + self.dt * self.density_source(t, x, y, i, j)
            if value < 0:
                value = 0
            current[i, j] = value

        self._density_boundary(current)
        self._fields.density.swap()

    def update_density_diffusion(self):
        """Implicit diffusion of density by K relaxation sweeps."""
        buffers = self._fields.density
        buffers.seed_current()
        relaxation.diffuse_scalar(buffers.current, buffers.previous, self.density_weights,
                                  self.iterations, self._density_boundary)
        buffers.swap()

    def update_density_advection(self):
        """Semi-Lagrangian transport of density along the current velocity."""
        buffers = self._fields.density
        advection.advect(buffers.previous, buffers.current, self._fields.velocity.previous,
                         self._dt_dx, self._dt_dy)
        self._density_boundary(buffers.current)
        buffers.swap()

    # ------------------------------------------------------------------
    # Velocity stages
    # ------------------------------------------------------------------

    def update_velocity_source(self):
        """Add the velocity source over one timestep, then project."""
        previous = self._fields.velocity.previous
        current = self._fields.velocity.current
        t = self._time

        for i, j, x, y in self._interior_points():
            du, dv = self.velocity_source(t, x, y, i, j)
            current[0, i, j] = previous[0, i, j] + self.dt * du
            current[1, i, j] = previous[1, i, j] + self.dt * dv

        boundary.velocity_no_slip(current)
        self.adjust_velocity()
        self._fields.velocity.swap()

    def update_velocity_diffusion(self):
        """Implicit viscous diffusion of velocity, then project."""
        buffers = self._fields.velocity
        buffers.seed_current()
        relaxation.diffuse_vector(buffers.current, buffers.previous, self.velocity_weights,
                                  self.iterations, boundary.velocity_no_slip)
        self.adjust_velocity()
        buffers.swap()

    def update_velocity_advection(self):
        """Self-advection of velocity along its pre-advection state, then project."""
        buffers = self._fields.velocity
        advection.advect_vector(buffers.previous, buffers.current, buffers.previous,
                                self._dt_dx, self._dt_dy)
        boundary.velocity_no_slip(buffers.current)
        self.adjust_velocity()
        buffers.swap()

    def adjust_velocity(self):
        """Project the current velocity buffer toward zero divergence."""
        projection.project(
            self._fields.velocity.current,
            self._fields.divergence,
            self._fields.potential,
            self.poisson_weights,
            self._half_div_dx,
            self._half_div_dy,
            self.iterations,
        )

    def _interior_points(self):
        x = self.grid.x
        y = self.grid.y
        for i in range(1, self.grid.imax):
            for j in range(1, self.grid.jmax):
                yield i, j, x[i], y[j]


def build_scenario(args):
    """
    Build initial-condition and source strategies for a named scenario.

    Scenarios:
        plume: empty tank with a density source and an upward jet near the
            bottom wall
        vortex: Gaussian density blob stirred by a Gaussian-core vortex
        quiescent: Gaussian density blob diffusing in fluid at rest

    Args:
        args: Parsed command-line arguments

    Returns:
        dict: Keyword arguments for Fluid2D (initial_density, initial_velocity,
            density_source, velocity_source)
    """
    width = args.x1 - args.x0
    height = args.y1 - args.y0
    xc = args.x0 + 0.5 * width
    yc = args.y0 + 0.5 * height

    if args.scenario == "plume":
        radius = args.source_radius * width
        ys = args.y0 + 0.15 * height
        return {
            "initial_density": sources.zero_density,
            "initial_velocity": sources.zero_velocity,
            "density_source": sources.disk_density_source(
                xc, ys, radius, args.source_rate, t_stop=args.t_source
            ),
            "velocity_source": sources.jet_velocity_source(
                xc, ys, radius, args.jet_speed, angle=0.5 * np.pi,
                omega=args.jet_omega, t_stop=args.t_source
            ),
        }

    blob = sources.gaussian_density(xc, yc, 0.15 * min(width, height))

    if args.scenario == "vortex":
        return {
            "initial_density": blob,
            "initial_velocity": sources.vortex_velocity(
                xc, yc, 0.2 * min(width, height), args.vortex_strength
            ),
            "density_source": sources.zero_density_source,
            "velocity_source": sources.zero_velocity_source,
        }

    if args.scenario == "quiescent":
        return {
            "initial_density": blob,
            "initial_velocity": sources.zero_velocity,
            "density_source": sources.zero_density_source,
            "velocity_source": sources.zero_velocity_source,
        }

    raise ValueError(f"Unknown scenario '{args.scenario}'")


def build_simulator(args, dtype):
    """Construct a Fluid2D from parsed arguments and the scenario strategies."""
    return Fluid2D(
        args.x0, args.y0, args.x1, args.y1,
        args.dt, args.density_viscosity, args.velocity_viscosity,
        args.imax, args.jmax, args.iterations,
        density_dirichlet=(args.density_bc == "dirichlet"),
        dtype=dtype,
        **build_scenario(args),
    )


def setup_output(args):
    """
    Create the run directory and the snapshot file with its grid.

    Args:
        args: Parsed command-line arguments

    Returns:
        tuple: (run_dir, snapshot_file, scalars_file) as Paths
    """
    tag = (args.tag + "_") if args.tag else ""
    run_dir = pathlib.Path(args.outdir) / f"{tag}imax{args.imax}_jmax{args.jmax}_K{args.iterations}"
    run_dir.mkdir(parents=True, exist_ok=True)

    snapshot_file = run_dir / "snapshots.h5"
    scalars_file = run_dir / "scalars.h5"
    return run_dir, snapshot_file, scalars_file


def write_grid(sim, snapshot_file, args):
    """Start a fresh snapshot file holding the grid and run parameters."""
    with h5py.File(snapshot_file, "w") as h5:
        h5.create_dataset("grid/x", data=np.asarray(sim.x))
        h5.create_dataset("grid/y", data=np.asarray(sim.y))
        h5.attrs["dt"] = float(args.dt)
        h5.attrs["density_viscosity"] = float(args.density_viscosity)
        h5.attrs["velocity_viscosity"] = float(args.velocity_viscosity)
        h5.attrs["iterations"] = int(args.iterations)
        h5.attrs["density_bc"] = args.density_bc
        h5.attrs["scenario"] = args.scenario


def write_snapshot(sim, snapshot_file, step):
    """
    Append the current density and velocity to the snapshot file.

    Datasets are named by step index; the simulation time is stored as an
    attribute on each of them.

    Args:
        sim (Fluid2D): Simulator to sample
        snapshot_file (Path): HDF5 file created by write_grid
        step (int): Number of steps taken so far
    """
    with h5py.File(snapshot_file, "a") as h5:
        for name, data in (("density", sim.density), ("velocity", sim.velocity)):
            dset = h5.create_dataset(f"{name}_{step:06d}", data=np.asarray(data))
            dset.attrs["time"] = float(sim.time)
            dset.attrs["step"] = int(step)


def sample_scalars(sim):
    """Compute the scalar diagnostics of the current state."""
    dx, dy = float(sim.grid.dx), float(sim.grid.dy)
    velocity = sim.velocity
    return {
        "time": float(sim.time),
        "mass": utils.total_mass(sim.density, dx, dy),
        "max_speed": utils.compute_max_velocity(velocity),
        "divergence_l2": utils.divergence_l2(velocity, dx, dy),
        "kinetic_energy": utils.kinetic_energy(velocity, dx, dy),
    }


def write_scalars(series, scalars_file):
    """Write the sampled scalar time series as 1-D datasets."""
    with h5py.File(scalars_file, "w") as h5:
        for key, values in series.items():
            h5.create_dataset(key, data=np.asarray(values, dtype=np.float64))


def run_simulation(args, dtype):
    """
    Run a complete fluid2d simulation.

    This is the main simulation driver that:
    1. Builds the simulator and scenario strategies
    2. Initializes the fields
    3. Runs the fixed-step time integration loop
    4. Writes snapshots and scalar diagnostics

    Args:
        args: Parsed command-line arguments
        dtype: NumPy data type for simulation (np.float64 or np.float32)

    Returns:
        Path: Run directory holding snapshots.h5 and scalars.h5
    """
    sim = build_simulator(args, dtype)
    sim.initialize()

    run_dir, snapshot_file, scalars_file = setup_output(args)
    write_grid(sim, snapshot_file, args)
    write_snapshot(sim, snapshot_file, 0)

    series = {key: [value] for key, value in sample_scalars(sim).items()}
    logger.info("Initial state: mass=%.6e max|u|=%.3e", series["mass"][0], series["max_speed"][0])

    try:
        logger.info("Starting time integration (%d steps)", args.n_steps)

        for it in range(1, args.n_steps + 1):
            sim.step()

            if it % args.log_every == 0:
                sample = sample_scalars(sim)
                for key, value in sample.items():
                    series[key].append(value)

                cfl = utils.courant_number(sim.velocity, float(sim.dt),
                                           float(sim.grid.dx), float(sim.grid.dy))
                logger.info(
                    "it=%6d t=%9.4f mass=%10.3e max|u|=%10.3e div=%9.3e CFL=%7.3f",
                    it, sample["time"], sample["mass"], sample["max_speed"],
                    sample["divergence_l2"], cfl
                )

            if it % args.snap_every == 0:
                write_snapshot(sim, snapshot_file, it)

    except Exception:
        logger.exception("Exception in main loop")
        raise
    finally:
        write_scalars(series, scalars_file)

    logger.info("Simulation complete: t=%.4f, output in %s", float(sim.time), run_dir)
    return run_dir
