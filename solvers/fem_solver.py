# solvers/fem_solver.py

import warnings
import numpy as np
import logging
from scipy.linalg import LinAlgError, qr, solve_triangular

from methods.fem import FEM
from physics.diffusion import DiffusionModel
from utils.errors import ConfigurationError, InstabilityWarning, SingularSystemError
from utils.geometry import Grid
from utils.states import DiffusionState
from utils.time_parameters import TimeParameters

logger = logging.getLogger(__name__)

# MAGIC CONSTANTS
RESIDUAL_TOLERANCE = 1e-8  # relative residual accepted for the linear solve


class FEMSolver:
    """
    Finite element solver of du/dt = d/dx(D(u) du/dx) on a uniform 1D grid.

    The mass matrix is built and factorized once. Every step the stiffness
    matrix is rebuilt from the last committed solution (the coefficient is
    lagged), the system M u_new = M u - dt K u is solved and the boundary
    values are imposed on u_new before it is committed.

    The scheme is explicit in the diffusion operator: it is stable only for dt
    small compared with dx^2 / D. This is not enforced, see stability_limit().

    The mass matrix is factorized as a dense N x N array, so memory grows as
    N^2 and construction time as N^3.
    """

    def __init__(
        self,
        grid: Grid,
        time_params: TimeParameters,
        model: DiffusionModel,
        method=None,
        initial_solution=None,
        residual_tolerance: float = RESIDUAL_TOLERANCE,
    ):
        self.grid = grid
        self.time_params = time_params
        self.model = model
        self.method = method if method is not None else FEM(grid)
        self.residual_tolerance = residual_tolerance

        self.n_nodes = self.grid.n_nodes
        self.dt = self.time_params.time_step
        self.nt = self.time_params.num_time_steps

        # Initialize state
        if initial_solution is None:
            self._u = np.ones(self.n_nodes)
        else:
            u0 = np.array(initial_solution, dtype=float)
            if u0.shape != (self.n_nodes,):
                raise ConfigurationError(
                    f"Initial solution has shape {u0.shape}, expected ({self.n_nodes},)."
                )
            self._u = u0
        self.current_step = 0
        self._instability_reported = False

        self._M = self.assemble_mass_matrix()
        self._factorize_mass_matrix()

        limit = self.stability_limit()
        if self.dt > limit:
            logger.warning(
                f"Time step {self.dt} exceeds the explicit stability estimate {limit:.3e}; "
                "the solution may diverge."
            )
        logger.info(
            f"Solver ready: {self.n_nodes} nodes, dx={self.grid.dx}, dt={self.dt}, nt={self.nt}"
        )

    def assemble_mass_matrix(self):
        """
        Assemble the constant mass matrix (identity rows and columns at the Dirichlet nodes).
        """
        return self.method.build_mass()

    def assemble_stiffness_matrix(self):
        """
        Assemble the stiffness matrix for the current solution.
        """
        return self.model.assemble_stiffness_matrix(self._u, self.method)

    def apply_boundary_conditions(self, u_new):
        self.model.apply_boundary_conditions(u_new)

    def _factorize_mass_matrix(self):
        """
        Column-pivoted QR factorization M P = Q R, reused by every step.
        """
        self._Q, self._R, self._P = qr(self._M.toarray(), pivoting=True)
        r_diag = np.abs(np.diag(self._R))
        tol = r_diag.max() * self.n_nodes * np.finfo(float).eps
        self._rank = int(np.sum(r_diag > tol))
        if self._rank < self.n_nodes:
            logger.warning(
                f"Mass matrix is rank deficient (rank {self._rank} of {self.n_nodes})."
            )
        logger.debug("Mass matrix factorized.")

    def _solve_linear_system(self, rhs, step):
        """
        Solve M x = rhs with the cached factorization and check the residual.
        """
        if self._rank < self.n_nodes:
            raise SingularSystemError(
                step,
                np.inf,
                f"mass matrix is rank deficient (rank {self._rank} of {self.n_nodes})",
            )
        try:
            y = solve_triangular(self._R, self._Q.T @ rhs, check_finite=False)
        except LinAlgError as e:
            raise SingularSystemError(step, np.inf, str(e)) from e
        x = np.empty_like(y)
        x[self._P] = y

        r = self._M @ x - rhs
        if not (np.all(np.isfinite(rhs)) and np.all(np.isfinite(r))):
            # diverged state, reported by _check_stability
            return x
        scale = np.max(np.abs(rhs))
        if scale > 0.0:
            residual = np.linalg.norm(r / scale) / np.linalg.norm(rhs / scale)
        else:
            residual = np.linalg.norm(r)
        if residual > self.residual_tolerance:
            raise SingularSystemError(step, residual, "residual above tolerance")
        return x

    def _check_stability(self, u_new, step):
        if self._instability_reported or np.all(np.isfinite(u_new)):
            return
        self._instability_reported = True
        message = (
            f"Non-finite values in the solution at step {step}; "
            f"the time step {self.dt} is likely above the stability limit."
        )
        logger.warning(message)
        warnings.warn(message, InstabilityWarning, stacklevel=3)

    def stability_limit(self) -> float:
        """
        Estimate of the largest stable time step, dx^2 / (6 max D(u)), for the current solution.
        """
        D = np.max(np.abs(self.model.diffusion_coefficient(self._u)))
        if D == 0.0:
            return np.inf
        return self.grid.dx**2 / (6.0 * D)

    @property
    def done(self) -> bool:
        return self.current_step >= self.nt

    def step(self):
        """
        Make one time step and commit the new solution.
        """
        if self.done:
            raise RuntimeError(
                f"All {self.nt} time steps have already been made."
            )
        K = self.assemble_stiffness_matrix()
        rhs = self._M @ self._u - self.dt * (K @ self._u)
        u_new = self._solve_linear_system(rhs, self.current_step)
        self.apply_boundary_conditions(u_new)
        self._check_stability(u_new, self.current_step)
        self._u = u_new
        self.current_step += 1
        logger.debug(f"Time step {self.current_step} completed.")

    def solve(self):
        """
        Run the remaining time steps and return the final state.
        """
        if self.done:
            logger.info("Solver already completed, nothing to do.")
            return self.result
        for _ in range(self.current_step, self.nt):
            self.step()
        logger.info(f"Solved {self.nt} time steps, final time {self.time_params.total_time}.")
        return self.result

    @property
    def solution(self) -> np.ndarray:
        view = self._u.view()
        view.flags.writeable = False
        return view

    @property
    def result(self) -> DiffusionState:
        return DiffusionState(
            x=self.grid.x,
            u=self.solution,
            step=self.current_step,
            time=self.time_params.time_values[self.current_step],
        )
