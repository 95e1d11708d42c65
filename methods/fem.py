# methods/fem.py
import numpy as np
from scipy.sparse import diags

from .method import Method
from utils.geometry import Grid


def build_tridiagonal(diagonal, off_diagonal, clear_boundary_columns=False):
    """
    Assemble a tridiagonal matrix row by row:
    row i holds diagonal[i] at (i, i) and off_diagonal[i] at (i, i-1) and (i, i+1).
    Rows 0 and N-1 are replaced by identity rows (Dirichlet nodes). With
    clear_boundary_columns the interior rows do not couple to the Dirichlet nodes either.
    """
    n = len(diagonal)
    diag = np.array(diagonal, dtype=float)
    lower = np.array(off_diagonal, dtype=float)
    upper = np.array(off_diagonal, dtype=float)

    # Dirichlet rows
    diag[0] = 1.0
    diag[-1] = 1.0
    upper[0] = 0.0
    lower[-1] = 0.0
    if clear_boundary_columns and n > 2:
        lower[1] = 0.0
        upper[-2] = 0.0

    # diags places lower[1:] at (i, i-1) and upper[:-1] at (i, i+1)
    diagonals = [diag, lower[1:], upper[:-1]]
    offsets = [0, -1, 1]
    return diags(diagonals, offsets, shape=(n, n), format="csr")


class FEM(Method):
    """
    Piecewise-linear finite element discretisation of the 1D diffusion equation
    on a uniform grid with Dirichlet nodes at both ends.
    """

    name = f"FEM"

    def __init__(self, grid: Grid):
        self.grid = grid
        self.dx = grid.dx

    def build_stif(self, k):
        """
        Build the $-\\div{D\\grad u}$ operator with a nodal coefficient:
        D_i * (2 u_i - u_{i-1} - u_{i+1}) / \\Delta x
        """
        k = np.asarray(k, dtype=float) * np.ones(self.grid.n_nodes)
        return build_tridiagonal(2.0 * k / self.dx, -k / self.dx)

    def build_mass(self, m=1.0):
        """
        Build the consistent mass operator:
        m_i * \\Delta x * (u_{i-1} / 6 + 2 u_i / 3 + u_{i+1} / 6)
        """
        m = np.asarray(m, dtype=float) * np.ones(self.grid.n_nodes)
        return build_tridiagonal(
            2.0 / 3.0 * self.dx * m,
            1.0 / 6.0 * self.dx * m,
            clear_boundary_columns=True,
        )
