# physics/diffusion.py

from abc import ABC, abstractmethod
from dataclasses import dataclass
import numpy as np
import logging
import methods.method as Method
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class DiffusionParameters:
    a: float = 1.0  # Constant part of the diffusion coefficient
    b: float = 0.5  # Slope of the diffusion coefficient with respect to u
    left_value: float = 1.0  # Dirichlet value at x = 0
    right_value: float = 1.0  # Dirichlet value at x = L


class DiffusionModel(ABC):
    """
    Physics of a diffusion problem: the stiffness operator for the current
    solution and the boundary conditions imposed on a new solution.
    """

    @abstractmethod
    def diffusion_coefficient(self, u):
        pass

    @abstractmethod
    def assemble_stiffness_matrix(self, u: np.ndarray, method: Method):
        pass

    @abstractmethod
    def apply_boundary_conditions(self, u_new: np.ndarray) -> None:
        pass


class NonlinearDiffusionModel(DiffusionModel):
    """
    Diffusion coefficient linear in the solution, D(u) = a + b * u, with
    fixed Dirichlet values at both ends of the domain.
    """

    def __init__(self, parameters: DiffusionParameters = None):
        self.params = parameters if parameters is not None else DiffusionParameters()

    def diffusion_coefficient(self, u):
        return self.params.a + self.params.b * u

    def assemble_stiffness_matrix(self, u, method):
        """
        Build the stiffness operator with the coefficient evaluated node by node
        at the current (previous step) solution.
        """
        D = self.diffusion_coefficient(np.asarray(u, dtype=float))
        stif = method.build_stif(D)
        logger.debug("Stiffness matrix assembled for the nonlinear diffusion model.")
        return stif

    def apply_boundary_conditions(self, u_new):
        u_new[0] = self.params.left_value
        u_new[-1] = self.params.right_value


class ConstantDiffusionModel(DiffusionModel):
    """
    Linear heat equation with a constant diffusivity.
    """

    def __init__(self, diffusivity: float = 1.0, left_value: float = 1.0, right_value: float = 1.0):
        if not np.isfinite(diffusivity) or diffusivity <= 0.0:
            raise ConfigurationError(
                f"Diffusivity must be positive and finite, got {diffusivity}."
            )
        self.diffusivity = diffusivity
        self.left_value = left_value
        self.right_value = right_value

    def diffusion_coefficient(self, u):
        return self.diffusivity * np.ones_like(u, dtype=float)

    def assemble_stiffness_matrix(self, u, method):
        return method.build_stif(self.diffusion_coefficient(np.asarray(u, dtype=float)))

    def apply_boundary_conditions(self, u_new):
        u_new[0] = self.left_value
        u_new[-1] = self.right_value
