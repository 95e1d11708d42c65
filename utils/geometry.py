# utils/geometry.py
# a class that contains the uniform one-dimensional grid of the finite element problem

from dataclasses import dataclass, field
import numbers
import numpy as np
import logging

from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grid:
    n_nodes: int
    length: float
    dx: float = field(init=False)
    x: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.n_nodes, bool) or not isinstance(self.n_nodes, numbers.Integral):
            raise ConfigurationError(
                f"Number of nodes must be an integer, got {self.n_nodes!r}."
            )
        if self.n_nodes < 2:
            raise ConfigurationError(
                f"At least two nodes are required, got {self.n_nodes}."
            )
        if isinstance(self.length, bool) or not isinstance(self.length, numbers.Real):
            raise ConfigurationError(
                f"Domain length must be a real number, got {self.length!r}."
            )
        if not np.isfinite(self.length) or self.length <= 0.0:
            raise ConfigurationError(
                f"Domain length must be positive and finite, got {self.length}."
            )
        dx = self.length / (self.n_nodes - 1)
        x = np.arange(self.n_nodes) * dx
        x.flags.writeable = False
        # frozen dataclass, derived fields are set through object.__setattr__
        object.__setattr__(self, "dx", dx)
        object.__setattr__(self, "x", x)
        logger.debug(f"Grid initialized: {self.n_nodes} nodes, dx={dx}")
