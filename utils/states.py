# utils/states.py

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class DiffusionState:
    x: np.ndarray  # Node coordinates [m]
    u: np.ndarray  # Solution value at each node
    step: int  # Number of committed time steps
    time: float  # Time of the state [s]

    def nodal_values(self):
        """
        Iterate over (index, coordinate, value) for every node.
        """
        for i, (x_i, u_i) in enumerate(zip(self.x, self.u)):
            yield i, float(x_i), float(u_i)
