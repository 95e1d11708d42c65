# utils/time_parameters.py
# utility class that contains the time step, the number of time steps and the time at each step

from dataclasses import dataclass
import numbers
import numpy as np
import logging

from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class TimeParameters:
    """
    Class that contains the time step size, the number of time steps and the time values of the committed states.
    """

    time_step: float
    num_time_steps: int

    def __post_init__(self):
        """
        Validate the time parameters and build the time values.
        """
        if isinstance(self.time_step, bool) or not isinstance(self.time_step, numbers.Real):
            raise ConfigurationError(
                f"Time step must be a real number, got {self.time_step!r}."
            )
        if not np.isfinite(self.time_step) or self.time_step <= 0.0:
            raise ConfigurationError(
                f"Time step must be positive and finite, got {self.time_step}."
            )
        if isinstance(self.num_time_steps, bool) or not isinstance(
            self.num_time_steps, numbers.Integral
        ):
            raise ConfigurationError(
                f"Number of time steps must be an integer, got {self.num_time_steps!r}."
            )
        if self.num_time_steps < 0:
            raise ConfigurationError(
                f"Number of time steps must be non-negative, got {self.num_time_steps}."
            )

        # time of the initial state followed by the time after each step
        self.time_values = self.time_step * np.arange(self.num_time_steps + 1)
        self.total_time = self.time_step * self.num_time_steps

        logger.info("Time parameters initialized.")
