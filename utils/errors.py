# utils/errors.py


class ConfigurationError(ValueError):
    """Invalid construction parameters (grid, time stepping or initial state)."""


class SingularSystemError(RuntimeError):
    """
    The linear system of a time step could not be solved reliably.
    """

    def __init__(self, step: int, residual: float, reason: str = ""):
        self.step = step
        self.residual = residual
        message = f"Linear solve failed at step {step} (residual norm {residual:.3e})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InstabilityWarning(RuntimeWarning):
    pass
