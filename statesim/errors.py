class StateSimError(Exception):
    """Base class for every error raised by the simulator."""


class InvalidQubitIndex(StateSimError, IndexError):
    """A qubit argument is outside [0, n) or not an integer."""


class InvalidCircuitParameters(StateSimError, ValueError):
    """Register size, circuit depth or shot count cannot be simulated."""


class NumericDrift(StateSimError, ArithmeticError):
    """The Born-rule weights no longer sum to one."""
