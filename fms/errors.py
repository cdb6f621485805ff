# fms/errors.py


class SimulationError(ValueError):
    """Base class for everything the simulator refuses to do."""


class ConfigurationError(SimulationError):
    """Duplicate names, unknown capabilities and similar definition mistakes."""


class PreconditionError(SimulationError):
    """The configuration is not complete enough to start a run."""
