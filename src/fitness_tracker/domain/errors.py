"""Domain error taxonomy."""


class FitnessTrackerError(Exception):
    """Base class for errors raised by the fitness tracker."""


class NotFound(FitnessTrackerError):  # noqa: N818
    """Referenced user, event or record does not exist."""


class Unauthorized(FitnessTrackerError):  # noqa: N818
    """Actor does not own the resource being mutated."""


class ValidationError(FitnessTrackerError):
    """Malformed numeric, date or text input."""


class OracleUnavailable(FitnessTrackerError):  # noqa: N818
    """External text-completion service failed or returned garbage."""


class StoreError(FitnessTrackerError):
    """Underlying persistence failure."""
