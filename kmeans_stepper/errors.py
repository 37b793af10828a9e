class KMeansStepperError(Exception):
    """Base class for errors raised by kmeans_stepper."""


class InvalidConfiguration(KMeansStepperError, ValueError):
    """Raised when a session cannot start with the given settings,
    e.g. fewer points than clusters or a palette that is too short."""
