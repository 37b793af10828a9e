from kmeans_stepper.errors import InvalidConfiguration, KMeansStepperError
from kmeans_stepper.session import KMeansState, Phase, initialize, step, reset, has_converged

__version__ = "0.1.0"
