"""Exception hierarchy for dssim_optimizer.

DssimOptimizerError is the root so callers can catch broad categories
or specific types.
"""


class DssimOptimizerError(Exception):
    """Root exception for the package."""


class ConfigurationError(DssimOptimizerError):
    """Invalid run configuration: unknown encoder, malformed band, bad budget."""


class EvaluationError(DssimOptimizerError):
    """A single quality evaluation failed. Aborts the whole search."""


class EncoderError(EvaluationError):
    """The external JPEG encoder failed or produced no output."""


class ConversionError(EvaluationError):
    """Converting the original or a candidate to PNG failed."""


class MetricError(EvaluationError):
    """dssim failed or printed something that is not a score."""
