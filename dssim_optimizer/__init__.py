from .params import Direction, TargetBand, SearchConfig, ToolPaths
from .base import QualityEvaluator, Encoder, Optimizer
from .encoders import ENCODERS, JpegoptimEncoder, MozjpegEncoder, get_encoder
from .cost import DssimEvaluator
from .algorithms import IterationRecord, Outcome, SearchResult, StepHalvingSearch
from .errors import (
    DssimOptimizerError,
    ConfigurationError,
    EvaluationError,
    EncoderError,
    ConversionError,
    MetricError,
)

__all__ = [
    "Direction",
    "TargetBand",
    "SearchConfig",
    "ToolPaths",
    "QualityEvaluator",
    "Encoder",
    "Optimizer",
    "ENCODERS",
    "JpegoptimEncoder",
    "MozjpegEncoder",
    "get_encoder",
    "DssimEvaluator",
    "IterationRecord",
    "Outcome",
    "SearchResult",
    "StepHalvingSearch",
    "DssimOptimizerError",
    "ConfigurationError",
    "EvaluationError",
    "EncoderError",
    "ConversionError",
    "MetricError",
]
