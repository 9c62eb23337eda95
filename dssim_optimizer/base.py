from abc import ABC, abstractmethod
from typing import List

from .params import SearchConfig


class QualityEvaluator(ABC):
    """Scores a candidate quality. Hides the encoder/convert/dssim pipeline."""

    @abstractmethod
    def evaluate(self, quality: int) -> float:
        pass

    @abstractmethod
    def reset(self):
        pass


class Encoder(ABC):
    """One JPEG compression backend, driven through an external command."""

    name = None

    def __init__(self, executable: str = None, timeout: float = 120.0):
        self.executable = executable or self.default_executable
        self.timeout = timeout

    @property
    @abstractmethod
    def default_executable(self) -> str:
        pass

    @abstractmethod
    def command(self, input_path: str, quality: int) -> List[str]:
        pass

    @abstractmethod
    def compress(self, input_path: str, quality: int) -> bytes:
        pass


class Optimizer(ABC):
    """Base class for quality search strategies."""

    def __init__(self, evaluator: QualityEvaluator, config: SearchConfig):
        self.evaluator = evaluator
        self.config = config

    @abstractmethod
    def optimize(self):
        pass
