import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .base import Optimizer
from .params import Direction

logger = logging.getLogger(__name__)


class Outcome(Enum):
    CONVERGED = "converged"
    BUDGET_EXHAUSTED = "budget_exhausted"


@dataclass(frozen=True)
class IterationRecord:
    iteration: int
    quality: int
    score: float
    # None on the iteration that landed inside the band
    direction: Optional[Direction]
    step: int


@dataclass(frozen=True)
class SearchResult:
    quality: int
    outcome: Outcome
    records: Tuple[IterationRecord, ...]

    @property
    def converged(self):
        return self.outcome is Outcome.CONVERGED

    @property
    def iterations(self):
        return len(self.records)


@dataclass
class SearchState:
    quality: int
    step: int
    last_direction: Optional[Direction] = None
    iteration: int = 0


class StepHalvingSearch(Optimizer):
    """
    Damped search for a quality whose DSSIM lands inside the target band.

    The quality moves by `step` toward the band on every miss. The step is
    halved (floor, never below 1) only when the direction flips, e.g.
        q=50 too different -> +20 -> q=70 too similar -> step halves to 10
        q=50 too different -> +10 -> q=60 too different -> step stays 10
    The first iteration has no previous direction and never halves.
    """

    def optimize(self) -> SearchResult:
        config = self.config
        band = config.band
        state = SearchState(quality=config.initial_quality, step=config.initial_step)
        records = []

        while True:
            score = self.evaluator.evaluate(state.quality)
            direction = band.classify(score)

            if direction is None:
                records.append(
                    IterationRecord(state.iteration, state.quality, score, None, state.step)
                )
                logger.info(
                    "iteration %d || dssim: %s quality: %d",
                    state.iteration, score, state.quality,
                )
                return SearchResult(state.quality, Outcome.CONVERGED, tuple(records))

            if state.last_direction is not None and direction is not state.last_direction:
                state.step = max(1, state.step // 2)

            logger.info(
                "iteration %d || dssim: %s quality: %d step: %s%d",
                state.iteration, score, state.quality, direction.value, state.step,
            )
            records.append(
                IterationRecord(state.iteration, state.quality, score, direction, state.step)
            )

            state.quality = self._clamp(state.quality + direction.sign * state.step)
            state.last_direction = direction
            state.iteration += 1

            if state.iteration >= config.max_iterations:
                logger.warning(
                    "No quality inside [%s, %s) after %d iterations; stopping at %d",
                    band.lower, band.upper, state.iteration, state.quality,
                )
                return SearchResult(
                    state.quality, Outcome.BUDGET_EXHAUSTED, tuple(records)
                )

    def _clamp(self, quality):
        bounds = self.config.quality_bounds
        if bounds is None:
            return quality
        low, high = bounds
        return max(low, min(high, quality))
