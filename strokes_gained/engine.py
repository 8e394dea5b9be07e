"""Pure strokes-gained computation: single shots, category helpers, summaries."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic import ValidationError

from .baseline import BaselineModel
from .classify import classify_shot, resolve_category
from .config import SGConfig, get_config
from .metrics import observe_result
from .schemas import (
    LieType,
    SGCategory,
    SGError,
    SGErrorCode,
    SGOutcome,
    SGResult,
    SGSummary,
    ShotData,
)

_LOG = logging.getLogger(__name__)

# Leave assumed for a missed putt when the caller gives no end distance.
MISSED_PUTT_LEAVE = 3.0


def _penalty_strokes(penalty: bool) -> int:
    return 1 if penalty else 0


class StrokesGainedEngine:
    """Strokes gained against one immutable baseline.

    The engine holds no mutable state after construction, so a single
    instance can be shared between threads. Shot-level failures are
    returned as ``SGError`` values and never raised.
    """

    def __init__(
        self,
        config: Optional[SGConfig] = None,
        *,
        baseline: Optional[BaselineModel] = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self.baseline = (
            baseline
            if baseline is not None
            else BaselineModel.for_source(self.config.baseline_source)
        )
        if self.config.use_conditions_adjustment:
            _LOG.warning("conditions adjustment is not implemented; ignoring")
        if self.config.use_course_adjustment:
            _LOG.warning("course adjustment is not implemented; ignoring")

    @property
    def precision(self) -> int:
        return self.config.rounding_precision

    def round_value(self, value: float) -> float:
        """Round to the configured precision, ties away from zero."""

        step = Decimal(1).scaleb(-self.precision)
        return float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))

    def expected_strokes(self, distance: float, lie: LieType | str) -> float:
        return self.baseline.expected_strokes(distance, lie)

    def classify_shot(self, shot: ShotData) -> SGCategory:
        return classify_shot(shot)

    @staticmethod
    def validate_shot(shot: ShotData) -> Optional[str]:
        """Return why ``shot`` cannot be scored, or ``None`` when it can.

        A ball may not finish farther from the hole than it started, even
        with a penalty.
        """

        start = shot.start_distance
        end = shot.outcome.end_distance
        if not start >= 0:
            return f"start distance must be non-negative (got {start})"
        if not end >= 0:
            return f"end distance must be non-negative (got {end})"
        if start < end:
            return f"end distance {end} exceeds start distance {start}"
        return None

    def _compute(self, shot: ShotData) -> SGResult:
        category = resolve_category(shot)
        start_expected = self.baseline.expected_strokes(
            shot.start_distance, shot.start_lie
        )
        if shot.outcome.holed:
            end_expected = 0.0
        else:
            end_expected = self.baseline.expected_strokes(
                shot.outcome.end_distance, shot.outcome.end_lie
            )
        shot_taken = 1 + _penalty_strokes(shot.outcome.penalty)
        strokes_gained = start_expected - end_expected - shot_taken

        return SGResult(
            category=category,
            strokes_gained=self.round_value(strokes_gained),
            start_expected=self.round_value(start_expected),
            end_expected=self.round_value(end_expected),
            shot_taken=shot_taken,
        )

    def calculate_single_shot(self, shot: ShotData | Mapping[str, Any]) -> SGOutcome:
        """Score one shot, returning either an ``SGResult`` or an ``SGError``."""

        if not isinstance(shot, ShotData):
            try:
                shot = ShotData.model_validate(shot)
            except ValidationError as exc:
                outcome: SGOutcome = SGError(
                    code=SGErrorCode.INVALID_SHOT_DATA,
                    message=(
                        f"malformed shot record: {exc.error_count()} validation error(s)"
                    ),
                )
                observe_result(outcome)
                return outcome

        reason = self.validate_shot(shot)
        if reason is not None:
            outcome = SGError(
                code=SGErrorCode.INVALID_SHOT_DATA, message=reason, shot_data=shot
            )
        else:
            try:
                outcome = self._compute(shot)
            except Exception as exc:
                _LOG.warning("strokes-gained calculation failed", exc_info=True)
                outcome = SGError(
                    code=SGErrorCode.CALCULATION_ERROR,
                    message=str(exc) or exc.__class__.__name__,
                    shot_data=shot,
                )
        observe_result(outcome)
        return outcome

    def _category_shot(
        self,
        category: SGCategory,
        distance: float,
        start_lie: LieType | str,
        end_distance: float,
        end_lie: LieType | str,
        holed: bool,
    ) -> float:
        shot = {
            "start_distance": distance,
            "start_lie": start_lie,
            "outcome": {
                "end_distance": end_distance,
                "end_lie": end_lie,
                "holed": holed,
                "penalty": False,
            },
            "category": category,
        }
        outcome = self.calculate_single_shot(shot)
        if isinstance(outcome, SGResult):
            return outcome.strokes_gained
        return 0.0

    def calculate_sg_ott(
        self,
        distance: float,
        start_lie: LieType | str,
        end_distance: float,
        end_lie: LieType | str,
        holed: bool = False,
    ) -> float:
        return self._category_shot(
            SGCategory.OTT, distance, start_lie, end_distance, end_lie, holed
        )

    def calculate_sg_app(
        self,
        distance: float,
        start_lie: LieType | str,
        end_distance: float,
        end_lie: LieType | str,
        holed: bool = False,
    ) -> float:
        return self._category_shot(
            SGCategory.APP, distance, start_lie, end_distance, end_lie, holed
        )

    def calculate_sg_arg(
        self,
        distance: float,
        start_lie: LieType | str,
        end_distance: float,
        end_lie: LieType | str,
        holed: bool = False,
    ) -> float:
        return self._category_shot(
            SGCategory.ARG, distance, start_lie, end_distance, end_lie, holed
        )

    def calculate_sg_putt(
        self,
        distance: float,
        holed: bool = False,
        end_distance: Optional[float] = None,
    ) -> float:
        """Strokes gained for a putt of ``distance`` feet.

        A miss without an explicit ``end_distance`` is assumed to finish
        ``MISSED_PUTT_LEAVE`` feet closer.
        """

        if end_distance is None:
            end_distance = 0.0 if holed else max(0.0, distance - MISSED_PUTT_LEAVE)
        return self._category_shot(
            SGCategory.PUTT,
            distance,
            LieType.GREEN,
            end_distance,
            LieType.GREEN,
            holed,
        )

    def calculate_summary(
        self, shots: Iterable[ShotData | Mapping[str, Any]]
    ) -> SGSummary:
        """Fold shots into per-category and total strokes gained.

        Shots that produce an ``SGError`` are skipped and not counted in
        ``shots_analyzed``. ``total`` is the sum of the rounded categories.
        """

        totals: Dict[SGCategory, float] = {category: 0.0 for category in SGCategory}
        analyzed = 0
        skipped = 0
        for shot in shots:
            outcome = self.calculate_single_shot(shot)
            if isinstance(outcome, SGError):
                skipped += 1
                continue
            totals[outcome.category] += outcome.strokes_gained
            analyzed += 1

        if skipped:
            _LOG.debug("summary skipped %d invalid shot(s)", skipped)

        ott = self.round_value(totals[SGCategory.OTT])
        app = self.round_value(totals[SGCategory.APP])
        arg = self.round_value(totals[SGCategory.ARG])
        putt = self.round_value(totals[SGCategory.PUTT])
        return SGSummary(
            total=ott + app + arg + putt,
            ott=ott,
            app=app,
            arg=arg,
            putt=putt,
            shots_analyzed=analyzed,
        )

    def has_minimum_shots(self, summary: SGSummary) -> bool:
        return summary.shots_analyzed >= self.config.min_shots_for_calculation


__all__ = ["MISSED_PUTT_LEAVE", "StrokesGainedEngine"]
