from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, generate_latest

from .schemas import SGOutcome, SGResult

REGISTRY = CollectorRegistry()

SG_SHOTS_CALCULATED_TOTAL = Counter(
    "sg_shots_calculated_total",
    "Shots with a strokes-gained result, by category",
    ["category"],
    registry=REGISTRY,
)

SG_SHOT_ERRORS_TOTAL = Counter(
    "sg_shot_errors_total",
    "Shots rejected by the strokes-gained calculator, by error code",
    ["code"],
    registry=REGISTRY,
)


def observe_result(outcome: SGOutcome) -> None:
    """Count a single-shot outcome (``SGResult`` or ``SGError``)."""

    if isinstance(outcome, SGResult):
        SG_SHOTS_CALCULATED_TOTAL.labels(category=outcome.category.value).inc()
    else:
        SG_SHOT_ERRORS_TOTAL.labels(code=outcome.code.value).inc()


def render_latest() -> bytes:
    return generate_latest(REGISTRY)


__all__ = [
    "REGISTRY",
    "SG_SHOTS_CALCULATED_TOTAL",
    "SG_SHOT_ERRORS_TOTAL",
    "observe_result",
    "render_latest",
]
