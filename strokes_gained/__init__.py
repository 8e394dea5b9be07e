"""Strokes-gained calculation engine."""

from .baseline import BaselineModel, UnknownBaselineSourceError  # noqa: F401
from .classify import classify_shot  # noqa: F401
from .config import SGConfig, get_config  # noqa: F401
from .engine import StrokesGainedEngine  # noqa: F401
from .schemas import (  # noqa: F401
    LieType,
    SGBaseline,
    SGCategory,
    SGError,
    SGErrorCode,
    SGOutcome,
    SGResult,
    SGSummary,
    ShotData,
    ShotOutcome,
)
