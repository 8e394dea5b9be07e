"""Pydantic models representing strokes-gained shots, results and summaries."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LieType(str, Enum):
    TEE = "tee"
    FAIRWAY = "fairway"
    ROUGH = "rough"
    BUNKER = "bunker"
    FRINGE = "fringe"
    GREEN = "green"
    HAZARD = "hazard"


class SGCategory(str, Enum):
    OTT = "OTT"
    APP = "APP"
    ARG = "ARG"
    PUTT = "PUTT"


class SGErrorCode(str, Enum):
    INVALID_SHOT_DATA = "INVALID_SHOT_DATA"
    CALCULATION_ERROR = "CALCULATION_ERROR"


class ShotOutcome(BaseModel):
    """Where the ball finished after a shot."""

    end_distance: float = Field(
        validation_alias=AliasChoices("end_distance", "endDistance")
    )
    end_lie: LieType = Field(validation_alias=AliasChoices("end_lie", "endLie"))
    holed: bool = False
    penalty: bool = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ShotData(BaseModel):
    """An individual shot observation used to compute strokes gained.

    Distances are deliberately unconstrained here: impossible values are
    reported by the calculator as ``INVALID_SHOT_DATA`` instead of failing
    validation at the edge.
    """

    start_distance: float = Field(
        validation_alias=AliasChoices("start_distance", "startDistance")
    )
    start_lie: LieType = Field(
        validation_alias=AliasChoices("start_lie", "startLie")
    )
    outcome: ShotOutcome
    category: Optional[SGCategory] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SGBaseline(BaseModel):
    """One curated point of a baseline table."""

    distance: float
    lie: LieType
    expected_strokes: float
    holing_percentage: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class SGResult(BaseModel):
    """Per-shot strokes-gained value and the lookups it was derived from."""

    kind: Literal["result"] = "result"
    category: SGCategory
    strokes_gained: float
    start_expected: float
    end_expected: float
    shot_taken: int

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return True


class SGError(BaseModel):
    kind: Literal["error"] = "error"
    code: SGErrorCode
    message: str
    shot_data: Optional[ShotData] = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return False


SGOutcome = Annotated[Union[SGResult, SGError], Field(discriminator="kind")]


class SGSummary(BaseModel):
    """Strokes gained aggregated over a sequence of shots."""

    total: float = 0.0
    ott: float = Field(default=0.0, alias="OTT")
    app: float = Field(default=0.0, alias="APP")
    arg: float = Field(default=0.0, alias="ARG")
    putt: float = Field(default=0.0, alias="PUTT")
    shots_analyzed: int = Field(
        default=0, validation_alias=AliasChoices("shots_analyzed", "shotsAnalyzed")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def by_category(self) -> Dict[SGCategory, float]:
        return {
            SGCategory.OTT: self.ott,
            SGCategory.APP: self.app,
            SGCategory.ARG: self.arg,
            SGCategory.PUTT: self.putt,
        }


__all__ = [
    "LieType",
    "SGBaseline",
    "SGCategory",
    "SGError",
    "SGErrorCode",
    "SGOutcome",
    "SGResult",
    "SGSummary",
    "ShotData",
    "ShotOutcome",
]
