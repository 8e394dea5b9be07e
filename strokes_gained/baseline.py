"""Expected strokes baseline tables with per-lie linear fallbacks."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Literal, Mapping, Optional, Tuple

from .schemas import LieType, SGBaseline

_LOG = logging.getLogger(__name__)

# Putting distances are feet; everything else is yards.
PUTTING_POINTS: Tuple[Tuple[int, float], ...] = (
    (3, 1.05),
    (5, 1.15),
    (8, 1.31),
    (10, 1.41),
    (15, 1.61),
    (20, 1.78),
    (25, 1.93),
    (30, 2.07),
)

APPROACH_DISTANCES: Tuple[int, ...] = (
    0, 10, 20, 30, 40, 50, 75, 100, 125, 150, 175, 200, 225, 250,
)
FAIRWAY_EXPECTED: Tuple[float, ...] = (
    2.0, 2.1, 2.2, 2.3, 2.4, 2.5, 2.7, 2.8, 2.9, 3.0, 3.1, 3.2, 3.3, 3.4,
)
ROUGH_EXPECTED: Tuple[float, ...] = (
    2.1, 2.2, 2.3, 2.4, 2.5, 2.6, 2.8, 2.9, 3.0, 3.1, 3.2, 3.3, 3.4, 3.5,
)

TEE_POINTS: Tuple[Tuple[int, float], ...] = (
    (300, 3.8),
    (350, 4.0),
    (400, 4.2),
    (450, 4.4),
    (500, 4.6),
    (550, 4.8),
)

# (base, gain, per): expected = base + distance / per * gain
FALLBACK_FORMULAS: Dict[LieType, Tuple[float, float, float]] = {
    LieType.GREEN: (1.0, 1.2, 30.0),
    LieType.TEE: (3.5, 0.5, 100.0),
    LieType.FAIRWAY: (2.0, 0.8, 100.0),
    LieType.ROUGH: (2.1, 0.9, 100.0),
    LieType.BUNKER: (2.3, 1.0, 100.0),
    LieType.FRINGE: (1.8, 0.7, 50.0),
}
DEFAULT_FALLBACK: Tuple[float, float, float] = (2.5, 1.0, 100.0)

# (upper bound, step) pairs; distances beyond the last bound use 50.
_BUCKET_STEPS: Tuple[Tuple[float, int], ...] = ((30.0, 5), (100.0, 10), (250.0, 25))
_WIDE_BUCKET_STEP = 50

LookupSource = Literal["table", "formula"]


class UnknownBaselineSourceError(ValueError):
    """Raised when a configured baseline source has no table behind it."""


def bucket_distance(distance: float) -> int:
    """Round ``distance`` to the breakpoint granularity of its range.

    Halves round up so ``12.5`` lands on ``15`` rather than ``10``.
    """

    step = _WIDE_BUCKET_STEP
    for upper, candidate in _BUCKET_STEPS:
        if distance <= upper:
            step = candidate
            break
    return int(math.floor(distance / step + 0.5)) * step


def baseline_key(distance: float, lie: LieType | str) -> str:
    return f"{bucket_distance(distance)}_{LieType(lie).value}"


def putting_holing_percentage(distance: float) -> float:
    """Share of putts holed from ``distance`` feet."""

    if distance <= 3:
        return 0.95
    if distance <= 5:
        return 0.75
    if distance <= 8:
        return 0.50
    if distance <= 10:
        return 0.35
    if distance <= 15:
        return 0.20
    if distance <= 20:
        return 0.12
    if distance <= 25:
        return 0.08
    return 0.05


def fallback_strokes(distance: float, lie: LieType | str) -> float:
    """Linear per-lie estimate used when the table has no matching bucket."""

    base, gain, per = FALLBACK_FORMULAS.get(LieType(lie), DEFAULT_FALLBACK)
    return base + (float(distance) / per) * gain


def _validate_curve(lie: LieType, points: List[Tuple[float, float]]) -> None:
    """Ensure distances strictly increase and values never decrease."""

    for (d1, v1), (d2, v2) in zip(points, points[1:]):
        if d2 <= d1:
            raise ValueError(
                f"{lie.value} baseline distances must be strictly increasing"
            )
        if v2 < v1:
            raise ValueError(
                f"{lie.value} baseline values must not decrease with distance"
            )


@dataclass(frozen=True)
class BaselineLookup:
    distance: float
    bucket: int
    lie: LieType
    expected_strokes: float
    source: LookupSource


@dataclass(frozen=True)
class BaselineModel:
    """Immutable expected-strokes table for one baseline source.

    Lookups bucket the distance and return the curated table value when one
    exists for ``(bucket, lie)``. Otherwise the per-lie linear formula is
    used, clamped between the curated values at the neighbouring breakpoints
    of the same lie so the result never decreases with distance.
    """

    source: str
    table: Mapping[str, SGBaseline] = field(default_factory=dict)
    curves: Mapping[LieType, Tuple[Tuple[float, float], ...]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        # Read-only copies, detached from the mappings passed in.
        object.__setattr__(self, "table", MappingProxyType(dict(self.table)))
        object.__setattr__(self, "curves", MappingProxyType(dict(self.curves)))

    @classmethod
    def from_entries(
        cls, source: str, entries: Iterable[SGBaseline]
    ) -> "BaselineModel":
        table: Dict[str, SGBaseline] = {}
        by_lie: Dict[LieType, List[Tuple[float, float]]] = {}
        for entry in entries:
            table[f"{int(entry.distance)}_{entry.lie.value}"] = entry
            by_lie.setdefault(entry.lie, []).append(
                (float(entry.distance), entry.expected_strokes)
            )

        curves: Dict[LieType, Tuple[Tuple[float, float], ...]] = {}
        for lie, points in by_lie.items():
            points.sort()
            _validate_curve(lie, points)
            curves[lie] = tuple(points)

        return cls(
            source=source,
            table=table,
            curves=curves,
        )

    @classmethod
    def pga_tour(cls) -> "BaselineModel":
        entries: List[SGBaseline] = [
            SGBaseline(
                distance=distance,
                lie=LieType.GREEN,
                expected_strokes=expected,
                holing_percentage=putting_holing_percentage(distance),
            )
            for distance, expected in PUTTING_POINTS
        ]
        for distance, fairway, rough in zip(
            APPROACH_DISTANCES, FAIRWAY_EXPECTED, ROUGH_EXPECTED
        ):
            entries.append(
                SGBaseline(
                    distance=distance, lie=LieType.FAIRWAY, expected_strokes=fairway
                )
            )
            entries.append(
                SGBaseline(distance=distance, lie=LieType.ROUGH, expected_strokes=rough)
            )
        entries.extend(
            SGBaseline(distance=distance, lie=LieType.TEE, expected_strokes=expected)
            for distance, expected in TEE_POINTS
        )

        model = cls.from_entries("pga_tour", entries)
        _LOG.info(
            "initialised %d baseline data points (source=%s)", len(model), model.source
        )
        return model

    @classmethod
    def for_source(cls, source: str) -> "BaselineModel":
        try:
            factory = BASELINE_SOURCES[source]
        except KeyError:
            raise UnknownBaselineSourceError(
                f"baseline source {source!r} is not available; "
                f"known sources: {', '.join(sorted(BASELINE_SOURCES))}"
            ) from None
        return factory()

    def __len__(self) -> int:
        return len(self.table)

    def entries(self) -> List[SGBaseline]:
        return sorted(self.table.values(), key=lambda e: (e.lie.value, e.distance))

    def entry(self, distance: float, lie: LieType | str) -> Optional[SGBaseline]:
        return self.table.get(baseline_key(distance, lie))

    def _envelope(
        self, distance: float, lie: LieType
    ) -> Tuple[Optional[float], Optional[float]]:
        lower: Optional[float] = None
        upper: Optional[float] = None
        for point_distance, value in self.curves.get(lie, ()):
            if point_distance <= distance:
                lower = value
            if point_distance >= distance and upper is None:
                upper = value
        return lower, upper

    def lookup(self, distance: float, lie: LieType | str) -> BaselineLookup:
        lie_key = LieType(lie)
        bucket = bucket_distance(distance)
        entry = self.table.get(f"{bucket}_{lie_key.value}")
        if entry is not None:
            return BaselineLookup(
                distance=float(distance),
                bucket=bucket,
                lie=lie_key,
                expected_strokes=entry.expected_strokes,
                source="table",
            )

        value = fallback_strokes(distance, lie_key)
        lower, upper = self._envelope(float(distance), lie_key)
        if lower is not None:
            value = max(value, lower)
        if upper is not None:
            value = min(value, upper)
        return BaselineLookup(
            distance=float(distance),
            bucket=bucket,
            lie=lie_key,
            expected_strokes=value,
            source="formula",
        )

    def expected_strokes(self, distance: float, lie: LieType | str) -> float:
        """Expected strokes to hole out from ``distance`` on ``lie``."""

        return self.lookup(distance, lie).expected_strokes

    def holing_percentage(self, distance: float) -> float:
        # Reporting only; never feeds the strokes-gained formula.
        return putting_holing_percentage(distance)


BASELINE_SOURCES: Mapping[str, Callable[[], BaselineModel]] = MappingProxyType(
    {"pga_tour": BaselineModel.pga_tour}
)


__all__ = [
    "BASELINE_SOURCES",
    "BaselineLookup",
    "BaselineModel",
    "UnknownBaselineSourceError",
    "baseline_key",
    "bucket_distance",
    "fallback_strokes",
    "putting_holing_percentage",
]
