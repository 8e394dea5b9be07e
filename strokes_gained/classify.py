"""Shot category classification."""

from __future__ import annotations

from .schemas import LieType, SGCategory, ShotData

ARG_MAX_DISTANCE = 30.0


def classify_shot(shot: ShotData) -> SGCategory:
    """Assign a category from the starting lie and distance.

    Lie is checked before distance, so a short par-3 tee shot is still
    ``OTT``.
    """

    if shot.start_lie is LieType.GREEN:
        return SGCategory.PUTT
    if shot.start_lie is LieType.TEE:
        return SGCategory.OTT
    if shot.start_distance <= ARG_MAX_DISTANCE:
        return SGCategory.ARG
    return SGCategory.APP


def resolve_category(shot: ShotData) -> SGCategory:
    return shot.category if shot.category is not None else classify_shot(shot)


__all__ = ["ARG_MAX_DISTANCE", "classify_shot", "resolve_category"]
