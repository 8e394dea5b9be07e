from __future__ import annotations

import os
from typing import Callable, Iterator, Optional

import pytest

from strokes_gained.config import SGConfig, reset_config_cache
from strokes_gained.engine import StrokesGainedEngine
from strokes_gained.schemas import LieType, SGCategory, ShotData, ShotOutcome

ShotFactory = Callable[..., ShotData]


@pytest.fixture(autouse=True)
def _isolate_sg_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in list(os.environ):
        if name.startswith("SG_"):
            monkeypatch.delenv(name)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture
def config() -> SGConfig:
    return SGConfig(_env_file=None)


@pytest.fixture
def engine(config: SGConfig) -> StrokesGainedEngine:
    return StrokesGainedEngine(config)


@pytest.fixture
def make_shot() -> ShotFactory:
    def build(
        start: float,
        lie: str,
        end: float,
        end_lie: str,
        *,
        holed: bool = False,
        penalty: bool = False,
        category: Optional[SGCategory] = None,
    ) -> ShotData:
        return ShotData(
            start_distance=start,
            start_lie=LieType(lie),
            outcome=ShotOutcome(
                end_distance=end,
                end_lie=LieType(end_lie),
                holed=holed,
                penalty=penalty,
            ),
            category=category,
        )

    return build
