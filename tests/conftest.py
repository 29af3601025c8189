"""Shared test fixtures."""

from collections import deque
from collections.abc import Callable, Iterable, Iterator

import pytest

from src.sf_generator.application.service import reset_generator
from src.sf_generator.domain.layout import BitLayout


class ScriptedClock:
    """Returns scripted millisecond readings in order, then repeats the last one."""

    def __init__(self, readings: Iterable[int]) -> None:
        self._readings = deque(readings)
        if not self._readings:
            raise ValueError("ScriptedClock needs at least one reading")
        self.reads = 0

    def now_ms(self) -> int:
        self.reads += 1
        if len(self._readings) > 1:
            return self._readings.popleft()
        return self._readings[0]

    def push(self, *readings: int) -> None:
        self._readings.extend(readings)


class FakeTimer:
    """Monotonic timer that advances a fixed step on every call."""

    def __init__(self, step_s: float = 0.001) -> None:
        self.now = 0.0
        self.step_s = step_s

    def __call__(self) -> float:
        self.now += self.step_s
        return self.now


@pytest.fixture
def make_clock() -> Callable[[Iterable[int]], ScriptedClock]:
    return ScriptedClock


@pytest.fixture
def make_timer() -> Callable[..., FakeTimer]:
    return FakeTimer


@pytest.fixture
def zero_epoch_layout() -> BitLayout:
    """Default widths with epoch 0 so small scripted timestamps are valid."""
    return BitLayout(epoch_ms=0)


@pytest.fixture(autouse=True)
def _fresh_default_generator() -> Iterator[None]:
    reset_generator()
    yield
    reset_generator()
