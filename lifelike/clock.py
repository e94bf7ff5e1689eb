"""Fixed-rate driver that steps an automaton at a number of generations per second."""

import logging
import time
from typing import Callable, List

from .automaton import SparseLife, StepResult

logger = logging.getLogger(__name__)

MIN_GPS = 1
MAX_GPS = 120
DEFAULT_GPS = 10

StepListener = Callable[[SparseLife, StepResult], None]


class Scheduler:
    def __init__(self, life: SparseLife, gps: int = DEFAULT_GPS) -> None:
        self._life = life
        self._gps = MIN_GPS
        self._listeners: List[StepListener] = []
        self._running = False
        self._stop_requested = False
        self.set_speed(gps)

    @property
    def life(self) -> SparseLife:
        return self._life

    @property
    def gps(self) -> int:
        return self._gps

    @property
    def period(self) -> float:
        return 1.0 / self._gps

    @property
    def running(self) -> bool:
        return self._running

    def set_speed(self, gps: int) -> None:
        """Set generations per second, clamped to [MIN_GPS, MAX_GPS]."""
        if gps <= 0:
            raise ValueError("gps must be positive")
        self._gps = max(MIN_GPS, min(MAX_GPS, int(gps)))

    def on_step(self, listener: StepListener) -> None:
        self._listeners.append(listener)

    def stop(self) -> None:
        self._stop_requested = True

    def tick(self) -> StepResult:
        result = self._life.step()
        for listener in self._listeners:
            listener(self._life, result)
        return result

    def run(self, n: int) -> None:
        """Step ``n`` times back to back, without pacing."""
        self._stop_requested = False
        self._running = True
        try:
            for _ in range(n):
                self.tick()
                if self._stop_requested:
                    break
        finally:
            self._running = False

    def run_for(self, seconds: float) -> int:
        """Step at the configured rate for ``seconds``. Returns the number of steps taken."""
        self._stop_requested = False
        self._running = True
        steps = 0
        deadline = time.monotonic() + seconds
        try:
            while not self._stop_requested and time.monotonic() < deadline:
                start = time.monotonic()
                self.tick()
                steps += 1
                if self._stop_requested:
                    break
                sleep_time = self.period - (time.monotonic() - start)
                if sleep_time > 0:
                    time.sleep(min(sleep_time, max(0.0, deadline - time.monotonic())))
        finally:
            self._running = False
        logger.debug("Ran %d steps at %d gps", steps, self._gps)
        return steps
