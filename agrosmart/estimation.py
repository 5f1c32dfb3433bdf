"""Debounced harvest-date estimation for the Add Crop form.

Each input change bumps a generation counter and re-arms a short timer.  When
the timer fires the estimate runs in the timer thread; its result is committed
only if the generation is still the one it was started for.  Stale results are
dropped on arrival, in-flight requests are never cancelled.
"""

import logging
import threading
from typing import Callable

from .harvest import fallback_harvest_date

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3

Estimator = Callable[[str, str, str], str]


def _local_estimate(name: str, sowing_date: str) -> str:
    try:
        return fallback_harvest_date(name, sowing_date)
    except ValueError:
        return ""


class HarvestDateEstimator:
    def __init__(self, estimate: Estimator, debounce_seconds: float = 0.5, default_location: str = "India"):
        self._estimate = estimate
        self.debounce_seconds = debounce_seconds
        self.default_location = default_location

        self._cond = threading.Condition()
        self._generation = 0
        self._timer: threading.Timer | None = None
        self._pending = False
        self._harvest_date = ""

    # ----- state -----

    @property
    def generation(self) -> int:
        with self._cond:
            return self._generation

    @property
    def pending(self) -> bool:
        with self._cond:
            return self._pending

    @property
    def harvest_date(self) -> str:
        with self._cond:
            return self._harvest_date

    @property
    def ready(self) -> bool:
        """True once a harvest date exists and nothing newer is on its way."""
        with self._cond:
            return bool(self._harvest_date) and not self._pending

    # ----- triggers -----

    def inputs_changed(self, name: str, sowing_date: str, location: str = "") -> int:
        """Register new form inputs; returns the generation they belong to."""
        name = (name or "").strip()
        with self._cond:
            self._generation += 1
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

            if len(name) < MIN_NAME_LENGTH or not sowing_date:
                if not name:
                    self._harvest_date = ""
                self._pending = False
                self._cond.notify_all()
                return generation

            self._pending = True
            self._timer = threading.Timer(
                self.debounce_seconds,
                self._run,
                args=(generation, name, sowing_date, location or self.default_location),
            )
            self._timer.daemon = True
            self._timer.start()
        return generation

    def set_harvest_date(self, value: str) -> None:
        """Overwrite the date directly; anything still pending is invalidated."""
        with self._cond:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._harvest_date = value
            self._pending = False
            self._cond.notify_all()

    def _run(self, generation: int, name: str, sowing_date: str, location: str) -> None:
        if generation != self.generation:
            return
        try:
            result = self._estimate(name, sowing_date, location)
        except Exception:
            logger.exception("Harvest estimate for %r failed", name)
            result = _local_estimate(name, sowing_date)
        self.commit(generation, result)

    def commit(self, generation: int, result: str) -> bool:
        """Store *result* if *generation* is still current; report whether it was kept."""
        with self._cond:
            if generation != self._generation:
                logger.debug("Discarding stale harvest estimate (gen %d, now %d)", generation, self._generation)
                return False
            self._harvest_date = result
            self._pending = False
            self._cond.notify_all()
            return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no estimate is pending; False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: not self._pending, timeout=timeout)
