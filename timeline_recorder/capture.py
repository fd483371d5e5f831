"""
Capture engine: samples live object state on every elapsed-time tick.
"""

from numbers import Real
import logging
import math

from .errors import InvalidElapsedTime
from .store import SampleStore, read_property

logger = logging.getLogger(__name__)


class CaptureEngine:
    """Appends one sample per tracked property, plus a timestamp, per tick."""

    def __init__(self, store: SampleStore):
        self.store = store

    def on_elapsed(self, elapsed: float):
        """
        Capture the current state of every tracked object.

        Args:
            elapsed: Time elapsed since the previous tick (finite, non-negative)
        """
        if isinstance(elapsed, bool) or not isinstance(elapsed, Real):
            raise InvalidElapsedTime(elapsed)
        if not math.isfinite(elapsed) or elapsed < 0:
            raise InvalidElapsedTime(elapsed)

        store = self.store
        index = store.sample_index

        # Read everything first so a failing read leaves the series aligned
        samples = [
            (series, read_property(tracked.recorded_object, name))
            for tracked in store
            for name, series in tracked.series.items()
        ]
        for series, value in samples:
            series.store(index, value)

        store.playhead += elapsed
        store.append_timestamp(index, store.playhead)
        store.sample_index = index + 1

        logger.debug(f"Captured sample {index} at t={store.playhead}")
