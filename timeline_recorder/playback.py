"""
Playback engine: reconstructs recorded state at an absolute timeline position.

Each call brackets the requested position between two adjacent samples,
starting the search from the bracket found by the previous call, so smooth
forward playback only ever moves the cursor by a step or two.
"""

from numbers import Number, Real
from typing import Any, Tuple
import logging
import math

import numpy as np

from .errors import DegenerateInterval, EmptyTimeline, InvalidPosition
from .store import SampleStore, SampleType, write_property

logger = logging.getLogger(__name__)


def blend(left: Any, right: Any, t: float, u: float) -> Any:
    """
    Weighted sum t * left + u * right.

    Numbers blend directly. Sequences and arrays blend element-wise and keep
    the container type of the left sample.
    """
    if isinstance(left, Number) and isinstance(right, Number):
        return t * left + u * right

    mixed = t * np.asarray(left, dtype=float) + u * np.asarray(right, dtype=float)
    if isinstance(left, np.ndarray):
        return mixed
    if isinstance(left, tuple):
        return tuple(mixed.tolist())
    return mixed.tolist()


class PlaybackEngine:
    """Writes interpolated samples into every tracked object's played reference."""

    def __init__(self, store: SampleStore):
        self.store = store

    def seek(self, position: float) -> Tuple[int, float]:
        """
        Find the sample pair bracketing a position.

        Moves the store cursor to the left sample of the bracket. Positions
        outside the recording are clamped to its first or last timestamp.

        Returns:
            (index of the left sample, clamped position)
        """
        if isinstance(position, bool) or not isinstance(position, Real) or not math.isfinite(position):
            raise InvalidPosition(position)

        store = self.store
        count = store.sample_count
        if count < 2:
            raise EmptyTimeline(count)

        last = count - 1
        ts = store.timestamp_at
        cursor = min(max(store.sample_index, 0), last - 1)

        if position < ts(cursor):
            while position < ts(cursor):
                cursor -= 1
                if cursor < 0:
                    position = ts(0)
                    cursor = 0
                    break

        if ts(cursor + 1) <= position:
            while ts(cursor + 1) <= position:
                cursor += 1
                if cursor == last:
                    position = ts(last)
                    cursor = last - 1
                    # Step back over trailing samples that share the final timestamp
                    while cursor > 0 and ts(cursor) == ts(cursor + 1):
                        cursor -= 1
                    break

        store.sample_index = cursor
        return cursor, position

    def on_seek(self, position: float):
        """
        Apply the recorded state at an absolute position.

        Args:
            position: Absolute timeline position
        """
        store = self.store
        idx, position = self.seek(position)
        next_idx = idx + 1
        last = store.sample_count - 1

        start = store.timestamp_at(idx)
        end = store.timestamp_at(next_idx)
        if not end > start:
            raise DegenerateInterval(idx, start)

        t = (end - position) / (end - start)
        u = 1 - t
        # At the end of the timeline the final sample wins, even past trailing duplicates
        right_idx = last if position >= end else next_idx
        # Discrete values hold the left sample unless the playhead sits on the right one
        discrete_idx = right_idx if position >= end else idx

        for tracked in store:
            obj = tracked.played_object
            for name, series in tracked.series.items():
                if series.sample_type == SampleType.DISCRETE:
                    value = series[discrete_idx]
                else:
                    value = blend(series[idx], series[right_idx], t, u)
                write_property(obj, name, value)

        store.playhead = position
        logger.debug(f"Played t={position} between samples {idx} and {next_idx} (t={t:.3f})")
