"""
Errors raised by the recorder, its store and its engines.
"""

from typing import Any


class RecorderError(Exception):
    """Base class for all timeline recorder errors."""


class UnknownObjectId(RecorderError, KeyError):
    """A playback map references an id that was never recorded."""

    def __init__(self, object_id: Any):
        self.object_id = object_id
        super().__init__(f"No recorded object with id {object_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class EmptyTimeline(RecorderError):
    """Playback needs at least two samples to bracket a position."""

    def __init__(self, sample_count: int):
        self.sample_count = sample_count
        super().__init__(
            f"Timeline has {sample_count} sample(s), at least 2 are needed for playback"
        )


class DegenerateInterval(RecorderError):
    """The bracketing sample pair has zero width."""

    def __init__(self, index: int, timestamp: float):
        self.index = index
        self.timestamp = timestamp
        super().__init__(
            f"Samples {index} and {index + 1} share timestamp {timestamp}, cannot interpolate"
        )


class InvalidStateTransition(RecorderError):
    """The requested action has no transition from the current mode/state."""

    def __init__(self, action: str, mode: Any, state: Any):
        self.action = action
        self.mode = mode
        self.state = state
        super().__init__(
            f"Cannot {action} while mode={getattr(mode, 'value', mode)} "
            f"state={getattr(state, 'value', state)}"
        )


class InvalidElapsedTime(RecorderError, ValueError):
    """Capture ticks must carry a finite, non-negative elapsed time."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Elapsed time must be a finite non-negative number, got {value!r}")


class InvalidPosition(RecorderError, ValueError):
    """Playback ticks must carry a finite timeline position."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Playback position must be a finite number, got {value!r}")
