"""
Timeline Recorder - record and replay object properties over time

Samples named properties of live objects on every tick of an external time
source, then plays them back at arbitrary positions on the recorded timeline:
- Discrete properties hold their last sample
- Continuous properties are linearly interpolated (scalars, sequences, arrays)
- Playback can be redirected onto different objects by id
"""

__version__ = "0.1.0"

from .config import RecorderConfig, ResumePolicy, load_config, setup_logging
from .errors import (
    RecorderError,
    UnknownObjectId,
    EmptyTimeline,
    DegenerateInterval,
    InvalidStateTransition,
    InvalidElapsedTime,
    InvalidPosition,
)
from .session import Recorder, Mode, State, TRANSITIONS
from .store import (
    SampleStore,
    SampleType,
    PropertySeries,
    TrackedObject,
    ObjectSpec,
    PropertySpec,
    ObjectMap,
)
from .capture import CaptureEngine
from .playback import PlaybackEngine, blend
from .tick_source import TickSource, Ticker, DEFAULT_EVENT

__all__ = [
    "Recorder",
    "Mode",
    "State",
    "TRANSITIONS",
    "RecorderConfig",
    "ResumePolicy",
    "load_config",
    "setup_logging",
    "RecorderError",
    "UnknownObjectId",
    "EmptyTimeline",
    "DegenerateInterval",
    "InvalidStateTransition",
    "InvalidElapsedTime",
    "InvalidPosition",
    "SampleStore",
    "SampleType",
    "PropertySeries",
    "TrackedObject",
    "ObjectSpec",
    "PropertySpec",
    "ObjectMap",
    "CaptureEngine",
    "PlaybackEngine",
    "blend",
    "TickSource",
    "Ticker",
    "DEFAULT_EVENT",
]
