"""
Session controller for recording and playing back object properties.

A Recorder runs at most one session at a time, either recording (sampling
live objects on every elapsed-time tick) or playing (writing the recorded
state for every absolute position it is given). Sessions are driven by an
external tick source; the recorder only subscribes and unsubscribes.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple
import logging

from .capture import CaptureEngine
from .config import RecorderConfig, ResumePolicy
from .errors import EmptyTimeline, InvalidStateTransition
from .playback import PlaybackEngine
from .store import ObjectMap, ObjectSpec, SampleStore
from .tick_source import TickCallback, TickSource

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Which engine the session drives."""
    NONE = "none"
    RECORDER = "recorder"
    PLAYER = "player"


class State(Enum):
    """Session state."""
    IDLE = "idle"
    RECORDING = "recording"
    PLAYING = "playing"
    PAUSED = "paused"


# (action, mode, state) -> (mode, state)
TRANSITIONS: Dict[Tuple[str, Mode, State], Tuple[Mode, State]] = {
    ("record", Mode.NONE, State.IDLE): (Mode.RECORDER, State.RECORDING),
    ("play", Mode.NONE, State.IDLE): (Mode.PLAYER, State.PLAYING),
    ("pause", Mode.RECORDER, State.RECORDING): (Mode.RECORDER, State.PAUSED),
    ("pause", Mode.PLAYER, State.PLAYING): (Mode.PLAYER, State.PAUSED),
    ("resume", Mode.RECORDER, State.PAUSED): (Mode.RECORDER, State.RECORDING),
    ("resume", Mode.PLAYER, State.PAUSED): (Mode.PLAYER, State.PLAYING),
    ("stop", Mode.RECORDER, State.RECORDING): (Mode.NONE, State.IDLE),
    ("stop", Mode.RECORDER, State.PAUSED): (Mode.NONE, State.IDLE),
    ("stop", Mode.PLAYER, State.PLAYING): (Mode.NONE, State.IDLE),
    ("stop", Mode.PLAYER, State.PAUSED): (Mode.NONE, State.IDLE),
}


class Recorder:
    """
    Records and plays back object properties.

    Example:
        recorder = Recorder()
        recorder.record(ticker, [{"id": "ball", "object": ball,
                                  "properties": [{"name": "x", "type": "continuous"}]}])
        ...  # ticker emits elapsed times
        recorder.stop()
        recorder.play(ticker, [{"id": "ball", "object": ghost_ball}])
        ...  # ticker emits absolute positions
    """

    def __init__(self, config: Optional[RecorderConfig] = None):
        self.config = config or RecorderConfig()
        self.store = SampleStore()
        self.capture = CaptureEngine(self.store)
        self.playback = PlaybackEngine(self.store)

        self._mode = Mode.NONE
        self._state = State.IDLE
        self._tick_source: Optional[TickSource] = None
        self._listener: Optional[TickCallback] = None

    def get_mode(self) -> Mode:
        return self._mode

    def get_state(self) -> State:
        return self._state

    @property
    def playhead(self) -> float:
        return self.store.playhead

    def record(self, tick_source: TickSource, object_specs: Iterable[Any]):
        """
        Start a recording session.

        Any previous recording is discarded.

        Args:
            tick_source: Emits the time elapsed since the previous tick
            object_specs: ObjectSpec instances or dicts of the form
                {"id": ..., "object": ..., "properties": [{"name": ..., "type": ...}]}
        """
        specs = [ObjectSpec.from_dict(s) for s in object_specs]
        self._enter("record")

        self.store.reset()
        for spec in specs:
            self.store.track(spec)

        self._tick_source = tick_source
        self._start(Mode.RECORDER)
        logger.info(
            f"Recording {len(self.store)} object(s): {', '.join(map(str, self.store.object_ids))}"
        )

    def play(self, tick_source: TickSource, object_maps: Iterable[Any] = ()):
        """
        Start playing back the current recording.

        Args:
            tick_source: Emits absolute timeline positions
            object_maps: ObjectMap instances or {"id": ..., "object": ...} dicts
                redirecting recorded ids onto other objects
        """
        maps = [ObjectMap.from_dict(m) for m in object_maps]
        self._check("play")

        for m in maps:
            self.store.get(m.object_id)
        if self.store.sample_count < 2:
            raise EmptyTimeline(self.store.sample_count)

        self._enter("play")
        self.store.rebind_all(maps)
        self.store.rewind()

        self._tick_source = tick_source
        self._start(Mode.PLAYER)
        logger.info(
            f"Playing {self.store.sample_count} samples over {self.store.duration}s "
            f"({len(maps)} object(s) remapped)"
        )

    def pause(self):
        """Suspend the active session. No-op when idle or already paused."""
        target = self._transition("pause")
        if target is None:
            return

        self._unsubscribe()
        self._mode, self._state = target
        logger.info(f"Paused {self._mode.value} at t={self.store.playhead}")

    def resume(self):
        """Resume a paused session. No-op unless paused."""
        target = self._transition("resume")
        if target is None:
            return

        if self.config.resume_policy == ResumePolicy.CONTINUE:
            if self._mode == Mode.PLAYER:
                self.playback.on_seek(self.store.playhead)
            self._subscribe(self._engine_callback(self._mode))
            self._mode, self._state = target
        else:
            self._start(self._mode)

        logger.info(f"Resumed {self._mode.value} at t={self.store.playhead}")

    def stop(self):
        """End the session. The recording is kept for later playback."""
        self._unsubscribe()
        if self._mode != Mode.NONE:
            logger.info(f"Stopped {self._mode.value} at t={self.store.playhead}")

        self._mode = Mode.NONE
        self._state = State.IDLE

    def status(self) -> Dict[str, Any]:
        """Snapshot of the session for diagnostics."""
        return {
            "mode": self._mode.value,
            "state": self._state.value,
            "playhead": self.store.playhead,
            "sample_count": self.store.sample_count,
            "duration": self.store.duration,
            "objects": self.store.object_ids,
        }

    def _transition(self, action: str) -> Optional[Tuple[Mode, State]]:
        return TRANSITIONS.get((action, self._mode, self._state))

    def _check(self, action: str):
        """Reject an action with no transition, unless re-initialisation is allowed."""
        if self._transition(action) is not None or not self.config.strict_transitions:
            return

        logger.warning(
            f"Rejected {action}: mode={self._mode.value} state={self._state.value}"
        )
        raise InvalidStateTransition(action, self._mode, self._state)

    def _enter(self, action: str):
        """Get into a state where a new session can start."""
        self._check(action)
        if self._transition(action) is None:
            logger.info(f"Re-initialising for {action}, stopping active {self._mode.value}")
            self.stop()

    def _start(self, mode: Mode):
        """Tick once at the start of the timeline, then follow the tick source."""
        if mode == Mode.RECORDER:
            self.capture.on_elapsed(0)
            state = State.RECORDING
        else:
            self.playback.on_seek(0)
            state = State.PLAYING

        self._subscribe(self._engine_callback(mode))
        self._mode = mode
        self._state = state

    def _engine_callback(self, mode: Mode) -> TickCallback:
        if mode == Mode.RECORDER:
            return self.capture.on_elapsed
        return self.playback.on_seek

    def _subscribe(self, callback: TickCallback):
        self._unsubscribe()
        self._tick_source.subscribe(self.config.event_name, callback)
        self._listener = callback

    def _unsubscribe(self):
        if self._listener is not None and self._tick_source is not None:
            self._tick_source.unsubscribe(self.config.event_name, self._listener)
        self._listener = None
