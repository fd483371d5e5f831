"""
Tests for the capture engine.
"""

import pytest
import numpy as np
from timeline_recorder.capture import CaptureEngine
from timeline_recorder.errors import InvalidElapsedTime
from timeline_recorder.store import (
    ObjectSpec,
    PropertySpec,
    SampleStore,
    SampleType,
)

from conftest import Body


@pytest.fixture
def body():
    return Body(x=1.0, label="a")


@pytest.fixture
def store(body):
    store = SampleStore()
    store.track(ObjectSpec("A", body, [
        PropertySpec("x", SampleType.CONTINUOUS),
        PropertySpec("label"),
    ]))
    return store


@pytest.fixture
def engine(store):
    return CaptureEngine(store)


class TestCaptureEngine:
    """Tests for sampling on elapsed-time ticks."""

    def test_first_capture_at_zero(self, engine, store):
        engine.on_elapsed(0)
        assert store.timestamps == (0.0,)
        assert store.series("A", "x").values == [1.0]
        assert store.sample_index == 1

    def test_appends_current_values(self, engine, store, body):
        engine.on_elapsed(0)
        body.x = 2.0
        body.label = "b"
        engine.on_elapsed(0.5)

        assert store.series("A", "x").values == [1.0, 2.0]
        assert store.series("A", "label").values == ["a", "b"]
        assert store.timestamps == (0.0, 0.5)

    @pytest.mark.parametrize("deltas", [
        [0, 1, 1],
        [0, 0.1, 0.2, 0.3, 0.4],
        [0, 2.5, 0, 1],
        [0, 1e-3, 1e3],
    ])
    def test_playhead_is_sum_of_deltas(self, engine, store, deltas):
        for delta in deltas:
            engine.on_elapsed(delta)

        assert store.playhead == pytest.approx(sum(deltas))
        expected = np.cumsum(deltas)
        assert np.allclose(store.timestamps, expected)

    def test_series_lengths_follow_timestamps(self, engine, store):
        for delta in [0, 1, 1, 1]:
            engine.on_elapsed(delta)
        for tracked in store:
            for series in tracked.series.values():
                assert len(series) == store.sample_count

    def test_mapping_objects(self):
        state = {"speed": 3}
        store = SampleStore()
        store.track(ObjectSpec("car", state, [PropertySpec("speed")]))
        engine = CaptureEngine(store)

        engine.on_elapsed(0)
        state["speed"] = 4
        engine.on_elapsed(1)

        assert store.series("car", "speed").values == [3, 4]

    def test_recorded_objects_are_not_modified(self, engine, body):
        engine.on_elapsed(0)
        engine.on_elapsed(1)
        assert body.x == 1.0
        assert body.label == "a"

    @pytest.mark.parametrize("bad", [-1, -0.001, "1", None, float("nan"), float("inf"), True])
    def test_rejects_invalid_elapsed(self, engine, store, bad):
        with pytest.raises(InvalidElapsedTime):
            engine.on_elapsed(bad)
        assert store.sample_count == 0
        assert store.playhead == 0.0

    def test_invalid_elapsed_is_a_value_error(self, engine):
        with pytest.raises(ValueError):
            engine.on_elapsed(-1)

    def test_failed_read_keeps_series_aligned(self, store, engine, body):
        store.track(ObjectSpec("B", Body(), [PropertySpec("missing")]))
        with pytest.raises(AttributeError):
            engine.on_elapsed(0)
        assert store.series("A", "x").values == []
        assert store.sample_count == 0
