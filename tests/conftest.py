"""
Shared test fixtures for Timeline Recorder tests.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from timeline_recorder import Recorder, Ticker


class Body:
    """Plain attribute object standing in for a simulated entity."""

    def __init__(self, x=0.0, label="idle", position=None):
        self.x = x
        self.label = label
        self.position = position if position is not None else [0.0, 0.0]


def record_ticks(ticker, obj, deltas_and_values, name="x"):
    """Set obj.<name> then tick the elapsed time, for each (delta, value) pair."""
    for delta, value in deltas_and_values:
        setattr(obj, name, value)
        ticker.tick(delta)


@pytest.fixture
def ticker():
    return Ticker()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def body():
    return Body()


@pytest.fixture
def recorded_body(recorder, ticker, body):
    """
    A stopped recording of one continuous property x and one discrete label:

        t:     0    1    2
        x:     0    5   10
        label: a    b    c
    """
    body.x = 0.0
    body.label = "a"
    recorder.record(ticker, [
        {
            "id": "A",
            "object": body,
            "properties": [
                {"name": "x", "type": "continuous"},
                {"name": "label"},
            ],
        },
    ])

    body.x = 5.0
    body.label = "b"
    ticker.tick(1)

    body.x = 10.0
    body.label = "c"
    ticker.tick(1)

    recorder.stop()
    return body
