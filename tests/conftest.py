import logging

import pytest

from opstring import OpString


class Recorder:
    """Collects callback invocations as (name, args) tuples."""

    def __init__(self):
        self.calls = []

    def op(self, name):
        def callback(*args):
            self.calls.append((name, args))
        return callback


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def shapes(recorder):
    """The circle/rect setup used throughout the examples."""
    return {
        "operations": {"A": recorder.op("circle"), "B": recorder.op("rect")},
        "values": {"a": 30, "b": 20, "c": 55},
        "labels": {
            "circle": "A",
            "rect": "B",
            "thirty": "a",
            "twenty": "b",
            "fifty-five": "c",
        },
    }


@pytest.fixture
def ops(shapes):
    return OpString(shapes)


@pytest.fixture
def log(caplog):
    caplog.set_level(logging.DEBUG, logger="opstring")
    return caplog


def reports(caplog, level):
    return [r.getMessage() for r in caplog.records
            if r.levelno == level and r.name.startswith("opstring")]
