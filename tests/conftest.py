" generic fixtures "
import json
from pathlib import Path

import pytest

from .testtools import completed

SAMPLE_STATE = (Path(__file__).parent / "sample_state.json").read_bytes()


def pytest_configure():
    "Runs once before all"
    from pybspc.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def sample_state_bytes():
    "Raw output of `bspc wm -d`"
    return SAMPLE_STATE


@pytest.fixture
def sample_state():
    "Decoded JSON of `bspc wm -d`"
    return json.loads(SAMPLE_STATE)


@pytest.fixture
def sample_monitor(sample_state):
    return sample_state["monitors"][0]


@pytest.fixture
def sample_desktop(sample_monitor):
    return sample_monitor["desktops"][0]


@pytest.fixture
def sample_node(sample_desktop):
    return sample_desktop["root"]


@pytest.fixture
def bspc_run(mocker):
    "Replaces the bspc process, set `.return_value` with `completed(...)`"
    mocked = mocker.patch("pybspc.process.subprocess.run", name="mocked_bspc")
    mocked.return_value = completed(b"")
    return mocked
