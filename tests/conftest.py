import pytest
import requests

from fakes import SleepRecorder


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection reset")
