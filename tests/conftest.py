import pytest

from tests.fake.fake_pulse import FakeTransport

from pulsewire.core.client import PulseClient
from pulsewire.core.codec.writer import TagWriter


@pytest.fixture
def writer():
    return TagWriter()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return PulseClient(transport)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for var in ("PULSEWIRECONFIG", "PULSEWIRE_CONNECTION__SERVER", "PULSEWIRE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    # Keep a stray pulsewire.yaml in the invocation directory out of the tests
    monkeypatch.chdir(tmp_path)
    return tmp_path
