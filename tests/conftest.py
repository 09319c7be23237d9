# FILE: tests/conftest.py
# ------------------------------------------------------------------------------
import pytest

import charbuf.config
from charbuf.config import reload_config


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    monkeypatch.delenv("CHARBUF_ALLOCATION_LIMIT", raising=False)
    monkeypatch.delenv("CHARBUF_WIPE_ON_EXIT", raising=False)
    for key in ("CHARBUF_LOG_LEVEL", "CHARBUF_LOG_FORMAT", "CHARBUF_LOG_DIR"):
        monkeypatch.delenv(key, raising=False)
    reload_config()
    yield
    charbuf.config._config_instance = None


def assert_invariants(buf):
    assert buf.length <= buf.capacity
    assert len(buf._storage) == buf.capacity + 1
    assert buf._storage[buf.length] == 0
    assert buf.c_str().tobytes()[-1:] == b"\x00"


@pytest.fixture
def check_invariants():
    return assert_invariants
