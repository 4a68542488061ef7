"""
Shared test fixtures for the Docjump test suite.

Provides a manual-clock Timer, a fetcher whose replies the test completes
by hand (in any order), and a real settings TOML file.
"""

import pytest
import toml

from docjump.search.models import Result


class FakeTimer:
    """Timer with a manual clock; advance() fires due callbacks in order."""

    def __init__(self):
        self.now = 0
        self._next_handle = 0
        self._pending = {}

    def call_later(self, delay_ms, fn):
        self._next_handle += 1
        self._pending[self._next_handle] = (self.now + delay_ms, fn)
        return self._next_handle

    def cancel(self, handle):
        self._pending.pop(handle, None)

    @property
    def pending_count(self):
        return len(self._pending)

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = [(when, handle) for handle, (when, _fn) in self._pending.items() if when <= target]
            if not due:
                break
            when, handle = min(due)
            _when, fn = self._pending.pop(handle)
            self.now = when
            fn()
        self.now = target


class ScriptedFetcher:
    """Records fetch() calls; the test delivers replies with complete()."""

    def __init__(self):
        self.calls = []

    @property
    def queries(self):
        return [query for query, _cb in self.calls]

    def fetch(self, query, on_results):
        self.calls.append((query, on_results))

    def complete(self, index, results):
        _query, on_results = self.calls[index]
        on_results(tuple(results))


def make_result(group, jar=None, version="1.0.0"):
    return Result(group_name=group, jar_name=jar or group, version=version)


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def fetcher():
    return ScriptedFetcher()


@pytest.fixture
def three_results():
    return (
        make_result("ring", version="1.2.0"),
        make_result("ring", "ring-core", "1.2.0"),
        make_result("ring", "ring-mock", "0.4.0"),
    )


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with a partial override."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {"debounce_ms": 150, "endpoint": "https://example.test/search"},
        "navigation": {"base_url": "https://docs.example.test/"},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path
