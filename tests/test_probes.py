"""Tests for sink availability probes."""

from __future__ import annotations

import io
from types import SimpleNamespace

import pytest

from dumpjson import probes
from dumpjson.probes import (
    FixedProbe,
    RuntimeProbe,
    SinkProbe,
    default_probe,
    reset_default_probe,
)


@pytest.fixture(autouse=True)
def _reset_probe():
    reset_default_probe()
    yield
    reset_default_probe()


@pytest.fixture()
def fake_sys(monkeypatch):
    """Stand-in sys module with no console and no debugger signals."""
    fake = SimpleNamespace(stdout=io.StringIO(), gettrace=lambda: None, modules={})
    monkeypatch.setattr(probes, "sys", fake)
    return fake


def _tracer(frame, event, arg):
    return _tracer


class TestFixedProbe:
    def test_answers(self):
        probe = FixedProbe(console=True, debugger=False)
        assert probe.console_available() is True
        assert probe.debugger_attached() is False

    def test_defaults_to_nothing(self):
        probe = FixedProbe()
        assert probe.console_available() is False
        assert probe.debugger_attached() is False

    def test_satisfies_protocol(self):
        assert isinstance(FixedProbe(), SinkProbe)
        assert isinstance(RuntimeProbe(), SinkProbe)


class TestRuntimeProbeCaching:
    def test_console_detected_once(self, monkeypatch):
        calls = []
        monkeypatch.setattr(probes, "_detect_console", lambda: calls.append(1) or True)
        probe = RuntimeProbe()
        assert probe.console_available() is True
        assert probe.console_available() is True
        assert len(calls) == 1

    def test_debugger_detected_once(self, monkeypatch):
        calls = []
        monkeypatch.setattr(probes, "_detect_debugger", lambda: calls.append(1) or False)
        probe = RuntimeProbe()
        assert probe.debugger_attached() is False
        assert probe.debugger_attached() is False
        assert len(calls) == 1

    def test_default_probe_shared(self):
        assert default_probe() is default_probe()

    def test_reset_default_probe(self):
        first = default_probe()
        reset_default_probe()
        assert default_probe() is not first


class TestConsoleDetection:
    def test_string_buffer_is_not_a_console(self, fake_sys):
        fake_sys.stdout = io.StringIO()
        assert probes._detect_console() is False

    def test_missing_stdout(self, fake_sys):
        fake_sys.stdout = None
        assert probes._detect_console() is False

    def test_closed_stream(self, fake_sys):
        stream = io.TextIOWrapper(io.BytesIO())
        stream.close()
        fake_sys.stdout = stream
        assert probes._detect_console() is False

    def test_terminal(self, fake_sys, monkeypatch):
        class FakeTerminal:
            def fileno(self):
                return 1

        fake_sys.stdout = FakeTerminal()
        monkeypatch.setattr(probes.os, "get_terminal_size", lambda fd: (80, 24))
        assert probes._detect_console() is True


class TestDebuggerDetection:
    def test_nothing_attached(self, fake_sys):
        assert probes._detect_debugger() is False

    def test_trace_function(self, fake_sys):
        fake_sys.gettrace = lambda: _tracer
        assert probes._detect_debugger() is True

    def test_coverage_tracer_ignored(self, fake_sys):
        tracer_cls = type("CTracer", (), {"__module__": "coverage.tracer"})
        fake_sys.gettrace = lambda: tracer_cls()
        assert probes._detect_debugger() is False

    def test_monitoring_debugger_tool(self, fake_sys):
        fake_sys.monitoring = SimpleNamespace(
            DEBUGGER_ID=0,
            get_tool=lambda tool_id: "pydevd" if tool_id == 0 else None,
        )
        assert probes._detect_debugger() is True

    def test_monitoring_without_debugger(self, fake_sys):
        fake_sys.monitoring = SimpleNamespace(DEBUGGER_ID=0, get_tool=lambda tool_id: None)
        assert probes._detect_debugger() is False

    def test_ide_backend_loaded(self, fake_sys):
        fake_sys.modules["pydevd"] = object()
        assert probes._detect_debugger() is True

    def test_debugpy_client(self, fake_sys):
        class FakeDebugpy:
            connected = False

            def is_client_connected(self):
                return self.connected

        fake = FakeDebugpy()
        fake_sys.modules["debugpy"] = fake
        assert probes._detect_debugger() is False
        fake.connected = True
        assert probes._detect_debugger() is True

    def test_debugpy_failure_means_detached(self, fake_sys):
        class BrokenDebugpy:
            def is_client_connected(self):
                raise RuntimeError("not initialised")

        fake_sys.modules["debugpy"] = BrokenDebugpy()
        assert probes._detect_debugger() is False
