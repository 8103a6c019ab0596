"""Sink availability probes.

A probe answers two questions: is there a console to print to, and is a
debugger listening. RuntimeProbe asks the running interpreter once per
question and remembers the answer; FixedProbe answers whatever it was
built with, for tests and for hosts that know better than the heuristics.

Probing never raises. A failed probe means "not available".
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

# Modules whose presence means an IDE debugger backend is loaded
_DEBUGGER_MODULES = ("pydevd", "_pydevd_bundle.pydevd_comm")
# Trace functions installed by these packages are not debuggers
_NON_DEBUGGER_TRACERS = ("coverage", "pytest_cov")


@runtime_checkable
class SinkProbe(Protocol):
    """Detects which diagnostic sinks the host process provides."""

    def console_available(self) -> bool: ...

    def debugger_attached(self) -> bool: ...


class RuntimeProbe:
    """Probe the real interpreter. Each answer is computed at first use."""

    def __init__(self) -> None:
        self._console: bool | None = None
        self._debugger: bool | None = None

    def console_available(self) -> bool:
        if self._console is None:
            self._console = _detect_console()
        return self._console

    def debugger_attached(self) -> bool:
        if self._debugger is None:
            self._debugger = _detect_debugger()
        return self._debugger


@dataclass(frozen=True)
class FixedProbe:
    """Probe with canned answers."""

    console: bool = False
    debugger: bool = False

    def console_available(self) -> bool:
        return self.console

    def debugger_attached(self) -> bool:
        return self.debugger


def _detect_console() -> bool:
    """True if stdout is a terminal we can query.

    Services, pythonw and redirected output have no terminal; asking for
    its size fails there, and that failure is the signal.
    """
    stream = sys.stdout
    if stream is None:
        return False
    try:
        os.get_terminal_size(stream.fileno())
    except (OSError, ValueError, AttributeError):
        return False
    return True


def _detect_debugger() -> bool:
    trace = sys.gettrace()
    if trace is not None and not _is_coverage_tracer(trace):
        return True

    monitoring = getattr(sys, "monitoring", None)
    if monitoring is not None:
        try:
            if monitoring.get_tool(monitoring.DEBUGGER_ID) is not None:
                return True
        except (AttributeError, ValueError):
            pass

    if any(name in sys.modules for name in _DEBUGGER_MODULES):
        return True

    debugpy = sys.modules.get("debugpy")
    if debugpy is not None:
        try:
            return bool(debugpy.is_client_connected())
        except Exception:
            return False
    return False


def _is_coverage_tracer(trace: object) -> bool:
    module = getattr(type(trace), "__module__", "") or ""
    if module == "builtins":
        module = getattr(trace, "__module__", "") or ""
    return module.split(".")[0] in _NON_DEBUGGER_TRACERS


# Process-wide probe, so detection happens once per process
_default_probe: RuntimeProbe | None = None


def default_probe() -> RuntimeProbe:
    """Get the shared RuntimeProbe."""
    global _default_probe
    if _default_probe is None:
        _default_probe = RuntimeProbe()
    return _default_probe


def reset_default_probe() -> None:
    """Reset for testing."""
    global _default_probe
    _default_probe = None
