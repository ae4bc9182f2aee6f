from __future__ import annotations

import os as _os

DEBUG_PY_TRACE_ENV = "MONKEY_DEBUG_PY_TRACE"

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str) -> bool:
    """Read a boolean switch from the environment."""
    raw = _os.environ.get(name)
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY


def debug_py_trace_enabled() -> bool:
    return env_flag(DEBUG_PY_TRACE_ENV)


def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        _os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        _os.environ.pop(DEBUG_PY_TRACE_ENV, None)
