from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import List

import pytest

ROOT = Path(__file__).resolve().parent.parent

for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.append(str(entry))

from monkey_ref.utils import DEBUG_PY_TRACE_ENV  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_trace_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """REPL commands flip the traceback flag through os.environ; undo it per test."""
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "0")
    monkeypatch.delenv(DEBUG_PY_TRACE_ENV)


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Parametrized scenario ids must stay unique across a module."""
    del session, config

    counts = Counter(item.nodeid for item in items)
    duplicates = sorted(nodeid for nodeid, n in counts.items() if n > 1)
    if duplicates:
        listing = "\n".join(f"- {nodeid}" for nodeid in duplicates)
        raise pytest.UsageError(f"Duplicate pytest nodeids detected during collection:\n{listing}")
