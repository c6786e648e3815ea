from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure src/ is importable for all tests (CI and local)
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


def pytest_collection_modifyitems(config, items):
    """Default all tests to 'unit' unless explicitly marked otherwise."""
    for item in items:
        marks = {m.name for m in item.iter_markers()}
        if not ("integ" in marks or "unit" in marks):
            item.add_marker(pytest.mark.unit)


class HostTarget:
    """Stand-in for a host-provided event target with its own storage."""

    def __init__(self) -> None:
        self.registered: list[tuple[str, object]] = []

    def add_listener(self, event, listener) -> None:
        self.registered.append((event, listener))

    def remove_listener(self, event, listener) -> None:
        if (event, listener) in self.registered:
            self.registered.remove((event, listener))

    def fire(self, event, payload=None) -> None:
        for name, listener in list(self.registered):
            if name == event:
                listener(payload)


@pytest.fixture
def host_target() -> HostTarget:
    return HostTarget()
