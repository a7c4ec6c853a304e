from __future__ import annotations

from pathlib import Path

import pytest

_FILESYSTEM_TEST_FILES = {
    "test_remove_path.py",
}


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class TraceRecorder:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def trace_recorder() -> TraceRecorder:
    return TraceRecorder()


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if path.name in _FILESYSTEM_TEST_FILES:
            item.add_marker(pytest.mark.filesystem)
