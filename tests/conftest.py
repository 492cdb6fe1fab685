from __future__ import annotations

import io
from collections.abc import Callable, Iterable
from typing import Any

import pytest

from cfpromise.module import PromiseModule
from cfpromise.results import Result, promise_kept
from cfpromise.session import PromiseSession


class CapturingStream(io.StringIO):
    """StringIO that keeps its contents and counts close() calls."""

    def __init__(self, initial_value: str = "") -> None:
        super().__init__(initial_value)
        self.captured = ""
        self.position = 0
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        if not self.closed:
            self.captured = self.getvalue()
            self.position = self.tell()
        super().close()


def _evaluate(promiser: str, attributes: dict[str, Any]) -> Result:
    _ = attributes
    return promise_kept(f"{promiser} is fine")


@pytest.fixture
def module() -> PromiseModule:
    return PromiseModule(name="mymod", version="1.0", evaluate=_evaluate)


@pytest.fixture
def run_session() -> Callable[..., tuple[str, CapturingStream, CapturingStream]]:
    def _run(
        lines: Iterable[str], promise_module: PromiseModule, **kwargs: Any
    ) -> tuple[str, CapturingStream, CapturingStream]:
        reader = CapturingStream("".join(f"{line}\n" for line in lines))
        writer = CapturingStream()
        session = PromiseSession(promise_module, reader, writer, **kwargs)
        try:
            session.run()
        finally:
            assert session.closed
        return writer.captured, reader, writer

    return _run
