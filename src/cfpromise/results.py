"""Result vocabulary shared by every operation response."""

from __future__ import annotations

from enum import StrEnum
from functools import partial
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Outcome(StrEnum):
    """Outcome codes understood by the agent."""

    KEPT = "kept"
    REPAIRED = "repaired"
    NOT_KEPT = "not_kept"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"
    VALID = "valid"
    INVALID = "invalid"


class LogLevel(StrEnum):
    """Log levels the agent maps onto its own output."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    INFO = "info"
    VERBOSE = "verbose"
    DEBUG = "debug"


DEFAULT_LEVELS: dict[Outcome, LogLevel] = {
    Outcome.KEPT: LogLevel.INFO,
    Outcome.REPAIRED: LogLevel.INFO,
    Outcome.NOT_KEPT: LogLevel.ERROR,
    Outcome.SUCCESS: LogLevel.INFO,
    Outcome.FAILURE: LogLevel.ERROR,
    Outcome.ERROR: LogLevel.ERROR,
    Outcome.VALID: LogLevel.INFO,
    Outcome.INVALID: LogLevel.ERROR,
}


def clean_log_message(message: str) -> str:
    """Drop line breaks so a message cannot split a response line."""

    return message.replace("\r", "").replace("\n", "")


class LogEntry(BaseModel):
    """One severity-tagged, single-line message."""

    model_config = ConfigDict(frozen=True)

    level: str
    message: str

    @field_validator("level", mode="before")
    @classmethod
    def _level_as_text(cls, value: Any) -> str:
        return str(value)

    @field_validator("message", mode="before")
    @classmethod
    def _single_line(cls, value: Any) -> str:
        return clean_log_message(str(value))


class Result(BaseModel):
    """Outcome of one operation plus its ordered log."""

    model_config = ConfigDict(frozen=True)

    result: Outcome
    log: tuple[LogEntry, ...] = ()

    @property
    def outcome(self) -> Outcome:
        return self.result

    def with_log(self, message: str, level: str | None = None) -> Result:
        """Return a copy with one more log entry appended."""

        entry = LogEntry(level=level or DEFAULT_LEVELS[self.result], message=message)
        return self.model_copy(update={"log": (*self.log, entry)})

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def promise(outcome: Outcome | str, message: str, level: str | None = None) -> Result:
    """Build a result with one log entry, using the outcome's default level unless overridden."""

    code = Outcome(outcome)
    entry = LogEntry(level=level or DEFAULT_LEVELS[code], message=message)
    return Result(result=code, log=(entry,))


promise_kept = partial(promise, Outcome.KEPT)
promise_repaired = partial(promise, Outcome.REPAIRED)
promise_not_kept = partial(promise, Outcome.NOT_KEPT)
promise_success = partial(promise, Outcome.SUCCESS)
promise_failure = partial(promise, Outcome.FAILURE)
promise_error = partial(promise, Outcome.ERROR)
promise_valid = partial(promise, Outcome.VALID)
promise_invalid = partial(promise, Outcome.INVALID)
