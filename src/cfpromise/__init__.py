"""cfpromise - custom promise modules for the CFEngine agent."""

from .errors import CfPromiseError, MalformedRequestError, ModuleLoadError, ProtocolVersionError
from .hookspecs import hookimpl
from .module import PromiseModule
from .results import (
    LogEntry,
    LogLevel,
    Outcome,
    Result,
    promise,
    promise_error,
    promise_failure,
    promise_invalid,
    promise_kept,
    promise_not_kept,
    promise_repaired,
    promise_success,
    promise_valid,
)
from .session import PromiseSession, serve
from .validation import Validation, accept_all, predicate_validator, type_validator

__version__ = "0.1.0"

__all__ = [
    "CfPromiseError",
    "LogEntry",
    "LogLevel",
    "MalformedRequestError",
    "ModuleLoadError",
    "Outcome",
    "PromiseModule",
    "PromiseSession",
    "ProtocolVersionError",
    "Result",
    "Validation",
    "accept_all",
    "hookimpl",
    "predicate_validator",
    "promise",
    "promise_error",
    "promise_failure",
    "promise_invalid",
    "promise_kept",
    "promise_not_kept",
    "promise_repaired",
    "promise_success",
    "promise_valid",
    "serve",
    "type_validator",
]
