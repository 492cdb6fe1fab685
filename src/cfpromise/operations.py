"""Operation dispatch for one promise module session."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

import pluggy
from loguru import logger
from pydantic import ValidationError

from cfpromise.errors import MalformedRequestError, ProtocolVersionError
from cfpromise.hookspecs import create_plugin_manager
from cfpromise.module import SUPPORTED_PROTOCOL, PromiseModule
from cfpromise.protocol import HandshakeLine, Request
from cfpromise.results import Result, promise_error, promise_invalid, promise_success, promise_valid
from cfpromise.validation import describe_validation_error, run_validator

VALIDATED_MESSAGE = "Promise validated Successfully"


class Operation(StrEnum):
    """Operation tags sent by the agent after the handshake."""

    VALIDATE_PROMISE = "validate_promise"
    EVALUATE_PROMISE = "evaluate_promise"
    TERMINATE = "terminate"

    @classmethod
    def lookup(cls, tag: str) -> Operation | None:
        try:
            return cls(tag)
        except ValueError:
            return None


def is_terminate(message: HandshakeLine | Request) -> bool:
    return isinstance(message, Request) and message.operation == Operation.TERMINATE


class OperationDispatcher:
    """Route handshake and operation messages to their handlers."""

    def __init__(self, module: PromiseModule, plugin_manager: pluggy.PluginManager | None = None) -> None:
        self.module = module
        self._plugin_manager = plugin_manager or create_plugin_manager(module.plugins)
        self._handlers: dict[Operation, Callable[[Request], Result]] = {
            Operation.VALIDATE_PROMISE: self._validate_promise,
            Operation.EVALUATE_PROMISE: self._evaluate_promise,
            Operation.TERMINATE: self._terminate,
        }

    def dispatch(self, message: HandshakeLine | Request) -> str | Result:
        """Handle one message; the handshake yields plain text, everything else a Result."""

        if isinstance(message, HandshakeLine):
            return self.handshake(message)
        operation = Operation.lookup(message.operation)
        if operation is None:
            return self._unsupported_operation(message)
        return self._handlers[operation](message)

    def handshake(self, line: HandshakeLine) -> str:
        if not line.header.endswith(SUPPORTED_PROTOCOL):
            raise ProtocolVersionError(
                f"only {SUPPORTED_PROTOCOL} of the custom promise protocol is supported, agent sent {line.version!r}"
            )
        return self.module.handshake_response()

    def notify_error(self, *, stage: str, error: Exception, request: Request | None) -> None:
        """Call on_error hooks, swallowing observer failures."""

        for impl in self._plugin_manager.hook.on_error.get_hookimpls():
            call_kwargs = _kwargs_for_impl(impl, {"stage": stage, "error": error, "request": request})
            try:
                impl.function(**call_kwargs)
            except Exception:
                logger.opt(exception=True).warning(
                    "hook.on_error_failed stage={} plugin={}",
                    stage,
                    impl.plugin_name or "<unknown>",
                )

    def _validate_promise(self, request: Request) -> Result:
        promiser = _require_promiser(request)
        try:
            promiser_check = run_validator(self.module.promiser_validator, promiser)
            if not promiser_check.ok:
                return promise_invalid(promiser_check.explanation)
            attributes_check = run_validator(self.module.attributes_validator, request.attributes or {})
        except Exception as exc:
            return self._failed(Operation.VALIDATE_PROMISE, exc, request)
        if not attributes_check.ok:
            return promise_invalid(attributes_check.explanation)
        return promise_valid(VALIDATED_MESSAGE)

    def _evaluate_promise(self, request: Request) -> Result:
        promiser = _require_promiser(request)
        try:
            outcome = self.module.evaluate(promiser, request.attributes or {})
        except Exception as exc:
            return self._failed(Operation.EVALUATE_PROMISE, exc, request)
        return _as_result(outcome, source="evaluation")

    def _terminate(self, request: Request) -> Result:
        _ = request
        return promise_success(f"{self.module.name} completed successfully")

    def _unsupported_operation(self, request: Request) -> Result:
        try:
            answer = self._plugin_manager.hook.handle_operation(request=request, module=self.module)
        except Exception as exc:
            return self._failed(request.operation, exc, request)
        if answer is None:
            logger.warning("operation.unsupported operation={} module={}", request.operation, self.module.name)
            return promise_error(f"Unsupported operation: {request.operation}")
        return _as_result(answer, source=f"{request.operation} hook")

    def _failed(self, stage: str, error: Exception, request: Request) -> Result:
        logger.opt(exception=error).error("operation.failed stage={} module={}", stage, self.module.name)
        self.notify_error(stage=stage, error=error, request=request)
        return promise_error(f"{type(error).__name__}: {error}")


def _require_promiser(request: Request) -> str:
    if request.promiser is None:
        raise MalformedRequestError(f"{request.operation} requires a promiser")
    return request.promiser


def _as_result(value: Any, *, source: str) -> Result:
    if isinstance(value, Result):
        return value
    if isinstance(value, Mapping):
        try:
            return Result.model_validate(value)
        except ValidationError as exc:
            return promise_error(f"{source} returned a malformed result: {describe_validation_error(exc)}")
    return promise_error(f"{source} returned {type(value).__name__}, expected Result")


def _kwargs_for_impl(impl: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
    return {name: kwargs[name] for name in impl.argnames if name in kwargs}
