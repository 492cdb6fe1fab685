"""Promise module configuration supplied by the plugin author."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from cfpromise.results import Result
from cfpromise.validation import Validator, accept_all

SUPPORTED_PROTOCOL = "v1"
PROTOCOL_FEATURES = "json_based"

EvaluationFn: TypeAlias = Callable[[str, dict[str, Any]], Result | Mapping[str, Any]]


@dataclass(frozen=True)
class PromiseModule:
    """Everything the engine needs to serve one custom promise type.

    ``evaluate`` receives the promiser and the attributes mapping and must return a
    :class:`~cfpromise.results.Result`, typically built with one of the ``promise_*`` helpers.
    ``plugins`` are pluggy objects implementing hooks from :mod:`cfpromise.hookspecs`.
    """

    name: str
    version: str
    evaluate: EvaluationFn
    promiser_validator: Validator = accept_all
    attributes_validator: Validator = accept_all
    plugins: tuple[object, ...] = ()

    def handshake_response(self) -> str:
        return f"{self.name} {self.version} {SUPPORTED_PROTOCOL} {PROTOCOL_FEATURES}"
