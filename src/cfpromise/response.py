"""Response enrichment and wire encoding."""

from __future__ import annotations

import json
from typing import Any

from cfpromise.protocol import Request
from cfpromise.results import Result

MESSAGE_TERMINATOR = "\n\n"


def enrich(request: Request | None, result: Result) -> dict[str, Any]:
    """Echo the request's carry-forward fields ahead of the result fields."""

    carried = request.carried_fields() if request is not None else {}
    return {**carried, **result.to_wire()}


def encode(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def frame(line: str) -> str:
    """Terminate one response line and add the blank separator line."""

    return f"{line}{MESSAGE_TERMINATOR}"
