"""Line classification and request decoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from cfpromise.errors import MalformedRequestError
from cfpromise.validation import describe_validation_error

AGENT_HEADER_PREFIX = "cf-agent"
CARRY_FORWARD_KEYS = ("operation", "promiser", "attributes")


@dataclass(frozen=True)
class HandshakeLine:
    """Header line announced by the agent before any JSON traffic."""

    header: str

    @property
    def version(self) -> str:
        words = self.header.split()
        return words[-1] if words else ""


class Request(BaseModel):
    """One decoded operation line."""

    model_config = ConfigDict(extra="allow", frozen=True)

    operation: str
    promiser: str | None = None
    attributes: dict[str, Any] | None = None

    def carried_fields(self) -> dict[str, Any]:
        """Fields that were present on the wire and must be echoed back."""

        return {key: getattr(self, key) for key in CARRY_FORWARD_KEYS if key in self.model_fields_set}


def is_handshake(line: str) -> bool:
    return line.startswith(AGENT_HEADER_PREFIX)


def parse_line(line: str) -> HandshakeLine | Request:
    """Classify one non-empty input line and decode it."""

    _require_utf8(line)
    if is_handshake(line):
        return HandshakeLine(header=line)
    return decode_request(line)


def _require_utf8(line: str) -> None:
    try:
        line.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MalformedRequestError(f"malformed request: line is not valid UTF-8 at position {exc.start}") from exc


def decode_request(line: str) -> Request:
    try:
        return Request.model_validate_json(line)
    except ValidationError as exc:
        raise MalformedRequestError(f"malformed request: {describe_validation_error(exc)}") from exc
