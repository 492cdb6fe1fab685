"""Session loop serving one agent over line-delimited streams."""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

from cfpromise.config import MalformedLinePolicy
from cfpromise.errors import MalformedRequestError
from cfpromise.module import PromiseModule
from cfpromise.operations import OperationDispatcher, is_terminate
from cfpromise.protocol import HandshakeLine, Request, parse_line
from cfpromise.response import encode, enrich, frame
from cfpromise.results import promise_error


class PromiseSession:
    """One synchronous request/response session.

    Lines are read from ``reader`` one at a time and every reply is written and flushed
    before the next line is read. Both streams are closed exactly once when :meth:`run`
    returns or raises.
    """

    def __init__(
        self,
        module: PromiseModule,
        reader: TextIO,
        writer: TextIO,
        *,
        malformed_lines: MalformedLinePolicy = "report",
    ) -> None:
        self.module = module
        self._reader = reader
        self._writer = writer
        self._malformed_lines = malformed_lines
        self._dispatcher = OperationDispatcher(module)
        self._closed = False
        _tolerate_undecodable_input(reader)

    @property
    def closed(self) -> bool:
        return self._closed

    def run(self) -> None:
        logger.info("session.started module={} version={}", self.module.name, self.module.version)
        try:
            for raw in self._reader:
                line = raw.rstrip("\r\n")
                if not line.strip():
                    continue
                if not self.handle_line(line):
                    logger.info("session.terminated module={}", self.module.name)
                    break
            else:
                logger.info("session.eof module={}", self.module.name)
        finally:
            self.close()

    def handle_line(self, line: str) -> bool:
        """Process one non-empty line. Returns False once the session should stop."""

        message: HandshakeLine | Request | None = None
        try:
            message = parse_line(line)
            reply = self._dispatcher.dispatch(message)
        except MalformedRequestError as exc:
            if self._malformed_lines == "abort":
                raise
            logger.warning("request.malformed error={}", exc)
            request = message if isinstance(message, Request) else None
            self._dispatcher.notify_error(stage="decode", error=exc, request=request)
            self._write(encode(enrich(request, promise_error(str(exc)))))
            return True

        if isinstance(reply, str):
            self._write(reply)
        else:
            logger.debug("operation.done operation={} result={}", message.operation, reply.result)
            self._write(encode(enrich(message, reply)))
        return not is_terminate(message)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._reader.close()
        finally:
            self._writer.close()

    def _write(self, line: str) -> None:
        self._writer.write(frame(line))
        self._writer.flush()


def _tolerate_undecodable_input(reader: TextIO) -> None:
    """Decode invalid UTF-8 to surrogates; parse_line rejects such lines."""

    reconfigure = getattr(reader, "reconfigure", None)
    if callable(reconfigure):
        reconfigure(errors="surrogateescape")


def serve(
    module: PromiseModule,
    reader: TextIO | None = None,
    writer: TextIO | None = None,
    *,
    malformed_lines: MalformedLinePolicy = "report",
) -> None:
    """Serve ``module`` until the agent terminates, defaulting to stdin/stdout."""

    session = PromiseSession(
        module,
        reader if reader is not None else sys.stdin,
        writer if writer is not None else sys.stdout,
        malformed_lines=malformed_lines,
    )
    session.run()
