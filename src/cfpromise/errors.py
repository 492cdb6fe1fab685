"""Application-level exception types for cfpromise."""

from __future__ import annotations


class CfPromiseError(Exception):
    """Base exception for cfpromise."""


class ProtocolVersionError(CfPromiseError):
    """Raised when the agent announces a protocol version other than v1."""


class MalformedRequestError(CfPromiseError):
    """Raised when an operation line cannot be decoded into a request."""


class ModuleLoadError(CfPromiseError):
    """Raised when a promise module target cannot be resolved."""
