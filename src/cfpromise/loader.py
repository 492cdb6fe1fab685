"""Resolve promise module targets given on the command line."""

from __future__ import annotations

import hashlib
import importlib
import sys
from importlib import util as importlib_util
from pathlib import Path
from types import ModuleType

from cfpromise.errors import ModuleLoadError
from cfpromise.module import PromiseModule

DEFAULT_ATTRIBUTE = "module"


def load_promise_module(target: str) -> PromiseModule:
    """Load a module from ``package.module[:attr]`` or ``path/to/file.py[:attr]``.

    The attribute defaults to ``module``. It may hold a :class:`PromiseModule` or a
    zero-argument callable returning one.
    """

    location, _, attribute = target.partition(":")
    attribute = attribute or DEFAULT_ATTRIBUTE
    if not location:
        raise ModuleLoadError(f"{target!r}: missing module path")

    source = _import_target(location)
    if not hasattr(source, attribute):
        raise ModuleLoadError(f"{location} must export attribute `{attribute}`")
    value = getattr(source, attribute)
    if callable(value) and not isinstance(value, PromiseModule):
        value = value()
    if not isinstance(value, PromiseModule):
        raise ModuleLoadError(f"{location}:{attribute} is {type(value).__name__}, expected PromiseModule")
    return value


def _import_target(location: str) -> ModuleType:
    if location.endswith(".py"):
        path = Path(location).expanduser().resolve()
        if not path.is_file():
            raise ModuleLoadError(f"{location}: no such file")
        return _load_module_from_file(module_name=_module_name_for_file(path), module_file=path)
    try:
        return importlib.import_module(location)
    except ImportError as exc:
        raise ModuleLoadError(f"{location}: {exc}") from exc


def _module_name_for_file(path: Path) -> str:
    digest = hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:12]
    normalized_name = "".join(ch if ch.isalnum() else "_" for ch in path.stem.lower())
    return f"cfpromise_target_{normalized_name}_{digest}"


def _load_module_from_file(*, module_name: str, module_file: Path) -> ModuleType:
    spec = importlib_util.spec_from_file_location(module_name, module_file)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(f"failed to build module spec for {module_file}")

    module = importlib_util.module_from_spec(spec)
    sys.modules.pop(module_name, None)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    return module
