from __future__ import annotations

from pathlib import Path

import pytest

from cfpromise.errors import ModuleLoadError
from cfpromise.loader import load_promise_module


def test_load_default_attribute_from_package_path() -> None:
    module = load_promise_module("fixtures_modules.echo_module")
    assert (module.name, module.version) == ("echo", "2.0")


def test_load_calls_factories() -> None:
    module = load_promise_module("fixtures_modules.echo_module:build")
    assert module.name == "echo"


def test_load_from_file(tmp_path: Path) -> None:
    module_file = tmp_path / "git_promise.py"
    module_file.write_text(
        "\n".join(
            [
                "from cfpromise import PromiseModule, promise_kept",
                "",
                "promise_type = PromiseModule(",
                "    name='git',",
                "    version='0.3',",
                "    evaluate=lambda promiser, attributes: promise_kept(promiser),",
                ")",
            ]
        ),
        encoding="utf-8",
    )

    module = load_promise_module(f"{module_file}:promise_type")
    assert module.handshake_response() == "git 0.3 v1 json_based"


@pytest.mark.parametrize(
    ("target", "fragment"),
    [
        ("fixtures_modules.missing_module", "fixtures_modules.missing_module"),
        ("fixtures_modules.echo_module:nothing_here", "must export attribute `nothing_here`"),
        ("fixtures_modules.echo_module:not_a_module", "expected PromiseModule"),
        ("does/not/exist.py", "no such file"),
        (":module", "missing module path"),
    ],
)
def test_load_failures(target: str, fragment: str) -> None:
    with pytest.raises(ModuleLoadError) as exc_info:
        load_promise_module(target)
    assert fragment in str(exc_info.value)
