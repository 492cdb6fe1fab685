from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cfpromise.config import load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("CFPROMISE_LOG_LEVEL", "CFPROMISE_LOG_FILE", "CFPROMISE_MALFORMED_LINES"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.malformed_lines == "report"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CFPROMISE_LOG_LEVEL", "debug")
    monkeypatch.setenv("CFPROMISE_LOG_FILE", str(tmp_path / "module.log"))
    monkeypatch.setenv("CFPROMISE_MALFORMED_LINES", "abort")

    settings = load_settings()

    assert settings.log_level == "debug"
    assert settings.log_file == tmp_path / "module.log"
    assert settings.malformed_lines == "abort"


def test_dotenv_file_is_read(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CFPROMISE_MALFORMED_LINES", raising=False)
    (tmp_path / ".env").write_text("CFPROMISE_MALFORMED_LINES=abort\n", encoding="utf-8")

    assert load_settings().malformed_lines == "abort"


def test_unknown_policy_is_rejected(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CFPROMISE_MALFORMED_LINES", "ignore")

    with pytest.raises(ValidationError):
        load_settings()
