from __future__ import annotations

from pathlib import Path

import pytest

from saga_cli.actions import RecordingRenderer
from saga_cli.config import SAGA_HOME_ENV_VAR


@pytest.fixture()
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def saga_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "saga-home"
    monkeypatch.setenv(SAGA_HOME_ENV_VAR, str(home))
    return home
