from pathlib import Path
import sys
from typing import Iterator

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _reset_cli_runtime() -> Iterator[None]:
    import feedback_portal.cli as cli

    cli.set_runtime(None)
    yield
    cli.set_runtime(None)


@pytest.fixture()
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "settings.yaml").write_text(
        "app: {name: test, version: '0.0.1'}\n"
        "api:\n"
        "  base_url: '${FEEDBACK_API_BASE_URL}'\n"
        "  timeout_seconds: 5\n"
        "  retry_attempts: 2\n"
        "dashboard: {default_limit: 20}\n"
        "logging: {level: DEBUG}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("FEEDBACK_PORTAL_CONFIG_PATH", str(directory))
    monkeypatch.setenv("FEEDBACK_API_BASE_URL", "https://feedback.example.com/api")
    return directory
