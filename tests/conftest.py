import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setattr(Path, "home", lambda: home)


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    return tmp_path / "home"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_json():
    def _write(path: Path, payload: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def write_rule():
    def _write(base_dir: Path, name: str, text: str) -> Path:
        path = base_dir / ".rulesync" / "rules" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_rules(project: Path, write_rule) -> Path:
    write_rule(
        project,
        "overview.md",
        "---\n"
        "root: true\n"
        'targets: ["*"]\n'
        "description: Project overview\n"
        'globs: ["**/*"]\n'
        "---\n"
        "\n"
        "# Overview\n"
        "\n"
        "Be concise.\n",
    )
    write_rule(
        project,
        "python.md",
        "---\n"
        "root: false\n"
        'targets: ["*"]\n'
        "description: Python style\n"
        'globs: ["**/*.py"]\n'
        "---\n"
        "\n"
        "Use type hints.\n",
    )
    return project


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path / "home"))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / "home" / ".config"))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
