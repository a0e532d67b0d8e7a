import json
import logging
from pathlib import Path
from typing import Any, Protocol

from rulesync.errors import FileAccessError

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    def read_file(self, path: Path) -> str: ...

    def write_file(self, path: Path, content: str) -> None: ...

    def exists(self, path: Path) -> bool: ...

    def list_files(self, root: Path, pattern: str) -> list[Path]: ...

    def ensure_dir(self, path: Path) -> None: ...

    def remove_file(self, path: Path) -> None: ...


class LocalFileSystem:
    """Plain on-disk implementation of the file primitives the engine uses."""

    def read_file(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileAccessError(path, str(exc)) from exc

    def write_file(self, path: Path, content: str) -> None:
        try:
            self.ensure_dir(path.parent)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise FileAccessError(path, str(exc)) from exc
        logger.debug("Wrote %s", path)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def list_files(self, root: Path, pattern: str) -> list[Path]:
        if not root.is_dir():
            return []
        return sorted(child for child in root.glob(pattern) if child.is_file())

    def ensure_dir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def remove_file(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise FileAccessError(path, str(exc)) from exc
        logger.debug("Removed %s", path)


def add_trailing_newline(content: str) -> str:
    return content.rstrip() + "\n"


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=False)
        handle.write("\n")


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    home = str(Path.home())
    if text == home:
        return "~"
    return text.replace(f"{home}/", "~/")
