import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from rulesync.constants import CONFIG_FILENAME, WILDCARD_TARGET
from rulesync.errors import (
    ConflictingTargetsError,
    InvalidConfigSchemaError,
    InvalidJsonFormatError,
    MissingConfigFileError,
)
from rulesync.rules.registry import CONFLICTING_TOOL_IDS, expand_targets
from rulesync.rules.tool_id import TOOL_ID_VALUES, ToolId
from rulesync.utils import read_json

logger = logging.getLogger(__name__)

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "$schema": {"type": "string"},
        "baseDirs": {"type": "array", "items": {"type": "string"}},
        "targets": {
            "type": "array",
            "items": {"type": "string", "enum": [WILDCARD_TARGET, *TOOL_ID_VALUES]},
        },
        "verbose": {"type": "boolean"},
        "silent": {"type": "boolean"},
        "delete": {"type": "boolean"},
        "global": {"type": "boolean"},
        "simulateCommands": {"type": "boolean"},
        "simulateSubagents": {"type": "boolean"},
        "simulateSkills": {"type": "boolean"},
    },
    "additionalProperties": False,
}

_FILE_KEYS: dict[str, str] = {
    "baseDirs": "base_dirs",
    "targets": "targets",
    "verbose": "verbose",
    "silent": "silent",
    "delete": "delete",
    "global": "global_mode",
    "simulateCommands": "simulate_commands",
    "simulateSubagents": "simulate_subagents",
    "simulateSkills": "simulate_skills",
}


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@dataclass(frozen=True)
class Config:
    base_dirs: list[Path] = field(default_factory=lambda: [Path(".")])
    targets: list[str] = field(default_factory=lambda: [WILDCARD_TARGET])
    verbose: bool = False
    silent: bool = False
    delete: bool = False
    global_mode: bool = False
    simulate_commands: bool = False
    simulate_subagents: bool = False
    simulate_skills: bool = False

    def __post_init__(self) -> None:
        requested = set(self.targets)
        for first, second in CONFLICTING_TOOL_IDS:
            if first.value in requested and second.value in requested:
                raise ConflictingTargetsError(first.value, second.value)

    def tool_ids(self) -> list[ToolId]:
        return expand_targets(self.targets)

    def output_dir(self, base_dir: Path) -> Path:
        # Global outputs live under the home directory, rules stay in base_dir.
        if self.global_mode:
            return Path.home()
        return base_dir


class ConfigResolver:
    """Merge defaults, ``rulesync.json`` and command-line options, in that order."""

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = cwd or Path.cwd()
        self._validator = Draft202012Validator(CONFIG_SCHEMA)

    def default_path(self) -> Path:
        return self.cwd / CONFIG_FILENAME

    def load_file(self, path: Optional[Path] = None) -> dict[str, Any]:
        explicit = path is not None
        config_path = path or self.default_path()
        if not config_path.exists():
            if explicit:
                raise MissingConfigFileError(config_path)
            logger.debug("No config file at %s, using defaults", config_path)
            return {}

        try:
            payload = read_json(config_path)
        except json.JSONDecodeError as exc:
            raise InvalidJsonFormatError(config_path, str(exc)) from exc

        error = next(iter(self._validator.iter_errors(payload)), None)
        if error is not None:
            raise InvalidConfigSchemaError(config_path, format_schema_error(error))
        logger.debug("Loaded config from %s", config_path)
        return payload

    def resolve(self, path: Optional[Path] = None, **overrides: Any) -> Config:
        payload = self.load_file(path)
        values: dict[str, Any] = {}
        for key, attribute in _FILE_KEYS.items():
            if key in payload:
                values[attribute] = payload[key]
        if "base_dirs" in values:
            values["base_dirs"] = [self._resolve_dir(item) for item in values["base_dirs"]]

        base_dirs = overrides.pop("base_dirs", None)
        if base_dirs:
            overrides["base_dirs"] = [self._resolve_dir(item) for item in base_dirs]
        targets = overrides.pop("targets", None)
        if targets:
            overrides["targets"] = list(targets)

        values.update(
            {key: value for key, value in overrides.items() if value is not None}
        )
        values.setdefault("base_dirs", [self.cwd])
        return Config(**values)

    def _resolve_dir(self, value: str | Path) -> Path:
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.cwd / path


def default_config_payload() -> dict[str, Any]:
    return {
        "baseDirs": ["."],
        "targets": [WILDCARD_TARGET],
        "delete": True,
        "verbose": False,
        "silent": False,
        "global": False,
        "simulateCommands": False,
        "simulateSubagents": False,
        "simulateSkills": False,
    }
