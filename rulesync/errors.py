from pathlib import Path
from typing import Optional


class RulesyncError(Exception):
    """Base user-facing application error."""


class RuleFileError(RulesyncError):
    def __init__(self, path: Optional[Path], message: str) -> None:
        self.path = path
        self.message = message
        if path is None:
            super().__init__(message)
        else:
            super().__init__(f"{message}: {path}")


class ParseError(RuleFileError):
    def __init__(self, path: Optional[Path], detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid frontmatter ({detail})")


class ValidationError(RuleFileError):
    def __init__(self, path: Optional[Path], errors: list[str]) -> None:
        self.errors = errors
        super().__init__(
            path=path, message=f"Invalid rule metadata ({'; '.join(errors)})"
        )


class FileAccessError(RuleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot access file ({detail})")


class PathTraversalError(RuleFileError):
    def __init__(self, path: Path, base_dir: Path) -> None:
        self.base_dir = base_dir
        super().__init__(path=path, message=f"Path escapes base directory {base_dir}")


class MultipleRootRulesError(RuleFileError):
    def __init__(self, paths: list[Path]) -> None:
        self.paths = paths
        joined = ", ".join(str(path) for path in paths)
        super().__init__(path=paths[0], message=f"Multiple root rules found ({joined})")


class UnsupportedToolError(RulesyncError):
    def __init__(self, tool_id: str) -> None:
        self.tool_id = tool_id
        super().__init__(f"Unsupported tool: {tool_id}")


class UnsupportedModeError(RulesyncError):
    def __init__(self, tool_id: str, global_mode: bool) -> None:
        self.tool_id = tool_id
        self.global_mode = global_mode
        mode = "global" if global_mode else "local"
        super().__init__(f"Tool {tool_id} does not support {mode} mode")


class MissingConfigFileError(RuleFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing required config file")


class InvalidJsonFormatError(RuleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(RuleFileError):
    def __init__(self, path: Optional[Path], detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class ConflictingTargetsError(RulesyncError):
    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(f"Conflicting targets: {first} and {second} cannot be used together")
