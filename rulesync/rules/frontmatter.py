"""Split and join YAML frontmatter headers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

import yaml

from rulesync.errors import ParseError

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
_OPENING_RE = re.compile(r"\A---[ \t]*\r?\n")


def split_frontmatter(
    text: str, path: Optional[Path] = None
) -> tuple[dict[str, Any], str]:
    """Return ``(metadata, body)``; a document without a header has empty metadata.

    Raises ParseError when a header is opened but never closed, is not valid
    YAML, or does not hold a mapping.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        if _OPENING_RE.match(text):
            raise ParseError(path, "unterminated frontmatter block")
        return {}, text

    try:
        raw = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise ParseError(path, str(exc).replace("\n", " ")) from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ParseError(path, f"expected a mapping, got {type(raw).__name__}")
    return raw, text[match.end() :]


def dump_yaml(payload: Any) -> str:
    return yaml.safe_dump(
        payload,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1000,
    )


def stringify_frontmatter(metadata: dict[str, Any], body: str) -> str:
    if not metadata:
        return body
    parts: list[str] = []
    parts.append("---")
    parts.append(dump_yaml(metadata).rstrip())
    parts.append("---")
    parts.append("")
    parts.append(body)
    return "\n".join(parts)
