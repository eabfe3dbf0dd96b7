from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import OutlineParseError

DEFAULT_INPUT = "input.yaml"

_STR_TAG = "tag:yaml.org,2002:str"
# YAML 1.1 reads keys like Off / Yes / ~ as bool or null
_TEXT_KEY_TAGS = frozenset({"tag:yaml.org,2002:bool", "tag:yaml.org,2002:null"})


class OutlineLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain bool/null-looking mapping keys as their source text."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        for key_node, _ in node.value:
            if (
                isinstance(key_node, yaml.ScalarNode)
                and key_node.style is None
                and key_node.tag in _TEXT_KEY_TAGS
            ):
                key_node.tag = _STR_TAG
        return super().construct_mapping(node, deep=deep)


def parse_outline(text: str, source: str = "<string>") -> Any:
    try:
        return yaml.load(text, Loader=OutlineLoader)  # nosec B506 - SafeLoader subclass
    except yaml.YAMLError as exc:
        raise OutlineParseError(f"Invalid YAML in {source}: {exc}") from exc


def load_outline(path: str | Path = DEFAULT_INPUT) -> Any:
    """Read and parse the outline document; shape checks happen in the resolver."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise OutlineParseError(f"Outline file not found: {p}") from exc
    except UnicodeDecodeError as exc:
        raise OutlineParseError(f"Outline file {p} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise OutlineParseError(f"Cannot read outline file {p}: {exc}") from exc
    return parse_outline(text, source=str(p))


__all__ = ["DEFAULT_INPUT", "OutlineLoader", "load_outline", "parse_outline"]
