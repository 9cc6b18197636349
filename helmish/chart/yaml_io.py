from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ChartLoadError

_YAML_SAFE = YAML(typ="safe", pure=True)


def load_yaml_text(text: str, source: str = "<string>") -> Any:
    try:
        return _YAML_SAFE.load(text)
    except YAMLError as e:
        raise ChartLoadError(f"Invalid YAML in {source}: {e}") from e


def load_yaml_map(path: Path) -> Dict[str, Any]:
    """
    Loads a YAML file that must contain a mapping.
    An empty file is an empty mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ChartLoadError(f"Failed to read {path}: {e}") from e
    data = load_yaml_text(text, str(path))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ChartLoadError(f"Expected a mapping at the top level of {path}, got {type(data).__name__}")
    return data


__all__ = ["load_yaml_text", "load_yaml_map"]
