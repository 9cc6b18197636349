"""
Chart loading and value overrides.

Reads a chart directory (values.yaml, Chart.yaml, templates/) and merges
user-supplied values files and ``--set`` overrides over the chart values.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from ..errors import ChartLoadError
from .model import Chart
from .yaml_io import load_yaml_map, load_yaml_text

logger = logging.getLogger(__name__)

VALUES_FILE = "values.yaml"
METADATA_FILE = "Chart.yaml"
TEMPLATES_DIR = "templates"
TEMPLATE_SUFFIXES = (".yaml", ".yml")
HELPER_SUFFIX = ".tpl"


def load_chart(path: Path) -> Chart:
    """
    Loads a chart from a directory.

    Args:
        path: Chart directory

    Returns:
        Loaded chart

    Raises:
        ChartLoadError: If the directory is missing or a YAML file is invalid
    """
    if not path.is_dir():
        raise ChartLoadError(f"Chart directory not found: {path}")

    values_path = path / VALUES_FILE
    values = load_yaml_map(values_path) if values_path.is_file() else {}
    metadata_path = path / METADATA_FILE
    metadata = load_yaml_map(metadata_path) if metadata_path.is_file() else {}

    templates: Dict[str, str] = {}
    helpers: Dict[str, str] = {}
    templates_dir = path / TEMPLATES_DIR
    if templates_dir.is_dir():
        for file in sorted(templates_dir.rglob("*")):
            if not file.is_file():
                continue
            rel = file.relative_to(templates_dir).as_posix()
            if file.suffix in TEMPLATE_SUFFIXES:
                templates[rel] = _read_text(file)
            elif file.suffix == HELPER_SUFFIX:
                helpers[rel] = _read_text(file)

    logger.info(
        "Loaded chart %s: %d template(s), %d helper(s)", path, len(templates), len(helpers)
    )
    return Chart(path=path, values=values, metadata=metadata, templates=templates, helpers=helpers)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ChartLoadError(f"Failed to read {path}: {e}") from e


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merges two mappings; values from ``override`` win.
    Neither input is modified.
    """
    result: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def parse_set_values(assignments: Iterable[str]) -> Dict[str, Any]:
    """
    Parses ``key.path=value`` assignments into a nested mapping.

    Values are parsed as YAML scalars (``true`` becomes a bool, ``3`` an int).

    Raises:
        ValueError: On an assignment without ``=`` or with an empty key
    """
    result: Dict[str, Any] = {}
    for assignment in assignments:
        if "=" not in assignment:
            raise ValueError(f"Invalid --set format '{assignment}'. Expected 'key.path=value'")
        key, raw = assignment.split("=", 1)
        parts = [p for p in key.strip().split(".") if p]
        if not parts:
            raise ValueError(f"Invalid --set format '{assignment}'. Empty key")

        value = load_yaml_text(raw, f"--set {key}") if raw.strip() else ""
        if isinstance(value, (dict, list)):
            # only scalars are parsed, structures stay literal text
            value = raw

        node = result
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
    return result


def merge_values(chart: Chart, values_files: List[Path], set_values: List[str]) -> Dict[str, Any]:
    """
    Builds the effective values: chart values, then each values file in
    order, then ``--set`` overrides.
    """
    values = dict(chart.values)
    for file in values_files:
        values = deep_merge(values, load_yaml_map(file))
    if set_values:
        values = deep_merge(values, parse_set_values(set_values))
    return values


__all__ = ["load_chart", "deep_merge", "parse_set_values", "merge_values"]
