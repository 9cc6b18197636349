from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


@dataclass
class Chart:
    """
    Loaded chart.

    Attributes:
        path: Chart directory
        values: Parsed values.yaml
        metadata: Parsed Chart.yaml
        templates: Templated YAML documents (relative name -> raw text)
        helpers: Helper files (*.tpl), kept raw and never rendered
    """
    path: Path
    values: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    templates: Dict[str, str] = field(default_factory=dict)
    helpers: Dict[str, str] = field(default_factory=dict)

    def template_names(self) -> List[str]:
        return sorted(self.templates)

    @property
    def name(self) -> str:
        return str(self.metadata.get("name") or self.path.name)


__all__ = ["Chart"]
