from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional, Tuple

OutputFormat = Literal["text", "raw", "annotated", "json"]


@dataclass(frozen=True)
class RunOptions:
    chart_path: Path = Path("/default/chart/path")
    profile: str = "default"
    values_files: Tuple[Path, ...] = ()
    set_values: Tuple[str, ...] = ()
    only: Tuple[str, ...] = ()  # template names to render, all when empty
    output: OutputFormat = "text"
    workers: int = 4
    timeout: Optional[float] = None  # seconds for the whole chart


@dataclass(frozen=True)
class Capabilities:
    kube_version: str = "1.25"
    api_versions: List[str] = field(default_factory=lambda: ["v1", "apps/v1"])

    def as_tree(self) -> dict:
        """Form exposed to templates as ``.Capabilities``."""
        return {
            "KubeVersion": {"Version": f"v{self.kube_version}", "GitVersion": f"v{self.kube_version}"},
            "APIVersions": list(self.api_versions),
        }


@dataclass(frozen=True)
class Profile:
    """
    Rendering profile: named set of cluster capabilities.
    """
    name: str
    capabilities: Capabilities = field(default_factory=Capabilities)
