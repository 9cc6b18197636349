import logging
from pathlib import Path

import pytest

from tests.infrastructure import ChartBuilder

DEPLOYMENT = """\
apiVersion: apps/v1
kind: Deployment
metadata:
  name: {{ .Chart.Name }}
spec:
  replicas: {{ .Values.replicas }}
  {{if .Values.image.pullPolicy}}
  imagePullPolicy: {{ .Values.image.pullPolicy }}
  {{end}}
"""

SERVICE = """\
apiVersion: v1
kind: Service
metadata:
  name: {{ .Chart.Name }}
---
{{if not .Values.ingress.enabled}}
kind: Placeholder
{{else}}
kind: Ingress
host: {{ .Values.ingress.host }}
{{end}}
"""


@pytest.fixture
def chart_dir(tmp_path: Path) -> Path:
    """Small chart with two template files and three documents."""
    return (
        ChartBuilder(tmp_path / "demo")
        .values("""
        replicas: 2
        image:
          repository: nginx
          pullPolicy: IfNotPresent
        ingress:
          enabled: false
          host: example.com
        """)
        .template("deployment.yaml", DEPLOYMENT)
        .template("service.yaml", SERVICE)
        .build()
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("HELMISH_CHART_PATH", "HELMISH_PROFILE", "HELMISH_WORKERS", "HELMISH_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    log = logging.getLogger("helmish")
    for handler in list(log.handlers):
        log.removeHandler(handler)
    log.setLevel(logging.NOTSET)
