"""
Tests for the chart render pipeline.
"""

import logging
import threading
from pathlib import Path

import pytest

from helmish import engine
from helmish.chart import load_chart
from helmish.config import load_profile
from helmish.engine import RenderTimeoutError, build_value_context, render_chart, run_render
from helmish.errors import HelmishUserError, UnresolvedExpressionError
from helmish.types import RunOptions
from tests.infrastructure import ChartBuilder


class TestRenderChart:

    def setup_method(self):
        self.profile = load_profile("default")

    def _render(self, root: Path, **kw):
        chart = load_chart(root)
        ctx = build_value_context(chart, self.profile)
        return render_chart(chart, ctx, self.profile, **kw)

    def test_all_documents_rendered_in_order(self, chart_dir: Path):
        result = self._render(chart_dir)
        assert list(result.templates) == ["deployment.yaml", "service.yaml"]
        docs = result.templates["service.yaml"]
        assert [d.index for d in docs] == [0, 1]
        assert docs[1].first_line == 6
        assert "".join(t.value for t in docs[1].tokens) == "kind: Placeholder\n"
        assert not result.failed()

    def test_failing_document_does_not_affect_siblings(self, tmp_path: Path):
        root = (
            ChartBuilder(tmp_path / "c")
            .values("a: 1")
            .template("cm.yaml", "x: {{ .Values.a }}\n---\ny: {{ .Nope.b }}\n---\nz: 3\n")
            .build()
        )
        result = self._render(root, workers=2)
        docs = result.templates["cm.yaml"]
        assert [d.ok for d in docs] == [True, False, True]
        assert isinstance(docs[1].error, UnresolvedExpressionError)
        assert docs[1].error.line == 3
        assert "".join(t.value for t in docs[2].tokens) == "z: 3\n"
        assert result.failed() == [docs[1]]

    def test_only_selected_templates(self, chart_dir: Path):
        result = self._render(chart_dir, only=["service.yaml"])
        assert list(result.templates) == ["service.yaml"]

    def test_unknown_template(self, chart_dir: Path):
        with pytest.raises(HelmishUserError, match="Unknown template"):
            self._render(chart_dir, only=["nope.yaml"])

    def test_timeout_marks_unfinished_documents(self, chart_dir: Path, monkeypatch):
        release = threading.Event()
        real_render = engine.render

        def slow_render(text, context, first_line=1):
            if "Deployment" in text:
                release.wait(5)
            return real_render(text, context, first_line)

        monkeypatch.setattr(engine, "render", slow_render)
        try:
            result = self._render(chart_dir, timeout=0.2)
        finally:
            release.set()

        deployment = result.templates["deployment.yaml"][0]
        assert isinstance(deployment.error, RenderTimeoutError)
        assert all(d.ok for d in result.templates["service.yaml"])

    def test_unexpected_error_is_isolated(self, tmp_path: Path, monkeypatch, caplog):
        root = (
            ChartBuilder(tmp_path / "c")
            .template("broken.yaml", "boom: 1\n")
            .template("ok.yaml", "k: v\n")
            .build()
        )
        real_render = engine.render

        def failing_render(text, context, first_line=1):
            if "boom" in text:
                raise RuntimeError("renderer bug")
            return real_render(text, context, first_line)

        monkeypatch.setattr(engine, "render", failing_render)
        with caplog.at_level(logging.ERROR):
            result = self._render(root)

        broken = result.templates["broken.yaml"][0]
        assert isinstance(broken.error, RuntimeError)
        assert broken.tokens == []
        ok = result.templates["ok.yaml"][0]
        assert ok.ok
        assert "".join(t.value for t in ok.tokens) == "k: v\n"
        assert result.failed() == [broken]
        assert "Unexpected error rendering broken.yaml#0" in caplog.text

    def test_deeply_nested_template_renders_beside_siblings(self, tmp_path: Path):
        depth = 2000
        deep = "{{if .Values.a}}\n" * depth + "x\n" + "{{end}}\n" * depth
        root = (
            ChartBuilder(tmp_path / "c")
            .values("a: true")
            .template("deep.yaml", deep)
            .template("ok.yaml", "k: v\n")
            .build()
        )
        result = self._render(root)
        assert not result.failed()
        assert "".join(t.value for t in result.templates["deep.yaml"][0].tokens) == "x\n"
        assert "".join(t.value for t in result.templates["ok.yaml"][0].tokens) == "k: v\n"


class TestRunRender:

    def test_overrides_reach_templates(self, chart_dir: Path):
        options = RunOptions(chart_path=chart_dir, set_values=("ingress.enabled=true", "replicas=9"))
        result = run_render(options)
        ingress = result.templates["service.yaml"][1]
        assert "".join(t.value for t in ingress.tokens) == "kind: Ingress\nhost: example.com\n"
        deployment = "".join(t.value for t in result.templates["deployment.yaml"][0].tokens)
        assert "replicas: 9\n" in deployment
        assert "  name: demo\n" in deployment
        assert "  imagePullPolicy: IfNotPresent\n" in deployment
        assert result.profile.name == "default"
