"""
Main processing pipeline.

Loads the chart, builds the value context and renders every document of
every template file. Documents are independent: they are rendered in
parallel and one failing document does not affect its siblings.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .chart import Chart, load_chart, merge_values, split_documents
from .config import load_profile
from .errors import HelmishUserError
from .rendering import Token, render
from .types import Profile, RunOptions
from .values import ValueContext

logger = logging.getLogger(__name__)


@dataclass
class DocumentResult:
    """Outcome of rendering one document of a template file."""
    template: str
    index: int  # position of the document inside its file
    first_line: int
    tokens: List[Token] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ChartRenderResult:
    chart: Chart
    profile: Profile
    templates: Dict[str, List[DocumentResult]] = field(default_factory=dict)

    def documents(self) -> List[DocumentResult]:
        return [doc for docs in self.templates.values() for doc in docs]

    def failed(self) -> List[DocumentResult]:
        return [doc for doc in self.documents() if not doc.ok]


class RenderTimeoutError(HelmishUserError):
    """Document did not finish before the chart deadline."""
    pass


def build_value_context(chart: Chart, profile: Profile, values: Optional[Dict] = None) -> ValueContext:
    """
    Builds the value context of one render invocation.

    Args:
        chart: Loaded chart
        profile: Active profile
        values: Effective values; chart values when omitted
    """
    return ValueContext(
        values=chart.values if values is None else values,
        metadata=chart.metadata,
        capabilities=profile.capabilities.as_tree(),
    )


def render_document(template: str, index: int, text: str, first_line: int, context: ValueContext) -> DocumentResult:
    """
    Renders one document, capturing any failure in the result.

    User errors are expected and logged at DEBUG; anything else is logged
    with its traceback.
    """
    result = DocumentResult(template=template, index=index, first_line=first_line)
    try:
        result.tokens = render(text, context, first_line)
    except HelmishUserError as e:
        logger.debug("Document %s#%d failed: %s", template, index, e)
        result.error = e
    except Exception as e:
        logger.exception("Unexpected error rendering %s#%d", template, index)
        result.error = e
    return result


def render_chart(
    chart: Chart,
    context: ValueContext,
    profile: Profile,
    *,
    workers: int = 4,
    timeout: Optional[float] = None,
    only: Sequence[str] = (),
) -> ChartRenderResult:
    """
    Renders all (or selected) template files of a chart.

    Args:
        chart: Loaded chart
        context: Value context shared read-only by all documents
        profile: Active profile
        workers: Thread pool size
        timeout: Deadline in seconds for the whole chart
        only: Template names to render; all when empty

    Returns:
        Per-template document results in file order
    """
    names = chart.template_names()
    if only:
        unknown = sorted(set(only) - set(names))
        if unknown:
            raise HelmishUserError(f"Unknown template(s): {', '.join(unknown)}")
        names = [n for n in names if n in only]

    jobs: List[Tuple[str, int, str, int]] = []
    for name in names:
        for index, (text, first_line) in enumerate(split_documents(chart.templates[name])):
            jobs.append((name, index, text, first_line))

    result = ChartRenderResult(chart=chart, profile=profile, templates={name: [] for name in names})
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="helmish")
    try:
        futures: List[Future] = [
            executor.submit(render_document, name, index, text, first_line, context)
            for name, index, text, first_line in jobs
        ]
        wait(futures, timeout=timeout)
        for (name, index, _, first_line), future in zip(jobs, futures):
            if future.done():
                doc = future.result()
            else:
                future.cancel()
                doc = DocumentResult(
                    template=name,
                    index=index,
                    first_line=first_line,
                    error=RenderTimeoutError(f"Rendering timed out after {timeout}s"),
                )
            result.templates[name].append(doc)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    logger.debug(
        "Rendered %d document(s), %d failed", len(jobs), len(result.failed())
    )
    return result


def run_render(options: RunOptions) -> ChartRenderResult:
    """
    Entry point of the render command.

    Raises:
        ChartLoadError: If the chart cannot be loaded
        HelmishUserError: On unknown template names
    """
    chart = load_chart(options.chart_path)
    profile = load_profile(options.profile)
    values = merge_values(chart, list(options.values_files), list(options.set_values))
    context = build_value_context(chart, profile, values)
    return render_chart(
        chart,
        context,
        profile,
        workers=options.workers,
        timeout=options.timeout,
        only=options.only,
    )


__all__ = [
    "DocumentResult",
    "ChartRenderResult",
    "RenderTimeoutError",
    "build_value_context",
    "render_document",
    "render_chart",
    "run_render",
]
