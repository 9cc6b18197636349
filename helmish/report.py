"""
JSON report of a chart render.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .engine import ChartRenderResult, DocumentResult
from .errors import TemplateError


class TokenModel(BaseModel):
    kind: str
    value: str
    line: int
    indent: int


class DocumentReport(BaseModel):
    template: str
    index: int
    first_line: int = Field(alias="firstLine")
    ok: bool
    error: Optional[str] = None
    error_line: Optional[int] = Field(default=None, alias="errorLine")
    expression: Optional[str] = None
    tokens: List[TokenModel] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class RenderReport(BaseModel):
    chart: str
    profile: str
    documents: List[DocumentReport] = Field(default_factory=list)
    failed: int = 0


def _document_report(doc: DocumentResult) -> DocumentReport:
    report = DocumentReport(
        template=doc.template,
        index=doc.index,
        first_line=doc.first_line,
        ok=doc.ok,
        tokens=[
            TokenModel(kind=t.kind.value, value=t.value, line=t.line, indent=t.indent)
            for t in doc.tokens
        ],
    )
    if doc.error is not None:
        report.error = str(doc.error)
        if isinstance(doc.error, TemplateError):
            report.error_line = doc.error.line
            report.expression = doc.error.expression or None
    return report


def build_report(result: ChartRenderResult) -> RenderReport:
    docs = [_document_report(doc) for doc in result.documents()]
    return RenderReport(
        chart=result.chart.name,
        profile=result.profile.name,
        documents=docs,
        failed=sum(1 for d in docs if not d.ok),
    )


__all__ = ["RenderReport", "DocumentReport", "TokenModel", "build_report"]
