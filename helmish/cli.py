from __future__ import annotations

import argparse
import sys
from typing import List

from .chart import load_chart
from .config import resolve_options, setup_logging
from .engine import ChartRenderResult, run_render
from .errors import HelmishUserError
from .jsonic import dumps as jdumps
from .output import FORMATTERS, join_documents
from .report import build_report
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="helmish",
        description="Preview how a templated chart renders for a set of values",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--chart-path",
            help="path to the chart directory (env: HELMISH_CHART_PATH)",
        )
        sp.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="debug logging to stderr (env: HELMISH_DEBUG)",
        )

    sp_render = sub.add_parser("render", help="Render chart templates")
    add_common(sp_render)
    sp_render.add_argument(
        "--profile",
        help="rendering profile (env: HELMISH_PROFILE)",
    )
    sp_render.add_argument(
        "-f", "--values",
        action="append",
        metavar="FILE",
        help="extra values file merged over values.yaml (repeatable)",
    )
    sp_render.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help="override a value, e.g. image.tag=1.2 (repeatable)",
    )
    sp_render.add_argument(
        "-t", "--template",
        action="append",
        metavar="NAME",
        help="render only this template, relative to templates/ (repeatable)",
    )
    sp_render.add_argument(
        "--format",
        choices=["text", "raw", "annotated", "json"],
        default="text",
        help="output format",
    )
    sp_render.add_argument(
        "--workers",
        type=int,
        help="number of worker threads (env: HELMISH_WORKERS)",
    )
    sp_render.add_argument(
        "--timeout",
        type=float,
        help="deadline in seconds for the whole chart",
    )

    sp_list = sub.add_parser("list", help="List chart templates")
    add_common(sp_list)

    return p


def _write_render(result: ChartRenderResult, fmt: str) -> None:
    if fmt == "json":
        report = build_report(result)
        sys.stdout.write(jdumps(report.model_dump(mode="json", by_alias=True)))
        return

    formatter = FORMATTERS[fmt]
    for name, docs in result.templates.items():
        sys.stdout.write(f"# Source: {name}\n")
        rendered: List[str] = []
        for doc in docs:
            if doc.ok:
                rendered.append(formatter(doc.tokens))
            else:
                rendered.append(f"# ERROR: {doc.error}")
        sys.stdout.write(join_documents(rendered).rstrip("\n") + "\n")

    for doc in result.failed():
        sys.stderr.write(f"{doc.template} (document {doc.index + 1}): {doc.error}\n")


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    setup_logging(verbose=bool(getattr(ns, "verbose", False)))

    try:
        options = resolve_options(ns)

        if ns.cmd == "render":
            result = run_render(options)
            _write_render(result, options.output)
            return 1 if result.failed() else 0

        if ns.cmd == "list":
            chart = load_chart(options.chart_path)
            sys.stdout.write(jdumps({"templates": chart.template_names()}))
            return 0

    except HelmishUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
