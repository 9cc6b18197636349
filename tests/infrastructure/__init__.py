"""
Shared helpers for helmish tests.
"""

from .chart_builders import ChartBuilder, make_context
from .file_utils import write

__all__ = ["ChartBuilder", "make_context", "write"]
